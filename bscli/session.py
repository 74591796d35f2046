"""HTTP session management for the BrightSign DWS client."""

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .config import API_PREFIX, USER_AGENT


def build_session(verify_ssl: bool = True) -> requests.Session:
    """Return a requests.Session with keep-alive and no transport-level retries."""
    session = requests.Session()
    # The digest dispatcher decides what gets re-sent; urllib3 must not
    # replay requests on its own, nor turn 5xx answers into exceptions.
    retry = Retry(total=0, read=False, raise_on_status=False)
    adapter = HTTPAdapter(max_retries=retry, pool_connections=4, pool_maxsize=4)
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    session.verify = verify_ssl
    session.headers.update({
        "User-Agent": USER_AGENT,
        "Accept": "application/json",
        "Connection": "keep-alive",
    })
    return session


def base_url(host: str, secure: bool = False) -> str:
    scheme = "https" if secure else "http"
    return f"{scheme}://{host}{API_PREFIX}"
