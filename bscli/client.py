"""
bscli.client
============
Client for a BrightSign player's Diagnostic Web Server (DWS) API.

Every endpoint call goes through ``DWSClient.request``, which hands a
RequestDescriptor to the shared DigestDispatcher.  The endpoint groups
hang off the client as services::

    client = DWSClient(ClientConfig(host="192.168.1.100", password="secret"))
    info = client.info.get_info()
    client.registry.set_value("networking", "ssh", "22")
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Any

import requests

from .auth import (
    Credentials,
    DigestDispatcher,
    EmptyBody,
    JsonBody,
    RequestBody,
    RequestDescriptor,
)
from .config import DEFAULT_USER, REQUEST_TIMEOUT
from .logging_setup import log
from .result import Result, check_status, decode_result
from .services import (
    ControlService,
    DiagnosticsService,
    DisplayService,
    InfoService,
    LogsService,
    RegistryService,
    StorageService,
    VideoService,
)
from .session import base_url, build_session


@dataclass
class ClientConfig:
    host: str
    username: str = DEFAULT_USER
    password: str = ""
    # Use HTTPS and accept the player's self-signed certificate
    insecure: bool = False
    timeout: float = REQUEST_TIMEOUT

    def __post_init__(self) -> None:
        if not self.host:
            raise ValueError("host is required")
        if not self.username:
            self.username = DEFAULT_USER
        if not self.timeout:
            self.timeout = REQUEST_TIMEOUT


class DWSClient:
    """Entry point for all DWS operations on one player."""

    def __init__(
        self,
        config: ClientConfig,
        session: requests.Session | None = None,
        rng: random.Random | None = None,
    ):
        self.config = config
        self.session = session or build_session(verify_ssl=not config.insecure)
        self.base_url = base_url(config.host, secure=config.insecure)
        self.dispatcher = DigestDispatcher(self.session, timeout=config.timeout, rng=rng)

        self.info = InfoService(self)
        self.control = ControlService(self)
        self.storage = StorageService(self)
        self.diagnostics = DiagnosticsService(self)
        self.display = DisplayService(self)
        self.registry = RegistryService(self)
        self.logs = LogsService(self)
        self.video = VideoService(self)

    @property
    def credentials(self) -> Credentials:
        return Credentials(self.config.username, self.config.password)

    def url(self, path: str) -> str:
        if not path.startswith("/"):
            path = "/" + path
        return self.base_url + path

    def request(
        self,
        method: str,
        path: str,
        payload: Any = None,
        body: RequestBody | None = None,
    ) -> requests.Response:
        """
        Send one request to *path* (relative to ``/api/v1``).

        *payload* is serialised as JSON; *body* takes any other RequestBody.
        The response comes back whatever its status; reading and closing it
        is up to the caller.
        """
        if body is None:
            body = JsonBody(payload) if payload is not None else EmptyBody()
        descriptor = RequestDescriptor(method, self.url(path), body)
        return self.dispatcher.dispatch(descriptor, self.credentials)

    def call(
        self,
        method: str,
        path: str,
        payload: Any = None,
        body: RequestBody | None = None,
    ) -> Result:
        """Like ``request`` but raise APIError on non-2xx and decode the body."""
        resp = self.request(method, path, payload=payload, body=body)
        with resp:
            content = resp.content
            check_status(resp, content, f"{method.upper()} {path}")
        log.debug("%s %s → %s (%d bytes)", method.upper(), path, resp.status_code, len(content))
        return decode_result(content, resp.headers.get("Content-Type", ""))

