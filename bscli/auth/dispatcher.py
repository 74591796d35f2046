"""
Transparent Digest authentication around a requests.Session.

Each dispatch is a two-state exchange:

  1. send the request without credentials;
  2. on 401, answer the Digest challenge and send the same request once
     more, with the same method, request-URI and body bytes.

Whatever the second attempt returns, including another 401, goes back to
the caller.  Nothing about the challenge is remembered between calls.

One deadline covers the whole exchange: both sends, the wait for each
set of response headers and the draining of the 401 body.  Passing it
raises NetworkError.
"""

from __future__ import annotations

import random
import time
from dataclasses import dataclass, field

import requests

from ..config import REQUEST_TIMEOUT
from ..exceptions import AuthChallengeInvalid, NetworkError
from ..logging_setup import log
from .body import EmptyBody, RequestBody
from .challenge import parse_challenge
from .digest import Credentials, build_authorization

UNAUTHORIZED = 401


@dataclass
class RequestDescriptor:
    """Method, absolute URL and body of one logical request."""

    method: str
    url: str
    body: RequestBody = field(default_factory=EmptyBody)
    headers: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.method = self.method.upper()


class DigestDispatcher:
    """
    Send requests through *session*, answering at most one Digest challenge.

    *rng* supplies the client nonces; it defaults to ``random.SystemRandom``.
    Tests pass a seeded ``random.Random`` to get reproducible headers.
    *timeout* is the budget, in seconds, for both round trips together.
    """

    def __init__(
        self,
        session: requests.Session,
        timeout: float = REQUEST_TIMEOUT,
        rng: random.Random | None = None,
    ):
        self.session = session
        self.timeout = timeout
        self.rng = rng if rng is not None else random.SystemRandom()

    def dispatch(self, descriptor: RequestDescriptor, credentials: Credentials) -> requests.Response:
        deadline = time.monotonic() + self.timeout

        first = self._prepare(descriptor, descriptor.body.replay())
        log.debug("%s %s", first.method, first.url)
        resp = self._send(first, deadline)
        if resp.status_code != UNAUTHORIZED:
            return resp

        header = resp.headers.get("WWW-Authenticate")
        _release(resp)
        self._check_deadline(first, deadline)
        if not header:
            raise AuthChallengeInvalid(
                f"{first.method} {first.path_url} returned 401 without a WWW-Authenticate challenge"
            )

        challenge = parse_challenge(header)
        log.debug(
            "Digest challenge: realm=%r qop=%r opaque=%s",
            challenge.realm, challenge.qop, "yes" if challenge.opaque else "no",
        )

        retry = self._prepare(descriptor, descriptor.body.replay())
        # The digest covers the request-URI of the first attempt; the
        # retry must go to exactly the same place.
        retry.headers["Authorization"] = build_authorization(
            credentials, first.method, first.path_url, challenge, self.rng,
        )
        log.debug("%s %s (digest retry)", retry.method, retry.url)
        return self._send(retry, deadline)

    def _prepare(self, descriptor: RequestDescriptor, data: bytes) -> requests.PreparedRequest:
        headers = dict(descriptor.headers)
        if data and descriptor.body.content_type:
            headers["Content-Type"] = descriptor.body.content_type
        request = requests.Request(
            descriptor.method,
            descriptor.url,
            data=data or None,
            headers=headers,
        )
        return self.session.prepare_request(request)

    def _send(self, prepared: requests.PreparedRequest, deadline: float) -> requests.Response:
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            self._expired(prepared)
        try:
            resp = self.session.send(prepared, timeout=remaining, stream=True)
        except requests.RequestException as exc:
            raise NetworkError(f"{prepared.method} {prepared.url} failed: {exc}") from exc
        # requests applies the timeout per socket read, not to the whole exchange
        if time.monotonic() > deadline:
            resp.close()
            self._expired(prepared)
        return resp

    def _check_deadline(self, prepared: requests.PreparedRequest, deadline: float) -> None:
        if time.monotonic() > deadline:
            self._expired(prepared)

    def _expired(self, prepared: requests.PreparedRequest) -> None:
        raise NetworkError(f"{prepared.method} {prepared.url} timed out after {self.timeout}s")


def _release(resp: requests.Response) -> None:
    """Drain and close *resp* so its connection goes back to the pool."""
    try:
        _ = resp.content
    except requests.RequestException as exc:
        log.debug("Discarding unreadable 401 body: %s", exc)
    finally:
        resp.close()
