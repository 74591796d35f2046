"""Common plumbing for the endpoint services."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..result import Result

if TYPE_CHECKING:
    from ..client import DWSClient


class Service:
    def __init__(self, client: DWSClient):
        self._client = client

    def _get(self, path: str) -> Result:
        return self._client.call("GET", path)

    def _put(self, path: str, payload: Any = None) -> Result:
        return self._client.call("PUT", path, payload=payload)

    def _post(self, path: str, payload: Any = None) -> Result:
        return self._client.call("POST", path, payload=payload)

    def _delete(self, path: str) -> Result:
        return self._client.call("DELETE", path)
