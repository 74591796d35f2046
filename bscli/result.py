"""
Decoding of DWS response bodies.

The player wraps answers as ``{"data": {"result": ...}}`` but the shape of
``result`` changes between endpoints and firmware versions: sometimes a
list, sometimes an object, sometimes a bare string.  Instead of handing
back an untyped value, ``decode_result`` returns one variant of a small
tagged union.  Anything that is not JSON ends up as RawResult.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Union

import requests

from .exceptions import APIError


@dataclass(frozen=True)
class ListResult:
    items: list[Any]
    kind: str = field(default="list", init=False)

    @property
    def value(self) -> list[Any]:
        return self.items


@dataclass(frozen=True)
class ObjectResult:
    fields: dict[str, Any]
    kind: str = field(default="object", init=False)

    @property
    def value(self) -> dict[str, Any]:
        return self.fields

    def get(self, key: str, default: Any = None) -> Any:
        return self.fields.get(key, default)


@dataclass(frozen=True)
class TextResult:
    text: str
    kind: str = field(default="text", init=False)

    @property
    def value(self) -> str:
        return self.text


@dataclass(frozen=True)
class ScalarResult:
    """A JSON number, boolean or null."""

    scalar: bool | int | float | None
    kind: str = field(default="scalar", init=False)

    @property
    def value(self) -> bool | int | float | None:
        return self.scalar


@dataclass(frozen=True)
class RawResult:
    """Body that could not be decoded as JSON, kept verbatim."""

    raw: bytes
    content_type: str = ""
    kind: str = field(default="raw", init=False)

    @property
    def value(self) -> str:
        return self.raw.decode("utf-8", errors="replace")


Result = Union[ListResult, ObjectResult, TextResult, ScalarResult, RawResult]


def wrap_value(value: Any) -> Result:
    """Tag an already-decoded JSON value."""
    if isinstance(value, list):
        return ListResult(value)
    if isinstance(value, dict):
        return ObjectResult(value)
    if isinstance(value, str):
        return TextResult(value)
    if value is None or isinstance(value, (bool, int, float)):
        return ScalarResult(value)
    raise TypeError(f"not a JSON value: {type(value).__name__}")


def unwrap_envelope(document: Any) -> Any:
    """Return ``document["data"]["result"]`` when present, else *document*."""
    if isinstance(document, dict):
        data = document.get("data")
        if isinstance(data, dict) and "result" in data:
            return data["result"]
    return document


def decode_result(body: bytes, content_type: str = "") -> Result:
    if not body.strip():
        return ScalarResult(None)
    try:
        document = json.loads(body)
    except (UnicodeDecodeError, json.JSONDecodeError):
        return RawResult(body, content_type)
    return wrap_value(unwrap_envelope(document))


def check_status(resp: requests.Response, content: bytes, what: str) -> None:
    """Raise APIError unless *resp* carries a 2xx status."""
    if 200 <= resp.status_code < 300:
        return
    text = content.decode("utf-8", errors="replace")
    raise APIError(
        f"{what} failed with status {resp.status_code}: {text}",
        status_code=resp.status_code,
        body=text,
    )
