"""
Request bodies that can be sent twice.

A Digest-protected request is first sent without credentials; after the
401 the very same bytes have to go out again with the Authorization
header.  Every body type here produces its bytes through ``replay()``:

* JsonBody and MultipartBody are serialised once, up front, and return
  the same buffer on every call.  File uploads are read completely into
  memory before the first send.
* StreamBody wraps a caller-supplied file object.  It can be replayed only
  if the object is seekable; otherwise the second ``replay()`` raises
  BodyNotReplayable.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, BinaryIO

from urllib3.filepost import encode_multipart_formdata

from ..exceptions import BodyNotReplayable

JSON_CONTENT_TYPE = "application/json"
OCTET_STREAM = "application/octet-stream"


class RequestBody:
    """Body strategy: a content type plus a way to (re)produce the bytes."""

    content_type: str | None = None

    def replay(self) -> bytes:
        raise NotImplementedError

    @property
    def replayable(self) -> bool:
        return True


class EmptyBody(RequestBody):
    def replay(self) -> bytes:
        return b""


class BytesBody(RequestBody):
    def __init__(self, data: bytes, content_type: str | None = OCTET_STREAM):
        self._data = bytes(data)
        self.content_type = content_type

    def replay(self) -> bytes:
        return self._data

    def __len__(self) -> int:
        return len(self._data)


class JsonBody(BytesBody):
    def __init__(self, payload: Any):
        super().__init__(json.dumps(payload).encode("utf-8"), JSON_CONTENT_TYPE)
        self.payload = payload


class MultipartBody(BytesBody):
    """multipart/form-data, encoded completely in memory at construction."""

    def __init__(self, fields: dict[str, Any] | list[tuple[str, Any]], boundary: str | None = None):
        data, content_type = encode_multipart_formdata(fields, boundary=boundary)
        super().__init__(data, content_type)

    @classmethod
    def from_file(
        cls,
        path: str | Path,
        filename: str | None = None,
        field: str = "file",
        boundary: str | None = None,
    ) -> MultipartBody:
        """Read *path* fully and wrap it as a single file part."""
        path = Path(path)
        content = path.read_bytes()
        return cls(
            {field: (filename or path.name, content, OCTET_STREAM)},
            boundary=boundary,
        )

    @classmethod
    def from_fields(cls, boundary: str | None = None, **fields: str) -> MultipartBody:
        return cls(fields, boundary=boundary)


class StreamBody(RequestBody):
    """Body read from a file object, replayable only when it can seek back."""

    def __init__(self, fileobj: BinaryIO, content_type: str | None = OCTET_STREAM):
        self._fileobj = fileobj
        self.content_type = content_type
        self._start: int | None = None
        self._consumed = False

    @property
    def replayable(self) -> bool:
        if getattr(self._fileobj, "closed", False):
            return False
        if not self._consumed:
            return True
        return self._start is not None

    def replay(self) -> bytes:
        if getattr(self._fileobj, "closed", False):
            raise BodyNotReplayable("request body source is closed")

        if not self._consumed:
            if _seekable(self._fileobj):
                self._start = self._fileobj.tell()
            self._consumed = True
            return self._fileobj.read()

        if self._start is None:
            raise BodyNotReplayable(
                "cannot retry request with non-seekable body: "
                f"{type(self._fileobj).__name__} was already consumed"
            )
        self._fileobj.seek(self._start)
        return self._fileobj.read()


def _seekable(fileobj: BinaryIO) -> bool:
    seekable = getattr(fileobj, "seekable", None)
    if seekable is None:
        return False
    try:
        return bool(seekable())
    except (OSError, ValueError):
        return False
