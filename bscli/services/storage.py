"""File and storage endpoints.

Player paths are written the way the player shows them
(``/storage/sd/autorun.brs``); the API serves them under ``/files/``.
"""

from __future__ import annotations

import posixpath
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from ..auth import MultipartBody
from ..exceptions import APIError
from ..logging_setup import log
from ..result import ListResult, ObjectResult, Result, check_status
from .base import Service

STORAGE_PREFIX = "/storage/"
FILES_PREFIX = "/files/"
DOWNLOAD_CHUNK = 64 * 1024


@dataclass(frozen=True)
class FileInfo:
    name: str
    path: str = ""
    type: str = "file"
    size: int = 0
    modified: str = ""

    @property
    def is_dir(self) -> bool:
        return self.type == "directory"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FileInfo:
        return cls(
            name=str(data.get("name", "")),
            path=str(data.get("path", "")),
            type=str(data.get("type", "file") or "file"),
            size=int(data.get("size") or 0),
            modified=str(data.get("lastModified", data.get("modified", "")) or ""),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "path": self.path,
            "type": self.type,
            "size": self.size,
            "lastModified": self.modified,
        }


def files_from_result(result: Result) -> list[FileInfo]:
    """
    Turn a listing result into FileInfo entries.

    Firmware versions answer with a bare list, a single file object, or an
    object carrying a ``files`` list; all three are accepted.
    """
    if isinstance(result, ListResult):
        return [FileInfo.from_dict(item) for item in result.items if isinstance(item, dict)]
    if isinstance(result, ObjectResult):
        files = result.get("files")
        if isinstance(files, list):
            return [FileInfo.from_dict(item) for item in files if isinstance(item, dict)]
        if "name" in result.fields:
            return [FileInfo.from_dict(result.fields)]
        return []
    raise APIError(f"unexpected file listing format: {result.value!r}")


def to_api_path(path: str) -> str:
    """``/storage/sd/a.txt`` → ``/files/sd/a.txt``."""
    if not path.startswith("/"):
        path = "/" + path
    return path.replace(STORAGE_PREFIX, FILES_PREFIX, 1)


def parent_api_path(path: str) -> str:
    """API path of the directory holding *path*, with trailing slash."""
    return to_api_path(posixpath.dirname(path.rstrip("/"))).rstrip("/") + "/"


class StorageService(Service):
    def list_files(self, path: str, raw: bool = False) -> list[FileInfo]:
        api_path = to_api_path(path)
        if raw:
            api_path += "?raw"
        return files_from_result(self._get(api_path))

    def upload_file(self, local_path: str | Path, remote_path: str) -> Result:
        """Upload *local_path* into the directory of *remote_path*, named after it."""
        body = MultipartBody.from_file(local_path, filename=posixpath.basename(remote_path))
        result = self._client.call("PUT", parent_api_path(remote_path), body=body)
        log.debug("Uploaded %s (%d bytes) to %s", local_path, len(body), remote_path)
        return result

    def download_file(self, remote_path: str, local_path: str | Path) -> int:
        """Stream *remote_path* into *local_path*; return the number of bytes written."""
        api_path = to_api_path(remote_path) + "?contents&stream"
        resp = self._client.request("GET", api_path)
        written = 0
        with resp:
            if resp.status_code != 200:
                check_status(resp, resp.content, f"download {remote_path}")
            local_path = Path(local_path)
            with local_path.open("wb") as out:
                for chunk in resp.iter_content(DOWNLOAD_CHUNK):
                    out.write(chunk)
                    written += len(chunk)
        log.debug("Downloaded %s (%d bytes) to %s", remote_path, written, local_path)
        return written

    def delete_file(self, path: str) -> Result:
        return self._delete(to_api_path(path))

    def rename_file(self, old_path: str, new_name: str) -> Result:
        payload = {"oldName": posixpath.basename(old_path.rstrip("/")), "newName": new_name}
        return self._post(parent_api_path(old_path), payload)

    def create_directory(self, path: str) -> Result:
        body = MultipartBody.from_fields(directory=posixpath.basename(path.rstrip("/")))
        return self._client.call("PUT", parent_api_path(path), body=body)

    def format_storage(self, device: str) -> Result:
        """Erase a storage device (``sd``, ``usb1``, ...)."""
        return self._delete(f"/storage/{device}/")
