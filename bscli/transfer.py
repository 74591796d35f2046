"""
bscli.transfer
==============
Root-level file copy to a player's storage, as used by ``bscp``.

Uploads are stricter than ``StorageService.upload_file``: the remote path
must be exactly ``/storage/{device}/{filename}`` so the player never
creates directories, and the form part carries only the bare file name.
The request goes through the same DigestDispatcher as every other call;
only the body strategy differs (the whole multipart body is built in
memory before the first send).
"""

from __future__ import annotations

import posixpath
from dataclasses import dataclass
from pathlib import Path

from .auth import MultipartBody
from .client import DWSClient
from .exceptions import APIError, InvalidRemotePath
from .logging_setup import log
from .result import ObjectResult, check_status, decode_result
from .services.storage import FileInfo, files_from_result


@dataclass(frozen=True)
class RemotePath:
    device: str
    filename: str = ""

    @property
    def api_dir(self) -> str:
        return f"/files/{self.device}/"

    def __str__(self) -> str:
        return f"/storage/{self.device}/{self.filename}"


def parse_remote_path(path: str, require_file: bool = True) -> RemotePath:
    """
    Split ``/storage/sd/file.txt`` into device and file name.

    With *require_file* the path must name a file directly under the
    device root; subdirectories are rejected.
    """
    parts = path.strip("/").split("/")
    if len(parts) < 2 or parts[0] != "storage" or not parts[1]:
        raise InvalidRemotePath(
            f"invalid remote path format, expected /storage/{{device}}/...: {path}"
        )
    if not require_file:
        return RemotePath(parts[1])
    if len(parts) != 3 or not parts[2]:
        raise InvalidRemotePath(
            f"only root level files are supported (no subdirectories), got: {path}"
        )
    return RemotePath(parts[1], parts[2])


def upload_outcome(content: bytes) -> tuple[bool, str]:
    """
    Read ``success`` and ``message`` from an upload answer.

    The player answers either ``{"data": {"result": {...}}}`` or the bare
    ``{"success": ..., "message": ...}`` object.
    """
    result = decode_result(content)
    if not isinstance(result, ObjectResult):
        raise APIError(f"failed to decode upload response as JSON (got: {result.value!r})")
    return bool(result.get("success")), str(result.get("message", "") or "")


class FileTransfer:
    """Upload, list and verify files on one player."""

    def __init__(self, client: DWSClient):
        self.client = client

    def upload(self, local_path: str | Path, remote_path: str) -> RemotePath:
        remote = parse_remote_path(remote_path)
        local_path = Path(local_path)
        if not local_path.is_file():
            raise FileNotFoundError(f"local file not found: {local_path}")

        body = MultipartBody.from_file(local_path, filename=remote.filename)
        log.debug("Upload URL: %s", self.client.url(remote.api_dir))
        log.debug("Target filename in form: %s (%d bytes)", remote.filename, len(body))

        resp = self.client.request("PUT", remote.api_dir, body=body)
        with resp:
            content = resp.content
            check_status(resp, content, f"upload {remote}")

        success, message = upload_outcome(content)
        if not success:
            raise APIError(
                f"upload failed: {message} (full response: {content.decode('utf-8', 'replace')})",
                status_code=resp.status_code,
                body=content.decode("utf-8", "replace"),
            )
        log.info("Uploaded %s → %s", local_path, remote)
        return remote

    def list_files(self, path: str) -> list[FileInfo]:
        remote = parse_remote_path(path, require_file=False)
        result = self.client.call("GET", remote.api_dir)
        log.debug("List API response: %r", result.value)
        return files_from_result(result)

    def verify_file_exists(self, path: str) -> bool:
        directory, filename = posixpath.split(path)
        log.debug("Looking for file %r in directory %r", filename, directory)
        wanted = filename.lower()
        return any(entry.name.lower() == wanted for entry in self.list_files(directory))

