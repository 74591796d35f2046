"""Endpoint services – one class per DWS endpoint group."""

from bscli.services.control import ControlService
from bscli.services.diagnostics import DiagnosticsService
from bscli.services.display import DisplayService
from bscli.services.info import InfoService
from bscli.services.logs import LogsService
from bscli.services.registry import RegistryService
from bscli.services.storage import FileInfo, StorageService, files_from_result
from bscli.services.video import VideoService

__all__ = [
    "ControlService",
    "DiagnosticsService",
    "DisplayService",
    "InfoService",
    "LogsService",
    "RegistryService",
    "StorageService",
    "VideoService",
    "FileInfo",
    "files_from_result",
]
