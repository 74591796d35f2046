"""Log retrieval and supervisor logging level."""

from ..result import Result
from .base import Service

# error, warn, info, trace
SUPERVISOR_LEVELS = ("error", "warn", "info", "trace")
DEFAULT_SUPERVISOR_LEVEL = 2


class LogsService(Service):
    def get_logs(self) -> Result:
        return self._get("/logs/")

    def get_supervisor_logging_level(self) -> Result:
        return self._get("/system/supervisor/logging/")

    def set_supervisor_logging_level(self, level: int) -> Result:
        if not 0 <= level < len(SUPERVISOR_LEVELS):
            level = DEFAULT_SUPERVISOR_LEVEL
        return self._put("/system/supervisor/logging/", {"level": level})
