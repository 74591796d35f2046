"""Player information endpoints."""

from typing import Any

from ..result import Result
from .base import Service


class InfoService(Service):
    def get_info(self) -> Result:
        return self._get("/info/")

    def get_health(self) -> Result:
        return self._get("/health/")

    def get_time(self) -> Result:
        return self._get("/time/")

    def set_time(self, date: Any, time: str, timezone: str = "") -> Result:
        payload = {"date": date, "time": time}
        if timezone:
            payload["timezone"] = timezone
        return self._put("/time/", payload)

    def get_video_mode(self) -> Result:
        return self._get("/video-mode/")

    def list_apis(self) -> Result:
        return self._get("/")
