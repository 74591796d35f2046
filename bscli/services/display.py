"""Display control endpoints (BrightSign-branded displays only)."""

from ..result import Result
from .base import Service

_PREFIX = "/display-control"


class DisplayService(Service):
    def get_all(self) -> Result:
        return self._get(f"{_PREFIX}/")

    def get_brightness(self) -> Result:
        return self._get(f"{_PREFIX}/brightness/")

    def set_brightness(self, value: int) -> Result:
        return self._put(f"{_PREFIX}/brightness/", {"value": value})

    def get_contrast(self) -> Result:
        return self._get(f"{_PREFIX}/contrast/")

    def set_contrast(self, value: int) -> Result:
        return self._put(f"{_PREFIX}/contrast/", {"value": value})

    def get_volume(self) -> Result:
        return self._get(f"{_PREFIX}/volume/")

    def set_volume(self, value: int) -> Result:
        return self._put(f"{_PREFIX}/volume/", {"value": value})

    def get_power_settings(self) -> Result:
        return self._get(f"{_PREFIX}/power-settings/")

    def set_power_settings(self, state: str) -> Result:
        return self._put(f"{_PREFIX}/power-settings/", {"state": state})

    def get_info(self) -> Result:
        return self._get(f"{_PREFIX}/info/")

    def update_firmware(self, source: str) -> Result:
        """*source* is a path on the player or a URL."""
        return self._put(f"{_PREFIX}/firmware/", {"source": source})
