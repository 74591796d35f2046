"""Registry endpoints."""

from ..result import Result
from .base import Service


class RegistryService(Service):
    def get_all(self) -> Result:
        """Dump the registry (hidden sections are excluded by the player)."""
        return self._get("/registry/")

    def get_value(self, section: str, key: str) -> Result:
        return self._get(f"/registry/{section}/{key}/")

    def set_value(self, section: str, key: str, value: str) -> Result:
        return self._put(f"/registry/{section}/{key}/", {"value": value})

    def delete_value(self, section: str, key: str) -> Result:
        return self._delete(f"/registry/{section}/{key}/")

    def delete_section(self, section: str) -> Result:
        return self._delete(f"/registry/{section}/")

    def get_recovery_url(self) -> Result:
        return self._get("/registry/recovery_url/")

    def set_recovery_url(self, url: str) -> Result:
        return self._put("/registry/recovery_url/", {"url": url})

    def flush(self) -> Result:
        # BOS 9.0.107+
        return self._put("/registry/flush/")
