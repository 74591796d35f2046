"""Player control endpoints: reboot, DWS password, snapshot, firmware."""

import urllib.parse

from ..result import Result
from .base import Service


class ControlService(Service):
    def reboot(
        self,
        crash_report: bool = False,
        factory_reset: bool = False,
        disable_autorun: bool = False,
    ) -> Result:
        options = {
            "crash_report": crash_report,
            "factory_reset": factory_reset,
            "disable_autorun": disable_autorun,
        }
        # The player treats an absent flag as false; only send the ones set.
        return self._put("/control/reboot/", {k: v for k, v in options.items() if v})

    def get_dws_password(self) -> Result:
        """Report whether a DWS password is set. The password itself is never returned."""
        return self._get("/control/dws-password/")

    def set_dws_password(self, password: str = "", reset: bool = False) -> Result:
        payload: dict = {}
        if password:
            payload["password"] = password
        if reset:
            payload["reset"] = True
        return self._put("/control/dws-password/", payload)

    def get_local_dws(self) -> Result:
        return self._get("/control/local-dws/")

    def set_local_dws(self, enabled: bool) -> Result:
        return self._put("/control/local-dws/", {"enabled": enabled})

    def snapshot(self, width: int = 0, height: int = 0, full_resolution: bool = False) -> Result:
        options: dict = {}
        if width:
            options["width"] = width
        if height:
            options["height"] = height
        if full_resolution:
            options["shouldCaptureFullResolution"] = True
        return self._post("/snapshot/", options)

    def download_firmware(self, url: str) -> Result:
        """Make the player fetch an OS image from *url* and reboot into it."""
        return self._get("/download-firmware/?url=" + urllib.parse.quote(url, safe=":/"))
