"""Video output endpoints and CEC."""

from ..result import Result
from .base import Service


class VideoService(Service):
    @staticmethod
    def _output(connector: str, device: str) -> str:
        return f"/video/{connector}/output/{device}"

    def output_info(self, connector: str = "hdmi", device: str = "0") -> Result:
        return self._get(f"{self._output(connector, device)}/")

    def edid(self, connector: str = "hdmi", device: str = "0") -> Result:
        return self._get(f"{self._output(connector, device)}/edid/")

    def power_save(self, connector: str = "hdmi", device: str = "0") -> Result:
        return self._get(f"{self._output(connector, device)}/power-save/")

    def set_power_save(self, enabled: bool, connector: str = "hdmi", device: str = "0") -> Result:
        return self._put(f"{self._output(connector, device)}/power-save/", {"enabled": enabled})

    def modes(self, connector: str = "hdmi", device: str = "0") -> Result:
        return self._get(f"{self._output(connector, device)}/modes/")

    def current_mode(self, connector: str = "hdmi", device: str = "0") -> Result:
        return self._get(f"{self._output(connector, device)}/mode/")

    def set_mode(self, mode: str, connector: str = "hdmi", device: str = "0") -> Result:
        return self._put(f"{self._output(connector, device)}/mode/", {"mode": mode})

    def send_cec(self, hex_command: str) -> Result:
        """Send a raw CEC payload out of the HDMI port (experimental on the player)."""
        return self._post("/sendCecX/", {"hexCommand": hex_command})
