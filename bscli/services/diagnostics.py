"""Network diagnostics endpoints."""

from typing import Any

from ..result import Result
from .base import Service


def _resolve(path: str, resolve_address: bool) -> str:
    return path + "?resolveAddress=true" if resolve_address else path


class DiagnosticsService(Service):
    def run(self) -> Result:
        return self._get("/diagnostics/")

    def dns_lookup(self, address: str, resolve_address: bool = False) -> Result:
        return self._get(_resolve(f"/diagnostics/dns-lookup/{address}", resolve_address))

    def ping(self, address: str) -> Result:
        return self._get(f"/diagnostics/ping/{address}")

    def trace_route(self, address: str, resolve_address: bool = False) -> Result:
        return self._get(_resolve(f"/diagnostics/trace-route/{address}", resolve_address))

    def network_neighborhood(self) -> Result:
        return self._get("/diagnostics/network-neighborhood/")

    def get_network_configuration(self, interface: str) -> Result:
        return self._get(f"/diagnostics/network-configuration/{interface}/")

    def set_network_configuration(self, interface: str, config: dict[str, Any]) -> Result:
        return self._put(f"/diagnostics/network-configuration/{interface}/", config)

    def interfaces(self) -> Result:
        return self._get("/diagnostics/interfaces/")

    def packet_capture_status(self) -> Result:
        return self._get("/diagnostics/packet-capture/")

    def start_packet_capture(self, config: dict[str, Any]) -> Result:
        return self._post("/diagnostics/packet-capture/", config)

    def stop_packet_capture(self) -> Result:
        return self._delete("/diagnostics/packet-capture/")

    def get_telnet(self) -> Result:
        return self._get("/diagnostics/telnet/")

    def set_telnet(self, enabled: bool, port: int | None = None, reboot: bool = False) -> Result:
        return self._put("/diagnostics/telnet/", _toggle(enabled, port, reboot))

    def get_ssh(self) -> Result:
        return self._get("/diagnostics/ssh/")

    def set_ssh(
        self,
        enabled: bool,
        port: int | None = None,
        password: str = "",
        reboot: bool = False,
    ) -> Result:
        config = _toggle(enabled, port, reboot)
        if password:
            config["password"] = password
        return self._put("/diagnostics/ssh/", config)


def _toggle(enabled: bool, port: int | None, reboot: bool) -> dict[str, Any]:
    config: dict[str, Any] = {"enabled": enabled}
    if port:
        config["portNumber"] = port
    if reboot:
        config["reboot"] = True
    return config
