"""
Command-line interface for BrightSign players.

Usage: bscli [options] HOST GROUP ACTION [args...]

    bscli 192.168.1.100 info device
    bscli player.local file list /storage/sd/
    bscli 10.0.0.50 control reboot
"""

from __future__ import annotations

import argparse
import getpass
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable

import requests

from .client import ClientConfig, DWSClient
from .config import DEBUG_DEFAULT, DEFAULT_PASSWORD, DEFAULT_STORAGE, DEFAULT_USER, INSECURE_DEFAULT
from .exceptions import DWSError
from .logging_setup import log, setup_logging
from .output import print_action, print_files, print_result, report_error
from .result import Result
from .services.storage import FileInfo


@dataclass
class Action:
    """Outcome of a command that changes state instead of returning data."""

    action: str
    message: str
    details: dict[str, Any] = field(default_factory=dict)


Handler = Callable[[DWSClient, argparse.Namespace], Any]


def _on_off(value: str) -> bool:
    lowered = value.lower()
    if lowered in ("on", "true", "yes", "1", "enable", "enabled"):
        return True
    if lowered in ("off", "false", "no", "0", "disable", "disabled"):
        return False
    raise argparse.ArgumentTypeError(f"expected on/off, got {value!r}")


def _remote(path: str) -> str:
    return path if path.startswith("/") else DEFAULT_STORAGE + path


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------

def _reboot(client: DWSClient, args: argparse.Namespace) -> Action:
    client.control.reboot(
        crash_report=args.crash_report,
        factory_reset=args.factory_reset,
        disable_autorun=args.disable_autorun,
    )
    return Action("reboot", "Reboot initiated")


def _set_dws_password(client: DWSClient, args: argparse.Namespace) -> Action:
    if not args.new_password and not args.reset:
        raise DWSError("give a new password or --reset")
    client.control.set_dws_password(args.new_password or "", reset=args.reset)
    return Action("set-dws-password", "DWS password reset" if args.reset else "DWS password updated")


def _set_local_dws(client: DWSClient, args: argparse.Namespace) -> Action:
    client.control.set_local_dws(args.state)
    state = "enabled" if args.state else "disabled"
    return Action("set-local-dws", f"Local DWS {state}", {"enabled": args.state})


def _download_firmware(client: DWSClient, args: argparse.Namespace) -> Action:
    client.control.download_firmware(args.url)
    return Action("download-firmware", "Firmware download started; the player will reboot", {"url": args.url})


def _file_list(client: DWSClient, args: argparse.Namespace) -> list[FileInfo]:
    return client.storage.list_files(args.path, raw=args.raw)


def _file_upload(client: DWSClient, args: argparse.Namespace) -> Action:
    local = Path(args.local)
    if not local.is_file():
        raise DWSError(f"local file not found: {local}")
    remote = _remote(args.remote)
    log.info("Uploading %s to %s", local, remote)
    client.storage.upload_file(local, remote)
    return Action("upload", "Upload complete", {"source": str(local), "destination": remote})


def _file_download(client: DWSClient, args: argparse.Namespace) -> Action:
    remote = _remote(args.remote)
    local = args.local or remote.rstrip("/").rsplit("/", 1)[-1]
    written = client.storage.download_file(remote, local)
    return Action(
        "download", f"Downloaded {remote} to {local} ({written} bytes)",
        {"source": remote, "destination": str(local), "bytes": written},
    )


def _file_delete(client: DWSClient, args: argparse.Namespace) -> Action:
    path = _remote(args.path)
    client.storage.delete_file(path)
    return Action("delete", f"Deleted {path}", {"path": path})


def _file_rename(client: DWSClient, args: argparse.Namespace) -> Action:
    path = _remote(args.path)
    client.storage.rename_file(path, args.new_name)
    return Action("rename", f"Renamed {path} to {args.new_name}", {"path": path, "newName": args.new_name})


def _file_mkdir(client: DWSClient, args: argparse.Namespace) -> Action:
    path = _remote(args.path)
    client.storage.create_directory(path)
    return Action("mkdir", f"Created directory {path}", {"path": path})


def _file_format(client: DWSClient, args: argparse.Namespace) -> Action:
    client.storage.format_storage(args.device)
    return Action("format", f"Formatted {args.device}", {"device": args.device})


def _registry_get(client: DWSClient, args: argparse.Namespace) -> Result:
    if args.section and args.key:
        return client.registry.get_value(args.section, args.key)
    if args.section:
        raise DWSError("registry get needs both SECTION and KEY (or neither for a full dump)")
    return client.registry.get_all()


def _registry_set(client: DWSClient, args: argparse.Namespace) -> Action:
    client.registry.set_value(args.section, args.key, args.value)
    return Action(
        "registry-set", f"Set {args.section}/{args.key} = {args.value}",
        {"section": args.section, "key": args.key, "value": args.value},
    )


def _registry_delete(client: DWSClient, args: argparse.Namespace) -> Action:
    if args.key:
        client.registry.delete_value(args.section, args.key)
        return Action("registry-delete", f"Deleted {args.section}/{args.key}")
    client.registry.delete_section(args.section)
    return Action("registry-delete", f"Deleted section {args.section}")


def _registry_recovery_url(client: DWSClient, args: argparse.Namespace) -> Any:
    if args.url is None:
        return client.registry.get_recovery_url()
    client.registry.set_recovery_url(args.url)
    return Action("recovery-url", f"Recovery URL set to {args.url}", {"url": args.url})


def _registry_flush(client: DWSClient, args: argparse.Namespace) -> Action:
    client.registry.flush()
    return Action("registry-flush", "Registry flushed to storage")


def _logs_level(client: DWSClient, args: argparse.Namespace) -> Any:
    if args.level is None:
        return client.logs.get_supervisor_logging_level()
    client.logs.set_supervisor_logging_level(args.level)
    return Action("logging-level", f"Supervisor logging level set to {args.level}", {"level": args.level})


def _capture_start(client: DWSClient, args: argparse.Namespace) -> Action:
    config: dict[str, Any] = {"interface": args.interface, "duration": args.duration}
    if args.filter:
        config["filter"] = args.filter
    if args.max_size:
        config["maxFileSize"] = args.max_size
    if args.output_file:
        config["outputFile"] = args.output_file
    client.diagnostics.start_packet_capture(config)
    return Action("capture-start", f"Packet capture started on {args.interface}", config)


def _capture_stop(client: DWSClient, args: argparse.Namespace) -> Action:
    client.diagnostics.stop_packet_capture()
    return Action("capture-stop", "Packet capture stopped")


def _telnet(client: DWSClient, args: argparse.Namespace) -> Any:
    if args.state is None:
        return client.diagnostics.get_telnet()
    client.diagnostics.set_telnet(args.state, port=args.port, reboot=args.reboot)
    return Action("telnet", f"Telnet {'enabled' if args.state else 'disabled'}", {"enabled": args.state})


def _ssh(client: DWSClient, args: argparse.Namespace) -> Any:
    if args.state is None:
        return client.diagnostics.get_ssh()
    client.diagnostics.set_ssh(args.state, port=args.port, password=args.ssh_password or "", reboot=args.reboot)
    return Action("ssh", f"SSH {'enabled' if args.state else 'disabled'}", {"enabled": args.state})


def _display_value(setting: str) -> Handler:
    def handler(client: DWSClient, args: argparse.Namespace) -> Any:
        if args.value is None:
            return getattr(client.display, f"get_{setting}")()
        getattr(client.display, f"set_{setting}")(args.value)
        return Action(setting, f"{setting.capitalize()} set to {args.value}", {"value": args.value})
    return handler


def _display_power(client: DWSClient, args: argparse.Namespace) -> Any:
    if args.state is None:
        return client.display.get_power_settings()
    client.display.set_power_settings(args.state)
    return Action("power", f"Display power set to {args.state}", {"state": args.state})


def _display_firmware(client: DWSClient, args: argparse.Namespace) -> Action:
    client.display.update_firmware(args.source)
    return Action("display-firmware", "Display firmware update started", {"source": args.source})


def _video_power_save(client: DWSClient, args: argparse.Namespace) -> Any:
    if args.state is None:
        return client.video.power_save(args.connector, args.device)
    client.video.set_power_save(args.state, args.connector, args.device)
    return Action("power-save", f"Power save {'enabled' if args.state else 'disabled'}", {"enabled": args.state})


def _video_mode(client: DWSClient, args: argparse.Namespace) -> Any:
    if args.mode is None:
        return client.video.current_mode(args.connector, args.device)
    client.video.set_mode(args.mode, args.connector, args.device)
    return Action("video-mode", f"Video mode set to {args.mode}", {"mode": args.mode})


def _video_cec(client: DWSClient, args: argparse.Namespace) -> Action:
    client.video.send_cec(args.hex_command)
    return Action("cec", "CEC command sent", {"hexCommand": args.hex_command})


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------

def _global_options(parser: argparse.ArgumentParser, suppress: bool = False) -> None:
    """Add the options accepted both before and after the command."""
    def default(value: Any) -> Any:
        return argparse.SUPPRESS if suppress else value

    parser.add_argument("-u", "--user", default=default(DEFAULT_USER),
                        help=f"Username for authentication (default: {DEFAULT_USER})")
    parser.add_argument("-p", "--password", default=default(DEFAULT_PASSWORD),
                        help="Password for authentication (or BSCLI_PASSWORD env var)")
    parser.add_argument("-d", "--debug", action="store_true", default=default(DEBUG_DEFAULT),
                        help="Enable debug output")
    parser.add_argument("-j", "--json", action="store_true", default=default(False),
                        help="Output raw JSON (for scripts)")
    parser.add_argument("-l", "--local", action="store_true", default=default(INSECURE_DEFAULT),
                        help="Accept locally signed certificates (use HTTPS with insecure TLS)")


def _simple(call: Callable[[DWSClient], Result]) -> Handler:
    return lambda client, args: call(client)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bscli",
        description="BrightSign CLI for controlling players via the DWS API.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  bscli 192.168.1.100 info device\n"
            "  bscli player.local file list /storage/sd/\n"
            "  bscli 10.0.0.50 control reboot\n"
        ),
    )
    _global_options(parser)
    parser.add_argument("host", help="Player IP address or hostname")

    common = argparse.ArgumentParser(add_help=False)
    _global_options(common, suppress=True)

    groups = parser.add_subparsers(dest="group", metavar="GROUP", required=True)

    def group(name: str, help_text: str, aliases: tuple[str, ...] = ()) -> Any:
        sub = groups.add_parser(name, help=help_text, aliases=list(aliases))
        return sub.add_subparsers(dest="action", metavar="ACTION", required=True)

    def command(actions: Any, name: str, help_text: str, handler: Handler,
                aliases: tuple[str, ...] = ()) -> argparse.ArgumentParser:
        sub = actions.add_parser(name, help=help_text, parents=[common], aliases=list(aliases))
        sub.set_defaults(handler=handler)
        return sub

    # info
    info = group("info", "Device information and status")
    command(info, "device", "Show device information", _simple(lambda c: c.info.get_info()))
    command(info, "health", "Show player health", _simple(lambda c: c.info.get_health()))
    command(info, "time", "Show date and time", _simple(lambda c: c.info.get_time()))
    command(info, "video-mode", "Show the current video mode", _simple(lambda c: c.info.get_video_mode()))
    command(info, "apis", "List the APIs the player offers", _simple(lambda c: c.info.list_apis()))

    # control
    control = group("control", "System control (reboot, snapshot, DWS)")
    reboot = command(control, "reboot", "Reboot the player", _reboot)
    reboot.add_argument("--crash-report", action="store_true", help="Save a crash report before rebooting")
    reboot.add_argument("--factory-reset", action="store_true", help="Factory reset while rebooting")
    reboot.add_argument("--disable-autorun", action="store_true", help="Reboot without running autorun")
    command(control, "dws-password", "Show whether a DWS password is set",
            _simple(lambda c: c.control.get_dws_password()))
    set_pw = command(control, "set-dws-password", "Set or reset the DWS password", _set_dws_password)
    set_pw.add_argument("new_password", nargs="?", help="New DWS password")
    set_pw.add_argument("--reset", action="store_true", help="Remove the DWS password")
    command(control, "local-dws", "Show local DWS status", _simple(lambda c: c.control.get_local_dws()))
    local_dws = command(control, "set-local-dws", "Enable or disable local DWS", _set_local_dws)
    local_dws.add_argument("state", type=_on_off, help="on or off")
    snapshot = command(control, "snapshot", "Capture a snapshot of the screen",
                       lambda c, a: c.control.snapshot(a.width, a.height, a.full_resolution))
    snapshot.add_argument("--width", type=int, default=0)
    snapshot.add_argument("--height", type=int, default=0)
    snapshot.add_argument("--full-resolution", action="store_true")
    firmware = command(control, "download-firmware", "Install an OS image from a URL", _download_firmware)
    firmware.add_argument("url")

    # file
    files = group("file", "File management", aliases=("files",))
    listing = command(files, "list", "List files and directories", _file_list, aliases=("ls",))
    listing.add_argument("path", nargs="?", default=DEFAULT_STORAGE)
    listing.add_argument("--raw", action="store_true", help="Return raw directory listing")
    upload = command(files, "upload", "Upload a file to the player", _file_upload, aliases=("put", "cp"))
    upload.add_argument("local")
    upload.add_argument("remote")
    download = command(files, "download", "Download a file from the player", _file_download, aliases=("get",))
    download.add_argument("remote")
    download.add_argument("local", nargs="?")
    delete = command(files, "delete", "Delete a file or directory", _file_delete, aliases=("rm",))
    delete.add_argument("path")
    rename = command(files, "rename", "Rename a file", _file_rename, aliases=("mv",))
    rename.add_argument("path")
    rename.add_argument("new_name")
    mkdir = command(files, "mkdir", "Create a directory", _file_mkdir)
    mkdir.add_argument("path")
    fmt = command(files, "format", "Format a storage device", _file_format)
    fmt.add_argument("device", help="Storage device, e.g. sd or usb1")

    # registry
    registry = group("registry", "Registry management", aliases=("reg",))
    reg_get = command(registry, "get", "Show one value, or the whole registry", _registry_get)
    reg_get.add_argument("section", nargs="?")
    reg_get.add_argument("key", nargs="?")
    reg_set = command(registry, "set", "Set a registry value", _registry_set)
    reg_set.add_argument("section")
    reg_set.add_argument("key")
    reg_set.add_argument("value")
    reg_del = command(registry, "delete", "Delete a value, or a whole section", _registry_delete)
    reg_del.add_argument("section")
    reg_del.add_argument("key", nargs="?")
    recovery = command(registry, "recovery-url", "Show or set the recovery URL", _registry_recovery_url)
    recovery.add_argument("url", nargs="?")
    command(registry, "flush", "Flush the registry to storage", _registry_flush)

    # logs
    logs = group("logs", "Player logs")
    command(logs, "get", "Show the serial log", _simple(lambda c: c.logs.get_logs()))
    level = command(logs, "level", "Show or set the supervisor logging level", _logs_level)
    level.add_argument("level", nargs="?", type=int, help="0=error 1=warn 2=info 3=trace")

    # diagnostics
    diag = group("diagnostics", "Network diagnostics", aliases=("diag",))
    command(diag, "run", "Run network diagnostics", _simple(lambda c: c.diagnostics.run()))
    ping = command(diag, "ping", "Ping an address", lambda c, a: c.diagnostics.ping(a.address))
    ping.add_argument("address")
    dns = command(diag, "dns", "DNS lookup", lambda c, a: c.diagnostics.dns_lookup(a.address, a.resolve))
    dns.add_argument("address")
    dns.add_argument("--resolve", action="store_true", help="Resolve the address")
    trace = command(diag, "trace", "Trace route", lambda c, a: c.diagnostics.trace_route(a.address, a.resolve))
    trace.add_argument("address")
    trace.add_argument("--resolve", action="store_true", help="Resolve the address")
    command(diag, "neighborhood", "Show network neighborhood",
            _simple(lambda c: c.diagnostics.network_neighborhood()))
    command(diag, "interfaces", "List network interfaces", _simple(lambda c: c.diagnostics.interfaces()))
    netcfg = command(diag, "network-config", "Show an interface's configuration",
                     lambda c, a: c.diagnostics.get_network_configuration(a.interface))
    netcfg.add_argument("interface")
    command(diag, "capture-status", "Show packet capture status",
            _simple(lambda c: c.diagnostics.packet_capture_status()))
    capture = command(diag, "capture-start", "Start a packet capture", _capture_start)
    capture.add_argument("interface")
    capture.add_argument("--duration", type=int, default=60, help="Seconds (default: 60)")
    capture.add_argument("--filter")
    capture.add_argument("--max-size", type=int)
    capture.add_argument("--output-file")
    command(diag, "capture-stop", "Stop the packet capture", _capture_stop)
    for name, handler in (("telnet", _telnet), ("ssh", _ssh)):
        remote_shell = command(diag, name, f"Show or configure {name}", handler)
        remote_shell.add_argument("state", nargs="?", type=_on_off, help="on or off")
        remote_shell.add_argument("--port", type=int)
        remote_shell.add_argument("--reboot", action="store_true", help="Reboot to apply")
        if name == "ssh":
            remote_shell.add_argument("--ssh-password")

    # display
    display = group("display", "Display control")
    command(display, "all", "Show all display settings", _simple(lambda c: c.display.get_all()))
    for setting in ("brightness", "contrast", "volume"):
        sub = command(display, setting, f"Show or set {setting}", _display_value(setting))
        sub.add_argument("value", nargs="?", type=int)
    power = command(display, "power", "Show or set display power", _display_power)
    power.add_argument("state", nargs="?", help="e.g. on, standby")
    command(display, "info", "Show display information", _simple(lambda c: c.display.get_info()))
    display_fw = command(display, "firmware", "Update display firmware", _display_firmware)
    display_fw.add_argument("source", help="Path on the player or URL")

    # video
    video = group("video", "Video output")
    outputs = [
        command(video, "output", "Show output information",
                lambda c, a: c.video.output_info(a.connector, a.device)),
        command(video, "edid", "Show the display EDID", lambda c, a: c.video.edid(a.connector, a.device)),
        command(video, "modes", "List available video modes",
                lambda c, a: c.video.modes(a.connector, a.device)),
    ]
    power_save = command(video, "power-save", "Show or set power save", _video_power_save)
    power_save.add_argument("state", nargs="?", type=_on_off)
    mode = command(video, "mode", "Show or set the video mode", _video_mode)
    mode.add_argument("mode", nargs="?")
    for sub in outputs + [power_save, mode]:
        sub.add_argument("--connector", default="hdmi")
        sub.add_argument("--device", default="0")
    cec = command(video, "cec", "Send a CEC command (hex)", _video_cec)
    cec.add_argument("hex_command")

    return parser


def _render(outcome: Any, as_json: bool) -> None:
    if isinstance(outcome, Action):
        print_action(outcome.action, outcome.message, as_json, **outcome.details)
    elif isinstance(outcome, list):
        print_files(outcome, as_json)
    elif outcome is not None:
        print_result(outcome, as_json)


def run(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(debug=args.debug)

    if args.local:
        import urllib3
        urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)

    try:
        if not args.password:
            args.password = getpass.getpass(f"Password for {args.user}@{args.host}: ")
        client = DWSClient(ClientConfig(
            host=args.host,
            username=args.user,
            password=args.password,
            insecure=args.local,
        ))
        _render(args.handler(client, args), args.json)
    except (DWSError, OSError, requests.RequestException) as exc:
        log.debug("Command failed", exc_info=True)
        return report_error(exc, args.json)
    return 0


def main() -> None:
    """Entry point for the ``bscli`` console script."""
    sys.exit(run())


if __name__ == "__main__":
    main()
