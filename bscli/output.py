"""Human and JSON rendering of results and errors for the command-line tools."""

from __future__ import annotations

import json
import sys
from typing import Any, TextIO

from .config import TLS_ERROR_MARKERS
from .result import ListResult, ObjectResult, Result
from .services.storage import FileInfo

TLS_SUGGESTION = (
    "This appears to be a TLS certificate error. The player may be using a "
    "self-signed certificate.\nTry one of the following:\n"
    "  1. Use the --local or -l flag to accept locally signed certificates\n"
    "  2. Set environment variable: export BSCLI_TEST_INSECURE=true"
)
TLS_SUGGESTION_SHORT = (
    "This appears to be a TLS certificate error. Try using --local or -l flag, "
    "or set BSCLI_TEST_INSECURE=true"
)


def is_tls_error(message: str) -> bool:
    return any(marker in message for marker in TLS_ERROR_MARKERS)


def emit_json(data: Any, stream: TextIO | None = None) -> None:
    stream = stream or sys.stdout
    json.dump(data, stream, indent=2, default=str)
    stream.write("\n")


def format_size(size: int) -> str:
    value = float(size)
    for unit in ("B", "KB", "MB", "GB"):
        if value < 1024 or unit == "GB":
            return f"{int(value)} {unit}" if unit == "B" else f"{value:.1f} {unit}"
        value /= 1024
    return f"{size} B"


def print_result(result: Result, as_json: bool, stream: TextIO | None = None) -> None:
    stream = stream or sys.stdout
    if as_json:
        emit_json(result.value, stream)
        return

    if isinstance(result, ObjectResult):
        width = max((len(key) for key in result.fields), default=0)
        for key, value in result.fields.items():
            if isinstance(value, (dict, list)):
                value = json.dumps(value)
            print(f"{key.ljust(width)}  {value}", file=stream)
    elif isinstance(result, ListResult):
        for item in result.items:
            print(json.dumps(item) if isinstance(item, (dict, list)) else item, file=stream)
    elif result.value is not None:
        print(result.value, file=stream)


def print_files(files: list[FileInfo], as_json: bool, stream: TextIO | None = None) -> None:
    stream = stream or sys.stdout
    if as_json:
        emit_json([entry.to_dict() for entry in files], stream)
        return
    if not files:
        print("No files found", file=stream)
        return

    rows = [("TYPE", "NAME", "SIZE", "MODIFIED"), ("----", "----", "----", "--------")]
    for entry in files:
        rows.append((
            "dir" if entry.is_dir else "file",
            entry.name,
            "-" if entry.is_dir else format_size(entry.size),
            entry.modified,
        ))
    widths = [max(len(row[i]) for row in rows) for i in range(4)]
    for row in rows:
        print("  ".join(cell.ljust(widths[i]) for i, cell in enumerate(row)).rstrip(), file=stream)


def print_action(action: str, message: str, as_json: bool, **details: Any) -> None:
    if as_json:
        emit_json({"success": True, "action": action, **details})
    else:
        print(message)


def report_error(err: BaseException, as_json: bool) -> int:
    """Print *err* the way the tools show failures and return the exit status."""
    message = str(err)
    tls = is_tls_error(message)
    if as_json:
        payload = {"error": message}
        if tls:
            payload["suggestion"] = TLS_SUGGESTION_SHORT
        # stdout, so scripts parsing JSON see it
        emit_json(payload, sys.stdout)
    elif tls:
        print(f"Error: {message}\n\n{TLS_SUGGESTION}", file=sys.stderr)
    else:
        print(f"Error: {message}", file=sys.stderr)
    return 1
