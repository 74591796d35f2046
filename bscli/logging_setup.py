"""
Logging configuration for bscli and bscp.

Everything goes to stderr so ``--json`` output on stdout stays parseable.
With ``debug`` the urllib3 connection log is routed through the same
handler, and every line carries a timestamp and the logger name so the
two sources can be told apart.
"""

import logging
import sys

try:
    import colorlog
    _COLORLOG_AVAILABLE = True
except ImportError:
    _COLORLOG_AVAILABLE = False

log = logging.getLogger("bscli")

# Third-party loggers that are only shown under --debug
_DEBUG_LOGGERS = ("urllib3",)

_LOG_COLORS = {
    "DEBUG":    "cyan",
    "INFO":     "green",
    "WARNING":  "yellow",
    "ERROR":    "red",
    "CRITICAL": "bold_red",
}

_handler = None


def _formatter(debug: bool) -> logging.Formatter:
    color, reset = ("%(log_color)s", "%(reset)s") if _COLORLOG_AVAILABLE else ("", "")
    if debug:
        fmt = f"%(asctime)s.%(msecs)03d {color}%(levelname)-7s{reset} %(name)s: %(message)s"
    else:
        fmt = f"{color}%(levelname)s{reset} %(name)s: %(message)s"

    if _COLORLOG_AVAILABLE:
        return colorlog.ColoredFormatter(fmt, datefmt="%H:%M:%S", log_colors=_LOG_COLORS)
    return logging.Formatter(fmt, datefmt="%H:%M:%S")


def setup_logging(debug: bool = False) -> logging.Handler:
    """(Re)configure the ``bscli`` logger; safe to call more than once."""
    global _handler

    if _COLORLOG_AVAILABLE:
        handler = colorlog.StreamHandler(sys.stderr)
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(_formatter(debug))

    log.setLevel(logging.DEBUG if debug else logging.WARNING)
    log.handlers.clear()
    log.addHandler(handler)
    log.propagate = False

    for name in _DEBUG_LOGGERS:
        other = logging.getLogger(name)
        if _handler is not None:
            other.removeHandler(_handler)
        if debug:
            other.setLevel(logging.DEBUG)
            other.addHandler(handler)
            other.propagate = False
        else:
            other.setLevel(logging.NOTSET)
            other.propagate = True

    _handler = handler
    return handler
