"""
Copy files to a BrightSign player, scp style.

    bscp autorun.brs 192.168.1.100:/storage/sd/
    bscp -p secret video.mp4 player.local:/storage/sd/intro.mp4

Only files directly under a storage device root are supported.
"""

from __future__ import annotations

import argparse
import getpass
import sys
from pathlib import Path

import requests

from .client import ClientConfig, DWSClient
from .config import DEBUG_DEFAULT, DEFAULT_PASSWORD, DEFAULT_USER, INSECURE_DEFAULT
from .exceptions import DWSError
from .logging_setup import log, setup_logging
from .output import report_error
from .transfer import FileTransfer

try:
    from tqdm import tqdm as _tqdm
    _TQDM_AVAILABLE = True
except ImportError:
    _TQDM_AVAILABLE = False


def split_target(target: str) -> tuple[str, str]:
    """``host:/storage/sd/`` → ``("host", "/storage/sd/")``."""
    host, sep, path = target.rpartition(":")
    if not sep or not host or not path.startswith("/"):
        raise DWSError(f"target must look like HOST:/storage/DEVICE/[FILE], got: {target}")
    return host, path


def destination_for(local: Path, remote: str) -> str:
    """A remote ending in ``/`` is a directory; the local file name goes inside it."""
    return remote + local.name if remote.endswith("/") else remote


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="bscp",
        description="Copy files to a BrightSign player's storage.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  bscp autorun.brs 192.168.1.100:/storage/sd/\n"
            "  bscp -p secret video.mp4 player.local:/storage/sd/intro.mp4\n"
        ),
    )
    parser.add_argument("sources", nargs="+", metavar="SOURCE", help="Local file(s) to copy")
    parser.add_argument("target", metavar="HOST:PATH", help="Destination, e.g. 10.0.0.5:/storage/sd/")
    parser.add_argument("-u", "--user", default=DEFAULT_USER,
                        help=f"Username for authentication (default: {DEFAULT_USER})")
    parser.add_argument("-p", "--password", default=DEFAULT_PASSWORD,
                        help="Password for authentication (or BSCLI_PASSWORD env var)")
    parser.add_argument("-l", "--local", action="store_true", default=INSECURE_DEFAULT,
                        help="Accept locally signed certificates (use HTTPS with insecure TLS)")
    parser.add_argument("-d", "--debug", action="store_true", default=DEBUG_DEFAULT,
                        help="Enable debug output")
    parser.add_argument("--verify", action="store_true",
                        help="List the destination afterwards and check each file arrived")
    return parser.parse_args(argv)


def copy_files(transfer: FileTransfer, sources: list[Path], remote: str, verify: bool = False) -> list[str]:
    """Upload every source; return the remote paths written."""
    if len(sources) > 1 and not remote.endswith("/"):
        raise DWSError("copying several files needs a directory target ending in '/'")

    bar = None
    if _TQDM_AVAILABLE and len(sources) > 1:
        bar = _tqdm(total=len(sources), desc="Uploading", unit="file", dynamic_ncols=True)

    written = []
    try:
        for source in sources:
            destination = destination_for(source, remote)
            if bar is not None:
                bar.set_postfix_str(source.name)
            else:
                print(f"Uploading {source} to {destination}...")
            transfer.upload(source, destination)
            if verify and not transfer.verify_file_exists(destination):
                raise DWSError(f"upload reported success but {destination} is not on the player")
            written.append(destination)
            if bar is not None:
                bar.update(1)
    finally:
        if bar is not None:
            bar.close()
    return written


def run(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    setup_logging(debug=args.debug)

    if args.local:
        import urllib3
        urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)

    try:
        host, remote = split_target(args.target)
        if not args.password:
            args.password = getpass.getpass(f"Password for {args.user}@{host}: ")
        client = DWSClient(ClientConfig(
            host=host,
            username=args.user,
            password=args.password,
            insecure=args.local,
        ))
        written = copy_files(FileTransfer(client), [Path(s) for s in args.sources], remote, args.verify)
    except (DWSError, OSError, requests.RequestException) as exc:
        log.debug("Copy failed", exc_info=True)
        return report_error(exc, as_json=False)

    print(f"Copied {len(written)} file(s)")
    return 0


def main() -> None:
    """Entry point for the ``bscp`` console script."""
    sys.exit(run())


if __name__ == "__main__":
    main()
