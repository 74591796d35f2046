"""
bscli
=====
Python client and command-line tools for BrightSign players, talking to
the Diagnostic Web Server (DWS) API with transparent HTTP Digest
authentication.

Package structure
-----------------
bscli/
├── __init__.py       – package init and public API
├── config.py         – configuration constants
├── exceptions.py     – error taxonomy
├── logging_setup.py  – named logger and colour formatting
├── session.py        – requests.Session factory
├── auth/             – sub-package: Digest authentication
│   ├── challenge.py  – WWW-Authenticate parsing
│   ├── digest.py     – HA1/HA2/response calculation
│   ├── body.py       – replayable request bodies
│   └── dispatcher.py – send → 401 → authenticated retry
├── result.py         – tagged union for decoded response bodies
├── client.py         – DWSClient, the single dispatch entry point
├── services/         – sub-package: one class per endpoint group
├── transfer.py       – root-level file copy used by bscp
├── output.py         – human / JSON rendering
├── cli.py            – argparse CLI (``bscli``, ``python -m bscli``)
└── bscp.py           – scp-style uploader (``bscp``)

Quick start
-----------
    from bscli import ClientConfig, DWSClient

    client = DWSClient(ClientConfig(host="192.168.1.100", password="secret"))
    print(client.info.get_info().value)
"""

from .auth import Credentials, DigestDispatcher, RequestDescriptor
from .client import ClientConfig, DWSClient
from .exceptions import (
    APIError,
    AuthChallengeInvalid,
    AuthSchemeUnsupported,
    BodyNotReplayable,
    DWSError,
    InvalidRemotePath,
    NetworkError,
)
from .result import decode_result
from .transfer import FileTransfer

__all__ = [
    "ClientConfig",
    "DWSClient",
    "Credentials",
    "DigestDispatcher",
    "RequestDescriptor",
    "FileTransfer",
    "decode_result",
    "APIError",
    "AuthChallengeInvalid",
    "AuthSchemeUnsupported",
    "BodyNotReplayable",
    "DWSError",
    "InvalidRemotePath",
    "NetworkError",
]
