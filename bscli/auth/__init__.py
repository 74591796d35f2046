"""Authentication submodule – Digest challenge parsing, response calculation, replayable bodies."""

from bscli.auth.body import (
    BytesBody,
    EmptyBody,
    JsonBody,
    MultipartBody,
    RequestBody,
    StreamBody,
)
from bscli.auth.challenge import Challenge, parse_challenge, parse_digest_params
from bscli.auth.digest import (
    Credentials,
    NonceState,
    build_authorization,
    compute_response,
    make_cnonce,
    md5_hex,
)
from bscli.auth.dispatcher import DigestDispatcher, RequestDescriptor

__all__ = [
    "BytesBody",
    "EmptyBody",
    "JsonBody",
    "MultipartBody",
    "RequestBody",
    "StreamBody",
    "Challenge",
    "parse_challenge",
    "parse_digest_params",
    "Credentials",
    "NonceState",
    "build_authorization",
    "compute_response",
    "make_cnonce",
    "md5_hex",
    "DigestDispatcher",
    "RequestDescriptor",
]
