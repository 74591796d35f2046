"""RFC 2617 Digest response calculation.

The hash is MD5 rendered as lowercase hex.  That is what the protocol (and
the player) requires; it is not configurable.
"""

from __future__ import annotations

import hashlib
import random
from dataclasses import dataclass

from ..config import DIGEST_QOPS, NONCE_COUNT
from .challenge import Challenge


@dataclass(frozen=True)
class Credentials:
    username: str
    password: str

    def __repr__(self) -> str:
        return f"Credentials(username={self.username!r}, password='***')"


@dataclass(frozen=True)
class NonceState:
    """Client nonce and nonce count for one authentication attempt."""

    cnonce: str
    nc: str = NONCE_COUNT

    @classmethod
    def fresh(cls, rng: random.Random) -> NonceState:
        return cls(cnonce=make_cnonce(rng))


def md5_hex(text: str) -> str:
    return hashlib.md5(text.encode("utf-8")).hexdigest()


def make_cnonce(rng: random.Random) -> str:
    """Draw 32 random bits from *rng* as 8 lowercase hex digits."""
    return f"{rng.getrandbits(32):08x}"


def compute_response(
    username: str,
    password: str,
    method: str,
    uri: str,
    challenge: Challenge,
    cnonce: str,
    nc: str = NONCE_COUNT,
) -> str:
    """
    Compute the ``response`` field of a Digest Authorization header.

      HA1 = MD5(username:realm:password)
      HA2 = MD5(method:uri)
      qop auth / auth-int  →  MD5(HA1:nonce:nc:cnonce:qop:HA2)
      no qop               →  MD5(HA1:nonce:HA2)
    """
    ha1 = md5_hex(f"{username}:{challenge.realm}:{password}")
    ha2 = md5_hex(f"{method}:{uri}")
    if challenge.qop in DIGEST_QOPS:
        return md5_hex(f"{ha1}:{challenge.nonce}:{nc}:{cnonce}:{challenge.qop}:{ha2}")
    return md5_hex(f"{ha1}:{challenge.nonce}:{ha2}")


def build_authorization(
    credentials: Credentials,
    method: str,
    uri: str,
    challenge: Challenge,
    rng: random.Random,
) -> str:
    """Return the value of the Authorization header answering *challenge*.

    A new cnonce is drawn from *rng* on every call.
    """
    state = NonceState.fresh(rng)
    response = compute_response(
        credentials.username,
        credentials.password,
        method,
        uri,
        challenge,
        state.cnonce,
        state.nc,
    )

    header = (
        f'Digest username="{credentials.username}", realm="{challenge.realm}", '
        f'nonce="{challenge.nonce}", uri="{uri}", response="{response}"'
    )
    if challenge.qop:
        header += f', qop={challenge.qop}, nc={state.nc}, cnonce="{state.cnonce}"'
    if challenge.opaque:
        header += f', opaque="{challenge.opaque}"'
    return header
