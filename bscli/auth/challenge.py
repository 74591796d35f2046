"""Parsing of ``WWW-Authenticate: Digest ...`` challenges."""

from __future__ import annotations

from dataclasses import dataclass

from ..exceptions import AuthChallengeInvalid, AuthSchemeUnsupported

DIGEST_SCHEME = "digest"


@dataclass(frozen=True)
class Challenge:
    """One server challenge. Used for a single Authorization header, then dropped."""

    realm: str
    nonce: str
    qop: str | None = None
    opaque: str | None = None

    @classmethod
    def from_params(cls, params: dict[str, str]) -> Challenge:
        realm = params.get("realm")
        nonce = params.get("nonce")
        if not realm or not nonce:
            missing = [name for name, value in (("realm", realm), ("nonce", nonce)) if not value]
            raise AuthChallengeInvalid(
                f"Digest challenge is missing {', '.join(missing)}: {params!r}"
            )
        return cls(
            realm=realm,
            nonce=nonce,
            qop=params.get("qop") or None,
            opaque=params.get("opaque") or None,
        )


def parse_digest_params(header: str) -> dict[str, str]:
    """
    Split a Digest challenge into a ``{name: value}`` mapping.

    The first token must be the ``Digest`` scheme name, compared without
    regard to case.

    The parameter list is split on every comma and each part on its first
    ``=``; whitespace and surrounding double quotes are trimmed from names
    and values.  Parts without ``=`` are ignored.

    Known limitation: a quoted value that itself contains a comma, e.g.
    ``qop="auth,auth-int"``, is cut at that comma.  Only the text before
    the comma is kept for that parameter.
    """
    scheme, _, rest = (header or "").strip().partition(" ")
    # auth-scheme tokens are case-insensitive; "Digestive" is not Digest
    if scheme.lower() != DIGEST_SCHEME:
        raise AuthSchemeUnsupported(
            f"server requires digest authentication but sent: {scheme or header!r}"
        )

    params: dict[str, str] = {}
    for part in rest.split(","):
        part = part.strip()
        key, sep, value = part.partition("=")
        if not sep:
            continue
        params[key.strip()] = value.strip().strip('"')
    return params


def parse_challenge(header: str) -> Challenge:
    """Parse *header* and check that realm and nonce are present."""
    return Challenge.from_params(parse_digest_params(header))
