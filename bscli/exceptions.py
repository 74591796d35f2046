"""Exception types raised by the DWS client."""


class DWSError(Exception):
    """Base class for every error raised by this package."""

    pass


class NetworkError(DWSError):
    """Connection or timeout failure. Never retried by the dispatcher."""

    pass


class AuthChallengeInvalid(DWSError):
    """A 401 arrived without a usable Digest challenge (missing header, realm or nonce)."""

    pass


class AuthSchemeUnsupported(AuthChallengeInvalid):
    """The WWW-Authenticate header names a scheme other than Digest."""

    pass


class BodyNotReplayable(DWSError):
    """The request body cannot be sent a second time for the authenticated retry."""

    pass


class APIError(DWSError):
    """The player answered, but with a failure status or an unsuccessful result."""

    def __init__(self, message: str, status_code: int | None = None, body: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class InvalidRemotePath(DWSError, ValueError):
    """A remote path does not have the expected /storage/{device}/... shape."""

    pass
