"""Configuration constants for the BrightSign DWS client."""

import os

DEFAULT_USER = "admin"
# Credentials can also be supplied via the BSCLI_PASSWORD env var
DEFAULT_PASSWORD = os.environ.get("BSCLI_PASSWORD", "")

# Test harnesses flip these without touching the command line
DEBUG_DEFAULT = os.environ.get("BSCLI_TEST_DEBUG") == "true"
INSECURE_DEFAULT = os.environ.get("BSCLI_TEST_INSECURE") == "true"

API_PREFIX = "/api/v1"
DEFAULT_STORAGE = "/storage/sd/"

REQUEST_TIMEOUT = 30    # seconds, shared by both round trips of one dispatch

# Nonce count is fixed: no challenge is ever reused across dispatch calls
NONCE_COUNT = "00000001"
DIGEST_QOPS = frozenset(["auth", "auth-int"])

USER_AGENT = "bscli/1.0 (+python-requests)"

# Substrings that identify a TLS/certificate failure in an error message
TLS_ERROR_MARKERS = (
    "x509:",
    "certificate",
    "tls:",
    "TLS",
    "SSL",
    "self-signed",
    "verify certificate",
)
