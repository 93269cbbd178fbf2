"""
totp_core package
=================

TOTP code generator (RFC 4226 / RFC 6238, HMAC-SHA1, 6 digits, 30 s step)
for filling in the second login factor of a web portal.

──────────────────────────────────────────────
Core algorithm
──────────────────────────────────────────────
- Secret: raw base32 string, or an otpauth:// URI whose ``secret`` query
  parameter holds the base32 string.

- HOTP (HMAC-based One-Time Password):
  code = Truncate(HMAC-SHA1(key=secret, msg=counter)) mod 10^6

- TOTP (Time-based One-Time Password):
  HOTP with counter = floor(unix_time / 30), read fresh on every call.

- Dynamic Truncation:
  4 bytes picked from the HMAC at offset (last byte & 0x0F), top bit cleared.

──────────────────────────────────────────────
Quick example
──────────────────────────────────────────────
>>> from totp_core import generate
>>> result = generate("otpauth://totp/Portal:alice?secret=JBSWY3DPEHPK3PXP")
>>> if result.ok:
...     print("Code:", result.code, "valid for", result.remaining, "s")
... else:
...     print("Failed:", result.error)
"""

from .base32 import decode
from .errors import (
    CounterRangeError,
    CryptoUnavailableError,
    DecodeError,
    InvalidSecretError,
    OtpError,
    SettingsError,
)
from .otp_core import TotpResult, generate, hotp, resolve_secret, totp

__version__ = "1.0.0"

__all__ = [
    "CounterRangeError",
    "CryptoUnavailableError",
    "DecodeError",
    "InvalidSecretError",
    "OtpError",
    "SettingsError",
    "TotpResult",
    "decode",
    "generate",
    "hotp",
    "resolve_secret",
    "totp",
]
