"""
otp_core.py — Core library for TOTP / HOTP code generation.

Goals:
- Pure functions only: the CLI and the Flask backend call into this module,
  it never reads settings, files or the network itself.
- The secret is always passed in explicitly, either as raw base32 or as an
  ``otpauth://`` URI copied from an authenticator setup page.
- ``generate`` never raises for a bad secret; it returns a ``TotpResult`` that
  carries either the code or the typed error (see ``errors.py``).

Security notes:
- The secret is never logged, only the time step and remaining seconds.
- Codes are HMAC-SHA1, 6 digits, 30 s step (RFC 4226 / RFC 6238 defaults,
  what Google Authenticator and most portals expect).
"""

from dataclasses import dataclass
from typing import Optional, Tuple
from urllib.parse import parse_qs, urlparse
import hmac
import logging
import struct
import time

from .base32 import decode
from .errors import CounterRangeError, CryptoUnavailableError, InvalidSecretError, OtpError

logger = logging.getLogger(__name__)

# --- Config / constants ----------------------------------------------------
DEFAULT_DIGITS = 6          # codes are always rendered with 6 digits
DEFAULT_TIME_STEP = 30      # TOTP step (seconds)
OTPAUTH_PREFIX = "otpauth://"
HASH_NAME = "sha1"
MAX_COUNTER = 0xFFFFFFFFFFFFFFFF  # counters are packed as unsigned 64-bit


@dataclass(frozen=True)
class TotpResult:
    """
    Outcome of ``generate``: either a code or the error that prevented one.

    A failed result has ``code`` set to None; there is no empty or zero
    placeholder code.
    """

    code: Optional[str] = None
    error: Optional[OtpError] = None
    time_step: Optional[int] = None
    remaining: Optional[int] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.code is not None

    def unwrap(self) -> str:
        """Return the code, or raise the stored error."""
        if self.error is not None:
            raise self.error
        return self.code


# --- Secret handling -------------------------------------------------------
def resolve_secret(secret_or_uri: str) -> str:
    """
    Return the base32 secret contained in ``secret_or_uri``.

    - Input starting with ``otpauth://`` is parsed as a URI and its ``secret``
      query parameter (percent-decoded) is returned.
    - If the URI cannot be parsed or carries no ``secret``, the original input
      is returned unchanged and will be decoded as raw base32.
    - Any other input is returned as is.
    """
    if not secret_or_uri.startswith(OTPAUTH_PREFIX):
        return secret_or_uri

    try:
        params = parse_qs(urlparse(secret_or_uri).query)
    except ValueError:
        logger.debug("otpauth URI could not be parsed, using input as raw base32")
        return secret_or_uri

    values = params.get("secret")
    if not values or not values[0]:
        logger.debug("otpauth URI has no secret parameter, using input as raw base32")
        return secret_or_uri
    return values[0]


def derive_key(secret_or_uri: str) -> bytes:
    """
    Resolve and base32-decode a secret into HMAC key bytes.

    Raises:
        DecodeError: the secret has characters outside the base32 alphabet
        InvalidSecretError: the secret decodes to an empty key
    """
    key = decode(resolve_secret(secret_or_uri))
    if not key:
        raise InvalidSecretError("Secret decodes to an empty key")
    return key


# --- RFC helpers -----------------------------------------------------------
def int_to_bytes(i: int) -> bytes:
    """
    Convert the counter to the 8-byte big-endian message RFC 4226 requires.

    Example: int_to_bytes(1) -> b'\\x00\\x00\\x00\\x00\\x00\\x00\\x00\\x01'

    Raises:
        CounterRangeError: if ``i`` is negative or does not fit in 64 bits
    """
    if not 0 <= i <= MAX_COUNTER:
        raise CounterRangeError(f"Counter {i} is outside the unsigned 64-bit range")
    return struct.pack(">Q", i)


def dynamic_truncate(hmac_digest: bytes) -> int:
    """
    Apply RFC 4226 dynamic truncation.

    - offset = last byte & 0x0F
    - take 4 bytes from offset, clearing the top bit of the first one
    - return the resulting 31-bit unsigned integer
    """
    offset = hmac_digest[-1] & 0x0F
    return (
        ((hmac_digest[offset] & 0x7F) << 24)
        | ((hmac_digest[offset + 1] & 0xFF) << 16)
        | ((hmac_digest[offset + 2] & 0xFF) << 8)
        | (hmac_digest[offset + 3] & 0xFF)
    )


def time_step(timestamp: int, timestep: int = DEFAULT_TIME_STEP) -> int:
    """
    Number of whole ``timestep`` windows elapsed since the Unix epoch.

    Raises:
        CounterRangeError: negative timestamp, or a step beyond the 64-bit counter
    """
    if timestamp < 0:
        raise CounterRangeError("timestamp must be non-negative")
    step = timestamp // timestep
    if step > MAX_COUNTER:
        raise CounterRangeError(f"timestamp {timestamp} is beyond the 64-bit time step range")
    return step


def _hmac_sha1(key: bytes, msg: bytes) -> bytes:
    try:
        return hmac.new(key, msg, HASH_NAME).digest()
    except ValueError as e:
        # hashlib refuses SHA-1 in restricted builds (FIPS)
        raise CryptoUnavailableError("HMAC-SHA1 is not available in this runtime") from e


def _hotp_from_key(key: bytes, counter: int, digits: int) -> str:
    digest = _hmac_sha1(key, int_to_bytes(counter))
    otp_val = dynamic_truncate(digest) % (10 ** digits)
    return str(otp_val).zfill(digits)


def hotp(secret_b32: str, counter: int, digits: int = DEFAULT_DIGITS) -> str:
    """
    Generate an RFC 4226 HOTP code.

    Steps:
    1. Base32-decode secret -> raw key bytes
    2. Message = 8-byte counter (big-endian)
    3. HMAC-SHA1(key, message)
    4. Dynamic truncate -> dbc
    5. otp = dbc % 10^digits, zero-padded to ``digits`` characters

    Arguments:
        secret_b32: base32 secret (an otpauth:// URI is accepted as well)
        counter: non-negative counter
        digits: code length

    Raises:
        DecodeError, InvalidSecretError, CryptoUnavailableError, CounterRangeError
    """
    return _hotp_from_key(derive_key(secret_b32), counter, digits)


def totp(secret_or_uri: str, timestamp: int = None) -> Tuple[str, int]:
    """
    Generate the RFC 6238 TOTP code for ``timestamp`` (default: now).

    Returns:
        (code, remaining_seconds)

    Raises:
        the same errors as ``hotp``
    """
    result = generate(secret_or_uri, timestamp)
    return result.unwrap(), result.remaining


def generate(secret_or_uri: str, timestamp: int = None) -> TotpResult:
    """
    Compute the current 6-digit TOTP code without raising for bad input.

    The wall clock is read once, in whole seconds, when ``timestamp`` is None.
    Nothing is cached between calls, so the function is safe to call from
    several threads at once.

    Arguments:
        secret_or_uri: raw base32 secret or otpauth:// URI
        timestamp: Unix time in seconds (optional, for tests and replays)

    Returns:
        TotpResult with either ``code`` or ``error`` set
    """
    timestamp = int(time.time()) if timestamp is None else int(timestamp)

    step = None
    try:
        step = time_step(timestamp)
        key = derive_key(secret_or_uri)
        code = _hotp_from_key(key, step, DEFAULT_DIGITS)
    except OtpError as e:
        logger.debug("TOTP generation failed: %s", e)
        return TotpResult(error=e, time_step=step)

    remaining = DEFAULT_TIME_STEP - (timestamp % DEFAULT_TIME_STEP)
    logger.debug("TOTP: time=%d, counter=%d, remaining=%ds", timestamp, step, remaining)
    return TotpResult(code=code, time_step=step, remaining=remaining)


if __name__ == "__main__":
    print("otp_core.py is a library module. Use `totp-autofill` or import it instead.")
