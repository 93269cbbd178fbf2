"""
errors.py — Exception types raised by totp_core.

Every failure of code generation is one of these types; ``generate`` hands
them back inside a ``TotpResult`` while the raising helpers raise them.
"""


class OtpError(ValueError):
    """Base class for failures while producing a one-time code."""


class InvalidSecretError(OtpError):
    """The secret yields unusable key material (e.g. zero-length key)."""


class DecodeError(InvalidSecretError):
    """The base32 secret contains a character outside ``A-Z2-7``."""

    def __init__(self, char: str, position: int):
        self.char = char
        self.position = position
        super().__init__(f"Invalid base32 character {char!r} at position {position}")


class CryptoUnavailableError(OtpError):
    """HMAC-SHA1 is not available in this runtime (e.g. FIPS mode)."""


class CounterRangeError(OtpError):
    """The time step or HOTP counter does not fit in an unsigned 64-bit integer."""


class SettingsError(Exception):
    """The settings file cannot be read or is malformed."""
