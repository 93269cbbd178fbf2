"""
base32.py — RFC 4648 base32 decoder for TOTP shared secrets.

Secrets handed out by authenticator setups are usually unpadded and sometimes
lower-case, which ``base64.b32decode`` rejects unless the caller repairs them
first. This decoder accepts both forms directly:

- trailing ``=`` padding is stripped, the rest is upper-cased
- non-ASCII characters are rejected before upper-casing ("ß" would become "SS")
- input is consumed in 8-character chunks (40 bits); the final chunk may be short
- leftover bits that do not fill a whole byte are dropped, never zero-extended

Example:
    >>> decode("mzxw6yq")
    b'foob'
"""

from typing import Dict

from .errors import DecodeError

ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ234567"
CHUNK_CHARS = 8
BITS_PER_CHAR = 5

_INDEX: Dict[str, int] = {c: i for i, c in enumerate(ALPHABET)}


def decode(value: str) -> bytes:
    """
    Decode a base32 string into raw bytes.

    Arguments:
        value: base32 text, case-insensitive, optionally padded with '='

    Returns:
        bytes: the decoded key material (b"" for empty input)

    Raises:
        DecodeError: if a character outside A-Z2-7 remains after the padding strip
    """
    stripped = value.rstrip("=")
    for pos, char in enumerate(stripped):
        if not char.isascii():
            raise DecodeError(char, pos)
    cleaned = stripped.upper()
    out = bytearray()

    for start in range(0, len(cleaned), CHUNK_CHARS):
        chunk = cleaned[start:start + CHUNK_CHARS]
        bits = 0
        for pos, char in enumerate(chunk, start):
            idx = _INDEX.get(char)
            if idx is None:
                raise DecodeError(char, pos)
            bits = (bits << BITS_PER_CHAR) | idx

        nbits = len(chunk) * BITS_PER_CHAR
        nbytes = nbits // 8
        # drop the low-order bits that do not make a full byte
        bits >>= nbits - nbytes * 8
        out += bits.to_bytes(nbytes, "big")

    return bytes(out)
