"""Small helpers shared across the mail and news handling code."""

from __future__ import annotations

import enum
import os
import random
import time

__all__ = [
    "ContentEncoding",
    "cached_charset",
    "is_us_ascii",
    "name_for_encoding",
    "is_atext",
    "is_ttext",
    "unique_string",
    "multipart_boundary",
    "crlf_to_lf",
    "lf_to_crlf",
]


class ContentEncoding(enum.Enum):
    """Possible values of the Content-Transfer-Encoding header."""

    SEVEN_BIT = 0
    EIGHT_BIT = 1
    QUOTED_PRINTABLE = 2
    BASE64 = 3
    UUENCODE = 4
    BINARY = 5


_ENCODING_NAMES = {
    ContentEncoding.SEVEN_BIT: "7bit",
    ContentEncoding.EIGHT_BIT: "8bit",
    ContentEncoding.QUOTED_PRINTABLE: "quoted-printable",
    ContentEncoding.BASE64: "base64",
    ContentEncoding.UUENCODE: "uuencode",
    ContentEncoding.BINARY: "binary",
}

# Bitmaps over US-ASCII, most significant bit first.
# atext: all except specials, CTLs and SPACE.
_ATEXT_MAP = bytes((
    0x00, 0x00, 0x00, 0x00,
    0x5F, 0x35, 0xFF, 0xC5,
    0x7F, 0xFF, 0xFF, 0xE3,
    0xFF, 0xFF, 0xFF, 0xFE,
))

# ttext: all except tspecials, CTLs and SPACE.
_TTEXT_MAP = bytes((
    0x00, 0x00, 0x00, 0x00,
    0x5F, 0x36, 0xFF, 0xC0,
    0x7F, 0xFF, 0xFF, 0xE3,
    0xFF, 0xFF, 0xFF, 0xFE,
))

_UNIQUE_CHARS = "0123456789abcdefghijklmnopqrstuvxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"

_charset_cache: dict[bytes, bytes] = {}


def cached_charset(name: bytes) -> bytes:
    """Return the canonical (upper-case) cached instance of a charset name.

    Lookups are case-insensitive; repeated calls for the same charset
    return the very same object.
    """
    key = name.upper()
    cached = _charset_cache.get(key)
    if cached is None:
        cached = _charset_cache.setdefault(key, key)
    return cached


def is_us_ascii(s: str) -> bool:
    """Return True if ``s`` contains only US-ASCII characters."""
    return all(ord(c) < 128 for c in s)


def name_for_encoding(enc: ContentEncoding) -> str:
    """Return a user-visible name for a content transfer encoding."""
    return _ENCODING_NAMES.get(enc, "unknown")


def _code_of(ch: int | str | bytes) -> int:
    if isinstance(ch, int):
        return ch
    if len(ch) != 1:
        raise ValueError(f"expected a single character, got {ch!r}")
    return ch[0] if isinstance(ch, (bytes, bytearray)) else ord(ch)


def _in_map(bitmap: bytes, ch: int | str | bytes) -> bool:
    code = _code_of(ch)
    if not 0 <= code < 128:
        return False
    return bool(bitmap[code // 8] & (0x80 >> (code % 8)))


def is_atext(ch: int | str | bytes) -> bool:
    """Return True if ``ch`` is an RFC 2822 atext character."""
    return _in_map(_ATEXT_MAP, ch)


def is_ttext(ch: int | str | bytes) -> bool:
    """Return True if ``ch`` is an RFC 2045 token character."""
    return _in_map(_TTEXT_MAP, ch)


def unique_string() -> bytes:
    """Return a fairly unique string built from time, process id and randomness."""
    ran = random.randint(1, 1000)
    timeval = (int(time.time()) // ran + os.getpid()) & 0xFFFFFFFF
    suffix = "".join(random.choice(_UNIQUE_CHARS[:61]) for _ in range(10))
    return f"{timeval}.{suffix}".encode("ascii")


def multipart_boundary() -> bytes:
    """Return a random string usable as a multipart boundary parameter."""
    return b"nextPart" + unique_string()


def crlf_to_lf(s: bytes) -> bytes:
    """Convert every CRLF in ``s`` to LF."""
    if b"\r\n" not in s:
        return s
    return s.replace(b"\r\n", b"\n")


def lf_to_crlf(s: bytes) -> bytes:
    """Convert every LF in ``s`` to CRLF.

    Input whose first line break is already CRLF is returned unchanged.
    """
    first = s.find(b"\n")
    if first == -1:
        return s
    if first > 0 and s[first - 1 : first] == b"\r":
        return s
    return s.replace(b"\n", b"\r\n")