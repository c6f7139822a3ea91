# This file is part of wkb-raster.
#
# See the COPYRIGHT file at the top-level directory of this distribution
# for details of code ownership.
#
# Use of this source code is governed by a 3-clause BSD-style
# license that can be found in the LICENSE file.

"""Conversion between raw bytes and the ASCII hex characters of a WKB raster
string.

Output is always uppercase.  Lowercase digits are only accepted on input when
the caller asks for them, which the decoder does for little-endian streams.
"""

from __future__ import annotations

__all__ = (
    "byte_to_hex_pair",
    "hex_pair_to_byte",
    "hexlify",
    "unhexlify",
)

import binascii
import re

from ._errors import InvalidHexDigitError

_DIGITS = b"0123456789ABCDEF"

_UPPERCASE_RUN = re.compile(rb"[0-9A-F]*")
_MIXED_CASE_RUN = re.compile(rb"[0-9A-Fa-f]*")


def byte_to_hex_pair(byte: int) -> bytes:
    """Return the two uppercase ASCII hex characters for a single byte."""
    return bytes((_DIGITS[byte >> 4], _DIGITS[byte & 0x0F]))


def _nibble(char: int, allow_lowercase: bool) -> int | None:
    if 0x30 <= char <= 0x39:  # 0-9
        return char - 0x30
    if 0x41 <= char <= 0x46:  # A-F
        return char - 0x41 + 10
    if allow_lowercase and 0x61 <= char <= 0x66:  # a-f
        return char - 0x61 + 10
    return None


def hex_pair_to_byte(hi: int, lo: int, *, allow_lowercase: bool = False) -> int:
    """Return the byte value of two ASCII hex characters.

    Parameters
    ----------
    hi
        Character code of the most significant nibble.
    lo
        Character code of the least significant nibble.
    allow_lowercase, optional
        Whether ``a``-``f`` are accepted in addition to ``A``-``F``.

    Raises
    ------
    InvalidHexDigitError
        Raised if either character is not an accepted hex digit.
    """
    high = _nibble(hi, allow_lowercase)
    if high is None:
        raise InvalidHexDigitError(bytes((hi, lo)), 0)
    low = _nibble(lo, allow_lowercase)
    if low is None:
        raise InvalidHexDigitError(bytes((hi, lo)), 1)
    return (high << 4) | low


def hexlify(raw: bytes) -> bytes:
    """Return the uppercase hex characters for a run of raw bytes."""
    return binascii.hexlify(raw).upper()


def unhexlify(chars: bytes, *, allow_lowercase: bool = False) -> bytes:
    """Return the raw bytes for an even-length run of hex characters.

    This applies the same digit rules as `hex_pair_to_byte`.
    """
    pattern = _MIXED_CASE_RUN if allow_lowercase else _UPPERCASE_RUN
    end = pattern.match(chars).end()
    if end != len(chars):
        raise InvalidHexDigitError(chars, end)
    return binascii.unhexlify(chars)
