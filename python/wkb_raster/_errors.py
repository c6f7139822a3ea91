# This file is part of wkb-raster.
#
# See the COPYRIGHT file at the top-level directory of this distribution
# for details of code ownership.
#
# Use of this source code is governed by a 3-clause BSD-style
# license that can be found in the LICENSE file.

from __future__ import annotations

__all__ = (
    "InvalidHexDigitError",
    "InvalidPixelTypeError",
    "NoEndiannessGivenError",
    "PathContainsNonUTF8CharsError",
    "UnableToParseBoolError",
    "WkbRasterParseError",
    "WrongInputSizeError",
)


class WkbRasterParseError(ValueError):
    """Base class for all exceptions raised when a WKB raster string cannot
    be decoded.

    Decoding is all-or-nothing: when one of these is raised, no part of the
    raster is returned.
    """


class WrongInputSizeError(WkbRasterParseError):
    """Exception raised when a decode step needs more hex characters than
    remain in the input.

    Parameters
    ----------
    expected_len
        Number of hex characters the failed step needed.
    got
        The unconsumed input at the point of failure.
    """

    def __init__(self, expected_len: int, got: bytes):
        self.expected_len = expected_len
        self.got = bytes(got)
        super().__init__(
            f"Expected at least {expected_len} hex characters; only {len(self.got)} remain."
        )


class UnableToParseBoolError(WkbRasterParseError):
    """Exception raised when a boolean field decodes to a byte other than
    0 or 1.
    """

    def __init__(self, chars: bytes, value: int):
        self.chars = bytes(chars)
        self.value = value
        super().__init__(f"Cannot interpret {self.chars!r} (byte value {value}) as a boolean.")


class NoEndiannessGivenError(WkbRasterParseError):
    """Exception raised when the leading byte of a stream is neither ``00``
    (big endian) nor ``01`` (little endian).
    """

    def __init__(self, chars: bytes):
        self.chars = bytes(chars)
        super().__init__(f"Unrecognized endianness marker {self.chars!r}.")


class InvalidPixelTypeError(WkbRasterParseError):
    """Exception raised when a band header holds a pixel type code outside
    the valid set.
    """

    def __init__(self, code: int):
        self.code = code
        super().__init__(f"Invalid pixel type code {code}.")


class PathContainsNonUTF8CharsError(WkbRasterParseError):
    """Exception raised when the path of an offline band is not valid
    UTF-8.
    """

    def __init__(self, path: bytes):
        self.path = bytes(path)
        super().__init__(f"Offline band path {self.path!r} is not valid UTF-8.")


class InvalidHexDigitError(WkbRasterParseError):
    """Exception raised when the input holds a character that is not an
    accepted hex digit.

    Parameters
    ----------
    chars
        The offending run of characters.
    position
        Offset of the first invalid character within ``chars``.
    """

    def __init__(self, chars: bytes, position: int):
        self.chars = bytes(chars)
        self.position = position
        super().__init__(
            f"Invalid hex digit {self.chars[position : position + 1]!r} at offset {position}."
        )
