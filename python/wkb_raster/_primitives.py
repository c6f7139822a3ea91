# This file is part of wkb-raster.
#
# See the COPYRIGHT file at the top-level directory of this distribution
# for details of code ownership.
#
# Use of this source code is governed by a 3-clause BSD-style
# license that can be found in the LICENSE file.

from __future__ import annotations

__all__ = (
    "HexReader",
    "HexWriter",
    "format_scalar",
    "parse_scalar",
)

import struct

from ._dtypes import Endian, Scalar
from ._errors import UnableToParseBoolError, WrongInputSizeError
from ._hex import byte_to_hex_pair, hex_pair_to_byte, hexlify, unhexlify


class HexWriter:
    """An output buffer of hex characters with a fixed byte order.

    Parameters
    ----------
    endian
        Byte order used for every multi-byte value written.
    """

    def __init__(self, endian: Endian):
        self._endian = Endian(endian)
        self._chunks: list[bytes] = []

    __slots__ = ("_endian", "_chunks")

    @property
    def endian(self) -> Endian:
        """Byte order used for every multi-byte value written."""
        return self._endian

    def write(self, scalar: Scalar, value: bool | int | float) -> None:
        """Append a single scalar value.

        Each raw byte becomes two uppercase hex characters, so this appends
        ``2 * scalar.size`` characters.
        """
        raw = struct.pack(self._endian.struct_prefix + scalar.struct_format, value)
        self._chunks.extend(byte_to_hex_pair(b) for b in raw)

    def write_raw(self, raw: bytes) -> None:
        """Append a run of raw bytes that are already in stream order."""
        self._chunks.append(hexlify(raw))

    def getvalue(self) -> str:
        """Return everything written so far as text."""
        return b"".join(self._chunks).decode("ascii")


class HexReader:
    """A cursor over an immutable buffer of hex characters.

    Parameters
    ----------
    data
        Hex characters to read.  The reader holds a view, not a copy.
    endian
        Byte order of multi-byte values.
    allow_lowercase, optional
        Whether lowercase hex digits are accepted.
    position, optional
        Offset (in characters) of the first character to read.

    Notes
    -----
    Every read checks the remaining length once up front and raises
    `WrongInputSizeError` (with the unconsumed input) before consuming
    anything.
    """

    def __init__(
        self,
        data: bytes | memoryview,
        endian: Endian,
        *,
        allow_lowercase: bool = False,
        position: int = 0,
    ):
        self._data = memoryview(data)
        self._endian = Endian(endian)
        self._allow_lowercase = allow_lowercase
        self._position = position

    __slots__ = ("_data", "_endian", "_allow_lowercase", "_position")

    @property
    def endian(self) -> Endian:
        """Byte order of multi-byte values."""
        return self._endian

    @property
    def position(self) -> int:
        """Offset of the next character to be read."""
        return self._position

    @property
    def remaining(self) -> int:
        """Number of characters not yet consumed."""
        return len(self._data) - self._position

    def take(self, n_bytes: int) -> bytes:
        """Consume and return the hex characters for ``n_bytes`` raw bytes."""
        n_chars = 2 * n_bytes
        end = self._position + n_chars
        if end > len(self._data):
            raise WrongInputSizeError(n_chars, self._data[self._position :])
        chars = bytes(self._data[self._position : end])
        self._position = end
        return chars

    def read_byte(self) -> int:
        """Consume a single raw byte."""
        chars = self.take(1)
        return hex_pair_to_byte(chars[0], chars[1], allow_lowercase=self._allow_lowercase)

    def read_raw(self, n_bytes: int) -> bytes:
        """Consume ``n_bytes`` raw bytes, returned in stream order."""
        return unhexlify(self.take(n_bytes), allow_lowercase=self._allow_lowercase)

    def read(self, scalar: Scalar) -> bool | int | float:
        """Consume a single scalar value.

        Raises
        ------
        WrongInputSizeError
            Raised if fewer than ``2 * scalar.size`` characters remain.
        UnableToParseBoolError
            Raised if a boolean decodes to anything but 0 or 1.
        """
        chars = self.take(scalar.size)
        raw = bytes(
            hex_pair_to_byte(chars[i], chars[i + 1], allow_lowercase=self._allow_lowercase)
            for i in range(0, len(chars), 2)
        )
        if scalar is Scalar.bool:
            if raw[0] > 1:
                raise UnableToParseBoolError(chars, raw[0])
            return bool(raw[0])
        (value,) = struct.unpack(self._endian.struct_prefix + scalar.struct_format, raw)
        return value


def format_scalar(scalar: Scalar, value: bool | int | float, endian: Endian) -> str:
    """Return the hex characters for a single scalar value."""
    writer = HexWriter(endian)
    writer.write(scalar, value)
    return writer.getvalue()


def parse_scalar(
    chars: str | bytes, scalar: Scalar, endian: Endian, *, allow_lowercase: bool | None = None
) -> bool | int | float:
    """Decode a single scalar value from the start of a run of hex
    characters.

    Parameters
    ----------
    chars
        Hex characters; at least ``2 * scalar.size`` are required.
    scalar
        Type of the value.
    endian
        Byte order of the value.
    allow_lowercase, optional
        Whether lowercase hex digits are accepted.  Defaults to `True` only
        for little endian.
    """
    if isinstance(chars, str):
        chars = chars.encode("ascii", "replace")
    if allow_lowercase is None:
        allow_lowercase = Endian(endian) is Endian.LITTLE
    return HexReader(chars, endian, allow_lowercase=allow_lowercase).read(scalar)
