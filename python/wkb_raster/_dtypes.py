# This file is part of wkb-raster.
#
# See the COPYRIGHT file at the top-level directory of this distribution
# for details of code ownership.
#
# Use of this source code is governed by a 3-clause BSD-style
# license that can be found in the LICENSE file.

from __future__ import annotations

__all__ = (
    "Endian",
    "PixType",
    "Scalar",
)

import enum
import math
from typing import Any

import numpy as np
import numpy.typing as npt

from ._errors import InvalidPixelTypeError


class Endian(enum.IntEnum):
    """Byte order of a WKB raster stream.

    The integer value is the one written to the leading byte of the stream.
    """

    BIG = 0
    LITTLE = 1

    @property
    def struct_prefix(self) -> str:
        """The `struct` module byte-order prefix for this endianness."""
        return ">" if self is Endian.BIG else "<"

    def to_numpy(self, dtype: npt.DTypeLike) -> np.dtype:
        """Return a copy of ``dtype`` with this byte order."""
        return np.dtype(dtype).newbyteorder(self.struct_prefix)


class Scalar(enum.StrEnum):
    """Enumeration of the scalar types that appear in a WKB raster stream."""

    bool = enum.auto()
    int8 = enum.auto()
    uint8 = enum.auto()
    int16 = enum.auto()
    uint16 = enum.auto()
    int32 = enum.auto()
    uint32 = enum.auto()
    float32 = enum.auto()
    float64 = enum.auto()

    def to_numpy(self) -> type:
        """Convert an enumeration member to the corresponding numpy scalar
        type object, e.g. `numpy.int16`.
        """
        return getattr(np, self.value)

    @property
    def size(self) -> int:
        """Number of raw bytes used by one value of this type."""
        return np.dtype(self.to_numpy()).itemsize

    @property
    def struct_format(self) -> str:
        """The `struct` format character for this type, without a
        byte-order prefix.

        Booleans are packed as an unsigned byte so that values other than 0
        and 1 can be detected on read.
        """
        return _STRUCT_FORMATS[self]


_STRUCT_FORMATS = {
    Scalar.bool: "B",
    Scalar.int8: "b",
    Scalar.uint8: "B",
    Scalar.int16: "h",
    Scalar.uint16: "H",
    Scalar.int32: "i",
    Scalar.uint32: "I",
    Scalar.float32: "f",
    Scalar.float64: "d",
}


class PixType(enum.IntEnum):
    """Pixel types of a raster band, valued by their band header code.

    Code 9 is reserved and has no member.  The sub-byte types
    (`BOOL_1BIT`, `UINT2`, `UINT4`) are still stored one byte per pixel.
    """

    BOOL_1BIT = 0
    UINT2 = 1
    UINT4 = 2
    INT8 = 3
    UINT8 = 4
    INT16 = 5
    UINT16 = 6
    INT32 = 7
    UINT32 = 8
    FLOAT32 = 10
    FLOAT64 = 11

    @classmethod
    def from_code(cls, code: int) -> PixType:
        """Look up a pixel type from the low nibble of a band header.

        Raises
        ------
        InvalidPixelTypeError
            Raised if ``code`` is not a valid pixel type code.
        """
        try:
            return cls(code)
        except ValueError:
            raise InvalidPixelTypeError(code) from None

    @classmethod
    def from_numpy(cls, dtype: npt.DTypeLike) -> PixType:
        """Return the default pixel type for anything that can be coerced to
        `numpy.dtype`.

        Unsigned bytes map to `UINT8`; `UINT2` and `UINT4` must be requested
        explicitly.
        """
        dtype = np.dtype(dtype)
        try:
            return _DEFAULT_PIXTYPES[Scalar(dtype.name)]
        except (ValueError, KeyError):
            raise TypeError(f"No raster pixel type for dtype {dtype}.") from None

    @property
    def scalar(self) -> Scalar:
        """The scalar type used to store one pixel."""
        return _PIXTYPE_SCALARS[self]

    @property
    def byte_width(self) -> int:
        """Number of raw bytes used by one pixel."""
        return self.scalar.size

    def to_numpy(self) -> type:
        """Return the numpy scalar type used for pixels of this type."""
        return self.scalar.to_numpy()

    def coerce(self, value: Any) -> bool | int | float:
        """Convert a value to the Python scalar a pixel of this type can
        actually hold.

        Floats are rounded to the precision of the pixel type, so a
        `FLOAT32` value compares equal to itself after a round trip.

        Raises
        ------
        OverflowError
            Raised if an integer is out of range for an integer pixel type.
        ValueError
            Raised if the value would otherwise change: a fractional or
            non-finite value for an integer type, a boolean other than 0 or 1,
            or a finite value too large for `FLOAT32`.
        """
        if self is PixType.BOOL_1BIT and value not in (0, 1):
            raise ValueError(f"Value {value!r} is not a valid {self.name} pixel.")
        with np.errstate(over="ignore"):
            result = self.to_numpy()(value).item()
        if self.scalar in (Scalar.float32, Scalar.float64):
            if math.isinf(result) and not math.isinf(value):
                raise ValueError(f"Value {value!r} does not fit in a {self.name} pixel.")
        elif result != value:
            raise ValueError(f"Value {value!r} is not representable as a {self.name} pixel.")
        return result


_PIXTYPE_SCALARS = {
    PixType.BOOL_1BIT: Scalar.bool,
    PixType.UINT2: Scalar.uint8,
    PixType.UINT4: Scalar.uint8,
    PixType.INT8: Scalar.int8,
    PixType.UINT8: Scalar.uint8,
    PixType.INT16: Scalar.int16,
    PixType.UINT16: Scalar.uint16,
    PixType.INT32: Scalar.int32,
    PixType.UINT32: Scalar.uint32,
    PixType.FLOAT32: Scalar.float32,
    PixType.FLOAT64: Scalar.float64,
}

_DEFAULT_PIXTYPES = {
    Scalar.bool: PixType.BOOL_1BIT,
    Scalar.int8: PixType.INT8,
    Scalar.uint8: PixType.UINT8,
    Scalar.int16: PixType.INT16,
    Scalar.uint16: PixType.UINT16,
    Scalar.int32: PixType.INT32,
    Scalar.uint32: PixType.UINT32,
    Scalar.float32: PixType.FLOAT32,
    Scalar.float64: PixType.FLOAT64,
}
