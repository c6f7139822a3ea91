# This file is part of wkb-raster.
#
# See the COPYRIGHT file at the top-level directory of this distribution
# for details of code ownership.
#
# Use of this source code is governed by a 3-clause BSD-style
# license that can be found in the LICENSE file.

from __future__ import annotations

__all__ = ("BandHeader",)

import dataclasses

from ._dtypes import PixType, Scalar
from ._primitives import HexReader, HexWriter
from ._raster import RasterBand

_IS_OFFLINE = 0b1000_0000
_HAS_NODATA_VALUE = 0b0100_0000
_IS_NODATA_VALUE = 0b0010_0000
_PIXTYPE_MASK = 0b0000_1111


@dataclasses.dataclass(frozen=True)
class BandHeader:
    """The configuration byte and nodata field that start every band.

    Notes
    -----
    The configuration byte packs, from the most significant bit:
    ``isOffline``, ``hasNodataValue``, ``isNodataValue``, one reserved bit
    (always written as 0 and ignored on read), and the 4-bit pixel type code.

    The nodata field that follows is the sentinel in the pixel type's natural
    width when there is one, and otherwise a single placeholder byte no matter
    how wide the pixel type is.
    """

    pixtype: PixType
    """Pixel type of the band."""

    nodata: bool | int | float | None = None
    """Nodata sentinel, or `None`."""

    is_offline: bool = False
    """Whether an offline reference follows instead of pixel values."""

    is_nodata_value: bool = False
    """Band-level dirty flag declaring all values nodata."""

    @classmethod
    def from_band(cls, band: RasterBand) -> BandHeader:
        """Return the header that describes a band."""
        return cls(
            pixtype=band.pixtype,
            nodata=band.nodata,
            is_offline=band.is_offline,
            is_nodata_value=band.is_nodata_value,
        )

    @property
    def has_nodata_value(self) -> bool:
        """Whether a real nodata sentinel is stored."""
        return self.nodata is not None

    @property
    def flags(self) -> int:
        """The packed configuration byte."""
        result = self.pixtype.value & _PIXTYPE_MASK
        if self.is_offline:
            result |= _IS_OFFLINE
        if self.has_nodata_value:
            result |= _HAS_NODATA_VALUE
        if self.is_nodata_value:
            result |= _IS_NODATA_VALUE
        return result

    def write_to(self, writer: HexWriter) -> None:
        """Append the configuration byte and nodata field."""
        writer.write(Scalar.uint8, self.flags)
        if self.nodata is not None:
            writer.write(self.pixtype.scalar, self.nodata)
        else:
            writer.write(Scalar.uint8, 0)

    @classmethod
    def read_from(cls, reader: HexReader) -> BandHeader:
        """Consume a configuration byte and nodata field.

        Raises
        ------
        InvalidPixelTypeError
            Raised if the pixel type code is 9 or greater than 11.
        """
        flags = reader.read_byte()
        pixtype = PixType.from_code(flags & _PIXTYPE_MASK)
        if flags & _HAS_NODATA_VALUE:
            nodata = reader.read(pixtype.scalar)
        else:
            reader.read_byte()
            nodata = None
        return cls(
            pixtype=pixtype,
            nodata=nodata,
            is_offline=bool(flags & _IS_OFFLINE),
            is_nodata_value=bool(flags & _IS_NODATA_VALUE),
        )
