# This file is part of wkb-raster.
#
# See the COPYRIGHT file at the top-level directory of this distribution
# for details of code ownership.
#
# Use of this source code is governed by a 3-clause BSD-style
# license that can be found in the LICENSE file.

from __future__ import annotations

__all__ = (
    "InMemoryRasterData",
    "OfflineRasterData",
    "Raster",
    "RasterBand",
    "RasterData",
)

import dataclasses
import math
import os
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any, TypeAlias, final

import numpy as np
import numpy.typing as npt

from ._dtypes import Endian, PixType
from ._header import RasterHeader

if TYPE_CHECKING:
    from ._options import DecodeOptions


def _scalars_equal(a: Any, b: Any) -> bool:
    """Compare two optional scalars, treating NaN as equal to NaN."""
    if isinstance(a, float) and isinstance(b, float) and math.isnan(a) and math.isnan(b):
        return True
    return a == b


@final
class InMemoryRasterData:
    """Pixel values of a band stored inline in the raster.

    Parameters
    ----------
    array
        2-d array (or nested sequence) of pixel values, indexed
        ``[row, column]``.  It is copied and the copy is made read-only.
    pixtype, optional
        Pixel type.  Defaults to the pixel type that matches the array's
        dtype (see `PixType.from_numpy`).
    nodata, optional
        Nodata sentinel, or `None` if the band has none.

    Raises
    ------
    ValueError
        Raised if the array is not 2-d, or if any pixel value would change
        when converted to the pixel type.

    Notes
    -----
    An empty 1-d input (e.g. ``[]``) is accepted as a ``(0, 0)`` grid.
    """

    def __init__(
        self,
        array: npt.ArrayLike,
        pixtype: PixType | int | None = None,
        *,
        nodata: bool | int | float | None = None,
    ):
        source = np.asarray(array)
        if pixtype is None:
            pixtype = PixType.from_numpy(source.dtype)
        pixtype = PixType(pixtype)
        with np.errstate(over="ignore", invalid="ignore"):
            array = source.astype(pixtype.to_numpy())
        if array.dtype.kind == "f":
            if np.any(np.isinf(array) & ~np.isinf(source)):
                raise ValueError(f"Pixel values do not fit in a {pixtype.name} band.")
        elif not np.array_equal(array, source):
            raise ValueError(f"Pixel values are not representable in a {pixtype.name} band.")
        if array.ndim == 1 and array.size == 0:
            array = array.reshape(0, 0)
        if array.ndim != 2:
            raise ValueError(f"Raster band array must be 2-d; got shape {array.shape}.")
        array.flags.writeable = False
        self._array = array
        self._pixtype = pixtype
        self._nodata = None if nodata is None else pixtype.coerce(nodata)

    __slots__ = ("_array", "_pixtype", "_nodata")

    @property
    def array(self) -> np.ndarray:
        """The read-only pixel array, shaped ``(height, width)``."""
        return self._array

    @property
    def pixtype(self) -> PixType:
        """Pixel type of the band."""
        return self._pixtype

    @property
    def nodata(self) -> bool | int | float | None:
        """Nodata sentinel, or `None`."""
        return self._nodata

    @property
    def has_nodata_value(self) -> bool:
        """Whether the band has a nodata sentinel."""
        return self._nodata is not None

    def __eq__(self, other: object) -> bool:
        if type(other) is InMemoryRasterData:
            return (
                self._pixtype is other._pixtype
                and _scalars_equal(self._nodata, other._nodata)
                and np.array_equal(
                    self._array, other._array, equal_nan=(self._array.dtype.kind == "f")
                )
            )
        return False

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        return f"InMemoryRasterData({self._pixtype.name}, {self._array.shape})"

    def __repr__(self) -> str:
        return (
            f"InMemoryRasterData(..., pixtype=PixType.{self._pixtype.name}, "
            f"nodata={self._nodata!r}, shape={self._array.shape})"
        )


@dataclasses.dataclass(frozen=True, eq=False)
class OfflineRasterData:
    """A band whose pixel values live in an external file.

    The path is carried as opaque text; nothing here opens or reads it.
    """

    band: int
    """0-based band number within the external file (signed 8-bit)."""

    path: str
    """Path to the external data file."""

    pixtype: PixType
    """Pixel type of the referenced band."""

    nodata: bool | int | float | None = None
    """Nodata sentinel, or `None` if the band has none."""

    def __post_init__(self) -> None:
        if not -128 <= self.band <= 127:
            raise ValueError(f"Offline band number {self.band} does not fit in a signed byte.")
        path = os.fspath(self.path)
        if not isinstance(path, str):
            raise TypeError(f"Offline band path must be text; got {path!r}.")
        if "\0" in path:
            raise ValueError(f"Offline band path {path!r} contains a NUL character.")
        pixtype = PixType(self.pixtype)
        object.__setattr__(self, "path", path)
        object.__setattr__(self, "pixtype", pixtype)
        if self.nodata is not None:
            object.__setattr__(self, "nodata", pixtype.coerce(self.nodata))

    @property
    def has_nodata_value(self) -> bool:
        """Whether the band has a nodata sentinel."""
        return self.nodata is not None

    def __eq__(self, other: object) -> bool:
        if type(other) is OfflineRasterData:
            return (
                self.band == other.band
                and self.path == other.path
                and self.pixtype is other.pixtype
                and _scalars_equal(self.nodata, other.nodata)
            )
        return False

    __hash__ = None  # type: ignore[assignment]


RasterData: TypeAlias = InMemoryRasterData | OfflineRasterData


@dataclasses.dataclass(frozen=True)
class RasterBand:
    """A single band of a raster."""

    data: RasterData
    """Inline pixel values or a reference to an external file."""

    is_nodata_value: bool = False
    """Dirty flag declaring that every value in the band is nodata.

    This is carried as-is and is never computed from the pixel values.
    """

    @property
    def is_offline(self) -> bool:
        """Whether the band's pixels live in an external file."""
        return isinstance(self.data, OfflineRasterData)

    @property
    def pixtype(self) -> PixType:
        """Pixel type of the band."""
        return self.data.pixtype

    @property
    def nodata(self) -> bool | int | float | None:
        """Nodata sentinel, or `None`."""
        return self.data.nodata

    @property
    def has_nodata_value(self) -> bool:
        """Whether the band has a nodata sentinel."""
        return self.data.has_nodata_value


@final
class Raster:
    """A georeferenced raster with any number of bands.

    Parameters
    ----------
    bands, optional
        Bands, in order.  In-memory bands must have exactly ``height`` rows
        of ``width`` pixels.
    width
        Number of pixel columns.
    height
        Number of pixel rows.
    endian, optional
        Byte order used when the raster is encoded.
    version, optional
        Format version.
    scale_x, scale_y, optional
        Pixel size in geographical units.
    ip_x, ip_y, optional
        Coordinates of the upper-left pixel's upper-left corner.
    skew_x, skew_y, optional
        Rotation terms.
    srid, optional
        Spatial reference identifier (EPSG code).

    Raises
    ------
    pydantic.ValidationError
        Raised if a header field does not fit its wire type, including more
        than 65535 bands.
    ValueError
        Raised if an in-memory band's shape does not match the raster.
    """

    def __init__(
        self,
        bands: Iterable[RasterBand] = (),
        *,
        width: int,
        height: int,
        endian: Endian | int = Endian.BIG,
        version: int = 0,
        scale_x: float = 1.0,
        scale_y: float = 1.0,
        ip_x: float = 0.0,
        ip_y: float = 0.0,
        skew_x: float = 0.0,
        skew_y: float = 0.0,
        srid: int = 0,
    ):
        bands = tuple(bands)
        header = RasterHeader(
            endian=endian,
            version=version,
            n_bands=len(bands),
            scale_x=scale_x,
            scale_y=scale_y,
            ip_x=ip_x,
            ip_y=ip_y,
            skew_x=skew_x,
            skew_y=skew_y,
            srid=srid,
            width=width,
            height=height,
        )
        self._init(header, bands)

    __slots__ = ("_header", "_bands")

    def _init(self, header: RasterHeader, bands: tuple[RasterBand, ...]) -> None:
        for n, band in enumerate(bands):
            if isinstance(band.data, InMemoryRasterData) and band.data.array.shape != (
                header.height,
                header.width,
            ):
                raise ValueError(
                    f"Band {n} has shape {band.data.array.shape}; "
                    f"expected {(header.height, header.width)} for a raster of "
                    f"width={header.width} and height={header.height}."
                )
        self._header = header
        self._bands = bands

    @classmethod
    def from_header(cls, header: RasterHeader, bands: Iterable[RasterBand]) -> Raster:
        """Construct a raster from a header model and its bands.

        ``header.n_bands`` must equal the number of bands.
        """
        bands = tuple(bands)
        if header.n_bands != len(bands):
            raise ValueError(f"Header declares {header.n_bands} band(s); got {len(bands)}.")
        result = cls.__new__(cls)
        result._init(header, bands)
        return result

    @property
    def header(self) -> RasterHeader:
        """The header model for this raster."""
        return self._header

    @property
    def bands(self) -> tuple[RasterBand, ...]:
        """The raster's bands, in order."""
        return self._bands

    @property
    def endian(self) -> Endian:
        """Byte order used when the raster is encoded."""
        return self._header.endian

    @property
    def version(self) -> int:
        """Format version."""
        return self._header.version

    @property
    def scale_x(self) -> float:
        """Pixel width in geographical units."""
        return self._header.scale_x

    @property
    def scale_y(self) -> float:
        """Pixel height in geographical units."""
        return self._header.scale_y

    @property
    def ip_x(self) -> float:
        """X ordinate of the upper-left pixel's upper-left corner."""
        return self._header.ip_x

    @property
    def ip_y(self) -> float:
        """Y ordinate of the upper-left pixel's upper-left corner."""
        return self._header.ip_y

    @property
    def skew_x(self) -> float:
        """Rotation about the Y axis."""
        return self._header.skew_x

    @property
    def skew_y(self) -> float:
        """Rotation about the X axis."""
        return self._header.skew_y

    @property
    def srid(self) -> int:
        """Spatial reference identifier."""
        return self._header.srid

    @property
    def width(self) -> int:
        """Number of pixel columns."""
        return self._header.width

    @property
    def height(self) -> int:
        """Number of pixel rows."""
        return self._header.height

    def to_wkb_string(self) -> str:
        """Encode the raster as a hex WKB string, ready to embed in a SQL
        statement.
        """
        from ._codec import encode

        return encode(self)

    @classmethod
    def from_wkb_string(cls, data: str | bytes, options: DecodeOptions | None = None) -> Raster:
        """Decode a raster from a hex WKB string.

        See `decode` for details.
        """
        from ._codec import decode

        if options is None:
            return decode(data)
        return decode(data, options)

    def __eq__(self, other: object) -> bool:
        if type(other) is Raster:
            return self._bands == other._bands and all(
                _scalars_equal(a, b)
                for a, b in zip(
                    self._header.model_dump().values(), other._header.model_dump().values(), strict=True
                )
            )
        return False

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        return f"Raster({self.width}x{self.height}, {len(self._bands)} band(s), {self.endian.name})"

    def __repr__(self) -> str:
        return (
            f"Raster(..., width={self.width}, height={self.height}, "
            f"endian=Endian.{self.endian.name}, srid={self.srid})"
        )
