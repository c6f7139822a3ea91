# This file is part of wkb-raster.
#
# See the COPYRIGHT file at the top-level directory of this distribution
# for details of code ownership.
#
# Use of this source code is governed by a 3-clause BSD-style
# license that can be found in the LICENSE file.

from __future__ import annotations

__all__ = (
    "HEADER_HEX_LENGTH",
    "RasterHeader",
    "read_header",
    "write_header",
)

from typing import Annotated

import pydantic

from ._dtypes import Endian, Scalar
from ._errors import NoEndiannessGivenError, WrongInputSizeError
from ._options import DecodeOptions
from ._primitives import HexReader, HexWriter

UInt16 = Annotated[int, pydantic.Field(ge=0, le=0xFFFF)]
Int32 = Annotated[int, pydantic.Field(ge=-(2**31), le=2**31 - 1)]


class RasterHeader(pydantic.BaseModel):
    """Pydantic model for the fixed-layout header at the start of every WKB
    raster.

    Field order matches the order on the wire.
    """

    model_config = pydantic.ConfigDict(frozen=True)

    endian: Endian
    """Byte order of everything after the leading endianness byte."""

    version: UInt16 = 0
    """Format version (0 for the only version PostGIS defines)."""

    n_bands: UInt16 = 0
    """Number of bands that follow the header."""

    scale_x: float = 1.0
    """Pixel width in geographical units."""

    scale_y: float = 1.0
    """Pixel height in geographical units."""

    ip_x: float = 0.0
    """X ordinate of the upper-left pixel's upper-left corner."""

    ip_y: float = 0.0
    """Y ordinate of the upper-left pixel's upper-left corner."""

    skew_x: float = 0.0
    """Rotation about the Y axis."""

    skew_y: float = 0.0
    """Rotation about the X axis."""

    srid: Int32 = 0
    """Spatial reference identifier."""

    width: UInt16
    """Number of pixel columns."""

    height: UInt16
    """Number of pixel rows."""


# Fields after the endianness byte, in wire order.
_FIELDS: tuple[tuple[str, Scalar], ...] = (
    ("version", Scalar.uint16),
    ("n_bands", Scalar.uint16),
    ("scale_x", Scalar.float64),
    ("scale_y", Scalar.float64),
    ("ip_x", Scalar.float64),
    ("ip_y", Scalar.float64),
    ("skew_x", Scalar.float64),
    ("skew_y", Scalar.float64),
    ("srid", Scalar.int32),
    ("width", Scalar.uint16),
    ("height", Scalar.uint16),
)

HEADER_HEX_LENGTH = 2 * (Scalar.uint8.size + sum(scalar.size for _, scalar in _FIELDS))
"""Length of the raster header in hex characters (61 raw bytes)."""

_ENDIAN_MARKERS = {b"00": Endian.BIG, b"01": Endian.LITTLE}


def write_header(writer: HexWriter, header: RasterHeader) -> None:
    """Append a raster header, starting with its endianness byte.

    The writer's byte order must match ``header.endian``.
    """
    if writer.endian is not header.endian:
        raise ValueError(f"Cannot write a {header.endian.name} header with a {writer.endian.name} writer.")
    writer.write(Scalar.uint8, header.endian.value)
    for name, scalar in _FIELDS:
        writer.write(scalar, getattr(header, name))


def read_header(
    data: bytes | memoryview, options: DecodeOptions = DecodeOptions.DEFAULT
) -> tuple[RasterHeader, HexReader]:
    """Decode the raster header at the start of a WKB raster string.

    Parameters
    ----------
    data
        Hex characters of the whole stream.
    options, optional
        Decode options.

    Returns
    -------
    header
        The decoded header.
    reader
        A cursor positioned just after the header, using the byte order the
        stream declares.

    Raises
    ------
    WrongInputSizeError
        Raised if ``data`` is shorter than the full header.
    NoEndiannessGivenError
        Raised if the leading byte is neither ``00`` nor ``01``.  The marker
        is checked before the rest of the header's length.
    """
    data = memoryview(data)
    if len(data) < 2:
        raise WrongInputSizeError(HEADER_HEX_LENGTH, data)
    marker = bytes(data[:2])
    try:
        endian = _ENDIAN_MARKERS[marker]
    except KeyError:
        raise NoEndiannessGivenError(marker) from None
    if len(data) < HEADER_HEX_LENGTH:
        raise WrongInputSizeError(HEADER_HEX_LENGTH, data)
    reader = HexReader(data, endian, allow_lowercase=options.allows_lowercase(endian), position=2)
    values = {name: reader.read(scalar) for name, scalar in _FIELDS}
    # Every decoded value is in range by construction.
    return RasterHeader.model_construct(endian=endian, **values), reader
