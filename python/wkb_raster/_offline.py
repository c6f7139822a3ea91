# This file is part of wkb-raster.
#
# See the COPYRIGHT file at the top-level directory of this distribution
# for details of code ownership.
#
# Use of this source code is governed by a 3-clause BSD-style
# license that can be found in the LICENSE file.

from __future__ import annotations

__all__ = ("read_offline", "write_offline")

from logging import getLogger

from ._dtypes import PixType, Scalar
from ._errors import PathContainsNonUTF8CharsError
from ._primitives import HexReader, HexWriter
from ._raster import OfflineRasterData

_LOG = getLogger(__name__)


def write_offline(writer: HexWriter, data: OfflineRasterData) -> None:
    """Append the band number and NUL-terminated path of an offline band.

    Path bytes are hex-encoded like every other byte of the stream.
    """
    writer.write(Scalar.int8, data.band)
    writer.write_raw(data.path.encode("utf-8") + b"\0")


def read_offline(
    reader: HexReader, pixtype: PixType, nodata: bool | int | float | None = None
) -> OfflineRasterData:
    """Consume the band number and NUL-terminated path of an offline band.

    Parameters
    ----------
    reader
        Cursor positioned just after the band header.
    pixtype
        Pixel type from the band header.
    nodata, optional
        Nodata sentinel from the band header.

    Raises
    ------
    WrongInputSizeError
        Raised if the input ends before the terminating NUL.
    PathContainsNonUTF8CharsError
        Raised if the path is not valid UTF-8.
    """
    band = reader.read(Scalar.int8)
    path = bytearray()
    while (byte := reader.read_byte()) != 0:
        path.append(byte)
    try:
        text = path.decode("utf-8")
    except UnicodeDecodeError:
        raise PathContainsNonUTF8CharsError(path) from None
    _LOG.debug("Read offline reference to band %d of %r.", band, text)
    return OfflineRasterData(band=band, path=text, pixtype=pixtype, nodata=nodata)
