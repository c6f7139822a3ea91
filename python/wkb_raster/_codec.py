# This file is part of wkb-raster.
#
# See the COPYRIGHT file at the top-level directory of this distribution
# for details of code ownership.
#
# Use of this source code is governed by a 3-clause BSD-style
# license that can be found in the LICENSE file.

from __future__ import annotations

__all__ = ("decode", "encode")

from logging import getLogger

from ._band_header import BandHeader
from ._grid import read_grid, write_grid
from ._header import read_header, write_header
from ._offline import read_offline, write_offline
from ._options import DecodeOptions
from ._primitives import HexReader, HexWriter
from ._raster import InMemoryRasterData, OfflineRasterData, Raster, RasterBand

_LOG = getLogger(__name__)


def encode(raster: Raster) -> str:
    """Encode a raster as a PostGIS hex WKB string.

    Parameters
    ----------
    raster
        Raster to encode.  Its `~Raster.endian` selects the byte order of the
        whole stream.

    Returns
    -------
    wkb
        Uppercase hex characters, ready to embed in a SQL statement.
    """
    writer = HexWriter(raster.endian)
    write_header(writer, raster.header)
    for band in raster.bands:
        BandHeader.from_band(band).write_to(writer)
        match band.data:
            case OfflineRasterData():
                write_offline(writer, band.data)
            case InMemoryRasterData():
                write_grid(writer, band.data.array, band.data.pixtype, raster.width, raster.height)
    return writer.getvalue()


def _read_band(reader: HexReader, width: int, height: int) -> RasterBand:
    band_header = BandHeader.read_from(reader)
    data: OfflineRasterData | InMemoryRasterData
    if band_header.is_offline:
        data = read_offline(reader, band_header.pixtype, nodata=band_header.nodata)
    else:
        array = read_grid(reader, band_header.pixtype, width, height)
        data = InMemoryRasterData(array, band_header.pixtype, nodata=band_header.nodata)
    return RasterBand(data, is_nodata_value=band_header.is_nodata_value)


def decode(data: str | bytes, options: DecodeOptions = DecodeOptions.DEFAULT) -> Raster:
    """Decode a PostGIS hex WKB string into a raster.

    Parameters
    ----------
    data
        Hex characters, as text or ASCII bytes.  Characters after the last
        band are ignored.
    options, optional
        Decode options.

    Returns
    -------
    raster
        The decoded raster.

    Raises
    ------
    WkbRasterParseError
        Raised (as one of its subclasses) if the input is not a valid WKB
        raster.  No partial raster is ever returned.
    """
    if isinstance(data, str):
        # Non-ASCII characters become '?', which fails hex validation at the
        # same offset.
        data = data.encode("ascii", "replace")
    header, reader = read_header(data, options)
    _LOG.debug(
        "Decoding %d band(s) of a %dx%d %s-endian raster.",
        header.n_bands,
        header.width,
        header.height,
        header.endian.name.lower(),
    )
    bands = [_read_band(reader, header.width, header.height) for _ in range(header.n_bands)]
    if reader.remaining:
        _LOG.debug("Ignoring %d trailing character(s).", reader.remaining)
    return Raster.from_header(header, bands)
