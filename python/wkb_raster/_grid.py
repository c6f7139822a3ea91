# This file is part of wkb-raster.
#
# See the COPYRIGHT file at the top-level directory of this distribution
# for details of code ownership.
#
# Use of this source code is governed by a 3-clause BSD-style
# license that can be found in the LICENSE file.

from __future__ import annotations

__all__ = ("read_grid", "write_grid")

import numpy as np

from ._dtypes import PixType
from ._errors import UnableToParseBoolError
from ._hex import hexlify
from ._primitives import HexReader, HexWriter


def write_grid(writer: HexWriter, array: np.ndarray, pixtype: PixType, width: int, height: int) -> None:
    """Append the pixel values of an in-memory band, row after row.

    Parameters
    ----------
    writer
        Output buffer; its byte order is used for every pixel.
    array
        Pixel values indexed ``[row, column]``.
    pixtype
        Pixel type of the band.
    width
        Number of pixel columns the raster declares.
    height
        Number of pixel rows the raster declares.

    Raises
    ------
    ValueError
        Raised if the array's shape is not ``(height, width)``.
    """
    if array.shape != (height, width):
        raise ValueError(f"Pixel array has shape {array.shape}; expected {(height, width)}.")
    stream_dtype = writer.endian.to_numpy(pixtype.to_numpy())
    writer.write_raw(np.ascontiguousarray(array, dtype=stream_dtype).tobytes())


def read_grid(reader: HexReader, pixtype: PixType, width: int, height: int) -> np.ndarray:
    """Consume the pixel values of an in-memory band.

    Parameters
    ----------
    reader
        Cursor positioned at the first pixel.
    pixtype
        Pixel type of the band.
    width
        Number of pixel columns.
    height
        Number of pixel rows.

    Returns
    -------
    array
        Native-byte-order array with shape ``(height, width)``.

    Raises
    ------
    WrongInputSizeError
        Raised if fewer than ``2 * width * height * pixtype.byte_width``
        characters remain.
    UnableToParseBoolError
        Raised if a `PixType.BOOL_1BIT` pixel is neither 0 nor 1.
    """
    raw = reader.read_raw(width * height * pixtype.byte_width)
    if not raw:
        return np.zeros((height, width), dtype=pixtype.to_numpy())
    if pixtype is PixType.BOOL_1BIT:
        values = np.frombuffer(raw, dtype=np.uint8)
        bad = np.flatnonzero(values > 1)
        if bad.size:
            index = int(bad[0])
            raise UnableToParseBoolError(hexlify(raw[index : index + 1]), int(values[index]))
        array = values.astype(np.bool_)
    else:
        stream_dtype = reader.endian.to_numpy(pixtype.to_numpy())
        array = np.frombuffer(raw, dtype=stream_dtype).astype(pixtype.to_numpy())
    return array.reshape(height, width)
