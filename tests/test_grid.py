# This file is part of wkb-raster.
#
# See the COPYRIGHT file at the top-level directory of this distribution
# for details of code ownership.
#
# Use of this source code is governed by a 3-clause BSD-style
# license that can be found in the LICENSE file.

from __future__ import annotations

import unittest

import numpy as np

from wkb_raster import (
    Endian,
    HexReader,
    HexWriter,
    InvalidHexDigitError,
    PixType,
    UnableToParseBoolError,
    WrongInputSizeError,
)
from wkb_raster._grid import read_grid, write_grid


def _encode(array: np.ndarray, pixtype: PixType, endian: Endian = Endian.BIG) -> str:
    writer = HexWriter(endian)
    height, width = array.shape
    write_grid(writer, array, pixtype, width, height)
    return writer.getvalue()


class GridTestCase(unittest.TestCase):
    """Tests for the pixel grid codec."""

    def test_write_row_major(self) -> None:
        """Test that pixels are written row after row in stream byte
        order.
        """
        array = np.array([[1, 2], [3, 4]], dtype=np.uint16)
        self.assertEqual(_encode(array, PixType.UINT16, Endian.BIG), "0001000200030004")
        self.assertEqual(_encode(array, PixType.UINT16, Endian.LITTLE), "0100020003000400")
        array = np.array([[1, 2, 3]], dtype=np.uint8)
        self.assertEqual(_encode(array.T, PixType.UINT8), "010203")

    def test_sub_byte_types(self) -> None:
        """Test that 1-, 2- and 4-bit pixel types use a full byte per pixel."""
        self.assertEqual(_encode(np.array([[3, 50]], dtype=np.uint8), PixType.UINT2), "0332")
        self.assertEqual(_encode(np.array([[15, 1]], dtype=np.uint8), PixType.UINT4), "0F01")
        self.assertEqual(_encode(np.array([[True, False]]), PixType.BOOL_1BIT), "0100")

    def test_write_shape_mismatch(self) -> None:
        """Test that a grid that does not match the raster is rejected."""
        writer = HexWriter(Endian.BIG)
        with self.assertRaises(ValueError):
            write_grid(writer, np.zeros((2, 3), dtype=np.uint8), PixType.UINT8, 2, 3)
        with self.assertRaises(ValueError):
            write_grid(writer, np.zeros(6, dtype=np.uint8), PixType.UINT8, 3, 2)
        self.assertEqual(writer.getvalue(), "")

    def test_read(self) -> None:
        """Test decoding of a grid and the cursor position after it."""
        reader = HexReader(b"0102030405060708", Endian.BIG)
        array = read_grid(reader, PixType.UINT8, 3, 2)
        np.testing.assert_array_equal(array, [[1, 2, 3], [4, 5, 6]])
        self.assertEqual(array.dtype, np.dtype(np.uint8))
        self.assertEqual(reader.remaining, 4)
        reader = HexReader(b"0100020003000400", Endian.LITTLE)
        array = read_grid(reader, PixType.INT16, 2, 2)
        np.testing.assert_array_equal(array, [[1, 2], [3, 4]])
        self.assertTrue(array.dtype.isnative)

    def test_read_float(self) -> None:
        """Test decoding of IEEE-754 pixels in both byte orders."""
        values = np.array([[1.5, -2.0, np.nan]], dtype=np.float32)
        for endian in Endian:
            with self.subTest(endian=endian):
                encoded = _encode(values, PixType.FLOAT32, endian)
                array = read_grid(HexReader(encoded.encode(), endian), PixType.FLOAT32, 3, 1)
                np.testing.assert_array_equal(array, values)
                self.assertEqual(array.dtype, np.dtype(np.float32))

    def test_read_short(self) -> None:
        """Test that a truncated grid is reported with the needed length."""
        reader = HexReader(b"00000001", Endian.BIG)
        with self.assertRaises(WrongInputSizeError) as cm:
            read_grid(reader, PixType.INT32, 2, 2)
        self.assertEqual(cm.exception.expected_len, 32)
        self.assertEqual(cm.exception.got, b"00000001")

    def test_read_bool(self) -> None:
        """Test that boolean pixels must be 0 or 1."""
        array = read_grid(HexReader(b"00010001", Endian.BIG), PixType.BOOL_1BIT, 2, 2)
        np.testing.assert_array_equal(array, [[False, True], [False, True]])
        self.assertEqual(array.dtype, np.dtype(bool))
        with self.assertRaises(UnableToParseBoolError) as cm:
            read_grid(HexReader(b"0002", Endian.BIG), PixType.BOOL_1BIT, 2, 1)
        self.assertEqual(cm.exception.value, 2)
        self.assertEqual(cm.exception.chars, b"02")

    def test_read_lowercase(self) -> None:
        """Test the lowercase rules for pixel data."""
        reader = HexReader(b"ff", Endian.BIG)
        with self.assertRaises(InvalidHexDigitError):
            read_grid(reader, PixType.UINT8, 1, 1)
        reader = HexReader(b"ff", Endian.LITTLE, allow_lowercase=True)
        np.testing.assert_array_equal(read_grid(reader, PixType.UINT8, 1, 1), [[255]])

    def test_empty(self) -> None:
        """Test that zero-sized grids consume nothing."""
        for width, height in [(0, 3), (3, 0), (0, 0)]:
            with self.subTest(width=width, height=height):
                reader = HexReader(b"FF", Endian.BIG)
                array = read_grid(reader, PixType.FLOAT64, width, height)
                self.assertEqual(array.shape, (height, width))
                self.assertEqual(reader.position, 0)
                self.assertEqual(_encode(array, PixType.FLOAT64), "")


if __name__ == "__main__":
    unittest.main()
