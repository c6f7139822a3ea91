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
    BandHeader,
    Endian,
    HexReader,
    HexWriter,
    InMemoryRasterData,
    InvalidPixelTypeError,
    OfflineRasterData,
    PixType,
    RasterBand,
    UnableToParseBoolError,
)


def _encode(header: BandHeader, endian: Endian = Endian.BIG) -> str:
    writer = HexWriter(endian)
    header.write_to(writer)
    return writer.getvalue()


class BandHeaderTestCase(unittest.TestCase):
    """Tests for the band configuration byte and nodata field."""

    def test_flags(self) -> None:
        """Test the bit layout of the configuration byte."""
        self.assertEqual(BandHeader(PixType.UINT8).flags, 0x04)
        self.assertEqual(BandHeader(PixType.FLOAT32, is_offline=True).flags, 0x8A)
        self.assertEqual(
            BandHeader(PixType.INT16, nodata=-1, is_nodata_value=True).flags, 0b0110_0101
        )
        self.assertEqual(
            BandHeader(PixType.FLOAT64, nodata=0.0, is_offline=True, is_nodata_value=True).flags, 0xEB
        )

    def test_write(self) -> None:
        """Test the nodata field in both byte orders."""
        self.assertEqual(_encode(BandHeader(PixType.UINT8)), "0400")
        self.assertEqual(_encode(BandHeader(PixType.INT16, nodata=-1, is_nodata_value=True)), "65FFFF")
        self.assertEqual(_encode(BandHeader(PixType.UINT16, nodata=1), Endian.BIG), "460001")
        self.assertEqual(_encode(BandHeader(PixType.UINT16, nodata=1), Endian.LITTLE), "460100")
        self.assertEqual(
            _encode(BandHeader(PixType.FLOAT64, nodata=1.0), Endian.LITTLE), "4B000000000000F03F"
        )
        self.assertEqual(_encode(BandHeader(PixType.BOOL_1BIT, nodata=True)), "4001")

    def test_placeholder_is_one_byte(self) -> None:
        """Test that a band without nodata always has a one-byte nodata field,
        whatever the pixel width.
        """
        for pixtype in PixType:
            with self.subTest(pixtype=pixtype):
                encoded = _encode(BandHeader(pixtype))
                self.assertEqual(encoded, f"{pixtype.value:02X}00")
                reader = HexReader((encoded + "ABCDEF01").encode(), Endian.BIG)
                decoded = BandHeader.read_from(reader)
                self.assertEqual(decoded, BandHeader(pixtype))
                self.assertEqual(reader.position, 4)

    def test_round_trip(self) -> None:
        """Test decoding of headers with sentinels."""
        headers = [
            BandHeader(PixType.BOOL_1BIT, nodata=False),
            BandHeader(PixType.UINT2, nodata=3, is_nodata_value=True),
            BandHeader(PixType.INT8, nodata=-128),
            BandHeader(PixType.INT32, nodata=-(2**31), is_offline=True),
            BandHeader(PixType.UINT32, nodata=2**32 - 1),
            BandHeader(PixType.FLOAT32, nodata=0.5),
            BandHeader(PixType.FLOAT64, nodata=-9999.0, is_offline=True, is_nodata_value=True),
        ]
        for endian in Endian:
            for header in headers:
                with self.subTest(endian=endian, header=header):
                    encoded = _encode(header, endian)
                    reader = HexReader(encoded.encode(), endian)
                    self.assertEqual(BandHeader.read_from(reader), header)
                    self.assertEqual(reader.remaining, 0)
                    self.assertEqual(len(encoded), 2 + 2 * header.pixtype.byte_width)

    def test_invalid_pixtype(self) -> None:
        """Test that reserved and out-of-range pixel type codes are
        rejected.
        """
        for code in (9, 12, 13, 14, 15):
            with self.subTest(code=code):
                reader = HexReader(f"{code:02X}00".encode(), Endian.BIG)
                with self.assertRaises(InvalidPixelTypeError) as cm:
                    BandHeader.read_from(reader)
                self.assertEqual(cm.exception.code, code)

    def test_reserved_bit_ignored(self) -> None:
        """Test that the reserved bit does not affect decoding."""
        decoded = BandHeader.read_from(HexReader(b"1400", Endian.BIG))
        self.assertEqual(decoded, BandHeader(PixType.UINT8))

    def test_bool_nodata(self) -> None:
        """Test that a boolean sentinel must be 0 or 1."""
        decoded = BandHeader.read_from(HexReader(b"4001", Endian.BIG))
        self.assertIs(decoded.nodata, True)
        with self.assertRaises(UnableToParseBoolError):
            BandHeader.read_from(HexReader(b"4002", Endian.BIG))

    def test_from_band(self) -> None:
        """Test building a header from in-memory and offline bands."""
        in_memory = RasterBand(
            InMemoryRasterData(np.zeros((2, 2), dtype=np.int16), nodata=-1), is_nodata_value=True
        )
        self.assertEqual(
            BandHeader.from_band(in_memory),
            BandHeader(PixType.INT16, nodata=-1, is_nodata_value=True),
        )
        offline = RasterBand(OfflineRasterData(band=0, path="/data/a.tif", pixtype=PixType.UINT8))
        self.assertEqual(BandHeader.from_band(offline), BandHeader(PixType.UINT8, is_offline=True))


if __name__ == "__main__":
    unittest.main()
