# This file is part of wkb-raster.
#
# See the COPYRIGHT file at the top-level directory of this distribution
# for details of code ownership.
#
# Use of this source code is governed by a 3-clause BSD-style
# license that can be found in the LICENSE file.

from __future__ import annotations

__all__ = ("DecodeOptions",)

import dataclasses
from typing import ClassVar

from ._dtypes import Endian


@dataclasses.dataclass(frozen=True)
class DecodeOptions:
    """Configuration options for decoding WKB raster strings."""

    lowercase_endians: frozenset[Endian] = frozenset({Endian.LITTLE})
    """Stream byte orders for which lowercase hex digits are accepted.

    Uppercase digits are always accepted.  The default only accepts lowercase
    digits in little-endian streams.
    """

    DEFAULT: ClassVar[DecodeOptions]
    """Default decode options (lowercase hex only for little endian)."""

    LENIENT: ClassVar[DecodeOptions]
    """Decode options that accept lowercase hex for both byte orders."""

    def allows_lowercase(self, endian: Endian) -> bool:
        """Test whether lowercase hex digits are accepted for a stream with
        the given byte order.
        """
        return endian in self.lowercase_endians


DecodeOptions.DEFAULT = DecodeOptions()
DecodeOptions.LENIENT = DecodeOptions(lowercase_endians=frozenset(Endian))
