# This file is part of wkb-raster.
#
# See the COPYRIGHT file at the top-level directory of this distribution
# for details of code ownership.
#
# Use of this source code is governed by a 3-clause BSD-style
# license that can be found in the LICENSE file.

"""Encoder and decoder for the PostGIS RASTER Well-Known-Binary format.

The format (PostGIS RFC2) is meant for transport: it declares its own byte
order and has no padding.  PostGIS accepts it as a hex string in SQL, which
is what `encode` produces and `decode` consumes:

- a fixed 61-byte header (endianness, version, band count, six georeference
  doubles, SRID, width, height);

- for each band, a bit-packed configuration byte, a nodata field, and then
  either ``width * height`` pixel values row after row or, for offline bands,
  a band number and a NUL-terminated path to an external file.

The 1-, 2- and 4-bit pixel types are still stored as one byte per pixel.
"""

from ._band_header import *
from ._codec import *
from ._dtypes import *
from ._errors import *
from ._header import *
from ._hex import *
from ._options import *
from ._primitives import *
from ._raster import *
