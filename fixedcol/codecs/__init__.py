"""
Codecs package.

Two interchangeable representations of a FixedBytes value: canonical hex text
for text columns and raw bytes for binary columns. Both are pure and stateless.
"""

from fixedcol.codecs.binary import BinaryCodec
from fixedcol.codecs.hex import HexCodec

__all__ = [
    "BinaryCodec",
    "HexCodec",
]
