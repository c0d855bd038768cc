"""
Star Codec - JSON encoding for star catalogs.

This package converts collections of star records between in-memory
models and JSON text. A single codec handles every collection shape:
named slots, a bare list, or a list wrapped in one field.
"""

__version__ = "0.1.0"

from starcodec.catalog import BRIGHTEST_STAR_KEYS, BRIGHTEST_STARS, catalog_for
from starcodec.codec import (
    CodecError,
    CodecIssue,
    CodecOptions,
    CodecResult,
    DecodeError,
    EncodeError,
    ShapeDescriptor,
    StructuredRecordCodec,
    decode,
    encode,
    try_decode,
    try_encode,
)
from starcodec.enums import Shape
from starcodec.models import Star, StarCatalog
from starcodec.writers import JSONWriter, write_catalog_to_json

__all__ = [
    # Models
    "Star",
    "StarCatalog",
    "Shape",
    # Catalog
    "BRIGHTEST_STARS",
    "BRIGHTEST_STAR_KEYS",
    "catalog_for",
    # Codec
    "ShapeDescriptor",
    "StructuredRecordCodec",
    "CodecOptions",
    "CodecResult",
    "CodecIssue",
    "CodecError",
    "EncodeError",
    "DecodeError",
    "encode",
    "decode",
    "try_encode",
    "try_decode",
    # Writers
    "JSONWriter",
    "write_catalog_to_json",
]
