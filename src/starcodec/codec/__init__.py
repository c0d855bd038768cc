"""
Codec module for converting star collections to and from JSON.

Module structure:
- shape.py: ShapeDescriptor and shape resolution
- errors.py: EncodeError / DecodeError and issue reporting
- result.py: CodecResult tagged success/failure outcome
- json_codec.py: StructuredRecordCodec and convenience functions
"""

from .errors import CodecError, CodecIssue, DecodeError, EncodeError
from .json_codec import (
    CodecOptions,
    StructuredRecordCodec,
    decode,
    encode,
    try_decode,
    try_encode,
)
from .result import CodecResult
from .shape import DEFAULT_WRAPPER_FIELD, ShapeDescriptor, resolve_shape

__all__ = [
    # Shapes
    "ShapeDescriptor",
    "DEFAULT_WRAPPER_FIELD",
    "resolve_shape",
    # Errors
    "CodecError",
    "CodecIssue",
    "EncodeError",
    "DecodeError",
    # Results
    "CodecResult",
    # Codec
    "CodecOptions",
    "StructuredRecordCodec",
    "encode",
    "decode",
    "try_encode",
    "try_decode",
]
