"""
JSON writer for saving encoded star collections to disk.

This module writes collections through the codec, so files on disk have
exactly the same layout as the text returned by encode().
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional

from starcodec.catalog import catalog_for
from starcodec.codec import ShapeDescriptor, StructuredRecordCodec
from starcodec.codec.shape import ShapeLike, resolve_shape
from starcodec.enums import Shape

logger = logging.getLogger(__name__)


class JSONWriter:
    """
    Writes star collections to JSON files.

    Files are written as UTF-8 and named after the collection shape
    unless a filename is given.
    """

    def __init__(self, output_dir: str | Path, codec: Optional[StructuredRecordCodec] = None):
        """
        Initialize the JSON writer.

        Args:
            output_dir: Base directory for output files
            codec: Codec to encode with, defaults to compact output
        """
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.codec = codec or StructuredRecordCodec()

    def write(self, collection: Any, shape: ShapeLike, filename: Optional[str] = None) -> Path:
        """
        Encode a collection and write it to a JSON file.

        Args:
            collection: The collection to write
            shape: Shape descriptor (or bare Shape for unkeyed shapes)
            filename: Output file name, defaults to "<shape>.json"

        Returns:
            Path to the written JSON file

        Raises:
            EncodeError: If the collection does not fit the shape
        """
        descriptor: ShapeDescriptor = resolve_shape(shape)
        text = self.codec.encode(collection, descriptor)

        output_path = self.output_dir / (filename or f"{descriptor.kind.value}.json")
        output_path.write_text(text, encoding="utf-8")

        logger.info(f"Wrote {descriptor.kind.value} collection to {output_path}")
        return output_path


def write_catalog_to_json(
    shape: Shape | str,
    output_dir: str | Path,
    codec: Optional[StructuredRecordCodec] = None,
) -> Path:
    """
    Convenience function to write the bright-star catalog in one shape.

    Args:
        shape: Which shape to lay the catalog out in
        output_dir: Directory for the output file
        codec: Codec to encode with

    Returns:
        Path to the written JSON file

    Example:
        path = write_catalog_to_json(Shape.KEYED, "/data/output")
        print(f"Wrote catalog to: {path}")
    """
    collection, descriptor = catalog_for(shape)
    writer = JSONWriter(output_dir, codec=codec)
    return writer.write(collection, descriptor)
