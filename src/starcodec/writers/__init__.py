"""
Writers module for saving encoded star collections.

Module structure:
- json_writer.py: JSONWriter class for JSON file output
"""

from .json_writer import JSONWriter, write_catalog_to_json

__all__ = [
    "JSONWriter",
    "write_catalog_to_json",
]
