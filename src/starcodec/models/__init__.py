"""
Pydantic models for star records.

These models describe:
- Star (a single record)
- StarCatalog (an ordered list of stars under one field)
"""

from starcodec.enums import Shape
from starcodec.models.catalog import StarCatalog
from starcodec.models.star import Star

__all__ = [
    "Star",
    "StarCatalog",
    "Shape",
]
