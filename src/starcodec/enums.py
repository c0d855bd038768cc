"""
Enums for collection layout.

These enums define the valid container shapes a star collection can take.
"""

from enum import Enum


class Shape(str, Enum):
    """Supported collection shapes."""

    KEYED = "keyed"
    SEQUENCE = "sequence"
    WRAPPED = "wrapped"
