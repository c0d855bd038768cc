"""
Command-line interface for star-codec.

Provides commands for encoding, decoding, and round-tripping
star catalogs as JSON.
"""

from .main import app, main

__all__ = ["main", "app"]
