"""
The bright-star catalog.

Literal data for the Sun and the brightest stars in the night sky, with
builders that lay the same stars out in each supported collection shape.
"""

from typing import Any

from starcodec.codec.shape import ShapeDescriptor
from starcodec.enums import Shape
from starcodec.models import Star, StarCatalog

BRIGHTEST_STARS: tuple[Star, ...] = (
    Star(name="Sun", distance=0.000015813, constellation=""),
    Star(name="Sirius", distance=8.6, constellation="Canis Major"),
    Star(name="Canopus", distance=310, constellation="Carina"),
    Star(name="RigilKentaurus", distance=4.4, constellation="Centaurus"),
    Star(name="Toliman", distance=4.4, constellation="Centaurus"),
    Star(name="Arcturus", distance=37, constellation="Boötes"),
)

# Slot keys for the keyed shape, one per star above
BRIGHTEST_STAR_KEYS: tuple[str, ...] = (
    "sun",
    "sirius",
    "canopus",
    "rigil_kentaurus",
    "toliman",
    "arcturus",
)


def keyed_catalog() -> tuple[dict[str, Star], ShapeDescriptor]:
    """The bright stars as named slots."""
    stars = dict(zip(BRIGHTEST_STAR_KEYS, BRIGHTEST_STARS))
    return stars, ShapeDescriptor.keyed(BRIGHTEST_STAR_KEYS)


def sequence_catalog() -> tuple[list[Star], ShapeDescriptor]:
    """The bright stars as a bare list."""
    return list(BRIGHTEST_STARS), ShapeDescriptor.sequence()


def wrapped_catalog() -> tuple[StarCatalog, ShapeDescriptor]:
    """The bright stars as a list under the ``stars`` field."""
    return StarCatalog(stars=list(BRIGHTEST_STARS)), ShapeDescriptor.wrapped()


def catalog_for(shape: Shape | str) -> tuple[Any, ShapeDescriptor]:
    """
    Build the bright-star collection for a shape.

    Args:
        shape: Shape tag or its string value

    Returns:
        (collection, descriptor) ready to pass to the codec
    """
    builders = {
        Shape.KEYED: keyed_catalog,
        Shape.SEQUENCE: sequence_catalog,
        Shape.WRAPPED: wrapped_catalog,
    }
    return builders[Shape(shape)]()
