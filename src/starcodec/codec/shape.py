"""
Shape descriptors for the star codec.

A descriptor pairs a Shape tag with whatever extra layout the shape
needs: the ordered slot keys for keyed collections, or the wrapper field
name for wrapped collections.
"""

from dataclasses import dataclass
from typing import Union

from starcodec.enums import Shape

DEFAULT_WRAPPER_FIELD = "stars"


@dataclass(frozen=True)
class ShapeDescriptor:
    """
    Layout of a star collection.

    Attributes:
        kind: Which container shape is in use
        keys: Ordered slot keys (keyed shape only)
        field: Wrapper key holding the list (wrapped shape only)
    """

    kind: Shape
    keys: tuple[str, ...] = ()
    field: str = DEFAULT_WRAPPER_FIELD

    def __post_init__(self) -> None:
        object.__setattr__(self, "kind", Shape(self.kind))
        object.__setattr__(self, "keys", tuple(self.keys))

        if self.kind == Shape.KEYED:
            if not self.keys:
                raise ValueError("Keyed shape requires at least one key")
            duplicates = sorted({k for k in self.keys if self.keys.count(k) > 1})
            if duplicates:
                raise ValueError(f"Duplicate keys in keyed shape: {', '.join(duplicates)}")
        elif self.keys:
            raise ValueError(f"Keys are only valid for the keyed shape, not {self.kind.value}")

        if self.kind == Shape.WRAPPED and not self.field:
            raise ValueError("Wrapped shape requires a field name")

    @classmethod
    def keyed(cls, keys: list[str] | tuple[str, ...]) -> "ShapeDescriptor":
        """Descriptor for a fixed set of named slots, in declared order."""
        return cls(kind=Shape.KEYED, keys=tuple(keys))

    @classmethod
    def sequence(cls) -> "ShapeDescriptor":
        """Descriptor for a bare ordered list."""
        return cls(kind=Shape.SEQUENCE)

    @classmethod
    def wrapped(cls, field: str = DEFAULT_WRAPPER_FIELD) -> "ShapeDescriptor":
        """Descriptor for a list held under a single named field."""
        return cls(kind=Shape.WRAPPED, field=field)


ShapeLike = Union[ShapeDescriptor, Shape, str]


def resolve_shape(shape: ShapeLike) -> ShapeDescriptor:
    """
    Normalize a shape argument into a descriptor.

    A bare Shape (or its string value) is enough for the sequence and
    wrapped shapes. The keyed shape needs its keys, so it must be given
    as a full descriptor.
    """
    if isinstance(shape, ShapeDescriptor):
        return shape

    kind = Shape(shape)
    if kind == Shape.KEYED:
        raise ValueError("Keyed shape needs its keys; use ShapeDescriptor.keyed(...)")
    if kind == Shape.SEQUENCE:
        return ShapeDescriptor.sequence()
    return ShapeDescriptor.wrapped()
