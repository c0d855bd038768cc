"""
Catalog model for the wrapped-sequence shape.
"""

from pydantic import BaseModel, ConfigDict, Field

from starcodec.models.star import Star


class StarCatalog(BaseModel):
    """
    An ordered list of stars held under a single field.

    The serialized wrapper key is chosen by the codec's shape descriptor,
    so the in-memory field name stays fixed.
    """

    model_config = ConfigDict(frozen=True)

    stars: list[Star] = Field(
        default_factory=list,
        description="Stars in catalog order",
    )

    def __len__(self) -> int:
        return len(self.stars)

    @property
    def names(self) -> list[str]:
        """Star names in catalog order."""
        return [star.name for star in self.stars]
