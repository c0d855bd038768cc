"""
Star model for catalog records.

Represents a single star with its distance from Earth and the
constellation it belongs to.
"""

from pydantic import BaseModel, ConfigDict, Field


class Star(BaseModel):
    """
    A single star record.

    Attributes:
        name: Star name (e.g., "Sirius"), may be empty
        distance: Distance from Earth in light-years
        constellation: Constellation name, empty for the Sun
    """

    # Records are read-only once built
    model_config = ConfigDict(frozen=True)

    # Fields are strict: numeric strings and booleans are rejected,
    # integers are accepted as distances
    name: str = Field(
        ...,
        description="Star name",
        strict=True,
    )

    distance: float = Field(
        ...,
        description="Distance from Earth in light-years (ly)",
        strict=True,
        ge=0,
        allow_inf_nan=False,
    )

    constellation: str = Field(
        ...,
        description="Constellation the star belongs to",
        strict=True,
    )

    def __str__(self) -> str:
        """String representation."""
        if self.constellation:
            return f"{self.name} ({self.constellation}): {self.distance:.2f} ly"
        return f"{self.name}: {self.distance:.2f} ly"
