"""House domain models and enums."""

from enum import StrEnum

from pydantic import BaseModel, Field, field_validator


class HouseStatus(StrEnum):
    """Whether a house is in service."""

    ACTIVE = "active"
    ARCHIVED = "archived"


class Address(BaseModel):
    """Street address of a house."""

    street: str = Field(default="", description="Street and number")
    city: str = Field(default="", description="City")
    state: str = Field(default="", description="State or region code")
    zip: str = Field(default="", description="Postal code")


class GeoPoint(BaseModel):
    """Map coordinates of a house."""

    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)


def normalize_tags(v: list[str] | str) -> list[str]:
    """Split comma-separated tags, trim them and drop empty ones."""
    raw = v.split(",") if isinstance(v, str) else v
    return [tag.strip() for tag in raw if tag and tag.strip()]


class House(BaseModel):
    """House data transfer object."""

    id: str = Field(..., description="Unique house ID")
    created: str = Field(..., description="Creation timestamp (ISO format)")
    updated: str = Field(..., description="Last update timestamp (ISO format)")
    name: str = Field(..., description="House name (e.g., 'Oakwood Residence')")
    address: Address = Field(default_factory=Address)
    geo: GeoPoint | None = Field(default=None, description="Optional map coordinates")
    capacity: int = Field(default=0, ge=0, description="Number of residents the house can hold")
    status: HouseStatus = Field(default=HouseStatus.ACTIVE)
    tags: list[str] = Field(default_factory=list, description="Free-form labels (e.g., 'Sober Living')")

    @field_validator("tags", mode="before")
    @classmethod
    def validate_tags(cls, v: list[str] | str) -> list[str]:
        """Normalize tags."""
        return normalize_tags(v)
