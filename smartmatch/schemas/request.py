from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Urgency(str, Enum):
    """How soon the seeker needs the service.

    Use _missing_ for case-insensitive parsing and the marketplace's legacy
    spellings (asap, this_week).
    """

    IMMEDIATE = "immediate"
    THIS_WEEK = "this-week"
    FLEXIBLE = "flexible"

    @classmethod
    def _missing_(cls, value):
        """Accept aliases and mixed case from directory payloads."""
        if isinstance(value, str):
            value_lower = value.strip().lower().replace("_", "-").replace(" ", "-")
            aliases = {
                "asap": cls.IMMEDIATE,
                "urgent": cls.IMMEDIATE,
                "now": cls.IMMEDIATE,
                "week": cls.THIS_WEEK,
            }
            if value_lower in aliases:
                return aliases[value_lower]
            for member in cls:
                if member.value == value_lower:
                    return member
        return None


class Coordinates(BaseModel):
    """A point on the globe in decimal degrees."""

    model_config = ConfigDict(frozen=True)

    latitude: float = Field(ge=-90.0, le=90.0, description="Latitude in degrees")
    longitude: float = Field(ge=-180.0, le=180.0, description="Longitude in degrees")


class Location(BaseModel):
    """Administrative location with optional coordinates."""

    model_config = ConfigDict(frozen=True)

    governorate: str = Field(description="Governorate name (e.g., 'Cairo')")
    city: str = Field(default="", description="City or district name")
    coordinates: Coordinates | None = Field(
        default=None,
        description="Precise coordinates, when the directory has them"
    )


class BudgetRange(BaseModel):
    """Price range the seeker is willing to pay."""

    model_config = ConfigDict(frozen=True)

    min: float = Field(ge=0, description="Lower bound of the budget")
    max: float = Field(ge=0, description="Upper bound of the budget")

    @model_validator(mode="after")
    def _check_bounds(self):
        if self.max < self.min:
            raise ValueError("budget max must not be below budget min")
        return self


class ServiceRequest(BaseModel):
    """The demand side of a match: what the seeker needs, where and when."""

    model_config = ConfigDict(frozen=True)

    id: str | None = Field(default=None, description="Request identifier")
    category: str = Field(description="Service category (e.g., 'plumbing')")
    subcategory: str = Field(description="Service subcategory (e.g., 'leak-repair')")
    urgency: Urgency = Field(
        default=Urgency.FLEXIBLE,
        description="immediate, this-week or flexible"
    )
    location: Location = Field(description="Where the service is needed")
    description: str = Field(default="", description="Free-text description")
    budget: BudgetRange | None = Field(default=None, description="Optional budget range")
    created_at: datetime | None = Field(default=None, description="Creation timestamp")
    expires_at: datetime | None = Field(default=None, description="Expiry timestamp")
