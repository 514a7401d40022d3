from datetime import datetime, time
from enum import Enum, IntEnum

from pydantic import BaseModel, ConfigDict, Field

from smartmatch.schemas.request import Location


class VerificationLevel(str, Enum):
    """How far a provider got through the marketplace verification workflow."""

    NONE = "none"
    BASIC = "basic"
    SKILL_VERIFIED = "skill-verified"
    FULLY_APPROVED = "fully-approved"

    @classmethod
    def _missing_(cls, value):
        """Accept the short names used by the marketplace API."""
        if isinstance(value, str):
            value_lower = value.strip().lower().replace("_", "-").replace(" ", "-")
            aliases = {
                "": cls.NONE,
                "unverified": cls.NONE,
                "verified": cls.BASIC,
                "skill": cls.SKILL_VERIFIED,
                "approved": cls.FULLY_APPROVED,
                "full": cls.FULLY_APPROVED,
            }
            if value_lower in aliases:
                return aliases[value_lower]
            for member in cls:
                if member.value == value_lower:
                    return member
        return None


class Weekday(IntEnum):
    """Days of the week, numbered like datetime.weekday().

    Use _missing_ for case-insensitive parsing of full and short day names.
    """

    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6

    @classmethod
    def _missing_(cls, value):
        """Allow 'monday', 'Mon', 'MON' style lookups."""
        if isinstance(value, str):
            value_lower = value.strip().lower()
            for member in cls:
                name = member.name.lower()
                if value_lower == name or value_lower == name[:3]:
                    return member
        return None


class SkillEntry(BaseModel):
    """A single service the provider offers."""

    model_config = ConfigDict(frozen=True)

    category: str = Field(description="Service category")
    subcategory: str = Field(default="", description="Service subcategory")
    verified: bool = Field(default=False, description="Whether the skill was verified")
    years_of_experience: float = Field(
        default=0.0,
        ge=0,
        description="Years of experience in this skill"
    )


class PricingRange(BaseModel):
    """Price range the provider usually charges."""

    model_config = ConfigDict(frozen=True)

    min: float | None = Field(default=None, ge=0, description="Lowest price")
    max: float | None = Field(default=None, ge=0, description="Highest price")


class Availability(BaseModel):
    """Provider availability: a current flag plus a weekly schedule."""

    model_config = ConfigDict(frozen=True)

    is_available: bool = Field(description="Whether the provider accepts work right now")
    available_days: frozenset[Weekday] = Field(
        default_factory=frozenset,
        description="Weekdays the provider works; empty means no schedule on file"
    )
    start_time: time | None = Field(default=None, description="Daily start of work")
    end_time: time | None = Field(default=None, description="Daily end of work")


class Provider(BaseModel):
    """A supply-side candidate supplied by the directory service.

    Optional fields are None when the directory has no (usable) value; the
    extractors score those with neutral or zero defaults.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Unique provider identifier")
    display_name: str = Field(default="", description="Name shown to seekers")
    rating: float | None = Field(
        default=None,
        ge=0.0,
        le=5.0,
        description="Average rating (0-5)"
    )
    review_count: int = Field(default=0, ge=0, description="Number of reviews")
    completed_jobs: int = Field(default=0, ge=0, description="Number of completed jobs")
    verification_level: VerificationLevel = Field(
        default=VerificationLevel.NONE,
        description="none, basic, skill-verified or fully-approved"
    )
    is_top_rated: bool = Field(default=False, description="Top-rated badge")
    average_response_minutes: float | None = Field(
        default=None,
        ge=0.0,
        description="Average time to answer a request, in minutes"
    )
    skills: tuple[SkillEntry, ...] = Field(default=(), description="Offered skills")
    location: Location | None = Field(default=None, description="Provider location")
    pricing: PricingRange | None = Field(default=None, description="Usual price range")
    availability: Availability | None = Field(default=None, description="Availability data")
    completion_rate: float | None = Field(
        default=None,
        ge=0.0,
        le=100.0,
        description="Percentage of accepted jobs finished without cancellation or dispute"
    )
    last_active: datetime | None = Field(default=None, description="Last activity timestamp")
