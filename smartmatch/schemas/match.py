from pydantic import BaseModel, Field

from smartmatch.schemas.provider import Provider


class SubScores(BaseModel):
    """Per-dimension scores behind an overall match score, each in [0, 1]."""

    distance: float = Field(ge=0.0, le=1.0, description="Proximity to the request")
    skills: float = Field(ge=0.0, le=1.0, description="Fit of the provider's skills")
    rating: float = Field(ge=0.0, le=1.0, description="Review rating, sample-adjusted")
    availability: float = Field(ge=0.0, le=1.0, description="Availability for the urgency window")
    response_time: float = Field(ge=0.0, le=1.0, description="Responsiveness")
    verification: float = Field(ge=0.0, le=1.0, description="Verification level")
    completion_rate: float = Field(ge=0.0, le=1.0, description="Completion rate, sample-adjusted")


class MatchingResult(BaseModel):
    """Result of matching one provider to a service request."""

    provider: Provider = Field(
        description="The scored provider"
    )
    score: float = Field(
        ge=0.0,
        le=1.0,
        description="Weighted overall score used for ranking (0-1)"
    )
    reasons: list[str] = Field(
        default_factory=list,
        description="Up to 3 human-readable reasons explaining the score"
    )
    sub_scores: SubScores = Field(
        description="Raw per-dimension scores"
    )
    contributions: dict[str, float] = Field(
        default_factory=dict,
        description="weight x sub-score for each dimension"
    )
    diagnostics: list[str] = Field(
        default_factory=list,
        description="Field-level data quality warnings for this provider"
    )
