"""Injectable configuration for the matching engine.

Every threshold, prior and label used while scoring lives here so operators
can tune ranking without touching extractor code.
"""

from pydantic import BaseModel, ConfigDict, Field

from smartmatch.config import (
    CUTOFF_RADIUS_KM,
    DEFAULT_MAX_RESULTS,
    DEFAULT_MIN_SCORE,
    EXPERIENCE_CAP_YEARS,
    FULL_CREDIT_RADIUS_KM,
    IMMEDIATE_WINDOW_HOURS,
    MAX_REASONS,
    MIN_COMPLETED_JOBS,
    MIN_REVIEWS,
    NEUTRAL_PRIOR,
    REASON_SHARE_THRESHOLD,
    RESPONSE_HALF_LIFE_MINUTES,
    RESPONSE_STEEPNESS,
    SKILL_MATCH_THRESHOLD,
    THIS_WEEK_DAYS,
    TOP_RATED_BONUS,
)
from smartmatch.matching.weights import (
    AVAILABILITY,
    COMPLETION_RATE,
    DEFAULT_WEIGHTS,
    DISTANCE,
    RATING,
    RESPONSE_TIME,
    SKILLS,
    VERIFICATION,
)
from smartmatch.schemas.provider import VerificationLevel


class ScoringParameters(BaseModel):
    """Constants used by the feature extractors."""

    model_config = ConfigDict(frozen=True)

    # Distance
    full_credit_radius_km: float = FULL_CREDIT_RADIUS_KM
    cutoff_radius_km: float = CUTOFF_RADIUS_KM
    same_city_score: float = 1.0
    same_governorate_score: float = 0.5
    other_location_score: float = 0.0

    # Skills
    skill_match_threshold: int = SKILL_MATCH_THRESHOLD
    skill_base_score: float = 0.6
    skill_verified_bonus: float = 0.2
    skill_experience_bonus: float = 0.2
    experience_cap_years: float = EXPERIENCE_CAP_YEARS

    # Rating
    min_reviews: int = MIN_REVIEWS
    rating_prior: float = NEUTRAL_PRIOR

    # Availability
    availability_unknown_score: float = 0.5
    no_overlap_score: float = 0.25
    immediate_window_hours: float = IMMEDIATE_WINDOW_HOURS
    this_week_days: int = THIS_WEEK_DAYS

    # Response time
    response_half_life_minutes: float = RESPONSE_HALF_LIFE_MINUTES
    response_steepness: float = RESPONSE_STEEPNESS
    response_unknown_score: float = 0.5

    # Verification
    verification_scores: dict[VerificationLevel, float] = Field(
        default_factory=lambda: {
            VerificationLevel.NONE: 0.0,
            VerificationLevel.BASIC: 0.4,
            VerificationLevel.SKILL_VERIFIED: 0.7,
            VerificationLevel.FULLY_APPROVED: 1.0,
        }
    )
    top_rated_bonus: float = TOP_RATED_BONUS

    # Completion rate
    min_completed_jobs: int = MIN_COMPLETED_JOBS
    completion_prior: float = NEUTRAL_PRIOR


class ReasonLabel(BaseModel):
    """A label shown when a dimension's sub-score reaches min_score."""

    model_config = ConfigDict(frozen=True)

    min_score: float = Field(ge=0.0, le=1.0)
    label: str


def _default_labels() -> dict[str, list[ReasonLabel]]:
    return {
        SKILLS: [
            ReasonLabel(min_score=0.8, label="مطابقة ممتازة للمهارات"),
            ReasonLabel(min_score=0.6, label="متخصص في هذا النوع من الخدمات"),
        ],
        RATING: [
            ReasonLabel(min_score=0.9, label="تقييم عالي جداً"),
            ReasonLabel(min_score=0.8, label="تقييم عالي"),
        ],
        AVAILABILITY: [ReasonLabel(min_score=1.0, label="متاح الآن")],
        DISTANCE: [ReasonLabel(min_score=0.8, label="قريب من موقعك")],
        RESPONSE_TIME: [ReasonLabel(min_score=0.8, label="استجابة سريعة")],
        VERIFICATION: [ReasonLabel(min_score=0.7, label="محقق ومصدق عليه")],
        COMPLETION_RATE: [ReasonLabel(min_score=0.9, label="معدل إنجاز عالي")],
    }


class ReasonPolicy(BaseModel):
    """How match reasons are selected and worded."""

    model_config = ConfigDict(frozen=True)

    share_threshold: float = Field(
        default=REASON_SHARE_THRESHOLD,
        description="Minimum share of the overall score a dimension must contribute"
    )
    max_reasons: int = Field(default=MAX_REASONS, description="Maximum reasons per result")
    labels: dict[str, list[ReasonLabel]] = Field(
        default_factory=_default_labels,
        description="Per-dimension labels, checked in order"
    )


class MatchingConfig(BaseModel):
    """Everything a caller can tune about one matching engine."""

    model_config = ConfigDict(frozen=True)

    weights: dict[str, float] = Field(
        default_factory=lambda: dict(DEFAULT_WEIGHTS),
        description="Weight per dimension; must sum to 1.0"
    )
    max_results: int = Field(
        default=DEFAULT_MAX_RESULTS,
        description="Number of results to return"
    )
    min_score: float = Field(
        default=DEFAULT_MIN_SCORE,
        description="Drop results scoring below this (0 keeps everything)"
    )
    require_skill_match: bool = Field(
        default=False,
        description="Drop providers with no skill matching the request"
    )
    scoring: ScoringParameters = Field(default_factory=ScoringParameters)
    reasons: ReasonPolicy = Field(default_factory=ReasonPolicy)
