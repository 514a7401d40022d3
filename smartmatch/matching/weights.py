"""Weighting policy for combining per-dimension scores."""

import math
from collections.abc import Mapping

from smartmatch.config import WEIGHT_TOLERANCE
from smartmatch.utils import MatchingConfigurationError, is_number

DISTANCE = "distance"
SKILLS = "skills"
RATING = "rating"
AVAILABILITY = "availability"
RESPONSE_TIME = "response_time"
VERIFICATION = "verification"
COMPLETION_RATE = "completion_rate"

# Order used for reports and for breaking ties between equal contributions
DIMENSIONS: tuple[str, ...] = (
    SKILLS,
    RATING,
    DISTANCE,
    AVAILABILITY,
    VERIFICATION,
    COMPLETION_RATE,
    RESPONSE_TIME,
)

DEFAULT_WEIGHTS: dict[str, float] = {
    SKILLS: 0.28,
    RATING: 0.18,
    DISTANCE: 0.16,
    AVAILABILITY: 0.14,
    VERIFICATION: 0.12,
    COMPLETION_RATE: 0.08,
    RESPONSE_TIME: 0.04,
}


def validate_weights(
    weights: Mapping[str, float],
    tolerance: float = WEIGHT_TOLERANCE,
) -> dict[str, float]:
    """Check a weighting policy and return it as a plain dict in dimension order.

    Args:
        weights: Mapping of every dimension name to its weight.
        tolerance: Allowed deviation of the weight sum from 1.0.

    Returns:
        Validated weights keyed in DIMENSIONS order.

    Raises:
        MatchingConfigurationError: If a dimension is unknown or missing, a
            weight is negative or not a number, or the weights do not sum
            to 1.0 within tolerance.
    """
    unknown = sorted(set(weights) - set(DIMENSIONS))
    if unknown:
        raise MatchingConfigurationError(f"Unknown weight dimensions: {', '.join(unknown)}")

    missing = [d for d in DIMENSIONS if d not in weights]
    if missing:
        raise MatchingConfigurationError(f"Missing weight dimensions: {', '.join(missing)}")

    validated = {}
    for dimension in DIMENSIONS:
        weight = weights[dimension]
        if not is_number(weight):
            raise MatchingConfigurationError(
                f"Weight for '{dimension}' must be a finite number, got {weight!r}"
            )
        if weight < 0:
            raise MatchingConfigurationError(
                f"Weight for '{dimension}' must not be negative, got {weight}"
            )
        validated[dimension] = float(weight)

    total = math.fsum(validated.values())
    if abs(total - 1.0) > tolerance:
        raise MatchingConfigurationError(
            f"Weights must sum to 1.0 (got {total:.6f})"
        )
    return validated


def merge_weights(overrides: Mapping[str, float] | None = None) -> dict[str, float]:
    """Overlay a partial weighting policy onto the defaults and validate it.

    Example: ``merge_weights({"skills": 0.38, "rating": 0.08})`` moves
    weight from rating to skills while keeping the rest of the defaults.
    """
    merged = dict(DEFAULT_WEIGHTS)
    if overrides:
        merged.update(overrides)
    return validate_weights(merged)


def normalize_weights(weights: Mapping[str, float]) -> dict[str, float]:
    """Rescale non-negative weights so they sum to 1.0.

    Dimensions absent from the mapping get weight 0. The engine never calls
    this implicitly; callers opt in when they supply relative importances.

    Raises:
        MatchingConfigurationError: If a weight is negative or all are zero.
    """
    raw = {d: weights.get(d, 0.0) for d in DIMENSIONS}
    unknown = sorted(set(weights) - set(DIMENSIONS))
    if unknown:
        raise MatchingConfigurationError(f"Unknown weight dimensions: {', '.join(unknown)}")
    for dimension, weight in raw.items():
        if not is_number(weight) or weight < 0:
            raise MatchingConfigurationError(
                f"Weight for '{dimension}' must be a non-negative number, got {weight!r}"
            )

    total = math.fsum(raw.values())
    if total <= 0:
        raise MatchingConfigurationError("At least one weight must be positive")
    return {d: w / total for d, w in raw.items()}
