"""Shared utilities for smartmatch."""

import math


class MatchingConfigurationError(Exception):
    """Raised when the matching configuration is invalid.

    Covers the weighting policy, result limits and scoring parameters.
    Raised before any candidate is scored.
    """

    pass


def is_number(value) -> bool:
    """Check that a value is a finite real number (bools excluded)."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def clamp01(value: float) -> float:
    """Clamp a score into [0, 1]. Non-finite values collapse to 0."""
    if not is_number(value):
        return 0.0
    return min(1.0, max(0.0, float(value)))


def shrink_toward_prior(score: float, prior: float, samples: int, min_samples: int) -> float:
    """Pull a score toward a neutral prior when it rests on too few samples.

    Args:
        score: Raw score in [0, 1].
        prior: Neutral value used when there are no samples at all.
        samples: Number of observations behind the score.
        min_samples: Sample size at which the score is trusted as-is.

    Returns:
        Score blended with the prior proportionally to the sample deficit.
    """
    if min_samples <= 0 or samples >= min_samples:
        return score
    trust = max(0, samples) / min_samples
    return prior + (score - prior) * trust


def normalize_name(value: str | None) -> str:
    """Normalize category/location names for comparison."""
    if not value:
        return ""
    text = value.casefold().replace("-", " ").replace("_", " ")
    return " ".join(text.split())
