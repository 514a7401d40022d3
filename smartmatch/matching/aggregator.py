"""Weighted combination of per-dimension scores."""

import math

from smartmatch.matching.weights import DIMENSIONS
from smartmatch.schemas.match import SubScores
from smartmatch.utils import clamp01


def compute_contributions(sub_scores: SubScores, weights: dict[str, float]) -> dict[str, float]:
    """Compute weight x sub-score for each dimension.

    Args:
        sub_scores: Per-dimension scores (0-1).
        weights: Validated weighting policy.

    Returns:
        Dict of dimension -> contribution, in DIMENSIONS order.
    """
    return {d: weights[d] * getattr(sub_scores, d) for d in DIMENSIONS}


def compute_overall_score(contributions: dict[str, float]) -> float:
    """Sum contributions into one score, clamped to [0, 1] against float drift."""
    return clamp01(math.fsum(contributions.values()))
