"""Human-readable match reasons derived from computed sub-scores."""

from smartmatch.matching.weights import DIMENSIONS
from smartmatch.schemas.config import ReasonPolicy
from smartmatch.schemas.match import SubScores


def label_for(dimension: str, sub_score: float, policy: ReasonPolicy) -> str | None:
    """Return the first label whose threshold the sub-score reaches, if any."""
    for rule in policy.labels.get(dimension, []):
        if sub_score >= rule.min_score:
            return rule.label
    return None


def generate_reasons(
    sub_scores: SubScores,
    contributions: dict[str, float],
    overall_score: float,
    policy: ReasonPolicy | None = None,
) -> list[str]:
    """Explain a score by the dimensions that contributed most to it.

    Only dimensions contributing at least policy.share_threshold of the
    overall score are considered. They are ranked by contribution and
    mapped to labels; dimensions with no applicable label are skipped.

    Args:
        sub_scores: Per-dimension scores (0-1).
        contributions: weight x sub-score per dimension.
        overall_score: Sum of contributions.
        policy: Threshold, limit and label table (defaults if None).

    Returns:
        Up to policy.max_reasons labels, strongest first.
    """
    if policy is None:
        policy = ReasonPolicy()
    if overall_score <= 0 or policy.max_reasons <= 0:
        return []

    cutoff = policy.share_threshold * overall_score
    dominant = [
        d for d in DIMENSIONS
        if contributions.get(d, 0.0) > 0 and contributions.get(d, 0.0) >= cutoff
    ]
    dominant.sort(key=lambda d: (-contributions[d], DIMENSIONS.index(d)))

    reasons = []
    for dimension in dominant:
        label = label_for(dimension, getattr(sub_scores, dimension), policy)
        if label is not None and label not in reasons:
            reasons.append(label)
        if len(reasons) == policy.max_reasons:
            break
    return reasons
