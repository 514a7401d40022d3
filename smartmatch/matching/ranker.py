"""Deterministic ranking of scored providers."""

from smartmatch.schemas.match import MatchingResult
from smartmatch.utils import MatchingConfigurationError, is_number


def ranking_key(result: MatchingResult) -> tuple[float, float, int, str]:
    """Sort key giving a strict total order over results.

    Descending score, then descending rating (missing counts as 0), then
    descending completed jobs, then ascending provider id.
    """
    provider = result.provider
    rating = provider.rating if is_number(provider.rating) else 0.0
    return (-result.score, -rating, -provider.completed_jobs, provider.id)


def rank_results(
    results: list[MatchingResult],
    max_results: int | None = None,
) -> list[MatchingResult]:
    """Sort results by ranking_key and keep the top max_results.

    Args:
        results: Scored results, in any order.
        max_results: Maximum number of results to return (None for all).

    Returns:
        New list of results, best first.

    Raises:
        MatchingConfigurationError: If max_results is negative.
    """
    if max_results is not None and max_results < 0:
        raise MatchingConfigurationError(
            f"max_results must be >= 0, got {max_results}"
        )

    ranked = sorted(results, key=ranking_key)

    if max_results is not None:
        ranked = ranked[:max_results]

    return ranked
