"""Provider matching engine.

Scores every candidate provider against a service request on seven
dimensions, combines them with the weighting policy, explains each score
and returns a deterministic ranking. The engine is a pure computation: it
reads no clock, performs no I/O and never mutates its inputs.
"""

import logging
from collections.abc import Sequence
from datetime import datetime

from smartmatch.explainer.reasons import generate_reasons
from smartmatch.matching.aggregator import compute_contributions, compute_overall_score
from smartmatch.matching.features import (
    availability_score,
    completion_rate_score,
    data_warnings,
    distance_score,
    rating_score,
    response_time_score,
    skills_score,
    verification_score,
)
from smartmatch.matching.ranker import rank_results
from smartmatch.matching.weights import (
    AVAILABILITY,
    COMPLETION_RATE,
    DISTANCE,
    RATING,
    RESPONSE_TIME,
    SKILLS,
    VERIFICATION,
    validate_weights,
)
from smartmatch.schemas.config import MatchingConfig, ReasonPolicy, ScoringParameters
from smartmatch.schemas.match import MatchingResult, SubScores
from smartmatch.schemas.provider import Provider
from smartmatch.schemas.request import ServiceRequest
from smartmatch.utils import MatchingConfigurationError, clamp01

logger = logging.getLogger(__name__)

EXTRACTORS = (
    (DISTANCE, distance_score),
    (SKILLS, skills_score),
    (RATING, rating_score),
    (AVAILABILITY, availability_score),
    (RESPONSE_TIME, response_time_score),
    (VERIFICATION, verification_score),
    (COMPLETION_RATE, completion_rate_score),
)


def _check_scoring_parameters(params: ScoringParameters) -> None:
    if params.full_credit_radius_km < 0:
        raise MatchingConfigurationError("full_credit_radius_km must be >= 0")
    if params.cutoff_radius_km <= params.full_credit_radius_km:
        raise MatchingConfigurationError(
            "cutoff_radius_km must be greater than full_credit_radius_km"
        )
    if not 0 <= params.skill_match_threshold <= 100:
        raise MatchingConfigurationError("skill_match_threshold must be between 0 and 100")
    if params.experience_cap_years < 0:
        raise MatchingConfigurationError("experience_cap_years must be >= 0")
    if params.min_reviews < 0 or params.min_completed_jobs < 0:
        raise MatchingConfigurationError("minimum sample sizes must be >= 0")
    if params.immediate_window_hours <= 0 or params.this_week_days <= 0:
        raise MatchingConfigurationError("availability horizons must be positive")
    if params.response_half_life_minutes <= 0 or params.response_steepness <= 0:
        raise MatchingConfigurationError(
            "response_half_life_minutes and response_steepness must be positive"
        )
    for name in ("rating_prior", "completion_prior", "availability_unknown_score",
                 "no_overlap_score", "response_unknown_score"):
        if not 0.0 <= getattr(params, name) <= 1.0:
            raise MatchingConfigurationError(f"{name} must be between 0 and 1")


def _check_reason_policy(policy: ReasonPolicy) -> None:
    if not 0.0 <= policy.share_threshold <= 1.0:
        raise MatchingConfigurationError("reason share_threshold must be between 0 and 1")
    if policy.max_reasons < 0:
        raise MatchingConfigurationError("max_reasons must be >= 0")


class SmartMatchingEngine:
    """Ranks candidate providers for a service request.

    The configuration is validated once, at construction, so a bad policy
    fails before any candidate is scored.

    Args:
        config: Weights, limits, scoring parameters and reason labels
            (defaults if None).

    Raises:
        MatchingConfigurationError: If the configuration is invalid.
    """

    def __init__(self, config: MatchingConfig | None = None):
        self.config = config or MatchingConfig()
        self.weights = validate_weights(self.config.weights)

        if self.config.max_results < 0:
            raise MatchingConfigurationError(
                f"max_results must be >= 0, got {self.config.max_results}"
            )
        if not 0.0 <= self.config.min_score <= 1.0:
            raise MatchingConfigurationError("min_score must be between 0 and 1")
        _check_scoring_parameters(self.config.scoring)
        _check_reason_policy(self.config.reasons)

    def score(
        self,
        request: ServiceRequest,
        provider: Provider,
        reference_time: datetime,
    ) -> MatchingResult:
        """Score a single provider against the request.

        An extractor that fails on malformed data contributes 0 for its
        dimension and leaves a diagnostic; it never aborts scoring.
        """
        diagnostics = data_warnings(provider)
        values = {}
        for dimension, extractor in EXTRACTORS:
            try:
                values[dimension] = clamp01(
                    extractor(request, provider, reference_time, self.config.scoring)
                )
            except (TypeError, ValueError, ArithmeticError) as e:
                logger.warning(f"Could not score {dimension} for provider {provider.id}: {e}")
                diagnostics.append(f"{dimension}: could not be scored ({e})")
                values[dimension] = 0.0

        sub_scores = SubScores(**values)
        contributions = compute_contributions(sub_scores, self.weights)
        overall = compute_overall_score(contributions)
        reasons = generate_reasons(sub_scores, contributions, overall, self.config.reasons)

        return MatchingResult(
            provider=provider,
            score=overall,
            reasons=reasons,
            sub_scores=sub_scores,
            contributions=contributions,
            diagnostics=diagnostics,
        )

    def match(
        self,
        request: ServiceRequest,
        candidates: Sequence[Provider],
        reference_time: datetime,
        max_results: int | None = None,
    ) -> list[MatchingResult]:
        """Score and rank candidate providers for a request.

        Args:
            request: The service request to match.
            candidates: Candidate providers from the directory service.
            reference_time: "Now" for availability windows; never read from a clock.
            max_results: Overrides config.max_results when given.

        Returns:
            Results ordered best first, at most max_results long.

        Raises:
            MatchingConfigurationError: If max_results is negative or
                reference_time is not a datetime.
        """
        if max_results is None:
            max_results = self.config.max_results
        if max_results < 0:
            raise MatchingConfigurationError(f"max_results must be >= 0, got {max_results}")
        if not isinstance(reference_time, datetime):
            raise MatchingConfigurationError("reference_time must be a datetime")

        if not candidates or max_results == 0:
            return []

        results = []
        for provider in candidates:
            result = self.score(request, provider, reference_time)
            if self.config.require_skill_match and result.sub_scores.skills == 0.0:
                continue
            if result.score < self.config.min_score:
                continue
            results.append(result)

        ranked = rank_results(results, max_results)
        logger.debug(
            f"Ranked {len(results)} of {len(candidates)} candidates, "
            f"returning {len(ranked)}"
        )
        return ranked


def match(
    request: ServiceRequest,
    candidates: Sequence[Provider],
    config: MatchingConfig | None = None,
    *,
    reference_time: datetime,
    max_results: int | None = None,
) -> list[MatchingResult]:
    """One-shot form of SmartMatchingEngine(config).match(...)."""
    engine = SmartMatchingEngine(config)
    return engine.match(request, candidates, reference_time, max_results=max_results)
