"""Match service for running the provider-matching pipeline on directory exports.

This service handles:
- Loading a service request and a candidate pool from JSON files
- Building the engine configuration (optionally with custom weights)
- Ranking candidates and attaching ingest warnings to each result
"""

import json
import logging
from datetime import datetime
from pathlib import Path

from smartmatch.config import DEFAULT_MAX_RESULTS
from smartmatch.directory.ingest import load_providers_from_file, load_request_from_file
from smartmatch.matching.engine import SmartMatchingEngine
from smartmatch.matching.weights import merge_weights
from smartmatch.schemas.config import MatchingConfig
from smartmatch.schemas.match import MatchingResult
from smartmatch.utils import MatchingConfigurationError

logger = logging.getLogger(__name__)


def load_weights_from_file(file_path: Path) -> dict[str, float]:
    """Load a (possibly partial) weighting policy from a JSON object.

    Missing dimensions keep their default weight.

    Raises:
        MatchingConfigurationError: If the file does not hold a JSON object
            or the merged weights are invalid.
    """
    with open(file_path, encoding="utf-8") as f:
        overrides = json.load(f)

    if not isinstance(overrides, dict):
        raise MatchingConfigurationError(f"Weights file {file_path} must hold a JSON object")

    return merge_weights(overrides)


def build_config(
    weights: dict[str, float] | None = None,
    top_n: int = DEFAULT_MAX_RESULTS,
    min_score: float = 0.0,
    require_skill_match: bool = False,
) -> MatchingConfig:
    """Build a MatchingConfig, keeping default weights when none are given."""
    options = {
        "max_results": top_n,
        "min_score": min_score,
        "require_skill_match": require_skill_match,
    }
    if weights is not None:
        options["weights"] = weights
    return MatchingConfig(**options)


def match_from_files(
    request_path: Path,
    providers_path: Path,
    reference_time: datetime,
    top_n: int = DEFAULT_MAX_RESULTS,
    weights_path: Path | None = None,
    min_score: float = 0.0,
    require_skill_match: bool = False,
) -> list[MatchingResult]:
    """Rank the providers in one file against the request in another.

    The configuration is validated before any file with candidates is read,
    so a bad policy never costs a load.

    Args:
        request_path: JSON file with one service request.
        providers_path: JSON file with a list of provider records.
        reference_time: Time used as "now" for availability.
        top_n: Number of results to return.
        weights_path: Optional JSON file with weight overrides.
        min_score: Drop results scoring below this.
        require_skill_match: Drop providers with no matching skill.

    Returns:
        Ranked MatchingResult objects; ingest warnings are prepended to
        each result's diagnostics.
    """
    weights = load_weights_from_file(weights_path) if weights_path else None
    config = build_config(weights, top_n, min_score, require_skill_match)
    engine = SmartMatchingEngine(config)

    logger.info(f"Loading request from {request_path}")
    request = load_request_from_file(request_path)

    providers, ingest_warnings = load_providers_from_file(providers_path)
    if ingest_warnings:
        logger.info(f"{len(ingest_warnings)} provider records had unusable fields")

    logger.info(f"Ranking {len(providers)} providers for {request.category}/{request.subcategory}")
    results = engine.match(request, providers, reference_time)

    return [
        result.model_copy(
            update={"diagnostics": ingest_warnings.get(result.provider.id, []) + result.diagnostics}
        )
        if result.provider.id in ingest_warnings
        else result
        for result in results
    ]
