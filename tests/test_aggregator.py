"""Tests for weighted score aggregation."""

import pytest

from smartmatch.matching.aggregator import compute_contributions, compute_overall_score
from smartmatch.matching.weights import DEFAULT_WEIGHTS
from tests.test_utils import make_sub_scores


class TestComputeContributions:
    def test_weight_times_sub_score(self):
        sub_scores = make_sub_scores(skills=0.5, rating=0.0)

        result = compute_contributions(sub_scores, DEFAULT_WEIGHTS)

        assert result["skills"] == pytest.approx(0.14)
        assert result["rating"] == 0.0
        assert result["distance"] == pytest.approx(0.16)

    def test_all_dimensions_present(self):
        result = compute_contributions(make_sub_scores(), DEFAULT_WEIGHTS)

        assert set(result) == set(DEFAULT_WEIGHTS)


class TestComputeOverallScore:
    def test_perfect_scores_return_1(self):
        contributions = compute_contributions(make_sub_scores(), DEFAULT_WEIGHTS)

        assert compute_overall_score(contributions) == pytest.approx(1.0)
        assert compute_overall_score(contributions) <= 1.0

    def test_zero_scores_return_0(self):
        sub_scores = make_sub_scores(
            distance=0.0,
            skills=0.0,
            rating=0.0,
            availability=0.0,
            response_time=0.0,
            verification=0.0,
            completion_rate=0.0,
        )
        contributions = compute_contributions(sub_scores, DEFAULT_WEIGHTS)

        assert compute_overall_score(contributions) == 0.0

    def test_weak_dimension_does_not_zero_total(self):
        contributions = compute_contributions(make_sub_scores(skills=0.0), DEFAULT_WEIGHTS)

        assert compute_overall_score(contributions) == pytest.approx(0.72)
