"""Tests for match reason generation."""

from smartmatch.explainer.reasons import generate_reasons, label_for
from smartmatch.matching.aggregator import compute_contributions, compute_overall_score
from smartmatch.matching.weights import DEFAULT_WEIGHTS
from smartmatch.schemas.config import ReasonLabel, ReasonPolicy
from tests.test_utils import make_sub_scores


def _reasons(sub_scores, policy=None):
    contributions = compute_contributions(sub_scores, DEFAULT_WEIGHTS)
    overall = compute_overall_score(contributions)
    return generate_reasons(sub_scores, contributions, overall, policy)


class TestLabelFor:
    def test_first_reached_threshold_wins(self):
        policy = ReasonPolicy()

        assert label_for("rating", 0.95, policy) == "تقييم عالي جداً"
        assert label_for("rating", 0.85, policy) == "تقييم عالي"

    def test_below_all_thresholds(self):
        assert label_for("rating", 0.5, ReasonPolicy()) is None

    def test_unknown_dimension(self):
        assert label_for("price", 1.0, ReasonPolicy()) is None


class TestGenerateReasons:
    def test_top_three_by_contribution(self):
        result = _reasons(make_sub_scores())

        # availability contributes 0.14 < 15% of 1.0 and is left out
        assert result == [
            "مطابقة ممتازة للمهارات",
            "تقييم عالي جداً",
            "قريب من موقعك",
        ]

    def test_zero_score_has_no_reasons(self):
        sub_scores = make_sub_scores(
            distance=0.0,
            skills=0.0,
            rating=0.0,
            availability=0.0,
            response_time=0.0,
            verification=0.0,
            completion_rate=0.0,
        )

        assert _reasons(sub_scores) == []

    def test_dimension_without_label_is_skipped(self):
        # skills dominates but 0.5 is below every skills label
        sub_scores = make_sub_scores(skills=0.5, distance=0.0, rating=0.0)

        result = _reasons(sub_scores)

        assert "مطابقة ممتازة للمهارات" not in result
        assert "متخصص في هذا النوع من الخدمات" not in result
        assert "متاح الآن" in result

    def test_weak_dimensions_below_share_are_ignored(self):
        # response_time alone is perfect but only weighs 4%
        sub_scores = make_sub_scores(skills=0.9, rating=0.9)

        assert "استجابة سريعة" not in _reasons(sub_scores)

    def test_max_reasons_respected(self):
        policy = ReasonPolicy(max_reasons=1)

        assert _reasons(make_sub_scores(), policy) == ["مطابقة ممتازة للمهارات"]

    def test_custom_labels(self):
        policy = ReasonPolicy(
            share_threshold=0.0,
            labels={"response_time": [ReasonLabel(min_score=0.8, label="Answers fast")]},
        )

        assert _reasons(make_sub_scores(), policy) == ["Answers fast"]
