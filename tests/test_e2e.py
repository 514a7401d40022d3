"""End-to-end tests for SmartMatch.

Tests the complete flows including:
- File-based matching pipeline (JSON -> ingest -> score -> rank)
- CLI commands (rank, weights)
- Configuration errors surfaced to the operator
"""

import json

import pytest
from typer.testing import CliRunner

from smartmatch.main import app
from smartmatch.services.match_service import (
    build_config,
    load_weights_from_file,
    match_from_files,
)
from smartmatch.utils import MatchingConfigurationError
from tests.test_utils import REFERENCE_TIME

runner = CliRunner()


class TestMatchService:
    def test_match_from_files(self, input_files):
        results = match_from_files(
            request_path=input_files["request"],
            providers_path=input_files["providers"],
            reference_time=REFERENCE_TIME,
        )

        assert [r.provider.id for r in results][0] == "prov-a"
        assert len(results) == 3

    def test_ingest_warnings_attached(self, input_files):
        results = match_from_files(
            request_path=input_files["request"],
            providers_path=input_files["providers"],
            reference_time=REFERENCE_TIME,
        )
        by_id = {r.provider.id: r for r in results}

        assert by_id["prov-c"].diagnostics[0].startswith("rating")
        assert by_id["prov-a"].diagnostics == []

    def test_top_n_and_skill_filter(self, input_files):
        results = match_from_files(
            request_path=input_files["request"],
            providers_path=input_files["providers"],
            reference_time=REFERENCE_TIME,
            top_n=5,
            require_skill_match=True,
        )

        assert "prov-b" not in {r.provider.id for r in results}

    def test_weight_overrides(self, tmp_path):
        path = tmp_path / "weights.json"
        path.write_text(json.dumps({"skills": 0.38, "rating": 0.08}), encoding="utf-8")

        weights = load_weights_from_file(path)

        assert weights["skills"] == 0.38
        assert build_config(weights).weights == weights

    def test_invalid_weight_file(self, tmp_path):
        path = tmp_path / "weights.json"
        path.write_text(json.dumps([0.5, 0.5]), encoding="utf-8")

        with pytest.raises(MatchingConfigurationError):
            load_weights_from_file(path)


class TestCLIRank:
    def test_json_output(self, input_files):
        result = runner.invoke(
            app,
            [
                "rank",
                "--request", str(input_files["request"]),
                "--providers", str(input_files["providers"]),
                "--at", "2026-03-02T10:00:00",
                "--json",
            ],
        )

        assert result.exit_code == 0
        output = json.loads(result.stdout)
        assert output[0]["provider"]["id"] == "prov-a"
        assert set(output[0]["sub_scores"]) == {
            "distance",
            "skills",
            "rating",
            "availability",
            "response_time",
            "verification",
            "completion_rate",
        }

    def test_top_n(self, input_files):
        result = runner.invoke(
            app,
            [
                "rank",
                "-r", str(input_files["request"]),
                "-p", str(input_files["providers"]),
                "-n", "1",
                "--json",
            ],
        )

        assert result.exit_code == 0
        assert len(json.loads(result.stdout)) == 1

    def test_pretty_output(self, input_files):
        result = runner.invoke(
            app,
            ["rank", "-r", str(input_files["request"]), "-p", str(input_files["providers"])],
        )

        assert result.exit_code == 0
        assert "Ahmed Hassan" in result.stdout

    def test_missing_file(self, input_files, tmp_path):
        result = runner.invoke(
            app,
            ["rank", "-r", str(tmp_path / "missing.json"), "-p", str(input_files["providers"])],
        )

        assert result.exit_code == 1

    def test_invalid_weights_exit_code(self, input_files, tmp_path):
        weights = tmp_path / "weights.json"
        weights.write_text(json.dumps({"skills": 0.5}), encoding="utf-8")

        result = runner.invoke(
            app,
            [
                "rank",
                "-r", str(input_files["request"]),
                "-p", str(input_files["providers"]),
                "-w", str(weights),
            ],
        )

        assert result.exit_code == 1
        assert "Configuration error" in result.stdout

    def test_negative_top_n_exit_code(self, input_files):
        result = runner.invoke(
            app,
            [
                "rank",
                "-r", str(input_files["request"]),
                "-p", str(input_files["providers"]),
                "-n", "-1",
            ],
        )

        assert result.exit_code == 1


class TestCLIWeights:
    def test_lists_dimensions(self):
        result = runner.invoke(app, ["weights"])

        assert result.exit_code == 0
        assert "Skills" in result.stdout
        assert "0.28" in result.stdout
