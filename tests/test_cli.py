"""Tests for the command line interface."""

import json

import pytest
from click.testing import CliRunner

from fundingos.cli import cli


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def write_json(tmp_path):
    def write(name, data):
        path = tmp_path / name
        path.write_text(json.dumps(data))
        return str(path)
    return write


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv("FUNDINGOS_CONFIG", raising=False)
    monkeypatch.delenv("FUNDINGOS_INTENT_WINDOW_SECONDS", raising=False)
    monkeypatch.delenv("FUNDINGOS_FOLLOW_UP_MAX_LENGTH", raising=False)


class TestScoreCommand:
    """Test `fundingos score`."""

    def test_json_output(self, runner, write_json, ai_grant, ai_project, nonprofit):
        result = runner.invoke(cli, [
            "score",
            write_json("opp.json", ai_grant),
            write_json("project.json", ai_project),
            "--profile", write_json("org.json", nonprofit),
        ])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["overallScore"] == 100
        assert data["eligible"] is True

    def test_text_output(self, runner, write_json, ai_grant, ai_project):
        result = runner.invoke(cli, [
            "score", write_json("opp.json", ai_grant), write_json("project.json", ai_project), "-f", "text",
        ])
        assert result.exit_code == 0
        assert "match (" in result.output
        assert "Confidence:" in result.output

    def test_invalid_input_exits_1(self, runner, write_json):
        """Both records missing should exit 1 with the error code."""
        result = runner.invoke(cli, ["score", write_json("opp.json", None), write_json("project.json", None)])
        assert result.exit_code == 1
        assert "invalid_input" in result.output

    def test_bad_json(self, runner, tmp_path, write_json):
        bad = tmp_path / "bad.json"
        bad.write_text("{not json")
        result = runner.invoke(cli, ["score", str(bad), write_json("project.json", {})])
        assert result.exit_code != 0
        assert "cannot read JSON" in result.output

    def test_stdin(self, runner, write_json, ai_grant, ai_project):
        result = runner.invoke(
            cli, ["score", "-", write_json("project.json", ai_project)], input=json.dumps(ai_grant),
        )
        assert result.exit_code == 0
        assert json.loads(result.output)["overallScore"] >= 70


class TestRankCommand:
    """Test `fundingos rank`."""

    def test_json(self, runner, write_json, ai_grant, housing_grant, ai_project, nonprofit):
        result = runner.invoke(cli, [
            "rank",
            write_json("opps.json", [housing_grant, ai_grant]),
            write_json("project.json", ai_project),
            "--profile", write_json("org.json", nonprofit),
            "-q",
        ])
        assert result.exit_code == 0
        matches = json.loads(result.output)
        assert [m["opportunity_id"] for m in matches] == ["opp-ai", "opp-housing"]

    def test_wrapped_list_and_min_score(self, runner, write_json, ai_grant, housing_grant, ai_project, nonprofit):
        result = runner.invoke(cli, [
            "rank",
            write_json("opps.json", {"opportunities": [housing_grant, ai_grant]}),
            write_json("project.json", ai_project),
            "--profile", write_json("org.json", nonprofit),
            "--min-score", "50",
            "-q",
        ])
        assert result.exit_code == 0
        assert len(json.loads(result.output)) == 1

    def test_csv(self, runner, write_json, ai_grant, ai_project):
        result = runner.invoke(cli, [
            "rank", write_json("opps.json", [ai_grant]), write_json("project.json", ai_project), "-f", "csv", "-q",
        ])
        assert result.exit_code == 0
        lines = result.output.strip().splitlines()
        assert lines[0].startswith("opportunity_id,opportunity_title,sponsor,fit_score")
        assert lines[1].startswith("opp-ai,AI Innovation Grant")

    def test_table(self, runner, write_json, ai_grant, ai_project):
        result = runner.invoke(cli, [
            "rank", write_json("opps.json", [ai_grant]), write_json("project.json", ai_project), "-f", "table",
        ])
        assert result.exit_code == 0

    def test_not_a_list(self, runner, write_json, ai_project):
        result = runner.invoke(cli, [
            "rank", write_json("opps.json", "nope"), write_json("project.json", ai_project),
        ])
        assert result.exit_code != 0


class TestAnalyzeCommand:
    """Test `fundingos analyze`."""

    def test_summary(self, runner, write_json, ai_grant, housing_grant, ai_project, housing_project, nonprofit):
        result = runner.invoke(cli, [
            "analyze",
            write_json("projects.json", [ai_project, housing_project]),
            write_json("opps.json", [ai_grant, housing_grant]),
            "--profile", write_json("org.json", nonprofit),
            "-q",
        ])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["summary"]["totalAnalyzed"] == 2
        assert data["summary"]["highMatches"] == 2


class TestIntentCommand:
    """Test `fundingos intent`."""

    def test_direct_intent(self, runner):
        result = runner.invoke(cli, ["intent", "what are the deadlines"])
        assert result.exit_code == 0
        assert result.output.strip() == "check_deadlines"

    def test_follow_up_with_history(self, runner, write_json, analysis_prompt):
        result = runner.invoke(cli, [
            "intent", "yes",
            "--history", write_json("history.json", [analysis_prompt]),
            "--now", "2026-10-19T12:00:00",
        ])
        assert result.exit_code == 0
        assert result.output.strip() == "analyze_opportunities"

    def test_window_from_config(self, runner, write_json, tmp_path, analysis_prompt):
        """A shorter configured window should expire the follow-up."""
        config = tmp_path / "fundingos.yaml"
        config.write_text("intent:\n  recency_window_seconds: 60\n")
        result = runner.invoke(cli, [
            "intent", "yes",
            "--history", write_json("history.json", {"messages": [analysis_prompt]}),
            "--now", "2026-10-19T12:00:00",
            "--config", str(config),
        ])
        assert result.exit_code == 0
        assert result.output.strip() == "none"


class TestCheckAndVersion:
    """Test `fundingos check` and `fundingos version`."""

    def test_check(self, runner):
        result = runner.invoke(cli, ["check"])
        assert result.exit_code == 0
        assert "✓ Config: valid" in result.output
        assert "Intent window: 600s" in result.output

    def test_check_invalid_config(self, runner, tmp_path):
        config = tmp_path / "bad.yaml"
        config.write_text("scoring:\n  ineligible_score_cap: 500\n")
        result = runner.invoke(cli, ["check", "--config", str(config)])
        assert result.exit_code == 1
        assert "✗ Config" in result.output

    def test_version(self, runner):
        result = runner.invoke(cli, ["version"])
        assert result.exit_code == 0
        assert result.output.strip() == "fundingos 1.0.0"

    def test_help_without_command(self, runner):
        result = runner.invoke(cli, [])
        assert result.exit_code == 0
        assert "score" in result.output
