"""Tests for the typer CLI."""

from __future__ import annotations

import json
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from talent_scout.cli import app
from talent_scout.config import AppConfig, SourcingConfig
from talent_scout.errors import ServiceError
from talent_scout.pipeline.wizard import build_controller

runner = CliRunner()


@pytest.fixture
def jd_file(tmp_path, sample_jd_text):
    path = tmp_path / "jd.txt"
    path.write_text(sample_jd_text, encoding="utf-8")
    return path


@pytest.fixture
def wired(mock_llm_client, sample_persona_json, sample_candidates_json):
    """Patch the CLI to use a real controller over the mocked client."""
    mock_llm_client.generate_json.side_effect = [
        sample_persona_json,
        {"candidates": sample_candidates_json},
    ]
    controller = build_controller(AppConfig(sourcing=SourcingConfig(delay_seconds=0)), mock_llm_client)
    with patch("talent_scout.cli.build_controller", return_value=controller):
        yield mock_llm_client


def test_persona_json(wired, jd_file, sample_persona_json):
    result = runner.invoke(app, ["persona", "--jd", str(jd_file), "--json"])

    assert result.exit_code == 0, result.output
    payload = json.loads(result.output[result.output.index("{"):])
    assert payload == sample_persona_json
    assert wired.generate_json.await_count == 1


def test_persona_panel(wired, jd_file):
    result = runner.invoke(app, ["persona", "--jd", str(jd_file)])
    assert result.exit_code == 0, result.output
    assert "Backend Engineer" in result.output
    assert "Kubernetes" in result.output


def test_search_url(wired, jd_file):
    result = runner.invoke(app, ["search-url", "--jd", str(jd_file)])
    assert result.exit_code == 0, result.output
    assert result.output.strip().splitlines()[-1].endswith(
        "?keywords=Backend+Engineer+%28%22Go%22+OR+%22Kubernetes%22%29"
    )


def test_source_json_with_shortlist(wired, jd_file):
    result = runner.invoke(
        app, ["source", "--jd", str(jd_file), "--json", "--no-delay", "--shortlist-top", "1"]
    )

    assert result.exit_code == 0, result.output
    payload = json.loads(result.output[result.output.index("["):])
    assert [c["id"] for c in payload] == ["1", "2", "3"]
    assert payload[1]["linkedInUrl"].endswith("Platform+Engineer+Kubernetes+Berlin%2C+Germany")
    assert wired.generate_json.await_count == 2
    # one asyncio.run per stage, each closing its client
    assert wired.aclose.await_count == 2


def test_source_table(wired, jd_file):
    result = runner.invoke(app, ["source", "--jd", str(jd_file), "--shortlist-top", "1"])

    assert result.exit_code == 0, result.output
    assert "A. Test" in result.output
    assert "* A. Test:" in result.output
    assert "LLM calls" in result.output


def test_missing_file_exits_1(tmp_path):
    result = runner.invoke(app, ["persona", "--jd", str(tmp_path / "nope.txt")])
    assert result.exit_code == 1
    assert "not found" in result.output


def test_extraction_failure_exits_1(mock_llm_client, jd_file):
    mock_llm_client.generate_json.side_effect = ServiceError("quota exceeded")
    controller = build_controller(AppConfig(), mock_llm_client)
    with patch("talent_scout.cli.build_controller", return_value=controller):
        result = runner.invoke(app, ["persona", "--jd", str(jd_file)])

    assert result.exit_code == 1
    assert "Failed to analyze" in result.output


def test_sourcing_failure_exits_1(mock_llm_client, jd_file, sample_persona_json):
    mock_llm_client.generate_json.side_effect = [sample_persona_json, ServiceError("boom")]
    controller = build_controller(AppConfig(), mock_llm_client)
    with patch("talent_scout.cli.build_controller", return_value=controller):
        result = runner.invoke(app, ["source", "--jd", str(jd_file), "--no-delay", "--json"])

    assert result.exit_code == 1
    assert "Failed to search candidates" in result.output
