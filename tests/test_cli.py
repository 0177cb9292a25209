"""Tests for the typer CLI with the LLM client mocked out."""

from unittest.mock import AsyncMock, patch

import pytest
import yaml
from typer.testing import CliRunner

from linguacheck.cli import app

runner = CliRunner()


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    config = {
        "cache": {"db_path": str(tmp_path / "cache.db")},
        "usage": {"db_path": str(tmp_path / "usage.db")},
    }
    (tmp_path / "config.yaml").write_text(yaml.safe_dump(config), encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def llm_cls():
    with patch("linguacheck.cli.LLMClient") as mock_cls:
        mock_cls.return_value.generate_json = AsyncMock()
        yield mock_cls


def test_check_prints_correction(workdir, llm_cls):
    llm_cls.return_value.generate_json.return_value = {
        "correctedContent": "The cat sat.",
        "suggestions": [{"word": "Teh", "suggestions": ["The"]}],
    }

    result = runner.invoke(app, ["check", "--text", "Teh cat sat."])

    assert result.exit_code == 0, result.output
    assert "The cat sat." in result.output
    assert "Suggestions" in result.output


def test_check_failure_shows_notice(workdir, llm_cls):
    llm_cls.return_value.generate_json.side_effect = ValueError("No valid JSON found")

    result = runner.invoke(app, ["check", "--text", "Teh cat sat."])

    assert result.exit_code == 0
    assert "Check failed" in result.output


def test_check_requires_input(workdir, llm_cls):
    result = runner.invoke(app, ["check"])
    assert result.exit_code == 1


def test_suggest_lists_alternatives(workdir, llm_cls):
    llm_cls.return_value.generate_json.return_value = {"suggestions": ["First idea.", "Second idea."]}

    result = runner.invoke(app, ["suggest", "--text", "sell cats", "--tone", "persuasive"])

    assert result.exit_code == 0, result.output
    assert "First idea." in result.output
    assert "Suggestion 2" in result.output


def test_document_writes_corrected_output(workdir, llm_cls):
    source = workdir / "essay.txt"
    source.write_text("Teh first.\n\nTeh second.", encoding="utf-8")
    llm_cls.return_value.generate_json.return_value = {"correctedContent": "Fixed.", "suggestions": []}
    out = workdir / "out" / "essay_corrected.txt"

    result = runner.invoke(app, ["document", str(source), "--output", str(out)])

    assert result.exit_code == 0, result.output
    assert out.read_text(encoding="utf-8") == "Fixed.\n\nFixed.\n"
    assert llm_cls.return_value.generate_json.await_count == 2


def test_document_missing_file(workdir, llm_cls):
    result = runner.invoke(app, ["document", str(workdir / "nope.txt")])
    assert result.exit_code == 1


def test_usage_and_cache_clear(workdir, llm_cls):
    llm_cls.return_value.generate_json.return_value = {"correctedContent": "Fine.", "suggestions": []}
    runner.invoke(app, ["check", "--text", "Fine."])

    usage = runner.invoke(app, ["usage"])
    cleared = runner.invoke(app, ["cache-clear"])

    assert usage.exit_code == 0
    assert "Checks: 1" in usage.output
    assert "Removed 1 cached results." in cleared.output
