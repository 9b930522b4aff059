"""Tests for the command-line interface."""

import json

import pytest
from click.testing import CliRunner

from impactmap.cli import cli


@pytest.fixture
def runner():
    return CliRunner()


def test_analyze_json(runner, sample_repo):
    result = runner.invoke(cli, ["analyze", str(sample_repo), "--format", "json", "-f", "src/config.ts"])

    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    impact = data["impacts"][0]
    assert impact["file"] == "src/config.ts"
    assert impact["importedBy"] == ["src/app.ts", "src/utils/logger.ts"]
    assert impact["affectedTests"] == ["test/app.test.ts"]


def test_analyze_markdown_to_file(runner, sample_repo, tmp_path):
    output = tmp_path / "IMPACT.md"

    result = runner.invoke(cli, [
        "analyze", str(sample_repo), "--format", "markdown", "-o", str(output), "--project-name", "sample",
    ])

    assert result.exit_code == 0, result.output
    report = output.read_text(encoding="utf-8")
    assert report.startswith("# Change Impact Analysis")
    assert "Impact analysis for **sample**." in report
    assert "## `src/index.ts`" in report
    assert "Report written to" in result.output


def test_analyze_absolute_target(runner, sample_repo):
    target = sample_repo / "src" / "utils" / "logger.ts"

    result = runner.invoke(cli, ["analyze", str(sample_repo), "--format", "json", "-f", str(target)])

    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout)["impacts"][0]["file"] == "src/utils/logger.ts"


def test_analyze_text(runner, sample_repo):
    result = runner.invoke(cli, ["analyze", str(sample_repo), "-f", "src/config.ts"])

    assert result.exit_code == 0, result.output
    assert "src/config.ts" in result.output


def test_analyze_missing_root(runner, tmp_path):
    result = runner.invoke(cli, ["analyze", str(tmp_path / "missing")])

    assert result.exit_code != 0


def test_key_files(runner, sample_repo):
    result = runner.invoke(cli, ["key-files", str(sample_repo), "--limit", "2"])

    assert result.exit_code == 0, result.output
    assert "src/index.ts" in result.output
    assert "src/app.ts" in result.output
    assert "src/config.ts" not in result.output


def test_graph_json(runner, sample_repo):
    result = runner.invoke(cli, ["graph", str(sample_repo), "--format", "json"])

    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    assert data["total_files"] == 8
    assert data["total_imports"] == 6


def test_explain(runner, sample_repo):
    result = runner.invoke(cli, ["explain", str(sample_repo), "test/app.test.ts", "src/config.ts"])

    assert result.exit_code == 0, result.output
    assert "test/app.test.ts" in result.output
    assert "src/app.ts" in result.output
    assert "src/config.ts" in result.output


def test_explain_without_chain(runner, sample_repo):
    result = runner.invoke(cli, ["explain", str(sample_repo), "src/config.ts", "src/index.ts"])

    assert result.exit_code == 0, result.output
    assert "does not depend on" in result.output


def test_analyze_target_relative_to_working_directory(runner, sample_repo, monkeypatch):
    monkeypatch.chdir(sample_repo / "src")

    result = runner.invoke(cli, ["analyze", str(sample_repo), "--format", "json", "-f", "utils/logger.ts"])

    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout)["impacts"][0]["file"] == "src/utils/logger.ts"


def test_analyze_target_relative_to_root_wins(runner, sample_repo, monkeypatch):
    # src/config.ts exists under the root and nowhere under the working directory
    monkeypatch.chdir(sample_repo / "test")

    result = runner.invoke(cli, ["analyze", str(sample_repo), "--format", "json", "-f", "src/config.ts"])

    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout)["impacts"][0]["file"] == "src/config.ts"
