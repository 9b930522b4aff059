"""Tests for the end-to-end impact analysis."""

import json

from impactmap.analyzers import ImpactAnalyzer
from impactmap.core import AnalysisConfiguration, FileContentLoader, MappingContentLoader, scan_repository


def test_analyze_defaults_to_key_files(sample_files, sample_contents):
    result = ImpactAnalyzer().analyze(sample_files, MappingContentLoader(sample_contents))

    assert result.key_files[:2] == ["src/index.ts", "src/app.ts"]
    assert [impact.file for impact in result.impacts] == result.key_files
    assert result.summary.total_imports == 6


def test_analyze_explicit_targets_keep_order(sample_files, sample_contents):
    targets = ["src/utils/logger.ts", "src/missing.ts", "src/config.ts"]

    result = ImpactAnalyzer(AnalysisConfiguration(max_workers=3)).analyze(
        sample_files, MappingContentLoader(sample_contents), targets)

    assert [impact.file for impact in result.impacts] == targets
    assert result.impacts[0].affected_docs == ("docs/architecture.md",)
    assert result.impacts[1].is_empty
    assert "src/index.ts" in result.impacts[2].affected_files


def test_analyze_scanned_repository(sample_repo):
    files = scan_repository(sample_repo)

    result = ImpactAnalyzer().analyze(files, FileContentLoader(sample_repo), ["src/utils/logger.ts"])

    impact = result.impacts[0]
    assert impact.imported_by == ("src/app.ts", "src/index.ts")
    assert impact.affected_files == ("src/app.ts", "src/index.ts", "test/app.test.ts")
    assert impact.affected_tests == ("test/app.test.ts",)
    assert impact.affected_docs == ("docs/architecture.md",)


def test_performance_metrics(sample_files, sample_contents):
    analyzer = ImpactAnalyzer()
    result = analyzer.analyze(sample_files, sample_contents)

    for key in ("import_graph_building_time", "key_file_ranking_time", "impact_propagation_time",
                "graph_summary_time", "total_analysis_time"):
        assert result.performance_metrics[key] >= 0
    assert analyzer.progress.completed_phases == [
        "import_graph_building", "key_file_ranking", "impact_propagation", "graph_summary",
    ]


def test_result_is_json_serializable(sample_files, sample_contents):
    result = ImpactAnalyzer().analyze(sample_files, sample_contents, ["src/config.ts"])

    data = json.loads(json.dumps(result.to_dict()))

    assert data["impacts"][0]["file"] == "src/config.ts"
    assert data["impacts"][0]["affectedTests"] == ["test/app.test.ts"]
    assert data["summary"]["total_files"] == 8


def test_analyze_empty_listing():
    result = ImpactAnalyzer().analyze([], {})

    assert result.key_files == []
    assert result.impacts == []
    assert len(result.graph) == 0
