"""Tests for the markdown impact report."""

from impactmap.analyzers import ChangeImpact
from impactmap.reporting import EMPTY_MARKER, format_path_list, render_impact_report, render_impact_section


SECTION_TITLES = [
    "**Imports:**",
    "**Imported by:**",
    "**Potentially affected files:**",
    "**Tests to run:**",
    "**Related documentation:**",
]


def test_long_lists_are_truncated():
    imports = tuple(f"src/dep{i:02d}.ts" for i in range(20))
    lines = format_path_list(imports)

    assert len(lines) == 11
    assert lines[0] == "- `src/dep00.ts`"
    assert lines[9] == "- `src/dep09.ts`"
    assert lines[10] == "- ... and 10 more"


def test_short_lists_are_not_truncated():
    lines = format_path_list(["a.ts", "b.ts"])

    assert lines == ["- `a.ts`", "- `b.ts`"]


def test_empty_list_renders_marker():
    assert format_path_list([]) == [EMPTY_MARKER]


def test_section_renders_every_list():
    impact = ChangeImpact(file="src/a.ts", imports=tuple(f"src/dep{i}.ts" for i in range(20)))

    text = "\n".join(render_impact_section(impact))

    assert text.startswith("## `src/a.ts`")
    for title in SECTION_TITLES:
        assert title in text
    assert text.count("- `src/dep") == 10
    assert "- ... and 10 more" in text
    # Imported by, affected files, tests and docs are all empty
    assert text.count(EMPTY_MARKER) == 4
    assert text.rstrip().endswith("---")


def test_report_header_and_sections():
    impacts = [
        ChangeImpact(file="src/index.ts", imports=("src/app.ts",), affected_docs=("README.md",)),
        ChangeImpact(file="src/app.ts", imported_by=("src/index.ts",), affected_files=("src/index.ts",)),
    ]

    report = render_impact_report(impacts, "sample")

    assert report.startswith("# Change Impact Analysis\n")
    assert "Impact analysis for **sample**." in report
    assert report.index("## `src/index.ts`") < report.index("## `src/app.ts`")
    assert "- `README.md`" in report
    for title in SECTION_TITLES:
        assert report.count(title) == 2


def test_report_without_impacts():
    report = render_impact_report([], "empty")

    assert "# Change Impact Analysis" in report
    assert "_No files were selected for impact analysis._" in report
    assert "## `" not in report


def test_custom_limit():
    impact = ChangeImpact(file="a.ts", affected_files=("b.ts", "c.ts", "d.ts"))

    text = "\n".join(render_impact_section(impact, limit=1))

    assert "- `b.ts`" in text
    assert "- `c.ts`" not in text
    assert "- ... and 2 more" in text
