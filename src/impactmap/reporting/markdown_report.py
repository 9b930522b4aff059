"""Markdown rendering of change impact records (IMPACT.md)."""

from typing import List, Sequence

from ..analyzers.impact_propagator import ChangeImpact
from ..core.config import MAX_RENDERED_ITEMS


EMPTY_MARKER = "- _None_"


def format_path_list(items: Sequence[str], limit: int = MAX_RENDERED_ITEMS) -> List[str]:
    """Render paths as bullet lines, truncated to ``limit`` with a remainder marker."""
    if not items:
        return [EMPTY_MARKER]

    lines = [f"- `{item}`" for item in items[:limit]]
    if len(items) > limit:
        lines.append(f"- ... and {len(items) - limit} more")
    return lines


def render_impact_section(impact: ChangeImpact, limit: int = MAX_RENDERED_ITEMS) -> List[str]:
    """Render one impact record. Every list section is present even when empty."""
    lines = [f"## `{impact.file}`", ""]

    sections = (
        ("Imports", impact.imports),
        ("Imported by", impact.imported_by),
        ("Potentially affected files", impact.affected_files),
        ("Tests to run", impact.affected_tests),
        ("Related documentation", impact.affected_docs),
    )
    for title, items in sections:
        lines.append(f"**{title}:**")
        lines.extend(format_path_list(items, limit))
        lines.append("")

    lines.append("---")
    lines.append("")
    return lines


def render_impact_report(impacts: Sequence[ChangeImpact], project_name: str,
                         limit: int = MAX_RENDERED_ITEMS) -> str:
    """Generate the change impact document for a project."""
    lines = [
        "# Change Impact Analysis",
        "",
        f"Impact analysis for **{project_name}**.",
        "",
        "This document shows how changes to key files would affect other parts of the codebase.",
        "",
    ]

    if not impacts:
        lines.append("_No files were selected for impact analysis._")
        lines.append("")

    for impact in impacts:
        lines.extend(render_impact_section(impact, limit))

    return "\n".join(lines)
