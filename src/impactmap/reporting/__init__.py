"""Report rendering for impact analysis results."""

from .markdown_report import EMPTY_MARKER, format_path_list, render_impact_report, render_impact_section

__all__ = ["EMPTY_MARKER", "format_path_list", "render_impact_report", "render_impact_section"]
