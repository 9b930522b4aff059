"""impactmap - Change impact analysis over repository import graphs."""

from .core import AnalysisConfiguration, FileContentLoader, MappingContentLoader, RepoFile, scan_repository
from .parsers import ImportExtractor, Language
from .analyzers import (
    PathResolver, ImportGraphBuilder, ImportGraph, ImpactPropagator, ChangeImpact, compute_impact,
    KeyFileRanker, rank_key_files, DependencyTracker, GraphSummary, ImpactAnalyzer, ImpactAnalysisResult
)
from .reporting import render_impact_report

__version__ = "0.1.0"

__all__ = [
    "AnalysisConfiguration", "FileContentLoader", "MappingContentLoader", "RepoFile", "scan_repository",
    "ImportExtractor", "Language",
    "PathResolver", "ImportGraphBuilder", "ImportGraph", "ImpactPropagator", "ChangeImpact", "compute_impact",
    "KeyFileRanker", "rank_key_files", "DependencyTracker", "GraphSummary",
    "ImpactAnalyzer", "ImpactAnalysisResult",
    "render_impact_report",
]
