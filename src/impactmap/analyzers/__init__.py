"""Import graph construction and change impact analysis."""

from .path_resolver import PathResolver
from .import_graph_builder import ImportGraphBuilder, ImportGraph
from .impact_propagator import ImpactPropagator, ChangeImpact, compute_impact
from .key_file_ranker import KeyFileRanker, rank_key_files
from .dependency_tracker import DependencyTracker, GraphSummary
from .impact_analyzer import ImpactAnalyzer, ImpactAnalysisResult, AnalysisProgress

__all__ = [
    "PathResolver",
    "ImportGraphBuilder", "ImportGraph",
    "ImpactPropagator", "ChangeImpact", "compute_impact",
    "KeyFileRanker", "rank_key_files",
    "DependencyTracker", "GraphSummary",
    "ImpactAnalyzer", "ImpactAnalysisResult", "AnalysisProgress",
]
