"""Impact Analyzer - Orchestrates graph construction, key file ranking and impact computation."""

import logging
import os
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from ..core.config import AnalysisConfiguration
from ..core.scanner import RepoFile
from .dependency_tracker import DependencyTracker, GraphSummary
from .impact_propagator import ChangeImpact, ImpactPropagator
from .import_graph_builder import ImportGraph, ImportGraphBuilder
from .key_file_ranker import KeyFileRanker

logger = logging.getLogger(__name__)


@dataclass
class AnalysisProgress:
    """Tracks progress through analysis phases."""
    current_phase: str
    completed_phases: List[str]
    start_time: float
    phase_start_time: float
    phase_durations: Dict[str, float] = field(default_factory=dict)

    @property
    def elapsed_time(self) -> float:
        return time.time() - self.start_time


@dataclass(frozen=True)
class ImpactAnalysisResult:
    """Everything one analysis run produces."""
    graph: ImportGraph
    key_files: List[str]
    impacts: List[ChangeImpact]
    summary: GraphSummary
    performance_metrics: Dict[str, float]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'key_files': list(self.key_files),
            'impacts': [impact.to_dict() for impact in self.impacts],
            'summary': self.summary.to_dict(),
            'performance': dict(self.performance_metrics),
        }


class ImpactAnalyzer:
    """Main entry point of the change impact engine."""

    def __init__(self, configuration: Optional[AnalysisConfiguration] = None):
        self.config = configuration or AnalysisConfiguration()

        self.graph_builder = ImportGraphBuilder(self.config)
        self.key_file_ranker = KeyFileRanker(self.config.key_file_names, self.config.key_file_limit)
        self.dependency_tracker = DependencyTracker()

        self._progress: Optional[AnalysisProgress] = None

    def analyze(self, files: Sequence[RepoFile], content_lookup: Any,
                targets: Optional[Sequence[str]] = None) -> ImpactAnalysisResult:
        """Build the graph once and compute impacts for ``targets`` or the key files."""
        start_time = time.time()
        self._progress = AnalysisProgress(
            current_phase="import_graph_building",
            completed_phases=[],
            start_time=start_time,
            phase_start_time=start_time,
        )

        graph = self.graph_builder.build_graph(files, content_lookup)

        self._update_progress("key_file_ranking")
        key_files = self.key_file_ranker.rank(files)

        self._update_progress("impact_propagation")
        selected = list(targets) if targets else key_files
        impacts = self.compute_impacts(selected, graph, files, content_lookup)

        self._update_progress("graph_summary")
        summary = self.dependency_tracker.summarize(graph)

        self._update_progress("finalizing")
        logger.info("Analyzed %d targets over %d files in %.2fs",
                    len(impacts), len(graph), self._progress.elapsed_time)

        return ImpactAnalysisResult(
            graph=graph,
            key_files=key_files,
            impacts=impacts,
            summary=summary,
            performance_metrics=self._calculate_performance_metrics(),
        )

    def compute_impacts(self, targets: Sequence[str], graph: ImportGraph,
                        files: Sequence[RepoFile], content_lookup: Any) -> List[ChangeImpact]:
        """Compute impacts concurrently against the shared graph, keeping target order."""
        if not targets:
            return []

        propagator = ImpactPropagator(content_lookup, self.config)
        max_workers = min(self.config.max_workers or os.cpu_count() or 4, len(targets))

        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            return list(executor.map(
                lambda target: propagator.compute_impact(target, graph, files), targets))

    @property
    def progress(self) -> Optional[AnalysisProgress]:
        return self._progress

    def _update_progress(self, phase: str):
        """Close the current phase and start the next one."""
        now = time.time()
        progress = self._progress
        progress.phase_durations[progress.current_phase] = now - progress.phase_start_time
        progress.completed_phases.append(progress.current_phase)
        progress.current_phase = phase
        progress.phase_start_time = now

    def _calculate_performance_metrics(self) -> Dict[str, float]:
        metrics = {f"{phase}_time": duration
                   for phase, duration in self._progress.phase_durations.items()}
        metrics['total_analysis_time'] = self._progress.elapsed_time
        return metrics
