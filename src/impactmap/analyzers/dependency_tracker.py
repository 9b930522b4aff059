"""Dependency Tracker - Graph-wide statistics and dependency chains over the import graph."""

from collections import deque
from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

import networkx as nx

from .import_graph_builder import ImportGraph


@dataclass(frozen=True)
class GraphSummary:
    """Summary statistics of an import graph."""
    total_files: int
    importing_files: int
    total_imports: int
    most_imported: List[Tuple[str, int]] = field(default_factory=list)
    most_importing: List[Tuple[str, int]] = field(default_factory=list)
    import_cycles: List[List[str]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'total_files': self.total_files,
            'importing_files': self.importing_files,
            'total_imports': self.total_imports,
            'most_imported': [{'file': f, 'count': c} for f, c in self.most_imported],
            'most_importing': [{'file': f, 'count': c} for f, c in self.most_importing],
            'import_cycles': [list(group) for group in self.import_cycles],
        }


class DependencyTracker:
    """Analyzes dependency structure on top of an ImportGraph."""

    def __init__(self, top_n: int = 10):
        self.top_n = top_n

    def summarize(self, graph: ImportGraph) -> GraphSummary:
        """Get summary statistics of the import graph."""
        digraph = graph.to_networkx()

        in_degrees = dict(digraph.in_degree())
        out_degrees = dict(digraph.out_degree())

        return GraphSummary(
            total_files=len(graph),
            importing_files=sum(1 for degree in out_degrees.values() if degree),
            total_imports=digraph.number_of_edges(),
            most_imported=self._top(in_degrees),
            most_importing=self._top(out_degrees),
            import_cycles=self._cycle_groups(digraph),
        )

    def _top(self, degrees: Dict[str, int]) -> List[Tuple[str, int]]:
        """Files with the highest non-zero degree, ties in path order."""
        ranked = sorted(((path, count) for path, count in degrees.items() if count),
                        key=lambda item: (-item[1], item[0]))
        return ranked[:self.top_n]

    def _cycle_groups(self, digraph: nx.DiGraph) -> List[List[str]]:
        """Groups of files that import each other, directly or through others."""
        groups = [sorted(component) for component in nx.strongly_connected_components(digraph)
                  if len(component) > 1]
        return sorted(groups, key=lambda group: (-len(group), group[0]))

    def dependency_path(self, graph: ImportGraph, dependent: str, dependency: str) -> List[str]:
        """Shortest import chain from ``dependent`` down to ``dependency``, empty if none."""
        if dependent not in graph or dependency not in graph or dependent == dependency:
            return []

        try:
            return nx.shortest_path(graph.to_networkx(), dependent, dependency)
        except nx.NetworkXNoPath:
            return []

    def file_dependencies(self, graph: ImportGraph, path: str, depth: int = 3) -> Dict[str, List[str]]:
        """Get the direct and indirect dependencies of a file."""
        if path not in graph:
            return {'direct': [], 'indirect': [], 'all': []}

        direct = graph.imports(path)

        # Breadth-first beyond the direct imports, bounded by depth
        indirect = []
        visited = set(direct + [path])
        queue = deque(direct)

        current_depth = 1
        while queue and current_depth < depth:
            level_size = len(queue)
            current_depth += 1

            for _ in range(level_size):
                current = queue.popleft()
                for dependency in graph.imports(current):
                    if dependency not in visited:
                        visited.add(dependency)
                        indirect.append(dependency)
                        queue.append(dependency)

        return {
            'direct': direct,
            'indirect': indirect,
            'all': direct + indirect,
        }
