"""Import Graph Builder - Builds file dependency graphs from import statements."""

import logging
import os
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple

import networkx as nx

from ..core.config import AnalysisConfiguration
from ..core.scanner import RepoFile
from ..parsers.import_extractor import ImportExtractor
from ..parsers.languages import detect_language
from .path_resolver import PathResolver

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImportGraph:
    """File-level import graph over interned path indices.

    ``forward[i]`` lists the indices of files that ``paths[i]`` imports and
    ``reverse[i]`` the indices of files importing it. ``reverse`` is always
    derived from ``forward``; build graphs with ``from_forward_edges``.
    """
    paths: Tuple[str, ...]
    forward: Tuple[Tuple[int, ...], ...]
    reverse: Tuple[Tuple[int, ...], ...]
    _index: Dict[str, int] = field(default_factory=dict, init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, '_index', {path: i for i, path in enumerate(self.paths)})

    @classmethod
    def from_forward_edges(cls, paths: Sequence[str],
                           forward: Sequence[Sequence[int]]) -> 'ImportGraph':
        """Create a graph from forward adjacency lists, deriving the reverse lists in one pass."""
        if len(forward) != len(paths):
            raise ValueError("forward edges must cover every path")

        cleaned: List[Tuple[int, ...]] = []
        reverse: List[List[int]] = [[] for _ in paths]

        for source, targets in enumerate(forward):
            seen = set()
            kept = []
            for target in targets:
                # Drop self edges and duplicates, keep first-seen order
                if target == source or target in seen:
                    continue
                seen.add(target)
                kept.append(target)
                reverse[target].append(source)
            cleaned.append(tuple(kept))

        return cls(
            paths=tuple(paths),
            forward=tuple(cleaned),
            reverse=tuple(tuple(sources) for sources in reverse),
        )

    @classmethod
    def empty(cls) -> 'ImportGraph':
        return cls(paths=(), forward=(), reverse=())

    def __contains__(self, path: object) -> bool:
        return path in self._index

    def __len__(self) -> int:
        return len(self.paths)

    def index_of(self, path: str) -> Optional[int]:
        return self._index.get(path)

    def imports(self, path: str) -> List[str]:
        """Files directly imported by ``path``."""
        index = self._index.get(path)
        if index is None:
            return []
        return [self.paths[target] for target in self.forward[index]]

    def imported_by(self, path: str) -> List[str]:
        """Files directly importing ``path``."""
        index = self._index.get(path)
        if index is None:
            return []
        return [self.paths[source] for source in self.reverse[index]]

    def imports_map(self) -> Dict[str, List[str]]:
        return {path: self.imports(path) for path in self.paths}

    def imported_by_map(self) -> Dict[str, List[str]]:
        return {path: self.imported_by(path) for path in self.paths}

    def edges(self) -> Iterator[Tuple[str, str]]:
        """Yield ``(importer, imported)`` pairs."""
        for source, targets in enumerate(self.forward):
            for target in targets:
                yield self.paths[source], self.paths[target]

    @property
    def edge_count(self) -> int:
        return sum(len(targets) for targets in self.forward)

    def to_networkx(self) -> nx.DiGraph:
        """Directed graph with an edge from each importer to the file it imports."""
        graph = nx.DiGraph()
        graph.add_nodes_from(self.paths)
        graph.add_edges_from(self.edges())
        return graph


class ImportGraphBuilder:
    """Builds import graphs from a repository file listing and a content lookup."""

    def __init__(self, config: Optional[AnalysisConfiguration] = None,
                 extractor: Optional[ImportExtractor] = None):
        self.config = config or AnalysisConfiguration()
        self.extractor = extractor or ImportExtractor()
        self.max_workers = self.config.max_workers or os.cpu_count() or 4

    def build_graph(self, files: Sequence[RepoFile], content_lookup: Any) -> ImportGraph:
        """Build the import graph for every non-directory file in ``files``.

        ``content_lookup`` is anything with a ``get(path)`` method returning
        the file text or ``None``; a plain dict works.
        """
        # Every non-directory file is a node, in listing order
        paths: List[str] = []
        index: Dict[str, int] = {}
        sources: List[RepoFile] = []
        for file in files:
            if file.is_directory or file.path in index:
                continue
            index[file.path] = len(paths)
            paths.append(file.path)
            if self._is_source_file(file):
                sources.append(file)

        resolver = PathResolver(paths)

        edges_by_source: Dict[int, List[int]] = {}

        if sources:
            with ThreadPoolExecutor(max_workers=min(self.max_workers, len(sources))) as executor:
                try:
                    future_to_file = {
                        executor.submit(self._collect_edges, file, content_lookup, resolver): file
                        for file in sources
                    }

                    for future in as_completed(future_to_file):
                        file = future_to_file[future]
                        try:
                            targets = future.result()
                        except Exception as e:
                            logger.warning("Skipping imports of %s: %s", file.path, e)
                            continue
                        edges_by_source[index[file.path]] = [index[target] for target in targets]
                except KeyboardInterrupt:
                    executor.shutdown(wait=False, cancel_futures=True)
                    raise

        # Single sequential merge, independent of completion order
        forward = [edges_by_source.get(i, []) for i in range(len(paths))]
        graph = ImportGraph.from_forward_edges(paths, forward)

        logger.debug("Built import graph: %d files, %d edges from %d source files",
                     len(graph), graph.edge_count, len(sources))
        return graph

    def _is_source_file(self, file: RepoFile) -> bool:
        """Check whether a listing entry is parsed for imports."""
        return (
            not file.is_directory
            and detect_language(file.path) is not None
            and file.size <= self.config.max_file_size
        )

    def _collect_edges(self, file: RepoFile, content_lookup: Any,
                       resolver: PathResolver) -> List[str]:
        """Extract and resolve the imports of one file."""
        try:
            content = content_lookup.get(file.path)
        except (OSError, UnicodeDecodeError, ValueError) as e:
            logger.debug("Cannot load %s: %s", file.path, e)
            return []

        if content is None:
            logger.debug("No content available for %s", file.path)
            return []

        targets = []
        for specifier in self.extractor.extract_for_path(file.path, content):
            target = resolver.resolve(specifier, file.path)
            if target is not None:
                targets.append(target)

        return targets
