"""Impact Propagator - Propagates a change to every file that transitively depends on it."""

import logging
import posixpath
import re
from collections import deque
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple

from ..core.config import AnalysisConfiguration
from ..core.scanner import RepoFile
from ..parsers.languages import file_extension
from .import_graph_builder import ImportGraph

logger = logging.getLogger(__name__)


# foo.test.ts, foo.spec.js
_DOTTED_TEST_NAME = re.compile(r'\.(?:test|spec)\.[^./]+$')
# test_foo.py, foo_test.py, foo_test.go
_AFFIXED_TEST_NAME = re.compile(r'^(?:test_[^/]+\.pyi?|[^/]+_test\.(?:pyi?|go))$')


@dataclass(frozen=True)
class ChangeImpact:
    """Report of what a change to ``file`` may affect."""
    file: str
    imports: Tuple[str, ...] = ()
    imported_by: Tuple[str, ...] = ()
    affected_files: Tuple[str, ...] = ()
    affected_tests: Tuple[str, ...] = ()
    affected_docs: Tuple[str, ...] = ()

    @classmethod
    def empty(cls, file: str) -> 'ChangeImpact':
        return cls(file=file)

    @property
    def is_empty(self) -> bool:
        return not (self.imports or self.imported_by or self.affected_files
                    or self.affected_tests or self.affected_docs)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'file': self.file,
            'imports': list(self.imports),
            'importedBy': list(self.imported_by),
            'affectedFiles': list(self.affected_files),
            'affectedTests': list(self.affected_tests),
            'affectedDocs': list(self.affected_docs),
        }


def _test_stem(path: str) -> str:
    """Name of the module a test file is about, with test affixes removed."""
    name = posixpath.basename(path)
    name = _DOTTED_TEST_NAME.sub('', name)
    stem = posixpath.splitext(name)[0]
    if stem.startswith('test_'):
        stem = stem[len('test_'):]
    if stem.endswith('_test'):
        stem = stem[:-len('_test')]
    return stem


class ImpactPropagator:
    """Computes change impact records against an import graph."""

    def __init__(self, content_lookup: Any = None, config: Optional[AnalysisConfiguration] = None):
        self.content_lookup = content_lookup
        self.config = config or AnalysisConfiguration()

    def compute_impact(self, file: str, graph: ImportGraph,
                       files: Sequence[RepoFile]) -> ChangeImpact:
        """Compute the impact of changing ``file``.

        Unknown files produce an empty record since callers routinely probe
        speculative paths.
        """
        if file not in graph:
            logger.debug("No graph node for %s, reporting empty impact", file)
            return ChangeImpact.empty(file)

        affected_files = self.affected_files(file, graph)

        return ChangeImpact(
            file=file,
            imports=tuple(graph.imports(file)),
            imported_by=tuple(graph.imported_by(file)),
            affected_files=tuple(affected_files),
            affected_tests=tuple(self._find_affected_tests(file, affected_files, files)),
            affected_docs=tuple(self._find_affected_docs(file, files)),
        )

    def affected_files(self, file: str, graph: ImportGraph) -> List[str]:
        """Transitive dependents of ``file`` in breadth-first discovery order."""
        start = graph.index_of(file)
        if start is None:
            return []

        # Seeding with the start node keeps it out of the result and stops cycles
        visited = {start}
        queue = deque([start])
        discovered: List[int] = []

        while queue:
            current = queue.popleft()
            for dependent in graph.reverse[current]:
                if dependent not in visited:
                    visited.add(dependent)
                    discovered.append(dependent)
                    queue.append(dependent)

        return [graph.paths[i] for i in discovered]

    def is_test_file(self, path: str) -> bool:
        """Check whether a path follows a recognized test location convention."""
        name = posixpath.basename(path)
        if _DOTTED_TEST_NAME.search(name) or _AFFIXED_TEST_NAME.match(name):
            return True
        directories = path.split('/')[:-1]
        return any(directory in self.config.test_directories for directory in directories)

    def is_documentation_file(self, path: str) -> bool:
        """Check whether a path is documentation that may reference source files."""
        extension = file_extension(path)
        parts = path.split('/')

        if len(parts) == 1:
            return (extension in self.config.root_doc_extensions
                    and path not in self.config.generated_documents)

        return (extension in self.config.doc_extensions
                and any(part in self.config.doc_directories for part in parts[:-1]))

    def _find_affected_tests(self, file: str, affected_files: List[str],
                             files: Sequence[RepoFile]) -> List[str]:
        """Tests among the dependents, or existing tests named after ``file`` if there are none."""
        tests = [path for path in affected_files if self.is_test_file(path)]
        if tests:
            return tests

        stem = posixpath.splitext(posixpath.basename(file))[0]
        return [
            f.path for f in files
            if not f.is_directory
            and f.path != file
            and self.is_test_file(f.path)
            and _test_stem(f.path) == stem
        ]

    def _find_affected_docs(self, file: str, files: Sequence[RepoFile]) -> List[str]:
        """Documentation files whose text mentions the path of ``file``."""
        if self.content_lookup is None:
            logger.debug("No content lookup configured, skipping documentation references to %s", file)
            return []

        docs = []
        for f in files:
            if f.is_directory or f.path == file or not self.is_documentation_file(f.path):
                continue
            try:
                content = self.content_lookup.get(f.path)
            except (OSError, UnicodeDecodeError, ValueError) as e:
                logger.debug("Cannot load %s: %s", f.path, e)
                continue
            if content and file in content:
                docs.append(f.path)

        return docs


def compute_impact(file: str, graph: ImportGraph, files: Sequence[RepoFile],
                   content_lookup: Any = None) -> ChangeImpact:
    """Compute a single impact record with the default configuration."""
    return ImpactPropagator(content_lookup).compute_impact(file, graph, files)
