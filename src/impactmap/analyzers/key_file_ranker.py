"""Key File Ranker - Picks likely entry points as default impact analysis targets."""

import posixpath
from typing import FrozenSet, List, Sequence, Tuple

from ..core.config import KEY_FILE_NAMES, MAX_KEY_FILES
from ..core.scanner import RepoFile
from ..parsers.languages import file_extension


NON_SOURCE_EXTENSIONS: FrozenSet[str] = frozenset({
    # Documentation and text
    '.md', '.mdx', '.rst', '.txt', '.adoc', '.pdf',
    # Data and configuration
    '.json', '.jsonc', '.yaml', '.yml', '.toml', '.ini', '.cfg', '.conf', '.xml',
    '.csv', '.tsv', '.env', '.properties', '.lock', '.sum', '.mod', '.map', '.snap',
    # Styles and markup assets
    '.css', '.scss', '.sass', '.less', '.html', '.htm', '.svg',
    # Images, fonts and media
    '.png', '.jpg', '.jpeg', '.gif', '.ico', '.webp', '.bmp',
    '.woff', '.woff2', '.ttf', '.eot', '.otf', '.mp3', '.mp4', '.wav',
    # Archives and binaries
    '.zip', '.tar', '.gz', '.tgz', '.bz2', '.xz', '.7z', '.jar',
    '.exe', '.dll', '.so', '.dylib', '.a', '.o', '.pyc', '.class', '.wasm', '.bin',
    '.log', '.db', '.sqlite',
})

KEY_FILE_SCORE = 10.0
BASELINE_SCORE = 1.0


class KeyFileRanker:
    """Scores files as candidate entry points.

    A file whose name (without extension) is in the priority list scores
    ``KEY_FILE_SCORE`` plus its priority weight divided by its depth, so
    entry points near the root rank first. Every other source file scores
    ``BASELINE_SCORE``. Ties go to the shorter path, then lexical order.
    """

    def __init__(self, key_file_names: Sequence[str] = KEY_FILE_NAMES, limit: int = MAX_KEY_FILES,
                 non_source_extensions: FrozenSet[str] = NON_SOURCE_EXTENSIONS):
        self.key_file_names = tuple(key_file_names)
        self.limit = max(0, min(limit, MAX_KEY_FILES))
        self.non_source_extensions = non_source_extensions

    def rank(self, files: Sequence[RepoFile]) -> List[str]:
        """Return up to ``limit`` candidate paths in rank order."""
        candidates = {file.path for file in files if self._is_candidate(file)}
        ranked = sorted(candidates, key=self._sort_key)
        return ranked[:self.limit]

    def score(self, path: str) -> float:
        stem = posixpath.splitext(posixpath.basename(path))[0]
        if stem not in self.key_file_names:
            return BASELINE_SCORE

        weight = len(self.key_file_names) - self.key_file_names.index(stem)
        depth = path.count('/') + 1
        return KEY_FILE_SCORE + weight / depth

    def _sort_key(self, path: str) -> Tuple[float, int, str]:
        return (-self.score(path), len(path), path)

    def _is_candidate(self, file: RepoFile) -> bool:
        if file.is_directory:
            return False
        name = posixpath.basename(file.path)
        if not name or name.startswith('.'):
            return False
        extension = file_extension(name)
        return bool(extension) and extension not in self.non_source_extensions


def rank_key_files(files: Sequence[RepoFile], limit: int = MAX_KEY_FILES) -> List[str]:
    """Rank key files with the default priority list."""
    return KeyFileRanker(limit=limit).rank(files)
