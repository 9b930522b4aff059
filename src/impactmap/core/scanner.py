"""Repository scanner - produces the flat file listing consumed by the engine."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import FrozenSet, List, Union

logger = logging.getLogger(__name__)


IGNORED_DIRECTORIES: FrozenSet[str] = frozenset({
    "node_modules",
    ".git",
    "dist",
    "build",
    "out",
    ".next",
    "__pycache__",
    ".venv",
    "venv",
    "vendor",
    ".idea",
    ".vscode",
    "coverage",
    ".nyc_output",
})


@dataclass(frozen=True)
class RepoFile:
    """A file or directory in the scanned repository."""
    path: str  # POSIX path relative to the repository root
    size: int = 0
    is_directory: bool = False


class RepositoryScanner:
    """Walks a checkout and lists its files, skipping build and dependency directories."""

    def __init__(self, root: Union[str, Path], max_files: int = 10000,
                 ignored_directories: FrozenSet[str] = IGNORED_DIRECTORIES):
        self.root = Path(root)
        self.max_files = max_files
        self.ignored_directories = ignored_directories

    def scan(self) -> List[RepoFile]:
        """Scan the repository and return directories and files in sorted walk order."""
        if not self.root.is_dir():
            raise NotADirectoryError(f"Repository root is not a directory: {self.root}")

        files: List[RepoFile] = []
        self._scan_directory(self.root, files)

        if len(files) >= self.max_files:
            logger.warning("Scan of %s stopped at %d entries", self.root, self.max_files)

        return files

    def _scan_directory(self, directory: Path, files: List[RepoFile]):
        """Recursively append the entries of one directory."""
        try:
            entries = sorted(os.scandir(directory), key=lambda entry: entry.name)
        except OSError as e:
            logger.warning("Cannot list %s: %s", directory, e)
            return

        for entry in entries:
            if len(files) >= self.max_files:
                return

            relative_path = Path(entry.path).relative_to(self.root).as_posix()

            try:
                if entry.is_dir(follow_symlinks=False):
                    if entry.name in self.ignored_directories:
                        continue
                    files.append(RepoFile(path=relative_path, size=0, is_directory=True))
                    self._scan_directory(Path(entry.path), files)
                elif entry.is_file(follow_symlinks=False):
                    files.append(RepoFile(path=relative_path, size=entry.stat().st_size))
            except OSError as e:
                logger.debug("Skipping %s: %s", relative_path, e)


def scan_repository(root: Union[str, Path], max_files: int = 10000) -> List[RepoFile]:
    """Convenience wrapper around RepositoryScanner."""
    return RepositoryScanner(root, max_files=max_files).scan()
