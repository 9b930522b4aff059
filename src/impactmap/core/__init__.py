"""Repository listing, content access and configuration."""

from .config import AnalysisConfiguration
from .content import FileContentLoader, MappingContentLoader
from .scanner import RepoFile, RepositoryScanner, scan_repository, IGNORED_DIRECTORIES

__all__ = [
    "AnalysisConfiguration",
    "FileContentLoader", "MappingContentLoader",
    "RepoFile", "RepositoryScanner", "scan_repository", "IGNORED_DIRECTORIES",
]
