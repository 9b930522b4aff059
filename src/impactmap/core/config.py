"""Analysis configuration shared by the impact engine components."""

from dataclasses import dataclass
from typing import FrozenSet, Optional, Tuple


# Candidate entry point names, strongest first
KEY_FILE_NAMES: Tuple[str, ...] = ("index", "main", "app", "server", "cli")

TEST_DIRECTORIES: FrozenSet[str] = frozenset({"test", "tests", "__tests__"})

DOC_DIRECTORIES: FrozenSet[str] = frozenset({"docs", "doc"})

DOC_EXTENSIONS: FrozenSet[str] = frozenset({".md", ".mdx", ".rst", ".txt", ".adoc"})

ROOT_DOC_EXTENSIONS: FrozenSet[str] = frozenset({".md", ".mdx", ".rst"})

# Documents produced by the onboarding generator; never treated as sources of truth
GENERATED_DOCUMENTS: FrozenSet[str] = frozenset({
    "BOOTCAMP.md",
    "ONBOARDING.md",
    "ARCHITECTURE.md",
    "CODEMAP.md",
    "FIRST_TASKS.md",
    "RUNBOOK.md",
    "SECURITY.md",
    "RADAR.md",
    "IMPACT.md",
})

MAX_KEY_FILES = 10
MAX_RENDERED_ITEMS = 10


@dataclass(frozen=True)
class AnalysisConfiguration:
    """Configuration for import graph construction and impact analysis."""
    max_file_size: int = 100_000  # Larger source files are not parsed for imports
    max_workers: Optional[int] = None  # Defaults to os.cpu_count()
    key_file_limit: int = MAX_KEY_FILES
    render_limit: int = MAX_RENDERED_ITEMS
    enable_caching: bool = True
    cache_size: int = 512
    key_file_names: Tuple[str, ...] = KEY_FILE_NAMES
    test_directories: FrozenSet[str] = TEST_DIRECTORIES
    doc_directories: FrozenSet[str] = DOC_DIRECTORIES
    doc_extensions: FrozenSet[str] = DOC_EXTENSIONS
    root_doc_extensions: FrozenSet[str] = ROOT_DOC_EXTENSIONS
    generated_documents: FrozenSet[str] = GENERATED_DOCUMENTS

    def __post_init__(self):
        if self.max_file_size <= 0:
            raise ValueError("max_file_size must be positive")
        if self.max_workers is not None and self.max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        if self.cache_size < 0:
            raise ValueError("cache_size must not be negative")
