"""Supported source languages and their file conventions."""

import posixpath
from enum import Enum
from typing import Dict, Optional, Tuple


class Language(Enum):
    """Languages whose import statements are understood."""
    ECMASCRIPT = "ecmascript"  # JavaScript and TypeScript
    PYTHON = "python"
    GO = "go"
    RUST = "rust"


EXTENSION_LANGUAGES: Dict[str, Language] = {
    '.ts': Language.ECMASCRIPT,
    '.tsx': Language.ECMASCRIPT,
    '.mts': Language.ECMASCRIPT,
    '.cts': Language.ECMASCRIPT,
    '.js': Language.ECMASCRIPT,
    '.jsx': Language.ECMASCRIPT,
    '.mjs': Language.ECMASCRIPT,
    '.cjs': Language.ECMASCRIPT,
    '.py': Language.PYTHON,
    '.pyi': Language.PYTHON,
    '.go': Language.GO,
    '.rs': Language.RUST,
}

# Suffixes tried, in order, when a resolved specifier does not name a file directly
RESOLUTION_SUFFIXES: Dict[Language, Tuple[str, ...]] = {
    Language.ECMASCRIPT: (
        '.ts', '.tsx', '.js', '.jsx', '.mjs', '.cjs',
        '/index.ts', '/index.tsx', '/index.js', '/index.jsx',
    ),
    Language.PYTHON: ('.py', '/__init__.py'),
    Language.GO: ('.go',),
    Language.RUST: ('.rs', '/mod.rs'),
}


def file_extension(path: str) -> str:
    """Lower-cased extension of the last path segment, including the dot."""
    return posixpath.splitext(posixpath.basename(path))[1].lower()


def detect_language(path: str) -> Optional[Language]:
    """Detect the language of a file from its extension."""
    return EXTENSION_LANGUAGES.get(file_extension(path))
