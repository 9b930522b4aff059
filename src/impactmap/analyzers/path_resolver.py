"""Path Resolver - maps raw import specifiers onto known repository files."""

import posixpath
from typing import Iterable, Iterator, List, Optional, Set

from ..parsers.languages import Language, RESOLUTION_SUFFIXES, detect_language, file_extension


# Written ECMAScript extensions that may stand for a TypeScript source
_TYPESCRIPT_COUNTERPARTS = {
    '.js': ('.ts', '.tsx'),
    '.jsx': ('.tsx',),
    '.mjs': ('.mts',),
    '.cjs': ('.cts',),
}

_RUST_CRATE_ROOTS = ('lib.rs', 'main.rs')


def _normalize(path: str) -> Optional[str]:
    """Normalize a joined POSIX path; ``None`` if it escapes the repository root."""
    normalized = posixpath.normpath(path)
    if normalized == '.':
        return ''
    if normalized == '..' or normalized.startswith('../') or normalized.startswith('/'):
        return None
    return normalized


def _join(directory: str, relative: str) -> Optional[str]:
    return _normalize(posixpath.join(directory, relative) if directory else relative)


class PathResolver:
    """Resolves import specifiers against the set of known repository paths.

    Resolution is pure: it only consults the known path set given at
    construction time and never touches the filesystem.
    """

    def __init__(self, known_paths: Iterable[str]):
        self.known_paths: Set[str] = set(known_paths)

    def resolve(self, specifier: str, from_file: str) -> Optional[str]:
        """Return the repository path ``specifier`` denotes when imported from ``from_file``."""
        if not specifier:
            return None

        language = detect_language(from_file)

        if language is Language.PYTHON:
            target = self._resolve_python(specifier, from_file)
        elif language is Language.RUST:
            target = self._resolve_rust(specifier, from_file)
        else:
            target = self._resolve_path_like(specifier, from_file, language)

        # A file never imports itself
        if target == from_file:
            return None
        return target

    def _first_known(self, base: Optional[str], from_file: str,
                     language: Optional[Language]) -> Optional[str]:
        """Try the candidate file names for one base path in resolution order."""
        if base is None:
            return None
        for candidate in self._candidates(base, from_file, language):
            if candidate in self.known_paths and candidate != from_file:
                return candidate
        return None

    def _candidates(self, base: str, from_file: str,
                    language: Optional[Language]) -> Iterator[str]:
        if base:
            yield base

        own_extension = file_extension(from_file)
        if base and own_extension:
            yield base + own_extension

        for suffix in RESOLUTION_SUFFIXES.get(language, ()):
            if suffix.startswith('/'):
                yield f"{base}{suffix}" if base else suffix[1:]
            elif base:
                yield base + suffix

        if language is Language.ECMASCRIPT:
            stem, extension = posixpath.splitext(base)
            for counterpart in _TYPESCRIPT_COUNTERPARTS.get(extension, ()):
                yield stem + counterpart

    def _resolve_path_like(self, specifier: str, from_file: str,
                           language: Optional[Language]) -> Optional[str]:
        """ECMAScript, Go and anything written as a file path."""
        if specifier.startswith('/'):
            return self._first_known(_normalize(specifier.lstrip('/')), from_file, language)

        if specifier.startswith('.'):
            base = _join(posixpath.dirname(from_file), specifier)
            return self._first_known(base, from_file, language)

        # Bare specifiers only count when they spell out a repository path.
        # A single bare name ("config", "fmt") is a package unless it is a file verbatim.
        base = _normalize(specifier)
        if base is None or '/' not in base:
            return base if base in self.known_paths and base != from_file else None
        return self._first_known(base, from_file, language)

    def _resolve_python(self, specifier: str, from_file: str) -> Optional[str]:
        if specifier.startswith('.'):
            dots = len(specifier) - len(specifier.lstrip('.'))
            module_path = specifier[dots:].replace('.', '/')

            directory = posixpath.dirname(from_file)
            for _ in range(dots - 1):
                if not directory:
                    return None
                directory = posixpath.dirname(directory)

            base = _join(directory, module_path) if module_path else directory
            return self._first_known(base, from_file, Language.PYTHON)

        module_path = specifier.replace('.', '/')
        for root in self._python_roots(from_file):
            target = self._first_known(_join(root, module_path), from_file, Language.PYTHON)
            if target:
                return target
        return None

    @staticmethod
    def _python_roots(from_file: str) -> List[str]:
        """Repository root followed by the importer's ancestors, shallowest first."""
        roots = ['']
        parts = posixpath.dirname(from_file).split('/')
        for depth in range(1, len(parts) + 1):
            if parts[0]:
                roots.append('/'.join(parts[:depth]))
        return roots

    def _resolve_rust(self, specifier: str, from_file: str) -> Optional[str]:
        segments = [segment for segment in specifier.split('::') if segment]
        if not segments:
            return None

        head = segments[0]
        if head == 'crate':
            base = self._rust_crate_root(from_file)
            segments = segments[1:]
        elif head in ('self', 'super'):
            base = self._rust_module_dir(from_file)
            if head == 'self':
                segments = segments[1:]
            while segments and segments[0] == 'super':
                if base is None or not base:
                    return None
                base = posixpath.dirname(base)
                segments = segments[1:]
        else:
            # External crate or std
            return None

        if base is None:
            return None

        # Trailing segments may name items rather than modules
        while segments:
            target = self._first_known(_join(base, '/'.join(segments)), from_file, Language.RUST)
            if target:
                return target
            segments = segments[:-1]

        # Only items are named: the path points into the module file of base itself
        return self._rust_module_file(base, from_file)

    def _rust_module_file(self, base: str, from_file: str) -> Optional[str]:
        """Source file of the module whose children live in ``base``."""
        candidates = [f"{base}/mod.rs" if base else 'mod.rs']
        if base:
            candidates.append(base + '.rs')
        candidates.extend(posixpath.join(base, root_file) if base else root_file
                          for root_file in _RUST_CRATE_ROOTS)

        if from_file in candidates:
            return None
        for candidate in candidates:
            if candidate in self.known_paths:
                return candidate
        return None

    @staticmethod
    def _rust_module_dir(from_file: str) -> str:
        """Directory holding the child modules of ``from_file``."""
        directory = posixpath.dirname(from_file)
        name = posixpath.basename(from_file)
        if name in ('mod.rs',) + _RUST_CRATE_ROOTS:
            return directory
        stem = posixpath.splitext(name)[0]
        return posixpath.join(directory, stem) if directory else stem

    def _rust_crate_root(self, from_file: str) -> Optional[str]:
        """Nearest ancestor directory holding lib.rs or main.rs, else the first src/."""
        directory = posixpath.dirname(from_file)
        while True:
            for root_file in _RUST_CRATE_ROOTS:
                candidate = posixpath.join(directory, root_file) if directory else root_file
                if candidate in self.known_paths:
                    return directory
            if not directory:
                break
            directory = posixpath.dirname(directory)

        parts = from_file.split('/')
        if 'src' in parts[:-1]:
            return '/'.join(parts[:parts.index('src') + 1])
        return None
