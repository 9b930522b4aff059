"""Import Extractor - finds the literal import specifiers written in a source file."""

import re
from typing import Callable, Dict, List, Optional, Tuple

from .languages import Language, detect_language


# ECMAScript: group 2 holds the specifier
_ES_PATTERNS = (
    # import x from "y", import {a, b} from "y", import * as ns from "y", import "y"
    re.compile(r"""\bimport\s+(?:type\s+)?(?:[\w$*{}\s,]+?\s+from\s+)?(['"])([^'"\n]+)\1"""),
    # export * from "y", export {a} from "y"
    re.compile(r"""\bexport\s+(?:type\s+)?(?:\*(?:\s+as\s+[\w$]+)?|\{[^}]*\})\s*from\s+(['"])([^'"\n]+)\1"""),
    re.compile(r"""\brequire\s*\(\s*(['"])([^'"\n]+)\1\s*\)"""),
    # import("y") with a literal argument
    re.compile(r"""\bimport\s*\(\s*(['"])([^'"\n]+)\1\s*\)"""),
)

_PY_IMPORT = re.compile(r"^[ \t]*import[ \t]+([\w.]+(?:[ \t]+as[ \t]+\w+)?"
                        r"(?:[ \t]*,[ \t]*[\w.]+(?:[ \t]+as[ \t]+\w+)?)*)", re.MULTILINE)
_PY_FROM = re.compile(r"^[ \t]*from[ \t]+(\.+[\w.]*|[\w.]+)[ \t]+import[ \t]+(\([^)]*\)|[^\n#;]+)",
                      re.MULTILINE)

_GO_SINGLE = re.compile(r'^[ \t]*import[ \t]+(?:[\w.]+[ \t]+)?"([^"\n]+)"', re.MULTILINE)
_GO_BLOCK = re.compile(r'^[ \t]*import[ \t]*\(([^)]*)\)', re.MULTILINE)
_GO_BLOCK_ENTRY = re.compile(r'^[ \t]*(?:[\w.]+[ \t]+)?"([^"\n]+)"', re.MULTILINE)

_RUST_USE = re.compile(r'^[ \t]*(?:pub(?:\([^)]*\))?[ \t]+)?use[ \t]+([^;]+);', re.MULTILINE)
_RUST_MOD = re.compile(r'^[ \t]*(?:pub(?:\([^)]*\))?[ \t]+)?mod[ \t]+(\w+)[ \t]*;', re.MULTILINE)
_RUST_ALIAS = re.compile(r'\s+as\s+\w+')


def _in_source_order(found: List[Tuple[int, str]]) -> List[str]:
    return [specifier for _, specifier in sorted(found, key=lambda item: item[0])]


def _extract_ecmascript(content: str) -> List[str]:
    found = []
    for pattern in _ES_PATTERNS:
        for match in pattern.finditer(content):
            found.append((match.start(2), match.group(2)))
    return _in_source_order(found)


def _extract_python(content: str) -> List[str]:
    found = []

    for match in _PY_IMPORT.finditer(content):
        for offset, part in enumerate(match.group(1).split(',')):
            module = part.split()[0] if part.split() else ''
            if module:
                found.append((match.start(1) + offset, module))

    for match in _PY_FROM.finditer(content):
        module = match.group(1)
        found.append((match.start(1), module))

        # "from pkg import a, b" may import the submodules pkg.a and pkg.b
        separator = '' if module.strip('.') == '' else '.'
        names = match.group(2).strip().strip('()')
        for offset, part in enumerate(names.split(','), start=1):
            name = part.split()[0] if part.split() else ''
            if name and name != '*' and name.isidentifier():
                found.append((match.start(1) + offset, module + separator + name))

    return _in_source_order(found)


def _extract_go(content: str) -> List[str]:
    found = []
    for match in _GO_SINGLE.finditer(content):
        found.append((match.start(1), match.group(1)))
    for block in _GO_BLOCK.finditer(content):
        for entry in _GO_BLOCK_ENTRY.finditer(block.group(1)):
            found.append((block.start(1) + entry.start(1), entry.group(1)))
    return _in_source_order(found)


def _split_top_level(text: str) -> List[str]:
    """Split a use-tree member list on commas that are not nested in braces."""
    parts = []
    depth = 0
    current = ''
    for char in text:
        if char == '{':
            depth += 1
        elif char == '}':
            depth -= 1
        if char == ',' and depth == 0:
            parts.append(current)
            current = ''
        else:
            current += char
    parts.append(current)
    return [part for part in parts if part]


def _expand_use_tree(tree: str) -> List[str]:
    """Expand ``a::{b, c::{d}}`` into ``a::b`` and ``a::c::d``."""
    brace = tree.find('{')
    if brace == -1:
        path = tree[:-3] if tree.endswith('::*') else tree
        return [path] if path and path != '*' else []

    prefix = tree[:brace].rstrip(':')
    inner = tree[brace + 1:tree.rfind('}')]

    paths = []
    for member in _split_top_level(inner):
        if member == 'self':
            if prefix:
                paths.append(prefix)
            continue
        joined = f"{prefix}::{member}" if prefix else member
        paths.extend(_expand_use_tree(joined))
    return paths


def _extract_rust(content: str) -> List[str]:
    found = []
    for match in _RUST_USE.finditer(content):
        tree = re.sub(r'\s+', '', _RUST_ALIAS.sub('', match.group(1))).lstrip(':')
        for offset, path in enumerate(_expand_use_tree(tree)):
            found.append((match.start(1) + offset, path))
    for match in _RUST_MOD.finditer(content):
        found.append((match.start(1), f"self::{match.group(1)}"))
    return _in_source_order(found)


_RECOGNIZERS: Dict[Language, Callable[[str], List[str]]] = {
    Language.ECMASCRIPT: _extract_ecmascript,
    Language.PYTHON: _extract_python,
    Language.GO: _extract_go,
    Language.RUST: _extract_rust,
}


class ImportExtractor:
    """Extracts raw import specifiers using one regular-expression recognizer per language."""

    def __init__(self, recognizers: Optional[Dict[Language, Callable[[str], List[str]]]] = None):
        self.recognizers = dict(recognizers or _RECOGNIZERS)

    def extract(self, content: str, language: Optional[Language]) -> List[str]:
        """Return the specifiers of ``content`` in the order they are written."""
        if language is None or not content:
            return []

        recognizer = self.recognizers.get(language)
        if recognizer is None:
            return []

        return recognizer(content)

    def extract_for_path(self, path: str, content: str) -> List[str]:
        """Detect the language from ``path`` and extract its specifiers."""
        return self.extract(content, detect_language(path))

    @property
    def supported_languages(self) -> List[Language]:
        return list(self.recognizers)
