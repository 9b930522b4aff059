"""Pytest configuration and fixtures for impactmap tests."""

from pathlib import Path
from typing import Callable, Dict, List

import pytest

from impactmap.core import RepoFile


SAMPLE_CONTENTS: Dict[str, str] = {
    "src/index.ts": (
        'import { createApp } from "./app";\n'
        'import { log } from "./utils/logger";\n'
        "\n"
        "createApp();\n"
    ),
    "src/app.ts": (
        'import express from "express";\n'
        'import { log } from "./utils/logger";\n'
        'import { config } from "./config";\n'
        "\n"
        "export function createApp() {}\n"
    ),
    "src/config.ts": "export const config = { port: 3000 };\n",
    "src/utils/logger.ts": (
        'import { config } from "../config";\n'
        "\n"
        "export const log = console.log;\n"
    ),
    "test/app.test.ts": 'import { createApp } from "../src/app";\n',
    "docs/architecture.md": "The logger lives in `src/utils/logger.ts`.\n",
    "README.md": "Start reading at src/index.ts.\n",
    "package.json": '{"name": "sample"}\n',
}

SAMPLE_DIRECTORIES = ["docs", "src", "src/utils", "test"]


def files_from_contents(contents: Dict[str, str], directories: List[str] = ()) -> List[RepoFile]:
    """Build a listing with the directories first and files in mapping order."""
    files = [RepoFile(path=d, size=0, is_directory=True) for d in directories]
    files.extend(RepoFile(path=p, size=len(c.encode("utf-8"))) for p, c in contents.items())
    return files


@pytest.fixture
def make_files() -> Callable[..., List[RepoFile]]:
    """Factory for listings of plain files."""
    def _make(*paths: str, size: int = 100) -> List[RepoFile]:
        return [RepoFile(path=path, size=size) for path in paths]
    return _make


@pytest.fixture
def sample_contents() -> Dict[str, str]:
    return dict(SAMPLE_CONTENTS)


@pytest.fixture
def sample_files(sample_contents) -> List[RepoFile]:
    return files_from_contents(sample_contents, SAMPLE_DIRECTORIES)


@pytest.fixture
def sample_repo(tmp_path: Path, sample_contents) -> Path:
    """Write the sample project to disk."""
    for relative_path, content in sample_contents.items():
        target = tmp_path / relative_path
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
    return tmp_path
