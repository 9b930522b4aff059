"""Tests for per-language import specifier extraction."""

import pytest

from impactmap.parsers import ImportExtractor, Language, detect_language


@pytest.fixture
def extractor() -> ImportExtractor:
    return ImportExtractor()


def test_ecmascript_forms_in_source_order(extractor: ImportExtractor):
    content = (
        'import React from "react";\n'
        "import { a,\n"
        "  b } from './utils';\n"
        "import './styles.css';\n"
        "const fs = require('fs');\n"
        'export * from "../shared/types";\n'
        'export { helper } from "./helper";\n'
        'const lazy = import("./lazy");\n'
    )

    assert extractor.extract(content, Language.ECMASCRIPT) == [
        "react", "./utils", "./styles.css", "fs", "../shared/types", "./helper", "./lazy",
    ]


def test_ecmascript_type_and_namespace_imports(extractor: ImportExtractor):
    content = (
        'import type { Props } from "./types";\n'
        'import * as path from "path";\n'
        'import Default, { named } from "../lib/mod";\n'
    )

    assert extractor.extract(content, Language.ECMASCRIPT) == ["./types", "path", "../lib/mod"]


def test_ecmascript_skips_computed_specifiers(extractor: ImportExtractor):
    content = (
        "const page = import(`./pages/${name}`);\n"
        "const mod = require(base + '/mod');\n"
    )

    assert extractor.extract(content, Language.ECMASCRIPT) == []


def test_python_imports(extractor: ImportExtractor):
    content = (
        "import os\n"
        "import pkg.models as models, pkg.utils\n"
        "from . import helpers, config as cfg\n"
        "from ..core.base import Base\n"
        "from typing import (\n"
        "    List,\n"
        "    Dict,\n"
        ")\n"
    )

    assert extractor.extract(content, Language.PYTHON) == [
        "os", "pkg.models", "pkg.utils", ".", ".helpers", ".config", "..core.base", "..core.base.Base",
        "typing", "typing.List", "typing.Dict",
    ]


def test_python_parenthesized_relative_names(extractor: ImportExtractor):
    content = "from .. import (\n    alpha,\n    beta,\n)\n"

    assert extractor.extract(content, Language.PYTHON) == ["..", "..alpha", "..beta"]


def test_python_star_import_is_not_a_module(extractor: ImportExtractor):
    assert extractor.extract("from . import *\n", Language.PYTHON) == ["."]


def test_python_from_import_names_may_be_submodules(extractor: ImportExtractor):
    content = "from app.services import billing, payments as pay\n"

    assert extractor.extract(content, Language.PYTHON) == [
        "app.services", "app.services.billing", "app.services.payments",
    ]


def test_go_single_and_block_imports(extractor: ImportExtractor):
    content = (
        "package main\n"
        "\n"
        'import "fmt"\n'
        'import util "example.com/app/util"\n'
        "\n"
        "import (\n"
        '    "os"\n'
        '    log "github.com/sirupsen/logrus"\n'
        '    // "commented/out"\n'
        '    _ "example.com/app/drivers"\n'
        ")\n"
    )

    assert extractor.extract(content, Language.GO) == [
        "fmt", "example.com/app/util", "os", "github.com/sirupsen/logrus", "example.com/app/drivers",
    ]


def test_rust_use_and_mod_declarations(extractor: ImportExtractor):
    content = (
        "use std::collections::HashMap;\n"
        "use crate::config::Settings;\n"
        "use super::models::{User, Account as Acct};\n"
        "pub use self::helpers::*;\n"
        "mod routes;\n"
        "pub(crate) mod db;\n"
        "mod inline {\n"
        "}\n"
    )

    assert extractor.extract(content, Language.RUST) == [
        "std::collections::HashMap",
        "crate::config::Settings",
        "super::models::User",
        "super::models::Account",
        "self::helpers",
        "self::routes",
        "self::db",
    ]


def test_rust_nested_use_groups(extractor: ImportExtractor):
    content = "use crate::{config, net::{client, self}};\n"

    assert extractor.extract(content, Language.RUST) == [
        "crate::config", "crate::net::client", "crate::net",
    ]


def test_unknown_language_yields_nothing(extractor: ImportExtractor):
    assert extractor.extract('import x from "y"', None) == []
    assert extractor.extract_for_path("README.md", 'import x from "./y"') == []
    assert extractor.extract_for_path("data.json", '{"require": "x"}') == []


def test_extract_for_path_detects_language(extractor: ImportExtractor):
    assert extractor.extract_for_path("src/app.tsx", "import './a';") == ["./a"]
    assert extractor.extract_for_path("pkg/mod.py", "import json\n") == ["json"]


def test_detect_language():
    assert detect_language("src/index.ts") is Language.ECMASCRIPT
    assert detect_language("lib/server.mjs") is Language.ECMASCRIPT
    assert detect_language("pkg/__init__.py") is Language.PYTHON
    assert detect_language("cmd/main.go") is Language.GO
    assert detect_language("src/lib.rs") is Language.RUST
    assert detect_language("docs/README.md") is None
    assert detect_language("Makefile") is None
