# Copyright 2026 Declgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the generator configuration module."""

from pathlib import Path

import pytest

from declgen.workspace import (
    DEFAULT_CONFIG,
    GeneratorConfig,
    GeneratorConfigError,
    TypeScriptSettings,
    load_generator_config,
)


# ###############
# Helpers
# ###############


def _write_config(tmp_path: Path, content: str) -> Path:
    """Write a generator config file and return its path."""
    config_file = tmp_path / ".declgen.yaml"
    config_file.write_text(content, encoding="utf-8")
    return config_file


# ###############
# Normal Cases
# ###############


def test_empty_config_uses_defaults(tmp_path: Path) -> None:
    """An empty file selects every default."""
    config = load_generator_config(_write_config(tmp_path, ""))
    assert config == DEFAULT_CONFIG


def test_default_values() -> None:
    """The defaults target the reference runtime layout."""
    assert DEFAULT_CONFIG.enums_namespace == "Rock.Enums"
    assert DEFAULT_CONFIG.entity_interface == "Rock.Data.IEntity"
    assert DEFAULT_CONFIG.strict is False
    assert DEFAULT_CONFIG.typescript.identifier_import == "@Obsidian/Types"


def test_config_with_overrides(tmp_path: Path) -> None:
    """Kebab-case keys override the matching fields."""
    content = """\
enums-namespace: Acme.Enums
entity-interface: Acme.Data.IRecord
strict: true
copyright-comment: "// Copyright Acme"
"""
    config = load_generator_config(_write_config(tmp_path, content))

    assert isinstance(config, GeneratorConfig)
    assert config.enums_namespace == "Acme.Enums"
    assert config.entity_interface == "Acme.Data.IRecord"
    assert config.strict is True
    assert config.copyright_comment == "// Copyright Acme"
    assert config.view_models_namespace == "Rock.ViewModels"


def test_config_with_typescript_section(tmp_path: Path) -> None:
    """The typescript section overrides module specifiers and keeps the other defaults."""
    content = """\
typescript:
  enums-import-root: "@Acme/Enums"
  box-import: "@Acme/box"
"""
    config = load_generator_config(_write_config(tmp_path, content))

    assert config.typescript.enums_import_root == "@Acme/Enums"
    assert config.typescript.box_import == "@Acme/box"
    assert config.typescript.identifier_import == TypeScriptSettings().identifier_import


def test_null_comment_is_allowed(tmp_path: Path) -> None:
    """Comment fields may be explicitly empty."""
    config = load_generator_config(_write_config(tmp_path, "auto-generated-comment: null\n"))
    assert config.auto_generated_comment is None


# ###############
# Error Cases
# ###############


def test_missing_file(tmp_path: Path) -> None:
    """A missing file raises GeneratorConfigError."""
    with pytest.raises(GeneratorConfigError, match="not found"):
        load_generator_config(tmp_path / "missing.yaml")


def test_invalid_yaml(tmp_path: Path) -> None:
    """Malformed YAML raises GeneratorConfigError."""
    with pytest.raises(GeneratorConfigError, match="Invalid YAML"):
        load_generator_config(_write_config(tmp_path, "strict: [unclosed\n"))


def test_non_mapping(tmp_path: Path) -> None:
    """A top-level list is rejected."""
    with pytest.raises(GeneratorConfigError, match="must be a YAML mapping"):
        load_generator_config(_write_config(tmp_path, "- strict\n"))


def test_unknown_field(tmp_path: Path) -> None:
    """Unknown keys are rejected."""
    with pytest.raises(GeneratorConfigError, match="unknown field 'enum-root'"):
        load_generator_config(_write_config(tmp_path, "enum-root: Acme\n"))


def test_snake_case_key_is_unknown(tmp_path: Path) -> None:
    """Only kebab-case keys are accepted."""
    with pytest.raises(GeneratorConfigError, match="unknown field"):
        load_generator_config(_write_config(tmp_path, "enums_namespace: Acme.Enums\n"))


def test_strict_must_be_boolean(tmp_path: Path) -> None:
    """The strict flag must be a boolean."""
    with pytest.raises(GeneratorConfigError, match="'strict' must be a boolean"):
        load_generator_config(_write_config(tmp_path, "strict: yes please\n"))


def test_empty_namespace_rejected(tmp_path: Path) -> None:
    """Namespace fields must be non-empty strings."""
    with pytest.raises(GeneratorConfigError, match="non-empty string"):
        load_generator_config(_write_config(tmp_path, 'enums-namespace: ""\n'))


def test_typescript_section_must_be_mapping(tmp_path: Path) -> None:
    """The typescript section must be a mapping."""
    with pytest.raises(GeneratorConfigError, match="'typescript' must be a YAML mapping"):
        load_generator_config(_write_config(tmp_path, "typescript: [a, b]\n"))


def test_unknown_typescript_field(tmp_path: Path) -> None:
    """Unknown keys inside the typescript section are rejected."""
    with pytest.raises(GeneratorConfigError, match="typescript: unknown field 'vue-import'"):
        load_generator_config(_write_config(tmp_path, "typescript:\n  vue-import: vue\n"))
