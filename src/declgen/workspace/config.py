# Copyright 2026 Declgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Data model and YAML parser for the declgen generator configuration file."""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from pathlib import Path

import yaml

# ###############
# Public Interface
# ###############

CONFIG_FILE_NAME = ".declgen.yaml"


class GeneratorConfigError(Exception):
    """Raised when a generator configuration file is invalid or cannot be loaded."""


@dataclass(frozen=True)
class TypeScriptSettings:
    """Module specifiers used when emitting TypeScript imports.

    Attributes:
        enums_import_root: Root specifier for enumeration modules.
        view_models_import_root: Root specifier for bag and box modules.
        identifier_import: Module that exports the identifier helper type.
        reference_bag_import: Module that exports the reference descriptor bag.
        box_import: Module that exports the validity-tracking box.
    """

    enums_import_root: str = "@Obsidian/Enums"
    view_models_import_root: str = "@Obsidian/ViewModels"
    identifier_import: str = "@Obsidian/Types"
    reference_bag_import: str = "@Obsidian/ViewModels/Utility/listItemBag"
    box_import: str = "@Obsidian/ViewModels/Utility/validPropertiesBox"


@dataclass(frozen=True)
class GeneratorConfig:
    """Settings that steer classification and rendering.

    Attributes:
        enums_namespace: Reserved namespace root of global enumerations.
        view_models_namespace: Namespace root of bag and box types.
        entity_interface: Full name of the persisted-entity interface.
        enum_domain_attribute: Full name of the enumeration domain annotation.
        box_definition: Full name of the validity-tracking box generic definition.
        utility_namespace: C# namespace of the reference bag, the box and the
            entity bag base class.
        reference_bag_name: Name of the reference descriptor type.
        entity_bag_base: Base class of generated entity bags.
        strict: Raise on unsupported types instead of emitting placeholders.
        auto_generated_comment: Optional comment placed at the top of generated files.
        copyright_comment: Optional comment placed before the auto-generated comment.
        typescript: TypeScript module specifiers.
    """

    enums_namespace: str = "Rock.Enums"
    view_models_namespace: str = "Rock.ViewModels"
    entity_interface: str = "Rock.Data.IEntity"
    enum_domain_attribute: str = "Rock.Enums.EnumDomainAttribute"
    box_definition: str = "Rock.ViewModels.Utility.ValidPropertiesBox`1"
    utility_namespace: str = "Rock.ViewModels.Utility"
    reference_bag_name: str = "ListItemBag"
    entity_bag_base: str = "EntityBagBase"
    strict: bool = False
    auto_generated_comment: str | None = None
    copyright_comment: str | None = None
    typescript: TypeScriptSettings = field(default_factory=TypeScriptSettings)


DEFAULT_CONFIG = GeneratorConfig()


def load_generator_config(path: Path) -> GeneratorConfig:
    """Load and parse a declgen configuration file.

    Args:
        path: Path to the `.declgen.yaml` file.

    Returns:
        A GeneratorConfig populated from the file, with defaults for absent keys.

    Raises:
        GeneratorConfigError: If the file cannot be read or the configuration is invalid.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise GeneratorConfigError(f"Generator config file not found: {path}") from None
    except OSError as exc:
        raise GeneratorConfigError(f"Cannot read generator config file: {exc}") from exc

    return _parse_generator_config(text, source_label=str(path))


# ################
# Implementation
# ################


def _parse_generator_config(text: str, source_label: str = "<string>") -> GeneratorConfig:
    """Parse generator config YAML text into a GeneratorConfig.

    Raises:
        GeneratorConfigError: If the YAML is invalid or a field has the wrong type.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise GeneratorConfigError(f"Invalid YAML in {source_label}: {exc}") from exc

    # An empty file selects every default.
    if data is None:
        return DEFAULT_CONFIG

    if not isinstance(data, dict):
        raise GeneratorConfigError(f"{source_label}: generator config must be a YAML mapping")

    typescript = TypeScriptSettings()
    if "typescript" in data:
        raw_ts = data.pop("typescript")
        if not isinstance(raw_ts, dict):
            raise GeneratorConfigError(f"{source_label}: 'typescript' must be a YAML mapping")
        typescript = replace(typescript, **_read_fields(raw_ts, TypeScriptSettings, f"{source_label}: typescript"))

    values = _read_fields(data, GeneratorConfig, source_label)
    return replace(DEFAULT_CONFIG, typescript=typescript, **values)


def _read_fields(mapping: dict[str, object], target: type, source_label: str) -> dict[str, object]:
    """Map kebab-case YAML keys onto dataclass field names, checking value types."""
    known = {f.name.replace("_", "-"): f for f in fields(target) if f.name != "typescript"}
    values: dict[str, object] = {}

    for key, value in mapping.items():
        if key not in known:
            raise GeneratorConfigError(f"{source_label}: unknown field '{key}'")
        f = known[key]
        if f.name == "strict":
            if not isinstance(value, bool):
                raise GeneratorConfigError(f"{source_label}: '{key}' must be a boolean")
        elif f.name.endswith("_comment"):
            if value is not None and not isinstance(value, str):
                raise GeneratorConfigError(f"{source_label}: '{key}' must be a string")
        elif not isinstance(value, str) or not value:
            raise GeneratorConfigError(f"{source_label}: '{key}' must be a non-empty string")
        values[f.name] = value

    return values
