# Copyright 2026 Declgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""YAML type catalog: describes reflected types without a live runtime.

A catalog lists types with their namespace, interfaces, attributes and
members. Property types are written as C#-like type expressions such as
``List<Rock.Model.Person>``, ``int?`` or ``T[]``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, NoReturn

import yaml

from declgen.model.handles import (
    AttributeData,
    ConstantFieldHandle,
    EnumFieldHandle,
    PropertyHandle,
    TypeHandle,
    array_of,
    generic_parameter,
    nullable_of,
    system_type,
)
from declgen.workspace.config import DEFAULT_CONFIG, GeneratorConfig

# ###############
# Public Interface
# ###############


class CatalogError(Exception):
    """Raised when a type catalog is invalid or cannot be loaded."""


class TypeExpressionError(Exception):
    """Raised when a type expression is malformed or names an unknown type.

    Attributes:
        expression: The full type expression.
        column: 1-based column of the error.
    """

    def __init__(self, message: str, expression: str, column: int) -> None:
        super().__init__(f"Column {column} of '{expression}': {message}")
        self.expression = expression
        self.column = column


# C# keyword aliases and the System types they stand for.
TYPE_ALIASES: dict[str, str] = {
    "bool": "Boolean",
    "byte": "Byte",
    "sbyte": "SByte",
    "short": "Int16",
    "ushort": "UInt16",
    "int": "Int32",
    "uint": "UInt32",
    "long": "Int64",
    "ulong": "UInt64",
    "float": "Single",
    "double": "Double",
    "decimal": "Decimal",
    "string": "String",
    "Guid": "Guid",
    "DateTime": "DateTime",
    "DateTimeOffset": "DateTimeOffset",
}

COLLECTIONS_NAMESPACE = "System.Collections.Generic"


@dataclass
class TypeCatalog:
    """The declared types of a catalog, in declaration order."""

    types: list[TypeHandle] = field(default_factory=list)

    def find(self, name: str) -> TypeHandle | None:
        """Find a declared type by full name, or by simple name if that is unique."""
        for handle in self.types:
            if name in (handle.full_name, _display_full_name(handle)):
                return handle

        matches = [h for h in self.types if name in (h.name, _strip_arity(h.name))]
        if len(matches) == 1:
            return matches[0]
        return None

    def get(self, name: str) -> TypeHandle:
        """Return a declared type by name.

        Raises:
            CatalogError: If no type, or more than one type, has this name.
        """
        handle = self.find(name)
        if handle is None:
            raise CatalogError(f"Type '{name}' is not declared in the catalog")
        return handle

    def enums(self) -> list[TypeHandle]:
        """Return all declared enumerations."""
        return [h for h in self.types if h.is_enum]

    def classes(self) -> list[TypeHandle]:
        """Return all declared non-enumeration types."""
        return [h for h in self.types if not h.is_enum]

    def constant_tables(self) -> list[TypeHandle]:
        """Return all declared classes that define string constants."""
        return [h for h in self.types if not h.is_enum and h.constants]


def load_catalog(path: Path, config: GeneratorConfig = DEFAULT_CONFIG) -> TypeCatalog:
    """Load and parse a type catalog file.

    Args:
        path: Path to the YAML catalog.
        config: Supplies the full name of the validity-tracking box.

    Returns:
        The parsed catalog.

    Raises:
        CatalogError: If the file cannot be read or the catalog is invalid.
        TypeExpressionError: If a property type expression is malformed.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise CatalogError(f"Type catalog not found: {path}") from None
    except OSError as exc:
        raise CatalogError(f"Cannot read type catalog: {exc}") from exc

    return parse_catalog(text, source_label=str(path), config=config)


def parse_catalog(text: str, source_label: str = "<string>", config: GeneratorConfig = DEFAULT_CONFIG) -> TypeCatalog:
    """Parse catalog YAML text.

    Types are created before any property is resolved, so properties may
    refer to any declared type, including their own declaring type.

    Raises:
        CatalogError: If the YAML is invalid or an entry has the wrong shape.
        TypeExpressionError: If a property type expression is malformed.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise CatalogError(f"Invalid YAML in {source_label}: {exc}") from exc

    if data is None:
        return TypeCatalog()

    if not isinstance(data, dict) or set(data) - {"types"}:
        raise CatalogError(f"{source_label}: catalog must be a YAML mapping with a 'types' list")

    raw_types = data.get("types") or []
    if not isinstance(raw_types, list):
        raise CatalogError(f"{source_label}: 'types' must be a list")

    entries = [_check_entry(entry, source_label) for entry in raw_types]
    catalog = TypeCatalog(types=[_declare_type(entry, source_label) for entry in entries])

    resolver = _Resolver(catalog, config)
    for handle, entry in zip(catalog.types, entries, strict=True):
        _fill_members(handle, entry, resolver, source_label)

    return catalog


def parse_type_expression(
    expression: str,
    catalog: TypeCatalog | None = None,
    type_parameters: list[str] | None = None,
    config: GeneratorConfig = DEFAULT_CONFIG,
) -> TypeHandle:
    """Parse a single type expression into a type handle.

    Args:
        expression: The expression, e.g. ``Dictionary<string, int?>``.
        catalog: Declared types that names may refer to.
        type_parameters: Names that denote open type parameters.
        config: Supplies the full name of the validity-tracking box.

    Returns:
        The resolved type handle.

    Raises:
        TypeExpressionError: If the expression is malformed or names an unknown type.
    """
    resolver = _Resolver(catalog or TypeCatalog(), config)
    return resolver.resolve(expression, type_parameters or [])


# ################
# Implementation
# ################

_TOKEN = re.compile(r"\s*(?:(?P<name>[A-Za-z_][A-Za-z0-9_]*(?:\.[A-Za-z_][A-Za-z0-9_]*)*)|(?P<symbol>[<>,?\[\]]))")

_ENTRY_KEYS = frozenset(
    {"name", "namespace", "enum", "type-parameters", "interfaces", "attributes", "properties", "fields", "constants"}
)
_PROPERTY_KEYS = frozenset({"name", "type", "required", "attributes"})
_FIELD_KEYS = frozenset({"name", "value", "attributes"})


@dataclass(frozen=True)
class _Token:
    kind: str
    value: str
    column: int


def _strip_arity(name: str) -> str:
    return name.split("`", 1)[0]


def _display_full_name(handle: TypeHandle) -> str:
    """Full name without the generic arity suffix."""
    return _strip_arity(handle.full_name)


def _check_entry(entry: Any, source_label: str) -> dict[str, Any]:
    if not isinstance(entry, dict):
        raise CatalogError(f"{source_label}: each type entry must be a mapping")
    _check_keys(entry, _ENTRY_KEYS, f"{source_label}: type entry")
    _require_string(entry, "name", f"{source_label}: type entry")
    return entry


def _declare_type(entry: dict[str, Any], source_label: str) -> TypeHandle:
    """Create the handle for a type entry, without its members."""
    label = f"{source_label}: type '{entry['name']}'"
    type_parameters = _string_list(entry, "type-parameters", label)
    name = entry["name"]
    if type_parameters:
        name = f"{name}`{len(type_parameters)}"

    namespace = entry.get("namespace")
    if namespace is not None and not isinstance(namespace, str):
        raise CatalogError(f"{label}: 'namespace' must be a string")

    is_enum = entry.get("enum", False)
    if not isinstance(is_enum, bool):
        raise CatalogError(f"{label}: 'enum' must be a boolean")

    return TypeHandle(
        name=name,
        namespace=namespace or None,
        is_enum=is_enum,
        interfaces=_string_list(entry, "interfaces", label),
        attributes=_parse_attributes(entry.get("attributes"), label),
        type_parameters=type_parameters,
    )


def _fill_members(handle: TypeHandle, entry: dict[str, Any], resolver: _Resolver, source_label: str) -> None:
    """Resolve and attach the properties and fields of a declared type."""
    label = f"{source_label}: type '{entry['name']}'"

    for raw in _mapping_list(entry, "properties", label):
        _check_keys(raw, _PROPERTY_KEYS, f"{label} property")
        prop_label = f"{label} property '{raw.get('name')}'"
        _require_string(raw, "name", prop_label)
        _require_string(raw, "type", prop_label)
        required = raw.get("required")
        if required is not None and not isinstance(required, bool):
            raise CatalogError(f"{prop_label}: 'required' must be a boolean")
        handle.properties.append(
            PropertyHandle(
                name=raw["name"],
                type=resolver.resolve(raw["type"], handle.type_parameters),
                declaring_type=handle,
                attributes=_parse_attributes(raw.get("attributes"), prop_label),
                is_required=required,
            )
        )

    for raw in _mapping_list(entry, "fields", label):
        _check_keys(raw, _FIELD_KEYS, f"{label} field")
        field_label = f"{label} field '{raw.get('name')}'"
        _require_string(raw, "name", field_label)
        value = raw.get("value")
        if not isinstance(value, int) or isinstance(value, bool):
            raise CatalogError(f"{field_label}: 'value' must be an integer")
        handle.fields.append(
            EnumFieldHandle(
                name=raw["name"],
                value=value,
                attributes=tuple(_parse_attributes(raw.get("attributes"), field_label)),
            )
        )

    for raw in _mapping_list(entry, "constants", label):
        _check_keys(raw, _FIELD_KEYS, f"{label} constant")
        constant_label = f"{label} constant '{raw.get('name')}'"
        _require_string(raw, "name", constant_label)
        if not isinstance(raw.get("value"), str):
            raise CatalogError(f"{constant_label}: 'value' must be a string")
        handle.constants.append(
            ConstantFieldHandle(
                name=raw["name"],
                value=raw["value"],
                attributes=tuple(_parse_attributes(raw.get("attributes"), constant_label)),
            )
        )


def _parse_attributes(raw: Any, label: str) -> list[AttributeData]:
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise CatalogError(f"{label}: 'attributes' must be a list")

    attributes: list[AttributeData] = []
    for entry in raw:
        if isinstance(entry, str):
            attributes.append(AttributeData(type_name=entry))
            continue
        if not isinstance(entry, dict):
            raise CatalogError(f"{label}: each attribute must be a string or a mapping")
        _check_keys(entry, frozenset({"type", "arguments"}), f"{label} attribute")
        _require_string(entry, "type", f"{label} attribute")
        arguments = entry.get("arguments") or []
        if not isinstance(arguments, list) or any(isinstance(a, (list, dict)) for a in arguments):
            raise CatalogError(f"{label}: attribute 'arguments' must be a list of scalars")
        attributes.append(AttributeData(type_name=entry["type"], arguments=tuple(arguments)))

    return attributes


def _check_keys(mapping: dict[str, Any], allowed: frozenset[str], label: str) -> None:
    unknown = sorted(str(k) for k in set(mapping) - allowed)
    if unknown:
        raise CatalogError(f"{label}: unknown field '{unknown[0]}'")


def _require_string(mapping: dict[str, Any], key: str, label: str) -> None:
    value = mapping.get(key)
    if not isinstance(value, str) or not value:
        raise CatalogError(f"{label}: '{key}' must be a non-empty string")


def _string_list(mapping: dict[str, Any], key: str, label: str) -> list[str]:
    value = mapping.get(key) or []
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise CatalogError(f"{label}: '{key}' must be a list of strings")
    return list(value)


def _mapping_list(mapping: dict[str, Any], key: str, label: str) -> list[dict[str, Any]]:
    value = mapping.get(key) or []
    if not isinstance(value, list) or not all(isinstance(v, dict) for v in value):
        raise CatalogError(f"{label}: '{key}' must be a list of mappings")
    return value


class _Resolver:
    """Recursive-descent parser that turns type expressions into handles.

    Grammar::

        type      := name [ '<' type { ',' type } '>' ] { '?' | '[' ']' }
        name      := identifier { '.' identifier }
    """

    def __init__(self, catalog: TypeCatalog, config: GeneratorConfig) -> None:
        self._catalog = catalog
        box_full_name = _strip_arity(config.box_definition)
        self._box_definition = config.box_definition
        self._box_names = {box_full_name, box_full_name.rsplit(".", 1)[-1]}
        self._expression = ""
        self._tokens: list[_Token] = []
        self._pos = 0
        self._type_parameters: list[str] = []

    def resolve(self, expression: str, type_parameters: list[str]) -> TypeHandle:
        self._expression = expression
        self._tokens = self._tokenize(expression)
        self._pos = 0
        self._type_parameters = type_parameters

        handle = self._parse_type()
        if self._pos < len(self._tokens):
            self._fail("Unexpected trailing input", self._tokens[self._pos])
        return handle

    # ------------------------------------------------------------------
    # Tokens
    # ------------------------------------------------------------------

    def _tokenize(self, expression: str) -> list[_Token]:
        tokens: list[_Token] = []
        pos = 0
        while pos < len(expression):
            if expression[pos:].isspace():
                break
            match = _TOKEN.match(expression, pos)
            if match is None:
                offset = pos + len(expression[pos:]) - len(expression[pos:].lstrip())
                raise TypeExpressionError(f"Unexpected character '{expression[offset]}'", expression, offset + 1)
            kind = "name" if match.group("name") else "symbol"
            value = match.group(kind)
            tokens.append(_Token(kind, value, match.start(kind) + 1))
            pos = match.end()
        return tokens

    def _peek(self) -> _Token | None:
        return self._tokens[self._pos] if self._pos < len(self._tokens) else None

    def _expect(self, kind: str, value: str | None = None) -> _Token:
        token = self._peek()
        if token is None or token.kind != kind or (value is not None and token.value != value):
            expected = f"'{value}'" if value else "a type name"
            self._fail(f"Expected {expected}", token)
        self._pos += 1
        return token

    def _check(self, value: str) -> bool:
        token = self._peek()
        return token is not None and token.kind == "symbol" and token.value == value

    def _fail(self, message: str, token: _Token | None) -> NoReturn:
        column = token.column if token is not None else len(self._expression) + 1
        raise TypeExpressionError(message, self._expression, column)

    # ------------------------------------------------------------------
    # Grammar
    # ------------------------------------------------------------------

    def _parse_type(self) -> TypeHandle:
        name_tok = self._expect("name")
        arguments: list[TypeHandle] = []

        if self._check("<"):
            self._pos += 1
            arguments.append(self._parse_type())
            while self._check(","):
                self._pos += 1
                arguments.append(self._parse_type())
            self._expect("symbol", ">")

        handle = self._lookup(name_tok, arguments)

        while True:
            if self._check("?"):
                self._pos += 1
                handle = nullable_of(handle)
            elif self._check("["):
                self._pos += 1
                self._expect("symbol", "]")
                handle = array_of(handle)
            else:
                return handle

    def _lookup(self, token: _Token, arguments: list[TypeHandle]) -> TypeHandle:
        name = token.value

        if not arguments:
            if name in self._type_parameters:
                return generic_parameter(name)
            if name in TYPE_ALIASES:
                return system_type(TYPE_ALIASES[name])
            if name.startswith("System.") and name[len("System.") :] in TYPE_ALIASES.values():
                return system_type(name[len("System.") :])
            declared = self._catalog.find(name)
            if declared is not None and not declared.type_parameters:
                return declared
            if declared is not None:
                self._fail(f"Type '{name}' requires {len(declared.type_parameters)} type argument(s)", token)
            if "." in name:
                namespace, _, simple = name.rpartition(".")
                return TypeHandle(name=simple, namespace=namespace)
            self._fail(f"Unknown type '{name}'", token)

        simple = name.rsplit(".", 1)[-1]
        arity = len(arguments)

        if simple == "Nullable" and arity == 1:
            return nullable_of(arguments[0])

        if simple in ("List", "ICollection", "HashSet") and arity == 1:
            definition = f"{COLLECTIONS_NAMESPACE}.{simple}`1"
            return TypeHandle(
                name=f"{simple}`1",
                namespace=COLLECTIONS_NAMESPACE,
                generic_definition=definition,
                generic_arguments=arguments,
                interfaces=[f"{COLLECTIONS_NAMESPACE}.ICollection`1"],
            )

        if simple in ("Dictionary", "IDictionary") and arity == 2:
            return TypeHandle(
                name=f"{simple}`2",
                namespace=COLLECTIONS_NAMESPACE,
                generic_definition=f"{COLLECTIONS_NAMESPACE}.{simple}`2",
                generic_arguments=arguments,
            )

        if name in self._box_names and arity == 1:
            namespace, _, definition_name = self._box_definition.rpartition(".")
            return TypeHandle(
                name=definition_name,
                namespace=namespace or None,
                generic_definition=self._box_definition,
                generic_arguments=arguments,
            )

        declared = self._catalog.find(name)
        if declared is not None and len(declared.type_parameters) == arity:
            return TypeHandle(
                name=declared.name,
                namespace=declared.namespace,
                generic_definition=declared.full_name,
                generic_arguments=arguments,
                interfaces=list(declared.interfaces),
                attributes=list(declared.attributes),
            )

        self._fail(f"Unknown generic type '{name}' with {arity} argument(s)", token)
