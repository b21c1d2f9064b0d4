# Copyright 2026 Declgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Target declaration mapper: renders type descriptors as TypeScript or C# text.

Mapping is pure and recursive. Nested element and argument types are always
mapped as required; the outermost shape decides once whether the optional
marker is added. Unsupported descriptors produce an ``UnsupportedType``
failure value which the caller turns into an error with ``settle``. In
lenient mode the placeholder is substituted where the unsupported descriptor
sits, so the surrounding array, container and nullability are kept.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from declgen.model.types import (
    ArrayDescriptor,
    CollectionDescriptor,
    DictionaryDescriptor,
    DomainEnumDescriptor,
    EntityDescriptor,
    GenericContainerDescriptor,
    GenericParameterDescriptor,
    GlobalEnumDescriptor,
    ImportDescriptor,
    NullableDescriptor,
    PrimitiveDescriptor,
    PrimitiveKind,
    TypeDescriptor,
    UnsupportedDescriptor,
    ViewModelDescriptor,
)
from declgen.workspace.config import DEFAULT_CONFIG, GeneratorConfig

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


class TargetFormat(Enum):
    """Output language of a declaration."""

    TYPESCRIPT = "typescript"
    CSHARP = "csharp"


@dataclass(frozen=True)
class Declaration:
    """Declaration text plus the imports it needs.

    Attributes:
        text: The rendered type expression, e.g. ``Guid | null``.
        imports: Sorted, de-duplicated import requests.
    """

    text: str
    imports: tuple[ImportDescriptor, ...] = ()


@dataclass(frozen=True)
class UnsupportedType:
    """Failure value for a type that no rule can render."""

    display_name: str


MapResult = Declaration | UnsupportedType


class UnsupportedTypeError(Exception):
    """Raised in strict mode when a type cannot be rendered."""

    def __init__(self, display_name: str) -> None:
        super().__init__(f"Unsupported type '{display_name}'")
        self.display_name = display_name


PLACEHOLDERS = {
    TargetFormat.TYPESCRIPT: "unknown",
    TargetFormat.CSHARP: "object",
}

CSHARP_NUMBER_KEYWORDS = {
    "Byte": "byte",
    "SByte": "sbyte",
    "Int16": "short",
    "UInt16": "ushort",
    "Int32": "int",
    "UInt32": "uint",
    "Int64": "long",
    "UInt64": "ulong",
    "Single": "float",
    "Double": "double",
    "Decimal": "decimal",
}

COLLECTIONS_NAMESPACE = "System.Collections.Generic"


def map_type(
    descriptor: TypeDescriptor,
    is_required: bool,
    target: TargetFormat,
    config: GeneratorConfig = DEFAULT_CONFIG,
    lenient: bool = False,
) -> MapResult:
    """Render a type descriptor in the target format.

    Args:
        descriptor: The classified type.
        is_required: False if the value may be absent. Only affects TypeScript
            shapes whose nullability depends on context.
        target: The output language.
        config: Import roots and well-known names.
        lenient: Render unsupported descriptors as the placeholder token
            instead of failing.

    Returns:
        A Declaration, or an UnsupportedType naming the first type that could
        not be rendered. Lenient mapping always returns a Declaration.
    """
    if target is TargetFormat.TYPESCRIPT:
        return _map_typescript(descriptor, is_required, config, lenient)
    return _map_csharp(descriptor, config, lenient)


def settle(result: MapResult, target: TargetFormat, strict: bool = False) -> Declaration:
    """Turn a mapping result into a declaration according to the failure policy.

    Args:
        result: The value returned by ``map_type``.
        target: The output language, which selects the placeholder text.
        strict: Raise instead of degrading to a placeholder.

    Returns:
        The declaration, or a placeholder declaration in lenient mode.

    Raises:
        UnsupportedTypeError: In strict mode when *result* is a failure.
    """
    if isinstance(result, Declaration):
        return result

    if strict:
        raise UnsupportedTypeError(result.display_name)

    logger.warning("Unsupported type '%s', emitting '%s'", result.display_name, PLACEHOLDERS[target])
    return Declaration(text=PLACEHOLDERS[target])


def merge_imports(
    groups: Iterable[Iterable[ImportDescriptor]],
    exclude: Iterable[str] = (),
) -> tuple[ImportDescriptor, ...]:
    """Union several import lists, dropping excluded names.

    Args:
        groups: Import lists to combine.
        exclude: Names defined by the caller; imports of these are dropped.

    Returns:
        De-duplicated imports sorted by path, then imported name.
    """
    excluded = set(exclude)
    merged = {imp for group in groups for imp in group if imp.imported_name not in excluded}
    return tuple(sorted(merged, key=lambda imp: (imp.path, imp.imported_name)))


# ################
# Implementation
# ################

# Shapes that become optional in TypeScript when the value is not required.
_CONTEXT_NULLABLE_PRIMITIVES = frozenset({PrimitiveKind.STRING, PrimitiveKind.IDENTIFIER, PrimitiveKind.TIMESTAMP})


def _is_context_nullable(descriptor: TypeDescriptor) -> bool:
    if isinstance(descriptor, PrimitiveDescriptor):
        return descriptor.primitive in _CONTEXT_NULLABLE_PRIMITIVES
    return isinstance(
        descriptor,
        (
            ArrayDescriptor,
            CollectionDescriptor,
            DictionaryDescriptor,
            GenericContainerDescriptor,
            GlobalEnumDescriptor,
            DomainEnumDescriptor,
            EntityDescriptor,
            ViewModelDescriptor,
        ),
    )


def _map_typescript(
    descriptor: TypeDescriptor,
    is_required: bool,
    config: GeneratorConfig,
    lenient: bool,
) -> MapResult:
    """Map a descriptor to TypeScript, adding ``| null`` when it is optional."""
    inner = _map_typescript_bare(descriptor, config, lenient)
    if isinstance(inner, UnsupportedType):
        return inner

    optional = isinstance(descriptor, NullableDescriptor) or (not is_required and _is_context_nullable(descriptor))
    if optional:
        return Declaration(text=f"{inner.text} | null", imports=inner.imports)
    return inner


def _map_typescript_bare(descriptor: TypeDescriptor, config: GeneratorConfig, lenient: bool) -> MapResult:
    """Map a descriptor to TypeScript without the optional marker."""
    ts = config.typescript

    if isinstance(descriptor, PrimitiveDescriptor):
        if descriptor.primitive is PrimitiveKind.BOOLEAN:
            return Declaration(text="boolean")
        if descriptor.primitive is PrimitiveKind.NUMBER:
            return Declaration(text="number")
        if descriptor.primitive is PrimitiveKind.IDENTIFIER:
            guid_import = ImportDescriptor(path=ts.identifier_import, imported_name="Guid")
            return Declaration(text="Guid", imports=(guid_import,))
        # Strings and timestamps both travel as strings.
        return Declaration(text="string")

    if isinstance(descriptor, NullableDescriptor):
        return _map_typescript_bare(descriptor.inner, config, lenient)

    if isinstance(descriptor, (ArrayDescriptor, CollectionDescriptor)):
        element = _map_typescript(descriptor.element, True, config, lenient)
        if isinstance(element, UnsupportedType):
            return element
        text = f"({element.text})[]" if " | " in element.text else f"{element.text}[]"
        return Declaration(text=text, imports=element.imports)

    if isinstance(descriptor, DictionaryDescriptor):
        return _compose(
            "Record",
            [
                _map_typescript(descriptor.key, True, config, lenient),
                _map_typescript(descriptor.value, True, config, lenient),
            ],
        )

    if isinstance(descriptor, GenericContainerDescriptor):
        box_import = ImportDescriptor(path=ts.box_import, imported_name=descriptor.name)
        return _compose(
            descriptor.name,
            [_map_typescript(arg, True, config, lenient) for arg in descriptor.arguments],
            extra=(box_import,),
        )

    if isinstance(descriptor, (GlobalEnumDescriptor, DomainEnumDescriptor)):
        path = f"{ts.enums_import_root}/{descriptor.path}"
        return Declaration(text=descriptor.name, imports=(ImportDescriptor(path=path, imported_name=descriptor.name),))

    if isinstance(descriptor, EntityDescriptor):
        name = config.reference_bag_name
        return Declaration(text=name, imports=(ImportDescriptor(path=ts.reference_bag_import, imported_name=name),))

    if isinstance(descriptor, ViewModelDescriptor):
        path = f"{ts.view_models_import_root}/{descriptor.path}"
        return Declaration(text=descriptor.name, imports=(ImportDescriptor(path=path, imported_name=descriptor.name),))

    if isinstance(descriptor, GenericParameterDescriptor):
        return Declaration(text=descriptor.name)

    if isinstance(descriptor, UnsupportedDescriptor):
        return _unsupported(descriptor, TargetFormat.TYPESCRIPT, lenient)

    raise TypeError(f"Unknown type descriptor: {descriptor!r}")


def _map_csharp(descriptor: TypeDescriptor, config: GeneratorConfig, lenient: bool) -> MapResult:
    """Map a descriptor to a C# type expression."""
    if isinstance(descriptor, PrimitiveDescriptor):
        if descriptor.primitive is PrimitiveKind.BOOLEAN:
            return Declaration(text="bool")
        if descriptor.primitive is PrimitiveKind.NUMBER:
            # Enumerations without an import path degrade to a number.
            return Declaration(text=CSHARP_NUMBER_KEYWORDS.get(descriptor.type_name, "int"))
        if descriptor.primitive is PrimitiveKind.STRING:
            return Declaration(text="string")
        return Declaration(
            text=descriptor.type_name,
            imports=(ImportDescriptor(path="System", imported_name=descriptor.type_name),),
        )

    if isinstance(descriptor, NullableDescriptor):
        inner = _map_csharp(descriptor.inner, config, lenient)
        if isinstance(inner, UnsupportedType):
            return inner
        return Declaration(text=f"{inner.text}?", imports=inner.imports)

    if isinstance(descriptor, ArrayDescriptor):
        element = _map_csharp(descriptor.element, config, lenient)
        if isinstance(element, UnsupportedType):
            return element
        return Declaration(text=f"{element.text}[]", imports=element.imports)

    if isinstance(descriptor, CollectionDescriptor):
        return _compose(
            "List",
            [_map_csharp(descriptor.element, config, lenient)],
            extra=(ImportDescriptor(path=COLLECTIONS_NAMESPACE, imported_name="List"),),
        )

    if isinstance(descriptor, DictionaryDescriptor):
        return _compose(
            "Dictionary",
            [_map_csharp(descriptor.key, config, lenient), _map_csharp(descriptor.value, config, lenient)],
            extra=(ImportDescriptor(path=COLLECTIONS_NAMESPACE, imported_name="Dictionary"),),
        )

    if isinstance(descriptor, GenericContainerDescriptor):
        return _compose(
            descriptor.name,
            [_map_csharp(arg, config, lenient) for arg in descriptor.arguments],
            extra=(ImportDescriptor(path=config.utility_namespace, imported_name=descriptor.name),),
        )

    if isinstance(descriptor, EntityDescriptor):
        name = config.reference_bag_name
        return Declaration(text=name, imports=(ImportDescriptor(path=config.utility_namespace, imported_name=name),))

    if isinstance(descriptor, (GlobalEnumDescriptor, DomainEnumDescriptor, ViewModelDescriptor)):
        return Declaration(
            text=descriptor.name,
            imports=(ImportDescriptor(path=descriptor.namespace, imported_name=descriptor.name),),
        )

    if isinstance(descriptor, GenericParameterDescriptor):
        return Declaration(text=descriptor.name)

    if isinstance(descriptor, UnsupportedDescriptor):
        return _unsupported(descriptor, TargetFormat.CSHARP, lenient)

    raise TypeError(f"Unknown type descriptor: {descriptor!r}")


def _unsupported(descriptor: UnsupportedDescriptor, target: TargetFormat, lenient: bool) -> MapResult:
    """Fail on an unsupported descriptor, or stand in the placeholder when lenient."""
    if not lenient:
        return UnsupportedType(display_name=descriptor.display_name)

    logger.warning("Unsupported type '%s', emitting '%s'", descriptor.display_name, PLACEHOLDERS[target])
    return Declaration(text=PLACEHOLDERS[target])


def _compose(
    name: str,
    arguments: list[MapResult],
    extra: tuple[ImportDescriptor, ...] = (),
) -> MapResult:
    """Render ``name<arg, ...>`` and union the argument imports."""
    rendered: list[Declaration] = []
    for argument in arguments:
        if isinstance(argument, UnsupportedType):
            return argument
        rendered.append(argument)

    text = f"{name}<{', '.join(arg.text for arg in rendered)}>"
    return Declaration(text=text, imports=merge_imports([extra, *(arg.imports for arg in rendered)]))
