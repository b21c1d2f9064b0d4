# Copyright 2026 Declgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""View-model generators: TypeScript object types and C# transfer bags."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from declgen.generator.classifier import NUMBER_TYPES, classify
from declgen.generator.comments import csharp_comment_block, typescript_comment_block
from declgen.generator.mapper import Declaration, TargetFormat, map_type, merge_imports, settle
from declgen.generator.properties import is_supported_property_type
from declgen.generator.text import alphabetical_key, class_name, strip_arity, to_camel_case
from declgen.model.handles import PropertyHandle, TypeHandle
from declgen.model.types import ImportDescriptor
from declgen.workspace.config import DEFAULT_CONFIG, GeneratorConfig
from declgen.workspace.docs import DocumentationProvider

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############

# Value types that always hold a value.
NON_NULL_TYPES = NUMBER_TYPES | {"System.Boolean", "System.Char", "System.Guid"}


def is_non_null_type(handle: TypeHandle) -> bool:
    """Return True for value types that cannot be absent: primitives, enumerations and identifiers."""
    return handle.is_enum or (not handle.is_generic and handle.full_name in NON_NULL_TYPES)


def is_required_property(prop: PropertyHandle) -> bool:
    """Return True if the property is annotated as required or its type cannot be absent."""
    return prop.has_required_annotation or is_non_null_type(prop.type)


def generate_view_model(
    handle: TypeHandle,
    docs: DocumentationProvider | None = None,
    config: GeneratorConfig = DEFAULT_CONFIG,
    strict: bool | None = None,
    defined: Iterable[TypeHandle] = (),
) -> Declaration:
    """Generate the TypeScript object type for a view-model class.

    Properties are emitted in alphabetical order with camel-cased names.
    Properties that are not required are marked optional with ``?``.

    Args:
        handle: The class to generate.
        docs: Optional source of documentation comments.
        config: Import roots and well-known names.
        strict: Raise on unsupported property types. Defaults to ``config.strict``.
            In lenient mode an unsupported type is replaced by a placeholder
            where it occurs, keeping the surrounding shape.
        defined: Other types declared in the same unit. References to them
            are not imported.

    Returns:
        The declaration text and the imports it needs, never including an
        import of the class itself.

    Raises:
        UnsupportedTypeError: In strict mode, for a property type that cannot be rendered.
        MetadataError: If an annotation on a property type is malformed.
        TypeCycleError: If a property type nests itself.
    """
    strict = config.strict if strict is None else strict
    identities = {handle.identity} | {h.identity for h in defined}
    lines: list[str] = []
    imports: list[tuple[ImportDescriptor, ...]] = []
    excluded: set[str] = set()

    if docs is not None:
        lines.append(typescript_comment_block(docs.type_summary(handle)))
    lines.append(f"export type {class_name(handle)} = {{\n")

    for i, prop in enumerate(sorted(handle.properties, key=lambda p: alphabetical_key(p.name))):
        is_required = is_required_property(prop)
        descriptor = classify(prop.type, config)
        result = map_type(descriptor, is_required, TargetFormat.TYPESCRIPT, config, lenient=not strict)
        declaration = settle(result, TargetFormat.TYPESCRIPT, strict=strict)
        imports.append(declaration.imports)
        excluded |= _declared_references(prop.type, identities)

        if i > 0:
            lines.append("\n")
        if docs is not None:
            lines.append(typescript_comment_block(docs.member_summary(handle, prop.name), indent=4))
        marker = "" if is_required else "?"
        lines.append(f"    {to_camel_case(prop.name)}{marker}: {declaration.text};\n")

    lines.append("};\n")

    logger.debug("Generated view model %s with %d properties", handle.full_name, len(handle.properties))
    return Declaration(text="".join(lines), imports=merge_imports(imports, exclude=excluded))


def generate_view_models(
    handles: Iterable[TypeHandle],
    docs: DocumentationProvider | None = None,
    config: GeneratorConfig = DEFAULT_CONFIG,
    strict: bool | None = None,
) -> Declaration:
    """Generate several view models into one unit, in the order given.

    Declarations are separated by a blank line. The merged imports drop every
    class defined in the unit.
    """
    handles = list(handles)
    declarations = [generate_view_model(h, docs, config, strict, defined=handles) for h in handles]

    return Declaration(
        text="\n".join(d.text for d in declarations),
        imports=merge_imports(d.imports for d in declarations),
    )


def generate_entity_bag(
    entity_name: str,
    properties: Iterable[PropertyHandle],
    summary: str | None = None,
    docs: DocumentationProvider | None = None,
    config: GeneratorConfig = DEFAULT_CONFIG,
    strict: bool | None = None,
) -> Declaration:
    """Generate the C# transfer bag class for an entity.

    Only properties of supported types are included; they are emitted in
    alphabetical order as auto-properties.

    Args:
        entity_name: Name of the entity; the class is named ``<entity_name>Bag``.
        properties: Candidate properties of the entity.
        summary: Documentation summary for the class.
        docs: Optional source of property documentation.
        config: Namespace and base class names.
        strict: Raise on unsupported property types. Defaults to ``config.strict``.

    Returns:
        The class text, indented for placement inside a namespace block, and
        the namespaces it uses.
    """
    strict = config.strict if strict is None else strict
    imports: list[tuple[ImportDescriptor, ...]] = [
        (ImportDescriptor(path=config.utility_namespace, imported_name=config.entity_bag_base),)
    ]
    supported = [p for p in properties if is_supported_property_type(p.type, config)]

    lines = [
        csharp_comment_block(summary, indent=4),
        f"    public class {entity_name}Bag : {config.entity_bag_base}\n",
        "    {\n",
    ]

    for i, prop in enumerate(sorted(supported, key=lambda p: alphabetical_key(p.name))):
        result = map_type(classify(prop.type, config), True, TargetFormat.CSHARP, config, lenient=not strict)
        declaration = settle(result, TargetFormat.CSHARP, strict=strict)
        imports.append(declaration.imports)

        if i > 0:
            lines.append("\n")
        if docs is not None and prop.declaring_type is not None:
            lines.append(csharp_comment_block(docs.member_summary(prop.declaring_type, prop.name), indent=8))
        lines.append(f"        public {declaration.text} {prop.name} {{ get; set; }}\n")

    lines.append("    }\n")

    return Declaration(text="".join(lines), imports=merge_imports(imports, exclude=[f"{entity_name}Bag"]))


def generate_options_bag(bag_name: str, summary: str | None = None) -> Declaration:
    """Generate an empty C# options bag class."""
    text = f"{csharp_comment_block(summary, indent=4)}    public class {bag_name}\n    {{\n    }}\n"
    return Declaration(text=text)


# ################
# Implementation
# ################


def _declared_references(handle: TypeHandle, identities: set[tuple[object, ...]]) -> set[str]:
    """Return the names of types within *handle* that are declared in the current unit."""
    names: set[str] = set()
    pending = [handle]

    while pending:
        current = pending.pop()
        if current.identity in identities:
            names.add(strip_arity(current.name))
        pending.extend(current.generic_arguments)
        if current.element_type is not None:
            pending.append(current.element_type)

    return names
