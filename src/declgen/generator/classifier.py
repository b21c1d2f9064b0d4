# Copyright 2026 Declgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Type classifier: assigns every reflected type to exactly one descriptor shape.

Rules are applied in a fixed priority order and the first match wins. Nested
types (nullable payloads, array elements, generic arguments) are classified
recursively; a type reached again through its own nesting raises
``TypeCycleError``.
"""

from __future__ import annotations

from declgen.generator.text import domain_folder_name, friendly_name, relative_path, strip_arity, to_camel_case
from declgen.model.handles import AttributeData, EnumFieldHandle, PropertyHandle, TypeHandle
from declgen.model.types import (
    ArrayDescriptor,
    CollectionDescriptor,
    DictionaryDescriptor,
    DomainEnumDescriptor,
    EntityDescriptor,
    GenericContainerDescriptor,
    GenericParameterDescriptor,
    GlobalEnumDescriptor,
    NullableDescriptor,
    PrimitiveDescriptor,
    PrimitiveKind,
    TypeDescriptor,
    TypeMetadata,
    UnsupportedDescriptor,
    ViewModelDescriptor,
)
from declgen.workspace.config import DEFAULT_CONFIG, GeneratorConfig

# ###############
# Public Interface
# ###############

OBSOLETE_ATTRIBUTE = "System.ObsoleteAttribute"
FLAGS_ATTRIBUTE = "System.FlagsAttribute"
DESCRIPTION_ATTRIBUTE = "System.ComponentModel.DescriptionAttribute"

BOOLEAN_TYPES = frozenset({"System.Boolean"})

NUMBER_TYPES = frozenset(
    {
        "System.Byte",
        "System.SByte",
        "System.Int16",
        "System.UInt16",
        "System.Int32",
        "System.UInt32",
        "System.Int64",
        "System.UInt64",
        "System.Single",
        "System.Double",
        "System.Decimal",
    }
)

STRING_TYPES = frozenset({"System.String"})

IDENTIFIER_TYPES = frozenset({"System.Guid"})

TIMESTAMP_TYPES = frozenset({"System.DateTime", "System.DateTimeOffset"})

DICTIONARY_DEFINITIONS = frozenset(
    {
        "System.Collections.Generic.Dictionary`2",
        "System.Collections.Generic.IDictionary`2",
    }
)

COLLECTION_INTERFACE = "System.Collections.Generic.ICollection`1"


class MetadataError(Exception):
    """Raised when an annotation on a type or member is malformed."""


class TypeCycleError(Exception):
    """Raised when a type is reached again through its own nested types."""

    def __init__(self, display_name: str) -> None:
        super().__init__(f"Type '{display_name}' refers to itself through its nested types")
        self.display_name = display_name


def classify(handle: TypeHandle, config: GeneratorConfig = DEFAULT_CONFIG) -> TypeDescriptor:
    """Classify a reflected type into a type descriptor.

    Args:
        handle: The type to classify.
        config: Namespace roots and well-known type names.

    Returns:
        Exactly one descriptor; ``UnsupportedDescriptor`` when no rule matches.

    Raises:
        MetadataError: If a domain annotation on an enumeration is malformed.
        TypeCycleError: If the type nests itself.
    """
    return _Classifier(config).classify(handle)


def read_metadata(
    element: TypeHandle | PropertyHandle | EnumFieldHandle,
    config: GeneratorConfig = DEFAULT_CONFIG,
) -> TypeMetadata:
    """Read the obsolete, flags, description and domain annotations of an element.

    Raises:
        MetadataError: If an annotation lacks a required argument or has one of
            the wrong type.
    """
    obsolete = element.get_attribute(OBSOLETE_ATTRIBUTE)
    description = element.get_attribute(DESCRIPTION_ATTRIBUTE)
    domain = element.get_attribute(config.enum_domain_attribute)

    return TypeMetadata(
        obsolete=obsolete is not None,
        obsolete_message=_optional_text(obsolete, element),
        is_flags=element.get_attribute(FLAGS_ATTRIBUTE) is not None,
        description=_optional_text(description, element),
        domain=_required_text(domain, element) if domain is not None else None,
    )


def is_under_namespace(namespace: str | None, root: str) -> bool:
    """Return True if *namespace* is *root* or one of its descendants."""
    if not namespace:
        return False
    return namespace == root or namespace.startswith(root + ".")


# ################
# Implementation
# ################


class _Classifier:
    """Applies the classification rules, tracking the current recursion path."""

    def __init__(self, config: GeneratorConfig) -> None:
        self._config = config
        self._path: set[int] = set()

    def classify(self, handle: TypeHandle) -> TypeDescriptor:
        if id(handle) in self._path:
            raise TypeCycleError(handle.full_name)

        self._path.add(id(handle))
        try:
            return self._classify(handle)
        finally:
            self._path.discard(id(handle))

    def _classify(self, handle: TypeHandle) -> TypeDescriptor:
        config = self._config
        full_name = handle.full_name

        if full_name in BOOLEAN_TYPES:
            return PrimitiveDescriptor(primitive=PrimitiveKind.BOOLEAN, type_name=handle.name)
        if full_name in NUMBER_TYPES:
            return PrimitiveDescriptor(primitive=PrimitiveKind.NUMBER, type_name=handle.name)
        if full_name in STRING_TYPES:
            return PrimitiveDescriptor(primitive=PrimitiveKind.STRING, type_name=handle.name)

        if handle.is_nullable_wrapper:
            return NullableDescriptor(inner=self.classify(handle.generic_arguments[0]))

        if full_name in IDENTIFIER_TYPES:
            return PrimitiveDescriptor(primitive=PrimitiveKind.IDENTIFIER, type_name=handle.name)
        if full_name in TIMESTAMP_TYPES:
            return PrimitiveDescriptor(primitive=PrimitiveKind.TIMESTAMP, type_name=handle.name)

        if handle.is_array and handle.element_type is not None:
            return ArrayDescriptor(element=self.classify(handle.element_type))

        if handle.is_generic:
            generic = self._classify_generic(handle)
            if generic is not None:
                return generic

        if handle.is_enum:
            return self._classify_enum(handle)

        if handle.is_generic_parameter:
            return GenericParameterDescriptor(name=handle.name)

        if handle.implements(config.entity_interface):
            return EntityDescriptor(
                name=handle.name,
                namespace=handle.namespace or "",
                metadata=read_metadata(handle, config),
            )

        if is_under_namespace(handle.namespace, config.view_models_namespace) and handle.name.endswith(("Bag", "Box")):
            segments = relative_path(handle.namespace or "", config.view_models_namespace)
            return ViewModelDescriptor(
                name=handle.name,
                namespace=handle.namespace or "",
                path="/".join([*segments, to_camel_case(handle.name)]),
                metadata=read_metadata(handle, config),
            )

        return UnsupportedDescriptor(display_name=friendly_name(handle))

    def _classify_generic(self, handle: TypeHandle) -> TypeDescriptor | None:
        definition = handle.generic_definition or ""
        args = handle.generic_arguments

        if definition in DICTIONARY_DEFINITIONS and len(args) == 2:
            return DictionaryDescriptor(key=self.classify(args[0]), value=self.classify(args[1]))

        if args and (definition == COLLECTION_INTERFACE or handle.implements(COLLECTION_INTERFACE)):
            return CollectionDescriptor(element=self.classify(args[0]))

        if definition == self._config.box_definition:
            return GenericContainerDescriptor(
                name=strip_arity(definition.rsplit(".", 1)[-1]),
                arguments=tuple(self.classify(arg) for arg in args),
            )

        return None

    def _classify_enum(self, handle: TypeHandle) -> TypeDescriptor:
        config = self._config
        metadata = read_metadata(handle, config)
        camel_name = to_camel_case(handle.name)

        if is_under_namespace(handle.namespace, config.enums_namespace):
            segments = relative_path(handle.namespace or "", config.enums_namespace)
            return GlobalEnumDescriptor(
                name=handle.name,
                namespace=handle.namespace or "",
                path="/".join([*segments, camel_name]),
                metadata=metadata,
            )

        if metadata.domain is not None:
            folder = domain_folder_name(metadata.domain)
            return DomainEnumDescriptor(
                name=handle.name,
                namespace=handle.namespace or "",
                domain=folder,
                path=f"{folder}/{camel_name}",
                metadata=metadata,
            )

        return PrimitiveDescriptor(primitive=PrimitiveKind.NUMBER, type_name=handle.name)


def _optional_text(attribute: AttributeData | None, element: object) -> str | None:
    """Return the first string argument of an annotation, if it has one."""
    if attribute is None or not attribute.arguments:
        return None
    value = attribute.arguments[0]
    if value is not None and not isinstance(value, str):
        raise MetadataError(f"Annotation '{attribute.type_name}' on {element!r} expects a string argument")
    return value


def _required_text(attribute: AttributeData, element: object) -> str:
    """Return the first argument of an annotation that must carry one."""
    if not attribute.arguments:
        raise MetadataError(f"Annotation '{attribute.type_name}' on {element!r} is missing its argument")
    value = attribute.arguments[0]
    if not isinstance(value, str) or not value:
        raise MetadataError(f"Annotation '{attribute.type_name}' on {element!r} expects a non-empty string argument")
    return value
