# Copyright 2026 Declgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Property conversion classifier.

Decides how an entity property is copied into its transfer bag and back:
by plain assignment, through a reference descriptor, or through a list of
reference descriptors. Properties that match none of these are unsupported
and never appear in generated bags.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from declgen.generator.classifier import COLLECTION_INTERFACE, classify, is_under_namespace
from declgen.generator.mapper import UnsupportedType, UnsupportedTypeError
from declgen.generator.text import friendly_name
from declgen.model.handles import PropertyHandle, TypeHandle
from declgen.model.types import CollectionDescriptor, EntityDescriptor
from declgen.workspace.config import DEFAULT_CONFIG, GeneratorConfig

# ###############
# Public Interface
# ###############

ASSIGNMENT_TYPES = frozenset(
    {
        "System.Boolean",
        "System.Int32",
        "System.Int64",
        "System.Decimal",
        "System.Double",
        "System.String",
        "System.Guid",
        "System.DateTime",
        "System.DateTimeOffset",
    }
)

# Only value types may be wrapped in a nullable.
_NULLABLE_ASSIGNMENT_TYPES = ASSIGNMENT_TYPES - {"System.String"}


class ConversionStrategy(Enum):
    """How a property value moves between an entity and its bag."""

    DIRECT_ASSIGNMENT = "direct_assignment"
    ENTITY_TO_REFERENCE = "entity_to_reference"
    ENTITY_COLLECTION_TO_REFERENCE_LIST = "entity_collection_to_reference_list"
    UNSUPPORTED = "unsupported"


@dataclass(frozen=True)
class PropertyConversion:
    """The conversion chosen for one property.

    Attributes:
        property_name: The property name as declared on the entity.
        strategy: The conversion strategy.
        type_name: Display name of the property type.
        requires_unwrap: True when reading the entity id back from the bag
            must unwrap the nullable result, because the sibling ``<Name>Id``
            property is a non-nullable integer.
    """

    property_name: str
    strategy: ConversionStrategy
    type_name: str
    requires_unwrap: bool = False


def is_assignment_type(handle: TypeHandle) -> bool:
    """Return True if values of this type are copied without conversion."""
    if handle.is_nullable_wrapper:
        return handle.generic_arguments[0].full_name in _NULLABLE_ASSIGNMENT_TYPES
    return not handle.is_generic and handle.full_name in ASSIGNMENT_TYPES


def is_supported_property_type(handle: TypeHandle, config: GeneratorConfig = DEFAULT_CONFIG) -> bool:
    """Return True if a property of this type can appear in a generated bag.

    One-argument collections are supported when their element type is.
    Otherwise the type must be an entity, an assignment type, or an
    enumeration that resolves to an import path.
    """
    if _is_single_argument_collection(handle):
        return is_supported_property_type(handle.generic_arguments[0], config)

    if is_assignment_type(handle):
        return True

    if handle.is_enum:
        return is_under_namespace(handle.namespace, config.enums_namespace) or (
            handle.get_attribute(config.enum_domain_attribute) is not None
        )

    return handle.implements(config.entity_interface)


def classify_property(prop: PropertyHandle, config: GeneratorConfig = DEFAULT_CONFIG) -> PropertyConversion:
    """Choose the conversion strategy for a property.

    Args:
        prop: The entity property.
        config: Well-known interface and namespace names.

    Returns:
        The property conversion. Unsupported properties are reported through
        ``ConversionStrategy.UNSUPPORTED`` rather than an exception.
    """
    handle = prop.type
    type_name = friendly_name(handle)

    if is_assignment_type(handle):
        return PropertyConversion(prop.name, ConversionStrategy.DIRECT_ASSIGNMENT, type_name)

    descriptor = classify(handle, config)

    if isinstance(descriptor, EntityDescriptor):
        return PropertyConversion(
            prop.name,
            ConversionStrategy.ENTITY_TO_REFERENCE,
            type_name,
            requires_unwrap=_has_required_id_sibling(prop),
        )

    if (
        isinstance(descriptor, CollectionDescriptor)
        and len(handle.generic_arguments) == 1
        and isinstance(descriptor.element, EntityDescriptor)
    ):
        return PropertyConversion(prop.name, ConversionStrategy.ENTITY_COLLECTION_TO_REFERENCE_LIST, type_name)

    return PropertyConversion(prop.name, ConversionStrategy.UNSUPPORTED, type_name)


def convert_to_bag_code(conversion: PropertyConversion) -> str | UnsupportedType:
    """Return the C# expression that reads the property into its bag value."""
    name = conversion.property_name

    if conversion.strategy is ConversionStrategy.DIRECT_ASSIGNMENT:
        return name
    if conversion.strategy is ConversionStrategy.ENTITY_TO_REFERENCE:
        return f"{name}.ToListItemBag()"
    if conversion.strategy is ConversionStrategy.ENTITY_COLLECTION_TO_REFERENCE_LIST:
        return f"{name}.ToListItemBagList()"

    return UnsupportedType(display_name=conversion.type_name)


def convert_from_bag_code(conversion: PropertyConversion) -> str | UnsupportedType:
    """Return the C# expression that reads the bag value back into the entity.

    Lists of references have no reverse conversion and are reported as
    unsupported.
    """
    name = conversion.property_name

    if conversion.strategy is ConversionStrategy.DIRECT_ASSIGNMENT:
        return name
    if conversion.strategy is ConversionStrategy.ENTITY_TO_REFERENCE:
        code = f"{name}.GetEntityId<{conversion.type_name}>( RockContext )"
        return f"{code}.Value" if conversion.requires_unwrap else code

    return UnsupportedType(display_name=conversion.type_name)


def settle_conversion(result: str | UnsupportedType, strict: bool = False) -> str:
    """Turn conversion code into text according to the failure policy.

    Args:
        result: A value from ``convert_to_bag_code`` or ``convert_from_bag_code``.
        strict: Raise instead of emitting a marker comment.

    Returns:
        The conversion code, or an inline marker comment in lenient mode.

    Raises:
        UnsupportedTypeError: In strict mode when *result* is a failure.
    """
    if isinstance(result, str):
        return result

    if strict:
        raise UnsupportedTypeError(result.display_name)

    return f"/* Unknown property type '{result.display_name}' for conversion to bag. */"


# ################
# Implementation
# ################


def _is_single_argument_collection(handle: TypeHandle) -> bool:
    return (
        handle.is_generic
        and len(handle.generic_arguments) == 1
        and (handle.generic_definition == COLLECTION_INTERFACE or handle.implements(COLLECTION_INTERFACE))
    )


def _has_required_id_sibling(prop: PropertyHandle) -> bool:
    """Return True if the declaring type has a non-nullable ``<Name>Id`` integer."""
    if prop.declaring_type is None:
        return False
    sibling = prop.declaring_type.get_property(f"{prop.name}Id")
    return sibling is not None and not sibling.type.is_generic and sibling.type.full_name == "System.Int32"
