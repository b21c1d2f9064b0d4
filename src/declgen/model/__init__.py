# Copyright 2026 Declgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Input reflection handles and classified type descriptors."""

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
    TypeMetadata,
    UnsupportedDescriptor,
    ViewModelDescriptor,
)

__all__ = [
    # Reflection handles
    "AttributeData",
    "ConstantFieldHandle",
    "EnumFieldHandle",
    "PropertyHandle",
    "TypeHandle",
    "array_of",
    "generic_parameter",
    "nullable_of",
    "system_type",
    # Descriptors
    "PrimitiveKind",
    "TypeMetadata",
    "PrimitiveDescriptor",
    "NullableDescriptor",
    "ArrayDescriptor",
    "CollectionDescriptor",
    "DictionaryDescriptor",
    "GenericContainerDescriptor",
    "GlobalEnumDescriptor",
    "DomainEnumDescriptor",
    "EntityDescriptor",
    "ViewModelDescriptor",
    "GenericParameterDescriptor",
    "UnsupportedDescriptor",
    "TypeDescriptor",
    "ImportDescriptor",
]
