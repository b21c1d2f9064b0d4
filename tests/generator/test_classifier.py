# Copyright 2026 Declgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the type classifier."""

import pytest

from declgen.generator.classifier import MetadataError, TypeCycleError, classify, is_under_namespace, read_metadata
from declgen.model.handles import (
    AttributeData,
    EnumFieldHandle,
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
    NullableDescriptor,
    PrimitiveDescriptor,
    PrimitiveKind,
    UnsupportedDescriptor,
    ViewModelDescriptor,
)
from declgen.workspace.config import GeneratorConfig


# ###############
# Helpers
# ###############

DOMAIN_ATTRIBUTE = "Rock.Enums.EnumDomainAttribute"


def _generic(name: str, namespace: str, *args: TypeHandle, interfaces: list[str] | None = None) -> TypeHandle:
    return TypeHandle(
        name=name,
        namespace=namespace,
        generic_definition=f"{namespace}.{name}",
        generic_arguments=list(args),
        interfaces=interfaces or [],
    )


def _list_of(element: TypeHandle) -> TypeHandle:
    return _generic(
        "List`1",
        "System.Collections.Generic",
        element,
        interfaces=["System.Collections.Generic.ICollection`1"],
    )


def _entity(name: str = "Person") -> TypeHandle:
    return TypeHandle(name=name, namespace="Rock.Model", interfaces=["Rock.Data.IEntity"])


# ###############
# Primitives
# ###############


@pytest.mark.parametrize(
    ("name", "kind"),
    [
        ("Boolean", PrimitiveKind.BOOLEAN),
        ("Int32", PrimitiveKind.NUMBER),
        ("Int64", PrimitiveKind.NUMBER),
        ("Decimal", PrimitiveKind.NUMBER),
        ("String", PrimitiveKind.STRING),
        ("Guid", PrimitiveKind.IDENTIFIER),
        ("DateTime", PrimitiveKind.TIMESTAMP),
        ("DateTimeOffset", PrimitiveKind.TIMESTAMP),
    ],
)
def test_primitive_types(name: str, kind: PrimitiveKind) -> None:
    """System value types classify as primitives and keep their source type name."""
    assert classify(system_type(name)) == PrimitiveDescriptor(primitive=kind, type_name=name)


def test_nullable_wraps_inner_descriptor() -> None:
    """A Nullable<T> classifies as a nullable around the classified payload."""
    descriptor = classify(nullable_of(system_type("Guid")))
    assert descriptor == NullableDescriptor(
        inner=PrimitiveDescriptor(primitive=PrimitiveKind.IDENTIFIER, type_name="Guid")
    )


# ###############
# Containers
# ###############


def test_array_of_entities() -> None:
    """Arrays classify their element type."""
    descriptor = classify(array_of(_entity()))
    assert isinstance(descriptor, ArrayDescriptor)
    assert isinstance(descriptor.element, EntityDescriptor)


def test_collection() -> None:
    """A single-argument generic implementing ICollection`1 is a collection."""
    descriptor = classify(_list_of(system_type("String")))
    assert descriptor == CollectionDescriptor(
        element=PrimitiveDescriptor(primitive=PrimitiveKind.STRING, type_name="String")
    )


def test_dictionary() -> None:
    """Dictionary<K, V> classifies both its key and its value."""
    handle = _generic("Dictionary`2", "System.Collections.Generic", system_type("String"), system_type("Int32"))
    descriptor = classify(handle)
    assert isinstance(descriptor, DictionaryDescriptor)
    assert descriptor.key.kind == "primitive"
    assert descriptor.value == PrimitiveDescriptor(primitive=PrimitiveKind.NUMBER, type_name="Int32")


def test_box_is_generic_container() -> None:
    """The validity-tracking box is a named generic container."""
    bag = TypeHandle(name="PersonBag", namespace="Rock.ViewModels.Crm")
    handle = _generic("ValidPropertiesBox`1", "Rock.ViewModels.Utility", bag)
    descriptor = classify(handle)
    assert isinstance(descriptor, GenericContainerDescriptor)
    assert descriptor.name == "ValidPropertiesBox"
    assert isinstance(descriptor.arguments[0], ViewModelDescriptor)


def test_unknown_generic_is_unsupported() -> None:
    """A generic type matching no container rule falls through to unsupported."""
    handle = _generic("Tuple`2", "System", system_type("Int32"), system_type("String"))
    assert classify(handle) == UnsupportedDescriptor(display_name="Tuple<Int32, String>")


# ###############
# Enumerations
# ###############


def test_global_enum_path() -> None:
    """Enumerations under the reserved namespace use their relative namespace path."""
    handle = TypeHandle(name="Gender", namespace="Rock.Enums.Crm", is_enum=True)
    descriptor = classify(handle)
    assert isinstance(descriptor, GlobalEnumDescriptor)
    assert descriptor.path == "Crm/gender"


def test_global_enum_at_root() -> None:
    """An enumeration directly in the root namespace has a single-segment path."""
    handle = TypeHandle(name="RockVersion", namespace="Rock.Enums", is_enum=True)
    descriptor = classify(handle)
    assert isinstance(descriptor, GlobalEnumDescriptor)
    assert descriptor.path == "rockVersion"


def test_domain_enum_folder() -> None:
    """A domain-tagged enumeration outside the root is placed in its domain folder."""
    handle = TypeHandle(
        name="GroupLocationPickerMode",
        namespace="Rock.Model",
        is_enum=True,
        attributes=[AttributeData(DOMAIN_ATTRIBUTE, ("GROUP",))],
    )
    descriptor = classify(handle)
    assert isinstance(descriptor, DomainEnumDescriptor)
    assert descriptor.domain == "Group"
    assert descriptor.path == "Group/groupLocationPickerMode"


def test_domain_enum_keeps_two_letter_acronym() -> None:
    """Two-letter domains such as UI are kept in capitals."""
    handle = TypeHandle(
        name="ControlType",
        namespace="Rock.Web",
        is_enum=True,
        attributes=[AttributeData(DOMAIN_ATTRIBUTE, ("UI",))],
    )
    descriptor = classify(handle)
    assert isinstance(descriptor, DomainEnumDescriptor)
    assert descriptor.path == "UI/controlType"


def test_untagged_enum_degrades_to_number() -> None:
    """An enumeration with no import location classifies as a number."""
    handle = TypeHandle(name="Legacy", namespace="Rock.Model", is_enum=True)
    assert classify(handle) == PrimitiveDescriptor(primitive=PrimitiveKind.NUMBER, type_name="Legacy")


def test_domain_annotation_without_argument() -> None:
    """A domain annotation missing its argument is a metadata error."""
    handle = TypeHandle(
        name="Broken",
        namespace="Rock.Model",
        is_enum=True,
        attributes=[AttributeData(DOMAIN_ATTRIBUTE)],
    )
    with pytest.raises(MetadataError, match="missing its argument"):
        classify(handle)


# ###############
# Named Types
# ###############


def test_generic_parameter() -> None:
    """Open type parameters classify by name."""
    assert classify(generic_parameter("TEntityBag")) == GenericParameterDescriptor(name="TEntityBag")


def test_entity_carries_metadata() -> None:
    """Entities keep their obsolete metadata."""
    handle = _entity()
    handle.attributes.append(AttributeData("System.ObsoleteAttribute", ("Use Contact",)))
    descriptor = classify(handle)
    assert isinstance(descriptor, EntityDescriptor)
    assert descriptor.metadata.obsolete
    assert descriptor.metadata.obsolete_message == "Use Contact"


@pytest.mark.parametrize(
    ("name", "namespace", "path"),
    [
        ("PersonBag", "Rock.ViewModels.Crm", "Crm/personBag"),
        ("DetailBox", "Rock.ViewModels.Blocks.Crm", "Blocks/Crm/detailBox"),
        ("ListItemBag", "Rock.ViewModels", "listItemBag"),
    ],
)
def test_view_model_path(name: str, namespace: str, path: str) -> None:
    """Bags and boxes under the view-model root resolve to a relative module path."""
    descriptor = classify(TypeHandle(name=name, namespace=namespace))
    assert isinstance(descriptor, ViewModelDescriptor)
    assert descriptor.path == path


def test_class_without_suffix_is_unsupported() -> None:
    """A view-model namespace class without the Bag or Box suffix is unsupported."""
    descriptor = classify(TypeHandle(name="Helper", namespace="Rock.ViewModels.Crm"))
    assert descriptor == UnsupportedDescriptor(display_name="Helper")


def test_custom_config_roots() -> None:
    """Namespace roots come from the configuration."""
    config = GeneratorConfig(enums_namespace="Acme.Enums", entity_interface="Acme.IRecord")
    enum = TypeHandle(name="Color", namespace="Acme.Enums.Paint", is_enum=True)
    record = TypeHandle(name="Order", namespace="Acme", interfaces=["Acme.IRecord"])

    assert isinstance(classify(enum, config), GlobalEnumDescriptor)
    assert isinstance(classify(record, config), EntityDescriptor)
    assert isinstance(classify(_entity()), EntityDescriptor)
    assert isinstance(classify(_entity(), config), UnsupportedDescriptor)


# ###############
# Cycles
# ###############


def test_self_nesting_type_raises() -> None:
    """A generic whose argument is itself is reported instead of recursing forever."""
    handle = _generic("Node`1", "Acme", interfaces=["System.Collections.Generic.ICollection`1"])
    handle.generic_arguments.append(handle)
    with pytest.raises(TypeCycleError) as exc_info:
        classify(handle)
    assert exc_info.value.display_name == "Acme.Node`1"


def test_repeated_sibling_types_are_not_cycles() -> None:
    """The same type in two sibling positions is not a cycle."""
    person = _entity()
    handle = _generic("Dictionary`2", "System.Collections.Generic", person, person)
    descriptor = classify(handle)
    assert isinstance(descriptor, DictionaryDescriptor)


# ###############
# Metadata
# ###############


def test_read_metadata_from_enum_field() -> None:
    """Obsolete and description annotations are read from enumeration fields."""
    field = EnumFieldHandle(
        name="Yes",
        value=1,
        attributes=(
            AttributeData("System.ObsoleteAttribute"),
            AttributeData("System.ComponentModel.DescriptionAttribute", ("Affirmative",)),
        ),
    )
    metadata = read_metadata(field)
    assert metadata.obsolete
    assert metadata.obsolete_message is None
    assert metadata.description == "Affirmative"
    assert not metadata.is_flags


def test_read_metadata_rejects_non_string_description() -> None:
    """A description annotation with a non-string argument is a metadata error."""
    field = EnumFieldHandle(
        name="Yes",
        value=1,
        attributes=(AttributeData("System.ComponentModel.DescriptionAttribute", (42,)),),
    )
    with pytest.raises(MetadataError):
        read_metadata(field)


def test_is_under_namespace() -> None:
    """A namespace is under a root when equal to it or a dotted descendant."""
    assert is_under_namespace("Rock.Enums", "Rock.Enums")
    assert is_under_namespace("Rock.Enums.Crm", "Rock.Enums")
    assert not is_under_namespace("Rock.EnumsExtra", "Rock.Enums")
    assert not is_under_namespace(None, "Rock.Enums")
