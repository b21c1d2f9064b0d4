# Copyright 2026 Declgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Reflection handles: the input graph consumed by the classifier.

A handle mirrors what a runtime reflection API exposes about a type: its
name and namespace, generic shape, implemented interfaces, custom attributes
and declared members. Handles are plain mutable dataclasses so that a type
catalog can wire up self-referencing entity graphs after construction.
"""

from __future__ import annotations

from dataclasses import dataclass, field

# ###############
# Public Interface
# ###############

NULLABLE_DEFINITION = "System.Nullable`1"
REQUIRED_ATTRIBUTE = "System.ComponentModel.DataAnnotations.RequiredAttribute"

AttributeArgument = str | int | float | bool | None


@dataclass(frozen=True)
class AttributeData:
    """A custom attribute applied to a type or member.

    Attributes:
        type_name: Full name of the attribute type, e.g. ``System.ObsoleteAttribute``.
        arguments: Positional constructor arguments in declaration order.
    """

    type_name: str
    arguments: tuple[AttributeArgument, ...] = ()


@dataclass(eq=False)
class TypeHandle:
    """A reflected type.

    Attributes:
        name: The simple type name. Generic definitions carry their arity,
            e.g. ``List`1``.
        namespace: The containing namespace, or None for generic parameters.
        is_enum: True when the type is an enumeration.
        is_array: True when the type is a single-dimension array.
        element_type: The element type of an array.
        is_generic_parameter: True for an open type parameter such as ``T``.
        generic_definition: Full name of the open generic definition for a
            constructed generic type, e.g. ``System.Collections.Generic.List`1``.
        generic_arguments: Type arguments of a constructed generic type.
        interfaces: Full names of implemented interfaces. Generic interfaces
            are listed by definition name, e.g. ``System.Collections.Generic.ICollection`1``.
        attributes: Custom attributes in declaration order.
        properties: Public instance properties.
        fields: Public static fields (the members of an enumeration).
        constants: Public static string constants of a class, such as the
            well-known identifiers of a SystemGuid class.
        type_parameters: Names of the type parameters of a generic type definition.
    """

    name: str
    namespace: str | None = None
    is_enum: bool = False
    is_array: bool = False
    element_type: TypeHandle | None = None
    is_generic_parameter: bool = False
    generic_definition: str | None = None
    generic_arguments: list[TypeHandle] = field(default_factory=list)
    interfaces: list[str] = field(default_factory=list)
    attributes: list[AttributeData] = field(default_factory=list)
    properties: list[PropertyHandle] = field(default_factory=list)
    fields: list[EnumFieldHandle] = field(default_factory=list)
    constants: list[ConstantFieldHandle] = field(default_factory=list)
    type_parameters: list[str] = field(default_factory=list)

    @property
    def full_name(self) -> str:
        """Namespace-qualified name without generic arguments."""
        if self.namespace:
            return f"{self.namespace}.{self.name}"
        return self.name

    @property
    def is_generic(self) -> bool:
        """Return True for a constructed generic type."""
        return self.generic_definition is not None

    @property
    def is_nullable_wrapper(self) -> bool:
        """Return True when this is ``Nullable<T>`` around a value type."""
        return self.generic_definition == NULLABLE_DEFINITION and len(self.generic_arguments) == 1

    @property
    def identity(self) -> tuple[object, ...]:
        """Structural identity: fully-qualified name plus generic arguments.

        Generators compare identities to recognise references to the types
        they are declaring, which are never imported.
        """
        if self.is_array and self.element_type is not None:
            return ("[]", self.element_type.identity)
        return (self.full_name, tuple(arg.identity for arg in self.generic_arguments))

    def implements(self, interface_name: str) -> bool:
        """Return True if the type implements the named interface."""
        return interface_name in self.interfaces

    def get_attribute(self, type_name: str) -> AttributeData | None:
        """Return the first attribute of the given type, or None."""
        return next((a for a in self.attributes if a.type_name == type_name), None)

    def get_property(self, name: str) -> PropertyHandle | None:
        """Return the declared property with the given name, or None."""
        return next((p for p in self.properties if p.name == name), None)

    def __repr__(self) -> str:
        return f"TypeHandle({self.full_name!r})"


@dataclass(eq=False)
class PropertyHandle:
    """A public property declared on a type.

    Attributes:
        name: The property name in PascalCase.
        type: The declared property type.
        declaring_type: The type that declares the property. Used to look up
            sibling properties such as ``<Name>Id``.
        attributes: Custom attributes in declaration order.
        is_required: Explicit required flag. When None, the required
            annotation in ``attributes`` decides.
    """

    name: str
    type: TypeHandle
    declaring_type: TypeHandle | None = None
    attributes: list[AttributeData] = field(default_factory=list)
    is_required: bool | None = None

    @property
    def has_required_annotation(self) -> bool:
        """Return True if the property is explicitly marked as required."""
        if self.is_required is not None:
            return self.is_required
        return any(a.type_name == REQUIRED_ATTRIBUTE for a in self.attributes)

    def get_attribute(self, type_name: str) -> AttributeData | None:
        """Return the first attribute of the given type, or None."""
        return next((a for a in self.attributes if a.type_name == type_name), None)

    def __repr__(self) -> str:
        return f"PropertyHandle({self.name!r}: {self.type.full_name!r})"


@dataclass(frozen=True)
class EnumFieldHandle:
    """A member of an enumeration together with its raw integer value."""

    name: str
    value: int
    attributes: tuple[AttributeData, ...] = ()

    def get_attribute(self, type_name: str) -> AttributeData | None:
        """Return the first attribute of the given type, or None."""
        return next((a for a in self.attributes if a.type_name == type_name), None)


@dataclass(frozen=True)
class ConstantFieldHandle:
    """A public static string constant declared on a class."""

    name: str
    value: str
    attributes: tuple[AttributeData, ...] = ()


def system_type(name: str) -> TypeHandle:
    """Create a handle for a non-generic type in the ``System`` namespace."""
    return TypeHandle(name=name, namespace="System")


def nullable_of(inner: TypeHandle) -> TypeHandle:
    """Create a ``Nullable<inner>`` handle."""
    return TypeHandle(
        name="Nullable`1",
        namespace="System",
        generic_definition=NULLABLE_DEFINITION,
        generic_arguments=[inner],
    )


def array_of(element: TypeHandle) -> TypeHandle:
    """Create an array handle with the given element type."""
    return TypeHandle(
        name=f"{element.name}[]",
        namespace=element.namespace,
        is_array=True,
        element_type=element,
    )


def generic_parameter(name: str) -> TypeHandle:
    """Create a handle for an open generic type parameter."""
    return TypeHandle(name=name, is_generic_parameter=True)
