# Copyright 2026 Declgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Type descriptor representations produced by the classifier."""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict
from pydantic import Field as _Field

# ###############
# Public Interface
# ###############


class PrimitiveKind(Enum):
    """Primitive categories recognized by the classifier."""

    BOOLEAN = "boolean"
    NUMBER = "number"
    STRING = "string"
    IDENTIFIER = "identifier"
    TIMESTAMP = "timestamp"


class TypeMetadata(BaseModel):
    """Annotations attached to a type or member, read once per element.

    Attributes:
        obsolete: True if the element is marked obsolete.
        obsolete_message: The optional reason given with the obsolete marker.
        is_flags: True for a flags-style enumeration.
        description: Human-readable description text.
        domain: Domain tag of a domain-tagged enumeration.
    """

    model_config = ConfigDict(frozen=True)

    obsolete: bool = False
    obsolete_message: str | None = None
    is_flags: bool = False
    description: str | None = None
    domain: str | None = None


class PrimitiveDescriptor(BaseModel):
    """A primitive value; ``type_name`` keeps the source type, e.g. ``Int64``."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["primitive"] = "primitive"
    primitive: PrimitiveKind
    type_name: str


class NullableDescriptor(BaseModel):
    """A nullable wrapper around a value type."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["nullable"] = "nullable"
    inner: TypeDescriptor


class ArrayDescriptor(BaseModel):
    """A single-dimension array."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["array"] = "array"
    element: TypeDescriptor


class CollectionDescriptor(BaseModel):
    """An ordered collection of one element type."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["collection"] = "collection"
    element: TypeDescriptor


class DictionaryDescriptor(BaseModel):
    """A key/value dictionary."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["dictionary"] = "dictionary"
    key: TypeDescriptor
    value: TypeDescriptor


class GenericContainerDescriptor(BaseModel):
    """A named, non-collection generic type such as the validity-tracking box."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["container"] = "container"
    name: str
    arguments: tuple[TypeDescriptor, ...]


class GlobalEnumDescriptor(BaseModel):
    """An enumeration rooted under the reserved enumerations namespace.

    ``path`` is relative to the enumerations root, e.g. ``Crm/gender``.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["global_enum"] = "global_enum"
    name: str
    namespace: str
    path: str
    metadata: TypeMetadata = _Field(default_factory=TypeMetadata)


class DomainEnumDescriptor(BaseModel):
    """An enumeration located by its domain annotation rather than its namespace."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["domain_enum"] = "domain_enum"
    name: str
    namespace: str
    domain: str
    path: str
    metadata: TypeMetadata = _Field(default_factory=TypeMetadata)


class EntityDescriptor(BaseModel):
    """A reference to a persisted entity."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["entity"] = "entity"
    name: str
    namespace: str
    metadata: TypeMetadata = _Field(default_factory=TypeMetadata)


class ViewModelDescriptor(BaseModel):
    """A reference to a transfer bag or box type.

    ``path`` is relative to the view-model root, e.g. ``Crm/personBag``.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["view_model"] = "view_model"
    name: str
    namespace: str
    path: str
    metadata: TypeMetadata = _Field(default_factory=TypeMetadata)


class GenericParameterDescriptor(BaseModel):
    """An open generic type parameter."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["generic_parameter"] = "generic_parameter"
    name: str


class UnsupportedDescriptor(BaseModel):
    """A type that matched no classification rule."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["unsupported"] = "unsupported"
    display_name: str


# A classified type. The `kind` discriminator keeps every consumer's dispatch
# exhaustive over the same closed set of shapes.
TypeDescriptor = Annotated[
    PrimitiveDescriptor
    | NullableDescriptor
    | ArrayDescriptor
    | CollectionDescriptor
    | DictionaryDescriptor
    | GenericContainerDescriptor
    | GlobalEnumDescriptor
    | DomainEnumDescriptor
    | EntityDescriptor
    | ViewModelDescriptor
    | GenericParameterDescriptor
    | UnsupportedDescriptor,
    _Field(discriminator="kind"),
]


class ImportDescriptor(BaseModel):
    """A request to bring a named declaration into scope.

    For TypeScript ``path`` is a module specifier; for C# it is a namespace.
    """

    model_config = ConfigDict(frozen=True)

    path: str
    imported_name: str


# Resolve forward references for models that use TypeDescriptor.
NullableDescriptor.model_rebuild()
ArrayDescriptor.model_rebuild()
CollectionDescriptor.model_rebuild()
DictionaryDescriptor.model_rebuild()
GenericContainerDescriptor.model_rebuild()
