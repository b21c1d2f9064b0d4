# Copyright 2026 Declgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""TypeScript declarations for enumerations.

Every enumeration produces three declarations: a value table, a parallel
description table keyed by raw value, and a type alias.
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from dataclasses import dataclass

from declgen.generator.classifier import read_metadata
from declgen.generator.comments import typescript_comment_block
from declgen.generator.text import alphabetical_key, split_case
from declgen.model.handles import TypeHandle
from declgen.workspace.config import DEFAULT_CONFIG, GeneratorConfig
from declgen.workspace.docs import DocumentationProvider

# ###############
# Public Interface
# ###############


@dataclass(frozen=True)
class EnumMember:
    """One member of an enumeration, read once from its field.

    Attributes:
        field_name: The member name.
        raw_value: The underlying integer value.
        description: Text of the description annotation, if any.
        obsolete: True if the member is marked obsolete.
        obsolete_message: Reason given with the obsolete marker.
        is_flags: True if the enumeration is flags-style.
    """

    field_name: str
    raw_value: int
    description: str | None = None
    obsolete: bool = False
    obsolete_message: str | None = None
    is_flags: bool = False

    @property
    def literal(self) -> str:
        """The value as written in the value table."""
        if self.is_flags:
            return f"0x{self.raw_value & 0xFFFFFFFF:04X}"
        return str(self.raw_value)

    @property
    def key(self) -> str:
        """The value as written as a description table key."""
        if self.raw_value < 0:
            return f"[{self.raw_value}]"
        return str(self.raw_value)

    @property
    def display_text(self) -> str:
        """The human-readable description of the member."""
        if self.description is not None:
            return self.description
        return split_case(self.field_name) or ""


def read_enum_members(handle: TypeHandle, config: GeneratorConfig = DEFAULT_CONFIG) -> list[EnumMember]:
    """Read the members of an enumeration in declaration order."""
    is_flags = read_metadata(handle, config).is_flags
    members: list[EnumMember] = []

    for field in handle.fields:
        metadata = read_metadata(field, config)
        members.append(
            EnumMember(
                field_name=field.name,
                raw_value=field.value,
                description=metadata.description,
                obsolete=metadata.obsolete,
                obsolete_message=metadata.obsolete_message,
                is_flags=is_flags,
            )
        )

    return members


def described_members(members: list[EnumMember]) -> list[EnumMember]:
    """Return the members that appear in the description table.

    An obsolete member is dropped when a non-obsolete member has the same value.
    """
    current_values = {m.raw_value for m in members if not m.obsolete}
    return [m for m in members if not (m.obsolete and m.raw_value in current_values)]


def generate_enum_declaration(
    handle: TypeHandle,
    docs: DocumentationProvider | None = None,
    config: GeneratorConfig = DEFAULT_CONFIG,
) -> str:
    """Generate the value table, description table and alias of an enumeration.

    Args:
        handle: The enumeration type.
        docs: Optional source of documentation comments.
        config: Well-known annotation names.

    Returns:
        The TypeScript text, terminated by a newline.

    Raises:
        MetadataError: If an annotation on the type or a member is malformed.
    """
    metadata = read_metadata(handle, config)
    members = read_enum_members(handle, config)
    name = handle.name
    type_comment = typescript_comment_block(docs.type_summary(handle) if docs else None)

    values = [type_comment]
    if metadata.obsolete:
        values.append(_deprecation_marker(metadata.obsolete_message, 0))
    values.append(f"export const {name} = {{\n")
    values.append(
        _table_entries(
            [
                _member_comment(handle, member, docs)
                + (_deprecation_marker(member.obsolete_message, 4) if member.obsolete else "")
                + f"    {member.field_name}: {member.literal}"
                for member in members
            ]
        )
    )
    values.append("} as const;\n")

    descriptions = [
        type_comment,
        f"export const {name}Description: Record<number, string> = {{\n",
        _table_entries(
            [
                f"    {member.key}: {json.dumps(member.display_text, ensure_ascii=False)}"
                for member in described_members(members)
            ]
        ),
        "};\n",
    ]

    if metadata.is_flags:
        alias = f"export type {name} = number;\n"
    else:
        alias = f"export type {name} = typeof {name}[keyof typeof {name}];\n"

    return "\n".join(["".join(values), "".join(descriptions), type_comment + alias])


def generate_enum_declarations(
    handles: Iterable[TypeHandle],
    docs: DocumentationProvider | None = None,
    config: GeneratorConfig = DEFAULT_CONFIG,
) -> str:
    """Generate declarations for several enumerations, sorted by name."""
    ordered = sorted(handles, key=lambda h: alphabetical_key(h.name))
    return "\n".join(generate_enum_declaration(h, docs, config) for h in ordered)


# ################
# Implementation
# ################


def _table_entries(entries: list[str]) -> str:
    """Join table entries with a comma and a blank line between them."""
    if not entries:
        return ""
    return ",\n\n".join(entries) + "\n"


def _deprecation_marker(message: str | None, indent: int) -> str:
    pad = " " * indent
    if message:
        return f"{pad}/** @deprecated {message} */\n"
    return f"{pad}/** @deprecated */\n"


def _member_comment(handle: TypeHandle, member: EnumMember, docs: DocumentationProvider | None) -> str:
    if docs is None:
        return ""
    return typescript_comment_block(docs.member_summary(handle, member.field_name), indent=4)
