# Copyright 2026 Declgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""TypeScript constant tables for classes of well-known identifiers."""

from __future__ import annotations

import json
from collections.abc import Iterable

from declgen.generator.comments import typescript_comment_block
from declgen.generator.text import alphabetical_key, constant_member_name
from declgen.model.handles import TypeHandle
from declgen.workspace.docs import DocumentationProvider

# ###############
# Public Interface
# ###############


def generate_system_guid_constants(handle: TypeHandle, docs: DocumentationProvider | None = None) -> str:
    """Generate an ``export const`` table from the string constants of a class.

    Constants are emitted alphabetically by their declared name, which is
    converted from ``UPPER_SNAKE`` to PascalCase. Every entry, including the
    last, ends with a comma.

    Args:
        handle: A class such as ``Rock.SystemGuid.DefinedType``.
        docs: Optional source of documentation comments.

    Returns:
        The TypeScript text, terminated by a newline.
    """
    lines = [
        typescript_comment_block(docs.type_summary(handle) if docs else None),
        f"export const {handle.name} = {{\n",
    ]

    for constant in sorted(handle.constants, key=lambda c: alphabetical_key(c.name)):
        if docs is not None:
            lines.append(typescript_comment_block(docs.member_summary(handle, constant.name), indent=4))
        value = json.dumps(constant.value, ensure_ascii=False)
        lines.append(f"    {constant_member_name(constant.name)}: {value},\n")

    lines.append("};\n")
    return "".join(lines)


def generate_system_guid_tables(handles: Iterable[TypeHandle], docs: DocumentationProvider | None = None) -> str:
    """Generate constant tables for several classes, sorted by name."""
    ordered = sorted(handles, key=lambda h: alphabetical_key(h.name))
    return "\n".join(generate_system_guid_constants(h, docs) for h in ordered)
