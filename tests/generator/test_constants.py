# Copyright 2026 Declgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for constant tables of well-known identifiers."""

from declgen.generator.constants import generate_system_guid_constants, generate_system_guid_tables
from declgen.model.handles import ConstantFieldHandle, TypeHandle
from declgen.workspace.docs import MappingDocumentationProvider


# ###############
# Helpers
# ###############

PERSON_GUID = "72657ED8-D16E-492E-AC12-144C5E7567E7"
NOBODY_GUID = "0BA03B8F-F1DA-4DD9-A3A1-2D0F9B4C0C1E"


def _table(name: str, *constants: tuple[str, str]) -> TypeHandle:
    return TypeHandle(
        name=name,
        namespace="Rock.SystemGuid",
        constants=[ConstantFieldHandle(field_name, value) for field_name, value in constants],
    )


# ###############
# Constant Tables
# ###############


def test_constants_sorted_and_renamed() -> None:
    """Constants are sorted by declared name and converted to PascalCase."""
    table = _table("Person", ("PERSON_NOBODY", NOBODY_GUID), ("ADMIN", PERSON_GUID))
    expected = f"""\
export const Person = {{
    Admin: "{PERSON_GUID}",
    PersonNobody: "{NOBODY_GUID}",
}};
"""
    assert generate_system_guid_constants(table) == expected


def test_constants_with_documentation() -> None:
    """Type and constant summaries become comments."""
    table = _table("Person", ("ADMIN", PERSON_GUID))
    docs = MappingDocumentationProvider(
        {
            "T:Rock.SystemGuid.Person": "System persons.",
            "F:Rock.SystemGuid.Person.ADMIN": "The administrator.",
        }
    )
    expected = f"""\
/** System persons. */
export const Person = {{
    /** The administrator. */
    Admin: "{PERSON_GUID}",
}};
"""
    assert generate_system_guid_constants(table, docs) == expected


def test_empty_table() -> None:
    """A class without constants renders an empty table."""
    assert generate_system_guid_constants(_table("Empty")) == "export const Empty = {\n};\n"


def test_tables_sorted_by_name() -> None:
    """Several tables are ordered alphabetically and separated by a blank line."""
    person = _table("Person", ("ADMIN", PERSON_GUID))
    category = _table("Category", ("PERSON", NOBODY_GUID))

    text = generate_system_guid_tables([person, category])
    assert text.startswith("export const Category = {")
    assert "};\n\nexport const Person = {" in text
