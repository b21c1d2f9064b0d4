# Copyright 2026 Declgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for generated file assembly."""

from declgen.generator.files import (
    assemble_csharp_file,
    assemble_typescript_file,
    render_csharp_usings,
    render_typescript_imports,
)
from declgen.model.types import ImportDescriptor
from declgen.workspace.config import GeneratorConfig


# ###############
# Helpers
# ###############

GUID_IMPORT = ImportDescriptor(path="@Obsidian/Types", imported_name="Guid")
LIST_ITEM_BAG_IMPORT = ImportDescriptor(path="@Obsidian/ViewModels/Utility/listItemBag", imported_name="ListItemBag")

HEADER_CONFIG = GeneratorConfig(
    copyright_comment="// Copyright by Example Church",
    auto_generated_comment="// <auto-generated />",
)


# ###############
# Import Statements
# ###############


def test_typescript_imports_grouped_by_module() -> None:
    """Names from one module share a statement; relative modules come last."""
    imports = [
        ImportDescriptor(path="./helpers", imported_name="format"),
        LIST_ITEM_BAG_IMPORT,
        ImportDescriptor(path="vue", imported_name="ref"),
        ImportDescriptor(path="vue", imported_name="computed"),
        GUID_IMPORT,
    ]
    expected = (
        'import { Guid } from "@Obsidian/Types";\n'
        'import { ListItemBag } from "@Obsidian/ViewModels/Utility/listItemBag";\n'
        'import { computed, ref } from "vue";\n'
        'import { format } from "./helpers";\n'
    )
    assert render_typescript_imports(imports) == expected


def test_csharp_usings_grouped_by_root() -> None:
    """System namespaces come first and groups are separated by blank lines."""
    namespaces = ["Rock.ViewModels.Utility", "System.Collections.Generic", "System", "Rock.Model", "Newtonsoft.Json"]
    expected = (
        "using System;\n"
        "using System.Collections.Generic;\n"
        "\n"
        "using Newtonsoft.Json;\n"
        "\n"
        "using Rock.Model;\n"
        "using Rock.ViewModels.Utility;\n"
    )
    assert render_csharp_usings(namespaces) == expected


def test_no_imports_render_nothing() -> None:
    """Empty import lists render as empty strings."""
    assert render_typescript_imports([]) == ""
    assert render_csharp_usings([]) == ""


# ###############
# TypeScript Files
# ###############


def test_typescript_file_with_header() -> None:
    """Header comments, imports and body are separated by blank lines."""
    text = assemble_typescript_file("export type A = {\n};\n", [GUID_IMPORT], HEADER_CONFIG)
    expected = (
        "// Copyright by Example Church\n"
        "\n"
        "// <auto-generated />\n"
        "\n"
        'import { Guid } from "@Obsidian/Types";\n'
        "\n"
        "export type A = {\n"
        "};\n"
    )
    assert text == expected


def test_typescript_file_without_header() -> None:
    """The default configuration adds no header."""
    assert assemble_typescript_file("export type A = {\n};\n") == "export type A = {\n};\n"


def test_typescript_file_without_auto_generated_comment() -> None:
    """The auto-generated comment can be turned off per file."""
    text = assemble_typescript_file("body\n", config=HEADER_CONFIG, auto_generated=False)
    assert text == "// Copyright by Example Church\n\nbody\n"


# ###############
# C# Files
# ###############


def test_csharp_file_wraps_namespace() -> None:
    """The body is wrapped in a namespace and the file's own namespace is not imported."""
    imports = [
        ImportDescriptor(path="Rock.ViewModels.Crm", imported_name="GroupBag"),
        ImportDescriptor(path="System", imported_name="Guid"),
    ]
    body = "    public class PersonBag\n    {\n    }\n"
    expected = "using System;\n\nnamespace Rock.ViewModels.Crm\n{\n    public class PersonBag\n    {\n    }\n}\n"
    assert assemble_csharp_file(body, "Rock.ViewModels.Crm", imports) == expected


def test_csharp_file_header() -> None:
    """C# files carry the copyright comment but not the auto-generated one by default."""
    text = assemble_csharp_file("", "Rock.ViewModels.Crm", config=HEADER_CONFIG)
    assert text == "// Copyright by Example Church\n\nnamespace Rock.ViewModels.Crm\n{\n}\n"
