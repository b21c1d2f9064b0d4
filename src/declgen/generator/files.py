# Copyright 2026 Declgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""File assembly: import and using statements, headers and namespace blocks."""

from __future__ import annotations

from collections.abc import Iterable

from declgen.model.types import ImportDescriptor
from declgen.workspace.config import DEFAULT_CONFIG, GeneratorConfig

# ###############
# Public Interface
# ###############


def render_typescript_imports(imports: Iterable[ImportDescriptor]) -> str:
    """Render TypeScript import statements, one per module.

    Names from the same module share one statement, as in
    ``import { beta, gamma } from "alpha";``. Modules are sorted
    alphabetically with relative paths last.
    """
    named: dict[str, set[str]] = {}
    for imp in imports:
        named.setdefault(imp.path, set()).add(imp.imported_name)

    lines: list[str] = []
    for path in sorted(named, key=lambda p: (p.startswith("."), p)):
        names = ", ".join(sorted(named[path]))
        lines.append(f'import {{ {names} }} from "{path}";\n')

    return "".join(lines)


def render_csharp_usings(namespaces: Iterable[str]) -> str:
    """Render C# using directives.

    ``System`` namespaces come first. The remaining namespaces are grouped by
    their first segment, and groups are separated by a blank line.
    """
    ordered = sorted(set(namespaces), key=lambda ns: (_root(ns) != "System", ns))
    groups: list[list[str]] = []

    for namespace in ordered:
        if groups and _root(groups[-1][0]) == _root(namespace):
            groups[-1].append(namespace)
        else:
            groups.append([namespace])

    return "\n".join("".join(f"using {ns};\n" for ns in group) for group in groups)


def assemble_typescript_file(
    body: str,
    imports: Iterable[ImportDescriptor] = (),
    config: GeneratorConfig = DEFAULT_CONFIG,
    auto_generated: bool = True,
) -> str:
    """Assemble a complete TypeScript file.

    Args:
        body: The declarations.
        imports: Imports required by the declarations.
        config: Supplies the copyright and auto-generated comments.
        auto_generated: Include the auto-generated comment, if one is configured.

    Returns:
        The file text: header comments, imports and body separated by blank lines.
    """
    sections = _header(config, auto_generated)
    import_text = render_typescript_imports(imports)
    if import_text:
        sections.append(import_text)
    sections.append(body)
    return "\n".join(sections)


def assemble_csharp_file(
    body: str,
    namespace: str,
    imports: Iterable[ImportDescriptor] = (),
    config: GeneratorConfig = DEFAULT_CONFIG,
    auto_generated: bool = False,
) -> str:
    """Assemble a complete C# file with the body wrapped in a namespace block.

    Args:
        body: The class declarations, indented for placement inside the namespace.
        namespace: The namespace the classes are placed in.
        imports: Imports required by the declarations; only their paths are used.
        config: Supplies the copyright and auto-generated comments.
        auto_generated: Include the auto-generated comment, if one is configured.

    Returns:
        The file text.
    """
    sections = _header(config, auto_generated)
    usings = render_csharp_usings(imp.path for imp in imports if imp.path and imp.path != namespace)
    if usings:
        sections.append(usings)
    sections.append(f"namespace {namespace}\n{{\n{body}}}\n")
    return "\n".join(sections)


# ################
# Implementation
# ################


def _root(namespace: str) -> str:
    return namespace.split(".", 1)[0]


def _header(config: GeneratorConfig, auto_generated: bool) -> list[str]:
    """Return the configured header comments, each ending with a newline."""
    comments = [config.copyright_comment]
    if auto_generated:
        comments.append(config.auto_generated_comment)
    return [c if c.endswith("\n") else c + "\n" for c in comments if c]
