# Copyright 2026 Declgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Entry point for the declgen command-line interface."""

import argparse
import logging
import sys
from pathlib import Path

from declgen.generator.classifier import MetadataError, TypeCycleError
from declgen.generator.constants import generate_system_guid_tables
from declgen.generator.enums import generate_enum_declarations
from declgen.generator.files import assemble_csharp_file, assemble_typescript_file
from declgen.generator.mapper import UnsupportedTypeError
from declgen.generator.text import strip_arity
from declgen.generator.view_models import generate_entity_bag, generate_options_bag, generate_view_models
from declgen.model.handles import TypeHandle
from declgen.workspace.catalog import CatalogError, TypeCatalog, TypeExpressionError, load_catalog
from declgen.workspace.config import (
    CONFIG_FILE_NAME,
    DEFAULT_CONFIG,
    GeneratorConfig,
    GeneratorConfigError,
    load_generator_config,
)
from declgen.workspace.docs import DocumentationError, XmlDocReader

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


def main() -> None:
    """Run the declgen CLI."""
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--config",
        type=Path,
        default=None,
        help=f"Generator configuration file (default: {CONFIG_FILE_NAME} in the current directory, if present)",
    )
    common.add_argument(
        "--docs",
        type=Path,
        action="append",
        default=[],
        help="XML documentation file to read comments from (may be repeated)",
    )
    common.add_argument(
        "--output",
        "-o",
        type=Path,
        default=None,
        help="File to write the generated code to (default: standard output)",
    )
    common.add_argument(
        "--strict",
        action="store_true",
        help="Fail on unsupported types instead of emitting placeholders",
    )
    common.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )

    parser = argparse.ArgumentParser(
        prog="declgen",
        description="declgen: generate TypeScript and C# declarations from reflected types",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    # view-models subcommand
    view_models_parser = subparsers.add_parser(
        "view-models",
        parents=[common],
        help="Generate TypeScript view-model types",
        description="Generate TypeScript object types for classes in a type catalog.",
    )
    view_models_parser.add_argument("catalog", type=Path, help="YAML type catalog")
    view_models_parser.add_argument(
        "types",
        nargs="*",
        metavar="TYPE",
        help="Types to generate (default: every class in the catalog)",
    )

    # enums subcommand
    enums_parser = subparsers.add_parser(
        "enums",
        parents=[common],
        help="Generate TypeScript enumeration tables",
        description="Generate value tables, description tables and aliases for enumerations.",
    )
    enums_parser.add_argument("catalog", type=Path, help="YAML type catalog")
    enums_parser.add_argument(
        "types",
        nargs="*",
        metavar="TYPE",
        help="Enumerations to generate (default: every enumeration in the catalog)",
    )

    # system-guids subcommand
    system_guids_parser = subparsers.add_parser(
        "system-guids",
        parents=[common],
        help="Generate TypeScript constant tables of well-known identifiers",
        description="Generate an export const table from the string constants of each class.",
    )
    system_guids_parser.add_argument("catalog", type=Path, help="YAML type catalog")
    system_guids_parser.add_argument(
        "types",
        nargs="*",
        metavar="TYPE",
        help="Classes to generate (default: every class in the catalog that defines constants)",
    )

    # entity-bag subcommand
    entity_bag_parser = subparsers.add_parser(
        "entity-bag",
        parents=[common],
        help="Generate a C# entity bag class",
        description="Generate the C# transfer bag for an entity in a type catalog.",
    )
    entity_bag_parser.add_argument("catalog", type=Path, help="YAML type catalog")
    entity_bag_parser.add_argument("entity", help="Entity type to generate the bag for")
    entity_bag_parser.add_argument("--namespace", required=True, help="Namespace of the generated bag")

    # options-bag subcommand
    options_bag_parser = subparsers.add_parser(
        "options-bag",
        parents=[common],
        help="Generate an empty C# options bag class",
        description="Generate an empty C# options bag.",
    )
    options_bag_parser.add_argument("name", help="Name of the bag class")
    options_bag_parser.add_argument("--namespace", required=True, help="Namespace of the generated bag")
    options_bag_parser.add_argument("--summary", default=None, help="Documentation summary for the class")

    args = parser.parse_args()
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s: %(name)s: %(message)s",
        stream=sys.stderr,
    )

    sys.exit(_dispatch(args))


# ################
# Implementation
# ################

# Errors that are reported to the user instead of surfacing as tracebacks.
_REPORTED_ERRORS = (
    GeneratorConfigError,
    CatalogError,
    TypeExpressionError,
    DocumentationError,
    UnsupportedTypeError,
    MetadataError,
    TypeCycleError,
)


def _dispatch(args: argparse.Namespace) -> int:
    """Dispatch to the appropriate subcommand handler."""
    handlers = {
        "view-models": _cmd_view_models,
        "enums": _cmd_enums,
        "system-guids": _cmd_system_guids,
        "entity-bag": _cmd_entity_bag,
        "options-bag": _cmd_options_bag,
    }
    handler = handlers.get(args.command)
    if handler is None:
        return 0

    try:
        return handler(args)
    except _REPORTED_ERRORS as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1


def _cmd_view_models(args: argparse.Namespace) -> int:
    """Handle the view-models subcommand."""
    config = _load_config(args)
    catalog = load_catalog(args.catalog, config)
    handles = _select(catalog, args.types, catalog.classes())

    declaration = generate_view_models(handles, _load_docs(args), config, strict=_strict(args, config))
    return _write(args, assemble_typescript_file(declaration.text, declaration.imports, config))


def _cmd_enums(args: argparse.Namespace) -> int:
    """Handle the enums subcommand."""
    config = _load_config(args)
    catalog = load_catalog(args.catalog, config)
    handles = _select(catalog, args.types, catalog.enums())

    not_enums = [h.full_name for h in handles if not h.is_enum]
    if not_enums:
        print(f"Error: not an enumeration: {', '.join(not_enums)}", file=sys.stderr)
        return 1

    body = generate_enum_declarations(handles, _load_docs(args), config)
    return _write(args, assemble_typescript_file(body, config=config))


def _cmd_system_guids(args: argparse.Namespace) -> int:
    """Handle the system-guids subcommand."""
    config = _load_config(args)
    catalog = load_catalog(args.catalog, config)
    handles = _select(catalog, args.types, catalog.constant_tables())

    without_constants = [h.full_name for h in handles if h.is_enum or not h.constants]
    if without_constants:
        print(f"Error: no string constants declared: {', '.join(without_constants)}", file=sys.stderr)
        return 1

    body = generate_system_guid_tables(handles, _load_docs(args))
    return _write(args, assemble_typescript_file(body, config=config))


def _cmd_entity_bag(args: argparse.Namespace) -> int:
    """Handle the entity-bag subcommand."""
    config = _load_config(args)
    catalog = load_catalog(args.catalog, config)
    entity = catalog.get(args.entity)
    docs = _load_docs(args)

    summary = docs.type_summary(entity) if docs is not None else None
    declaration = generate_entity_bag(
        strip_arity(entity.name),
        entity.properties,
        summary=summary,
        docs=docs,
        config=config,
        strict=_strict(args, config),
    )
    return _write(args, assemble_csharp_file(declaration.text, args.namespace, declaration.imports, config))


def _cmd_options_bag(args: argparse.Namespace) -> int:
    """Handle the options-bag subcommand."""
    config = _load_config(args)
    declaration = generate_options_bag(args.name, args.summary)
    return _write(args, assemble_csharp_file(declaration.text, args.namespace, config=config))


def _load_config(args: argparse.Namespace) -> GeneratorConfig:
    """Load the configuration named on the command line, or the default file if present."""
    if args.config is not None:
        return load_generator_config(args.config)

    default_path = Path.cwd() / CONFIG_FILE_NAME
    if default_path.exists():
        logger.debug("Using configuration file %s", default_path)
        return load_generator_config(default_path)

    return DEFAULT_CONFIG


def _load_docs(args: argparse.Namespace) -> XmlDocReader | None:
    """Read every documentation file given with --docs."""
    if not args.docs:
        return None

    reader = XmlDocReader()
    for path in args.docs:
        logger.debug("Reading documentation from %s", path)
        reader.read_file(path)
    return reader


def _strict(args: argparse.Namespace, config: GeneratorConfig) -> bool:
    return args.strict or config.strict


def _select(catalog: TypeCatalog, names: list[str], default: list[TypeHandle]) -> list[TypeHandle]:
    """Return the named types, or *default* when no names were given."""
    if not names:
        return default
    return [catalog.get(name) for name in names]


def _write(args: argparse.Namespace, text: str) -> int:
    """Write generated text to the output file or standard output."""
    if args.output is None:
        sys.stdout.write(text)
        return 0

    try:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(text, encoding="utf-8")
    except OSError as exc:
        print(f"Error: cannot write '{args.output}': {exc}", file=sys.stderr)
        return 1

    print(f"Wrote {args.output}", file=sys.stderr)
    return 0
