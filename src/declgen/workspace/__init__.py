# Copyright 2026 Declgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Generator inputs: configuration, type catalogs and documentation files."""

from declgen.workspace.catalog import (
    CatalogError,
    TypeCatalog,
    TypeExpressionError,
    load_catalog,
    parse_catalog,
    parse_type_expression,
)
from declgen.workspace.config import (
    CONFIG_FILE_NAME,
    DEFAULT_CONFIG,
    GeneratorConfig,
    GeneratorConfigError,
    TypeScriptSettings,
    load_generator_config,
)
from declgen.workspace.docs import (
    DocumentationError,
    DocumentationProvider,
    MappingDocumentationProvider,
    XmlDocReader,
)

__all__ = [
    "CONFIG_FILE_NAME",
    "CatalogError",
    "DEFAULT_CONFIG",
    "DocumentationError",
    "DocumentationProvider",
    "GeneratorConfig",
    "GeneratorConfigError",
    "MappingDocumentationProvider",
    "TypeCatalog",
    "TypeExpressionError",
    "TypeScriptSettings",
    "XmlDocReader",
    "load_catalog",
    "load_generator_config",
    "parse_catalog",
    "parse_type_expression",
]
