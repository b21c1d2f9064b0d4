# Copyright 2026 Declgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Declaration generators: type classification, mapping and rendering."""

from declgen.generator.classifier import MetadataError, TypeCycleError, classify, read_metadata
from declgen.generator.comments import csharp_comment_block, rewrite_documentation, typescript_comment_block
from declgen.generator.constants import generate_system_guid_constants, generate_system_guid_tables
from declgen.generator.enums import EnumMember, generate_enum_declaration, generate_enum_declarations, read_enum_members
from declgen.generator.files import (
    assemble_csharp_file,
    assemble_typescript_file,
    render_csharp_usings,
    render_typescript_imports,
)
from declgen.generator.mapper import (
    Declaration,
    TargetFormat,
    UnsupportedType,
    UnsupportedTypeError,
    map_type,
    merge_imports,
    settle,
)
from declgen.generator.properties import (
    ConversionStrategy,
    PropertyConversion,
    classify_property,
    convert_from_bag_code,
    convert_to_bag_code,
    is_assignment_type,
    is_supported_property_type,
    settle_conversion,
)
from declgen.generator.view_models import (
    generate_entity_bag,
    generate_options_bag,
    generate_view_model,
    generate_view_models,
    is_required_property,
)

__all__ = [
    # Classification
    "classify",
    "read_metadata",
    "MetadataError",
    "TypeCycleError",
    # Mapping
    "Declaration",
    "TargetFormat",
    "UnsupportedType",
    "UnsupportedTypeError",
    "map_type",
    "merge_imports",
    "settle",
    # Property conversion
    "ConversionStrategy",
    "PropertyConversion",
    "classify_property",
    "convert_from_bag_code",
    "convert_to_bag_code",
    "is_assignment_type",
    "is_supported_property_type",
    "settle_conversion",
    # Enumerations
    "EnumMember",
    "generate_enum_declaration",
    "generate_enum_declarations",
    "read_enum_members",
    # Constant tables
    "generate_system_guid_constants",
    "generate_system_guid_tables",
    # Comments
    "csharp_comment_block",
    "rewrite_documentation",
    "typescript_comment_block",
    # View models
    "generate_entity_bag",
    "generate_options_bag",
    "generate_view_model",
    "generate_view_models",
    "is_required_property",
    # Files
    "assemble_csharp_file",
    "assemble_typescript_file",
    "render_csharp_usings",
    "render_typescript_imports",
]
