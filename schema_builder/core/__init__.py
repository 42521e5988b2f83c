"""
Core schema building modules.
"""

from schema_builder.core.logger import BuildLogger, BuildSummary, SkipEntry
from schema_builder.core.schema import (
    ModelSchema,
    ColumnSchema,
    AssociationSchema,
    ModelRegistry,
    SchemaRules,
    SchemaInspector,
    SchemaBuildError,
    UnknownAssociationTypeError,
)


__all__ = [
    "BuildLogger",
    "BuildSummary",
    "SkipEntry",
    # Schema introspection
    "ModelSchema",
    "ColumnSchema",
    "AssociationSchema",
    "ModelRegistry",
    "SchemaRules",
    "SchemaInspector",
    "SchemaBuildError",
    "UnknownAssociationTypeError",
]
