"""
Schema Introspection Module

Model discovery, column/association extraction and schema assembly
over a host model registry.
"""

from schema_builder.core.schema.models import (
    AccessType,
    AssociationType,
    ColumnSchema,
    AssociationSchema,
    ModelSchema,
)
from schema_builder.core.schema.registry import (
    ModelRegistry,
    ColumnInfo,
    ValidatorInfo,
    RelationshipInfo,
    RelationshipKind,
    ValidatorKind,
)
from schema_builder.core.schema.rules import SchemaRules
from schema_builder.core.schema.discovery import ModelDiscoverer
from schema_builder.core.schema.validators import ValidatorNormalizer
from schema_builder.core.schema.columns import ColumnExtractor
from schema_builder.core.schema.associations import (
    AssociationExtractor,
    SchemaBuildError,
    UnknownAssociationTypeError,
)
from schema_builder.core.schema.display import DisplayColumnFinder
from schema_builder.core.schema.inspector import SchemaInspector

__all__ = [
    "AccessType",
    "AssociationType",
    "ColumnSchema",
    "AssociationSchema",
    "ModelSchema",
    "ModelRegistry",
    "ColumnInfo",
    "ValidatorInfo",
    "RelationshipInfo",
    "RelationshipKind",
    "ValidatorKind",
    "SchemaRules",
    "ModelDiscoverer",
    "ValidatorNormalizer",
    "ColumnExtractor",
    "AssociationExtractor",
    "SchemaBuildError",
    "UnknownAssociationTypeError",
    "DisplayColumnFinder",
    "SchemaInspector",
]
