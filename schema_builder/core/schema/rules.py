"""
Schema Rules

Fixed lookup tables used by the schema pipeline: canonical type
unification, name-based access overrides, and default UI actions/tabs.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping

from schema_builder.core.schema.models import AccessType


# Backend type name -> canonical type (keys are lowercase)
UNIFIED_TYPES: Mapping[str, str] = MappingProxyType({
    # Integers
    "int": "integer",
    "int2": "integer",
    "int4": "integer",
    "int8": "integer",
    "smallint": "integer",
    "small_integer": "integer",
    "bigint": "integer",
    "big_integer": "integer",
    "integer": "integer",
    "serial": "integer",
    "bigserial": "integer",

    # Floating point / decimal
    "numeric": "float",
    "decimal": "float",
    "float": "float",
    "float4": "float",
    "float8": "float",
    "real": "float",
    "double": "float",
    "double_precision": "float",
    "money": "float",

    # Strings
    "string": "string",
    "char": "string",
    "bpchar": "string",
    "varchar": "string",
    "nvarchar": "string",
    "nchar": "string",
    "unicode": "string",
    "citext": "string",
    "enum": "string",
    "text": "text",
    "unicode_text": "text",
    "clob": "text",

    # Booleans
    "bool": "boolean",
    "boolean": "boolean",

    # Dates and times
    "date": "date",
    "time": "time",
    "datetime": "datetime",
    "timestamp": "datetime",
    "timestamptz": "datetime",

    # Structured
    "json": "json",
    "jsonb": "json",
    "hstore": "json",

    # Identifiers / binary
    "uuid": "uuid",
    "binary": "binary",
    "large_binary": "binary",
    "blob": "binary",
    "bytea": "binary",
})

# Columns whose access type is fixed by name
COLUMN_NAME_ACCESS_TYPES: Mapping[str, AccessType] = MappingProxyType({
    "id": AccessType.READ_ONLY,
    "created_at": AccessType.READ_ONLY,
    "updated_at": AccessType.READ_ONLY,
    "deleted_at": AccessType.READ_ONLY,
})

DEFAULT_ACTIONS: tuple[Mapping[str, Any], ...] = tuple(
    MappingProxyType({
        "name": name,
        "display_name": name.capitalize(),
        "action_type": "default",
        "preferences": MappingProxyType({}),
        "visible": True,
    })
    for name in ("create", "edit", "remove")
)

DEFAULT_TABS: tuple[Mapping[str, Any], ...] = (
    MappingProxyType({
        "name": "summary",
        "display_name": "Summary",
        "tab_type": "default",
        "preferences": MappingProxyType({}),
        "visible": True,
    }),
)


@dataclass(frozen=True)
class SchemaRules:
    """
    Immutable lookup tables passed into the pipeline.

    Example:
        >>> rules = SchemaRules.with_overrides(type_map={"money": "decimal"})
        >>> rules.unify_type("money")
        'decimal'
    """

    type_map: Mapping[str, str] = field(default_factory=lambda: UNIFIED_TYPES)
    access_types: Mapping[str, AccessType] = field(default_factory=lambda: COLUMN_NAME_ACCESS_TYPES)
    actions: tuple[Mapping[str, Any], ...] = DEFAULT_ACTIONS
    tabs: tuple[Mapping[str, Any], ...] = DEFAULT_TABS

    @classmethod
    def with_overrides(
        cls,
        type_map: Mapping[str, str] | None = None,
        access_types: Mapping[str, AccessType | str] | None = None,
    ) -> "SchemaRules":
        """Create rules with extra entries layered over the defaults."""
        types = dict(UNIFIED_TYPES)
        types.update({k.lower(): v for k, v in (type_map or {}).items()})

        access = dict(COLUMN_NAME_ACCESS_TYPES)
        access.update({k: AccessType(v) for k, v in (access_types or {}).items()})

        return cls(
            type_map=MappingProxyType(types),
            access_types=MappingProxyType(access),
        )

    def unify_type(self, raw_type: str) -> str:
        """Map a backend type to its canonical name, or return it unchanged."""
        return self.type_map.get(raw_type.lower(), raw_type)

    def access_type(self, column_name: str) -> AccessType:
        """Get the access type for a column name."""
        return self.access_types.get(column_name, AccessType.READ_WRITE)
