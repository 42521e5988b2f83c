"""
Display Column Finder

Picks the column that best identifies a record to a human reader.
"""

from typing import Any

from schema_builder.core.schema.registry import ModelRegistry
from schema_builder.core.schema.rules import SchemaRules


# Checked in order; first present column wins
DISPLAY_COLUMN_NAMES = (
    "name",
    "full_name",
    "title",
    "label",
    "display_name",
    "username",
    "login",
    "email",
    "subject",
    "code",
    "slug",
)

DISPLAY_COLUMN_SUFFIXES = ("_name", "_title")

TEXTUAL_TYPES = frozenset({"string", "text"})


class DisplayColumnFinder:
    """
    Default display column resolver: (model) -> column name.

    Preference: a well-known name column, then any string column ending
    in "_name"/"_title", then the primary key.
    """

    def __init__(self, registry: ModelRegistry, rules: SchemaRules | None = None):
        self.registry = registry
        self.rules = rules or SchemaRules()

    def __call__(self, model: Any) -> str | None:
        columns = self.registry.columns(model)
        names = {c.name for c in columns}

        for name in DISPLAY_COLUMN_NAMES:
            if name in names:
                return name

        for column in columns:
            if (
                column.name.endswith(DISPLAY_COLUMN_SUFFIXES)
                and self.rules.unify_type(column.raw_type) in TEXTUAL_TYPES
            ):
                return column.name

        primary_key = self.registry.primary_key(model)
        if isinstance(primary_key, tuple):
            return primary_key[0] if primary_key else None
        return primary_key
