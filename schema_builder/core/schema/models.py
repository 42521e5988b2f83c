"""
Schema Data Models

Typed dataclasses for representing the normalized model schema document.
"""

import datetime
import decimal
import re
import uuid
from dataclasses import dataclass
from enum import Enum
from collections.abc import Mapping
from typing import Any


class AccessType(str, Enum):
    """Read/write visibility policy for a column."""

    READ_ONLY = "read_only"
    WRITE_ONLY = "write_only"
    READ_WRITE = "read_write"
    HIDDEN = "hidden"


class AssociationType(str, Enum):
    """Canonical association classification."""

    HAS_MANY = "has_many"
    HAS_ONE = "has_one"
    BELONGS_TO = "belongs_to"


def to_jsonable(value: Any) -> Any:
    """
    Convert a value into a deterministic JSON-compatible shape.

    Sets are sorted so repeated builds serialize identically.
    """
    if isinstance(value, Enum):
        return to_jsonable(value.value)
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, Mapping):
        return {str(k): to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (set, frozenset)):
        items = [to_jsonable(v) for v in value]
        try:
            return sorted(items)
        except TypeError:
            # Mixed or unorderable items
            return sorted(items, key=lambda v: (type(v).__name__, str(v)))
    if isinstance(value, (list, tuple, range)):
        return [to_jsonable(v) for v in value]
    if isinstance(value, (datetime.date, datetime.time)):
        return value.isoformat()
    if isinstance(value, (decimal.Decimal, uuid.UUID)):
        return str(value)
    if isinstance(value, re.Pattern):
        return value.pattern
    return str(value)


@dataclass(frozen=True)
class ColumnSchema:
    """
    Normalized metadata for a single storage column.
    """

    name: str
    display_name: str
    column_type: str                              # Canonical or raw type
    access_type: AccessType = AccessType.READ_WRITE
    default_value: Any = None
    validators: tuple[dict[str, Any], ...] = ()   # Constraint records
    virtual: bool = False

    def __repr__(self) -> str:
        return (
            f"ColumnSchema({self.name}, "
            f"type={self.column_type}, "
            f"{self.access_type.value})"
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "name": self.name,
            "display_name": self.display_name,
            "column_type": self.column_type,
            "access_type": self.access_type.value,
            "default_value": to_jsonable(self.default_value),
            "validators": [to_jsonable(v) for v in self.validators],
            "virtual": self.virtual,
        }


@dataclass(frozen=True)
class AssociationSchema:
    """
    Normalized metadata for a resolved relationship.
    """

    name: str
    display_name: str
    slug: str
    model_name: str                               # Target model identifier
    model_slug: str
    association_type: AssociationType
    foreign_key: str | None = None
    polymorphic: bool = False
    visible: bool = True

    def __repr__(self) -> str:
        return (
            f"AssociationSchema({self.name} -> {self.model_name}, "
            f"{self.association_type.value}"
            f"{', polymorphic' if self.polymorphic else ''})"
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "name": self.name,
            "display_name": self.display_name,
            "slug": self.slug,
            "model_name": self.model_name,
            "model_slug": self.model_slug,
            "association_type": self.association_type.value,
            "foreign_key": self.foreign_key,
            "polymorphic": self.polymorphic,
            "visible": self.visible,
        }


@dataclass(frozen=True)
class ModelSchema:
    """
    Schema record for one discovered model.

    Built once per pipeline run and never mutated afterwards.
    """

    name: str                                     # snake_case identifier
    slug: str                                     # URL-safe identifier
    table_name: str
    primary_key: str | tuple[str, ...] | None
    display_name: str                             # e.g. "Blog Posts"
    display_column: str | None
    columns: tuple[ColumnSchema, ...] = ()
    associations: tuple[AssociationSchema, ...] = ()
    actions: tuple[Mapping[str, Any], ...] = ()
    tabs: tuple[Mapping[str, Any], ...] = ()
    visible: bool = True

    def get_column(self, name: str) -> ColumnSchema | None:
        """Get column by name."""
        return next((c for c in self.columns if c.name == name), None)

    def get_association(self, name: str) -> AssociationSchema | None:
        """Get association by name."""
        return next((a for a in self.associations if a.name == name), None)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "name": self.name,
            "slug": self.slug,
            "table_name": self.table_name,
            "primary_key": to_jsonable(self.primary_key),
            "display_name": self.display_name,
            "display_column": self.display_column,
            "columns": [c.to_dict() for c in self.columns],
            "associations": [a.to_dict() for a in self.associations],
            "actions": [to_jsonable(a) for a in self.actions],
            "tabs": [to_jsonable(t) for t in self.tabs],
            "visible": self.visible,
        }
