"""
Model Registry Interface

The capability-based seam between the schema pipeline and a host
model registry. Hosts implement ModelRegistry; the pipeline never
inspects concrete ORM classes itself.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class RelationshipKind(str, Enum):
    """Relationship kinds a registry may declare."""

    HAS_MANY = "has_many"
    HAS_MANY_THROUGH = "has_many_through"
    HAS_ONE = "has_one"
    HAS_ONE_THROUGH = "has_one_through"
    BELONGS_TO = "belongs_to"


class ValidatorKind(str, Enum):
    """Validation rule kinds with a canonical constraint record."""

    INCLUSION = "inclusion"
    PRESENCE = "presence"
    FORMAT = "format"
    LENGTH = "length"
    NUMERICALITY = "numericality"


@dataclass(frozen=True)
class ColumnInfo:
    """A storage column as declared by the host."""

    name: str
    raw_type: str                                 # Backend type name
    primary_key: bool = False


@dataclass(frozen=True)
class ValidatorInfo:
    """A validation rule declared on a column."""

    kind: str                                     # ValidatorKind value or host-specific
    options: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class RelationshipInfo:
    """
    A relationship as declared by the host.

    `kind` is normally a RelationshipKind, but hosts may report any string;
    unknown kinds are rejected during classification.
    """

    name: str
    kind: str
    foreign_key: str | None = None
    polymorphic: bool = False
    target: Any = None                            # Host-specific target reference


class ModelRegistry(ABC):
    """Abstract base class for host model registries.

    Model handles are opaque to the pipeline: whatever objects the
    registry returns from root_models() and subclasses() are passed
    back into the other methods unchanged.
    """

    # -------------------------------------------------------------------------
    # Enumeration
    # -------------------------------------------------------------------------

    @abstractmethod
    def root_models(self) -> list[Any]:
        """Get the base model(s) whose descendants are the application models."""
        pass

    @abstractmethod
    def subclasses(self, model: Any) -> list[Any]:
        """Get the direct subclasses of a model, in registration order."""
        pass

    @abstractmethod
    def is_abstract(self, model: Any) -> bool:
        """Whether the model is an abstract base with no table of its own."""
        pass

    def is_internal(self, model: Any) -> bool:
        """Whether the model belongs to the builder's own bookkeeping namespace."""
        return False

    def migration_models(self) -> list[Any]:
        """Get the migration-history tracking model(s), if present."""
        return []

    def attachment_models(self) -> list[Any]:
        """Get file-attachment internal models (blobs, variant records), if present."""
        return []

    # -------------------------------------------------------------------------
    # Structure
    # -------------------------------------------------------------------------

    @abstractmethod
    def model_name(self, model: Any) -> str:
        """Get the model's class name, e.g. "BlogPost"."""
        pass

    @abstractmethod
    def table_name(self, model: Any) -> str:
        """Get the model's storage table name."""
        pass

    @abstractmethod
    def primary_key(self, model: Any) -> str | tuple[str, ...] | None:
        """Get the primary key column name (a tuple for composite keys)."""
        pass

    @abstractmethod
    def columns(self, model: Any) -> list[ColumnInfo]:
        """Get storage columns in declared order."""
        pass

    @abstractmethod
    def default_values(self, model: Any) -> dict[str, Any]:
        """
        Get default attribute values from one transient, unsaved instance.

        Must not touch persistent storage.
        """
        pass

    @abstractmethod
    def validators(self, model: Any, column_name: str) -> list[ValidatorInfo]:
        """Get validation rules declared on a column, in declared order."""
        pass

    @abstractmethod
    def relationships(self, model: Any) -> list[RelationshipInfo]:
        """Get declared relationships, in declared order."""
        pass

    @abstractmethod
    def resolve_target(self, model: Any, relationship: RelationshipInfo) -> Any:
        """
        Resolve a relationship's target model.

        May raise when the target cannot be resolved.
        """
        pass
