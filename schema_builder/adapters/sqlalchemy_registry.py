"""
SQLAlchemy Model Registry

ModelRegistry implementation over SQLAlchemy declarative classes.

Validation rules are declared on columns through ``Column.info``::

    class Account(Base):
        __tablename__ = "accounts"

        id = mapped_column(Integer, primary_key=True)
        balance = mapped_column(
            Numeric,
            info={"validators": [{"kind": "numericality", "greater_than": 0}]},
        )

Relationships are marked polymorphic through ``relationship(info=...)``::

    comments = relationship("Comment", info={"polymorphic": True})
"""

from typing import Any, Iterable

from sqlalchemy import Column, Table
from sqlalchemy import inspect as sa_inspect
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import MANYTOMANY, MANYTOONE, ONETOMANY, Mapper, RelationshipProperty
from sqlalchemy.orm.exc import UnmappedColumnError
from sqlalchemy.types import TypeDecorator, TypeEngine

from schema_builder.core.schema.registry import (
    ColumnInfo,
    ModelRegistry,
    RelationshipInfo,
    RelationshipKind,
    ValidatorInfo,
)


DEFAULT_INTERNAL_NAMESPACES = ("schema_builder",)

# Tables of migration-history bookkeeping models
DEFAULT_MIGRATION_TABLES = ("alembic_version", "schema_migrations")

# Tables of file-attachment internals (blobs and variant records)
DEFAULT_ATTACHMENT_TABLES = ("active_storage_blobs", "active_storage_variant_records")


def raw_type_name(sa_type: TypeEngine) -> str:
    """Backend-neutral type name, e.g. "string", "big_integer", "JSONB"."""
    if isinstance(sa_type, TypeDecorator):
        sa_type = sa_type.impl_instance
    return getattr(sa_type, "__visit_name__", type(sa_type).__name__)


def to_validator_info(declared: Any) -> ValidatorInfo:
    """
    Accept a validator declared as ValidatorInfo, a dict with a "kind" key,
    or a (kind, options) pair.
    """
    if isinstance(declared, ValidatorInfo):
        return declared
    if isinstance(declared, dict):
        options = {k: v for k, v in declared.items() if k != "kind"}
        return ValidatorInfo(kind=declared["kind"], options=options)
    kind, options = declared
    return ValidatorInfo(kind=kind, options=dict(options or {}))


def referencing_column(table: Table, referenced: Table) -> str | None:
    """Name of the first column of `table` with a foreign key into `referenced`."""
    for column in table.columns:
        for fk in column.foreign_keys:
            if fk.target_fullname.rsplit(".", 1)[0] == referenced.fullname:
                return column.name
    return None


class SQLAlchemyRegistry(ModelRegistry):
    """
    Reads model metadata from a SQLAlchemy declarative base.

    Example:
        >>> from myapp.models import Base
        >>> registry = SQLAlchemyRegistry(Base)
        >>> [registry.model_name(m) for m in registry.subclasses(Base)]
        ['User', 'Account']
    """

    def __init__(
        self,
        base: type,
        internal_namespaces: Iterable[str] = DEFAULT_INTERNAL_NAMESPACES,
        migration_tables: Iterable[str] = DEFAULT_MIGRATION_TABLES,
        attachment_tables: Iterable[str] = DEFAULT_ATTACHMENT_TABLES,
        validators_key: str = "validators",
    ):
        """
        Initialize registry.

        Args:
            base: Declarative base class (DeclarativeBase subclass or declarative_base())
            internal_namespaces: Module prefixes whose models are bookkeeping
            migration_tables: Table names of migration-history models
            attachment_tables: Table names of file-attachment internal models
            validators_key: Column.info key holding declared validators
        """
        self.base = base
        self.internal_namespaces = tuple(internal_namespaces)
        self.migration_tables = frozenset(migration_tables)
        self.attachment_tables = frozenset(attachment_tables)
        self.validators_key = validators_key

    # -------------------------------------------------------------------------
    # Enumeration
    # -------------------------------------------------------------------------

    def root_models(self) -> list[Any]:
        return [self.base]

    def subclasses(self, model: Any) -> list[Any]:
        return list(model.__subclasses__())

    def is_abstract(self, model: Any) -> bool:
        if vars(model).get("__abstract__", False):
            return True
        return sa_inspect(model, raiseerr=False) is None

    def is_internal(self, model: Any) -> bool:
        module = getattr(model, "__module__", "") or ""
        return any(
            module == ns or module.startswith(ns + ".")
            for ns in self.internal_namespaces
        )

    def migration_models(self) -> list[Any]:
        return self._models_for_tables(self.migration_tables)

    def attachment_models(self) -> list[Any]:
        return self._models_for_tables(self.attachment_tables)

    # -------------------------------------------------------------------------
    # Structure
    # -------------------------------------------------------------------------

    def model_name(self, model: Any) -> str:
        return model.__name__

    def table_name(self, model: Any) -> str:
        table = self._mapper(model).local_table
        return getattr(table, "name", str(table))

    def primary_key(self, model: Any) -> str | tuple[str, ...] | None:
        keys = tuple(column.name for column in self._mapper(model).primary_key)
        if not keys:
            return None
        return keys[0] if len(keys) == 1 else keys


    def columns(self, model: Any) -> list[ColumnInfo]:
        return [
            ColumnInfo(
                name=column.name,
                raw_type=raw_type_name(column.type),
                primary_key=column.primary_key,
            )
            for column in self._storage_columns(self._mapper(model))
        ]

    def default_values(self, model: Any) -> dict[str, Any]:
        mapper = self._mapper(model)

        # Transient instance: never added to a session, so no SQL is emitted
        try:
            instance = model()
        except Exception:
            instance = None

        values: dict[str, Any] = {}
        for column in self._storage_columns(mapper):
            value = None

            key = self._attribute_key(mapper, column)
            if instance is not None and key is not None:
                value = getattr(instance, key, None)

            default = column.default
            if value is None and default is not None and getattr(default, "is_scalar", False):
                value = default.arg

            values[column.name] = value

        return values

    def validators(self, model: Any, column_name: str) -> list[ValidatorInfo]:
        for column in self._storage_columns(self._mapper(model)):
            if column.name == column_name:
                return [to_validator_info(v) for v in column.info.get(self.validators_key, [])]
        return []

    def relationships(self, model: Any) -> list[RelationshipInfo]:
        mapper = self._mapper(model)

        try:
            props = list(mapper.relationships)
        except SQLAlchemyError:
            # Mapper configuration failed somewhere in the registry
            return [
                self._declared_relationship(mapper, prop)
                for prop in mapper._props.values()
                if isinstance(prop, RelationshipProperty)
            ]

        return [
            RelationshipInfo(
                name=prop.key,
                kind=self._relationship_kind(prop),
                foreign_key=self._foreign_key(prop),
                polymorphic=bool(prop.info.get("polymorphic", False)),
                target=prop,
            )
            for prop in props
        ]

    def resolve_target(self, model: Any, relationship: RelationshipInfo) -> Any:
        prop: RelationshipProperty = relationship.target
        try:
            return prop.entity.class_
        except SQLAlchemyError:
            return self._resolve_argument(prop)

    # -------------------------------------------------------------------------
    # Internal Methods
    # -------------------------------------------------------------------------

    def _mapper(self, model: Any) -> Mapper:
        return sa_inspect(model)

    def _mapped_models(self) -> list[Any]:
        return [mapper.class_ for mapper in self.base.registry.mappers]

    def _models_for_tables(self, tables: frozenset[str]) -> list[Any]:
        if not tables:
            return []
        return [m for m in self._mapped_models() if self.table_name(m) in tables]

    def _storage_columns(self, mapper: Mapper) -> list[Column]:
        """Columns of every inherited table, root table first, one per name."""
        tables: list[Table] = []
        for ancestor in mapper.iterate_to_root():
            if not any(ancestor.local_table is t for t in tables):
                tables.append(ancestor.local_table)
            if ancestor.concrete:
                break

        columns: dict[str, Column] = {}
        for table in reversed(tables):
            for column in table.columns:
                columns.setdefault(column.name, column)
        return list(columns.values())

    def _attribute_key(self, mapper: Mapper, column: Any) -> str | None:
        try:
            return mapper.get_property_by_column(column).key
        except UnmappedColumnError:
            return None

    def _relationship_kind(self, prop: RelationshipProperty) -> str:
        if prop.direction is MANYTOONE:
            return RelationshipKind.BELONGS_TO.value
        if prop.direction is ONETOMANY:
            return (RelationshipKind.HAS_MANY if prop.uselist else RelationshipKind.HAS_ONE).value
        if prop.direction is MANYTOMANY:
            return (
                RelationshipKind.HAS_MANY_THROUGH if prop.uselist
                else RelationshipKind.HAS_ONE_THROUGH
            ).value
        return str(prop.direction)

    def _foreign_key(self, prop: RelationshipProperty) -> str | None:
        # synchronize_pairs are (source, foreign) column pairs
        pairs = prop.synchronize_pairs
        if pairs:
            return pairs[0][1].name
        return None

    def _declared_relationship(self, mapper: Mapper, prop: RelationshipProperty) -> RelationshipInfo:
        """
        Classify an unconfigured relationship from its declaration.

        Direction comes from the foreign keys between the two tables: a
        local foreign key to the target table makes it a belongs_to.
        """
        target = self._resolve_argument(prop)
        target_table = self._mapper(target).local_table if target is not None else None
        local_table = mapper.local_table
        many = prop.uselist is not False

        secondary = self._declared_secondary(prop)
        if secondary is not None:
            kind = RelationshipKind.HAS_MANY_THROUGH if many else RelationshipKind.HAS_ONE_THROUGH
            foreign_key = (
                referencing_column(secondary, local_table) if isinstance(secondary, Table) else None
            )
        elif target_table is not None and referencing_column(local_table, target_table):
            kind = RelationshipKind.BELONGS_TO
            foreign_key = referencing_column(local_table, target_table)
        else:
            kind = RelationshipKind.HAS_MANY if many else RelationshipKind.HAS_ONE
            foreign_key = (
                referencing_column(target_table, local_table) if target_table is not None else None
            )

        return RelationshipInfo(
            name=prop.key,
            kind=kind.value,
            foreign_key=foreign_key,
            polymorphic=bool(prop.info.get("polymorphic", False)),
            target=prop,
        )

    def _declared_secondary(self, prop: RelationshipProperty) -> Any:
        """Association table as declared; names are looked up in the metadata."""
        secondary = getattr(prop, "secondary", None)
        if secondary is None and hasattr(prop, "_init_args"):
            secondary = prop._init_args.secondary.argument
        if isinstance(secondary, str):
            return self.base.metadata.tables.get(secondary, secondary)
        if callable(secondary) and not isinstance(secondary, Table):
            try:
                return secondary()
            except NameError:
                return None
        return secondary

    def _resolve_argument(self, prop: RelationshipProperty) -> Any:
        """Resolve a relationship target by class name, without configuring mappers."""
        argument = prop.argument
        if isinstance(argument, str):
            name = argument.rsplit(".", 1)[-1]
            matches = [m for m in self._mapped_models() if m.__name__ == name]
            return matches[0] if len(matches) == 1 else None
        if isinstance(argument, Mapper):
            return argument.class_
        if isinstance(argument, type):
            return argument
        if callable(argument):
            try:
                resolved = argument()
            except NameError:
                return None
            return resolved.class_ if isinstance(resolved, Mapper) else resolved
        return None
