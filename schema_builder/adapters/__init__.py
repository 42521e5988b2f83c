"""
Host model registry adapters.
"""

import importlib
from typing import Any, Iterable

from schema_builder.core.schema.registry import ModelRegistry
from schema_builder.adapters.sqlalchemy_registry import (
    SQLAlchemyRegistry,
    DEFAULT_ATTACHMENT_TABLES,
    DEFAULT_INTERNAL_NAMESPACES,
    DEFAULT_MIGRATION_TABLES,
)


def load_registry(
    import_path: str,
    internal_namespaces: Iterable[str] = DEFAULT_INTERNAL_NAMESPACES,
    migration_tables: Iterable[str] = DEFAULT_MIGRATION_TABLES,
    attachment_tables: Iterable[str] = DEFAULT_ATTACHMENT_TABLES,
) -> ModelRegistry:
    """
    Load a registry from a "package.module:attribute" path.

    The attribute may be a ModelRegistry instance (used as is) or a
    SQLAlchemy declarative base (wrapped in SQLAlchemyRegistry).

    Raises:
        ValueError: If the path is malformed or cannot be imported
    """
    module_name, sep, attr = import_path.partition(":")
    if not sep or not module_name or not attr:
        raise ValueError(
            f"Invalid registry path '{import_path}', expected 'package.module:attribute'"
        )

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise ValueError(f"Cannot import registry module '{module_name}': {e}") from e

    target: Any = module
    for part in attr.split("."):
        try:
            target = getattr(target, part)
        except AttributeError:
            raise ValueError(f"Module '{module_name}' has no attribute '{attr}'") from None

    if isinstance(target, ModelRegistry):
        return target

    if not hasattr(target, "registry") or not hasattr(target, "__subclasses__"):
        raise ValueError(f"'{import_path}' is neither a ModelRegistry nor a declarative base")

    return SQLAlchemyRegistry(
        target,
        internal_namespaces=internal_namespaces,
        migration_tables=migration_tables,
        attachment_tables=attachment_tables,
    )


__all__ = [
    "SQLAlchemyRegistry",
    "load_registry",
]
