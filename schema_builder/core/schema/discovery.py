"""
Model Discoverer

Enumerates concrete application models from a host registry.
"""

from typing import Any

from schema_builder.core.schema.registry import ModelRegistry


class ModelDiscoverer:
    """
    Finds every concrete model reachable from the registry's roots.

    Excluded:
       - abstract models
       - models in the builder's internal namespace
       - migration-history tracking models
       - file-attachment internal models
    """

    def __init__(self, registry: ModelRegistry):
        self.registry = registry

    def discover(self) -> list[Any]:
        """
        Get concrete models, deduplicated by identity.

        Order is depth-first following the registry's subclass order.
        """
        excluded = [
            *self.registry.migration_models(),
            *self.registry.attachment_models(),
        ]

        models = []
        for model in self.descendants():
            if self.registry.is_abstract(model):
                continue
            if self.registry.is_internal(model):
                continue
            if any(model is m for m in excluded):
                continue
            models.append(model)

        return models

    def descendants(self) -> list[Any]:
        """Full subclass closure of the root models, without duplicates."""
        seen: set[int] = set()
        found: list[Any] = []

        def visit(model: Any) -> None:
            for subclass in self.registry.subclasses(model):
                if id(subclass) in seen:
                    continue
                seen.add(id(subclass))
                found.append(subclass)
                visit(subclass)

        for root in self.registry.root_models():
            visit(root)

        return found
