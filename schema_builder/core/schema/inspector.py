"""
Schema Inspector

Assembles the normalized schema document for every model in a host
registry. Each build recomputes everything from the registry; nothing
is cached between builds.
"""

import json
from typing import Any, Callable

from schema_builder.core.logger import BuildLogger
from schema_builder.core.schema.associations import AssociationExtractor
from schema_builder.core.schema.columns import ColumnExtractor
from schema_builder.core.schema.discovery import ModelDiscoverer
from schema_builder.core.schema.display import DisplayColumnFinder
from schema_builder.core.schema.models import ModelSchema
from schema_builder.core.schema.naming import pluralize, slugify, titleize, underscore
from schema_builder.core.schema.registry import ModelRegistry, RelationshipInfo, ValidatorInfo
from schema_builder.core.schema.rules import SchemaRules
from schema_builder.core.schema.validators import ValidatorNormalizer


class SchemaInspector:
    """
    Builds ModelSchema records from a host model registry.

    Example:
        >>> from schema_builder.adapters import SQLAlchemyRegistry
        >>> inspector = SchemaInspector(SQLAlchemyRegistry(Base))
        >>>
        >>> # All models
        >>> schemas = inspector.build()
        >>>
        >>> # One model by name or slug
        >>> account = inspector.find("account")
        >>>
        >>> # Serialized document
        >>> document = inspector.to_json(indent=2)
    """

    def __init__(
        self,
        registry: ModelRegistry,
        rules: SchemaRules | None = None,
        display_column: Callable[[Any], str | None] | None = None,
        logger: BuildLogger | None = None,
    ):
        """
        Initialize schema inspector.

        Args:
            registry: Host model registry
            rules: Type/access tables and default actions/tabs
            display_column: Resolver (model) -> column name
            logger: Optional build logger for skip reporting
        """
        self.registry = registry
        self.rules = rules or SchemaRules()
        self.display_column = display_column or DisplayColumnFinder(registry, self.rules)
        self.logger = logger

        self.column_extractor = ColumnExtractor(
            registry,
            rules=self.rules,
            normalizer=ValidatorNormalizer(),
            on_skip=self._skip_validator,
        )
        self.association_extractor = AssociationExtractor(
            registry,
            on_skip=self._skip_association,
        )

    # -------------------------------------------------------------------------
    # Public API
    # -------------------------------------------------------------------------

    def get_models(self) -> list[Any]:
        """Get concrete models that will appear in the schema."""
        return ModelDiscoverer(self.registry).discover()

    def build(self) -> list[ModelSchema]:
        """
        Build schemas for all discovered models.

        Raises:
            UnknownAssociationTypeError: If a relationship kind is unclassifiable
        """
        return [self.build_model(model) for model in self.get_models()]

    def build_model(self, model: Any) -> ModelSchema:
        """
        Build the schema for a single model.

        Args:
            model: Registry model handle

        Returns:
            ModelSchema
        """
        name = self.registry.model_name(model)

        columns = self.column_extractor.extract(model)
        associations = self.association_extractor.extract(model)

        schema = ModelSchema(
            name=underscore(name),
            slug=slugify(name),
            table_name=self.registry.table_name(model),
            primary_key=self.registry.primary_key(model),
            display_name=pluralize(titleize(name)),
            display_column=self.display_column(model),
            columns=tuple(columns),
            associations=tuple(associations),
            actions=self.rules.actions,
            tabs=self.rules.tabs,
            visible=True,
        )

        if self.logger:
            self.logger.log_model(schema.name, len(columns), len(associations))

        return schema

    def find(self, name: str) -> ModelSchema | None:
        """
        Build the schema for one model, found by class name, name or slug.

        Args:
            name: e.g. "BlogPost", "blog_post"

        Returns:
            ModelSchema or None if no discovered model matches
        """
        for model in self.get_models():
            model_name = self.registry.model_name(model)
            if name in (model_name, underscore(model_name), slugify(model_name)):
                return self.build_model(model)
        return None

    def to_dicts(self) -> list[dict[str, Any]]:
        """Build all schemas as plain dictionaries."""
        return [schema.to_dict() for schema in self.build()]

    def to_json(self, indent: int | None = 2) -> str:
        """Build all schemas as a JSON document."""
        return json.dumps(self.to_dicts(), indent=indent, ensure_ascii=False)

    # -------------------------------------------------------------------------
    # Internal Methods
    # -------------------------------------------------------------------------

    def _skip_validator(self, model: Any, column_name: str, validator: ValidatorInfo) -> None:
        if self.logger:
            self.logger.log_skip(
                self.registry.model_name(model),
                column_name,
                "validator",
                f"unsupported_validator:{getattr(validator.kind, 'value', validator.kind)}",
            )

    def _skip_association(self, model: Any, relationship: RelationshipInfo, reason: str) -> None:
        if self.logger:
            self.logger.log_skip(
                self.registry.model_name(model),
                relationship.name,
                "association",
                reason,
            )
