"""
Column Extractor

Builds ColumnSchema records for a model's storage columns.
"""

from typing import Any, Callable

from schema_builder.core.schema.models import ColumnSchema
from schema_builder.core.schema.naming import humanize
from schema_builder.core.schema.registry import ColumnInfo, ModelRegistry, ValidatorInfo
from schema_builder.core.schema.rules import SchemaRules
from schema_builder.core.schema.validators import ValidatorNormalizer


class ColumnExtractor:
    """
    Extracts normalized column metadata from a registry model.

    Column Rules:

    - column_type: canonical name from the type table, else the raw type
    - access_type: name-based override (id, timestamps), else read_write
    - default_value: read from one transient instance per model
    - validators: canonical constraint records for the column
    """

    def __init__(
        self,
        registry: ModelRegistry,
        rules: SchemaRules | None = None,
        normalizer: ValidatorNormalizer | None = None,
        on_skip: Callable[[Any, str, ValidatorInfo], None] | None = None,
    ):
        """
        Initialize extractor.

        Args:
            registry: Host model registry
            rules: Type and access lookup tables
            normalizer: Validator normalizer
            on_skip: Optional callback (model, column_name, validator) for dropped rules
        """
        self.registry = registry
        self.rules = rules or SchemaRules()
        self.normalizer = normalizer or ValidatorNormalizer()
        self.on_skip = on_skip

    def extract(self, model: Any) -> list[ColumnSchema]:
        """
        Extract all storage columns of a model, in declared order.

        Args:
            model: Registry model handle

        Returns:
            List of ColumnSchema
        """
        defaults = self.registry.default_values(model)

        return [
            self.build_column(model, column, defaults)
            for column in self.registry.columns(model)
        ]

    def build_column(
        self,
        model: Any,
        column: ColumnInfo,
        defaults: dict[str, Any],
    ) -> ColumnSchema:
        """Build one ColumnSchema from declared column info and defaults."""
        def skipped(validator: ValidatorInfo) -> None:
            if self.on_skip:
                self.on_skip(model, column.name, validator)

        validators = self.normalizer.normalize(
            self.registry.validators(model, column.name),
            on_skip=skipped,
        )

        return ColumnSchema(
            name=column.name,
            display_name=humanize(column.name),
            column_type=self.rules.unify_type(column.raw_type),
            access_type=self.rules.access_type(column.name),
            default_value=defaults.get(column.name),
            validators=tuple(validators),
            virtual=False,
        )
