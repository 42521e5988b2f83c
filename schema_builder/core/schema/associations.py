"""
Association Extractor

Classifies declared relationships into has_many / has_one / belongs_to
and skips those whose target cannot be safely resolved.
"""

from typing import Any, Callable

from schema_builder.core.schema.models import AssociationSchema, AssociationType
from schema_builder.core.schema.naming import humanize, slugify, underscore
from schema_builder.core.schema.registry import (
    ModelRegistry,
    RelationshipInfo,
    RelationshipKind,
)


class SchemaBuildError(ValueError):
    """Base error for fatal schema build failures."""
    pass


class UnknownAssociationTypeError(SchemaBuildError):
    """Raised when a relationship kind has no canonical classification."""

    def __init__(self, kind: Any, model_name: str = "", name: str = ""):
        location = f" on {model_name}.{name}" if model_name else ""
        super().__init__(f"Unknown association type: {kind!r}{location}")
        self.kind = kind
        self.model_name = model_name
        self.name = name


# Relationship kind -> canonical association type
ASSOCIATION_TYPES: dict[str, AssociationType] = {
    RelationshipKind.HAS_MANY.value: AssociationType.HAS_MANY,
    RelationshipKind.HAS_MANY_THROUGH.value: AssociationType.HAS_MANY,
    RelationshipKind.HAS_ONE.value: AssociationType.HAS_ONE,
    RelationshipKind.HAS_ONE_THROUGH.value: AssociationType.HAS_ONE,
    RelationshipKind.BELONGS_TO.value: AssociationType.BELONGS_TO,
}

# Skip reasons reported through on_skip
SKIP_POLYMORPHIC = "polymorphic_target"
SKIP_UNRESOLVED = "unresolved_target"
SKIP_ATTACHMENT = "attachment_target"


def classify_association(kind: Any) -> AssociationType:
    """
    Map a relationship kind to its association type.

    Raises:
        UnknownAssociationTypeError: If the kind is not in ASSOCIATION_TYPES
    """
    key = getattr(kind, "value", kind)
    try:
        return ASSOCIATION_TYPES[key]
    except (KeyError, TypeError):
        raise UnknownAssociationTypeError(kind) from None


class AssociationExtractor:
    """
    Builds AssociationSchema records for a model's relationships.

    Skipped (non-fatal):
       - polymorphic belongs_to (target varies per instance)
       - targets that fail to resolve
       - targets that are file-attachment internals

    Fatal:
       - relationship kinds missing from ASSOCIATION_TYPES
    """

    def __init__(
        self,
        registry: ModelRegistry,
        on_skip: Callable[[Any, RelationshipInfo, str], None] | None = None,
    ):
        """
        Initialize extractor.

        Args:
            registry: Host model registry
            on_skip: Optional callback (model, relationship, reason) for skips
        """
        self.registry = registry
        self.on_skip = on_skip

    def extract(self, model: Any) -> list[AssociationSchema]:
        """
        Extract associations of a model, in declared order.

        Raises:
            UnknownAssociationTypeError: For an unclassifiable relationship kind
        """
        attachment_models = self.registry.attachment_models()
        associations = []

        for relationship in self.registry.relationships(model):
            if self._is_polymorphic_target(relationship):
                self._skip(model, relationship, SKIP_POLYMORPHIC)
                continue

            try:
                target = self.registry.resolve_target(model, relationship)
            except Exception:
                self._skip(model, relationship, SKIP_UNRESOLVED)
                continue

            if target is None:
                self._skip(model, relationship, SKIP_UNRESOLVED)
                continue

            if any(target is m for m in attachment_models):
                self._skip(model, relationship, SKIP_ATTACHMENT)
                continue

            associations.append(self.build_association(model, relationship, target))

        return associations

    def build_association(
        self,
        model: Any,
        relationship: RelationshipInfo,
        target: Any,
    ) -> AssociationSchema:
        """Build one AssociationSchema for a resolved relationship."""
        try:
            association_type = classify_association(relationship.kind)
        except UnknownAssociationTypeError:
            raise UnknownAssociationTypeError(
                relationship.kind,
                model_name=self.registry.model_name(model),
                name=relationship.name,
            ) from None

        target_name = self.registry.model_name(target)

        return AssociationSchema(
            name=relationship.name,
            display_name=humanize(relationship.name),
            slug=underscore(relationship.name),
            model_name=underscore(target_name),
            model_slug=slugify(target_name),
            association_type=association_type,
            foreign_key=relationship.foreign_key,
            polymorphic=relationship.polymorphic,
            visible=True,
        )

    def _is_polymorphic_target(self, relationship: RelationshipInfo) -> bool:
        """Polymorphic belongs_to has no single static target."""
        kind = getattr(relationship.kind, "value", relationship.kind)
        return relationship.polymorphic and kind == RelationshipKind.BELONGS_TO.value

    def _skip(self, model: Any, relationship: RelationshipInfo, reason: str) -> None:
        if self.on_skip:
            self.on_skip(model, relationship, reason)
