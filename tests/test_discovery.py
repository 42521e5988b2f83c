"""
Tests for the ModelDiscoverer.
"""

import pytest

from schema_builder.core.schema.discovery import ModelDiscoverer
from tests.fixtures import FakeModel, InMemoryRegistry


class TestModelDiscoverer:
    """Tests for ModelDiscoverer class."""

    @pytest.fixture
    def models(self):
        admin = FakeModel(name="Admin", table="users")
        user = FakeModel(name="User", table="users", children=[admin])
        post = FakeModel(name="Post", table="posts")
        abstract = FakeModel(name="ApplicationRecord", abstract=True, children=[user, post])
        internal = FakeModel(name="Note", table="builder_notes", namespace="schema_builder.models")
        migration = FakeModel(name="SchemaMigration", table="schema_migrations")
        blob = FakeModel(name="Blob", table="active_storage_blobs")
        variant = FakeModel(name="VariantRecord", table="active_storage_variant_records")
        base = FakeModel(
            name="Base",
            abstract=True,
            children=[abstract, internal, migration, blob, variant],
        )
        return {
            "base": base, "abstract": abstract, "user": user, "admin": admin,
            "post": post, "internal": internal, "migration": migration,
            "blob": blob, "variant": variant,
        }

    @pytest.fixture
    def registry(self, models):
        return InMemoryRegistry(
            [models["base"]],
            migration=models["migration"],
            attachments=[models["blob"], models["variant"]],
        )

    def test_includes_descendants_of_descendants(self, registry, models):
        discovered = ModelDiscoverer(registry).discover()

        assert models["admin"] in discovered
        assert models["user"] in discovered
        assert models["post"] in discovered

    def test_excludes_abstract(self, registry, models):
        discovered = ModelDiscoverer(registry).discover()

        assert models["abstract"] not in discovered
        assert models["base"] not in discovered

    def test_excludes_internal_migration_and_attachments(self, registry, models):
        discovered = ModelDiscoverer(registry).discover()

        for key in ("internal", "migration", "blob", "variant"):
            assert models[key] not in discovered

    def test_exact_output(self, registry):
        names = [m.name for m in ModelDiscoverer(registry).discover()]
        assert names == ["User", "Admin", "Post"]

    def test_deduplicates_shared_subclasses(self):
        """A model reachable through two parents appears once."""
        shared = FakeModel(name="Shared", table="shared")
        left = FakeModel(name="Left", table="left", children=[shared])
        right = FakeModel(name="Right", table="right", children=[shared])
        base = FakeModel(name="Base", abstract=True, children=[left, right])

        names = [m.name for m in ModelDiscoverer(InMemoryRegistry([base])).discover()]

        assert names == ["Left", "Shared", "Right"]

    def test_deterministic(self, registry):
        discoverer = ModelDiscoverer(registry)
        assert discoverer.discover() == discoverer.discover()

    def test_empty_registry(self):
        base = FakeModel(name="Base", abstract=True)
        assert ModelDiscoverer(InMemoryRegistry([base])).discover() == []
