"""Test fixtures package."""

from tests.fixtures.fake_registry import FakeModel, InMemoryRegistry

__all__ = ["FakeModel", "InMemoryRegistry"]
