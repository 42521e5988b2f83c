"""Shared pytest fixtures for schema builder tests."""

import pytest

from schema_builder.core.schema.registry import (
    ColumnInfo,
    RelationshipInfo,
    RelationshipKind,
    ValidatorInfo,
)
from tests.fixtures import FakeModel, InMemoryRegistry


@pytest.fixture
def account_model():
    """Account with a name, a positive balance and an owner."""
    return FakeModel(
        name="Account",
        table="accounts",
        columns=[
            ColumnInfo("id", "integer", primary_key=True),
            ColumnInfo("name", "string"),
            ColumnInfo("balance", "decimal"),
            ColumnInfo("owner_id", "bigint"),
            ColumnInfo("created_at", "datetime"),
            ColumnInfo("updated_at", "datetime"),
        ],
        defaults={"balance": 0},
        validators={
            "balance": [ValidatorInfo("numericality", {"greater_than": 0})],
        },
        relationships=[
            RelationshipInfo("owner", RelationshipKind.BELONGS_TO, "owner_id", target="User"),
        ],
    )


@pytest.fixture
def blog_models():
    """Post with polymorphic comments; Comment with a polymorphic commentable."""
    post = FakeModel(
        name="Post",
        table="posts",
        columns=[
            ColumnInfo("id", "integer", primary_key=True),
            ColumnInfo("title", "varchar"),
            ColumnInfo("body", "text"),
        ],
        relationships=[
            RelationshipInfo(
                "comments", RelationshipKind.HAS_MANY, "commentable_id",
                polymorphic=True, target="Comment",
            ),
        ],
    )
    comment = FakeModel(
        name="Comment",
        table="comments",
        columns=[
            ColumnInfo("id", "integer", primary_key=True),
            ColumnInfo("body", "text"),
            ColumnInfo("commentable_type", "string"),
            ColumnInfo("commentable_id", "bigint"),
        ],
        relationships=[
            RelationshipInfo(
                "commentable", RelationshipKind.BELONGS_TO, "commentable_id",
                polymorphic=True, target=None,
            ),
        ],
    )
    return post, comment


@pytest.fixture
def registry(account_model, blog_models):
    """Registry with a small application under an abstract base."""
    user = FakeModel(
        name="User",
        table="users",
        columns=[
            ColumnInfo("id", "integer", primary_key=True),
            ColumnInfo("email", "string"),
        ],
        relationships=[
            RelationshipInfo("accounts", RelationshipKind.HAS_MANY, "owner_id", target="Account"),
        ],
    )
    application_record = FakeModel(
        name="ApplicationRecord",
        abstract=True,
        children=[user, account_model, *blog_models],
    )
    base = FakeModel(name="Base", abstract=True, children=[application_record])
    return InMemoryRegistry([base])
