"""SQLAlchemy models used by the adapter and CLI tests."""

from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Numeric, String, Table, Text
from sqlalchemy.orm import DeclarativeBase, mapped_column, relationship


class Base(DeclarativeBase):
    pass


article_tags = Table(
    "article_tags",
    Base.metadata,
    Column("article_id", Integer, ForeignKey("articles.id"), primary_key=True),
    Column("tag_id", Integer, ForeignKey("tags.id"), primary_key=True),
)


class TimestampedModel(Base):
    __abstract__ = True

    created_at = mapped_column(DateTime, default=datetime.now)
    updated_at = mapped_column(DateTime, default=datetime.now)


class User(TimestampedModel):
    __tablename__ = "users"

    id = mapped_column(Integer, primary_key=True)
    email = mapped_column(
        String(255),
        nullable=False,
        info={"validators": [
            {"kind": "presence"},
            {"kind": "format", "with": r"\A[^@\s]+@[^@\s]+\Z"},
            {"kind": "uniqueness"},
        ]},
    )
    type = mapped_column(String(20))

    accounts = relationship("Account", back_populates="owner")
    profile = relationship("Profile", back_populates="user", uselist=False)

    __mapper_args__ = {"polymorphic_on": "type", "polymorphic_identity": "user"}


class Admin(User):
    __mapper_args__ = {"polymorphic_identity": "admin"}


class Account(TimestampedModel):
    __tablename__ = "accounts"

    id = mapped_column(Integer, primary_key=True)
    name = mapped_column(String(100))
    balance = mapped_column(
        Numeric(12, 2),
        default=0,
        info={"validators": [("numericality", {"greater_than": 0})]},
    )
    status = mapped_column(
        String(20),
        default="active",
        info={"validators": [{"kind": "inclusion", "in": ["active", "frozen"]}]},
    )
    owner_id = mapped_column(Integer, ForeignKey("users.id"))

    owner = relationship("User", back_populates="accounts")


class Profile(Base):
    __tablename__ = "profiles"

    id = mapped_column(Integer, primary_key=True)
    user_id = mapped_column(Integer, ForeignKey("users.id"))
    bio = mapped_column(Text)

    user = relationship("User", back_populates="profile")


class Article(Base):
    __tablename__ = "articles"

    id = mapped_column(Integer, primary_key=True)
    title = mapped_column(String(200))
    cover_blob_id = mapped_column(Integer, ForeignKey("active_storage_blobs.id"))

    tags = relationship("Tag", secondary=article_tags)
    cover_blob = relationship("Blob")
    comments = relationship(
        "Comment",
        primaryjoin="and_(foreign(Comment.commentable_id) == Article.id, "
                    "Comment.commentable_type == 'Article')",
        viewonly=True,
        info={"polymorphic": True},
    )


class Tag(Base):
    __tablename__ = "tags"

    id = mapped_column(Integer, primary_key=True)
    label = mapped_column(String(50))


class Comment(Base):
    __tablename__ = "comments"

    id = mapped_column(Integer, primary_key=True)
    body = mapped_column(Text)
    commentable_type = mapped_column(String(50))
    commentable_id = mapped_column(Integer)

    commentable = relationship(
        "Article",
        primaryjoin="and_(foreign(Comment.commentable_id) == Article.id, "
                    "Comment.commentable_type == 'Article')",
        viewonly=True,
        info={"polymorphic": True},
    )


class SchemaMigration(Base):
    __tablename__ = "alembic_version"

    version_num = mapped_column(String(32), primary_key=True)


class Blob(Base):
    __tablename__ = "active_storage_blobs"

    id = mapped_column(Integer, primary_key=True)
    key = mapped_column(String(255))


class BuildRecord(Base):
    __module__ = "schema_builder.records"
    __tablename__ = "schema_builder_records"

    id = mapped_column(Integer, primary_key=True)
