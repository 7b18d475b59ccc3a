"""SQLAlchemy Core table definitions for the graphz database.

Two tables back the two external collaborators:

- ``documents`` — a schemaless document store.  Each row is one JSON
  document addressed by ``(collection, doc_id)``; sub-collections use
  slash paths such as ``graphs/<id>/comments``.
- ``accounts`` — email/password identities for the auth provider.
"""

from __future__ import annotations

from sqlalchemy import (
    Column,
    Index,
    Integer,
    MetaData,
    Table,
    Text,
    UniqueConstraint,
)

metadata = MetaData()

documents = Table(
    "documents",
    metadata,
    # Insertion sequence; tie-breaker for ordered reads.
    Column("seq", Integer, primary_key=True, autoincrement=True),
    Column("collection", Text, nullable=False),
    Column("doc_id", Text, nullable=False),
    Column("data", Text, nullable=False),  # JSON object
    UniqueConstraint("collection", "doc_id"),
)

accounts = Table(
    "accounts",
    metadata,
    Column("email", Text, primary_key=True),
    Column("uid", Text, nullable=False, unique=True),
    Column("password_hash", Text, nullable=False),
    Column("salt", Text, nullable=False),
    Column("disabled", Integer, default=0, server_default="0"),
    Column("failed_attempts", Integer, default=0, server_default="0"),
    Column("created", Text, nullable=False),
)

Index("ix_documents_collection", documents.c.collection)
