"""DocumentStore — collection/document access over the ``documents`` table.

The store mirrors the hosted document database's client contract:

- Documents are JSON objects addressed by ``(collection, doc_id)``.
  Sub-collections are slash paths (``graphs/<id>/comments``); deleting a
  parent document never touches them.
- Writes may carry two sentinels resolved by the store itself:
  :data:`SERVER_TIMESTAMP` (replaced with the store's clock) and
  :class:`Increment` (an atomic ``field + n``, missing fields count as 0).
- Every failure surfaces as :class:`StoreError`; callers never see
  SQLAlchemy exceptions.

Field-level updates are a single ``UPDATE ... SET data = json_set(...)``
statement, so concurrent increments from separate processes never lose
a write.
"""

from __future__ import annotations

import json
import logging
import secrets
import string
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from graphzlive.infrastructure.database.schema import documents

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

logger = logging.getLogger(__name__)

GRAPHS = "graphs"

_ID_ALPHABET = string.ascii_letters + string.digits
_ID_LENGTH = 20


def comments_path(graph_id: str) -> str:
    """Collection path of the comment sub-collection under one graph."""
    return f"{GRAPHS}/{graph_id}/comments"


class StoreError(Exception):
    """A document store call failed.

    Attributes:
        code: Short machine-readable reason (``not-found``, ``unavailable``,
            ``already-exists``, ``invalid-argument``).
    """

    def __init__(self, message: str, *, code: str = "unavailable") -> None:
        super().__init__(message)
        self.code = code


class _ServerTimestamp:
    """Sentinel: replace with the store's current time on write."""

    def __repr__(self) -> str:
        return "SERVER_TIMESTAMP"


SERVER_TIMESTAMP = _ServerTimestamp()


@dataclass(frozen=True)
class Increment:
    """Sentinel: atomically add *amount* to a numeric field (negative to decrement)."""

    amount: int = 1


@dataclass(frozen=True)
class Document:
    """One document read from the store."""

    id: str
    data: dict[str, Any]


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _field_path(field: str) -> str:
    return f'$."{field}"'


def generate_doc_id() -> str:
    """Random 20-character alphanumeric id."""
    return "".join(secrets.choice(_ID_ALPHABET) for _ in range(_ID_LENGTH))


class DocumentStore:
    """Encapsulates document CRUD against the SQLite ``documents`` table."""

    def __init__(self, engine: Engine, *, clock: Callable[[], datetime] = _utcnow) -> None:
        self._engine = engine
        self._clock = clock

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _timestamp(self) -> str:
        return self._clock().astimezone(UTC).isoformat(timespec="microseconds")

    def _resolve(self, data: dict[str, Any]) -> dict[str, Any]:
        """Replace sentinels in a full-document write."""
        now: str | None = None
        resolved: dict[str, Any] = {}
        for key, value in data.items():
            if value is SERVER_TIMESTAMP:
                now = now or self._timestamp()
                resolved[key] = now
            elif isinstance(value, Increment):
                resolved[key] = value.amount
            else:
                resolved[key] = value
        return resolved

    @staticmethod
    def _decode(row: Any) -> Document:
        try:
            data = json.loads(row.data)
        except json.JSONDecodeError as exc:
            msg = f"Corrupt document {row.collection}/{row.doc_id}: {exc}"
            raise StoreError(msg, code="data-loss") from exc
        return Document(id=str(row.doc_id), data=data if isinstance(data, dict) else {})

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get_docs(
        self,
        collection: str,
        *,
        order_by: str | None = None,
        descending: bool = False,
    ) -> list[Document]:
        """Fetch every document in *collection*, optionally ordered by a field.

        Documents lacking *order_by* sort as the smallest value (last when
        descending).  Ties fall back to insertion order in the same direction.
        """
        stmt = select(documents.c.collection, documents.c.doc_id, documents.c.data).where(
            documents.c.collection == collection
        )
        if order_by:
            key = func.json_extract(documents.c.data, _field_path(order_by))
            if descending:
                stmt = stmt.order_by(key.desc(), documents.c.seq.desc())
            else:
                stmt = stmt.order_by(key.asc(), documents.c.seq.asc())
        else:
            stmt = stmt.order_by(documents.c.seq.asc())

        try:
            with self._engine.connect() as conn:
                rows = conn.execute(stmt).fetchall()
        except SQLAlchemyError as exc:
            raise StoreError(f"Failed to read {collection}: {exc}") from exc
        return [self._decode(row) for row in rows]

    def get_doc(self, collection: str, doc_id: str) -> Document | None:
        """Fetch one document, or None if it does not exist."""
        stmt = select(documents.c.collection, documents.c.doc_id, documents.c.data).where(
            documents.c.collection == collection,
            documents.c.doc_id == doc_id,
        )
        try:
            with self._engine.connect() as conn:
                row = conn.execute(stmt).first()
        except SQLAlchemyError as exc:
            raise StoreError(f"Failed to read {collection}/{doc_id}: {exc}") from exc
        return self._decode(row) if row is not None else None

    def count_docs(self, collection: str) -> int:
        """Number of documents in *collection*."""
        stmt = select(func.count(documents.c.seq)).where(documents.c.collection == collection)
        try:
            with self._engine.connect() as conn:
                return int(conn.execute(stmt).scalar_one() or 0)
        except SQLAlchemyError as exc:
            raise StoreError(f"Failed to count {collection}: {exc}") from exc

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def add_doc(self, collection: str, data: dict[str, Any]) -> str:
        """Create a document under a fresh random id. Returns the id."""
        doc_id = generate_doc_id()
        self.set_doc(collection, doc_id, data)
        return doc_id

    def set_doc(self, collection: str, doc_id: str, data: dict[str, Any]) -> None:
        """Create a document with an explicit id. Fails if it already exists."""
        payload = json.dumps(self._resolve(data))
        try:
            with self._engine.begin() as conn:
                conn.execute(
                    insert(documents).values(collection=collection, doc_id=doc_id, data=payload)
                )
        except IntegrityError as exc:
            msg = f"Document {collection}/{doc_id} already exists"
            raise StoreError(msg, code="already-exists") from exc
        except SQLAlchemyError as exc:
            raise StoreError(f"Failed to write {collection}/{doc_id}: {exc}") from exc
        logger.debug("Wrote document %s/%s", collection, doc_id)

    def update_doc(self, collection: str, doc_id: str, changes: dict[str, Any]) -> None:
        """Merge *changes* into an existing document, field by field.

        Fields not named in *changes* are left as they are.

        Raises:
            StoreError: ``not-found`` if the document does not exist.
        """
        if not changes:
            msg = "update_doc requires at least one field"
            raise StoreError(msg, code="invalid-argument")

        args: list[Any] = []
        now: str | None = None
        for field, value in changes.items():
            path = _field_path(field)
            args.append(path)
            if isinstance(value, Increment):
                current = func.coalesce(func.json_extract(documents.c.data, path), 0)
                args.append(current + value.amount)
            elif value is SERVER_TIMESTAMP:
                now = now or self._timestamp()
                args.append(now)
            else:
                args.append(func.json(json.dumps(value)))

        stmt = (
            update(documents)
            .where(documents.c.collection == collection, documents.c.doc_id == doc_id)
            .values(data=func.json_set(documents.c.data, *args))
        )
        try:
            with self._engine.begin() as conn:
                result = conn.execute(stmt)
        except SQLAlchemyError as exc:
            raise StoreError(f"Failed to update {collection}/{doc_id}: {exc}") from exc
        if result.rowcount == 0:
            raise StoreError(f"No document {collection}/{doc_id}", code="not-found")
        logger.debug("Updated document %s/%s fields=%s", collection, doc_id, sorted(changes))

    def delete_doc(self, collection: str, doc_id: str) -> bool:
        """Delete one document. Sub-collections under it are left in place.

        Returns True if a document was removed.
        """
        stmt = delete(documents).where(
            documents.c.collection == collection,
            documents.c.doc_id == doc_id,
        )
        try:
            with self._engine.begin() as conn:
                result = conn.execute(stmt)
        except SQLAlchemyError as exc:
            raise StoreError(f"Failed to delete {collection}/{doc_id}: {exc}") from exc
        return result.rowcount > 0
