"""Generic row gateway over the relational store.

Every admin view talks to the database through this one interface:
``select``, ``insert``, ``update``, ``upsert``, ``delete`` and
``invoke_procedure``. Rows go in and come out as plain dictionaries keyed by
column name, and collections are addressed by table name, so the API layer
never touches ORM objects directly.
"""

from __future__ import annotations

import inspect as pyinspect
import logging
import math
from collections.abc import Iterable, Iterator, Mapping, Sequence
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Union

from sqlalchemy import inspect, or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Query, Session
from sqlalchemy.types import DateTime, Integer

from novel_admin import models
from novel_admin.db.session import Base
from novel_admin.services.errors import (
    ConflictError,
    DataAccessError,
    ProcedureError,
    RecordNotFoundError,
    ServiceError,
    ValidationFailure,
)
from novel_admin.services.procedures import ProcedureRegistry, registry

logger = logging.getLogger(__name__)

Row = dict[str, Any]

COLLECTIONS: dict[str, type[Base]] = {
    "user_profiles": models.UserProfile,
    "user_stats": models.UserStats,
    "user_login_logs": models.UserLoginLog,
    "books": models.Book,
    "chapters": models.Chapter,
    "genres": models.Genre,
    "short_story_tags": models.ShortStoryTag,
    "book_comments": models.BookComment,
    "book_reports": models.BookReport,
    "forum_categories": models.ForumCategory,
    "forum_threads": models.ForumThread,
    "forum_posts": models.ForumPost,
    "forum_reports": models.ForumReport,
    "coin_transactions": models.CoinTransaction,
    "coin_packages": models.CoinPackage,
    "homepage_banners": models.HomepageBanner,
    "platform_settings": models.PlatformSetting,
    "site_notifications": models.SiteNotification,
    "withdraw_requests": models.WithdrawRequest,
    "author_payment_accounts": models.AuthorPaymentAccount,
}

_OPERATORS = {
    "eq": lambda column, value: column == value,
    "neq": lambda column, value: column != value,
    "gt": lambda column, value: column > value,
    "gte": lambda column, value: column >= value,
    "lt": lambda column, value: column < value,
    "lte": lambda column, value: column <= value,
    "ilike": lambda column, value: column.ilike(value),
    "in": lambda column, value: column.in_(list(value)),
    "is": lambda column, value: column.is_(value),
    "isnot": lambda column, value: column.is_not(value),
}


@dataclass(frozen=True)
class Where:
    """Single ``column <op> value`` predicate."""

    column: str
    op: str = "eq"
    value: Any = None


@dataclass(frozen=True)
class AnyOf:
    """Disjunction of predicates."""

    clauses: tuple[Where, ...]


Filters = Union[Mapping[str, Any], Iterable[Union[Where, AnyOf]], None]
Ordering = Sequence[tuple[str, bool]]


def any_of(*clauses: Where) -> AnyOf:
    """Build an ``AnyOf`` from positional predicates."""
    return AnyOf(tuple(clauses))


def as_row(obj: Base, columns: Sequence[str] | None = None) -> Row:
    """Convert an ORM instance into a column dictionary."""
    mapper = inspect(obj).mapper
    keys = columns or [attr.key for attr in mapper.column_attrs]
    return {key: getattr(obj, key) for key in keys}


def _parse_timestamp(field: str, value: str) -> datetime | None:
    if not value.strip():
        return None
    try:
        return datetime.fromisoformat(value.strip())
    except ValueError as err:
        raise ValidationFailure(f"Invalid timestamp {value!r}", field=field) from err


def _coerce_integer(field: str, value: float) -> float | int:
    """Narrow a float bound for an integer column; NaN is left for the database."""
    if math.isnan(value):
        return value
    if not value.is_integer():
        raise ValidationFailure(f"{field} must be a whole number, got {value!r}", field=field)
    return int(value)


class DataGateway:
    """Row-oriented access to the admin collections bound to one session."""

    def __init__(self, db: Session, procedures: ProcedureRegistry | None = None) -> None:
        self.db = db
        self.procedures = procedures or registry

    # -- helpers -----------------------------------------------------------

    def model_for(self, collection: str) -> type[Base]:
        try:
            return COLLECTIONS[collection]
        except KeyError as err:
            raise DataAccessError(f"Unknown collection {collection!r}") from err

    def _column(self, model: type[Base], name: str) -> Any:
        if name not in inspect(model).columns:
            raise DataAccessError(f"Unknown column {name!r} on {model.__tablename__}")
        return getattr(model, name)

    def _predicate(self, model: type[Base], item: Where | AnyOf) -> Any:
        if isinstance(item, AnyOf):
            return or_(*(self._predicate(model, clause) for clause in item.clauses))
        operator = _OPERATORS.get(item.op)
        if operator is None:
            raise DataAccessError(f"Unsupported filter operator {item.op!r}")
        return operator(self._column(model, item.column), item.value)

    def _filtered(self, model: type[Base], filters: Filters) -> Query:
        query = self.db.query(model)
        if not filters:
            return query
        if isinstance(filters, Mapping):
            items: Iterable[Where | AnyOf] = (
                Where(name, "eq", value) for name, value in filters.items()
            )
        else:
            items = filters
        for item in items:
            query = query.filter(self._predicate(model, item))
        return query

    def _payload(self, model: type[Base], row: Mapping[str, Any]) -> Row:
        columns = inspect(model).columns
        payload: Row = {}
        for key, value in row.items():
            if key not in columns:
                raise DataAccessError(f"Unknown column {key!r} on {model.__tablename__}")
            # Timestamps arrive as ISO strings from forms and CSV files.
            if isinstance(value, str) and isinstance(columns[key].type, DateTime):
                value = _parse_timestamp(key, value)
            elif isinstance(value, float) and isinstance(columns[key].type, Integer):
                value = _coerce_integer(key, value)
            payload[key] = value
        return payload

    @contextmanager
    def _guard(self, action: str) -> Iterator[None]:
        try:
            yield
        except IntegrityError as exc:
            self.db.rollback()
            logger.warning("Constraint violation during %s: %s", action, exc.orig)
            raise ConflictError(f"{action} violates a data constraint") from exc
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("Data access failure during %s", action, exc_info=True)
            raise DataAccessError(f"{action} failed") from exc

    @contextmanager
    def transaction(self, action: str) -> Iterator[Session]:
        """Run a unit of work that commits on success and rolls back on failure."""
        with self._guard(action):
            try:
                yield self.db
            except ServiceError:
                self.db.rollback()
                raise
            self.db.commit()

    # -- reads -------------------------------------------------------------

    def select(
        self,
        collection: str,
        filters: Filters = None,
        ordering: Ordering | None = None,
        window: tuple[int, int] | None = None,
        columns: Sequence[str] | None = None,
    ) -> tuple[list[Row], int]:
        """Read rows and the unpaginated match count.

        Args:
            collection: Table name.
            filters: Equality mapping or an iterable of ``Where`` / ``AnyOf``.
            ordering: ``(column, ascending)`` pairs applied in sequence.
            window: Inclusive ``(first, last)`` row offsets.
            columns: Restrict the returned keys.
        """
        model = self.model_for(collection)
        with self._guard(f"select from {collection}"):
            query = self._filtered(model, filters)
            count = query.order_by(None).count()
            for name, ascending in ordering or ():
                column = self._column(model, name)
                query = query.order_by(column.asc() if ascending else column.desc())
            for key_column in inspect(model).primary_key:
                query = query.order_by(key_column.asc())
            if window is not None:
                first, last = window
                if first < 0 or last < first:
                    raise ValidationFailure("Invalid row window", field="window")
                query = query.offset(first).limit(last - first + 1)
            rows = [as_row(obj, columns) for obj in query.all()]
        return rows, count

    def count(self, collection: str, filters: Filters = None) -> int:
        model = self.model_for(collection)
        with self._guard(f"count {collection}"):
            return self._filtered(model, filters).count()

    def get(self, collection: str, record_id: str) -> Row:
        """Return a single row by primary key or raise ``RecordNotFoundError``."""
        model = self.model_for(collection)
        with self._guard(f"get from {collection}"):
            obj = self.db.get(model, record_id)
        if obj is None:
            raise RecordNotFoundError(collection, record_id)
        return as_row(obj)

    def embed(
        self,
        rows: list[Row],
        *,
        collection: str,
        foreign_key: str,
        into: str,
        columns: Sequence[str] | None = None,
        key: str = "id",
    ) -> list[Row]:
        """Attach related rows from ``collection`` under ``into`` on every row."""
        ids = sorted({row[foreign_key] for row in rows if row.get(foreign_key) is not None})
        index: dict[Any, Row] = {}
        if ids:
            related, _ = self.select(collection, [Where(key, "in", ids)])
            index = {item[key]: item for item in related}
        for row in rows:
            match = index.get(row.get(foreign_key))
            if match is not None and columns:
                match = {name: match[name] for name in columns}
            row[into] = match
        return rows

    # -- writes ------------------------------------------------------------

    def insert(self, collection: str, rows: Sequence[Mapping[str, Any]]) -> list[Row]:
        model = self.model_for(collection)
        objects = [model(**self._payload(model, row)) for row in rows]
        with self.transaction(f"insert into {collection}") as db:
            db.add_all(objects)
        for obj in objects:
            self.db.refresh(obj)
        return [as_row(obj) for obj in objects]

    def update(
        self,
        collection: str,
        patch: Mapping[str, Any],
        filters: Filters,
    ) -> list[Row]:
        """Apply ``patch`` to every row matching ``filters``."""
        if not filters:
            raise DataAccessError("update requires at least one filter")
        model = self.model_for(collection)
        payload = self._payload(model, patch)
        with self.transaction(f"update {collection}"):
            objects = self._filtered(model, filters).all()
            for obj in objects:
                for key, value in payload.items():
                    setattr(obj, key, value)
        for obj in objects:
            self.db.refresh(obj)
        return [as_row(obj) for obj in objects]

    def upsert(self, collection: str, row: Mapping[str, Any], key: str = "id") -> Row:
        """Insert ``row`` or update the existing row sharing its ``key`` value."""
        if key not in row:
            raise DataAccessError(f"upsert row is missing key column {key!r}")
        model = self.model_for(collection)
        payload = self._payload(model, row)
        with self.transaction(f"upsert into {collection}") as db:
            obj = self._filtered(model, {key: payload[key]}).first()
            if obj is None:
                obj = model(**payload)
                db.add(obj)
            else:
                for name, value in payload.items():
                    setattr(obj, name, value)
        self.db.refresh(obj)
        return as_row(obj)

    def delete(self, collection: str, filters: Filters) -> int:
        """Delete matching rows and return how many were removed."""
        if not filters:
            raise DataAccessError("delete requires at least one filter")
        model = self.model_for(collection)
        with self.transaction(f"delete from {collection}") as db:
            objects = self._filtered(model, filters).all()
            for obj in objects:
                db.delete(obj)
        return len(objects)

    # -- procedures --------------------------------------------------------

    def invoke_procedure(self, name: str, args: Mapping[str, Any] | None = None) -> Any:
        """Run a registered procedure inside its own transaction."""
        procedure = self.procedures.get(name)
        arguments = dict(args or {})
        try:
            pyinspect.signature(procedure).bind(self.db, **arguments)
        except TypeError as err:
            raise ProcedureError(f"Invalid arguments for {name}: {err}") from err
        with self.transaction(f"procedure {name}"):
            result = procedure(self.db, **arguments)
        return result
