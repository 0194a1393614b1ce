# catalog_api/core/base_repository.py

from datetime import datetime, timezone
from typing import Any, ClassVar, Generic, TypeVar
from uuid import uuid4

from sqlalchemy import ColumnElement, Select, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from catalog_api.core.exceptions import (
    AppError,
    DuplicateEntityError,
    NotFoundError,
    ValidationFailedError,
)
from catalog_api.core.pagination import Page, PageRequest
from catalog_api.entities.record import require_record_columns

TModel = TypeVar("TModel")

# SQLSTATE class 23 codes (PostgreSQL)
_PG_VIOLATIONS = {"23505": "unique", "23502": "not_null", "23514": "check"}


def utcnow() -> datetime:
    # stored as naive UTC
    return datetime.now(tz=timezone.utc).replace(tzinfo=None)


def integrity_violation(err: IntegrityError) -> str:
    """Classify an IntegrityError as "unique", "not_null", "check" or "other"."""
    orig = err.orig
    pgcode = getattr(orig, "pgcode", None)
    if pgcode:
        return _PG_VIOLATIONS.get(pgcode, "other")

    # sqlite: "UNIQUE constraint failed: ...", "CHECK constraint failed: ..."
    message = str(orig).upper()
    if "UNIQUE" in message:
        return "unique"
    if "NOT NULL" in message:
        return "not_null"
    if "CHECK" in message:
        return "check"
    return "other"


class BaseRepository(Generic[TModel]):
    def __init__(self, session: Session) -> None:
        self._session = session


class ActiveRecordRepository(BaseRepository[TModel]):
    """
    Soft-delete aware store for any model mapped with the record columns
    (id, created_at, updated_at, is_active).

    Ordinary read paths only see active rows; find_by_id and list_all are the
    administrative escape hatches.
    """

    model: ClassVar[type]
    entity_label: ClassVar[str] = "Entity"
    duplicate_message: ClassVar[str] = "Entity already exists"

    def __init__(self, session: Session) -> None:
        super().__init__(session)
        require_record_columns(self.model)

    # -------------------------
    # Lookups
    # -------------------------

    def find_by_id(self, entity_id: str) -> TModel:
        entity = self._session.get(self.model, str(entity_id))
        if entity is None:
            raise self._not_found(entity_id)
        return entity

    def find_active_by_id(self, entity_id: str) -> TModel:
        stmt = select(self.model).where(
            self.model.id == str(entity_id),
            self.model.is_active.is_(True),
        )
        entity = self._session.execute(stmt).scalar_one_or_none()
        if entity is None:
            raise self._not_found(entity_id)
        return entity

    def exists_by(self, column: Any, value: Any) -> bool:
        stmt = select(self.model.id).where(column == value).limit(1)
        return self._session.execute(stmt).first() is not None

    # -------------------------
    # Listings
    # -------------------------

    def list_active(self, page_request: PageRequest, *criteria: ColumnElement[bool]) -> Page[TModel]:
        stmt = select(self.model).where(self.model.is_active.is_(True), *criteria)
        return self._paginate(stmt, page_request)

    def list_all(self, page_request: PageRequest, *, include_inactive: bool = True) -> Page[TModel]:
        stmt = select(self.model)
        if not include_inactive:
            stmt = stmt.where(self.model.is_active.is_(True))
        return self._paginate(stmt, page_request)

    def _paginate(self, stmt: Select, page_request: PageRequest) -> Page[TModel]:
        total_stmt = select(func.count()).select_from(stmt.subquery())
        total = int(self._session.execute(total_stmt).scalar_one())

        page_stmt = (
            stmt.order_by(self.model.created_at.desc(), self.model.id.desc())
            .limit(page_request.size)
            .offset(page_request.offset)
        )
        content = list(self._session.execute(page_stmt).scalars().all())

        return Page(
            content=content,
            page=page_request.page,
            size=page_request.size,
            total_elements=total,
        )

    # -------------------------
    # Mutations
    # -------------------------

    def save(self, entity: TModel) -> TModel:
        now = utcnow()
        if entity.id is None:
            entity.id = uuid4().hex
            entity.created_at = now
            if entity.is_active is None:
                entity.is_active = True
            self._session.add(entity)
        entity.updated_at = now

        # savepoint: a failed flush only undoes this entity, not the caller's transaction
        try:
            with self._session.begin_nested():
                self._session.flush()
        except IntegrityError as e:
            raise self._translate_integrity_error(e) from e
        return entity

    def deactivate(self, entity: TModel) -> TModel:
        entity.is_active = False
        return self.save(entity)

    def _translate_integrity_error(self, err: IntegrityError) -> AppError:
        kind = integrity_violation(err)
        if kind == "unique":
            # unique constraint is the final word when two writers race past the pre-check
            return DuplicateEntityError(self.duplicate_message)
        if kind == "not_null":
            return ValidationFailedError({self.entity_label.lower(): "required value is missing"})
        return ValidationFailedError({self.entity_label.lower(): "violates a data constraint"})

    def _not_found(self, entity_id: str) -> NotFoundError:
        return NotFoundError(f"{self.entity_label} not found with id: {entity_id}")
