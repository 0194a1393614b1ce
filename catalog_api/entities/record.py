# catalog_api/entities/record.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol

from sqlalchemy import inspect

RECORD_COLUMNS = ("id", "created_at", "updated_at", "is_active")


@dataclass(frozen=True)
class RecordMeta:
    """Identity, audit timestamps and soft-delete flag shared by every entity."""

    id: str
    created_at: datetime
    updated_at: datetime
    is_active: bool

    @classmethod
    def of(cls, entity: ActiveRecord) -> RecordMeta:
        return cls(
            id=entity.id,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
            is_active=bool(entity.is_active),
        )


class ActiveRecord(Protocol):
    id: str | None
    created_at: datetime | None
    updated_at: datetime | None
    is_active: bool


def require_record_columns(model_cls: type) -> type:
    """Raise TypeError unless model_cls is mapped with all record columns."""
    mapper = inspect(model_cls, raiseerr=False)
    if mapper is None:
        raise TypeError(f"{model_cls.__name__} is not a mapped class")

    missing = [name for name in RECORD_COLUMNS if name not in mapper.columns]
    if missing:
        raise TypeError(f"{model_cls.__name__} is missing record columns: {', '.join(missing)}")
    return model_cls
