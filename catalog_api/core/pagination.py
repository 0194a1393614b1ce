# catalog_api/core/pagination.py

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Generic, Mapping, TypeVar

from catalog_api.config.settings import settings
from catalog_api.core.exceptions import ValidationFailedError

T = TypeVar("T")
U = TypeVar("U")

# largest OFFSET a 64-bit SQL integer can carry
MAX_OFFSET = 2**63 - 1


@dataclass(frozen=True)
class PageRequest:
    """Zero-based page index plus page size."""

    page: int = 0
    size: int = 10

    def __post_init__(self) -> None:
        errors: dict[str, str] = {}
        if self.page < 0:
            errors["page"] = "must be greater than or equal to 0"
        if self.size < 1:
            errors["size"] = "must be greater than 0"
        elif self.size > settings.page_max_size:
            errors["size"] = f"must be less than or equal to {settings.page_max_size}"
        elif self.page * self.size > MAX_OFFSET:
            errors["page"] = "is too large"
        if errors:
            raise ValidationFailedError(errors)

    @property
    def offset(self) -> int:
        return self.page * self.size

    @classmethod
    def from_args(cls, args: Mapping[str, str]) -> PageRequest:
        errors: dict[str, str] = {}
        values: dict[str, int] = {}
        for key, default in (("page", 0), ("size", settings.page_default_size)):
            raw = args.get(key)
            if raw is None or str(raw).strip() == "":
                values[key] = default
                continue
            try:
                values[key] = int(raw)
            except (TypeError, ValueError):
                errors[key] = "must be an integer"
        if errors:
            raise ValidationFailedError(errors)
        return cls(page=values["page"], size=values["size"])


@dataclass(frozen=True)
class Page(Generic[T]):
    content: list[T]
    page: int
    size: int
    total_elements: int

    @property
    def total_pages(self) -> int:
        if self.total_elements == 0:
            return 0
        return math.ceil(self.total_elements / self.size)

    @property
    def is_first(self) -> bool:
        return self.page == 0

    @property
    def is_last(self) -> bool:
        return self.page >= self.total_pages - 1

    def map(self, fn: Callable[[T], U]) -> Page[U]:
        return Page(
            content=[fn(item) for item in self.content],
            page=self.page,
            size=self.size,
            total_elements=self.total_elements,
        )
