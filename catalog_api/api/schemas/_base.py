# catalog_api/api/schemas/_base.py
from typing import Annotated, Any, Callable

from pydantic import AfterValidator, BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from pydantic.networks import validate_email

from catalog_api.core.pagination import Page


def _checked_email(value: str) -> str:
    # validated, but kept as typed: EmailStr would lowercase the domain
    value = value.strip()
    validate_email(value)
    return value


EmailAddress = Annotated[str, AfterValidator(_checked_email)]


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_json(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class PageResponse(CamelModel):
    content: list[dict[str, Any]]
    page: int
    size: int
    total_elements: int
    total_pages: int

    @classmethod
    def of(cls, page: Page, mapper: Callable[[Any], CamelModel]) -> "PageResponse":
        return cls(
            content=[mapper(item).to_json() for item in page.content],
            page=page.page,
            size=page.size,
            total_elements=page.total_elements,
            total_pages=page.total_pages,
        )
