# catalog_api/repositories/product_repository.py

from sqlalchemy import func
from sqlalchemy.orm import Session

from catalog_api.core.base_repository import ActiveRecordRepository
from catalog_api.core.pagination import Page, PageRequest
from catalog_api.infrastructure.database.models.product_model import ProductModel


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class ProductRepository(ActiveRecordRepository[ProductModel]):
    model = ProductModel
    entity_label = "Product"
    duplicate_message = "SKU already exists"

    def __init__(self, session: Session) -> None:
        super().__init__(session)

    def exists_by_sku(self, sku: str) -> bool:
        return self.exists_by(ProductModel.sku, sku)

    def search_by_name(self, name: str, page_request: PageRequest) -> Page[ProductModel]:
        pattern = f"%{_escape_like(name.strip())}%"
        return self.list_active(page_request, ProductModel.name.ilike(pattern, escape="\\"))

    def find_by_category(self, category: str, page_request: PageRequest) -> Page[ProductModel]:
        return self.list_active(
            page_request,
            func.lower(ProductModel.category) == category.strip().lower(),
        )

    def find_in_stock(self, page_request: PageRequest) -> Page[ProductModel]:
        return self.list_active(page_request, ProductModel.quantity > 0)
