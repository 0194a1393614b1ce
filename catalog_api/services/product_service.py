# catalog_api/services/product_service.py

import logging
from decimal import Decimal

from catalog_api.core.exceptions import DuplicateEntityError, ValidationFailedError
from catalog_api.core.pagination import Page, PageRequest
from catalog_api.infrastructure.database.models.product_model import ProductModel
from catalog_api.repositories.product_repository import ProductRepository

logger = logging.getLogger(__name__)


def _strip_or_none(v) -> str | None:
    if v is None:
        return None
    s = str(v).strip()
    return s if s else None


def _check_amounts(price: Decimal, quantity: int) -> None:
    errors: dict[str, str] = {}
    if price is None or Decimal(price) < 0:
        errors["price"] = "must be greater than or equal to 0"
    if quantity is None or int(quantity) < 0:
        errors["quantity"] = "must be greater than or equal to 0"
    if errors:
        raise ValidationFailedError(errors)


class ProductService:
    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def create_product(
        self,
        *,
        name: str,
        sku: str,
        price: Decimal,
        quantity: int,
        description: str | None = None,
        category: str | None = None,
        image_url: str | None = None,
    ) -> ProductModel:
        sku = sku.strip()
        logger.info("Creating product name=%s sku=%s", name, sku)
        _check_amounts(price, quantity)

        if self._product_repo.exists_by_sku(sku):
            raise DuplicateEntityError(f"SKU already exists: {sku}")

        model = ProductModel(
            name=name.strip(),
            description=_strip_or_none(description),
            price=Decimal(price),
            quantity=int(quantity),
            category=_strip_or_none(category),
            image_url=_strip_or_none(image_url),
            sku=sku,
            is_active=True,
        )
        return self._product_repo.save(model)

    def update_product(
        self,
        product_id: str,
        *,
        name: str,
        price: Decimal,
        quantity: int,
        description: str | None = None,
        category: str | None = None,
        image_url: str | None = None,
    ) -> ProductModel:
        """Full overwrite of the business fields. The sku never changes."""
        logger.info("Updating product id=%s", product_id)
        _check_amounts(price, quantity)
        product = self._product_repo.find_by_id(product_id)

        product.name = name.strip()
        product.description = _strip_or_none(description)
        product.price = Decimal(price)
        product.quantity = int(quantity)
        product.category = _strip_or_none(category)
        product.image_url = _strip_or_none(image_url)

        return self._product_repo.save(product)

    def get_product_by_id(self, product_id: str) -> ProductModel:
        logger.info("Fetching product id=%s", product_id)
        return self._product_repo.find_active_by_id(product_id)

    def get_all_products(self, page_request: PageRequest) -> Page[ProductModel]:
        return self._product_repo.list_active(page_request)

    def search_products_by_name(self, name: str, page_request: PageRequest) -> Page[ProductModel]:
        logger.info("Searching products by name=%s", name)
        return self._product_repo.search_by_name(name, page_request)

    def get_products_by_category(self, category: str, page_request: PageRequest) -> Page[ProductModel]:
        return self._product_repo.find_by_category(category, page_request)

    def get_in_stock_products(self, page_request: PageRequest) -> Page[ProductModel]:
        return self._product_repo.find_in_stock(page_request)

    def delete_product(self, product_id: str) -> None:
        logger.info("Deleting product id=%s", product_id)
        product = self._product_repo.find_by_id(product_id)
        self._product_repo.deactivate(product)
