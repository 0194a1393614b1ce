# catalog_api/api/schemas/product_schema.py

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import Field

from catalog_api.api.schemas._base import CamelModel
from catalog_api.entities.record import RecordMeta
from catalog_api.infrastructure.database.models.product_model import ProductModel


class ProductUpdateRequest(CamelModel):
    name: str = Field(min_length=1, max_length=200)
    description: Optional[str] = None
    price: Decimal = Field(ge=0, max_digits=12, decimal_places=2)
    quantity: int = Field(ge=0)
    category: Optional[str] = Field(default=None, max_length=100)
    image_url: Optional[str] = Field(default=None, max_length=500)


class ProductCreateRequest(ProductUpdateRequest):
    sku: str = Field(min_length=1, max_length=64)


class ProductResponse(CamelModel):
    id: str
    name: str
    description: Optional[str] = None
    price: Decimal
    quantity: int
    category: Optional[str] = None
    image_url: Optional[str] = None
    sku: str
    created_at: datetime
    updated_at: datetime
    is_active: bool

    @classmethod
    def from_model(cls, product: ProductModel) -> "ProductResponse":
        meta = RecordMeta.of(product)
        return cls(
            id=meta.id,
            name=product.name,
            description=product.description,
            price=product.price,
            quantity=product.quantity,
            category=product.category,
            image_url=product.image_url,
            sku=product.sku,
            created_at=meta.created_at,
            updated_at=meta.updated_at,
            is_active=meta.is_active,
        )
