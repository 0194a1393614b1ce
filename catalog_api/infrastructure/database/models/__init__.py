# catalog_api/infrastructure/database/models/__init__.py
# Importing the models registers their tables on BaseModel.metadata.

from catalog_api.infrastructure.database.models.product_model import ProductModel
from catalog_api.infrastructure.database.models.user_model import UserModel

__all__ = ["ProductModel", "UserModel"]
