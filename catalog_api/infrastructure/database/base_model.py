# catalog_api/infrastructure/database/base_model.py

from sqlalchemy.orm import DeclarativeBase


class BaseModel(DeclarativeBase):
    pass
