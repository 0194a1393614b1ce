# catalog_api/entities/role.py
from enum import Enum


class Role(str, Enum):
    USER = "USER"
    ADMIN = "ADMIN"
    MODERATOR = "MODERATOR"

    @classmethod
    def parse(cls, value: str) -> "Role":
        return cls(str(value).strip().upper())
