# catalog_api/infrastructure/security/password_hasher.py

import base64
import binascii
import hashlib
import hmac
import os
from dataclasses import dataclass

from catalog_api.config.settings import settings
from catalog_api.core.exceptions import ValidationFailedError


@dataclass(frozen=True)
class PasswordHash:
    algo: str
    iterations: int
    hash: str
    salt: str


class PasswordHasher:
    ALGO = "pbkdf2_sha256"
    SALT_BYTES = 16

    def __init__(self, *, iterations: int | None = None, min_length: int | None = None) -> None:
        self._iterations = iterations or settings.password_iterations
        self._min_length = min_length if min_length is not None else settings.password_min_length

    @property
    def iterations(self) -> int:
        return self._iterations

    def hash_password(self, password: str) -> PasswordHash:
        if not password or len(password) < self._min_length:
            raise ValidationFailedError(
                {"password": f"must be at least {self._min_length} characters"}
            )

        salt = os.urandom(self.SALT_BYTES)
        dk = self._derive(password, salt, self._iterations)
        return PasswordHash(
            algo=self.ALGO,
            iterations=self._iterations,
            hash=base64.b64encode(dk).decode("utf-8"),
            salt=base64.b64encode(salt).decode("utf-8"),
        )

    def verify_password(
        self,
        password: str,
        *,
        password_hash: str,
        password_salt: str,
        iterations: int,
        algo: str,
    ) -> bool:
        if algo != self.ALGO:
            return False

        try:
            salt = base64.b64decode(password_salt.encode("utf-8"), validate=True)
            expected = base64.b64decode(password_hash.encode("utf-8"), validate=True)
        except (binascii.Error, ValueError):
            return False

        dk = self._derive(password, salt, int(iterations))
        return hmac.compare_digest(dk, expected)

    def burn(self, password: str) -> None:
        """Spend the same work as a real verification, result discarded."""
        hmac.compare_digest(
            self._derive(password, os.urandom(self.SALT_BYTES), self._iterations),
            bytes(32),
        )

    @staticmethod
    def _derive(password: str, salt: bytes, iterations: int) -> bytes:
        return hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations)
