# catalog_api/core/exceptions.py

class AppError(Exception):
    def __init__(self, message: str, *, status_code: int = 400) -> None:
        super().__init__(message)
        self.status_code = status_code

    def to_payload(self) -> dict:
        return {"error": str(self)}


class NotFoundError(AppError):
    def __init__(self, message: str = "Resource not found") -> None:
        super().__init__(message, status_code=404)


class DuplicateEntityError(AppError):
    def __init__(self, message: str = "Entity already exists") -> None:
        super().__init__(message, status_code=400)


class ValidationFailedError(AppError):
    def __init__(self, errors: dict[str, str], message: str = "Validation failed") -> None:
        super().__init__(message, status_code=400)
        self.errors = dict(errors)

    def to_payload(self) -> dict:
        return {"error": str(self), "errors": self.errors}


class AuthenticationFailedError(AppError):
    def __init__(self, message: str = "Invalid email or password") -> None:
        super().__init__(message, status_code=401)


class TokenInvalidError(AppError):
    def __init__(self, message: str = "Invalid or expired token") -> None:
        super().__init__(message, status_code=401)


class ForbiddenError(AppError):
    def __init__(self, message: str = "Access denied") -> None:
        super().__init__(message, status_code=403)
