# catalog_api/api/middlewares/error_handler.py
from flask import Flask, jsonify
from pydantic import ValidationError
from werkzeug.exceptions import HTTPException

from catalog_api.config.settings import settings
from catalog_api.core.exceptions import AppError, ValidationFailedError


def validation_errors(err: ValidationError) -> dict[str, str]:
    errors: dict[str, str] = {}
    for item in err.errors():
        field = ".".join(str(p) for p in item.get("loc", ())) or "body"
        errors.setdefault(field, item.get("msg", "Invalid value"))
    return errors


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(AppError)
    def handle_app_error(err: AppError):
        if err.status_code >= 500:
            app.logger.error("Application error: %s", err)
        else:
            app.logger.info("%s: %s", type(err).__name__, err)
        return jsonify(err.to_payload()), err.status_code

    @app.errorhandler(ValidationError)
    def handle_validation_error(err: ValidationError):
        failed = ValidationFailedError(validation_errors(err))
        app.logger.info("Validation failed: %s", failed.errors)
        return jsonify(failed.to_payload()), failed.status_code

    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        return jsonify({"error": err.description}), err.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(err: Exception):
        app.logger.exception("Unexpected error")

        if settings.debug:
            return jsonify({"error": str(err)}), 500

        return jsonify({"error": "Internal server error"}), 500
