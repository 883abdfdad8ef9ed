from __future__ import annotations

from typing import Any


class CatalogError(RuntimeError):
    status_code = 500

    def __init__(self, message: str, details: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict[str, Any]:
        return {"error": {"message": self.message, "details": self.details}}


class NotLoaded(CatalogError):
    status_code = 500


class NotFound(CatalogError):
    status_code = 404


class ValidationFailed(CatalogError):
    status_code = 400

    def __init__(self, errors: list[str], message: str = "Validation failed") -> None:
        super().__init__(message, list(errors))
        self.errors = list(errors)


class Conflict(CatalogError):
    status_code = 409


class PersistenceError(CatalogError):
    status_code = 500


class MalformedRequestBody(CatalogError):
    status_code = 400
