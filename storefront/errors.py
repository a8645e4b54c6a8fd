from __future__ import annotations

from typing import Any, Dict, List, Optional


class StorefrontError(Exception):
    """Base class for store-level failures."""


class CatalogIntegrityError(StorefrontError):
    """A medicine references a category the catalog does not hold."""


class ConflictError(StorefrontError):
    """A uniqueness rule (username, email) would be broken."""


class APIError(Exception):
    """Error that maps directly onto an HTTP response."""

    status_code = 500

    def __init__(self, message: str, errors: Optional[List[Dict[str, Any]]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.errors = errors

    def to_body(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"message": self.message}
        if self.errors is not None:
            body["errors"] = self.errors
        return body


class NotFoundError(APIError):
    status_code = 404


class RequestValidationFailed(APIError):
    status_code = 400


class InternalError(APIError):
    status_code = 500
