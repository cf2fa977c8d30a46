"""Error taxonomy for the storefront core.

Services raise these; the API layer turns them into JSON responses
(see ``register_exception_handlers``).
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class StorefrontError(Exception):
    """Base error carrying an HTTP status and optional details."""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.details = details or {}


class NotFound(StorefrontError):
    """Missing user, product, cart or line item."""

    status_code = 404

    def __init__(self, entity: str, entity_id: Any):
        super().__init__(
            f"{entity.capitalize()} '{entity_id}' not found",
            details={"entity": entity, "id": str(entity_id)},
        )


class ValidationError(StorefrontError):
    """Malformed input the core refuses to act on."""

    status_code = 422

    def __init__(self, message: str, field: Optional[str] = None, **details: Any):
        if field:
            details["field"] = field
        super().__init__(message, details=details)


class CartConflict(StorefrontError):
    """Cart changed between read and save (optimistic version check failed)."""

    status_code = 409

    def __init__(self, user_id: str, expected_version: int):
        super().__init__(
            f"Cart for user '{user_id}' was modified concurrently, retry the request",
            details={"user_id": user_id, "expected_version": expected_version},
        )


class StoreUnavailable(StorefrontError):
    """Persistence collaborator failed. Details stay server-side."""

    status_code = 503

    def __init__(self, operation: str, error: Optional[Exception] = None):
        super().__init__(
            f"Store unavailable during {operation}",
            details={
                "operation": operation,
                "error": str(error) if error else None,
                "error_type": type(error).__name__ if error else None,
            },
        )


async def _storefront_error_handler(request: Request, exc: StorefrontError) -> JSONResponse:
    if isinstance(exc, StoreUnavailable):
        logger.error(
            "Store failure on %s %s: %s details=%s",
            request.method, request.url.path, exc.message, exc.details,
        )
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": "StoreUnavailable", "message": "Service temporarily unavailable", "details": {}},
        )

    logger.info("Client error on %s %s: %s", request.method, request.url.path, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": type(exc).__name__, "message": exc.message, "details": exc.details},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StorefrontError, _storefront_error_handler)
