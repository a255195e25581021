"""FastAPI middleware and error handling for the registry host.

Stack:
    1. RequestIDMiddleware — injects X-Request-ID into every request/response
    2. registry_error_handler — domain exceptions -> structured JSON errors
    3. CORSMiddleware — browser clients
"""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

import structlog
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from escrow_registry.domain.exceptions import (
    CallerIdentityMissingError,
    ConfirmationsPendingError,
    ContractNotFoundError,
    DuplicateConfirmationError,
    DuplicateWalletMemberError,
    InvalidStateTransitionError,
    NotContractListerError,
    ProposalNotFoundError,
    RegistryError,
    WalletPermissionError,
)

if TYPE_CHECKING:
    from fastapi import FastAPI, Request, Response

logger = structlog.get_logger(__name__)

# Checked in order; the first matching class decides the HTTP status.
_STATUS_CODES: tuple[tuple[type[RegistryError], int], ...] = (
    (CallerIdentityMissingError, 401),
    (NotContractListerError, 403),
    (WalletPermissionError, 403),
    (ContractNotFoundError, 404),
    (ProposalNotFoundError, 404),
    (InvalidStateTransitionError, 409),
    (DuplicateConfirmationError, 409),
    (DuplicateWalletMemberError, 409),
    (ConfirmationsPendingError, 409),
)


# ---------------------------------------------------------------------------
# 1. Request ID Middleware
# ---------------------------------------------------------------------------
class RequestIDMiddleware(BaseHTTPMiddleware):
    """Inject a unique X-Request-ID into every request for log correlation."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = request.headers.get("X-Request-ID", str(uuid.uuid4()))

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id)

        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response


# ---------------------------------------------------------------------------
# 2. Domain error handler
# ---------------------------------------------------------------------------
def status_code_for(exc: RegistryError) -> int:
    for exc_type, status_code in _STATUS_CODES:
        if isinstance(exc, exc_type):
            return status_code
    return 400


async def registry_error_handler(request: Request, exc: RegistryError) -> JSONResponse:
    """Translate a RegistryError into {"error": code, "message": message}."""
    status_code = status_code_for(exc)
    logger.warning(
        "domain.error",
        path=request.url.path,
        code=exc.code,
        error=exc.message,
        status_code=status_code,
    )
    return JSONResponse(
        status_code=status_code,
        content={"error": exc.code, "message": exc.message},
    )


# ---------------------------------------------------------------------------
# Setup function
# ---------------------------------------------------------------------------
def setup_middleware(app: FastAPI) -> None:
    """Register middleware and exception handlers on the FastAPI application.

    Middleware is applied bottom-up, so the last added runs first.
    """
    app.add_exception_handler(RegistryError, registry_error_handler)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Request ID (outermost)
    app.add_middleware(RequestIDMiddleware)
