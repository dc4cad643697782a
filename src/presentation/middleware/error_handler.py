"""Error handling middleware and exception handlers."""

from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
import structlog

from src.domain.exceptions import (
    DomainException,
    ConfigNotFoundException,
    ConfigValidationException,
    ConfigVersionConflictException,
    InconsistentRateConfigurationException,
    InvalidAdvanceRequestException,
    InvalidSplitRequestException,
    StoreNotFoundException,
    UnauthorizedException,
)
from .request_context import get_request_id

logger = structlog.get_logger(__name__)


def _error_response(
    status_code: int,
    exc: DomainException,
    errors: Optional[list] = None,
) -> JSONResponse:
    content = {
        "error": exc.code,
        "message": exc.message,
        "request_id": get_request_id(),
    }
    if errors is not None:
        content["errors"] = errors
    return JSONResponse(status_code=status_code, content=content)


def error_handler_middleware(app: FastAPI) -> None:
    """
    Register exception handlers with the FastAPI app.

    Maps domain exceptions to appropriate HTTP responses.
    """

    @app.exception_handler(StoreNotFoundException)
    async def store_not_found_handler(
        request: Request,
        exc: StoreNotFoundException,
    ) -> JSONResponse:
        """Handle store not found errors."""
        return _error_response(404, exc)

    @app.exception_handler(ConfigNotFoundException)
    async def config_not_found_handler(
        request: Request,
        exc: ConfigNotFoundException,
    ) -> JSONResponse:
        """Handle config version not found errors."""
        return _error_response(404, exc)

    @app.exception_handler(ConfigValidationException)
    async def config_validation_handler(
        request: Request,
        exc: ConfigValidationException,
    ) -> JSONResponse:
        """Handle config validation errors; every violation is returned."""
        logger.info(
            "risk_config_rejected",
            request_id=get_request_id(),
            error_count=len(exc.errors),
        )
        return _error_response(400, exc, errors=exc.errors)

    @app.exception_handler(ConfigVersionConflictException)
    async def config_conflict_handler(
        request: Request,
        exc: ConfigVersionConflictException,
    ) -> JSONResponse:
        """Handle compare-and-swap conflicts on config writes."""
        return _error_response(409, exc)

    @app.exception_handler(InconsistentRateConfigurationException)
    async def inconsistent_rate_handler(
        request: Request,
        exc: InconsistentRateConfigurationException,
    ) -> JSONResponse:
        """Handle configs whose fixed rates exceed the ethical cap (logged by the split service)."""
        return _error_response(422, exc)

    @app.exception_handler(InvalidSplitRequestException)
    async def invalid_split_handler(
        request: Request,
        exc: InvalidSplitRequestException,
    ) -> JSONResponse:
        """Handle invalid split requests."""
        return _error_response(400, exc)

    @app.exception_handler(InvalidAdvanceRequestException)
    async def invalid_advance_handler(
        request: Request,
        exc: InvalidAdvanceRequestException,
    ) -> JSONResponse:
        """Handle invalid advance requests."""
        return _error_response(400, exc)

    @app.exception_handler(UnauthorizedException)
    async def unauthorized_handler(
        request: Request,
        exc: UnauthorizedException,
    ) -> JSONResponse:
        """Handle admin calls without a valid token."""
        logger.warning(
            "admin_access_denied",
            request_id=get_request_id(),
            path=request.url.path,
        )
        return _error_response(401, exc)

    @app.exception_handler(DomainException)
    async def domain_exception_handler(
        request: Request,
        exc: DomainException,
    ) -> JSONResponse:
        """Handle generic domain exceptions."""
        logger.warning(
            "domain_exception",
            request_id=get_request_id(),
            code=exc.code,
            message=exc.message,
        )
        return _error_response(400, exc)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Handle unexpected exceptions."""
        logger.exception(
            "unhandled_exception",
            request_id=get_request_id(),
            error=str(exc),
            error_type=type(exc).__name__,
        )
        return JSONResponse(
            status_code=500,
            content={
                "error": "INTERNAL_ERROR",
                "message": "An unexpected error occurred.",
                "request_id": get_request_id(),
            },
        )
