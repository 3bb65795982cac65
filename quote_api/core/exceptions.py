from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
import logging


logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base application error."""
    def __init__(self, message: str, *, code: str = "app_error", status_code: int = 400) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code


class QuoteNotFoundError(AppError):
    def __init__(self, quote_id: str) -> None:
        super().__init__(
            f'Quote with ID "{quote_id}" not found',
            code="quote_not_found",
            status_code=404,
        )
        self.quote_id = quote_id


class PricingOptionNotSelectedError(AppError):
    def __init__(self, quote_id: str, option: str) -> None:
        super().__init__(
            f'Payment option "{option}" is not selected on quote "{quote_id}"',
            code="payment_option_not_found",
            status_code=404,
        )


class QuoteValidationError(AppError):
    def __init__(self, message: str) -> None:
        super().__init__(message, code="invalid_quote", status_code=400)


class WarehouseConfigError(AppError):
    def __init__(self, message: str) -> None:
        super().__init__(message, code="warehouse_not_configured", status_code=503)


class WarehouseQueryError(AppError):
    def __init__(self, message: str, *, upstream_status: int = 0) -> None:
        super().__init__(message, code="warehouse_error", status_code=502)
        self.upstream_status = upstream_status


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    logger.warning("AppError on %s %s: %s", request.method, request.url.path, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": exc.code, "message": exc.message},
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": "internal_error",
            "message": "Unexpected server error",
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
