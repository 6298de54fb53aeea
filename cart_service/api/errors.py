# cart_service/api/errors.py
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from cart_service.domain.errors import CartError
from cart_service.utils.logging import get_logger

logger = get_logger(__name__)

# message returned for an invalid body, keyed by route name
VALIDATION_MESSAGES = {
    "add_item": "Product ID, name, price, and quantity are required",
    "update_item": "Valid quantity is required",
}


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def cart_error_handler(request: Request, exc: CartError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.warning(f"{request.method} {request.url.path} rejected ({exc.status_code}): {exc.message}")
    return _error(exc.status_code, exc.message)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    route = request.scope.get("route")
    message = VALIDATION_MESSAGES.get(getattr(route, "name", None), "Invalid request")
    logger.warning(f"{request.method} {request.url.path} invalid body: {exc.errors()}")
    return _error(400, message)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"{request.method} {request.url.path} crashed", exc_info=exc)
    return _error(500, "Internal server error")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CartError, cart_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
