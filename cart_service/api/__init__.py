# cart_service/api/__init__.py
from contextlib import asynccontextmanager

import redis
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from cart_service.api.errors import register_exception_handlers
from cart_service.api.routers import carts
from cart_service.api.routers.health import router as health_router
from cart_service.instrumentation import setup_telemetry, shutdown_telemetry
from cart_service.repos.cart_repo import CartRepo, create_redis_client
from cart_service.utils.logging import get_logger
from cart_service.utils.settings import CART_TTL_SECONDS, CORS_ORIGINS, OTEL_ENABLED

logger = get_logger(__name__)


def create_app(
    redis_client: redis.Redis | None = None,
    ttl: int = CART_TTL_SECONDS,
    telemetry: bool = OTEL_ENABLED,
) -> FastAPI:
    """
    Build the cart service app around an explicitly passed Redis client.

    Without a client one is created from REDIS_URL. The client is closed when
    the app shuts down.
    """
    client = redis_client if redis_client is not None else create_redis_client()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Cart service starting")
        yield
        logger.info("Cart service shutting down, closing Redis client")
        client.close()
        if telemetry:
            shutdown_telemetry()

    app = FastAPI(title="Cart Service", version="1.0.0", lifespan=lifespan)
    app.state.cart_repo = CartRepo(client, ttl=ttl)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Origin", "X-Requested-With", "Content-Type", "Accept", "Authorization"],
    )
    register_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(carts.router)

    if telemetry:
        setup_telemetry(app)

    return app
