# cart_service/utils/settings.py
import os
from dotenv import load_dotenv

load_dotenv()


def _as_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


REDIS_URL = os.getenv("REDIS_URL", "redis://localhost:6379/0")
REDIS_PASSWORD = os.getenv("REDIS_PASSWORD") or None
PORT = int(os.getenv("PORT", 3002))

JWT_SECRET = os.getenv("JWT_SECRET", "your-secret-key-change-in-production")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")

# 24h, reset on every write
CART_TTL_SECONDS = int(os.getenv("CART_TTL", 24 * 60 * 60))
CART_CAS_ATTEMPTS = int(os.getenv("CART_CAS_ATTEMPTS", 5))

CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

OTEL_ENABLED = _as_bool(os.getenv("OTEL_ENABLED", "false"))
OTEL_SERVICE_NAME = os.getenv("OTEL_SERVICE_NAME", "cart-service")
OTEL_EXPORTER_OTLP_ENDPOINT = os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT", "http://localhost:4317")
