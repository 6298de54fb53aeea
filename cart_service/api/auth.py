# cart_service/api/auth.py
from typing import Any, Dict

from fastapi import Header
from jose import ExpiredSignatureError, JWTError, jwt

from cart_service.domain.errors import AuthError, AuthFailure
from cart_service.domain.schemas import AuthUser
from cart_service.utils.logging import get_logger
from cart_service.utils.settings import JWT_ALGORITHM, JWT_SECRET

logger = get_logger(__name__)


def decode_token(token: str, secret: str = JWT_SECRET) -> Dict[str, Any]:
    """
    Verify signature and exp of a bearer token.

    Raises:
        AuthError(401): expired, malformed or wrongly signed token.
        AuthFailure(500): anything else going wrong during verification.
    """
    try:
        return jwt.decode(token, secret, algorithms=[JWT_ALGORITHM])
    except ExpiredSignatureError:
        raise AuthError("Token expired")
    except JWTError:
        raise AuthError("Invalid token")
    except Exception as e:
        logger.exception(f"Token verification failed: {e}")
        raise AuthFailure("Token verification failed") from e


def authenticate(authorization: str | None) -> AuthUser:
    if not authorization:
        raise AuthError("No authorization header")

    # "Bearer <token>" or the bare token
    token = authorization[7:] if authorization.startswith("Bearer ") else authorization
    token = token.strip()
    if not token:
        raise AuthError("No token provided")

    claims = decode_token(token)
    user_id = claims.get("userId")
    if not user_id:
        raise AuthError("Invalid token")

    return AuthUser(
        user_id=str(user_id),
        username=claims.get("username"),
        email=claims.get("email"),
    )


def require_user(authorization: str | None = Header(default=None)) -> AuthUser:
    """FastAPI dependency guarding every /api/cart route."""
    return authenticate(authorization)
