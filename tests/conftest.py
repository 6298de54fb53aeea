"""
Shared fixtures for the cart service tests.

Redis is replaced by an in-process fakeredis server, so the real store,
service, auth and routing code all run unchanged.
"""
from datetime import datetime, timedelta, timezone

import fakeredis
import pytest
from fastapi.testclient import TestClient
from jose import jwt

from cart_service.api import create_app
from cart_service.repos.cart_repo import CartRepo
from cart_service.services.cart_service import CartService
from cart_service.utils.settings import JWT_ALGORITHM, JWT_SECRET

TEST_TTL = 86400


def make_token(
    user_id: str = "user-1",
    username: str = "alice",
    email: str = "alice@example.com",
    expires_in: timedelta = timedelta(hours=1),
    secret: str = JWT_SECRET,
) -> str:
    claims = {
        "userId": user_id,
        "username": username,
        "email": email,
        "exp": datetime.now(timezone.utc) + expires_in,
    }
    return jwt.encode(claims, secret, algorithm=JWT_ALGORITHM)


@pytest.fixture
def redis_server():
    return fakeredis.FakeServer()


@pytest.fixture
def redis_client(redis_server):
    return fakeredis.FakeRedis(server=redis_server, decode_responses=True)


@pytest.fixture
def other_client(redis_server):
    """Second connection to the same server, playing a concurrent writer."""
    return fakeredis.FakeRedis(server=redis_server, decode_responses=True)


@pytest.fixture
def repo(redis_client):
    return CartRepo(redis_client, ttl=TEST_TTL)


@pytest.fixture
def service(repo):
    return CartService(repo)


@pytest.fixture
def app(redis_client):
    return create_app(redis_client=redis_client, ttl=TEST_TTL, telemetry=False)


@pytest.fixture
def test_client(app):
    return TestClient(app)


@pytest.fixture
def auth_headers():
    return {"Authorization": f"Bearer {make_token()}"}


@pytest.fixture
def widget():
    return {"productId": "p1", "name": "Widget", "price": 9.99, "quantity": 2}
