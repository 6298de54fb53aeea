# cart_service/repos/cart_repo.py
from typing import Callable

import pydantic
import redis
from redis.exceptions import RedisError, WatchError

from cart_service.domain.errors import ConflictError, StorageError
from cart_service.domain.schemas import Cart
from cart_service.utils.logging import get_logger
from cart_service.utils.retry import cas_retry
from cart_service.utils.settings import CART_TTL_SECONDS, REDIS_URL, REDIS_PASSWORD

logger = get_logger(__name__)

# gets the stored cart (None when the key is absent), returns the cart to write back
Mutation = Callable[[Cart | None], Cart]


def create_redis_client(url: str | None = None, password: str | None = None) -> redis.Redis:
    return redis.Redis.from_url(
        url or REDIS_URL,
        password=password or REDIS_PASSWORD,
        decode_responses=True,
    )


def cart_key(user_id: str) -> str:
    return f"cart:{user_id}"


class CartRepo:
    """
    Redis store for cart documents.

    -one JSON document per user under cart:{user_id}
    -every write resets the TTL
    -writes go through WATCH/MULTI so a concurrent change is never overwritten
    """

    def __init__(self, client: redis.Redis, ttl: int = CART_TTL_SECONDS):
        self.redis = client
        self.ttl = ttl

    def get(self, user_id: str) -> Cart | None:
        key = cart_key(user_id)
        try:
            raw = self.redis.get(key)
        except RedisError as e:
            logger.exception(f"Redis GET {key} failed")
            raise StorageError() from e
        return self._decode(key, raw)

    def mutate(self, user_id: str, apply: Mutation) -> Cart:
        """
        Read-modify-write of the cart document as a compare-and-swap.

        apply() may be called several times when other writers race us, so it
        must not have side effects beyond building the new cart.
        """
        key = cart_key(user_id)
        try:
            return self._mutate(key, apply)
        except WatchError as e:
            logger.warning(f"Giving up on {key} after repeated concurrent modifications")
            raise ConflictError("Cart was modified concurrently, please retry") from e
        except RedisError as e:
            logger.exception(f"Redis write of {key} failed")
            raise StorageError() from e

    def delete(self, user_id: str) -> None:
        key = cart_key(user_id)
        try:
            self.redis.delete(key)
        except RedisError as e:
            logger.exception(f"Redis DEL {key} failed")
            raise StorageError() from e

    def ping(self) -> bool:
        try:
            return bool(self.redis.ping())
        except RedisError as e:
            logger.warning(f"Redis PING failed: {e}")
            return False

    @cas_retry()
    def _mutate(self, key: str, apply: Mutation) -> Cart:
        with self.redis.pipeline() as pipe:
            pipe.watch(key)
            current = self._decode(key, pipe.get(key))
            updated = apply(current)
            pipe.multi()
            # SET key value EX ttl, the TTL restarts on every write
            pipe.set(key, self._encode(updated), ex=self.ttl)
            pipe.execute()
        return updated

    @staticmethod
    def _encode(cart: Cart) -> str:
        return cart.model_dump_json(by_alias=True, exclude_none=True)

    @staticmethod
    def _decode(key: str, raw: str | None) -> Cart | None:
        if raw is None:
            return None
        try:
            return Cart.model_validate_json(raw)
        except pydantic.ValidationError as e:
            logger.error(f"Stored document under {key} is not a valid cart: {e}")
            raise StorageError() from e
