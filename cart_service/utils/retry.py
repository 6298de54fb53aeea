# cart_service/utils/retry.py
from redis.exceptions import WatchError
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type

from cart_service.utils.settings import CART_CAS_ATTEMPTS


def cas_retry(attempts: int = CART_CAS_ATTEMPTS):
    """
    Re-run a WATCH/MULTI read-modify-write when another writer touched the key.

    Only WatchError is retried; connection and other Redis errors propagate
    on the first failure.
    """
    return retry(
        reraise=True,
        stop=stop_after_attempt(attempts),
        wait=wait_exponential(multiplier=0.01, min=0.01, max=0.2),
        retry=retry_if_exception_type(WatchError),
    )
