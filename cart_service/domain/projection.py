# cart_service/domain/projection.py
from datetime import datetime, timezone
from decimal import Decimal, ROUND_HALF_UP

from cart_service.domain.schemas import Cart, CartOut

_CENT = Decimal("0.01")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def empty_cart(user_id: str) -> Cart:
    """Cart for a user with nothing stored. Never persisted by itself."""
    now = utcnow()
    return Cart(user_id=user_id, items=[], created_at=now, updated_at=now)


def cart_total(cart: Cart) -> float:
    total = sum(
        (Decimal(str(i.price)) * i.quantity for i in cart.items),
        Decimal("0.00"),
    )
    return float(total.quantize(_CENT, rounding=ROUND_HALF_UP))


def item_count(cart: Cart) -> int:
    return sum(i.quantity for i in cart.items)


def project_cart(cart: Cart) -> CartOut:
    return CartOut(
        user_id=cart.user_id,
        items=[i.model_copy() for i in cart.items],
        total=cart_total(cart),
        item_count=item_count(cart),
        created_at=cart.created_at,
        updated_at=cart.updated_at,
    )
