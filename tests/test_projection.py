from datetime import datetime, timezone

import pytest

from cart_service.domain.projection import cart_total, empty_cart, item_count, project_cart
from cart_service.domain.schemas import Cart, CartItem


def _cart(*lines):
    now = datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc)
    items = [
        CartItem(product_id=f"p{n}", name=f"p{n}", price=price, quantity=quantity)
        for n, (price, quantity) in enumerate(lines)
    ]
    return Cart(user_id="u1", items=items, created_at=now, updated_at=now)


@pytest.mark.parametrize(
    "lines,total,count",
    [
        ([], 0.0, 0),
        ([(9.99, 2)], 19.98, 2),
        ([(9.99, 5)], 49.95, 5),
        ([(0.1, 3), (0.2, 1)], 0.5, 4),
        ([(1.005, 1)], 1.01, 1),
        ([(0, 10), (19.99, 1)], 19.99, 11),
    ],
)
def test_total_and_count(lines, total, count):
    cart = _cart(*lines)

    assert cart_total(cart) == total
    assert item_count(cart) == count


def test_projection_fields():
    cart = _cart((2.5, 2))

    view = project_cart(cart)
    data = view.model_dump(mode="json", by_alias=True, exclude_none=True)

    assert data["userId"] == "u1"
    assert data["total"] == 5.0
    assert data["itemCount"] == 2
    assert data["createdAt"].startswith("2024-05-01T12:30:00")
    assert data["items"] == [{"productId": "p0", "name": "p0", "price": 2.5, "quantity": 2}]


def test_projection_does_not_share_items():
    cart = _cart((1.0, 1))

    view = project_cart(cart)
    view.items[0].quantity = 99

    assert cart.items[0].quantity == 1


def test_empty_cart():
    cart = empty_cart("u9")

    assert cart.user_id == "u9"
    assert cart.items == []
    assert cart.created_at == cart.updated_at
    assert cart.created_at.tzinfo is not None
