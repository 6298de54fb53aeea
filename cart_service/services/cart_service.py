# cart_service/services/cart_service.py
from typing import List

from cart_service.domain.errors import NotFoundError
from cart_service.domain.projection import empty_cart, project_cart, utcnow
from cart_service.domain.schemas import AddItemIn, Cart, CartItem, CartOut
from cart_service.repos.cart_repo import CartRepo
from cart_service.utils.logging import get_logger
from cart_service.utils.telemetry import traced

logger = get_logger(__name__)


def _find_item(items: List[CartItem], product_id: str) -> int:
    for index, item in enumerate(items):
        if item.product_id == product_id:
            return index
    return -1


def _require_line(cart: Cart | None, product_id: str) -> tuple[Cart, int]:
    if cart is None:
        raise NotFoundError("Cart not found")
    index = _find_item(cart.items, product_id)
    if index < 0:
        raise NotFoundError("Item not found in cart")
    return cart, index


class CartService:
    """
    Use cases of the cart domain.

    Query (get) only reads. Commands (add, update, remove) are applied to the
    stored document through CartRepo.mutate; clear deletes the key.
    """

    def __init__(self, repo: CartRepo):
        self.repo = repo

    # query
    def get_cart(self, user_id: str) -> CartOut:
        with traced("GET /cart", {"userId": user_id}):
            cart = self.repo.get(user_id)
            if cart is None:
                return project_cart(empty_cart(user_id))
            return project_cart(cart)

    # commands
    def add_item(self, user_id: str, payload: AddItemIn) -> CartOut:
        """
        Add a product line, or raise the quantity of the existing line for
        the same product_id. Name, price and image of an existing line are
        left as they were.
        """
        attributes = {
            "userId": user_id,
            "productId": payload.product_id,
            "quantity": payload.quantity,
        }
        with traced("POST /cart/items", attributes):

            def apply(cart: Cart | None) -> Cart:
                now = utcnow()
                if cart is None:
                    cart = Cart(user_id=user_id, items=[], created_at=now, updated_at=now)

                index = _find_item(cart.items, payload.product_id)
                if index >= 0:
                    cart.items[index].quantity += payload.quantity
                else:
                    cart.items.append(
                        CartItem(
                            product_id=payload.product_id,
                            name=payload.name,
                            price=payload.price,
                            quantity=payload.quantity,
                            image_url=payload.image_url,
                        )
                    )
                cart.updated_at = now
                return cart

            cart = self.repo.mutate(user_id, apply)

        logger.info(f"Added {payload.quantity} x {payload.product_id} to cart of user {user_id}")
        return project_cart(cart)

    def update_item(self, user_id: str, product_id: str, quantity: int) -> CartOut:
        """Set the absolute quantity of a line; 0 removes it."""
        attributes = {"userId": user_id, "productId": product_id, "quantity": quantity}
        with traced("PUT /cart/items/:productId", attributes):

            def apply(cart: Cart | None) -> Cart:
                cart, index = _require_line(cart, product_id)
                if quantity == 0:
                    del cart.items[index]
                else:
                    cart.items[index].quantity = quantity
                cart.updated_at = utcnow()
                return cart

            cart = self.repo.mutate(user_id, apply)

        logger.info(f"Set quantity of {product_id} to {quantity} in cart of user {user_id}")
        return project_cart(cart)

    def remove_item(self, user_id: str, product_id: str) -> CartOut:
        with traced("DELETE /cart/items/:productId", {"userId": user_id, "productId": product_id}):

            def apply(cart: Cart | None) -> Cart:
                cart, index = _require_line(cart, product_id)
                del cart.items[index]
                cart.updated_at = utcnow()
                return cart

            cart = self.repo.mutate(user_id, apply)

        logger.info(f"Removed {product_id} from cart of user {user_id}")
        return project_cart(cart)

    def clear_cart(self, user_id: str) -> CartOut:
        with traced("DELETE /cart", {"userId": user_id}):
            self.repo.delete(user_id)

        logger.info(f"Cleared cart of user {user_id}")
        return project_cart(empty_cart(user_id))
