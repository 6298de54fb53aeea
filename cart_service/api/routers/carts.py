# cart_service/api/routers/carts.py
from fastapi import APIRouter, Depends, Request

from cart_service.api.auth import require_user
from cart_service.domain.schemas import AddItemIn, AuthUser, CartOut, UpdateItemIn
from cart_service.services.cart_service import CartService

router = APIRouter(prefix="/api/cart", tags=["cart"])


def get_service(request: Request) -> CartService:
    return CartService(repo=request.app.state.cart_repo)


@router.get("", response_model=CartOut, response_model_exclude_none=True)
def get_cart(
    user: AuthUser = Depends(require_user),
    svc: CartService = Depends(get_service),
):
    return svc.get_cart(user.user_id)


@router.post("/items", response_model=CartOut, response_model_exclude_none=True)
def add_item(
    payload: AddItemIn,
    user: AuthUser = Depends(require_user),
    svc: CartService = Depends(get_service),
):
    return svc.add_item(user.user_id, payload)


@router.put("/items/{product_id}", response_model=CartOut, response_model_exclude_none=True)
def update_item(
    product_id: str,
    payload: UpdateItemIn,
    user: AuthUser = Depends(require_user),
    svc: CartService = Depends(get_service),
):
    return svc.update_item(user.user_id, product_id, payload.quantity)


@router.delete("/items/{product_id}", response_model=CartOut, response_model_exclude_none=True)
def remove_item(
    product_id: str,
    user: AuthUser = Depends(require_user),
    svc: CartService = Depends(get_service),
):
    return svc.remove_item(user.user_id, product_id)


@router.delete("", response_model=CartOut, response_model_exclude_none=True)
def clear_cart(
    user: AuthUser = Depends(require_user),
    svc: CartService = Depends(get_service),
):
    return svc.clear_cart(user.user_id)
