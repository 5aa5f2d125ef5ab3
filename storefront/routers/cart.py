# storefront/routers/cart.py
import uuid

from fastapi import APIRouter, Depends
from sqlmodel import Session

from storefront.database import get_session
from storefront.repositories.cart_repo import CartRepository
from storefront.repositories.product_repo import ProductRepository
from storefront.schemas.cart import (
    CartDetails,
    CartItemRequest,
    CartQuantities,
    CartRead,
    ClearCartRequest,
)
from storefront.schemas.user import MessageResponse
from storefront.services.cart_service import CartService

router = APIRouter(prefix="/cart", tags=["Cart"])

cart_repo = CartRepository()
product_repo = ProductRepository()
service = CartService(cart_repo, product_repo)


@router.post("/addtocart", response_model=CartRead)
def add_to_cart(
    payload: CartItemRequest,
    session: Session = Depends(get_session),
):
    """
    Add one unit of a product to the user's cart (created on first use).

    Returns the updated cart.
    """
    return service.add_or_increment(session, payload.user_id, payload.product_id)


@router.post("/increase", response_model=CartRead)
def increase(
    payload: CartItemRequest,
    session: Session = Depends(get_session),
):
    """
    Increase a product's quantity by one in an existing cart.
    """
    return service.increase(
        session, payload.user_id, payload.product_id, payload.quantity
    )


@router.put("/decrease-cart", response_model=CartRead | MessageResponse)
def decrease(
    payload: CartItemRequest,
    session: Session = Depends(get_session),
):
    """
    Decrease a product's quantity by one.

    Answers 200 with a message when the cart or item is missing.
    The quantity is not floored at zero.
    """
    return service.decrement(session, payload.user_id, payload.product_id)


@router.delete("/remove", response_model=CartRead | MessageResponse)
def remove(
    payload: CartItemRequest,
    session: Session = Depends(get_session),
):
    """
    Remove a product from the cart. Absent products leave it unchanged.
    """
    return service.remove(session, payload.user_id, payload.product_id)


@router.put("/clear-cart", response_model=MessageResponse)
def clear_cart(
    payload: ClearCartRequest,
    session: Session = Depends(get_session),
):
    """
    Empty the cart, typically after an order was placed.
    """
    return service.clear(session, payload.user_id)


@router.get("/{user_id}", response_model=CartDetails)
def get_cart(
    user_id: uuid.UUID,
    session: Session = Depends(get_session),
):
    """
    Cart items with full product details.
    """
    return service.hydrate(session, user_id)


@router.get("/{user_id}/quantity", response_model=CartQuantities)
def get_cart_quantities(
    user_id: uuid.UUID,
    session: Session = Depends(get_session),
):
    """
    Cart items as product id + quantity only.
    """
    return service.hydrate_quantities_only(session, user_id)
