# storefront/services/cart_service.py
import re
import uuid

from fastapi import HTTPException, status
from sqlmodel import Session

from storefront.models.cart import Cart
from storefront.repositories.cart_repo import CartRepository
from storefront.repositories.product_repo import ProductRepository
from storefront.schemas.cart import (
    CartDetails,
    CartItemDetail,
    CartItemQuantity,
    CartItemRead,
    CartQuantities,
    CartRead,
)
from storefront.schemas.user import MessageResponse

# Leading decimal number of a price string ("1499.00", "99 INR", "-5")
_PRICE_RE = re.compile(r"^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?")


def parse_price(raw: str | None) -> float | None:
    """
    Numeric value of a stored price string.

    Reads the longest leading number and ignores the rest;
    returns None when the string does not start with one.
    """
    if raw is None:
        return None
    match = _PRICE_RE.match(raw)
    if not match:
        return None
    return float(match.group(0))


class CartService:
    """
    Business logic for cart operations.

    Responsibilities:
      - lazily create the cart on first add
      - keep at most one entry per product (find-or-append)
      - join cart entries with inventory for display

    Quantities are changed with atomic store-level increments. There is
    no lower bound: decrementing past zero yields a negative quantity.
    """

    def __init__(self, cart_repo: CartRepository, product_repo: ProductRepository):
        self.cart_repo = cart_repo
        self.product_repo = product_repo

    # ---- internal helpers ----

    def _read(self, session: Session, cart: Cart) -> CartRead:
        items = self.cart_repo.list_items(session, cart.id)
        return CartRead(
            user_id=cart.user_id,
            items=[
                CartItemRead(
                    product_id=it.product_id,
                    quantity=it.quantity,
                    order_status=it.order_status,
                )
                for it in items
            ],
        )

    def _increment_or_append(
        self,
        session: Session,
        cart: Cart,
        product_id: uuid.UUID,
        quantity: int,
        order_status: bool | None = None,
    ) -> None:
        if self.cart_repo.adjust_quantity(session, cart.id, product_id, 1):
            return
        if self.cart_repo.append_item(
            session, cart.id, product_id, quantity, order_status
        ):
            return
        # Someone appended the same product between our two statements.
        self.cart_repo.adjust_quantity(session, cart.id, product_id, 1)

    # ---- public operations ----

    def add_or_increment(
        self,
        session: Session,
        user_id: uuid.UUID,
        product_id: uuid.UUID,
    ) -> CartRead:
        """
        Add one unit of a product to the user's cart.

        - no cart yet => create it with this product (orderStatus=False)
        - product present => quantity + 1
        - otherwise => append {product_id, quantity: 1}
        """
        cart = self.cart_repo.get_for_user(session, user_id)
        if cart is None:
            cart = self.cart_repo.get_or_create(session, user_id)
            self._increment_or_append(session, cart, product_id, 1, order_status=False)
        else:
            self._increment_or_append(session, cart, product_id, 1)

        cart = self.cart_repo.touch(session, cart)
        return self._read(session, cart)

    def increase(
        self,
        session: Session,
        user_id: uuid.UUID,
        product_id: uuid.UUID,
        quantity: int | None = None,
    ) -> CartRead:
        """
        Increase a product's quantity by one in an existing cart.

        If the product is not in the cart yet, append it with the given
        quantity (1 when omitted).
        """
        cart = self.cart_repo.get_for_user(session, user_id)
        if cart is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Cart not found!",
            )

        self._increment_or_append(
            session, cart, product_id, quantity if quantity is not None else 1
        )
        cart = self.cart_repo.touch(session, cart)
        return self._read(session, cart)

    def decrement(
        self,
        session: Session,
        user_id: uuid.UUID,
        product_id: uuid.UUID,
    ) -> CartRead | MessageResponse:
        """
        Decrease a product's quantity by one.

        Missing cart or item is reported as a message, not an error status.
        Quantity is not clamped at zero.
        """
        cart = self.cart_repo.get_for_user(session, user_id)
        if cart is None:
            return MessageResponse(message="Cart not found!")

        if not self.cart_repo.adjust_quantity(session, cart.id, product_id, -1):
            return MessageResponse(message="Item not found in cart!")

        cart = self.cart_repo.touch(session, cart)
        return self._read(session, cart)

    def remove(
        self,
        session: Session,
        user_id: uuid.UUID,
        product_id: uuid.UUID,
    ) -> CartRead | MessageResponse:
        """
        Remove a product from the cart.

        Removing a product that is not in the cart returns the cart unchanged.
        """
        cart = self.cart_repo.get_for_user(session, user_id)
        if cart is None:
            return MessageResponse(message="Cart not found!")

        if self.cart_repo.remove_item(session, cart.id, product_id):
            cart = self.cart_repo.touch(session, cart)
        return self._read(session, cart)

    def clear(self, session: Session, user_id: uuid.UUID) -> MessageResponse:
        """
        Empty the cart (typically after an order is placed). The cart row stays.
        """
        cart = self.cart_repo.get_for_user(session, user_id)
        if cart is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Cart not found!",
            )

        self.cart_repo.clear_items(session, cart.id)
        self.cart_repo.touch(session, cart)
        return MessageResponse(message="Cart cleared after order placed")

    # ---- read models ----

    def hydrate(self, session: Session, user_id: uuid.UUID) -> CartDetails:
        """
        Cart entries joined with their product details.

        - no cart / empty cart => empty list
        - entries whose product was deleted are dropped
        - productPrice is the numeric value of the stored price string
        """
        cart = self.cart_repo.get_for_user(session, user_id)
        if cart is None:
            return CartDetails(items=[])

        items = self.cart_repo.list_items(session, cart.id)
        if not items:
            return CartDetails(items=[])

        products = {
            p.id: p
            for p in self.product_repo.get_many(session, {it.product_id for it in items})
        }

        detailed: list[CartItemDetail] = []
        for it in items:
            product = products.get(it.product_id)
            if product is None:
                continue
            detailed.append(
                CartItemDetail(
                    product_id=it.product_id,
                    quantity=it.quantity,
                    product_name=product.product_name,
                    product_desc=product.product_desc,
                    image_url=product.image_url,
                    product_price=parse_price(product.product_price),
                )
            )
        return CartDetails(items=detailed)

    def hydrate_quantities_only(
        self, session: Session, user_id: uuid.UUID
    ) -> CartQuantities:
        """Same join as hydrate(), projected to product id + quantity."""
        details = self.hydrate(session, user_id)
        return CartQuantities(
            items=[
                CartItemQuantity(product_id=it.product_id, quantity=it.quantity)
                for it in details.items
            ]
        )
