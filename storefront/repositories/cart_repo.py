# storefront/repositories/cart_repo.py
import uuid
from datetime import datetime, timezone

from sqlalchemy import delete, func, update
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from storefront.models.cart import Cart, CartItem


class CartRepository:
    """
    Data access layer for carts and cart items.

    Quantity changes are single UPDATE statements evaluated by the
    database (quantity = quantity + delta), so two concurrent requests
    on the same item cannot lose each other's update.
    """

    # ----- Carts -----

    def get_for_user(self, session: Session, user_id: uuid.UUID) -> Cart | None:
        stmt = select(Cart).where(Cart.user_id == user_id)
        return session.exec(stmt).first()

    def get_or_create(self, session: Session, user_id: uuid.UUID) -> Cart:
        """
        Return the user's cart, creating it on first use.

        If another request created it in the meantime, the unique
        user_id index rejects our insert and we load theirs.
        """
        cart = self.get_for_user(session, user_id)
        if cart is not None:
            return cart

        cart = Cart(user_id=user_id)
        session.add(cart)
        try:
            session.commit()
        except IntegrityError:
            session.rollback()
            existing = self.get_for_user(session, user_id)
            if existing is None:
                raise
            return existing
        session.refresh(cart)
        return cart

    def touch(self, session: Session, cart: Cart) -> Cart:
        cart.updated_at = datetime.now(timezone.utc)
        session.add(cart)
        session.commit()
        session.refresh(cart)
        return cart

    # ----- Items -----

    def list_items(self, session: Session, cart_id: uuid.UUID) -> list[CartItem]:
        stmt = (
            select(CartItem)
            .where(CartItem.cart_id == cart_id)
            .order_by(CartItem.position)
        )
        return list(session.exec(stmt).all())

    def adjust_quantity(
        self,
        session: Session,
        cart_id: uuid.UUID,
        product_id: uuid.UUID,
        delta: int,
    ) -> bool:
        """
        Atomically add delta to the item's quantity.

        Returns False if the cart has no entry for the product.
        """
        stmt = (
            update(CartItem)
            .where(CartItem.cart_id == cart_id, CartItem.product_id == product_id)
            .values(quantity=CartItem.quantity + delta)
            .execution_options(synchronize_session=False)
        )
        result = session.exec(stmt)
        session.commit()
        return result.rowcount > 0

    def append_item(
        self,
        session: Session,
        cart_id: uuid.UUID,
        product_id: uuid.UUID,
        quantity: int,
        order_status: bool | None = None,
    ) -> bool:
        """
        Append a new entry at the end of the cart.

        Returns False if an entry for the product already exists
        (inserted concurrently); the caller then increments instead.
        """
        last = session.exec(
            select(func.max(CartItem.position)).where(CartItem.cart_id == cart_id)
        ).one()
        item = CartItem(
            cart_id=cart_id,
            product_id=product_id,
            quantity=quantity,
            order_status=order_status,
            position=0 if last is None else last + 1,
        )
        session.add(item)
        try:
            session.commit()
        except IntegrityError:
            session.rollback()
            return False
        return True

    def remove_item(
        self, session: Session, cart_id: uuid.UUID, product_id: uuid.UUID
    ) -> int:
        stmt = delete(CartItem).where(
            CartItem.cart_id == cart_id, CartItem.product_id == product_id
        )
        result = session.exec(stmt)
        session.commit()
        return result.rowcount

    def clear_items(self, session: Session, cart_id: uuid.UUID) -> None:
        session.exec(delete(CartItem).where(CartItem.cart_id == cart_id))
        session.commit()
