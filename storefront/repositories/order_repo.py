# storefront/repositories/order_repo.py
import uuid

from sqlmodel import Session, select

from storefront.models.order import Order, OrderItem


class OrderRepository:
    """
    Data access layer for orders and their line items.

    Nothing here commits: an order and its items are written in one
    transaction owned by the service.
    """

    # ---- Orders ----

    def list_for_user(self, session: Session, user_id: uuid.UUID) -> list[Order]:
        stmt = (
            select(Order)
            .where(Order.user_id == user_id)
            .order_by(Order.created_at)
        )
        return list(session.exec(stmt).all())

    def create_order(self, session: Session, user_id: uuid.UUID) -> Order:
        """Stage a new order header and flush so its id is assigned."""
        order = Order(user_id=user_id)
        session.add(order)
        session.flush()
        return order

    # ---- Line items ----

    def list_items_for_order(
        self, session: Session, order_id: uuid.UUID
    ) -> list[OrderItem]:
        stmt = (
            select(OrderItem)
            .where(OrderItem.order_id == order_id)
            .order_by(OrderItem.position)
        )
        return list(session.exec(stmt).all())

    def add_items(
        self, session: Session, order_id: uuid.UUID, items: list[OrderItem]
    ) -> None:
        for position, item in enumerate(items):
            item.order_id = order_id
            item.position = position
        session.add_all(items)
        session.flush()
