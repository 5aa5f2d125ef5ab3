# storefront/services/order_service.py
import logging
import uuid

from fastapi import HTTPException, status
from sqlmodel import Session

from storefront.models.order import OrderItem
from storefront.repositories.order_repo import OrderRepository
from storefront.schemas.order import (
    OrderCreate,
    OrderHistory,
    OrderItemPayload,
    OrderRead,
)
from storefront.schemas.user import MessageResponse

logger = logging.getLogger(__name__)


class OrderService:
    """
    Business logic for orders.

    Orders are write-once snapshots of what the client had in its cart:
    product name, price and image are copied as sent and never re-read
    from inventory.
    """

    def __init__(self, order_repo: OrderRepository):
        self.order_repo = order_repo

    def place_order(self, session: Session, payload: OrderCreate) -> MessageResponse:
        """
        Persist an order and its items in one transaction.
        """
        try:
            order = self.order_repo.create_order(session, payload.user_id)
            self.order_repo.add_items(
                session,
                order.id,
                [
                    OrderItem(
                        product_id=it.product_id,
                        quantity=it.quantity,
                        product_name=it.product_name,
                        product_price=it.product_price,
                        image_url=it.image_url,
                    )
                    for it in payload.items
                ],
            )
            session.commit()
        except Exception:
            session.rollback()
            logger.exception("Failed to place order for %s", payload.user_id)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Failed to place order",
            )

        return MessageResponse(message="Order placed successfully")

    def history(self, session: Session, user_id: uuid.UUID) -> OrderHistory:
        """
        All orders of a user, oldest first, each with its items.
        """
        orders: list[OrderRead] = []
        for order in self.order_repo.list_for_user(session, user_id):
            items = self.order_repo.list_items_for_order(session, order.id)
            orders.append(
                OrderRead(
                    id=order.id,
                    user_id=order.user_id,
                    items=[
                        OrderItemPayload(
                            product_id=it.product_id,
                            quantity=it.quantity,
                            product_name=it.product_name,
                            product_price=it.product_price,
                            image_url=it.image_url,
                        )
                        for it in items
                    ],
                    created_at=order.created_at,
                    updated_at=order.updated_at,
                )
            )
        return OrderHistory(orders=orders)
