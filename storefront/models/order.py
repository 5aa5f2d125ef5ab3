# storefront/models/order.py
import uuid
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


class Order(SQLModel, table=True):
    """
    Placed order.

    Write-once: the line items are a denormalized snapshot of product
    data at order time and do not follow later product edits.
    """

    __tablename__ = "orders"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    # Not a foreign key, same as carts.user_id
    user_id: uuid.UUID = Field(index=True)

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Creation timestamp (UTC)",
    )

    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Last modification timestamp (UTC)",
    )


class OrderItem(SQLModel, table=True):
    """
    Line item inside an order (snapshot of the product at order time).
    """

    __tablename__ = "order_items"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    order_id: uuid.UUID = Field(
        foreign_key="orders.id",
        index=True,
    )

    product_id: str | None = None
    quantity: int | None = None
    product_name: str | None = None
    product_price: float | None = None
    image_url: str | None = None

    # Order of the item in the submitted payload
    position: int = Field(default=0)
