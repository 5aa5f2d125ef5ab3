# storefront/models/cart.py
import uuid
from datetime import datetime, timezone

from sqlalchemy import UniqueConstraint
from sqlmodel import SQLModel, Field


class Cart(SQLModel, table=True):
    """
    One cart per user, created lazily on the first add-to-cart.
    Clearing empties the items but keeps the cart row.
    """

    __tablename__ = "carts"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    # Not a foreign key: cart routes take the user id from the request
    # body, so a cart may belong to an id with no account row.
    user_id: uuid.UUID = Field(
        unique=True,
        index=True,
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )

    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )


class CartItem(SQLModel, table=True):
    """
    Cart entry for a product.

    - One cart cannot have 2 rows for the same product.
    - product_id is not a foreign key: the product may be deleted while
      still referenced, and hydration skips such entries.
    - quantity has no lower bound; decrementing can make it negative.
    """

    __tablename__ = "cart_items"
    __table_args__ = (
        UniqueConstraint("cart_id", "product_id", name="uq_cart_items_cart_product"),
    )

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    cart_id: uuid.UUID = Field(
        foreign_key="carts.id",
        index=True,
    )

    product_id: uuid.UUID = Field(index=True)

    quantity: int = Field(default=1)

    order_status: bool | None = None

    # Insertion order within the cart
    position: int = Field(default=0)
