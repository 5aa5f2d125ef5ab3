# storefront/models/product.py
import uuid
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


class Product(SQLModel, table=True):
    """
    Inventory entry ("stock management").

    product_price is kept as the string the admin entered; the cart
    converts it to a number when hydrating.
    """

    __tablename__ = "products"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    product_name: str | None = Field(default=None, index=True)
    product_desc: str | None = None
    image_url: str | None = Field(
        default=None,
        description="Public URL of the hosted product image",
    )
    product_price: str | None = Field(
        default=None,
        description="Price as entered, e.g. '1499' or '1499.00'",
    )
    screen_option: str | None = None
    color: str | None = None
    badges: str | None = None
    category: str | None = Field(default=None, index=True)

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Creation timestamp (UTC)",
    )
