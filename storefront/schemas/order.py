# storefront/schemas/order.py
import uuid
from datetime import datetime

from pydantic import ConfigDict
from sqlmodel import SQLModel, Field


class OrderItemPayload(SQLModel):
    """
    Snapshot of a cart line at order time, as sent by the client.
    Stored as-is; nothing is looked up from inventory.
    """

    model_config = ConfigDict(populate_by_name=True)

    product_id: str | None = Field(default=None, alias="productId")
    quantity: int | None = None
    product_name: str | None = Field(default=None, alias="productName")
    product_price: float | None = Field(default=None, alias="productPrice")
    image_url: str | None = Field(default=None, alias="imageURL")


class OrderCreate(SQLModel):
    """Payload for placing an order."""

    model_config = ConfigDict(populate_by_name=True)

    user_id: uuid.UUID = Field(alias="UsrId")
    items: list[OrderItemPayload] = Field(default_factory=list, alias="Items")


class OrderRead(SQLModel):
    """Order with its line items."""

    model_config = ConfigDict(populate_by_name=True)

    id: uuid.UUID
    user_id: uuid.UUID = Field(alias="UsrId")
    items: list[OrderItemPayload] = Field(alias="Items")
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")


class OrderHistory(SQLModel):
    orders: list[OrderRead]
