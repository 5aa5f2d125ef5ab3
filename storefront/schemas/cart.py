# storefront/schemas/cart.py
import uuid

from pydantic import ConfigDict
from sqlmodel import SQLModel, Field


class CartItemRequest(SQLModel):
    """
    Payload for addtocart / increase / decrease-cart / remove.

    quantity is only read by /increase when the product is not yet
    in the cart.
    """

    model_config = ConfigDict(populate_by_name=True)

    user_id: uuid.UUID = Field(alias="UserId")
    product_id: uuid.UUID = Field(alias="productId")
    quantity: int | None = None


class ClearCartRequest(SQLModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: uuid.UUID = Field(alias="UserId")


class CartItemRead(SQLModel):
    model_config = ConfigDict(populate_by_name=True)

    product_id: uuid.UUID = Field(alias="productId")
    quantity: int
    order_status: bool | None = Field(default=None, alias="orderStatus")


class CartRead(SQLModel):
    """Raw cart: product ids and quantities in insertion order."""

    model_config = ConfigDict(populate_by_name=True)

    user_id: uuid.UUID = Field(alias="UserId")
    items: list[CartItemRead] = Field(alias="Items")


class CartItemDetail(SQLModel):
    """
    Cart entry joined with its product.

    product_price is the numeric value of the stored price string,
    or None if it does not start with a number.
    """

    model_config = ConfigDict(populate_by_name=True)

    product_id: uuid.UUID = Field(alias="productId")
    quantity: int
    product_name: str | None = Field(default=None, alias="productName")
    product_desc: str | None = Field(default=None, alias="productDesc")
    image_url: str | None = Field(default=None, alias="imageURL")
    product_price: float | None = Field(default=None, alias="productPrice")


class CartItemQuantity(SQLModel):
    model_config = ConfigDict(populate_by_name=True)

    product_id: uuid.UUID = Field(alias="productId")
    quantity: int


class CartDetails(SQLModel):
    items: list[CartItemDetail]


class CartQuantities(SQLModel):
    items: list[CartItemQuantity]
