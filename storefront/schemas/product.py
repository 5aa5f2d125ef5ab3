# storefront/schemas/product.py
import uuid
from datetime import datetime

from pydantic import ConfigDict, field_validator
from sqlmodel import SQLModel, Field


class ProductBase(SQLModel):
    """
    Shared product fields, with the camelCase names used on the wire.
    """

    model_config = ConfigDict(populate_by_name=True)

    product_name: str | None = Field(default=None, alias="productName")
    product_desc: str | None = Field(default=None, alias="productDesc")
    image_url: str | None = Field(default=None, alias="imageURL")
    product_price: str | None = Field(default=None, alias="productPrice")
    screen_option: str | None = Field(default=None, alias="screenOption")
    color: str | None = None
    badges: str | None = None
    category: str | None = None

    @field_validator("product_price", mode="before")
    @classmethod
    def price_as_string(cls, v):
        # Admin forms send either "1499" or 1499; the store keeps a string.
        if v is None or isinstance(v, str):
            return v
        return str(v)


class ProductCreate(ProductBase):
    """
    Payload for adding a product (admin).
    """

    model_config = ConfigDict(populate_by_name=True, extra="forbid")


class ProductUpdate(ProductBase):
    """
    Partial update payload for products.
    All fields are optional; only the ones sent are applied.
    """

    model_config = ConfigDict(populate_by_name=True, extra="forbid")


class ProductRead(ProductBase):
    """
    Product representation for clients.
    """

    id: uuid.UUID
    created_at: datetime = Field(alias="createdAt")


class ProductCreated(SQLModel):
    message: str
    product: ProductRead


class ProductList(SQLModel):
    data: list[ProductRead]


class UploadResponse(SQLModel):
    success: bool = True
    message: str
    url: str
