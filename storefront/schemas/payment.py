# storefront/schemas/payment.py
from typing import Any

from sqlmodel import SQLModel, Field


class PaymentOrderCreate(SQLModel):
    """Checkout amount in major currency units."""

    amount: float = Field(gt=0)


class PaymentOrderRead(SQLModel):
    """Gateway order as returned by Razorpay."""

    data: dict[str, Any]


class PaymentVerify(SQLModel):
    razorpay_order_id: str
    razorpay_payment_id: str
    razorpay_signature: str
