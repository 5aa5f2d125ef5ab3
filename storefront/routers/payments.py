# storefront/routers/payments.py
from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from storefront.core.config import get_settings
from storefront.schemas.payment import (
    PaymentOrderCreate,
    PaymentOrderRead,
    PaymentVerify,
)
from storefront.services.payment_service import PaymentService

router = APIRouter(tags=["Payments"])

service = PaymentService(get_settings())


@router.post("/order-now", response_model=PaymentOrderRead)
def create_payment_order(payload: PaymentOrderCreate):
    """
    Create a gateway order for the checkout amount.
    """
    return PaymentOrderRead(data=service.create_order(payload.amount))


@router.post("/verify", response_class=PlainTextResponse)
def verify_payment(payload: PaymentVerify):
    """
    Verify the gateway signature after checkout.

    Plain-text answer: "Success" (200) or "Failure" (400).
    """
    if service.verify_signature(
        payload.razorpay_order_id,
        payload.razorpay_payment_id,
        payload.razorpay_signature,
    ):
        return PlainTextResponse("Success", status_code=200)
    return PlainTextResponse("Failure", status_code=400)
