# storefront/services/payment_service.py
import hashlib
import hmac
import logging
import secrets

import requests
from fastapi import HTTPException, status

from storefront.core.config import Settings

logger = logging.getLogger(__name__)

GATEWAY_TIMEOUT_SECONDS = 15


class PaymentService:
    """
    Razorpay integration.

    Responsibilities:
      - create a gateway order for a checkout amount
      - verify the signature the gateway hands back to the client
    """

    def __init__(self, settings: Settings):
        self.settings = settings

    def create_order(self, amount: float) -> dict:
        """
        Create a payment order on the gateway.

        amount is in major units (e.g. rupees); the gateway expects
        minor units (paise), hence * 100.

        Raises:
            HTTPException(500): missing credentials or gateway failure.
        """
        key_id = self.settings.RAZORPAY_KEY_ID
        key_secret = self.settings.RAZORPAY_SECRET_KEY
        if not key_id or not key_secret:
            logger.error("Razorpay credentials are not configured")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Order Creation Failed!",
            )

        payload = {
            "amount": int(round(amount * 100)),
            "currency": self.settings.PAYMENT_CURRENCY,
            "receipt": secrets.token_hex(10),
        }

        try:
            response = requests.post(
                f"{self.settings.RAZORPAY_API_URL}/orders",
                json=payload,
                auth=(key_id, key_secret),
                timeout=GATEWAY_TIMEOUT_SECONDS,
            )
            response.raise_for_status()
            return response.json()
        except requests.RequestException as exc:
            logger.error("Razorpay order creation failed: %s", exc)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Order Creation Failed!",
            )

    def verify_signature(
        self,
        order_id: str,
        payment_id: str,
        signature: str,
    ) -> bool:
        """
        Check HMAC-SHA256(secret, "<order_id>|<payment_id>") against the
        signature returned by the gateway checkout.

        Raises:
            HTTPException(500): if the secret is not configured.
        """
        key_secret = self.settings.RAZORPAY_SECRET_KEY
        if not key_secret:
            logger.error("Razorpay secret is not configured")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Server Error",
            )

        expected = hmac.new(
            key_secret.encode("utf-8"),
            f"{order_id}|{payment_id}".encode("utf-8"),
            hashlib.sha256,
        ).hexdigest()
        return hmac.compare_digest(expected.encode("utf-8"), signature.encode("utf-8"))
