# tests/test_payments.py
import hashlib
import hmac

import requests

from storefront.services import payment_service

API = "/api/v1"


class FakeResponse:
    def __init__(self, payload, status_code=200):
        self.payload = payload
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        return self.payload


def sign(order_id, payment_id, secret="rzp_test_secret"):
    return hmac.new(
        secret.encode(), f"{order_id}|{payment_id}".encode(), hashlib.sha256
    ).hexdigest()


def test_order_now_creates_gateway_order(client, monkeypatch):
    calls = []

    def fake_post(url, json, auth, timeout):
        calls.append((url, json, auth))
        return FakeResponse({"id": "order_123", "amount": json["amount"], "currency": "INR"})

    monkeypatch.setattr(payment_service.requests, "post", fake_post)

    res = client.post(f"{API}/order-now", json={"amount": 499.5})
    assert res.status_code == 200
    assert res.json()["data"]["id"] == "order_123"

    url, payload, auth = calls[0]
    assert url.endswith("/orders")
    assert payload["amount"] == 49950
    assert payload["currency"] == "INR"
    assert len(payload["receipt"]) == 20
    assert auth == ("rzp_test_key", "rzp_test_secret")


def test_order_now_gateway_failure_is_500(client, monkeypatch):
    monkeypatch.setattr(
        payment_service.requests,
        "post",
        lambda *args, **kwargs: FakeResponse({"error": "bad"}, status_code=401),
    )
    res = client.post(f"{API}/order-now", json={"amount": 10})
    assert res.status_code == 500
    assert res.json()["message"] == "Order Creation Failed!"


def test_order_now_rejects_non_positive_amount(client):
    assert client.post(f"{API}/order-now", json={"amount": 0}).status_code == 400


def test_verify_success(client):
    body = {
        "razorpay_order_id": "order_1",
        "razorpay_payment_id": "pay_1",
        "razorpay_signature": sign("order_1", "pay_1"),
    }
    res = client.post(f"{API}/verify", json=body)
    assert res.status_code == 200
    assert res.text == "Success"


def test_verify_failure(client):
    body = {
        "razorpay_order_id": "order_1",
        "razorpay_payment_id": "pay_1",
        "razorpay_signature": sign("order_1", "pay_2"),
    }
    res = client.post(f"{API}/verify", json=body)
    assert res.status_code == 400
    assert res.text == "Failure"


def test_verify_non_ascii_signature_is_failure(client):
    body = {
        "razorpay_order_id": "order_1",
        "razorpay_payment_id": "pay_1",
        "razorpay_signature": "ü",
    }
    res = client.post(f"{API}/verify", json=body)
    assert res.status_code == 400
    assert res.text == "Failure"
