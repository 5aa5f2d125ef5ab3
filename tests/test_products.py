# tests/test_products.py
import uuid

import pytest

from storefront.core.supabase_client import supabase_admin
from storefront.services import product_service

API = "/api/v1"

PRODUCT = {
    "productName": "Smart TV",
    "productDesc": "55 inch 4K",
    "imageURL": "https://cdn/tv.png",
    "productPrice": 39999,
    "screenOption": "55",
    "color": "black",
    "badges": "new",
    "category": "tv",
}


def test_create_product_requires_admin(client, user_headers):
    assert client.post(f"{API}/admin-management", json=PRODUCT).status_code == 401
    res = client.post(f"{API}/admin-management", json=PRODUCT, headers=user_headers)
    assert res.status_code == 403


def test_create_and_list_products(client, admin_headers):
    res = client.post(f"{API}/admin-management", json=PRODUCT, headers=admin_headers)
    assert res.status_code == 201
    body = res.json()
    assert body["message"] == "Product add successfully!"
    product = body["product"]
    assert product["productName"] == "Smart TV"
    # price is stored as a string
    assert product["productPrice"] == "39999"

    data = client.get(f"{API}/get-data").json()["data"]
    assert [p["id"] for p in data] == [product["id"]]


def test_get_product(client, make_product):
    p = make_product(product_name="Laptop")
    res = client.get(f"{API}/products/{p.id}")
    assert res.status_code == 200
    assert res.json()["productName"] == "Laptop"
    assert client.get(f"{API}/products/{uuid.uuid4()}").status_code == 404


def test_update_product_partial(client, admin_headers, make_product):
    p = make_product(product_name="Laptop", color="grey")
    res = client.patch(
        f"{API}/products/{p.id}",
        json={"productPrice": "899.00"},
        headers=admin_headers,
    )
    assert res.status_code == 200
    body = res.json()
    assert body["productPrice"] == "899.00"
    assert body["color"] == "grey"


def test_delete_product(client, admin_headers, make_product, monkeypatch):
    deleted = []
    monkeypatch.setattr(product_service, "delete_public_url", deleted.append)

    p = make_product(image_url="https://x.supabase.co/storage/v1/object/public/assets/products/a.png")
    res = client.delete(f"{API}/delete-product/{p.id}", headers=admin_headers)
    assert res.status_code == 200
    assert res.json()["message"] == "Product deleted successfully"
    assert deleted == [p.image_url]

    res = client.delete(f"{API}/delete-product/{p.id}", headers=admin_headers)
    assert res.status_code == 404


def test_delete_product_survives_storage_failure(client, admin_headers, make_product, monkeypatch):
    def boom(url):
        raise RuntimeError("storage down")

    monkeypatch.setattr(product_service, "delete_public_url", boom)
    p = make_product(image_url="https://cdn/x.png")
    assert client.delete(f"{API}/delete-product/{p.id}", headers=admin_headers).status_code == 200


def test_upload_image(client, admin_headers, monkeypatch):
    calls = []

    def fake_upload(path, file_bytes, content_type):
        calls.append((path, file_bytes, content_type))
        return f"https://cdn/{path}"

    monkeypatch.setattr(product_service, "upload_to_storage", fake_upload)

    res = client.post(
        f"{API}/upload",
        files={"image": ("tv.png", b"\x89PNG...", "image/png")},
        headers=admin_headers,
    )
    assert res.status_code == 200
    body = res.json()
    assert body["success"] is True
    path, data, content_type = calls[0]
    assert path.startswith("products/") and path.endswith(".png")
    assert data == b"\x89PNG..."
    assert body["url"] == f"https://cdn/{path}"


def test_upload_rejects_bad_input(client, admin_headers):
    assert client.post(f"{API}/upload", headers=admin_headers).status_code == 400
    res = client.post(
        f"{API}/upload",
        files={"image": ("doc.gif", b"GIF89a", "image/gif")},
        headers=admin_headers,
    )
    assert res.status_code == 400


def test_upload_too_large(client, admin_headers):
    big = b"0" * (product_service.MAX_IMAGE_BYTES + 1)
    res = client.post(
        f"{API}/upload",
        files={"image": ("big.jpg", big, "image/jpeg")},
        headers=admin_headers,
    )
    assert res.status_code == 413


def test_upload_storage_not_configured(client, admin_headers):
    res = client.post(
        f"{API}/upload",
        files={"image": ("tv.png", b"data", "image/png")},
        headers=admin_headers,
    )
    assert res.status_code == 400
    assert "message" in res.json()


def test_storage_client_requires_configuration():
    with pytest.raises(RuntimeError, match="SUPABASE_URL"):
        supabase_admin()
