# tests/test_cart.py
import uuid

import pytest

from storefront.services.cart_service import parse_price

API = "/api/v1"


def add(client, user_id, product_id):
    return client.post(
        f"{API}/cart/addtocart",
        json={"UserId": str(user_id), "productId": str(product_id)},
    )


def decrease(client, user_id, product_id):
    return client.put(
        f"{API}/cart/decrease-cart",
        json={"UserId": str(user_id), "productId": str(product_id)},
    )


def remove(client, user_id, product_id):
    return client.request(
        "DELETE",
        f"{API}/cart/remove",
        json={"UserId": str(user_id), "productId": str(product_id)},
    )


def quantities(cart_json):
    return {it["productId"]: it["quantity"] for it in cart_json["Items"]}


# -------- add / increase --------


def test_first_add_creates_cart(client, user):
    pid = uuid.uuid4()
    res = add(client, user.id, pid)
    assert res.status_code == 200
    body = res.json()
    assert body["UserId"] == str(user.id)
    assert body["Items"] == [{"productId": str(pid), "quantity": 1, "orderStatus": False}]


def test_add_twice_yields_quantity_two(client, user):
    pid = uuid.uuid4()
    add(client, user.id, pid)
    body = add(client, user.id, pid).json()
    assert len(body["Items"]) == 1
    assert quantities(body) == {str(pid): 2}


def test_add_keeps_insertion_order(client, user):
    a, b, c = uuid.uuid4(), uuid.uuid4(), uuid.uuid4()
    for pid in (a, b, c, a):
        body = add(client, user.id, pid).json()
    assert [it["productId"] for it in body["Items"]] == [str(a), str(b), str(c)]
    assert quantities(body)[str(a)] == 2


def test_increase_existing_and_new_item(client, user):
    a, b = uuid.uuid4(), uuid.uuid4()
    add(client, user.id, a)
    res = client.post(
        f"{API}/cart/increase", json={"UserId": str(user.id), "productId": str(a)}
    )
    assert quantities(res.json()) == {str(a): 2}

    res = client.post(
        f"{API}/cart/increase",
        json={"UserId": str(user.id), "productId": str(b), "quantity": 3},
    )
    assert quantities(res.json()) == {str(a): 2, str(b): 3}


def test_increase_without_cart_is_404(client, user):
    res = client.post(
        f"{API}/cart/increase",
        json={"UserId": str(user.id), "productId": str(uuid.uuid4())},
    )
    assert res.status_code == 404


def test_add_missing_fields_is_400(client):
    res = client.post(f"{API}/cart/addtocart", json={"productId": str(uuid.uuid4())})
    assert res.status_code == 400


# -------- decrease --------


def test_decrement_has_no_floor(client, user):
    pid = uuid.uuid4()
    add(client, user.id, pid)
    decrease(client, user.id, pid)
    body = decrease(client, user.id, pid).json()
    assert quantities(body) == {str(pid): -1}


def test_decrement_soft_failures(client, user):
    res = decrease(client, user.id, uuid.uuid4())
    assert res.status_code == 200
    assert res.json() == {"message": "Cart not found!"}

    add(client, user.id, uuid.uuid4())
    res = decrease(client, user.id, uuid.uuid4())
    assert res.status_code == 200
    assert res.json() == {"message": "Item not found in cart!"}


# -------- remove / clear --------


def test_remove_item(client, user):
    a, b = uuid.uuid4(), uuid.uuid4()
    add(client, user.id, a)
    add(client, user.id, b)
    body = remove(client, user.id, a).json()
    assert quantities(body) == {str(b): 1}


def test_remove_absent_item_returns_unchanged_cart(client, user):
    pid = uuid.uuid4()
    before = add(client, user.id, pid).json()
    res = remove(client, user.id, uuid.uuid4())
    assert res.status_code == 200
    assert res.json() == before


def test_remove_without_cart(client, user):
    res = remove(client, user.id, uuid.uuid4())
    assert res.json() == {"message": "Cart not found!"}


def test_clear_cart(client, user):
    add(client, user.id, uuid.uuid4())
    res = client.put(f"{API}/cart/clear-cart", json={"UserId": str(user.id)})
    assert res.status_code == 200
    assert res.json()["message"] == "Cart cleared after order placed"
    assert client.get(f"{API}/cart/{user.id}").json() == {"items": []}


def test_clear_missing_cart_is_404(client, user):
    res = client.put(f"{API}/cart/clear-cart", json={"UserId": str(user.id)})
    assert res.status_code == 404
    assert res.json()["message"] == "Cart not found!"


def test_add_after_clear_reuses_cart(client, user):
    pid = uuid.uuid4()
    add(client, user.id, pid)
    client.put(f"{API}/cart/clear-cart", json={"UserId": str(user.id)})
    body = add(client, user.id, pid).json()
    assert quantities(body) == {str(pid): 1}


# -------- hydration --------


def test_hydrate_without_cart_is_empty(client, user):
    assert client.get(f"{API}/cart/{user.id}").json() == {"items": []}
    assert client.get(f"{API}/cart/{user.id}/quantity").json() == {"items": []}


def test_hydrate_joins_product_details(client, user, make_product):
    phone = make_product(
        product_name="Phone",
        product_desc="6.1 inch",
        image_url="https://cdn/phone.png",
        product_price="499.99",
    )
    add(client, user.id, phone.id)
    add(client, user.id, phone.id)

    items = client.get(f"{API}/cart/{user.id}").json()["items"]
    assert items == [
        {
            "productId": str(phone.id),
            "quantity": 2,
            "productName": "Phone",
            "productDesc": "6.1 inch",
            "imageURL": "https://cdn/phone.png",
            "productPrice": 499.99,
        }
    ]


def test_hydrate_drops_deleted_products(client, user, make_product, session):
    keep = make_product(product_name="Case", product_price="20")
    gone = make_product(product_name="Charger", product_price="30")
    add(client, user.id, gone.id)
    add(client, user.id, keep.id)

    session.delete(gone)
    session.commit()

    items = client.get(f"{API}/cart/{user.id}").json()["items"]
    assert [it["productId"] for it in items] == [str(keep.id)]
    assert items[0]["productPrice"] == 20.0

    res = client.get(f"{API}/cart/{user.id}/quantity")
    assert res.json() == {"items": [{"productId": str(keep.id), "quantity": 1}]}


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("499", 499.0),
        ("12.50", 12.5),
        ("99 INR", 99.0),
        (" 7.5x", 7.5),
        (".5", 0.5),
        ("Rs. 100", None),
        ("", None),
        (None, None),
    ],
)
def test_parse_price(raw, expected):
    assert parse_price(raw) == expected


# -------- store-level reconciliation --------


def test_append_duplicate_is_rejected_and_increment_is_atomic(session, user):
    from storefront.repositories.cart_repo import CartRepository

    repo = CartRepository()
    cart = repo.get_or_create(session, user.id)
    pid = uuid.uuid4()

    assert repo.adjust_quantity(session, cart.id, pid, 1) is False
    assert repo.append_item(session, cart.id, pid, 1) is True
    # a second append for the same product loses to the unique constraint
    assert repo.append_item(session, cart.id, pid, 1) is False
    assert repo.adjust_quantity(session, cart.id, pid, 1) is True

    items = repo.list_items(session, cart.id)
    assert [(it.product_id, it.quantity) for it in items] == [(pid, 2)]


def test_get_or_create_returns_existing_cart(session, user):
    from storefront.repositories.cart_repo import CartRepository

    repo = CartRepository()
    assert repo.get_or_create(session, user.id).id == repo.get_or_create(session, user.id).id


def test_get_or_create_reraises_when_cart_cannot_be_loaded(session, user, monkeypatch):
    from sqlalchemy.exc import IntegrityError

    from storefront.repositories.cart_repo import CartRepository

    repo = CartRepository()
    repo.get_or_create(session, user.id)
    # a lookup that misses the existing row makes the insert collide
    monkeypatch.setattr(repo, "get_for_user", lambda *args: None)
    with pytest.raises(IntegrityError):
        repo.get_or_create(session, user.id)


# -------- ids without an account row --------


def test_cart_for_unknown_user_id_with_foreign_keys_enforced(client, enforce_foreign_keys):
    stranger, pid = uuid.uuid4(), uuid.uuid4()
    res = add(client, stranger, pid)
    assert res.status_code == 200
    assert res.json()["UserId"] == str(stranger)
    assert quantities(add(client, stranger, pid).json()) == {str(pid): 2}
