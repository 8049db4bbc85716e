from sqlmodel import select

from storefront.models import CartItem, Order, Product


def add(client, headers, product_id, quantity):
    return client.post("/api/v1/cart/add", json={"product_id": product_id, "quantity": quantity}, headers=headers)


def test_add_to_cart_snapshots_price_and_merges_lines(client, customer_headers, make_product, session):
    product = make_product(price=10.0, stock=5)

    resp = add(client, customer_headers, product.id, 2)
    assert resp.status_code == 201
    first = resp.json()["data"]
    assert first["quantity"] == 2
    assert first["price_at_time"] == 10.0

    product.price = 12.0
    session.add(product)
    session.commit()

    resp = add(client, customer_headers, product.id, 1)
    assert resp.status_code == 201
    merged = resp.json()["data"]
    assert merged["id"] == first["id"]
    assert merged["quantity"] == 3
    assert merged["price_at_time"] == 10.0


def test_add_to_cart_checks_product_and_stock(client, customer_headers, make_product):
    assert add(client, customer_headers, 999, 1).status_code == 404

    sold_out = make_product("Sold out", stock=0)
    resp = add(client, customer_headers, sold_out.id, 1)
    assert resp.status_code == 404
    assert resp.json()["message"] == "No stock left"

    few = make_product("Few", stock=2)
    resp = add(client, customer_headers, few.id, 3)
    assert resp.status_code == 400
    assert resp.json()["message"] == "Only 2 items available in stock"

    assert add(client, customer_headers, few.id, 0).status_code == 400


def test_view_cart_joins_product(client, customer_headers, make_product):
    product = make_product(name="Lamp", price=7.5, stock=4)
    add(client, customer_headers, product.id, 2)

    resp = client.get("/api/v1/cart/view", headers=customer_headers)

    assert resp.status_code == 200
    [line] = resp.json()["data"]
    assert line["product"] == {"id": product.id, "name": "Lamp", "image_url": None, "price": 7.5}
    assert line["total"] == 15.0


def test_remove_from_cart_only_own_items(client, customer_headers, make_product):
    from tests.conftest import signup

    product = make_product(stock=4)
    item = add(client, customer_headers, product.id, 1).json()["data"]
    other_headers = signup(client, "other@example.com")

    assert client.delete(f"/api/v1/cart/delete/{item['id']}", headers=other_headers).status_code == 404

    resp = client.delete(f"/api/v1/cart/delete/{item['id']}", headers=customer_headers)
    assert resp.status_code == 204
    assert client.get("/api/v1/cart/view", headers=customer_headers).json()["data"] == []


def test_place_order_flow(client, customer_headers, make_product, session):
    a = make_product("A", price=10.00, stock=5)
    b = make_product("B", price=5.00, stock=3)
    add(client, customer_headers, a.id, 2)
    add(client, customer_headers, b.id, 1)

    resp = client.post("/api/v1/order/place", headers=customer_headers)

    assert resp.status_code == 201
    order = resp.json()["data"]
    assert order["total_price"] == 25.0
    assert order["status"] == "completed"
    assert sorted((i["product_id"], i["quantity"], i["price_at_time"]) for i in order["items"]) == sorted([
        (a.id, 2, 10.0),
        (b.id, 1, 5.0),
    ])
    assert client.get("/api/v1/cart/view", headers=customer_headers).json()["data"] == []

    session.expire_all()
    assert session.get(Product, a.id).stock == 3
    assert session.get(Product, b.id).stock == 2


def test_place_order_with_empty_cart(client, customer_headers, session):
    resp = client.post("/api/v1/order/place", headers=customer_headers)

    assert resp.status_code == 400
    assert resp.json() == {"status": "fail", "message": "Cart is empty"}
    assert session.exec(select(Order)).all() == []


def test_place_order_out_of_stock_keeps_cart(client, customer_headers, make_product, session):
    product = make_product(stock=5)
    add(client, customer_headers, product.id, 4)

    # Stock shrinks after the item was staged
    product.stock = 1
    session.add(product)
    session.commit()

    resp = client.post("/api/v1/order/place", headers=customer_headers)

    assert resp.status_code == 400
    assert resp.json()["status"] == "fail"
    session.expire_all()
    assert session.exec(select(Order)).all() == []
    assert len(session.exec(select(CartItem)).all()) == 1
    assert session.get(Product, product.id).stock == 1


def test_admin_cannot_place_orders(client, admin_headers):
    assert client.post("/api/v1/order/place", headers=admin_headers).status_code == 403


def test_order_history(client, customer_headers, make_product):
    product = make_product(name="Mug", stock=10)

    add(client, customer_headers, product.id, 1)
    first = client.post("/api/v1/order/place", headers=customer_headers).json()["data"]
    add(client, customer_headers, product.id, 3)
    second = client.post("/api/v1/order/place", headers=customer_headers).json()["data"]

    resp = client.get("/api/v1/order/history", headers=customer_headers)

    assert resp.status_code == 200
    history = resp.json()["data"]
    assert [o["id"] for o in history] == [second["id"], first["id"]]
    assert history[0]["items"][0]["quantity"] == 3
    assert history[0]["items"][0]["product"] == {"id": product.id, "name": "Mug", "image_url": None}
