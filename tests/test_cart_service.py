import threading

import pytest
from sqlmodel import Session, select

from storefront.core.errors import ValidationError
from storefront.db.session import build_engine, create_db_and_tables
from storefront.models import CartItem, Category, Product, User
from storefront.services.cart import CartService
from storefront.stores import CartStore


def quantities(session, user_id):
    session.expire_all()
    return [item.quantity for item in session.exec(select(CartItem).where(CartItem.user_id == user_id)).all()]


def miss_first_lookup(monkeypatch):
    """Make the first CartStore.find report no line, as if another request had not committed yet."""
    real_find = CartStore.find
    calls = []

    def find(self, user_id, product_id):
        calls.append(product_id)
        if len(calls) == 1:
            return None
        return real_find(self, user_id, product_id)

    monkeypatch.setattr(CartStore, "find", find)


def test_insert_that_loses_to_existing_line_sums_into_it(session, make_user, make_product, add_to_cart, monkeypatch):
    user = make_user()
    product = make_product(price=4.0, stock=5)
    existing = add_to_cart(user, product, 1)
    miss_first_lookup(monkeypatch)

    item = CartService(session).add_to_cart(user.id, product.id, 2)

    assert item.id == existing.id
    assert item.quantity == 3
    assert quantities(session, user.id) == [3]


def test_summed_quantity_above_stock_is_refused_after_lost_insert(session, make_user, make_product, add_to_cart, monkeypatch):
    user = make_user()
    product = make_product(stock=3)
    add_to_cart(user, product, 2)
    miss_first_lookup(monkeypatch)

    with pytest.raises(ValidationError) as excinfo:
        CartService(session).add_to_cart(user.id, product.id, 2)

    assert excinfo.value.message == "Only 3 items available in stock"
    assert quantities(session, user.id) == [2]


def test_existing_line_quantity_is_summed(session, make_user, make_product, add_to_cart):
    user = make_user()
    product = make_product(stock=5)
    add_to_cart(user, product, 2)

    item = CartService(session).add_to_cart(user.id, product.id, 2)

    assert item.quantity == 4
    with pytest.raises(ValidationError):
        CartService(session).add_to_cart(user.id, product.id, 2)
    assert quantities(session, user.id) == [4]


def test_simultaneous_adds_of_same_product_both_count(tmp_path, monkeypatch):
    engine = build_engine(f"sqlite:///{tmp_path / 'cart.db'}")
    create_db_and_tables(engine)

    with Session(engine) as session:
        category = Category(name="Stationery")
        session.add(category)
        session.commit()
        product = Product(name="Pen", price=1.5, stock=10, category_id=category.id)
        user = User(name="Writer", email="writer@example.com", password_hash="x")
        session.add_all([product, user])
        session.commit()
        product_id = product.id
        user_id = user.id

    # Both requests look the line up before either inserts it
    barrier = threading.Barrier(2)
    waited = threading.local()
    real_find = CartStore.find

    def find_then_wait(self, user_id, product_id):
        found = real_find(self, user_id, product_id)
        if not getattr(waited, "done", False):
            waited.done = True
            barrier.wait(timeout=10)
        return found

    monkeypatch.setattr(CartStore, "find", find_then_wait)

    outcomes = []

    def add():
        with Session(engine) as session:
            try:
                CartService(session).add_to_cart(user_id, product_id, 1)
                outcomes.append("ok")
            except Exception as e:
                outcomes.append(type(e).__name__)

    threads = [threading.Thread(target=add) for _ in range(2)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=30)

    assert outcomes == ["ok", "ok"]
    with Session(engine) as session:
        assert quantities(session, user_id) == [2]

    engine.dispose()
