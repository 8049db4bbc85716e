import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel

from storefront.db.session import build_engine, create_db_and_tables, get_session
from storefront.main import app
from storefront.models import CartItem, Category, Product, User, UserRole


@pytest.fixture
def engine():
    engine = build_engine("sqlite://")
    create_db_and_tables(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def client(engine):
    def override_get_session():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def category(session):
    category = Category(name="Electronics", description="Gadgets")
    session.add(category)
    session.commit()
    session.refresh(category)
    return category


@pytest.fixture
def make_product(session, category):
    def _make(name="Widget", price=10.0, stock=10):
        product = Product(name=name, price=price, stock=stock, category_id=category.id)
        session.add(product)
        session.commit()
        session.refresh(product)
        return product
    return _make


@pytest.fixture
def make_user(session):
    def _make(email="shopper@example.com", role=UserRole.CUSTOMER):
        user = User(name="Shopper", email=email, password_hash="not-a-real-hash", role=role)
        session.add(user)
        session.commit()
        session.refresh(user)
        return user
    return _make


@pytest.fixture
def add_to_cart(session):
    """Stage a cart line directly, bypassing the stock checks of the cart service."""
    def _add(user, product, quantity, price_at_time=None):
        item = CartItem(
            user_id=user.id,
            product_id=product.id,
            quantity=quantity,
            price_at_time=product.price if price_at_time is None else price_at_time,
        )
        session.add(item)
        session.commit()
        session.refresh(item)
        return item
    return _add


def signup(client, email, role="customer", password="password123"):
    resp = client.post("/api/v1/auth/signup", json={
        "name": "Test User",
        "email": email,
        "password": password,
        "role": role,
    })
    assert resp.status_code == 201, resp.text
    return {"Authorization": f"Bearer {resp.json()['token']}"}


@pytest.fixture
def admin_headers(client):
    return signup(client, "admin@example.com", role="admin")


@pytest.fixture
def customer_headers(client):
    return signup(client, "customer@example.com")
