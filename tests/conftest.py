import os
import tempfile

# Settings are read at import time, so the environment has to be in place first.
_DB_DIR = tempfile.mkdtemp(prefix="storefront-tests-")
os.environ["JWT_SECRET_KEY"] = "test-secret"
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_DB_DIR}/storefront.db"
os.environ["TRACING_ENABLED"] = "false"
os.environ["METRICS_ENABLED"] = "false"
os.environ["CHECKOUT_RATE_LIMIT"] = "1000/minute"

import httpx
import pytest

from main import app
from shared.config.database import AsyncSessionLocal, Base, engine
from shared.security import create_access_token
from services.auth_service.models import ADMIN, CUSTOMER, User
from services.auth_service.service import AuthService
from services.category_service.models import Category
from services.payment_service.gateway import GatewayResult, get_payment_gateway
from services.product_service.main import product_app
from services.product_service.models import Product


class FakeGateway:
    """Stands in for BraintreePaymentGateway; records every sale it is asked for."""

    def __init__(self):
        self.sales = []
        self.client_token = "client-token-123"
        self.token_error = None
        self.result = GatewayResult(
            success=True,
            transaction_id="txn-1",
            payload={"success": True, "transaction": {"id": "txn-1", "status": "submitted_for_settlement"}},
        )

    async def generate_client_token(self):
        if self.token_error is not None:
            raise self.token_error
        return self.client_token

    async def submit_sale(self, amount, nonce):
        self.sales.append((amount, nonce))
        return self.result


@pytest.fixture
async def database():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture
async def db(database):
    async with AsyncSessionLocal() as session:
        yield session


@pytest.fixture
async def client(database):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
def gateway():
    fake = FakeGateway()
    product_app.dependency_overrides[get_payment_gateway] = lambda: fake
    yield fake
    product_app.dependency_overrides.pop(get_payment_gateway, None)


async def _make_user(db, email, role):
    user = User(
        name="John Doe",
        email=email,
        hashed_password=AuthService._hash_password("password"),
        phone="1234567890",
        address="123 Main St",
        answer="blue",
        role=role,
    )
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


@pytest.fixture
async def customer(db):
    return await _make_user(db, "john@example.com", CUSTOMER)


@pytest.fixture
async def admin(db):
    return await _make_user(db, "admin@example.com", ADMIN)


@pytest.fixture
def customer_headers(customer):
    return {"Authorization": f"Bearer {create_access_token(customer.id)}"}


@pytest.fixture
def admin_headers(admin):
    return {"Authorization": f"Bearer {create_access_token(admin.id)}"}


@pytest.fixture
async def products(db):
    category = Category(name="Electronics", slug="electronics")
    db.add(category)
    await db.commit()
    await db.refresh(category)
    items = [
        Product(name="Laptop", slug="laptop", description="A fast laptop", price=10.0,
                category_id=category.id, quantity=5, shipping=True),
        Product(name="Phone", slug="phone", description="A smart phone", price=20.0,
                category_id=category.id, quantity=5, shipping=True),
    ]
    db.add_all(items)
    await db.commit()
    for item in items:
        await db.refresh(item)
    return items
