# tests/conftest.py
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.data.database import Base
from app.data.models import StoreModel
from app.domain.budget import BudgetConfig, CartItem
from app.main import create_app
from app.services.cart_tracking_service import CartTrackingService


class FakeRateLimiter:
    def __init__(self, allowed: bool = True, retry_after: int = 0):
        self.allowed = allowed
        self.retry_after = retry_after
        self.hits = []

    def hit(self, client_ip: str, customer_id: str):
        self.hits.append((client_ip, customer_id))
        return self.allowed, self.retry_after


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def tracking_service(session_factory):
    return CartTrackingService(session_factory)


@pytest.fixture
def make_store(session_factory):
    def _make_store(**overrides):
        data = {
            "shopify_domain": f"shop-{len(created) + 1}.myshopify.com",
            "is_active": True,
            "premium_cart_tracking": True,
            "auto_discount_enabled": True,
            "product_recommendations_enabled": True,
            "budget_remaining_display_enabled": True,
            "minimum_discount_threshold": Decimal("50.00"),
        }
        data.update(overrides)
        session = session_factory()
        try:
            store = StoreModel(**data)
            session.add(store)
            session.commit()
            created.append(store.id)
            return store
        finally:
            session.close()

    created = []
    return _make_store


@pytest.fixture
def rate_limiter():
    return FakeRateLimiter()


@pytest.fixture
def client(session_factory, rate_limiter):
    api_app = create_app(session_factory=session_factory, rate_limiter=rate_limiter)
    return TestClient(api_app)


@pytest.fixture
def budget():
    return BudgetConfig(
        needs_amount=Decimal("100.00"),
        wants_amount=Decimal("50.00"),
        savings_amount=Decimal("80.00"),
    )


def item(product_id="p1", price="10.00", quantity=1, category="needs", **extra) -> CartItem:
    return CartItem(
        product_id=product_id,
        title=f"Product {product_id}",
        price=Decimal(price),
        quantity=quantity,
        budget_category=category,
        **extra,
    )
