# app/data/seed.py
from decimal import Decimal

from sqlalchemy.orm import sessionmaker

from app.data.database import SessionLocal
from app.data.models.store import StoreModel

DEMO_STORE_DOMAIN = "demo-store.myshopify.com"


def seed(session_factory: sessionmaker = SessionLocal):
    db = session_factory()
    try:
        # not forcing: only seed if empty
        if db.query(StoreModel).first():
            return
        store = StoreModel(
            shopify_domain=DEMO_STORE_DOMAIN,
            is_active=True,
            premium_cart_tracking=True,
            auto_discount_enabled=True,
            product_recommendations_enabled=True,
            budget_remaining_display_enabled=True,
            minimum_discount_threshold=Decimal("50.00"),
        )
        db.add(store)
        db.commit()
    finally:
        db.close()
