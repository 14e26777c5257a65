from decimal import Decimal
from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, Boolean, Numeric, DateTime

from app.data.database import Base


class StoreModel(Base):
    __tablename__ = "stores"

    id = Column(Integer, primary_key=True)
    shopify_domain = Column(String, nullable=False, unique=True)
    is_active = Column(Boolean, nullable=False, default=True)

    #funkcje premium konfigurowane przez merchanta
    premium_cart_tracking = Column(Boolean, nullable=False, default=False)
    auto_discount_enabled = Column(Boolean, nullable=False, default=False)
    product_recommendations_enabled = Column(Boolean, nullable=False, default=False)
    budget_remaining_display_enabled = Column(Boolean, nullable=False, default=False)
    minimum_discount_threshold = Column(Numeric(10, 2), nullable=False, default=Decimal("50.00"))

    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
