#app/data/models/cart_session.py
from datetime import datetime, timezone

from sqlalchemy import Column, Integer, ForeignKey, String, Boolean, Numeric, DateTime, JSON, Index
from sqlalchemy.orm import relationship

from app.data.database import Base


class CartSessionModel(Base):
    __tablename__ = "cart_sessions"

    id = Column(Integer, primary_key=True)
    store_id = Column(Integer, ForeignKey("stores.id"), nullable=False)
    customer_id = Column(String, nullable=False)
    session_id = Column(String, nullable=False)

    cart_data = Column(JSON, nullable=False)  # items, total_items, subtotal
    budget_breakdown = Column(JSON, nullable=False)
    remaining_budget = Column(JSON, nullable=False)
    total_cart_value = Column(Numeric(10, 2), nullable=False)
    applied_discounts = Column(JSON, nullable=False, default=list)
    recommended_products = Column(JSON, nullable=False, default=list)

    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    discounts = relationship("AutoDiscountModel", back_populates="cart_session")

    #max jedna aktywna sesja na (store, customer, session), nieaktywnych moze byc wiele
    __table_args__ = (
        Index(
            "uq_cart_sessions_active_key",
            "store_id",
            "customer_id",
            "session_id",
            unique=True,
            postgresql_where=(is_active.is_(True)),
            sqlite_where=(is_active.is_(True)),
        ),
    )
