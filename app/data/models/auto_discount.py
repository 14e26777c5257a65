from datetime import datetime, timezone

from sqlalchemy import Column, Integer, ForeignKey, String, Boolean, Numeric, DateTime
from sqlalchemy.orm import relationship

from app.data.database import Base


class AutoDiscountModel(Base):
    __tablename__ = "auto_discounts"

    id = Column(Integer, primary_key=True)
    store_id = Column(Integer, ForeignKey("stores.id"), nullable=False)
    customer_id = Column(String, nullable=False)
    cart_session_id = Column(Integer, ForeignKey("cart_sessions.id"), nullable=True)

    discount_code = Column(String, nullable=False, unique=True)
    discount_type = Column(String, nullable=False)  # percentage, free_shipping
    discount_value = Column(Numeric(10, 2), nullable=False)
    minimum_amount = Column(Numeric(10, 2), nullable=True)
    applied_amount = Column(Numeric(10, 2), nullable=True)
    is_applied = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
    expires_at = Column(DateTime(timezone=True), nullable=True)

    cart_session = relationship("CartSessionModel", back_populates="discounts")
