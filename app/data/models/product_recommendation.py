from datetime import datetime, timezone

from sqlalchemy import Column, Integer, ForeignKey, String, Boolean, Numeric, DateTime

from app.data.database import Base


class ProductRecommendationModel(Base):
    __tablename__ = "product_recommendations"

    id = Column(Integer, primary_key=True)
    store_id = Column(Integer, ForeignKey("stores.id"), nullable=False)
    customer_id = Column(String, nullable=False, index=True)

    product_id = Column(String, nullable=False)
    product_title = Column(String, nullable=False)
    product_price = Column(Numeric(10, 2), nullable=False)
    budget_category = Column(String, nullable=False)  # needs, wants, savings
    recommendation_reason = Column(String, nullable=True)
    remaining_budget_after = Column(Numeric(10, 2), nullable=True)

    priority = Column(Integer, nullable=False, default=0)
    is_clicked = Column(Boolean, nullable=False, default=False)
    is_purchased = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
