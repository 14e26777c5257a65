# app/repos/recommendation_repo.py
from typing import List

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.data.models.product_recommendation import ProductRecommendationModel


class RecommendationRepo:
    def __init__(self, db: Session):
        self.db = db

    def create_recommendation(self, rec: ProductRecommendationModel) -> ProductRecommendationModel:
        self.db.add(rec)
        self.db.flush()
        return rec

    def get_recommendation(self, recommendation_id: int) -> ProductRecommendationModel | None:
        return self.db.get(ProductRecommendationModel, recommendation_id)

    def list_for_customer(
        self,
        store_id: int,
        customer_id: str,
        limit: int,
    ) -> List[ProductRecommendationModel]:
        return list(
            self.db.execute(
                select(ProductRecommendationModel)
                .where(
                    ProductRecommendationModel.store_id == store_id,
                    ProductRecommendationModel.customer_id == customer_id,
                )
                .order_by(
                    ProductRecommendationModel.priority.desc(),
                    ProductRecommendationModel.created_at.desc(),
                    ProductRecommendationModel.id.desc(),
                )
                .limit(limit)
            ).scalars().all()
        )
