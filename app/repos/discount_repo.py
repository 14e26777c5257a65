# app/repos/discount_repo.py
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.data.models.auto_discount import AutoDiscountModel


class DiscountRepo:
    def __init__(self, db: Session):
        self.db = db

    def create_discount(self, discount: AutoDiscountModel) -> AutoDiscountModel:
        self.db.add(discount)
        self.db.flush()
        return discount

    def code_exists(self, code: str) -> bool:
        return self.db.execute(
            select(AutoDiscountModel.id).where(AutoDiscountModel.discount_code == code).limit(1)
        ).first() is not None
