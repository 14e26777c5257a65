from sqlalchemy import select
from sqlalchemy.orm import Session
from app.data.models.store import StoreModel

class StoreRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_store(self, store_id: int) -> StoreModel | None:
        return self.db.get(StoreModel, store_id)

    def get_store_by_domain(self, shopify_domain: str) -> StoreModel | None:
        return self.db.execute(
            select(StoreModel).where(StoreModel.shopify_domain == shopify_domain)
        ).scalar_one_or_none()

    def create_store(self, store: StoreModel) -> StoreModel:
        self.db.add(store)
        self.db.flush()
        self.db.refresh(store)
        return store

    def update_store(self, store: StoreModel, new_data: dict) -> StoreModel:
        for field, value in new_data.items():
            setattr(store, field, value)
        self.db.flush()
        return store
