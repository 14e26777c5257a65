from sqlalchemy.orm import Session
from app.data.models.store import StoreModel
from app.domain.errors import NotFoundError
from app.repos.store_repo import StoreRepo
from app.domain.schemas import StoreCreate, StoreOut, PremiumFeaturesUpdate
from app.utils.logging import get_logger

logger = get_logger(__name__)


class StoreService:
    def __init__(self, db: Session):
        self.repo = StoreRepo(db)

    def create_store(self, payload: StoreCreate) -> StoreOut:
        existing = self.repo.get_store_by_domain(payload.shopify_domain)
        if existing:
            return StoreOut.model_validate(existing)

        created = self.repo.create_store(StoreModel(is_active=True, **payload.model_dump()))
        logger.info(f"Zarejestrowano sklep {created.id} ({created.shopify_domain})")
        return StoreOut.model_validate(created)

    def get_store(self, store_id: int) -> StoreOut:
        return StoreOut.model_validate(self.get_store_model(store_id))

    def get_store_model(self, store_id: int) -> StoreModel:
        store = self.repo.get_store(store_id)
        if not store:
            raise NotFoundError(f"Store {store_id} not found")
        return store

    def update_premium_features(self, payload: PremiumFeaturesUpdate) -> StoreOut:
        store = self.get_store_model(payload.store_id)

        #None = bez zmian
        new_data = payload.model_dump(exclude={"store_id"}, exclude_none=True)
        updated = self.repo.update_store(store, new_data)

        logger.info(f"Zaktualizowano funkcje premium sklepu {store.id}: {sorted(new_data)}")
        return StoreOut.model_validate(updated)
