from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from app.api.deps import get_db
from app.domain.errors import NotFoundError
from app.services.store_service import StoreService
from app.domain.schemas import StoreCreate, StoreOut, PremiumFeaturesUpdate

router = APIRouter(prefix="/stores", tags=["stores"])

@router.post("/", response_model=StoreOut)
def create_store(payload: StoreCreate, db: Session = Depends(get_db)):
    service = StoreService(db)
    return service.create_store(payload)

@router.put("/premium-features", response_model=StoreOut)
def update_premium_features(payload: PremiumFeaturesUpdate, db: Session = Depends(get_db)):
    service = StoreService(db)
    try:
        return service.update_premium_features(payload)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

@router.get("/{store_id}", response_model=StoreOut)
def get_store(store_id: int, db: Session = Depends(get_db)):
    service = StoreService(db)
    try:
        return service.get_store(store_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
