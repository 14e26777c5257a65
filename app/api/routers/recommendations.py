# app/api/routers/recommendations.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from app.api.deps import get_tracking_service
from app.domain.budget import RemainingBudget
from app.domain.errors import InvalidInputError, NotFoundError
from app.domain.schemas import AckOut, GenerateRecommendationsIn, RecommendationOut
from app.services.cart_tracking_service import CartTrackingService

router = APIRouter(prefix="/recommendations", tags=["recommendations"])


@router.post("/generate", response_model=List[RecommendationOut])
def generate_recommendations(
    payload: GenerateRecommendationsIn,
    svc: CartTrackingService = Depends(get_tracking_service),
):
    try:
        return svc.generate_recommendations(
            store_id=payload.store_id,
            customer_id=payload.customer_id,
            remaining_budget=RemainingBudget(**payload.remaining_budget.model_dump()),
            exclude_product_ids=payload.exclude_product_ids,
        )
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/{store_id}/{customer_id}", response_model=List[RecommendationOut])
def list_recommendations(
    store_id: int,
    customer_id: str,
    svc: CartTrackingService = Depends(get_tracking_service),
):
    return svc.list_recommendations(store_id, customer_id)


@router.post("/{recommendation_id}/click", response_model=AckOut)
def track_click(
    recommendation_id: int,
    svc: CartTrackingService = Depends(get_tracking_service),
):
    try:
        svc.track_click(recommendation_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return AckOut()


@router.post("/{recommendation_id}/purchase", response_model=AckOut)
def track_purchase(
    recommendation_id: int,
    svc: CartTrackingService = Depends(get_tracking_service),
):
    try:
        svc.track_purchase(recommendation_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return AckOut()
