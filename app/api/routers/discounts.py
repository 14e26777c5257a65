# app/api/routers/discounts.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from app.api.deps import get_tracking_service
from app.domain.errors import InvalidInputError
from app.domain.schemas import ApplyDiscountsIn, DiscountOut
from app.services.cart_tracking_service import CartTrackingService

router = APIRouter(prefix="/discounts", tags=["discounts"])


@router.post("/apply", response_model=List[DiscountOut])
def apply_discounts(
    payload: ApplyDiscountsIn,
    svc: CartTrackingService = Depends(get_tracking_service),
):
    """
    Nalicza rabaty dla koszyka (procentowy wg progow + darmowa wysylka).
    Zwraca tylko rabaty przyznane w tym wywolaniu.
    """
    try:
        return svc.apply_discounts(
            store_id=payload.store_id,
            customer_id=payload.customer_id,
            cart_session_id=payload.cart_session_id,
            total_cart_value=payload.total_cart_value,
            minimum_threshold=payload.minimum_threshold,
        )
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=str(e))
