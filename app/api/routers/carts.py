#app/api/routers/carts.py
from fastapi import APIRouter, Depends, HTTPException, Request

from app.api.deps import get_tracking_service, get_rate_limiter
from app.domain.errors import FeatureDisabledError, InvalidInputError, SessionConflictError
from app.domain.schemas import (
    CartTrackIn,
    CartTrackOut,
    CartSessionOut,
    CartOverviewOut,
)
from app.services.cart_tracking_service import CartTrackingService
from app.services.rate_limit_service import RateLimitService

router = APIRouter(prefix="/cart", tags=["cart"])


@router.post("/track", response_model=CartTrackOut)
def track_cart(
    payload: CartTrackIn,
    request: Request,
    svc: CartTrackingService = Depends(get_tracking_service),
    limiter: RateLimitService = Depends(get_rate_limiter),
):
    client_ip = request.client.host if request.client else "unknown"
    allowed, retry_after = limiter.hit(client_ip, payload.customer_id)
    if not allowed:
        raise HTTPException(
            status_code=429,
            detail="Too many requests",
            headers={"Retry-After": str(retry_after)},
        )

    try:
        return svc.track_cart(
            store_id=payload.store_id,
            customer_id=payload.customer_id,
            session_id=payload.session_id,
            items=payload.cart_items,
            budget=payload.budget,
        )
    except FeatureDisabledError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except SessionConflictError as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.put("/session", response_model=CartSessionOut)
def update_cart_session(
    payload: CartTrackIn,
    svc: CartTrackingService = Depends(get_tracking_service),
):
    try:
        return svc.update_cart_session(
            store_id=payload.store_id,
            customer_id=payload.customer_id,
            session_id=payload.session_id,
            items=payload.cart_items,
            budget=payload.budget,
        )
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except SessionConflictError as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.get("/{store_id}/{customer_id}/{session_id}", response_model=CartOverviewOut)
def get_cart(
    store_id: int,
    customer_id: str,
    session_id: str,
    svc: CartTrackingService = Depends(get_tracking_service),
):
    overview = svc.get_cart_overview(store_id, customer_id, session_id)
    if not overview:
        raise HTTPException(status_code=404, detail="Cart session not found")
    return overview
