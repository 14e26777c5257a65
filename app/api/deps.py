# app/api/deps.py
from fastapi import Request

from app.services.cart_tracking_service import CartTrackingService
from app.services.rate_limit_service import RateLimitService


def get_db(request: Request):
    #sesja na request, commit na koniec, rollback przy bledzie
    db = request.app.state.session_factory()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def get_tracking_service(request: Request) -> CartTrackingService:
    return request.app.state.tracking_service


def get_rate_limiter(request: Request) -> RateLimitService:
    return request.app.state.rate_limiter
