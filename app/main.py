# app/main.py
from contextlib import asynccontextmanager

from fastapi import FastAPI
from sqlalchemy.orm import sessionmaker
import uvicorn

from app.data.database import Base, SessionLocal
from app.api.routers import carts, recommendations, discounts, stores, health
from app.services.cart_tracking_service import CartTrackingService
from app.services.rate_limit_service import RateLimitService
from app.utils.logging import get_logger, RequestLoggingMiddleware
from app.utils.settings import SEED_DEMO_STORE, SERVICE_NAME

# IMPORT WSZYSTKICH MODELI NA POCZATKU (PRZED JAKIMKOLWIEK CREATE_ALL)
from app.data.models import StoreModel, CartSessionModel, ProductRecommendationModel, AutoDiscountModel  # noqa: F401

logger = get_logger(__name__)


def init_db(session_factory: sessionmaker) -> None:
    bind = session_factory.kw["bind"]
    logger.info(f"Initializing database, tables: {list(Base.metadata.tables.keys())}")
    try:
        Base.metadata.create_all(bind=bind)
    except Exception as e:
        logger.error(f"Failed to create tables: {e}")
        raise
    logger.info("Database tables created")

    if SEED_DEMO_STORE:
        from app.data.seed import seed
        seed(session_factory)


def create_app(
    session_factory: sessionmaker | None = None,
    rate_limiter: RateLimitService | None = None,
) -> FastAPI:
    session_factory = session_factory or SessionLocal

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        init_db(session_factory)
        yield

    app = FastAPI(
        title="Budget Cart Tracking Service",
        version="1.0.0",
        lifespan=lifespan,
    )

    # jedna instancja serwisu na proces, przekazywana przez Depends
    app.state.session_factory = session_factory
    app.state.tracking_service = CartTrackingService(session_factory)
    app.state.rate_limiter = rate_limiter or RateLimitService()

    app.add_middleware(RequestLoggingMiddleware, service_name=SERVICE_NAME)

    # Include routers
    app.include_router(health.router)
    app.include_router(stores.router)
    app.include_router(carts.router)
    app.include_router(recommendations.router)
    app.include_router(discounts.router)

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
