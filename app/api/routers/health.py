# app/api/routers/health.py
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.api.deps import get_db
from app.domain.schemas import HealthOut
from app.utils.settings import SERVICE_NAME
from app.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthOut)
def health(db: Session = Depends(get_db)):
    body = {
        "service": SERVICE_NAME,
        "status": "ok",
        "database": "ok",
        "timestamp": datetime.now(timezone.utc),
    }
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Health check: database unreachable: {e}")
        body.update(status="degraded", database="unreachable")
        return JSONResponse(status_code=503, content=HealthOut(**body).model_dump(mode="json"))
    return body
