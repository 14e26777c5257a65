# app/repos/cart_session_repo.py
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.data.models.cart_session import CartSessionModel
from app.domain.errors import SessionConflictError
from app.utils.logging import get_logger

logger = get_logger(__name__)


class CartSessionRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_active_session(
        self,
        store_id: int,
        customer_id: str,
        session_id: str,
    ) -> CartSessionModel | None:
        return self.db.execute(
            select(CartSessionModel)
            .where(
                CartSessionModel.store_id == store_id,
                CartSessionModel.customer_id == customer_id,
                CartSessionModel.session_id == session_id,
                CartSessionModel.is_active.is_(True),
            )
            .limit(1)
        ).scalar_one_or_none()

    def create_session(self, cart_session: CartSessionModel) -> CartSessionModel:
        self.db.add(cart_session)
        try:
            #flush wymusza INSERT teraz, zeby konflikt na unikalnym indeksie wyszedl tutaj
            self.db.flush()
        except IntegrityError as e:
            logger.warning(
                f"Active session already exists for store {cart_session.store_id}, "
                f"customer {cart_session.customer_id}, session {cart_session.session_id}"
            )
            raise SessionConflictError(
                "Concurrent cart session insert for the same key"
            ) from e
        self.db.refresh(cart_session)
        return cart_session

    def update_session(self, cart_session: CartSessionModel, new_data: dict) -> CartSessionModel:
        for field, value in new_data.items():
            setattr(cart_session, field, value)
        cart_session.updated_at = datetime.now(timezone.utc)
        self.db.flush()
        return cart_session
