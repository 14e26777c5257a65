# app/services/session_service.py
from decimal import Decimal
from typing import Any, Dict, Iterable

from sqlalchemy.orm import Session

from app.data.models.cart_session import CartSessionModel
from app.domain.budget import (
    BudgetBreakdown,
    BudgetConfig,
    CartItem,
    RemainingBudget,
    allocate_budget,
)
from app.repos.cart_session_repo import CartSessionRepo
from app.utils.logging import get_logger

logger = get_logger(__name__)


def session_to_dict(cart_session: CartSessionModel) -> Dict[str, Any]:
    #JSON w bazie trzyma Decimal jako stringi, tu wracamy do typow domenowych
    cart_data = cart_session.cart_data or {}
    return {
        "id": cart_session.id,
        "store_id": cart_session.store_id,
        "customer_id": cart_session.customer_id,
        "session_id": cart_session.session_id,
        "cart_data": {
            "items": [CartItem.model_validate(i) for i in cart_data.get("items", [])],
            "total_items": cart_data.get("total_items", 0),
            "subtotal": Decimal(str(cart_data.get("subtotal", "0.00"))),
        },
        "budget_breakdown": BudgetBreakdown.model_validate(cart_session.budget_breakdown),
        "remaining_budget": RemainingBudget.model_validate(cart_session.remaining_budget),
        "total_cart_value": cart_session.total_cart_value,
        "applied_discounts": list(cart_session.applied_discounts or []),
        "recommended_products": list(cart_session.recommended_products or []),
        "is_active": cart_session.is_active,
        "created_at": cart_session.created_at,
        "updated_at": cart_session.updated_at,
    }


class SessionService:
    """
    Adapter sesji koszyka: lookup aktywnej sesji po (store, customer, session)
    i nadpisanie jej snapshotem, albo insert nowej.
    Commit/rollback robi wywolujacy (CartTrackingService).
    """

    def __init__(self, db: Session):
        self.repo = CartSessionRepo(db)

    #query
    def get_active_session(
        self,
        store_id: int,
        customer_id: str,
        session_id: str,
    ) -> CartSessionModel | None:
        return self.repo.get_active_session(store_id, customer_id, session_id)

    #command
    def upsert_session(
        self,
        store_id: int,
        customer_id: str,
        session_id: str,
        items: Iterable[CartItem],
        budget: BudgetConfig,
    ) -> CartSessionModel:
        items = list(items)
        allocation = allocate_budget(items, budget)

        snapshot = {
            "cart_data": {
                "items": [i.model_dump(mode="json") for i in items],
                "total_items": allocation.total_items,
                "subtotal": str(allocation.total_cart_value),
            },
            "budget_breakdown": allocation.breakdown.model_dump(mode="json"),
            "remaining_budget": allocation.remaining.model_dump(mode="json"),
            "total_cart_value": allocation.total_cart_value,
        }

        existing = self.repo.get_active_session(store_id, customer_id, session_id)

        if existing:
            logger.info(
                f"Nadpisuje aktywna sesje {existing.id} "
                f"(store {store_id}, customer {customer_id}, session {session_id})"
            )
            return self.repo.update_session(existing, snapshot)

        created = self.repo.create_session(
            CartSessionModel(
                store_id=store_id,
                customer_id=customer_id,
                session_id=session_id,
                applied_discounts=[],
                recommended_products=[],
                is_active=True,
                **snapshot,
            )
        )

        logger.info(
            f"Utworzono sesje koszyka {created.id} dla store {store_id}, "
            f"customer {customer_id}, session {session_id}"
        )
        return created
