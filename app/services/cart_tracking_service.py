# app/services/cart_tracking_service.py
from contextlib import contextmanager
from decimal import Decimal
from typing import Any, Dict, Iterable, Iterator, List

from sqlalchemy.orm import Session, sessionmaker

from app.domain.budget import BudgetConfig, CartItem, RemainingBudget
from app.domain.errors import FeatureDisabledError
from app.repos.cart_session_repo import CartSessionRepo
from app.repos.store_repo import StoreRepo
from app.services.discount_service import DiscountService
from app.services.recommendation_service import RecommendationService
from app.services.session_service import SessionService, session_to_dict
from app.utils.retry import conflict_retry
from app.utils.settings import DEFAULT_MINIMUM_DISCOUNT_THRESHOLD
from app.utils.logging import get_logger

logger = get_logger(__name__)


class CartTrackingService:
    """
    Fasada cart trackingu dla warstwy HTTP.

    Jedna instancja na proces (tworzona w create_app), kazda publiczna
    operacja to osobna transakcja: commit na sukces, rollback na dowolny blad.
    Komendy (update, generate, apply, track_*) modyfikuja stan,
    query (get_*, list_*) tylko odczyt.
    """

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    @contextmanager
    def _unit_of_work(self) -> Iterator[Session]:
        db = self.session_factory()
        try:
            yield db
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    #query
    def get_active_session(self, store_id: int, customer_id: str, session_id: str) -> Dict[str, Any] | None:
        with self._unit_of_work() as db:
            cart_session = SessionService(db).get_active_session(store_id, customer_id, session_id)
            return session_to_dict(cart_session) if cart_session else None

    def list_recommendations(self, store_id: int, customer_id: str) -> List[Dict[str, Any]]:
        with self._unit_of_work() as db:
            return RecommendationService(db).list_recommendations(store_id, customer_id)

    def get_cart_overview(self, store_id: int, customer_id: str, session_id: str) -> Dict[str, Any] | None:
        with self._unit_of_work() as db:
            cart_session = SessionService(db).get_active_session(store_id, customer_id, session_id)
            if not cart_session:
                return None

            return {
                "cart_session": session_to_dict(cart_session),
                "recommendations": RecommendationService(db).list_recommendations(store_id, customer_id),
            }

    #commands
    @conflict_retry()
    def update_cart_session(
        self,
        store_id: int,
        customer_id: str,
        session_id: str,
        items: Iterable[CartItem],
        budget: BudgetConfig,
    ) -> Dict[str, Any]:
        items = list(items)
        with self._unit_of_work() as db:
            cart_session = SessionService(db).upsert_session(
                store_id, customer_id, session_id, items, budget
            )
            return session_to_dict(cart_session)

    def generate_recommendations(
        self,
        store_id: int,
        customer_id: str,
        remaining_budget: RemainingBudget,
        exclude_product_ids: Iterable[str] = (),
    ) -> List[Dict[str, Any]]:
        with self._unit_of_work() as db:
            return RecommendationService(db).generate_recommendations(
                store_id, customer_id, remaining_budget, exclude_product_ids
            )

    def apply_discounts(
        self,
        store_id: int,
        customer_id: str,
        cart_session_id: int,
        total_cart_value: Decimal,
        minimum_threshold: Decimal,
    ) -> List[Dict[str, Any]]:
        with self._unit_of_work() as db:
            return DiscountService(db).apply_discounts(
                store_id, customer_id, cart_session_id, total_cart_value, minimum_threshold
            )

    def track_click(self, recommendation_id: int) -> None:
        with self._unit_of_work() as db:
            RecommendationService(db).mark_clicked(recommendation_id)

    def track_purchase(self, recommendation_id: int) -> None:
        with self._unit_of_work() as db:
            RecommendationService(db).mark_purchased(recommendation_id)

    @conflict_retry()
    def track_cart(
        self,
        store_id: int,
        customer_id: str,
        session_id: str,
        items: Iterable[CartItem],
        budget: BudgetConfig,
    ) -> Dict[str, Any]:
        """
        Use Case: zdarzenie zmiany koszyka z widgetu.

        1. Sprawdza czy sklep ma wlaczony premium cart tracking
        2. Upsert sesji koszyka (alokacja budzetu)
        3. Rekomendacje z pozostalego budzetu (jesli wlaczone)
        4. Automatyczne rabaty (jesli wlaczone)

        Wszystko w jednej transakcji; konflikt aktywnej sesji -> retry calosci.
        """
        items = list(items)

        with self._unit_of_work() as db:
            store = StoreRepo(db).get_store(store_id)

            if not store or not store.premium_cart_tracking:
                raise FeatureDisabledError("Premium cart tracking not enabled")

            cart_session = SessionService(db).upsert_session(
                store_id, customer_id, session_id, items, budget
            )

            recommendations = []
            if store.product_recommendations_enabled:
                remaining = RemainingBudget.model_validate(cart_session.remaining_budget)
                recommendations = RecommendationService(db).generate_recommendations(
                    store_id,
                    customer_id,
                    remaining,
                    exclude_product_ids=[i.product_id for i in items],
                )

            applied_discounts = []
            if store.auto_discount_enabled:
                threshold = store.minimum_discount_threshold or DEFAULT_MINIMUM_DISCOUNT_THRESHOLD
                applied_discounts = DiscountService(db).apply_discounts(
                    store_id,
                    customer_id,
                    cart_session.id,
                    cart_session.total_cart_value,
                    threshold,
                )

            #nowe listy, zeby SQLAlchemy wykryl zmiane kolumn JSON
            new_data = {}
            if store.product_recommendations_enabled:
                #tylko ostatni wynik silnika, takze pusty
                new_data["recommended_products"] = [r["product_id"] for r in recommendations]
            if applied_discounts:
                new_data["applied_discounts"] = list(cart_session.applied_discounts or []) + [
                    d["code"] for d in applied_discounts
                ]
            if new_data:
                CartSessionRepo(db).update_session(cart_session, new_data)

            logger.info(
                f"Cart tracked: session {cart_session.id}, "
                f"{len(recommendations)} recommendations, {len(applied_discounts)} discounts",
                extra={"store_id": store_id, "customer_id": customer_id},
            )

            return {
                "cart_session": session_to_dict(cart_session),
                "recommendations": recommendations,
                "applied_discounts": applied_discounts,
                "features": {
                    "auto_discount_enabled": bool(store.auto_discount_enabled),
                    "product_recommendations_enabled": bool(store.product_recommendations_enabled),
                    "budget_remaining_display_enabled": bool(store.budget_remaining_display_enabled),
                },
            }
