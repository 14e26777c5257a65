# app/services/recommendation_service.py
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Iterable, List

from sqlalchemy.orm import Session

from app.data.models.product_recommendation import ProductRecommendationModel
from app.domain.budget import RemainingBudget, money
from app.domain.errors import NotFoundError
from app.repos.recommendation_repo import RecommendationRepo
from app.utils.settings import RECOMMENDATION_LIST_LIMIT
from app.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class RecommendationRule:
    category: str
    threshold: Decimal  # rekomenduj gdy remaining > threshold
    factor: Decimal
    cap: Decimal
    product_id: str
    title: str
    reason: str
    url: str

    def price_for(self, remaining: Decimal) -> Decimal:
        return money(min(remaining * self.factor, self.cap))


#kolejnosc ma znaczenie: needs, wants, savings -> priorytety 1..n
RECOMMENDATION_RULES = (
    RecommendationRule(
        category="needs",
        threshold=Decimal("20"),
        factor=Decimal("0.8"),
        cap=Decimal("35"),
        product_id="needs_product_1",
        title="Essential Daily Supplements",
        reason="Essential health product that fits your needs budget",
        url="/products/essential-supplements",
    ),
    RecommendationRule(
        category="wants",
        threshold=Decimal("15"),
        factor=Decimal("0.6"),
        cap=Decimal("28"),
        product_id="wants_product_1",
        title="Premium Coffee Blend",
        reason="Perfect treat that fits your wants budget",
        url="/products/premium-coffee",
    ),
    RecommendationRule(
        category="savings",
        threshold=Decimal("50"),
        factor=Decimal("0.7"),
        cap=Decimal("75"),
        product_id="savings_product_1",
        title="Investment in Quality Tools",
        reason="Long-term investment that builds value",
        url="/products/quality-tools",
    ),
)


def recommendation_to_dict(rec: ProductRecommendationModel) -> Dict[str, Any]:
    return {
        "id": rec.id,
        "product_id": rec.product_id,
        "title": rec.product_title,
        "price": rec.product_price,
        "budget_category": rec.budget_category,
        "reason": rec.recommendation_reason,
        "remaining_budget_after": rec.remaining_budget_after,
        "priority": rec.priority,
        "is_clicked": rec.is_clicked,
        "is_purchased": rec.is_purchased,
        "created_at": rec.created_at,
    }


class RecommendationService:
    """
    Silnik rekomendacji: stala tabela regul, max jedna rekomendacja na kategorie.
    Commit/rollback robi wywolujacy.
    """

    def __init__(self, db: Session):
        self.repo = RecommendationRepo(db)

    def generate_recommendations(
        self,
        store_id: int,
        customer_id: str,
        remaining_budget: RemainingBudget,
        exclude_product_ids: Iterable[str] = (),
    ) -> List[Dict[str, Any]]:
        excluded = set(exclude_product_ids)
        recommendations = []

        for rule in RECOMMENDATION_RULES:
            remaining = remaining_budget.for_category(rule.category)
            if remaining <= rule.threshold or rule.product_id in excluded:
                continue

            price = rule.price_for(remaining)
            recommendations.append(
                {
                    "product_id": rule.product_id,
                    "title": rule.title,
                    "price": price,
                    "budget_category": rule.category,
                    "reason": rule.reason,
                    "remaining_budget_after": money(remaining - price),
                    "priority": len(recommendations) + 1,
                    "url": rule.url,
                }
            )

        for rec in recommendations:
            stored = self.repo.create_recommendation(
                ProductRecommendationModel(
                    store_id=store_id,
                    customer_id=customer_id,
                    product_id=rec["product_id"],
                    product_title=rec["title"],
                    product_price=rec["price"],
                    budget_category=rec["budget_category"],
                    recommendation_reason=rec["reason"],
                    remaining_budget_after=rec["remaining_budget_after"],
                    priority=rec["priority"],
                )
            )
            rec["id"] = stored.id

        logger.info(
            f"Wygenerowano {len(recommendations)} rekomendacji dla store {store_id}, "
            f"customer {customer_id}"
        )
        return recommendations

    def list_recommendations(self, store_id: int, customer_id: str) -> List[Dict[str, Any]]:
        rows = self.repo.list_for_customer(store_id, customer_id, limit=RECOMMENDATION_LIST_LIMIT)
        return [recommendation_to_dict(r) for r in rows]

    def mark_clicked(self, recommendation_id: int) -> None:
        rec = self._get_or_raise(recommendation_id)
        if not rec.is_clicked:
            rec.is_clicked = True
            logger.info(f"Rekomendacja {recommendation_id} kliknieta")

    def mark_purchased(self, recommendation_id: int) -> None:
        rec = self._get_or_raise(recommendation_id)
        if not rec.is_purchased:
            rec.is_purchased = True
            logger.info(f"Rekomendacja {recommendation_id} kupiona")

    def _get_or_raise(self, recommendation_id: int) -> ProductRecommendationModel:
        rec = self.repo.get_recommendation(recommendation_id)
        if not rec:
            raise NotFoundError(f"Recommendation {recommendation_id} not found")
        return rec
