from decimal import Decimal

import pytest
from sqlalchemy import select

from app.data.models import ProductRecommendationModel
from app.domain.budget import RemainingBudget
from app.domain.errors import NotFoundError


def remaining(needs, wants, savings) -> RemainingBudget:
    return RemainingBudget(needs=Decimal(needs), wants=Decimal(wants), savings=Decimal(savings))


def test_only_triggered_categories_are_recommended(tracking_service):
    recs = tracking_service.generate_recommendations(1, "cust", remaining("25", "10", "60"))

    assert [r["budget_category"] for r in recs] == ["needs", "savings"]
    assert [r["priority"] for r in recs] == [1, 2]
    assert recs[0]["price"] == Decimal("20")
    assert recs[0]["remaining_budget_after"] == Decimal("5")
    assert recs[1]["price"] == Decimal("42")
    assert recs[1]["remaining_budget_after"] == Decimal("18")


def test_prices_are_capped(tracking_service):
    recs = tracking_service.generate_recommendations(1, "cust", remaining("500", "500", "500"))

    assert [r["price"] for r in recs] == [Decimal("35"), Decimal("28"), Decimal("75")]
    assert [r["product_id"] for r in recs] == ["needs_product_1", "wants_product_1", "savings_product_1"]
    assert recs[0]["remaining_budget_after"] == Decimal("465")


def test_thresholds_are_exclusive(tracking_service):
    recs = tracking_service.generate_recommendations(1, "cust", remaining("20", "15", "50"))

    assert recs == []


def test_excluded_products_are_skipped_and_priorities_compacted(tracking_service):
    recs = tracking_service.generate_recommendations(
        1, "cust", remaining("100", "100", "100"), exclude_product_ids=["needs_product_1"]
    )

    assert [(r["product_id"], r["priority"]) for r in recs] == [
        ("wants_product_1", 1),
        ("savings_product_1", 2),
    ]


def test_generated_recommendations_are_persisted(tracking_service, db):
    recs = tracking_service.generate_recommendations(3, "cust", remaining("30", "30", "30"))

    rows = db.execute(select(ProductRecommendationModel)).scalars().all()
    assert len(rows) == 2
    assert {r.id for r in rows} == {r["id"] for r in recs}
    assert all(r.store_id == 3 and r.customer_id == "cust" for r in rows)
    assert all(not r.is_clicked and not r.is_purchased for r in rows)


def test_list_is_limited_and_ordered_by_priority_desc(tracking_service):
    for _ in range(3):
        tracking_service.generate_recommendations(1, "cust", remaining("100", "100", "100"))
    tracking_service.generate_recommendations(1, "other", remaining("100", "100", "100"))

    listed = tracking_service.list_recommendations(1, "cust")

    assert len(listed) == 5
    assert [r["priority"] for r in listed] == [3, 3, 3, 2, 2]
    assert all(r["budget_category"] in ("savings", "wants") for r in listed)
    # przy rownym priorytecie najnowsze pierwsze
    savings_ids = [r["id"] for r in listed if r["priority"] == 3]
    assert savings_ids == sorted(savings_ids, reverse=True)


def test_list_for_unknown_customer_is_empty(tracking_service):
    assert tracking_service.list_recommendations(1, "nobody") == []


def test_click_is_idempotent(tracking_service, db):
    rec_id = tracking_service.generate_recommendations(1, "cust", remaining("30", "0", "0"))[0]["id"]

    tracking_service.track_click(rec_id)
    tracking_service.track_click(rec_id)

    row = db.get(ProductRecommendationModel, rec_id)
    assert row.is_clicked is True
    assert row.is_purchased is False


def test_purchase_sets_flag(tracking_service, db):
    rec_id = tracking_service.generate_recommendations(1, "cust", remaining("30", "0", "0"))[0]["id"]

    tracking_service.track_purchase(rec_id)
    tracking_service.track_purchase(rec_id)

    row = db.get(ProductRecommendationModel, rec_id)
    assert row.is_purchased is True
    assert row.is_clicked is False


@pytest.mark.parametrize("action", ["track_click", "track_purchase"])
def test_tracking_unknown_recommendation_raises(tracking_service, action):
    with pytest.raises(NotFoundError):
        getattr(tracking_service, action)(9999)
