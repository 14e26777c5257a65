from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest
from sqlalchemy import select

from app.data.models import AutoDiscountModel
from app.domain.errors import InvalidInputError
from app.services.discount_service import discount_percentage


@pytest.mark.parametrize(
    "total, expected",
    [
        ("99", 0),
        ("100", 5),
        ("149.99", 5),
        ("150", 7),
        ("199.99", 7),
        ("200", 10),
        ("299.99", 10),
        ("300", 15),
        ("1000", 15),
    ],
)
def test_discount_percentage_step_table(total, expected):
    assert discount_percentage(Decimal(total), Decimal("100")) == expected


def test_below_minimum_grants_nothing(tracking_service, db):
    applied = tracking_service.apply_discounts(1, "cust", 1, Decimal("99"), Decimal("100"))

    assert applied == []
    assert db.execute(select(AutoDiscountModel)).scalars().all() == []


def test_meeting_minimum_grants_percentage_only(tracking_service):
    applied = tracking_service.apply_discounts(1, "cust", 1, Decimal("149"), Decimal("100"))

    assert len(applied) == 1
    discount = applied[0]
    assert discount["type"] == "percentage"
    assert discount["value"] == Decimal("5")
    assert discount["applied_amount"] == Decimal("7.45")
    assert discount["minimum_amount"] == Decimal("100.00")
    assert discount["code"].startswith("BUDGET")
    assert len(discount["code"]) == len("BUDGET") + 6


def test_one_and_a_half_times_minimum_adds_free_shipping(tracking_service, db):
    applied = tracking_service.apply_discounts(1, "cust", 1, Decimal("150"), Decimal("100"))

    assert [d["type"] for d in applied] == ["percentage", "free_shipping"]
    percentage, free_shipping = applied
    assert percentage["value"] == Decimal("7")
    assert percentage["applied_amount"] == Decimal("10.50")
    assert free_shipping["applied_amount"] == Decimal("10.00")
    assert free_shipping["value"] == Decimal("0")
    assert free_shipping["code"].startswith("FREESHIP")
    assert len(free_shipping["code"]) == len("FREESHIP") + 4

    rows = db.execute(select(AutoDiscountModel).order_by(AutoDiscountModel.id)).scalars().all()
    assert [r.discount_type for r in rows] == ["percentage", "free_shipping"]
    assert all(r.is_applied for r in rows)
    assert all(r.cart_session_id == 1 for r in rows)
    assert {r.discount_code for r in rows} == {d["code"] for d in applied}


def test_discounts_expire_after_a_day(tracking_service):
    before = datetime.now(timezone.utc)
    applied = tracking_service.apply_discounts(1, "cust", 1, Decimal("300"), Decimal("100"))
    after = datetime.now(timezone.utc)

    for discount in applied:
        assert before + timedelta(hours=24) <= discount["expires_at"] <= after + timedelta(hours=24)


def test_codes_are_unique_across_calls(tracking_service):
    codes = set()
    for _ in range(20):
        for discount in tracking_service.apply_discounts(1, "cust", 1, Decimal("500"), Decimal("100")):
            codes.add(discount["code"])

    assert len(codes) == 40


@pytest.mark.parametrize("threshold", ["0", "-10"])
def test_non_positive_threshold_is_rejected(tracking_service, threshold):
    with pytest.raises(InvalidInputError):
        tracking_service.apply_discounts(1, "cust", 1, Decimal("100"), Decimal(threshold))


def test_negative_cart_value_is_rejected(tracking_service):
    with pytest.raises(InvalidInputError):
        tracking_service.apply_discounts(1, "cust", 1, Decimal("-5"), Decimal("50"))
