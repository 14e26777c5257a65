from decimal import Decimal

import pytest

from app.domain.budget import BudgetConfig, allocate_budget, money
from app.domain.errors import InvalidInputError
from conftest import item


def test_spent_is_sum_of_line_totals_per_category(budget):
    items = [
        item("a", "12.50", 2, "needs"),
        item("b", "5.00", 3, "wants"),
        item("c", "40.00", 1, "savings"),
        item("d", "1.25", 4, "needs"),
    ]

    allocation = allocate_budget(items, budget)

    assert allocation.breakdown.needs.spent == Decimal("30.00")
    assert allocation.breakdown.wants.spent == Decimal("15.00")
    assert allocation.breakdown.savings.spent == Decimal("40.00")
    assert [i.product_id for i in allocation.breakdown.needs.items] == ["a", "d"]


def test_categorised_spend_equals_total_when_every_item_is_tagged(budget):
    items = [item("a", "19.99", 2, "needs"), item("b", "7.49", 1, "wants")]

    allocation = allocate_budget(items, budget)
    b = allocation.breakdown

    assert b.needs.spent + b.wants.spent + b.savings.spent == allocation.total_cart_value
    assert allocation.total_cart_value == Decimal("47.47")


def test_unknown_category_counts_toward_total_but_not_buckets(budget):
    items = [item("a", "10.00", 1, "needs"), item("gift", "25.00", 2, "gifts")]

    allocation = allocate_budget(items, budget)
    b = allocation.breakdown

    assert allocation.total_cart_value == Decimal("60.00")
    assert allocation.total_items == 3
    assert b.needs.spent + b.wants.spent + b.savings.spent == Decimal("10.00")
    assert all(
        i.product_id != "gift"
        for c in (b.needs, b.wants, b.savings)
        for i in c.items
    )


def test_remaining_goes_negative_when_over_budget():
    budget = BudgetConfig(needs_amount=Decimal("20"), wants_amount=Decimal("0"), savings_amount=Decimal("5"))
    items = [item("a", "30.00", 1, "needs"), item("b", "4.00", 1, "wants")]

    allocation = allocate_budget(items, budget)

    assert allocation.breakdown.needs.remaining == Decimal("-10.00")
    assert allocation.breakdown.wants.remaining == Decimal("-4.00")
    assert allocation.breakdown.savings.remaining == Decimal("5.00")
    assert allocation.remaining.total == Decimal("-9.00")


def test_remaining_summary_mirrors_breakdown(budget):
    allocation = allocate_budget([item("a", "30.00", 1, "wants")], budget)

    assert allocation.remaining.needs == Decimal("100.00")
    assert allocation.remaining.wants == Decimal("20.00")
    assert allocation.remaining.savings == Decimal("80.00")
    assert allocation.remaining.total == Decimal("200.00")
    for category in ("needs", "wants", "savings"):
        c = allocation.breakdown.category(category)
        assert c.remaining == c.allocated - c.spent


def test_empty_cart(budget):
    allocation = allocate_budget([], budget)

    assert allocation.total_cart_value == Decimal("0.00")
    assert allocation.total_items == 0
    assert allocation.remaining.total == Decimal("230.00")


def test_cart_total_is_rounded_to_cents(budget):
    allocation = allocate_budget([item("a", "0.335", 3, "needs")], budget)

    assert allocation.total_cart_value == money("1.005")
    assert allocation.total_cart_value == Decimal("1.01")


def test_spent_rounds_the_exact_sum_once(budget):
    items = [item(f"c{n}", "0.005", 1, "needs") for n in range(3)]

    allocation = allocate_budget(items, budget)

    assert allocation.breakdown.needs.spent == Decimal("0.02")
    assert allocation.breakdown.needs.remaining == Decimal("99.98")
    assert allocation.total_cart_value == Decimal("0.02")


@pytest.mark.parametrize(
    "bad_item",
    [
        item("neg", "-1.00", 1, "needs"),
        item("zero", "5.00", 0, "wants"),
        item("minus", "5.00", -2, "savings"),
    ],
)
def test_invalid_items_are_rejected(budget, bad_item):
    with pytest.raises(InvalidInputError):
        allocate_budget([bad_item], budget)


def test_negative_budget_is_rejected():
    budget = BudgetConfig(needs_amount=Decimal("-1"), wants_amount=Decimal("0"), savings_amount=Decimal("0"))

    with pytest.raises(InvalidInputError):
        allocate_budget([], budget)
