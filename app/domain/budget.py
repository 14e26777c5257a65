# app/domain/budget.py
"""
Alokator budzetu: dzieli koszyk na kubelki needs / wants / savings.

Czysta funkcja, bez I/O. Kwoty sa Decimal; sumy liczymy dokladnie i
zaokraglamy do groszy raz, tak jak kolumny Numeric(10, 2) w bazie, wiec
to co policzymy przy zapisie jest identyczne z tym co odczytamy.
"""
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Iterable, List, Optional

from pydantic import BaseModel, Field

from app.domain.errors import InvalidInputError

BUDGET_CATEGORIES = ("needs", "wants", "savings")

CENT = Decimal("0.01")


def money(value) -> Decimal:
    return Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP)


class CartItem(BaseModel):
    product_id: str
    variant_id: Optional[str] = None
    title: str
    price: Decimal
    quantity: int
    budget_category: str

    @property
    def line_total(self) -> Decimal:
        return self.price * self.quantity


class BudgetConfig(BaseModel):
    needs_amount: Decimal
    wants_amount: Decimal
    savings_amount: Decimal

    def allocated(self, category: str) -> Decimal:
        return money(getattr(self, f"{category}_amount"))


class CategoryBreakdown(BaseModel):
    allocated: Decimal
    spent: Decimal
    remaining: Decimal
    items: List[CartItem] = Field(default_factory=list)


class BudgetBreakdown(BaseModel):
    needs: CategoryBreakdown
    wants: CategoryBreakdown
    savings: CategoryBreakdown

    def category(self, name: str) -> CategoryBreakdown:
        return getattr(self, name)


class RemainingBudget(BaseModel):
    needs: Decimal
    wants: Decimal
    savings: Decimal
    total: Optional[Decimal] = None

    def for_category(self, category: str) -> Decimal:
        return getattr(self, category)


class BudgetAllocation(BaseModel):
    breakdown: BudgetBreakdown
    remaining: RemainingBudget
    total_cart_value: Decimal
    total_items: int


def _validate(items: List[CartItem], budget: BudgetConfig) -> None:
    for item in items:
        if item.price < 0:
            raise InvalidInputError(f"Negative price for product {item.product_id}")
        if item.quantity < 1:
            raise InvalidInputError(f"Quantity must be at least 1 for product {item.product_id}")

    for category in BUDGET_CATEGORIES:
        if budget.allocated(category) < 0:
            raise InvalidInputError(f"Negative {category} budget amount")


def allocate_budget(items: Iterable[CartItem], budget: BudgetConfig) -> BudgetAllocation:
    items = list(items)
    _validate(items, budget)

    partitions: Dict[str, List[CartItem]] = {c: [] for c in BUDGET_CATEGORIES}
    for item in items:
        #pozycje spoza trzech kategorii nie sa sledzone w budzecie
        if item.budget_category in partitions:
            partitions[item.budget_category].append(item)

    categories = {}
    for category, members in partitions.items():
        allocated = budget.allocated(category)
        #bez zaokraglania pozycji, tylko suma
        spent = money(sum((i.line_total for i in members), Decimal("0")))
        categories[category] = CategoryBreakdown(
            allocated=allocated,
            spent=spent,
            remaining=allocated - spent,
            items=members,
        )

    breakdown = BudgetBreakdown(**categories)
    remaining = RemainingBudget(
        needs=breakdown.needs.remaining,
        wants=breakdown.wants.remaining,
        savings=breakdown.savings.remaining,
        total=breakdown.needs.remaining + breakdown.wants.remaining + breakdown.savings.remaining,
    )

    return BudgetAllocation(
        breakdown=breakdown,
        remaining=remaining,
        total_cart_value=money(sum((i.line_total for i in items), Decimal("0"))),
        total_items=sum(i.quantity for i in items),
    )
