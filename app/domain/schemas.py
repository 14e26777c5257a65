# app/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict
from typing import List, Literal, Optional
from decimal import Decimal
from datetime import datetime

from app.domain.budget import (
    CartItem,
    BudgetConfig,
    BudgetBreakdown,
    RemainingBudget,
)

BudgetCategory = Literal["needs", "wants", "savings"]


class CartItemIn(CartItem):
    """Pozycja koszyka wysylana przez widget (request)."""

    product_id: str = Field(..., min_length=1)
    price: Decimal = Field(..., ge=0, description="Cena jednostkowa (>= 0)")
    quantity: int = Field(..., ge=1, description="Ilosc (>= 1)")
    budget_category: BudgetCategory


class BudgetIn(BudgetConfig):
    """Alokacja budzetu na okres, wyliczona po stronie klienta."""

    needs_amount: Decimal = Field(..., ge=0)
    wants_amount: Decimal = Field(..., ge=0)
    savings_amount: Decimal = Field(..., ge=0)


class CartTrackIn(BaseModel):
    """Snapshot koszyka - uzywany przez /cart/track i /cart/session."""

    store_id: int = Field(..., gt=0)
    customer_id: str = Field(..., min_length=1)
    session_id: str = Field(..., min_length=1)
    cart_items: List[CartItemIn]
    budget: BudgetIn


class RemainingBudgetIn(BaseModel):
    needs: Decimal
    wants: Decimal
    savings: Decimal


class GenerateRecommendationsIn(BaseModel):
    store_id: int = Field(..., gt=0)
    customer_id: str = Field(..., min_length=1)
    remaining_budget: RemainingBudgetIn
    exclude_product_ids: List[str] = Field(default_factory=list)


class ApplyDiscountsIn(BaseModel):
    store_id: int = Field(..., gt=0)
    customer_id: str = Field(..., min_length=1)
    cart_session_id: int = Field(..., gt=0)
    total_cart_value: Decimal = Field(..., ge=0)
    minimum_threshold: Decimal = Field(..., gt=0)


class CartDataOut(BaseModel):
    items: List[CartItem]
    total_items: int
    subtotal: Decimal


class CartSessionOut(BaseModel):
    id: int
    store_id: int
    customer_id: str
    session_id: str
    cart_data: CartDataOut
    budget_breakdown: BudgetBreakdown
    remaining_budget: RemainingBudget
    total_cart_value: Decimal
    applied_discounts: List[str]
    recommended_products: List[str]
    is_active: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None


class RecommendationOut(BaseModel):
    id: int
    product_id: str
    title: str
    price: Decimal
    budget_category: str
    reason: str | None = None
    remaining_budget_after: Decimal | None = None
    priority: int
    url: str | None = None
    is_clicked: bool = False
    is_purchased: bool = False
    created_at: datetime | None = None


class DiscountOut(BaseModel):
    id: int
    code: str
    type: Literal["percentage", "free_shipping"]
    value: Decimal
    minimum_amount: Decimal | None = None
    applied_amount: Decimal
    reason: str
    expires_at: datetime | None = None


class FeaturesOut(BaseModel):
    auto_discount_enabled: bool
    product_recommendations_enabled: bool
    budget_remaining_display_enabled: bool


class CartTrackOut(BaseModel):
    cart_session: CartSessionOut
    recommendations: List[RecommendationOut]
    applied_discounts: List[DiscountOut]
    features: FeaturesOut


class CartOverviewOut(BaseModel):
    cart_session: CartSessionOut
    recommendations: List[RecommendationOut]


class AckOut(BaseModel):
    success: bool = True


class StoreCreate(BaseModel):
    """Schema dla rejestracji sklepu."""

    shopify_domain: str = Field(..., min_length=1, max_length=255)
    premium_cart_tracking: bool = False
    auto_discount_enabled: bool = False
    product_recommendations_enabled: bool = False
    budget_remaining_display_enabled: bool = False
    minimum_discount_threshold: Decimal = Field(Decimal("50.00"), gt=0)


class PremiumFeaturesUpdate(BaseModel):
    """Czesciowa aktualizacja - None oznacza brak zmiany."""

    store_id: int = Field(1, gt=0, description="Domyslnie sklep demo")
    premium_cart_tracking: Optional[bool] = None
    auto_discount_enabled: Optional[bool] = None
    product_recommendations_enabled: Optional[bool] = None
    budget_remaining_display_enabled: Optional[bool] = None
    minimum_discount_threshold: Optional[Decimal] = Field(None, gt=0)


class StoreOut(BaseModel):
    id: int
    shopify_domain: str
    is_active: bool
    premium_cart_tracking: bool
    auto_discount_enabled: bool
    product_recommendations_enabled: bool
    budget_remaining_display_enabled: bool
    minimum_discount_threshold: Decimal

    model_config = ConfigDict(from_attributes=True)


class HealthOut(BaseModel):
    service: str
    status: str
    database: str
    timestamp: datetime
