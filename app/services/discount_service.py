# app/services/discount_service.py
import secrets
import string
from datetime import datetime, timezone, timedelta
from decimal import Decimal
from typing import Any, Dict, List

from sqlalchemy.orm import Session

from app.data.models.auto_discount import AutoDiscountModel
from app.domain.budget import money
from app.domain.errors import InvalidInputError
from app.repos.discount_repo import DiscountRepo
from app.utils.settings import DISCOUNT_TTL_HOURS
from app.utils.logging import get_logger

logger = get_logger(__name__)

CODE_ALPHABET = string.ascii_uppercase + string.digits
CODE_ATTEMPTS = 5

FREE_SHIPPING_RATIO = Decimal("1.5")
FREE_SHIPPING_SAVED = Decimal("10.00")

#(ratio >= prog, procent) - od najwyzszego progu
DISCOUNT_TIERS = (
    (Decimal("3"), 15),
    (Decimal("2"), 10),
    (Decimal("1.5"), 7),
    (Decimal("1"), 5),
)


def discount_percentage(total_cart_value: Decimal, minimum_threshold: Decimal) -> int:
    """Procent rabatu dla koszyka; 0 gdy koszyk nie osiaga minimum."""
    ratio = Decimal(total_cart_value) / Decimal(minimum_threshold)
    for tier, percentage in DISCOUNT_TIERS:
        if ratio >= tier:
            return percentage
    return 0


class DiscountService:
    """
    Automatyczne rabaty: procentowy wg progow + darmowa wysylka dla duzych koszykow.
    Oba typy sa zapisywane w auto_discounts z waznoscia DISCOUNT_TTL_HOURS.
    """

    def __init__(self, db: Session):
        self.repo = DiscountRepo(db)

    def apply_discounts(
        self,
        store_id: int,
        customer_id: str,
        cart_session_id: int,
        total_cart_value: Decimal,
        minimum_threshold: Decimal,
    ) -> List[Dict[str, Any]]:
        total_cart_value = Decimal(total_cart_value)
        minimum_threshold = Decimal(minimum_threshold)

        if minimum_threshold <= 0:
            raise InvalidInputError("Minimum discount threshold must be greater than 0")
        if total_cart_value < 0:
            raise InvalidInputError("Cart value cannot be negative")

        applied = []
        expires_at = datetime.now(timezone.utc) + timedelta(hours=DISCOUNT_TTL_HOURS)

        if total_cart_value >= minimum_threshold:
            percentage = discount_percentage(total_cart_value, minimum_threshold)
            applied.append(
                self._store_discount(
                    store_id=store_id,
                    customer_id=customer_id,
                    cart_session_id=cart_session_id,
                    code=self._unique_code("BUDGET", 6),
                    discount_type="percentage",
                    value=Decimal(percentage),
                    minimum_amount=money(minimum_threshold),
                    applied_amount=money(total_cart_value * percentage / 100),
                    reason=(
                        f"Budget-conscious shopping reward: {percentage}% off "
                        f"for spending over ${money(minimum_threshold)}"
                    ),
                    expires_at=expires_at,
                )
            )

        if total_cart_value >= minimum_threshold * FREE_SHIPPING_RATIO:
            applied.append(
                self._store_discount(
                    store_id=store_id,
                    customer_id=customer_id,
                    cart_session_id=cart_session_id,
                    code=self._unique_code("FREESHIP", 4),
                    discount_type="free_shipping",
                    value=Decimal("0"),
                    minimum_amount=money(minimum_threshold * FREE_SHIPPING_RATIO),
                    applied_amount=FREE_SHIPPING_SAVED,
                    reason="Free shipping for budget-conscious bulk orders",
                    expires_at=expires_at,
                )
            )

        logger.info(
            f"Przyznano {len(applied)} rabatow dla sesji {cart_session_id} "
            f"(koszyk {total_cart_value}, minimum {minimum_threshold})"
        )
        return applied

    def _store_discount(
        self,
        store_id: int,
        customer_id: str,
        cart_session_id: int,
        code: str,
        discount_type: str,
        value: Decimal,
        minimum_amount: Decimal,
        applied_amount: Decimal,
        reason: str,
        expires_at: datetime,
    ) -> Dict[str, Any]:
        stored = self.repo.create_discount(
            AutoDiscountModel(
                store_id=store_id,
                customer_id=customer_id,
                cart_session_id=cart_session_id,
                discount_code=code,
                discount_type=discount_type,
                discount_value=value,
                minimum_amount=minimum_amount,
                applied_amount=applied_amount,
                is_applied=True,
                expires_at=expires_at,
            )
        )
        return {
            "id": stored.id,
            "code": code,
            "type": discount_type,
            "value": value,
            "minimum_amount": minimum_amount,
            "applied_amount": applied_amount,
            "reason": reason,
            "expires_at": expires_at,
        }

    def _unique_code(self, prefix: str, length: int) -> str:
        #unikalny indeks na discount_code i tak pilnuje, tu tylko unikamy kolizji
        for _ in range(CODE_ATTEMPTS):
            code = prefix + "".join(secrets.choice(CODE_ALPHABET) for _ in range(length))
            if not self.repo.code_exists(code):
                return code
        raise RuntimeError(f"Could not generate a unique {prefix} discount code")
