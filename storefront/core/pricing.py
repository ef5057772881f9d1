"""Price resolution for catalog products.

A product's displayed price comes from exactly one source, checked in a
fixed order: an active weekly offer (absolute override price), then an
active solde (percentage or fixed discount on the sell price), then the
plain sell price. Everything here is pure; callers fetch the candidate
promotions and pass them in.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Optional, Union

from storefront.core.constants import DISCOUNT_FIXED, DISCOUNT_PERCENTAGE, DISCOUNT_WEEKLY
from storefront.core.dates import as_utc

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
HUNDRED = Decimal("100")


def to_decimal(value) -> Optional[Decimal]:
    if value is None:
        return None
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise ValueError("boolean is not a price")
    try:
        if isinstance(value, float):
            return Decimal(str(value))
        return Decimal(str(value).strip())
    except InvalidOperation as exc:
        raise ValueError("invalid decimal value: {!r}".format(value)) from exc


def quantize_price(value: Decimal, places: int = 2) -> Decimal:
    return value.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)


def _field(source, name):
    if isinstance(source, dict):
        return source.get(name)
    return getattr(source, name, None)


# ------------------------------------------------------------------
# Discounts
# ------------------------------------------------------------------


@dataclass(frozen=True)
class Percentage:
    percent: Decimal


@dataclass(frozen=True)
class Fixed:
    amount: Decimal


Discount = Union[Percentage, Fixed]


def discount_from_fields(discount_percent, discount_fixed) -> Optional[Discount]:
    """Collapse the two nullable solde columns into one discount.

    Percentage wins when both are set; zero counts as unset.
    """
    percent = to_decimal(discount_percent)
    if percent:
        return Percentage(percent)
    amount = to_decimal(discount_fixed)
    if amount:
        return Fixed(amount)
    return None


# ------------------------------------------------------------------
# Price sources
# ------------------------------------------------------------------


@dataclass(frozen=True)
class BasePrice:
    pass


@dataclass(frozen=True)
class WeeklyPrice:
    offer_price: Decimal
    offer_description: Optional[str] = None


@dataclass(frozen=True)
class SalePrice:
    discount: Discount


PriceSource = Union[BasePrice, WeeklyPrice, SalePrice]


@dataclass(frozen=True)
class PriceInfo:
    original_price: Decimal
    final_price: Decimal
    discount_type: Optional[str] = None
    discount_value: Optional[Decimal] = None
    offer_description: Optional[str] = None
    price_clamped: bool = False
    degraded: bool = False


def is_promotion_active(promotion, now) -> bool:
    """Closed-interval window test gated by the promotion's is_active flag."""
    if promotion is None or not _field(promotion, "is_active"):
        return False
    start_date = as_utc(_field(promotion, "start_date"))
    end_date = as_utc(_field(promotion, "end_date"))
    if start_date is None or end_date is None:
        return False
    moment = as_utc(now)
    return start_date <= moment <= end_date


def select_price_source(weekly_offer=None, solde=None) -> PriceSource:
    if weekly_offer is not None:
        offer_price = to_decimal(_field(weekly_offer, "offer_price"))
        if offer_price is not None:
            return WeeklyPrice(
                offer_price=offer_price,
                offer_description=_field(weekly_offer, "offer_description"),
            )
    if solde is not None:
        discount = discount_from_fields(
            _field(solde, "discount_percent"),
            _field(solde, "discount_fixed"),
        )
        if discount is not None:
            return SalePrice(discount)
    return BasePrice()


def _clamp(original_price: Decimal, final_price: Decimal, source: PriceSource):
    if final_price >= ZERO:
        return final_price, False
    logger.warning(
        "Resolved price %s for original %s via %s is negative; clamping to 0.",
        final_price,
        original_price,
        source,
    )
    return ZERO, True


def price_from_source(sell_price, source: PriceSource, *, places: int = 2) -> PriceInfo:
    original_price = to_decimal(sell_price)
    if original_price is None:
        raise ValueError("sell_price is required")

    if isinstance(source, WeeklyPrice):
        final_price, clamped = _clamp(original_price, quantize_price(source.offer_price, places), source)
        return PriceInfo(
            original_price=original_price,
            final_price=final_price,
            discount_type=DISCOUNT_WEEKLY,
            offer_description=source.offer_description,
            price_clamped=clamped,
        )

    if isinstance(source, SalePrice):
        discount = source.discount
        if isinstance(discount, Percentage):
            raw = original_price * (1 - discount.percent / HUNDRED)
            discount_type, discount_value = DISCOUNT_PERCENTAGE, discount.percent
        else:
            raw = original_price - discount.amount
            discount_type, discount_value = DISCOUNT_FIXED, discount.amount
        final_price, clamped = _clamp(original_price, quantize_price(raw, places), source)
        return PriceInfo(
            original_price=original_price,
            final_price=final_price,
            discount_type=discount_type,
            discount_value=discount_value,
            price_clamped=clamped,
        )

    return PriceInfo(original_price=original_price, final_price=original_price)


def resolve_price(sell_price, weekly_offer=None, solde=None, *, now=None, places: int = 2) -> PriceInfo:
    """Resolve the displayed price of one product.

    When ``now`` is given, promotions outside their active window are
    ignored; otherwise the caller is trusted to pass only active ones.
    """
    if now is not None:
        if not is_promotion_active(weekly_offer, now):
            weekly_offer = None
        if not is_promotion_active(solde, now):
            solde = None
    source = select_price_source(weekly_offer, solde)
    return price_from_source(sell_price, source, places=places)


def base_price_info(sell_price) -> PriceInfo:
    """Fallback used when a listing row cannot be resolved."""
    try:
        original_price = to_decimal(sell_price) or ZERO
    except ValueError:
        original_price = ZERO
    return PriceInfo(original_price=original_price, final_price=original_price, degraded=True)


def format_price(amount, currency: str = "XOF") -> str:
    value = quantize_price(to_decimal(amount) or ZERO, 0)
    grouped = "{:,}".format(int(value)).replace(",", " ")
    return "{} {}".format(grouped, currency)


__all__ = [
    "BasePrice",
    "Discount",
    "Fixed",
    "Percentage",
    "PriceInfo",
    "PriceSource",
    "SalePrice",
    "WeeklyPrice",
    "base_price_info",
    "discount_from_fields",
    "format_price",
    "is_promotion_active",
    "price_from_source",
    "quantize_price",
    "resolve_price",
    "select_price_source",
    "to_decimal",
]
