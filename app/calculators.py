from dataclasses import dataclass
from decimal import Decimal
from typing import Callable

from app.models import Product, PurchaseItem, SellerStats

RevenueCalculator = Callable[[PurchaseItem, Product], Decimal]
BonusCalculator = Callable[[int, int, SellerStats], Decimal]

_ZERO = Decimal("0")
_HUNDRED = Decimal("100")

# Evaluated top to bottom; the first matching predicate wins.
# (index, total) → share of profit paid out as bonus
_BONUS_RULES: list[tuple[Callable[[int, int], bool], Decimal]] = [
    (lambda index, total: index == 0,          Decimal("0.15")),  # top seller
    (lambda index, total: index in (1, 2),     Decimal("0.10")),
    (lambda index, total: index == total - 1,  _ZERO),            # last place
]
_REGULAR_BONUS = Decimal("0.05")


def calculate_simple_revenue(item: PurchaseItem, product: Product) -> Decimal:
    """Net revenue for one line item: sale price less percent discount, times quantity."""
    discount = 1 - item.discount / _HUNDRED
    return discount * item.quantity * item.sale_price


def bonus_rate(index: int, total: int) -> Decimal:
    for matches, rate in _BONUS_RULES:
        if matches(index, total):
            return rate
    return _REGULAR_BONUS


def calculate_bonus_by_profit(index: int, total: int, seller: SellerStats) -> Decimal:
    """Bonus for the seller at ``index`` of the profit-descending ranking."""
    rate = bonus_rate(index, total)
    if rate == _ZERO:
        return _ZERO
    return seller.profit * rate


@dataclass(frozen=True)
class AnalysisOptions:
    calculate_revenue: RevenueCalculator
    calculate_bonus: BonusCalculator


DEFAULT_OPTIONS = AnalysisOptions(
    calculate_revenue=calculate_simple_revenue,
    calculate_bonus=calculate_bonus_by_profit,
)
