"""
Stock and price bookkeeping shared by the API and its clients.

Covers stock status classification, the stock gauge percentage, discount
display, rating averages, and cart totals.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Iterable, Optional

DEFAULT_STOCK_THRESHOLD = 10
CENTS = Decimal("0.01")


class StockStatus(str, Enum):
    OUT_OF_STOCK = "out_of_stock"
    LOW_STOCK = "low_stock"
    IN_STOCK = "in_stock"

    @property
    def label_key(self) -> str:
        """Translation key used by the storefront for this status."""
        return {
            StockStatus.OUT_OF_STOCK: "products.outOfStock",
            StockStatus.LOW_STOCK: "products.lowStock",
            StockStatus.IN_STOCK: "products.inStock",
        }[self]


def stock_status(stock_count: int, threshold: Optional[int] = DEFAULT_STOCK_THRESHOLD) -> StockStatus:
    """Classify a stock level: 0 is out of stock, up to the threshold is low."""
    if threshold is None:
        threshold = DEFAULT_STOCK_THRESHOLD
    if stock_count <= 0:
        return StockStatus.OUT_OF_STOCK
    if stock_count <= threshold:
        return StockStatus.LOW_STOCK
    return StockStatus.IN_STOCK


def stock_percentage(stock_count: int, max_stock: int = 100) -> float:
    if max_stock <= 0:
        return 100.0
    return min(max(stock_count, 0) * 100 / max_stock, 100.0)


def discount_percent(price: Decimal, original_price: Optional[Decimal]) -> Optional[int]:
    """Whole-percent saving against the original price, or None when there is none."""
    if original_price is None or original_price <= 0 or original_price <= price:
        return None
    saving = (original_price - price) / original_price * 100
    return int(saving.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def average_rating(ratings: Iterable[int]) -> Decimal:
    """Arithmetic mean rounded half-up to one decimal place; 0.0 when empty."""
    values = list(ratings)
    if not values:
        return Decimal("0.0")
    mean = Decimal(sum(values)) / Decimal(len(values))
    return mean.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)


def cart_total(items: Iterable) -> Decimal:
    """Sum of price x quantity over cart items joined with their medicine."""
    total = sum((item.medicine.price * item.quantity for item in items), Decimal("0"))
    return total.quantize(CENTS)


def cart_count(items: Iterable) -> int:
    return sum(item.quantity for item in items)
