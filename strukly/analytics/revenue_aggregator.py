"""
Revenue rollups over a set of persisted receipts.

The aggregator is window-agnostic: callers pass receipts already restricted to
one owner and, optionally, one date window.
"""

from collections import defaultdict
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Iterable, Optional, Protocol

from strukly.models import RevenueStats


class AggregatableReceipt(Protocol):
    """Anything with a calendar date, a total and an optional category."""
    date: str
    total_amount: int
    category: Optional[str]


def average_transaction(total_revenue: int, total_receipts: int) -> int:
    """
    Mean receipt value rounded half-up to a whole currency unit; 0 when there
    are no receipts.
    """
    if total_receipts <= 0:
        return 0
    mean = Decimal(total_revenue) / Decimal(total_receipts)
    return int(mean.quantize(Decimal('1'), rounding=ROUND_HALF_UP))


def month_key(receipt_date: str) -> str:
    """'2025-03-14' -> '2025-03', taken from the calendar date itself."""
    parsed = date.fromisoformat(receipt_date)
    return f"{parsed.year}-{parsed.month:02d}"


def aggregate(receipts: Iterable[AggregatableReceipt]) -> RevenueStats:
    """
    Single pass over `receipts` producing totals and the daily, monthly and
    category rollups.

    Receipts without a category count toward every figure except
    category_breakdown; no placeholder bucket is created for them.
    """
    total_revenue = 0
    total_receipts = 0
    daily: Dict[str, int] = defaultdict(int)
    monthly: Dict[str, int] = defaultdict(int)
    categories: Dict[str, int] = defaultdict(int)

    for receipt in receipts:
        amount = receipt.total_amount
        total_revenue += amount
        total_receipts += 1
        daily[receipt.date] += amount
        monthly[month_key(receipt.date)] += amount
        if receipt.category:
            categories[receipt.category] += amount

    return RevenueStats(
        total_revenue=total_revenue,
        total_receipts=total_receipts,
        average_transaction=average_transaction(total_revenue, total_receipts),
        daily_revenue=dict(daily),
        monthly_revenue=dict(monthly),
        category_breakdown=dict(categories),
    )
