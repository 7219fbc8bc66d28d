"""
Revenue statistics for one user over one window.
"""

from datetime import date
from typing import Optional

from strukly.analytics.periods import resolve_period
from strukly.analytics.revenue_aggregator import aggregate
from strukly.models import RevenueStats
from strukly.store.receipt_store import ReceiptStore
from strukly.utils.logging_config import logger


class RevenueService:
    """
    Reads the owner's receipts for a window from the Receipt Store and hands
    them to the aggregator.

    Store failures propagate unchanged so callers can show a retryable error
    instead of zero-filled statistics.
    """

    def __init__(self, store: ReceiptStore):
        self.store = store

    def stats_for_range(
        self,
        user_id: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> RevenueStats:
        receipts = self.store.list_in_range(user_id, start_date=start_date, end_date=end_date)
        stats = aggregate(receipts)
        logger.info(
            f"Revenue for {user_id} [{start_date} .. {end_date}]: "
            f"{stats.total_receipts} receipts, {stats.total_revenue} total"
        )
        return stats

    def stats_for_period(self, user_id: str, period: str) -> RevenueStats:
        start_date, end_date = resolve_period(period)
        return self.stats_for_range(user_id, start_date=start_date, end_date=end_date)
