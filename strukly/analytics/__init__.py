"""
Revenue analytics: window presets, rollups and the store-backed service.
"""

from .periods import PERIODS, resolve_period
from .revenue_aggregator import aggregate, average_transaction, month_key

__all__ = ["PERIODS", "resolve_period", "aggregate", "average_transaction", "month_key"]
