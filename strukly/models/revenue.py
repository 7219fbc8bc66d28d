"""
Computed revenue statistics. Never persisted.
"""

from typing import Dict

from pydantic import Field

from strukly.models.receipt import CamelModel


class RevenueStats(CamelModel):
    total_revenue: int = 0
    total_receipts: int = 0
    average_transaction: int = 0
    monthly_revenue: Dict[str, int] = Field(default_factory=dict)
    daily_revenue: Dict[str, int] = Field(default_factory=dict)
    category_breakdown: Dict[str, int] = Field(default_factory=dict)
