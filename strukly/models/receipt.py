"""
Data models for persisted receipts and the owner's running totals.

Amounts are whole Rupiah (the smallest currency unit in use). Field names are
snake_case in Python and camelCase on the wire.
"""

import re
from datetime import date, datetime, timezone
from typing import List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, computed_field, field_validator
from pydantic.alias_generators import to_camel

DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class CamelModel(BaseModel):
    """Base model that reads and writes camelCase keys."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def validate_calendar_date(value: str) -> str:
    """Ensures a plain YYYY-MM-DD calendar date string."""
    if isinstance(value, date):
        return value.isoformat()
    if not isinstance(value, str) or not DATE_PATTERN.match(value):
        raise ValueError("date must be formatted as YYYY-MM-DD")
    date.fromisoformat(value)
    return value


class ReceiptItem(CamelModel):
    """
    One purchased line of a receipt.
    """
    name: str
    quantity: int = 1
    unit_price: int = Field(
        default=0,
        validation_alias=AliasChoices("unitPrice", "unit_price", "price"),
        serialization_alias="unitPrice",
    )

    @computed_field(alias="lineTotal")
    @property
    def line_total(self) -> int:
        """quantity x unit price."""
        return self.quantity * self.unit_price


class ReceiptBase(CamelModel):
    store_name: str
    date: str
    total_amount: int
    items: List[ReceiptItem] = Field(default_factory=list)
    category: Optional[str] = None
    payment_method: Optional[str] = None
    image_url: Optional[str] = None

    @field_validator('date', mode='before')
    @classmethod
    def validate_date(cls, v):
        return validate_calendar_date(v)


class ReceiptCreate(ReceiptBase):
    """A confirmed draft, ready to be persisted for its owner."""
    user_id: str


class ReceiptUpdate(CamelModel):
    """
    Partial update of a persisted receipt. Only fields that were explicitly set
    are applied.
    """
    store_name: Optional[str] = None
    date: Optional[str] = None
    total_amount: Optional[int] = None
    items: Optional[List[ReceiptItem]] = None
    category: Optional[str] = None
    payment_method: Optional[str] = None
    image_url: Optional[str] = None

    @field_validator('date', mode='before')
    @classmethod
    def validate_date(cls, v):
        if v is None:
            return v
        return validate_calendar_date(v)


class Receipt(ReceiptBase):
    """
    The persisted transaction record, as returned by the Receipt Store.
    """
    id: str
    user_id: str
    created_at: datetime
    updated_at: datetime

    @property
    def item_count(self) -> int:
        """Helper to count the number of line items."""
        return len(self.items)


class UserRevenueAccount(CamelModel):
    """
    Owner-level running totals, maintained by signed deltas on every
    receipt mutation.
    """
    uid: str
    email: str = ""
    display_name: str = ""
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    total_receipts: int = 0
    total_revenue: int = 0
