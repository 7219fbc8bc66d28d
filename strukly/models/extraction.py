"""
Models for the extraction service output and the editable draft built from it.
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import List, Optional

from pydantic import AliasChoices, BaseModel, Field, computed_field, field_validator

from strukly.models.receipt import CamelModel


def coerce_whole_amount(value, default: int) -> int:
    """
    Turns a model-produced number (int, float or numeric string) into a whole
    currency amount, rounding half up. Missing values take the default.

    Raises:
        ValueError: non-numeric, NaN/infinite, or too large to round exactly.
    """
    if value is None or value == "":
        return default
    if isinstance(value, bool):
        raise ValueError("amount must be numeric")
    if isinstance(value, int):
        return value
    try:
        amount = Decimal(str(value).strip())
    except InvalidOperation:
        raise ValueError(f"amount is not numeric: {value!r}")
    if not amount.is_finite():
        raise ValueError(f"amount is not finite: {value!r}")
    try:
        return int(amount.quantize(Decimal('1'), rounding=ROUND_HALF_UP))
    except InvalidOperation:
        raise ValueError(f"amount is out of range: {value!r}")


class ExtractedItem(BaseModel):
    """One line item exactly as the vision model reported it."""
    name: str = ""
    quantity: int = 1
    unit_price: int = Field(
        default=0,
        validation_alias=AliasChoices("unitPrice", "unit_price", "price"),
        serialization_alias="unitPrice",
    )

    @field_validator('name', mode='before')
    @classmethod
    def validate_name(cls, v):
        return "" if v is None else str(v)

    @field_validator('quantity', mode='before')
    @classmethod
    def validate_quantity(cls, v):
        return coerce_whole_amount(v, default=1)

    @field_validator('unit_price', mode='before')
    @classmethod
    def validate_unit_price(cls, v):
        return coerce_whole_amount(v, default=0)


class ExtractionResult(BaseModel):
    """Merchant name plus line items returned by the extraction service."""
    merchant: str = ""
    total_amount: Optional[int] = None
    items: List[ExtractedItem] = Field(default_factory=list)

    @field_validator('merchant', mode='before')
    @classmethod
    def validate_merchant(cls, v):
        return "" if v is None else str(v)

    @field_validator('total_amount', mode='before')
    @classmethod
    def validate_total(cls, v):
        if v is None:
            return None
        return coerce_whole_amount(v, default=0)

    @field_validator('items', mode='before')
    @classmethod
    def validate_items(cls, v):
        return [] if v is None else v


class DraftItem(CamelModel):
    """An editable, not yet persisted line item."""
    id: str
    name: str
    quantity: int
    unit_price: int

    @computed_field(alias="lineTotal")
    @property
    def line_total(self) -> int:
        return self.quantity * self.unit_price


class ReceiptDraft(CamelModel):
    """The in-memory draft a user edits before saving a receipt."""
    merchant: str = ""
    items: List[DraftItem] = Field(default_factory=list)
