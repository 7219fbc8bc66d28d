import sys
import os

import pytest

# Ensure the project root is in the python path for all tests
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from strukly.models import ReceiptCreate, ReceiptItem
from strukly.store import build_receipt_store


@pytest.fixture
def store():
    """A Receipt Store backed by a fresh in-memory SQLite database."""
    return build_receipt_store("sqlite://")


@pytest.fixture
def make_receipt():
    """Factory for ReceiptCreate payloads with sensible defaults."""
    def _make(user_id="merchant-1", store_name="Warung Bu Sri", date="2025-03-01",
              items=None, category=None, total_amount=None):
        items = items if items is not None else [ReceiptItem(name="Nasi Goreng", quantity=2, unit_price=15000)]
        if total_amount is None:
            total_amount = sum(item.quantity * item.unit_price for item in items)
        return ReceiptCreate(
            user_id=user_id,
            store_name=store_name,
            date=date,
            total_amount=total_amount,
            items=items,
            category=category,
        )
    return _make
