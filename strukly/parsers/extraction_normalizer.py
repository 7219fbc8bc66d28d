"""
Turns extraction-service output into an editable draft and keeps its total.

Every function here is a pure transform over in-memory lists: nothing is
persisted and no vendor is called. Values are copied verbatim; quantities and
prices are not validated.
"""

import uuid
from types import MappingProxyType
from typing import Iterable, List, Mapping, Optional, Union

from strukly.exceptions import DraftItemNotFoundError, ValidationError
from strukly.models import DraftItem, ExtractionResult, ReceiptCreate, ReceiptDraft, ReceiptItem
from strukly.utils.normalization import normalize_item_key

# Common Indonesian food and drink names, keyed by normalize_item_key().
NAME_CORRECTIONS: Mapping[str, str] = MappingProxyType({
    "nasi_goreng": "Nasi Goreng",
    "mie_goreng": "Mie Goreng",
    "soto_ayam": "Soto Ayam",
    "gado_gado": "Gado-Gado",
    "perkedel": "Perkedel",
    "lumpia": "Lumpia",
    "kopi": "Kopi",
    "teh": "Teh",
    "es": "Es",
    "air": "Air Mineral",
})

NEW_ITEM_NAME = "Item Baru"
UNKNOWN_MERCHANT = "Merchant Tidak Diketahui"

EDITABLE_FIELDS = frozenset({"name", "quantity", "unit_price"})


def correct_item_name(name: str) -> str:
    """
    Applies the static correction table. Unmatched names come back unchanged,
    including their casing and whitespace.
    """
    return NAME_CORRECTIONS.get(normalize_item_key(name), name)


def normalize(raw: Union[ExtractionResult, dict]) -> List[DraftItem]:
    """
    Builds the editable item list from an extraction result.

    Each item gets its sequence index as identifier, a corrected name, and its
    quantity/unit price copied as-is.
    """
    result = raw if isinstance(raw, ExtractionResult) else ExtractionResult.model_validate(raw)
    return [
        DraftItem(
            id=str(index),
            name=correct_item_name(item.name),
            quantity=item.quantity,
            unit_price=item.unit_price,
        )
        for index, item in enumerate(result.items)
    ]


def normalize_draft(raw: Union[ExtractionResult, dict]) -> ReceiptDraft:
    """normalize() plus the merchant name, packaged as a draft."""
    result = raw if isinstance(raw, ExtractionResult) else ExtractionResult.model_validate(raw)
    return ReceiptDraft(merchant=result.merchant, items=normalize(result))


def compute_total(items: Iterable[Union[DraftItem, ReceiptItem]]) -> int:
    """Sum of quantity x unit price. Recomputed on every call, 0 for an empty list."""
    return sum(item.quantity * item.unit_price for item in items)


def add_item(items: List[DraftItem], name: str = NEW_ITEM_NAME) -> List[DraftItem]:
    """Returns a new list with a blank item (quantity 1, price 0) appended."""
    blank = DraftItem(id=str(uuid.uuid4()), name=name, quantity=1, unit_price=0)
    return [*items, blank]


def edit_item(items: List[DraftItem], item_id: str, **changes) -> List[DraftItem]:
    """
    Returns a new list where the item with `item_id` has the given fields
    replaced. Only name, quantity and unit_price can be changed.

    Raises:
        DraftItemNotFoundError: no item has that id.
        ValueError: an unknown field was passed.
    """
    unknown = set(changes) - EDITABLE_FIELDS
    if unknown:
        raise ValueError(f"Cannot edit draft item fields: {sorted(unknown)}")

    found = False
    edited = []
    for item in items:
        if item.id == item_id:
            found = True
            item = item.model_copy(update=changes)
        edited.append(item)

    if not found:
        raise DraftItemNotFoundError(item_id)
    return edited


def delete_item(items: List[DraftItem], item_id: str) -> List[DraftItem]:
    """
    Returns a new list without the item with `item_id`.

    Raises:
        DraftItemNotFoundError: no item has that id.
    """
    remaining = [item for item in items if item.id != item_id]
    if len(remaining) == len(items):
        raise DraftItemNotFoundError(item_id)
    return remaining


def build_receipt(
    draft: ReceiptDraft,
    user_id: str,
    date: str,
    category: Optional[str] = None,
    payment_method: Optional[str] = None,
    image_url: Optional[str] = None,
) -> ReceiptCreate:
    """
    Converts a confirmed draft into a record for the Receipt Store. The total is
    computed here, once, from the current items.

    Raises:
        ValidationError: the draft has no items.
    """
    if not draft.items:
        raise ValidationError("Cannot save a receipt without items")

    return ReceiptCreate(
        user_id=user_id,
        store_name=draft.merchant.strip() or UNKNOWN_MERCHANT,
        date=date,
        total_amount=compute_total(draft.items),
        items=[
            ReceiptItem(name=item.name, quantity=item.quantity, unit_price=item.unit_price)
            for item in draft.items
        ],
        category=category or None,
        payment_method=payment_method or None,
        image_url=image_url,
    )
