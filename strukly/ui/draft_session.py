"""
Draft-editing actions behind the detect page, kept free of Streamlit so they
can be exercised directly.

Every action takes the current draft and returns (new draft, notice key).
The notice key names a translated message to show, or is None when there is
nothing to show.
"""

from typing import Callable, Optional, Tuple

from pydantic import ValidationError as PydanticValidationError

from strukly.exceptions import DraftItemNotFoundError, ExtractionError, StoreError, ValidationError
from strukly.models import ExtractionResult, Receipt, ReceiptDraft
from strukly.parsers import add_item, build_receipt, delete_item, edit_item, normalize_draft
from strukly.store import ReceiptStore
from strukly.utils.logging_config import logger

Outcome = Tuple[ReceiptDraft, Optional[str]]


def detect_into_draft(draft: ReceiptDraft, detect: Callable[[], ExtractionResult]) -> Outcome:
    """
    Runs an extraction and replaces the draft with its normalized result.

    On failure the current draft is returned unchanged.
    """
    try:
        result = detect()
    except ExtractionError as e:
        logger.error(f"Receipt detection failed: {e.details}")
        return draft, "deteksi_gagal"
    except PydanticValidationError as e:
        logger.error(f"Receipt detection returned unusable values: {e}")
        return draft, "deteksi_gagal"
    return normalize_draft(result), None


def add_draft_item(draft: ReceiptDraft) -> ReceiptDraft:
    return draft.model_copy(update={"items": add_item(draft.items)})


def edit_draft_item(draft: ReceiptDraft, item_id: str, **changes) -> ReceiptDraft:
    try:
        items = edit_item(draft.items, item_id, **changes)
    except DraftItemNotFoundError:
        logger.warning(f"Ignoring edit of removed draft item {item_id}")
        return draft
    return draft.model_copy(update={"items": items})


def remove_draft_item(draft: ReceiptDraft, item_id: str) -> ReceiptDraft:
    try:
        items = delete_item(draft.items, item_id)
    except DraftItemNotFoundError:
        logger.warning(f"Ignoring delete of removed draft item {item_id}")
        return draft
    return draft.model_copy(update={"items": items})


def save_draft(
    draft: ReceiptDraft,
    store: ReceiptStore,
    user_id: str,
    date: str,
    category: Optional[str] = None,
    image_url: Optional[str] = None,
) -> Tuple[ReceiptDraft, Optional[str], Optional[Receipt]]:
    """
    Persists the draft. A successful save starts a fresh empty draft; a failed
    one keeps the draft so the user can retry.
    """
    try:
        receipt_create = build_receipt(draft, user_id, date, category=category, image_url=image_url)
    except ValidationError:
        return draft, "struk_kosong", None

    try:
        receipt = store.create(receipt_create)
    except StoreError as e:
        logger.error(f"Saving receipt failed: {e}")
        return draft, "simpan_gagal", None
    return ReceiptDraft(), "struk_berhasil", receipt
