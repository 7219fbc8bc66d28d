from unittest.mock import MagicMock

import pytest

from strukly.exceptions import ExtractionError, StoreError
from strukly.models import DraftItem, ExtractionResult, ReceiptDraft
from strukly.parsers import compute_total
from strukly.ui.draft_session import (
    add_draft_item,
    detect_into_draft,
    edit_draft_item,
    remove_draft_item,
    save_draft,
)


@pytest.fixture
def draft():
    return ReceiptDraft(merchant="Warung", items=[DraftItem(id="0", name="Kopi", quantity=2, unit_price=5000)])


def test_detect_replaces_draft(draft):
    result = ExtractionResult(merchant="Toko Baru", items=[{"name": "soto ayam", "quantity": 1, "price": 15000}])
    new_draft, notice = detect_into_draft(draft, lambda: result)
    assert notice is None
    assert new_draft.merchant == "Toko Baru"
    assert [i.name for i in new_draft.items] == ["Soto Ayam"]


def test_failed_detection_keeps_items(draft):
    def failing():
        raise ExtractionError("Model response is not valid JSON")

    new_draft, notice = detect_into_draft(draft, failing)
    assert notice == "deteksi_gagal"
    assert new_draft is draft
    assert compute_total(new_draft.items) == 10000


def test_item_actions(draft):
    draft = add_draft_item(draft)
    assert len(draft.items) == 2
    new_id = draft.items[1].id

    draft = edit_draft_item(draft, new_id, name="Teh", unit_price=3000)
    assert compute_total(draft.items) == 13000

    draft = remove_draft_item(draft, "0")
    assert [i.name for i in draft.items] == ["Teh"]


def test_stale_item_ids_are_ignored(draft):
    assert edit_draft_item(draft, "gone", name="x") is draft
    assert remove_draft_item(draft, "gone") is draft


def test_save_draft_success(draft, store):
    new_draft, notice, receipt = save_draft(draft, store, "merchant-1", "2025-03-01", category="Drink")
    assert notice == "struk_berhasil"
    assert new_draft == ReceiptDraft()
    assert receipt.total_amount == 10000
    assert store.get_account("merchant-1").total_revenue == 10000


def test_save_empty_draft_is_rejected(store):
    draft = ReceiptDraft(merchant="Warung")
    new_draft, notice, receipt = save_draft(draft, store, "merchant-1", "2025-03-01")
    assert notice == "struk_kosong"
    assert receipt is None
    assert new_draft is draft


def test_store_failure_keeps_draft(draft):
    failing_store = MagicMock()
    failing_store.create.side_effect = StoreError("database is locked")
    new_draft, notice, receipt = save_draft(draft, failing_store, "merchant-1", "2025-03-01")
    assert notice == "simpan_gagal"
    assert new_draft is draft
    assert receipt is None


@pytest.mark.parametrize("price", ["NaN", "Infinity", "-Infinity", "1e40", float("nan")])
def test_non_finite_or_huge_amounts_keep_draft(draft, price):
    def detect():
        return ExtractionResult.model_validate({"items": [{"name": "a", "quantity": 1, "price": price}]})

    new_draft, notice = detect_into_draft(draft, detect)
    assert notice == "deteksi_gagal"
    assert new_draft is draft
