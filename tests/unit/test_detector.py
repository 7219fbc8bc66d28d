from datetime import date
from unittest.mock import MagicMock, patch

import pytest

from strukly.exceptions import StoreError
from strukly.models import DraftItem, ReceiptDraft
from strukly.ui.components import detector
from strukly.utils.translations import translate


class SessionState(dict):
    """Dict with attribute access, like st.session_state."""
    __getattr__ = dict.__getitem__
    __setattr__ = dict.__setitem__


@pytest.fixture
def fake_st():
    """A stand-in for the streamlit module where widgets echo their values."""
    st = MagicMock()
    st.session_state = SessionState()
    st.columns.side_effect = lambda spec: [st] * (spec if isinstance(spec, int) else len(spec))
    st.text_input.side_effect = lambda label, value="", **kwargs: value
    st.number_input.side_effect = lambda label, value=0, **kwargs: value
    st.date_input.side_effect = lambda label, value=None, **kwargs: value or date(2025, 3, 1)
    st.button.side_effect = lambda label, **kwargs: label == translate("id", "simpan_database")
    with patch.object(detector, 'st', st):
        yield st


def test_failed_image_upload_skips_save(fake_st):
    draft = ReceiptDraft(merchant="Warung", items=[DraftItem(id="0", name="Kopi", quantity=1, unit_price=5000)])
    fake_st.session_state['draft'] = draft
    image_store = MagicMock()
    image_store.save.side_effect = StoreError("disk full")
    uploaded = MagicMock()
    uploaded.name = "struk.jpg"

    with patch.object(detector, 'save_draft') as save_draft:
        detector.render_draft_editor(MagicMock(), image_store, "merchant-1", uploaded, "id")

    save_draft.assert_not_called()
    assert fake_st.session_state['detect_notice'] == "simpan_gagal"
    assert fake_st.session_state['draft'] is draft
    fake_st.rerun.assert_called_once()
