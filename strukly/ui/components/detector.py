"""
Detect page: upload a receipt photo, review and edit the extracted draft, save it.
"""

from datetime import date

import streamlit as st

from strukly.api import StruklyApiClient
from strukly.exceptions import StoreError
from strukly.models import ReceiptDraft
from strukly.parsers import compute_total
from strukly.store import LocalImageStore, ReceiptStore
from strukly.ui.draft_session import (
    add_draft_item,
    detect_into_draft,
    edit_draft_item,
    remove_draft_item,
    save_draft,
)
from strukly.utils.currency import format_rupiah
from strukly.utils.logging_config import logger
from strukly.utils.translations import translate

SUCCESS_NOTICES = {"struk_berhasil"}


def _widget_key(name: str) -> str:
    # Bumping the revision rebuilds the editor widgets from the new draft
    return f"{name}_{st.session_state.get('draft_rev', 0)}"


def _set_draft(draft: ReceiptDraft, notice=None):
    st.session_state.draft = draft
    st.session_state.draft_rev = st.session_state.get('draft_rev', 0) + 1
    if notice:
        st.session_state.detect_notice = notice
    st.rerun()


def render_notice(locale: str):
    notice = st.session_state.pop('detect_notice', None)
    if not notice:
        return
    if notice in SUCCESS_NOTICES:
        st.success(translate(locale, notice))
    else:
        st.error(translate(locale, notice))


def render_upload(client: StruklyApiClient, locale: str):
    st.markdown(f"### {translate(locale, 'ambil_foto_struk')}")
    uploaded = st.file_uploader(
        translate(locale, "klik_drag"),
        type=["png", "jpg", "jpeg"],
        help=translate(locale, "png_jpg"),
    )
    if uploaded is None:
        return None

    st.image(uploaded, use_container_width=True)
    upload_key = f"{uploaded.name}-{uploaded.size}"
    if st.session_state.get('last_upload') != upload_key:
        st.session_state.last_upload = upload_key
        image_bytes = uploaded.getvalue()
        with st.spinner(translate(locale, "mendeteksi_struk")):
            draft, notice = detect_into_draft(
                st.session_state.draft,
                lambda: client.detect(image_bytes, uploaded.type or "image/jpeg"),
            )
        _set_draft(draft, notice)
    return uploaded


def render_item_row(draft: ReceiptDraft, item, locale: str):
    c_name, c_qty, c_price, c_total, c_del = st.columns([4, 1, 2, 2, 1])
    name = c_name.text_input(translate(locale, "nama_item"), value=item.name, key=_widget_key(f"name_{item.id}"))
    quantity = c_qty.number_input(
        translate(locale, "qty"), step=1, value=item.quantity, key=_widget_key(f"qty_{item.id}")
    )
    unit_price = c_price.number_input(
        translate(locale, "harga"), step=500, value=item.unit_price, key=_widget_key(f"price_{item.id}")
    )
    c_total.markdown(f"<br>{format_rupiah(item.line_total)}", unsafe_allow_html=True)

    if c_del.button("🗑️", key=_widget_key(f"del_{item.id}"), help=translate(locale, "hapus")):
        _set_draft(remove_draft_item(draft, item.id))

    changes = {}
    if name != item.name:
        changes['name'] = name
    if int(quantity) != item.quantity:
        changes['quantity'] = int(quantity)
    if int(unit_price) != item.unit_price:
        changes['unit_price'] = int(unit_price)
    if changes:
        _set_draft(edit_draft_item(draft, item.id, **changes))


def render_draft_editor(
    store: ReceiptStore,
    image_store: LocalImageStore,
    user_id: str,
    uploaded,
    locale: str,
):
    draft: ReceiptDraft = st.session_state.draft
    st.markdown(f"### {translate(locale, 'data_terdeteksi')}")

    merchant = st.text_input(translate(locale, "merchant"), value=draft.merchant, key=_widget_key("draft_merchant"))
    if merchant != draft.merchant:
        draft = draft.model_copy(update={"merchant": merchant})
        st.session_state.draft = draft

    c_date, c_cat = st.columns(2)
    receipt_date = c_date.date_input(translate(locale, "tanggal"), value=date.today(), key="draft_date")
    category = c_cat.text_input(translate(locale, "kategori"), key="draft_category")

    for item in draft.items:
        render_item_row(draft, item, locale)

    if st.button(f"➕ {translate(locale, 'tambah_item')}"):
        _set_draft(add_draft_item(draft))

    st.markdown(f"**{translate(locale, 'total')}** {format_rupiah(compute_total(draft.items))}")

    if st.button(translate(locale, "simpan_database"), type="primary"):
        image_url = None
        if uploaded is not None and draft.items:
            try:
                image_url = image_store.save(user_id, uploaded.name, uploaded.getvalue())
            except StoreError as e:
                logger.error(f"Receipt image upload failed: {e}")
                _set_draft(draft, "simpan_gagal")
                return

        new_draft, notice, receipt = save_draft(
            draft, store, user_id, receipt_date.isoformat(),
            category=category.strip() or None, image_url=image_url,
        )
        if receipt is not None:
            st.session_state.pop('last_upload', None)
        _set_draft(new_draft, notice)


def render_detector(
    client: StruklyApiClient,
    store: ReceiptStore,
    image_store: LocalImageStore,
    user_id: str,
    locale: str,
):
    """Full detect page: notice, upload column and draft column."""
    if 'draft' not in st.session_state:
        st.session_state.draft = ReceiptDraft()

    render_notice(locale)
    left, right = st.columns([2, 3])
    with left:
        uploaded = render_upload(client, locale)
    with right:
        render_draft_editor(store, image_store, user_id, uploaded, locale)
