"""
Receipt history: search, browse and delete saved receipts.
"""

import pandas as pd
import streamlit as st

from strukly.exceptions import StoreError
from strukly.store import ReceiptStore
from strukly.utils.currency import format_rupiah
from strukly.utils.logging_config import logger
from strukly.utils.translations import translate

PAGE_SIZE = 20


def render_receipt(store: ReceiptStore, user_id: str, receipt, locale: str):
    title = f"{receipt.date} · {receipt.store_name} · {format_rupiah(receipt.total_amount)}"
    with st.expander(title):
        if receipt.category:
            st.caption(f"{translate(locale, 'kategori')}: {receipt.category}")
        items_df = pd.DataFrame([
            {
                translate(locale, "nama_item"): item.name,
                translate(locale, "qty"): item.quantity,
                translate(locale, "harga"): format_rupiah(item.unit_price),
                "Subtotal": format_rupiah(item.line_total),
            }
            for item in receipt.items
        ])
        st.dataframe(items_df, hide_index=True, use_container_width=True)

        if st.button(translate(locale, "hapus"), key=f"delete_{receipt.id}"):
            try:
                store.delete(user_id, receipt.id)
                st.success(translate(locale, "struk_dihapus"))
                st.rerun()
            except StoreError as e:
                logger.error(f"Deleting receipt {receipt.id} failed: {e}")
                st.error(translate(locale, "hapus_gagal"))


def render_history(store: ReceiptStore, user_id: str, locale: str):
    term = st.text_input(
        translate(locale, "cari_struk"),
        placeholder=translate(locale, "cari_struk"),
        label_visibility="collapsed",
        key="history_search",
    )
    try:
        if term.strip():
            receipts = store.search(user_id, term)
        else:
            receipts, _ = store.list_by_user(user_id, limit=PAGE_SIZE)
    except StoreError as e:
        logger.error(f"Loading receipts failed: {e}")
        st.error(translate(locale, "laporan_gagal"))
        return

    if not receipts:
        st.info(translate(locale, "belum_ada_data"))
        return

    for receipt in receipts:
        render_receipt(store, user_id, receipt, locale)
