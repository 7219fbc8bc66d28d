"""
Streamlit UI for Strukly: receipt detection, revenue reports and chat.
"""

import os
import sys

import streamlit as st

# Make the package importable when run through `streamlit run`
sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..'))

from strukly.analytics.periods import PERIODS
from strukly.analytics.revenue_service import RevenueService
from strukly.api import StruklyApiClient
from strukly.exceptions import StoreError
from strukly.store import LocalImageStore, ReceiptStore, build_receipt_store
from strukly.ui.components.chatbot import render_chatbot
from strukly.ui.components.dashboard import render_revenue_dashboard
from strukly.ui.components.detector import render_detector
from strukly.ui.components.history import render_history
from strukly.utils.config import get_settings
from strukly.utils.logging_config import logger, setup_logging
from strukly.utils.preferences import SessionPreferences, load_preferences, save_preferences
from strukly.utils.translations import translate

setup_logging("strukly_ui")

PERIOD_LABELS = {"today": "hari_ini", "week": "minggu", "month": "bulan", "year": "tahun"}

THEME_COLORS = {
    "light": {"bg": "#f8fafc", "fg": "#0f172a", "card": "#ffffff", "border": "#e2e8f0"},
    "dark": {"bg": "#0f172a", "fg": "#f8fafc", "card": "rgba(255, 255, 255, 0.03)", "border": "rgba(255, 255, 255, 0.1)"},
}


@st.cache_resource
def get_receipt_store() -> ReceiptStore:
    return build_receipt_store(get_settings().database_url)


@st.cache_resource
def get_image_store() -> LocalImageStore:
    return LocalImageStore(get_settings().image_dir)


@st.cache_resource
def get_api_client() -> StruklyApiClient:
    return StruklyApiClient(get_settings().api_url)


def init_session_state():
    """Initialize session state variables."""
    if 'preferences' not in st.session_state:
        st.session_state.preferences = load_preferences(get_settings().preferences_file)
    if 'period' not in st.session_state:
        st.session_state.period = "month"


def update_preferences(prefs: SessionPreferences):
    st.session_state.preferences = prefs
    save_preferences(get_settings().preferences_file, prefs)
    st.rerun()


def apply_custom_styles(theme: str):
    """Apply theme CSS to the Streamlit app."""
    colors = THEME_COLORS[theme]
    st.markdown(f"""
        <style>
            @import url('https://fonts.googleapis.com/css2?family=Inter:wght@400;600;700&family=Outfit:wght@400;600;800&display=swap');

            .stApp {{
                background-color: {colors['bg']};
                color: {colors['fg']};
                font-family: 'Inter', sans-serif;
            }}

            h1, h2, h3 {{
                font-family: 'Outfit', sans-serif !important;
                color: {colors['fg']} !important;
                font-weight: 800 !important;
            }}

            [data-testid="stMetric"] {{
                background: {colors['card']};
                border: 1px solid {colors['border']};
                padding: 1rem;
                border-radius: 1rem;
            }}

            [data-testid="stChatMessage"] {{
                background: {colors['card']};
                border: 1px solid {colors['border']};
                border-radius: 1.5rem;
            }}

            #MainMenu {{visibility: hidden;}}
            footer {{visibility: hidden;}}
        </style>
    """, unsafe_allow_html=True)


def setup_page_config():
    st.set_page_config(
        page_title="Strukly",
        page_icon="🧾",
        layout="wide",
        initial_sidebar_state="expanded"
    )


def render_sidebar(prefs: SessionPreferences):
    """Theme and language toggles plus the assistant."""
    locale = prefs.locale
    st.sidebar.title(f"🧾 {translate(locale, 'app_title')}")
    st.sidebar.caption(translate(locale, "tagline"))

    dark = st.sidebar.toggle(translate(locale, "theme_dark"), value=prefs.theme == "dark")
    if dark != (prefs.theme == "dark"):
        update_preferences(prefs.toggle_theme())

    language = st.sidebar.radio(
        translate(locale, "language"), options=["id", "en"],
        format_func=lambda code: {"id": "Bahasa Indonesia", "en": "English"}[code],
        index=0 if locale == "id" else 1, horizontal=True,
    )
    if language != locale:
        update_preferences(prefs.toggle_locale())

    st.sidebar.divider()
    with st.sidebar:
        render_chatbot(get_api_client(), locale)


def render_revenue_page(user_id: str, prefs: SessionPreferences):
    locale = prefs.locale
    st.subheader(f"📊 {translate(locale, 'laporan_pendapatan_title')}")

    period = st.radio(
        "period", options=list(PERIODS),
        format_func=lambda p: translate(locale, PERIOD_LABELS[p]),
        index=list(PERIODS).index(st.session_state.period),
        horizontal=True, label_visibility="collapsed",
    )
    st.session_state.period = period

    service = RevenueService(get_receipt_store())
    try:
        stats = service.stats_for_period(user_id, period)
    except StoreError as e:
        logger.error(f"Loading revenue report failed: {e}")
        st.error(translate(locale, "laporan_gagal"))
        if st.button(translate(locale, "coba_lagi")):
            st.rerun()
        return

    render_revenue_dashboard(stats, locale, prefs.theme)


def main():
    """Main Streamlit application."""
    setup_page_config()
    init_session_state()

    prefs: SessionPreferences = st.session_state.preferences
    locale = prefs.locale
    user_id = get_settings().user_id
    apply_custom_styles(prefs.theme)

    render_sidebar(prefs)

    st.title(f"🧾 {translate(locale, 'app_title')}")
    st.caption(translate(locale, "tagline"))

    tab_detect, tab_revenue, tab_receipts = st.tabs([
        translate(locale, "tab_detect"),
        translate(locale, "tab_revenue"),
        translate(locale, "tab_receipts"),
    ])
    with tab_detect:
        render_detector(get_api_client(), get_receipt_store(), get_image_store(), user_id, locale)
    with tab_revenue:
        render_revenue_page(user_id, prefs)
    with tab_receipts:
        render_history(get_receipt_store(), user_id, locale)


if __name__ == "__main__":
    main()
