"""
Revenue dashboard component.
"""

from typing import Dict

import pandas as pd
import plotly.express as px
import streamlit as st

from strukly.models import RevenueStats
from strukly.utils.currency import format_percentage, format_rupiah
from strukly.utils.translations import translate


def revenue_frame(series: Dict[str, int], key_label: str) -> pd.DataFrame:
    """Turns a date-keyed revenue map into a frame sorted by key."""
    df = pd.DataFrame(
        [{key_label: key, 'Amount': amount} for key, amount in series.items()],
        columns=[key_label, 'Amount'],
    )
    return df.sort_values(key_label).reset_index(drop=True)


def plot_template(theme: str) -> str:
    return "plotly_dark" if theme == "dark" else "plotly_white"


def render_revenue_metrics(stats: RevenueStats, locale: str):
    """Renders the top-level metrics bar."""
    m1, m2, m3 = st.columns(3)
    m1.metric(translate(locale, "total_pendapatan"), format_rupiah(stats.total_revenue))
    m2.metric(translate(locale, "jumlah_transaksi"), f"{stats.total_receipts:,}".replace(",", "."))
    m3.metric(translate(locale, "rata_rata"), format_rupiah(stats.average_transaction))


def render_revenue_trend(stats: RevenueStats, locale: str, theme: str):
    df = revenue_frame(stats.daily_revenue, 'Date')
    fig = px.line(
        df, x='Date', y='Amount',
        title=translate(locale, "tren_pendapatan"),
        template=plot_template(theme),
        markers=True,
        color_discrete_sequence=['#2563eb'],
    )
    fig.update_layout(plot_bgcolor='rgba(0,0,0,0)', paper_bgcolor='rgba(0,0,0,0)')
    st.plotly_chart(fig, key="revenue_line")


def render_monthly_revenue(stats: RevenueStats, locale: str, theme: str):
    df = revenue_frame(stats.monthly_revenue, 'Month')
    fig = px.bar(
        df, x='Month', y='Amount',
        title=translate(locale, "pendapatan_bulanan"),
        template=plot_template(theme),
        color_discrete_sequence=['#16a34a'],
    )
    fig.update_layout(plot_bgcolor='rgba(0,0,0,0)', paper_bgcolor='rgba(0,0,0,0)')
    st.plotly_chart(fig, key="revenue_bar")


def render_category_breakdown(stats: RevenueStats, locale: str, theme: str):
    if not stats.category_breakdown:
        return
    fig = px.pie(
        values=list(stats.category_breakdown.values()),
        names=list(stats.category_breakdown.keys()),
        title=translate(locale, "kategori"),
        hole=0.4,
        template=plot_template(theme),
    )
    st.plotly_chart(fig, key="revenue_pie")
    for name, amount in sorted(stats.category_breakdown.items(), key=lambda x: x[1], reverse=True):
        st.caption(f"{name}: {format_rupiah(amount)} ({format_percentage(amount, stats.total_revenue)})")


def render_daily_table(stats: RevenueStats, locale: str):
    st.markdown(f"#### {translate(locale, 'laporan_harian')}")
    df = revenue_frame(stats.daily_revenue, 'Date').sort_values('Date', ascending=False)
    df['Amount'] = df['Amount'].map(format_rupiah)
    st.dataframe(df, hide_index=True, use_container_width=True)


def render_revenue_dashboard(stats: RevenueStats, locale: str, theme: str):
    """Orchestrates the full dashboard rendering."""
    render_revenue_metrics(stats, locale)
    if not stats.total_receipts:
        st.info(translate(locale, "belum_ada_data"))
        return

    st.markdown("---")
    c1, c2 = st.columns(2)
    with c1:
        render_revenue_trend(stats, locale, theme)
    with c2:
        render_monthly_revenue(stats, locale, theme)

    st.markdown("---")
    c3, c4 = st.columns(2)
    with c3:
        render_category_breakdown(stats, locale, theme)
    with c4:
        render_daily_table(stats, locale)
