from __future__ import annotations

import streamlit as st

from campaign_core.n1_1_document import campaign_totals_frame
from campaign_core.n3_4_views import portfolio_summary
from widgets import (
    activate_view,
    fmt_count,
    fmt_money,
    fmt_pct,
    refresh_button,
    show_error,
    show_loading,
)

# =========================================
# PAGE SETUP
# =========================================
st.set_page_config(
    page_title="Home Page",
    layout="wide",
)

st.title("🏠 Portfolio Overview")
st.caption("Totals across every campaign in the current payload")

view = activate_view("home")
refresh_button(view)


# ========================================
# READY
# ========================================
def render_home(document):
    summary = portfolio_summary(document)

    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Campaigns", summary["campaigns"])
    col2.metric("Spend", fmt_money(summary["spend"]))
    col3.metric("Revenue", fmt_money(summary["revenue"]))
    col4.metric("ROAS", f"{summary['roas']:.2f}x")

    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Impressions", fmt_count(summary["impressions"]))
    col2.metric("Clicks", fmt_count(summary["clicks"]))
    col3.metric("CTR", fmt_pct(summary["ctr"]))
    col4.metric("Conversion Rate", fmt_pct(summary["conversion_rate"]))

    st.subheader("📋 Campaign Totals")

    totals = campaign_totals_frame(document)
    if totals.empty:
        st.info("No campaigns in this payload.")
        return

    st.dataframe(
        totals.sort_values("revenue", ascending=False),
        use_container_width=True,
    )


view.render(
    on_loading=show_loading,
    on_ready=render_home,
    on_failed=show_error,
)
