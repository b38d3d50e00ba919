from __future__ import annotations

import streamlit as st

from campaign_core.n3_4_views import weekly_chart_data
from widgets import activate_view, line_chart, refresh_button, show_error, show_loading

# =========================================
# PAGE SETUP
# =========================================
st.set_page_config(
    page_title="Weekly Performance",
    layout="wide",
)

st.title("📈 Weekly Performance")
st.caption("Track revenue and spend trends across all campaigns")

view = activate_view("weekly")
refresh_button(view)


# =========================================
# READY
# =========================================
def render_weekly(document):
    chart_df = weekly_chart_data(document)

    line_chart(
        "Revenue vs Spend by Week",
        chart_df,
        lines=[
            {"key": "revenue", "name": "Revenue", "color": "#10B981"},
            {"key": "spend", "name": "Spend", "color": "#EF4444"},
        ],
        money=True,
    )

    line_chart(
        "Impressions and Clicks by Week",
        chart_df,
        lines=[
            {"key": "impressions", "name": "Impressions", "color": "#3B82F6"},
            {"key": "clicks", "name": "Clicks", "color": "#F59E0B"},
        ],
    )

    line_chart(
        "Conversions by Week",
        chart_df,
        lines=[
            {"key": "conversions", "name": "Conversions", "color": "#8B5CF6"},
        ],
    )


view.render(
    on_loading=show_loading,
    on_ready=render_weekly,
    on_failed=show_error,
)
