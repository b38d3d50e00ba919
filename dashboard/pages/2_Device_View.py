from __future__ import annotations

import streamlit as st

from campaign_core.n1_2_device_synthesis import with_device_breakdown
from campaign_core.n3_4_views import (
    device_campaign_tables,
    device_chart_data,
    device_metrics,
)
from widgets import (
    activate_view,
    bar_chart,
    device_rng,
    metric_cards,
    performance_table,
    refresh_button,
    show_error,
    show_loading,
)

# =========================================
# PAGE SETUP
# =========================================
st.set_page_config(
    page_title="Device View",
    layout="wide",
)

st.title("📱 Device View")
st.caption("Performance metrics by device type")

# older payloads ship without device_breakdown
view = activate_view(
    "device",
    prepare=lambda doc: with_device_breakdown(doc, rng=device_rng()),
)
refresh_button(view)


# =========================================
# READY
# =========================================
def render_device(document):
    st.subheader("📊 Device Performance Metrics")
    cards = device_metrics(document)
    metric_cards(
        {k: cards[k] for k in ("Mobile", "Desktop")},
        titles={
            "clicks": "{label} Clicks",
            "spend": "{label} Spend",
            "revenue": "{label} Revenue",
        },
    )

    st.divider()

    charts = device_chart_data(document)
    col1, col2 = st.columns(2)
    with col1:
        bar_chart("Total Spend by Device", charts["spend"])
    with col2:
        bar_chart("Total Revenue by Device", charts["revenue"])

    st.divider()

    tables = device_campaign_tables(document)
    for device, table in tables.items():
        performance_table(
            f"{device} Campaign Performance",
            table.drop(columns=["device_type"]),
            label_col="campaign_name",
            label="Campaign Name",
        )


view.render(
    on_loading=show_loading,
    on_ready=render_device,
    on_failed=show_error,
)
