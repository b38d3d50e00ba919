from __future__ import annotations

import streamlit as st

from campaign_core.n3_4_views import (
    age_group_chart_data,
    demographic_metrics,
    demographic_tables,
)
from widgets import (
    activate_view,
    bar_chart,
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
    page_title="Demographic View",
    layout="wide",
)

st.title("🧠 Demographic View")
st.caption("Performance metrics by gender and age demographics")

view = activate_view("demographic")
refresh_button(view)

PLURAL = {"Male": "Males", "Female": "Females"}


# =========================================
# READY
# =========================================
def render_demographic(document):
    st.subheader("📊 Gender Performance Metrics")
    cards = demographic_metrics(document)
    metric_cards(
        {PLURAL[k]: v for k, v in cards.items()},
        titles={
            "clicks": "Total Clicks by {label}",
            "spend": "Total Spend by {label}",
            "revenue": "Total Revenue by {label}",
        },
    )

    st.divider()

    charts = age_group_chart_data(document)
    col1, col2 = st.columns(2)
    with col1:
        bar_chart("Total Spend by Age Group", charts["spend"])
    with col2:
        bar_chart("Total Revenue by Age Group", charts["revenue"])

    st.divider()

    tables = demographic_tables(document)
    col1, col2 = st.columns(2)
    with col1:
        performance_table(
            "Male Age Groups Performance",
            tables["Male"].drop(columns=["gender"]),
            label_col="age_group",
            label="Age Group",
        )
    with col2:
        performance_table(
            "Female Age Groups Performance",
            tables["Female"].drop(columns=["gender"]),
            label_col="age_group",
            label="Age Group",
        )


view.render(
    on_loading=show_loading,
    on_ready=render_demographic,
    on_failed=show_error,
)
