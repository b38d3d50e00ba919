from __future__ import annotations

import streamlit as st

from campaign_core.n3_4_views import REGION_CHARTS, regional_bubbles
from widgets import activate_view, bubble_map, refresh_button, show_error, show_loading

# =========================================
# PAGE SETUP
# =========================================
st.set_page_config(
    page_title="Regional Performance",
    layout="wide",
)

st.title("🗺 Regional Performance")
st.caption("Track revenue and spend across different regions")

view = activate_view("region")
refresh_button(view)


# =========================================
# READY
# =========================================
def render_region(document):
    for title, metric, min_radius, max_radius, is_money in REGION_CHARTS:
        points = regional_bubbles(
            document,
            metric,
            min_radius=min_radius,
            max_radius=max_radius,
        )
        bubble_map(title, points, money=is_money)


view.render(
    on_loading=show_loading,
    on_ready=render_region,
    on_failed=show_error,
)
