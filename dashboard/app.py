from __future__ import annotations

import streamlit as st

from campaign_core.n0_1_config import configure_logging

# ===================================================
# APP CONFIG
# ===================================================
st.set_page_config(
    page_title="Campaign Insights Dashboard",
    layout="wide",
    initial_sidebar_state="expanded",
)

configure_logging()

# ===============================================
# HEADER
# ================================================
st.markdown(
    """
    <style>
        .app-title {
            font-size: 26px;
            font-weight: 600;
            margin-bottom: 0;
        }
        .app-subtitle {
            font-size: 14px;
            color: #666;
        }
    </style>
    """,
    unsafe_allow_html=True,
)

st.markdown("<div class='app-title'> 📊 Campaign Insights Dashboard</div>", unsafe_allow_html=True)
st.markdown("<div class='app-subtitle'> Weekly, device, demographic and regional performance</div>", unsafe_allow_html=True)


# ===================================================
# SIDEBAR
# ===================================================
st.sidebar.title("Navigation")

st.sidebar.page_link(
    "pages/0_Home.py",
    label="🏠 Portfolio Overview",
)

st.sidebar.page_link(
    "pages/1_Weekly_View.py",
    label="📈 Weekly Performance",
)

st.sidebar.page_link(
    "pages/2_Device_View.py",
    label="📱 Device View",
)

st.sidebar.page_link(
    "pages/3_Demographic_View.py",
    label="🧠 Demographic View",
)

st.sidebar.page_link(
    "pages/4_Region_View.py",
    label="🗺 Regional Performance",
)

# ===================================================
# FOOTER
# ===================================================
st.sidebar.caption("Data is fetched once per page visit. Use Refresh to reload.")
