from __future__ import annotations

from typing import Callable, Dict, List, Optional

import numpy as np
import pandas as pd
import plotly.graph_objects as go
import streamlit as st

from campaign_core.n0_1_config import configure_logging, device_seed
from campaign_core.n3_3_geocode import DEFAULT_COLOR, map_center
from campaign_core.n4_1_view_state import Document, ViewAssembler

# ===================================================
# FORMATTERS
# ===================================================
def fmt_money(value: float) -> str:
    return f"${value:,.0f}"


def fmt_count(value: float) -> str:
    return f"{value:,.0f}"


def fmt_pct(value: float) -> str:
    return f"{value:.2f}%"


# ===================================================
# VIEW LIFECYCLE
# ===================================================
def activate_view(
        name: str,
        prepare: Optional[Callable[[Document], Document]] = None,
) -> ViewAssembler:
    """
    Return this page's assembler, fetching on first activation.

    Switching pages disposes the previous page's assembler so a late
    result can never land on a page that is no longer shown.
    """
    configure_logging()

    active = st.session_state.get("active_view")
    if active is not None and active.name != name:
        active.dispose()
        active = None

    if active is None:
        active = ViewAssembler(name, prepare=prepare)
        st.session_state["active_view"] = active
        with st.spinner("Loading..."):
            active.reload()

    return active


def refresh_button(view: ViewAssembler) -> None:
    _, col_right = st.columns([5, 1])
    with col_right:
        if st.button("🔄 Refresh Data", key=f"refresh_{view.name}"):
            with st.spinner("Refreshing..."):
                view.reload()


def show_loading() -> None:
    st.info("Loading...")


def show_error(message: str) -> None:
    st.error(f"Error: {message}")


def device_rng() -> np.random.Generator:
    return np.random.default_rng(device_seed())


# ===================================================
# WIDGETS (data in, visual out)
# ===================================================
def metric_cards(cards: Dict[str, Dict[str, float]], titles: Dict[str, str]) -> None:
    for label, values in cards.items():
        cols = st.columns(3)
        cols[0].metric(titles["clicks"].format(label=label), fmt_count(values["clicks"]))
        cols[1].metric(titles["spend"].format(label=label), fmt_money(values["spend"]))
        cols[2].metric(titles["revenue"].format(label=label), fmt_money(values["revenue"]))


def line_chart(
        title: str,
        df: pd.DataFrame,
        lines: List[Dict[str, str]],
        money: bool = False,
) -> None:
    st.subheader(title)

    if df.empty:
        st.info("No data available")
        return

    fig = go.Figure()
    for line in lines:
        fig.add_trace(go.Scatter(
            x=df["name"],
            y=df[line["key"]],
            name=line["name"],
            mode="lines+markers",
            line=dict(color=line["color"], width=3),
        ))

    fig.update_layout(
        height=400,
        yaxis_tickprefix="$" if money else "",
        yaxis_tickformat=",.0f",
        hovermode="x unified",
    )
    st.plotly_chart(fig, use_container_width=True)


def bar_chart(title: str, series: pd.DataFrame, money: bool = True) -> None:
    st.subheader(title)

    if series.empty:
        st.info("No data available")
        return

    fig = go.Figure(go.Bar(
        x=series["label"],
        y=series["value"],
        text=[fmt_money(v) if money else fmt_count(v) for v in series["value"]],
        marker_color=DEFAULT_COLOR,
    ))
    fig.update_layout(height=350, yaxis_tickprefix="$" if money else "")
    st.plotly_chart(fig, use_container_width=True)


def performance_table(title: str, df: pd.DataFrame, label_col: str, label: str) -> None:
    st.subheader(title)

    if df.empty:
        st.info("No data available")
        return

    display = df.rename(columns={
        label_col: label,
        "impressions": "Impressions",
        "clicks": "Clicks",
        "conversions": "Conversions",
        "ctr": "CTR (%)",
        "conversion_rate": "Conversion Rate (%)",
    })
    st.dataframe(display, use_container_width=True, height=400)


def bubble_map(title: str, points: pd.DataFrame, money: bool = True) -> None:
    st.subheader(title)

    if points.empty:
        st.info("No data available")
        return

    fmt = fmt_money if money else fmt_count
    hover = [
        f"<b>{p.region}, {p.country}</b><br>Value: {fmt(p.value)}<br>"
        + "<br>".join(
            f"{k}: {fmt_money(v) if k in ('revenue', 'spend') else fmt_count(v)}"
            for k, v in p.additional_data.items()
        )
        for p in points.itertuples()
    ]

    center_lat, center_lon = map_center(points)

    fig = go.Figure(go.Scattergeo(
        lat=points["latitude"],
        lon=points["longitude"],
        text=hover,
        hoverinfo="text",
        mode="markers",
        marker=dict(
            size=points["radius"] * 2,
            sizemode="diameter",
            color=points["color"],
            opacity=0.6,
            line=dict(color="#ffffff", width=2),
        ),
    ))
    fig.update_geos(
        center=dict(lat=center_lat, lon=center_lon),
        projection_scale=6,
        showcountries=True,
        showland=True,
    )
    fig.update_layout(height=500, margin=dict(l=0, r=0, t=0, b=0))
    st.plotly_chart(fig, use_container_width=True)

    st.caption(
        f"🔵 Low · 🔴 High · Min: {fmt(points['value'].min())} | "
        f"Max: {fmt(points['value'].max())}"
    )
