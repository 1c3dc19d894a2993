"""Premium card — sum insured, annual premium and cover type side by side."""

from __future__ import annotations

from typing import Any

import streamlit as st
from styles import ksh, metric_card


def render_premium_card(form: dict[str, Any], cover_labels: dict[str, str]) -> None:
    """Render the calculated figures held on the wizard form.

    Only shown once cover type, current value and vehicle use are all filled in.
    """
    if not (form.get("cover_type") and form.get("current_value") and form.get("vehicle_use")):
        return

    st.markdown("#### 🧮 Premium Calculation")
    col1, col2, col3 = st.columns(3)

    with col1:
        st.markdown(
            metric_card("Sum Insured", ksh(form.get("sum_insured", 0)), colour="#1e3a5f"),
            unsafe_allow_html=True,
        )
    with col2:
        st.markdown(
            metric_card("Annual Premium", ksh(form.get("premium", 0)), colour="#8e44ad"),
            unsafe_allow_html=True,
        )
    with col3:
        label = cover_labels.get(form["cover_type"], form["cover_type"])
        st.markdown(metric_card("Cover Type", label), unsafe_allow_html=True)
