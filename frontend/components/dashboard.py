"""Underwriter dashboard — headline stats, quick actions and recent activity."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import streamlit as st
from styles import STAT_COLOURS, ksh, metric_card, status_badge

_STATUS_ICONS = {"active": "✅", "pending": "🕒", "expired": "⚠️"}


def render_dashboard(summary: dict[str, Any], navigate: Callable[[str], None]) -> None:
    """Render the dashboard from a ``DashboardSummary`` dict.

    Parameters
    ----------
    summary:
        Body of ``GET /api/v1/dashboard``.
    navigate:
        Callback switching the current view (``"new-policy"``, ``"search-policies"``).
    """
    # ── Stats grid ───────────────────────────────────────────────────
    stats = summary.get("stats", [])
    for col, stat in zip(st.columns(len(stats) or 1), stats):
        with col:
            st.markdown(
                metric_card(
                    stat["title"],
                    stat["value"],
                    colour=STAT_COLOURS.get(stat.get("color", "")),
                    change=f"{stat['change']} from last month",
                ),
                unsafe_allow_html=True,
            )

    st.write("")
    actions_col, activity_col = st.columns([1, 2])

    # ── Quick actions ────────────────────────────────────────────────
    with actions_col:
        st.markdown("#### Quick Actions")
        st.caption("Common underwriter tasks")
        st.button(
            "➕ Create New Policy",
            key="dash_new",
            type="primary",
            use_container_width=True,
            on_click=navigate,
            args=("new-policy",),
        )
        st.button(
            "🔍 Search & Manage Policies",
            key="dash_search",
            use_container_width=True,
            on_click=navigate,
            args=("search-policies",),
        )
        st.button("🔄 Process Renewals", key="dash_renewals", use_container_width=True, disabled=True)
        st.button("📄 Generate Reports", key="dash_reports", use_container_width=True, disabled=True)

        portfolio = summary.get("portfolio")
        if portfolio:
            st.markdown("#### Register")
            for status, count in portfolio["policies_by_status"].items():
                st.caption(f"{status.capitalize()}: {count}")
            st.caption(f"Active premium: {ksh(portfolio['active_premium'])}")

    # ── Recent activities ────────────────────────────────────────────
    with activity_col:
        st.markdown("#### Recent Activities")
        st.caption("Latest underwriting activities")
        for activity in summary.get("recent_activities", []):
            icon = _STATUS_ICONS.get(activity["status"], "🕒")
            st.markdown(
                f"""
                <div class="card">
                    <div style="display:flex; justify-content:space-between; align-items:center;">
                        <div>
                            <strong>{icon} {activity['action']}</strong><br/>
                            <small>{activity['customer']} - {activity['vehicle']}</small>
                        </div>
                        <div style="text-align:right;">
                            {status_badge(activity['status'])}<br/>
                            <small>{activity['time']}</small>
                        </div>
                    </div>
                </div>
                """,
                unsafe_allow_html=True,
            )
