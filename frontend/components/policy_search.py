"""Policy search — filters, result count and an expandable card per policy."""

from __future__ import annotations

from datetime import date
from typing import Any

import streamlit as st
from api_client import APIError, UnderwritingAPIClient
from styles import ksh, status_badge

STATUS_OPTIONS: dict[str, str] = {
    "all": "All Statuses",
    "active": "Active",
    "pending": "Pending",
    "expired": "Expired",
    "cancelled": "Cancelled",
}

COVER_OPTIONS: dict[str, str] = {
    "all": "All Types",
    "comprehensive": "Comprehensive",
    "third_party": "Third Party",
    "third_party_fire_theft": "Third Party Fire & Theft",
}


def format_date(value: str) -> str:
    """ISO date → ``dd/mm/yyyy``; anything unparseable is shown as-is."""
    try:
        return date.fromisoformat(value).strftime("%d/%m/%Y")
    except (TypeError, ValueError):
        return str(value)


def render_policy_search(client: UnderwritingAPIClient) -> None:
    """Render the search form and the matching policies."""
    st.markdown("### 🔍 Search Policies")
    st.caption("Search by customer name, policy number, registration number, or ID number")

    col_term, col_status, col_cover = st.columns([2, 1, 1])
    with col_term:
        term = st.text_input("Search", key="search_term", placeholder="Enter search term...")
    with col_status:
        status = st.selectbox(
            "Status",
            options=list(STATUS_OPTIONS),
            format_func=STATUS_OPTIONS.get,
            key="search_status",
        )
    with col_cover:
        cover = st.selectbox(
            "Cover Type",
            options=list(COVER_OPTIONS),
            format_func=COVER_OPTIONS.get,
            key="search_cover",
        )

    try:
        result = client.search_policies(term, status=status, cover_type=cover)
    except APIError as exc:
        st.error(f"Search failed: {exc}")
        return

    st.caption(f"Showing {result['matched']} of {result['total']} policies")

    if not result["policies"]:
        st.markdown(
            """
            <div class="card" style="text-align:center; padding:3rem;">
                <h3 style="color:#7f8c8d;">No policies found</h3>
                <p>Try adjusting your search criteria or filters</p>
            </div>
            """,
            unsafe_allow_html=True,
        )
        return

    for policy in result["policies"]:
        _render_policy(policy)


def _render_policy(policy: dict[str, Any]) -> None:
    title = (
        f"{policy['customer_name']} · {policy['policy_number']} · "
        f"{policy['vehicle_make']} {policy['vehicle_model']}"
    )
    with st.expander(title, expanded=False):
        col1, col2, col3, col4 = st.columns(4)

        with col1:
            st.markdown(f"**👤 {policy['customer_name']}**")
            st.caption(f"Policy: {policy['policy_number']}")
            st.caption(f"ID: {policy['id_number']}")
            st.caption(f"Phone: {policy['phone_number']}")

        with col2:
            st.markdown(f"**🚗 {policy['vehicle_make']} {policy['vehicle_model']}**")
            st.caption(f"Year: {policy['vehicle_year']}")
            st.caption(f"Reg: {policy['registration_number']}")
            st.caption(COVER_OPTIONS.get(policy["cover_type"], policy["cover_type"]))

        with col3:
            st.markdown("**💰 Financial Details**")
            st.caption(f"Premium: {ksh(policy['premium'])}")
            st.caption(f"Sum Insured: {ksh(policy['sum_insured'])}")

        with col4:
            badges = status_badge(policy["status"])
            if policy.get("expiring_soon"):
                badges += ' <span class="badge badge-pending">Expiring Soon</span>'
            st.markdown(badges, unsafe_allow_html=True)
            st.caption(f"Start: {format_date(policy['start_date'])}")
            st.caption(f"End: {format_date(policy['end_date'])}")
            st.caption(f"Updated: {format_date(policy['last_updated'])}")
