"""Custom CSS and small HTML helpers shared by the Streamlit views."""

from __future__ import annotations

import streamlit as st

# ---------------------------------------------------------------------------
# Colour palette
# ---------------------------------------------------------------------------
_BLUE_PRIMARY = "#1e3a5f"
_BLUE_ACCENT = "#2980b9"
_GREEN_SUCCESS = "#27ae60"
_GREEN_BG = "#eafaf1"
_AMBER_WARNING = "#d68910"
_AMBER_BG = "#fef5e7"
_RED_DESTRUCTIVE = "#c0392b"
_RED_BG = "#fdedec"
_PURPLE_PREMIUM = "#8e44ad"
_GRAY_LIGHT = "#f5f6fa"
_GRAY_BORDER = "#dcdde1"
_TEXT_DARK = "#2c3e50"
_TEXT_MUTED = "#7f8c8d"

# Palette keys used by the dashboard stat cards.
STAT_COLOURS: dict[str, str] = {
    "success": _GREEN_SUCCESS,
    "primary": _BLUE_PRIMARY,
    "accent": _BLUE_ACCENT,
    "premium": _PURPLE_PREMIUM,
}

_STATUS_BADGE_CLASS: dict[str, str] = {
    "active": "badge-active",
    "pending": "badge-pending",
    "expired": "badge-expired",
    "cancelled": "badge-muted",
}


def _build_css() -> str:
    """Build CSS with colour variables injected."""
    return f"""
<style>
/* ── Base typography ──────────────────────────────────────────────── */
html, body, [class*="css"] {{
    font-family: 'Segoe UI', 'Roboto', 'Helvetica Neue', sans-serif;
}}

/* ── Header banner ────────────────────────────────────────────────── */
.app-header {{
    background: linear-gradient(135deg, {_BLUE_PRIMARY} 0%, {_BLUE_ACCENT} 100%);
    padding: 1.5rem 2rem;
    border-radius: 10px;
    margin-bottom: 1.5rem;
    color: white;
}}
.app-header h1 {{
    margin: 0;
    font-size: 1.8rem;
    font-weight: 700;
}}
.app-header p {{
    margin: 0.3rem 0 0 0;
    opacity: 0.85;
    font-size: 0.95rem;
}}

/* ── Card container ───────────────────────────────────────────────── */
.card {{
    background: white;
    border: 1px solid {_GRAY_BORDER};
    border-radius: 10px;
    padding: 1.2rem 1.5rem;
    margin: 0.6rem 0;
    box-shadow: 0 2px 8px rgba(0, 0, 0, 0.06);
}}

/* ── Status badges ────────────────────────────────────────────────── */
.badge {{
    display: inline-block;
    font-weight: 700;
    padding: 0.15rem 0.7rem;
    border-radius: 20px;
    font-size: 0.75rem;
    text-transform: uppercase;
    letter-spacing: 0.04em;
}}
.badge-active {{ background: {_GREEN_BG}; color: {_GREEN_SUCCESS}; border: 1px solid {_GREEN_SUCCESS}; }}
.badge-pending {{ background: {_AMBER_BG}; color: {_AMBER_WARNING}; border: 1px solid {_AMBER_WARNING}; }}
.badge-expired {{ background: {_RED_BG}; color: {_RED_DESTRUCTIVE}; border: 1px solid {_RED_DESTRUCTIVE}; }}
.badge-muted {{ background: {_GRAY_LIGHT}; color: {_TEXT_MUTED}; border: 1px solid {_GRAY_BORDER}; }}

/* ── Metric cards ─────────────────────────────────────────────────── */
.metric-card {{
    background: {_GRAY_LIGHT};
    border-radius: 8px;
    padding: 1rem 1.2rem;
    text-align: center;
}}
.metric-card .label {{
    font-size: 0.8rem;
    color: {_TEXT_MUTED};
    text-transform: uppercase;
    letter-spacing: 0.05em;
    margin-bottom: 0.25rem;
}}
.metric-card .value {{
    font-size: 1.4rem;
    font-weight: 700;
    color: {_TEXT_DARK};
}}
.metric-card .change {{
    font-size: 0.75rem;
    color: {_GREEN_SUCCESS};
}}

/* ── Wizard progress ──────────────────────────────────────────────── */
.wizard-step {{
    text-align: center;
    padding: 0.5rem;
    border-bottom: 3px solid {_GRAY_BORDER};
    color: {_TEXT_MUTED};
    font-size: 0.9rem;
}}
.wizard-step.active {{ border-color: {_BLUE_ACCENT}; color: {_BLUE_ACCENT}; font-weight: 700; }}
.wizard-step.done {{ border-color: {_GREEN_SUCCESS}; color: {_GREEN_SUCCESS}; }}

/* ── Sidebar ──────────────────────────────────────────────────────── */
section[data-testid="stSidebar"] {{
    background: {_GRAY_LIGHT};
}}
</style>
"""


_GLOBAL_CSS = _build_css()


def inject_global_styles() -> None:
    """Inject the global CSS into the Streamlit page."""
    st.markdown(_GLOBAL_CSS, unsafe_allow_html=True)


def render_header(title: str, subtitle: str) -> None:
    """Render the branded banner at the top of a view."""
    st.markdown(
        f"""
        <div class="app-header">
            <h1>🚗 {title}</h1>
            <p>{subtitle}</p>
        </div>
        """,
        unsafe_allow_html=True,
    )


def status_badge(status: str) -> str:
    """HTML badge for a policy or activity status."""
    css = _STATUS_BADGE_CLASS.get(status, "badge-muted")
    return f'<span class="badge {css}">{status.upper()}</span>'


def metric_card(label: str, value: str, colour: str | None = None, change: str | None = None) -> str:
    """HTML for one metric tile."""
    style = f' style="color: {colour}"' if colour else ""
    change_html = f'<div class="change">{change}</div>' if change else ""
    return (
        f'<div class="metric-card"><div class="label">{label}</div>'
        f'<div class="value"{style}>{value}</div>{change_html}</div>'
    )


def ksh(amount: float) -> str:
    """Format an amount as Kenyan shillings with thousands separators."""
    return f"KSh {amount:,.0f}"
