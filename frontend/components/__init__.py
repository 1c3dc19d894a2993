"""Streamlit frontend components."""

from components.dashboard import render_dashboard
from components.policy_form import render_policy_form
from components.policy_search import render_policy_search
from components.premium_card import render_premium_card

__all__ = ["render_dashboard", "render_policy_form", "render_policy_search", "render_premium_card"]
