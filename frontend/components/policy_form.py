"""Policy creation wizard — customer, vehicle, coverage & premium, review.

The form record lives in ``st.session_state.policy_form`` and is only ever
changed by the backend: every widget's ``on_change`` sends the edit to
``/policy-form/update`` and stores the refreshed form it returns, so the
premium, sum insured and end date are always the server's figures.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import date
from typing import Any

import streamlit as st
from api_client import APIError, UnderwritingAPIClient
from components.premium_card import render_premium_card
from styles import ksh

STEPS: list[tuple[int, str, str]] = [
    (1, "Customer Details", "👤"),
    (2, "Vehicle Information", "🚗"),
    (3, "Coverage & Premium", "🛡️"),
    (4, "Review & Submit", "📄"),
]
LAST_STEP = len(STEPS)

_SELECT_FIELDS = {"vehicle_make", "vehicle_model", "vehicle_year", "cover_type", "vehicle_use", "installments"}
_DATE_FIELDS = {"policy_from_date"}

# Fields that must be filled in before the policy can be created.
REQUIRED_FIELDS: dict[str, str] = {
    "customer_name": "Full Name",
    "id_number": "ID Number",
    "phone_number": "Phone Number",
    "address": "Physical Address",
    "vehicle_make": "Vehicle Make",
    "vehicle_model": "Vehicle Model",
    "vehicle_year": "Year of Manufacture",
    "registration_number": "Registration Number",
    "current_value": "Current Market Value",
    "cover_type": "Cover Type",
    "vehicle_use": "Vehicle Use",
    "installments": "Premium Payment",
    "policy_from_date": "Policy Start Date",
}


def _key(field: str) -> str:
    return f"pf_{field}"


# ---------------------------------------------------------------------------
# Form state <-> widget state
# ---------------------------------------------------------------------------

def _widget_value(field: str, value: Any) -> Any:
    if field in _SELECT_FIELDS:
        return value or None
    if field in _DATE_FIELDS:
        try:
            return date.fromisoformat(value)
        except (TypeError, ValueError):
            return None
    return value


def _form_value(field: str, raw: Any) -> str:
    if raw is None:
        return ""
    if isinstance(raw, date):
        return raw.isoformat()
    return str(raw)


def _seed_widgets(form: dict[str, Any]) -> None:
    """Copy the form record into widget state before any widget is drawn."""
    for field, value in form.items():
        if field in ("premium", "sum_insured"):
            continue
        st.session_state[_key(field)] = _widget_value(field, value)


def _on_change(client: UnderwritingAPIClient, field: str) -> None:
    value = _form_value(field, st.session_state.get(_key(field)))
    try:
        updated = client.update_form(st.session_state.policy_form, field, value)
    except APIError as exc:
        st.session_state.form_error = str(exc)
        return
    st.session_state.form_error = None
    st.session_state.policy_form = updated


def missing_required(form: dict[str, Any]) -> list[str]:
    """Labels of required fields that are still empty."""
    return [label for field, label in REQUIRED_FIELDS.items() if not str(form.get(field, "")).strip()]


def reset_policy_form(client: UnderwritingAPIClient) -> None:
    st.session_state.policy_form = client.new_form()
    st.session_state.wizard_step = 1
    st.session_state.form_error = None


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def render_policy_form(
    client: UnderwritingAPIClient,
    catalog: dict[str, Any],
    navigate: Callable[[str], None],
) -> None:
    """Render the four-step wizard."""
    if st.session_state.get("policy_form") is None:
        reset_policy_form(client)

    form: dict[str, Any] = st.session_state.policy_form
    step: int = st.session_state.wizard_step
    _seed_widgets(form)

    _render_progress(step)

    if st.session_state.get("form_error"):
        st.error(st.session_state.form_error)

    def text(label: str, field: str, **kwargs: Any) -> None:
        st.text_input(label, key=_key(field), on_change=_on_change, args=(client, field), **kwargs)

    def select(label: str, field: str, options: list, **kwargs: Any) -> None:
        st.selectbox(
            label,
            options=options,
            index=None,
            key=_key(field),
            on_change=_on_change,
            args=(client, field),
            **kwargs,
        )

    cover_labels = {o["value"]: o["label"] for o in catalog["cover_types"]}
    use_labels = {o["value"]: o["label"] for o in catalog["vehicle_uses"]}
    plan_labels = {o["value"]: o["label"] for o in catalog["installment_plans"]}

    if step == 1:
        st.markdown("### 👤 Customer Information")
        st.caption("Enter the customer's personal details")
        col1, col2 = st.columns(2)
        with col1:
            text("Full Name *", "customer_name", placeholder="Enter customer's full name")
            text("Phone Number *", "phone_number", placeholder="Enter phone number")
            text("KRA PIN", "kra_pin", placeholder="Enter KRA PIN")
        with col2:
            text("ID Number *", "id_number", placeholder="Enter ID number")
            text("Email Address", "email", placeholder="Enter email address")
        st.text_area(
            "Physical Address *",
            key=_key("address"),
            on_change=_on_change,
            args=(client, "address"),
            placeholder="Enter customer's physical address",
            height=90,
        )

    elif step == 2:
        st.markdown("### 🚗 Vehicle Information")
        st.caption("Enter the vehicle details and specifications")
        col1, col2, col3 = st.columns(3)
        with col1:
            select("Vehicle Make *", "vehicle_make", catalog["vehicle_makes"],
                   placeholder="Select vehicle make")
        with col2:
            select(
                "Vehicle Model *",
                "vehicle_model",
                catalog["vehicle_models"].get(form["vehicle_make"], []),
                placeholder="Select vehicle model",
                disabled=not form["vehicle_make"],
            )
        with col3:
            select("Year of Manufacture *", "vehicle_year",
                   [str(y) for y in catalog["vehicle_years"]], placeholder="Select year")
        col1, col2 = st.columns(2)
        with col1:
            text("Registration Number *", "registration_number", placeholder="e.g., KCA 123A")
            text("Chassis Number", "chassis_number", placeholder="Enter chassis number")
        with col2:
            text("Current Market Value (KSh) *", "current_value",
                 placeholder="Enter current market value")
            text("Engine Number", "engine_number", placeholder="Enter engine number")

    elif step == 3:
        st.markdown("### 🛡️ Coverage Selection")
        st.caption("Select coverage type and policy duration")
        col1, col2 = st.columns(2)
        with col1:
            select("Cover Type *", "cover_type", list(cover_labels),
                   format_func=lambda v: cover_labels.get(v, v), placeholder="Select cover type")
            select("Premium Payment *", "installments", list(plan_labels),
                   format_func=lambda v: plan_labels.get(v, v), placeholder="Payment option")
            st.date_input(
                "Policy Start Date *",
                key=_key("policy_from_date"),
                on_change=_on_change,
                args=(client, "policy_from_date"),
            )
        with col2:
            select("Vehicle Use *", "vehicle_use", list(use_labels),
                   format_func=lambda v: use_labels.get(v, v), placeholder="Select vehicle use")
            st.text_input("Policy End Date", key=_key("policy_to_date"), disabled=True)

        render_premium_card(form, cover_labels)

    else:
        _render_review(form, cover_labels, use_labels, plan_labels, catalog["document_types"])

    st.divider()
    _render_navigation(client, form, step, navigate)


# ---------------------------------------------------------------------------
# Pieces
# ---------------------------------------------------------------------------

def _render_progress(step: int) -> None:
    for col, (number, title, icon) in zip(st.columns(LAST_STEP), STEPS):
        css = "active" if number == step else "done" if number < step else ""
        with col:
            st.markdown(
                f'<div class="wizard-step {css}">{icon} {title}</div>',
                unsafe_allow_html=True,
            )


def _render_review(
    form: dict[str, Any],
    cover_labels: dict[str, str],
    use_labels: dict[str, str],
    plan_labels: dict[str, str],
    document_types: list[str],
) -> None:
    st.markdown("### 📄 Policy Review")
    st.caption("Review all details before submitting")
    col1, col2 = st.columns(2)

    with col1:
        st.markdown("**Customer Details**")
        st.markdown(
            f"Name: {form['customer_name']}  \n"
            f"ID Number: {form['id_number']}  \n"
            f"Phone: {form['phone_number']}  \n"
            f"Email: {form['email']}  \n"
            f"KRA PIN: {form['kra_pin']}"
        )
        st.markdown("**Vehicle Details**")
        try:
            value = float(form["current_value"] or 0)
        except ValueError:
            value = 0.0
        st.markdown(
            f"Make & Model: {form['vehicle_make']} {form['vehicle_model']}  \n"
            f"Year: {form['vehicle_year']}  \n"
            f"Registration: {form['registration_number']}  \n"
            f"Current Value: {ksh(value)}"
        )

    with col2:
        st.markdown("**Policy Details**")
        st.markdown(
            f"Cover Type: {cover_labels.get(form['cover_type'], '')}  \n"
            f"Vehicle Use: {use_labels.get(form['vehicle_use'], '')}  \n"
            f"Payment: {plan_labels.get(form['installments'], '')}  \n"
            f"Policy Period: {form['policy_from_date']} to {form['policy_to_date']}"
        )
        st.markdown("**Premium Summary**")
        st.markdown(f"Sum Insured: {ksh(form['sum_insured'])}")
        st.markdown(f"#### Annual Premium: {ksh(form['premium'])}")

    st.markdown("**📎 Supporting Documents**")
    for col, doc in zip(st.columns(len(document_types) or 1), document_types):
        with col:
            st.button(doc, key=f"doc_{doc}", disabled=True, use_container_width=True)
    st.caption("Document upload is not available in this demo")


def _render_navigation(
    client: UnderwritingAPIClient,
    form: dict[str, Any],
    step: int,
    navigate: Callable[[str], None],
) -> None:
    left, right = st.columns(2)

    with left:
        if st.button("Previous", key="wiz_prev", disabled=step == 1):
            st.session_state.wizard_step = max(1, step - 1)
            st.rerun()

    with right:
        if step < LAST_STEP:
            if st.button("Next Step", key="wiz_next", type="primary"):
                st.session_state.wizard_step = min(LAST_STEP, step + 1)
                st.rerun()
            return

        if st.button("Create Policy", key="wiz_submit", type="primary"):
            missing = missing_required(form)
            if missing:
                for label in missing:
                    st.error(f"{label} is required.")
                return
            try:
                policy = client.create_policy(form)
            except APIError as exc:
                st.error(f"Could not create policy: {exc}")
                return

            st.session_state.flash = (
                f"Policy {policy['policy_number']} for {policy['customer_name']} has been "
                f"created with premium {ksh(policy['premium'])}"
            )
            reset_policy_form(client)
            navigate("dashboard")
            st.rerun()
