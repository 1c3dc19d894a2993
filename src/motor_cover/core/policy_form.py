"""Field-by-field updates of the policy wizard's form record.

Each edit produces a new :class:`PolicyFormState`.  Edits to the four rating
fields re-price the form; an edit to the start date re-derives the end date.
"""

from __future__ import annotations

from datetime import date
from typing import Optional, get_args

from motor_cover.core.premium import RatingTables, calculate_premium, derive_end_date
from motor_cover.schemas.policy import FormField, PolicyFormState

EDITABLE_FIELDS: frozenset[str] = frozenset(get_args(FormField))
RECALCULATION_FIELDS: frozenset[str] = frozenset(
    {"cover_type", "current_value", "vehicle_use", "vehicle_year"}
)


def new_policy_form(today: Optional[date] = None) -> PolicyFormState:
    """A blank form starting today, with its end date already filled in."""
    start = today or date.today()
    return PolicyFormState(
        policy_from_date=start.isoformat(),
        policy_to_date=derive_end_date(start).isoformat(),
    )


def apply_field_change(
    form: PolicyFormState,
    field: str,
    value: str,
    tables: Optional[RatingTables] = None,
    as_of: Optional[date] = None,
) -> PolicyFormState:
    """Return *form* with *field* set to *value* and dependent fields refreshed.

    Raises
    ------
    ValueError
        If *field* is not a user-editable form field.
    """
    if field not in EDITABLE_FIELDS:
        raise ValueError(f"'{field}' is not an editable policy form field")

    updates: dict[str, object] = {field: value}

    if field == "registration_number":
        updates[field] = value.upper()
    elif field == "vehicle_make":
        updates["vehicle_model"] = ""
    elif field == "policy_from_date":
        updates["policy_to_date"] = _end_date_text(value)

    updated = form.model_copy(update=updates)

    if field in RECALCULATION_FIELDS:
        result = calculate_premium(updated.model_dump(), tables=tables, as_of=as_of)
        updated = updated.model_copy(
            update={"premium": result.premium, "sum_insured": result.sum_insured}
        )

    return updated


def _end_date_text(start_text: str) -> str:
    try:
        start = date.fromisoformat(start_text.strip())
    except ValueError:
        return ""
    return derive_end_date(start).isoformat()
