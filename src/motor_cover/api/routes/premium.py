"""Premium calculation and policy-form API routes.

Endpoints
---------
POST /api/v1/premium/calculate
    Price a ``PolicyInput`` and return a ``PremiumResult``.

GET  /api/v1/policy-period?start=YYYY-MM-DD
    One-year policy period starting on ``start``.

POST /api/v1/policy-form/new
    A blank wizard form starting today.

POST /api/v1/policy-form/update
    Apply one field edit to a wizard form and return the refreshed form.
"""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, HTTPException, Query, Request
from loguru import logger

from motor_cover.core.policy_form import apply_field_change, new_policy_form
from motor_cover.core.premium import calculate_premium, derive_end_date
from motor_cover.schemas.policy import FormFieldChange, PolicyFormState
from motor_cover.schemas.premium import PolicyInput, PolicyPeriod, PremiumResult

router = APIRouter()


@router.post(
    "/premium/calculate",
    response_model=PremiumResult,
    summary="Calculate a motor premium",
    description="Never fails on incomplete input; unusable values count as empty.",
)
async def calculate(policy_input: PolicyInput, request: Request) -> PremiumResult:
    result = calculate_premium(policy_input, tables=request.app.state.rating_tables)
    logger.debug(
        "Premium calculated: cover={cover} value={value} → premium={premium}",
        cover=policy_input.cover_type,
        value=policy_input.current_value,
        premium=result.premium,
    )
    return result


@router.get(
    "/policy-period",
    response_model=PolicyPeriod,
    summary="Derive the policy end date",
)
async def policy_period(start: date = Query(..., description="Policy start date")) -> PolicyPeriod:
    return PolicyPeriod(start_date=start, end_date=derive_end_date(start))


@router.post(
    "/policy-form/new",
    response_model=PolicyFormState,
    summary="Start a new policy form",
)
async def new_form() -> PolicyFormState:
    return new_policy_form()


@router.post(
    "/policy-form/update",
    response_model=PolicyFormState,
    summary="Apply one field edit to a policy form",
)
async def update_form(change: FormFieldChange, request: Request) -> PolicyFormState:
    """Set one field and refresh whatever depends on it (premium, end date, model)."""
    try:
        return apply_field_change(
            change.form,
            change.field,
            change.value,
            tables=request.app.state.rating_tables,
        )
    except ValueError as exc:
        logger.warning("Rejected form update on {field}: {err}", field=change.field, err=exc)
        raise HTTPException(status_code=422, detail=str(exc)) from exc
