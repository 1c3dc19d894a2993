"""Pydantic schemas for the motor underwriting service."""

from motor_cover.schemas.dashboard import Catalog, DashboardSummary
from motor_cover.schemas.policy import (
    FormFieldChange,
    PolicyApplication,
    PolicyFormState,
    PolicyRecord,
    PolicySearchResult,
    PolicyStatus,
)
from motor_cover.schemas.premium import (
    CoverType,
    PolicyInput,
    PolicyPeriod,
    PremiumResult,
    VehicleUse,
)

__all__ = [
    "Catalog",
    "CoverType",
    "DashboardSummary",
    "FormFieldChange",
    "PolicyApplication",
    "PolicyFormState",
    "PolicyInput",
    "PolicyPeriod",
    "PolicyRecord",
    "PolicySearchResult",
    "PolicyStatus",
    "PremiumResult",
    "VehicleUse",
]
