"""Pydantic models for the policy wizard, policy records and search results."""

from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from motor_cover.schemas.premium import CoverType, VehicleUse, normalise_choice


class PolicyStatus(str, Enum):
    ACTIVE = "active"
    PENDING = "pending"
    EXPIRED = "expired"
    CANCELLED = "cancelled"


class InstallmentPlan(str, Enum):
    ANNUAL = "annual"
    QUARTERLY = "quarterly"
    MONTHLY = "monthly"


FormField = Literal[
    "customer_name",
    "id_number",
    "phone_number",
    "email",
    "kra_pin",
    "address",
    "vehicle_make",
    "vehicle_model",
    "vehicle_year",
    "registration_number",
    "chassis_number",
    "engine_number",
    "current_value",
    "cover_type",
    "installments",
    "policy_from_date",
    "vehicle_use",
]


class PolicyFormState(BaseModel):
    """Everything the four-step wizard has collected so far.

    Values are kept exactly as typed; only ``premium`` and ``sum_insured`` are
    derived, and ``policy_to_date`` is read-only in the UI.
    """

    model_config = ConfigDict(frozen=True)

    # Customer details
    customer_name: str = ""
    id_number: str = ""
    phone_number: str = ""
    email: str = ""
    kra_pin: str = ""
    address: str = ""

    # Vehicle details
    vehicle_make: str = ""
    vehicle_model: str = ""
    vehicle_year: str = ""
    registration_number: str = ""
    chassis_number: str = ""
    engine_number: str = ""
    current_value: str = ""

    # Policy details
    cover_type: str = ""
    installments: str = ""
    policy_from_date: str = ""
    policy_to_date: str = ""
    vehicle_use: str = ""

    # Calculated
    premium: int = 0
    sum_insured: float = 0.0


class FormFieldChange(BaseModel):
    """A single edit made in the wizard."""

    form: PolicyFormState
    field: FormField
    value: str = ""


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


class PolicyApplication(BaseModel):
    """A completed wizard, validated at the API boundary before a policy is issued."""

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "customer_name": "Jane Wanjiku",
                    "id_number": "23456789",
                    "phone_number": "+254711000111",
                    "email": "jane@example.com",
                    "address": "Ngong Road, Nairobi",
                    "vehicle_make": "Toyota",
                    "vehicle_model": "Corolla",
                    "vehicle_year": 2021,
                    "registration_number": "KDA 001X",
                    "current_value": 1200000,
                    "cover_type": "comprehensive",
                    "vehicle_use": "private",
                    "installments": "annual",
                    "policy_from_date": "2026-01-15",
                }
            ]
        }
    )

    customer_name: str = Field(..., min_length=1, description="Customer's full name")
    id_number: str = Field(..., min_length=1, description="National ID number")
    phone_number: str = Field(..., min_length=1, description="Contact phone number")
    email: Optional[str] = Field(default=None, description="Email address (optional)")
    kra_pin: Optional[str] = Field(default=None, description="KRA PIN (optional)")
    address: str = Field(..., min_length=1, description="Physical address")

    vehicle_make: str = Field(..., min_length=1)
    vehicle_model: str = Field(..., min_length=1)
    vehicle_year: int = Field(..., ge=1900, le=2100, description="Year of manufacture")
    registration_number: str = Field(..., min_length=1, description="e.g. KCA 123A")
    chassis_number: Optional[str] = None
    engine_number: Optional[str] = None
    current_value: float = Field(..., gt=0, description="Current market value (KSh)")

    cover_type: CoverType
    vehicle_use: VehicleUse
    installments: InstallmentPlan
    policy_from_date: date

    @field_validator(
        "customer_name",
        "id_number",
        "phone_number",
        "address",
        "vehicle_make",
        "vehicle_model",
        "registration_number",
        mode="before",
    )
    @classmethod
    def _strip(cls, value: Any) -> Any:
        return value.strip() if isinstance(value, str) else value

    @field_validator("email", "kra_pin", "chassis_number", "engine_number", mode="before")
    @classmethod
    def _optional_text(cls, value: Any) -> Any:
        value = _blank_to_none(value)
        return value.strip() if isinstance(value, str) else value

    @field_validator("registration_number")
    @classmethod
    def _upper_registration(cls, value: str) -> str:
        return value.upper()

    @field_validator("cover_type", "vehicle_use", "installments", mode="before")
    @classmethod
    def _normalise(cls, value: Any) -> Any:
        return normalise_choice(value) if value is not None else value


class PolicyRecord(BaseModel):
    """One row of the policy register."""

    policy_number: str = Field(..., description="e.g. POL-2024-001")
    customer_name: str
    id_number: str
    phone_number: str
    vehicle_make: str
    vehicle_model: str
    vehicle_year: str
    registration_number: str
    cover_type: CoverType
    premium: float = Field(..., ge=0)
    sum_insured: float = Field(..., ge=0)
    status: PolicyStatus
    start_date: date
    end_date: date
    last_updated: date
    expiring_soon: bool = Field(
        default=False, description="True when the policy ends within the next 30 days"
    )


class PolicySearchResult(BaseModel):
    """Filtered policies plus the size of the unfiltered register."""

    total: int = Field(..., ge=0)
    matched: int = Field(..., ge=0)
    policies: list[PolicyRecord]
