"""Pydantic models for the premium calculator's input and output.

``PolicyInput`` is deliberately lenient: every field has a ``before``
validator that turns whatever the form currently holds into either a typed
value or ``None``.  Constructing one from a half-filled form never raises.
"""

from __future__ import annotations

import math
import re
from datetime import date
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Leading numeric prefix, read the way a browser's parseFloat / parseInt would.
_FLOAT_PREFIX = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
_INT_PREFIX = re.compile(r"^\s*([+-]?\d+)")


class CoverType(str, Enum):
    """Insurance product variant."""

    COMPREHENSIVE = "comprehensive"
    THIRD_PARTY = "third_party"
    THIRD_PARTY_FIRE_THEFT = "third_party_fire_theft"


class VehicleUse(str, Enum):
    """Risk classification of how the vehicle is used."""

    PRIVATE = "private"
    COMMERCIAL = "commercial"
    PSV = "psv"


def normalise_choice(value: Any) -> str:
    """Trim, lower-case and read hyphens as underscores (``third-party``)."""
    if isinstance(value, Enum):
        value = value.value
    return str(value).strip().lower().replace("-", "_")


def coerce_enum(enum_cls: type[Enum], value: Any) -> Optional[Enum]:
    """Return the matching member of *enum_cls*, or ``None`` if nothing matches."""
    if value is None:
        return None
    try:
        return enum_cls(normalise_choice(value))
    except ValueError:
        return None


def parse_amount(value: Any) -> float:
    """Parse a monetary amount; anything unusable becomes ``0.0``."""
    if isinstance(value, bool) or value is None:
        return 0.0
    if isinstance(value, (int, float)):
        try:
            amount = float(value)
        except OverflowError:
            return 0.0
    else:
        match = _FLOAT_PREFIX.match(str(value))
        if match is None:
            return 0.0
        amount = float(match.group(1))
    if not math.isfinite(amount) or amount < 0:
        return 0.0
    return amount


def parse_year(value: Any) -> Optional[int]:
    """Parse a calendar year; non-numeric input yields ``None``."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    match = _INT_PREFIX.match(str(value))
    return int(match.group(1)) if match else None


class PolicyInput(BaseModel):
    """The four form fields the premium calculator reads."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        json_schema_extra={
            "examples": [
                {
                    "cover_type": "comprehensive",
                    "current_value": "1200000",
                    "vehicle_use": "private",
                    "vehicle_year": "2022",
                }
            ]
        },
    )

    cover_type: Optional[CoverType] = Field(
        default=None, description="Cover type; unrecognised values are treated as unset"
    )
    current_value: float = Field(
        default=0.0, ge=0, description="Current market value of the vehicle"
    )
    vehicle_use: Optional[VehicleUse] = Field(
        default=None, description="Vehicle use; unrecognised values are treated as unset"
    )
    vehicle_year: Optional[int] = Field(
        default=None, description="Year of manufacture; non-numeric values are treated as unset"
    )

    @field_validator("cover_type", mode="before")
    @classmethod
    def _lenient_cover_type(cls, value: Any) -> Optional[CoverType]:
        return coerce_enum(CoverType, value)

    @field_validator("vehicle_use", mode="before")
    @classmethod
    def _lenient_vehicle_use(cls, value: Any) -> Optional[VehicleUse]:
        return coerce_enum(VehicleUse, value)

    @field_validator("current_value", mode="before")
    @classmethod
    def _lenient_current_value(cls, value: Any) -> float:
        return parse_amount(value)

    @field_validator("vehicle_year", mode="before")
    @classmethod
    def _lenient_vehicle_year(cls, value: Any) -> Optional[int]:
        return parse_year(value)


class RatingFactors(BaseModel):
    """The rate and multipliers that were actually applied."""

    model_config = ConfigDict(frozen=True)

    base_rate: float = Field(..., description="Percentage rate, or the fixed amount for third party")
    use_multiplier: float
    age_multiplier: float
    vehicle_age: Optional[int] = Field(
        default=None, description="Vehicle age in years, or null when the year was unusable"
    )


class PremiumResult(BaseModel):
    """Premium and sum insured for one set of form values."""

    model_config = ConfigDict(frozen=True)

    premium: int = Field(..., ge=0, description="Annual premium, whole currency units")
    sum_insured: float = Field(..., ge=0, description="Amount the policy indemnifies")
    factors: RatingFactors


class PolicyPeriod(BaseModel):
    """Start and derived end date of a one-year policy."""

    start_date: date
    end_date: date
