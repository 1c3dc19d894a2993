"""Motor premium calculation and policy-period arithmetic.

Both public functions are pure: no I/O, no logging, no shared state.  The
calculator never raises for malformed form input; unusable values degrade to
``0`` or to a neutral multiplier so a half-completed form still shows a
figure.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from motor_cover.schemas.premium import (
    CoverType,
    PolicyInput,
    PremiumResult,
    RatingFactors,
    VehicleUse,
)


class AgeBand(BaseModel):
    """Vehicles strictly older than ``older_than`` years take ``multiplier``."""

    model_config = ConfigDict(frozen=True)

    older_than: int = Field(..., ge=0)
    multiplier: float = Field(..., gt=0)


class RatingTables(BaseModel):
    """Rates and multipliers used by :func:`calculate_premium`."""

    model_config = ConfigDict(frozen=True)

    base_rates: dict[CoverType, float] = Field(
        default_factory=lambda: {
            CoverType.COMPREHENSIVE: 0.035,
            CoverType.THIRD_PARTY_FIRE_THEFT: 0.02,
        }
    )
    # Unset or unknown cover falls back to the comprehensive rate.
    default_base_rate: float = 0.035
    third_party_fixed_premium: float = 15000.0
    use_multipliers: dict[VehicleUse, float] = Field(
        default_factory=lambda: {
            VehicleUse.PRIVATE: 1.0,
            VehicleUse.COMMERCIAL: 1.3,
            VehicleUse.PSV: 1.5,
        }
    )
    age_bands: list[AgeBand] = Field(
        default_factory=lambda: [
            AgeBand(older_than=10, multiplier=1.2),
            AgeBand(older_than=5, multiplier=1.1),
        ]
    )

    @classmethod
    def from_config(cls, cfg: Optional[Mapping[str, Any]]) -> RatingTables:
        """Build tables from the ``rating`` config section; missing keys keep defaults."""
        if not cfg:
            return cls()
        return cls.model_validate(dict(cfg))

    def base_rate(self, cover_type: Optional[CoverType]) -> float:
        if cover_type is CoverType.THIRD_PARTY:
            return self.third_party_fixed_premium
        if cover_type is None:
            return self.default_base_rate
        return self.base_rates.get(cover_type, self.default_base_rate)

    def use_multiplier(self, vehicle_use: Optional[VehicleUse]) -> float:
        if vehicle_use is None:
            return 1.0
        return self.use_multipliers.get(vehicle_use, 1.0)

    def age_multiplier(self, vehicle_age: Optional[int]) -> float:
        if vehicle_age is None:
            return 1.0
        for band in sorted(self.age_bands, key=lambda b: b.older_than, reverse=True):
            if vehicle_age > band.older_than:
                return band.multiplier
        return 1.0


DEFAULT_TABLES = RatingTables()


def vehicle_age(vehicle_year: Optional[int], as_of: Optional[date] = None) -> Optional[int]:
    """Age in whole calendar years, or ``None`` when the year is unknown."""
    if vehicle_year is None:
        return None
    as_of = as_of or date.today()
    return as_of.year - vehicle_year


def calculate_premium(
    policy_input: PolicyInput | Mapping[str, Any],
    tables: Optional[RatingTables] = None,
    as_of: Optional[date] = None,
) -> PremiumResult:
    """Price a motor policy from the four rating fields of the form.

    Parameters
    ----------
    policy_input:
        A :class:`PolicyInput`, or any mapping holding ``cover_type``,
        ``current_value``, ``vehicle_use`` and ``vehicle_year`` in whatever
        state the form has them.  Missing keys are treated as empty.
    tables:
        Rating tables; defaults to the standard tariff.
    as_of:
        Date used to derive the vehicle's age.  Defaults to today.

    Returns
    -------
    PremiumResult
        Premium rounded half-up to whole currency units, and the sum insured
        (``0`` for third-party-only cover).
    """
    if not isinstance(policy_input, PolicyInput):
        policy_input = PolicyInput.model_validate(dict(policy_input))
    tables = tables or DEFAULT_TABLES

    age = vehicle_age(policy_input.vehicle_year, as_of)
    base_rate = tables.base_rate(policy_input.cover_type)
    use_multiplier = tables.use_multiplier(policy_input.vehicle_use)
    age_multiplier = tables.age_multiplier(age)

    loading = _dec(use_multiplier) * _dec(age_multiplier)
    if policy_input.cover_type is CoverType.THIRD_PARTY:
        raw_premium = _dec(base_rate) * loading
        sum_insured = 0.0
    else:
        raw_premium = _dec(policy_input.current_value) * _dec(base_rate) * loading
        sum_insured = policy_input.current_value

    premium = int(raw_premium.quantize(Decimal("1"), rounding=ROUND_HALF_UP))

    return PremiumResult(
        premium=max(premium, 0),
        sum_insured=sum_insured,
        factors=RatingFactors(
            base_rate=base_rate,
            use_multiplier=use_multiplier,
            age_multiplier=age_multiplier,
            vehicle_age=age,
        ),
    )


def derive_end_date(start_date: date) -> date:
    """Return the date one calendar year after *start_date*.

    A 29 February start has no anniversary in the following year and rolls
    over to 1 March.
    """
    try:
        return start_date.replace(year=start_date.year + 1)
    except ValueError:
        return date(start_date.year + 1, 3, 1)


def _dec(value: float) -> Decimal:
    # str() first so 0.035 stays 0.035 instead of its binary expansion
    return Decimal(str(value))
