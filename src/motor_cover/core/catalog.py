"""Static reference data behind the wizard's select boxes."""

from __future__ import annotations

from datetime import date
from typing import Optional

from motor_cover.schemas.dashboard import Catalog, Option
from motor_cover.schemas.policy import InstallmentPlan
from motor_cover.schemas.premium import CoverType, VehicleUse

VEHICLE_MAKES: list[str] = [
    "Toyota", "Honda", "Nissan", "Subaru", "Mercedes-Benz", "BMW", "Audi",
    "Volkswagen", "Ford", "Chevrolet", "Hyundai", "Kia", "Mazda", "Mitsubishi",
]

VEHICLE_MODELS: dict[str, list[str]] = {
    "Toyota": ["Camry", "Corolla", "RAV4", "Prado", "Hilux", "Vitz", "Harrier", "Fielder"],
    "Honda": ["Civic", "Accord", "CR-V", "HR-V", "Pilot", "Fit", "Insight"],
    "Nissan": ["Altima", "X-Trail", "Sentra", "Patrol", "Note", "Tiida", "Juke"],
    "Subaru": ["Outback", "Forester", "Impreza", "Legacy", "XV", "Tribeca"],
    "Mercedes-Benz": ["C-Class", "E-Class", "S-Class", "GLA", "GLE", "GLS"],
    "BMW": ["3 Series", "5 Series", "X3", "X5", "X1", "7 Series"],
}

COVER_TYPE_LABELS: dict[CoverType, str] = {
    CoverType.COMPREHENSIVE: "Comprehensive Cover",
    CoverType.THIRD_PARTY: "Third Party Only",
    CoverType.THIRD_PARTY_FIRE_THEFT: "Third Party Fire & Theft",
}

VEHICLE_USE_LABELS: dict[VehicleUse, str] = {
    VehicleUse.PRIVATE: "Private Use",
    VehicleUse.COMMERCIAL: "Commercial Use",
    VehicleUse.PSV: "Public Service Vehicle (PSV)",
}

INSTALLMENT_LABELS: dict[InstallmentPlan, str] = {
    InstallmentPlan.ANNUAL: "Annual Payment",
    InstallmentPlan.QUARTERLY: "Quarterly Installments",
    InstallmentPlan.MONTHLY: "Monthly Installments",
}

DOCUMENT_TYPES: list[str] = ["Copy of ID", "Vehicle Logbook", "Valuation Report", "Previous Policy"]

YEARS_OFFERED = 25


def vehicle_models(make: str) -> list[str]:
    """Models known for *make*; an unknown make has none."""
    return list(VEHICLE_MODELS.get(make, []))


def vehicle_years(today: Optional[date] = None) -> list[int]:
    """Manufacture years offered in the wizard, newest first."""
    current = (today or date.today()).year
    return [current - offset for offset in range(YEARS_OFFERED)]


def build_catalog(today: Optional[date] = None) -> Catalog:
    return Catalog(
        vehicle_makes=list(VEHICLE_MAKES),
        vehicle_models={make: vehicle_models(make) for make in VEHICLE_MAKES},
        vehicle_years=vehicle_years(today),
        cover_types=[Option(value=k.value, label=v) for k, v in COVER_TYPE_LABELS.items()],
        vehicle_uses=[Option(value=k.value, label=v) for k, v in VEHICLE_USE_LABELS.items()],
        installment_plans=[Option(value=k.value, label=v) for k, v in INSTALLMENT_LABELS.items()],
        document_types=list(DOCUMENT_TYPES),
    )
