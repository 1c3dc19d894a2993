"""Shared fixtures for the Motor Coverage Pro test suite."""

from __future__ import annotations

import csv
from datetime import date
from pathlib import Path
from typing import Any

import pytest
from omegaconf import OmegaConf

from motor_cover.core.policy_store import PolicyStore
from motor_cover.schemas.policy import PolicyApplication, PolicyFormState
from motor_cover.schemas.premium import PolicyInput

# Fixed "today" so age bands and expiry flags do not drift with the calendar.
TODAY = date(2024, 6, 1)


@pytest.fixture()
def today() -> date:
    return TODAY


# ---------------------------------------------------------------------------
# PolicyInput fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def comprehensive_input() -> PolicyInput:
    """Two-year-old private car worth 1.2M on comprehensive cover."""
    return PolicyInput(
        cover_type="comprehensive",
        current_value="1200000",
        vehicle_use="private",
        vehicle_year=str(TODAY.year - 2),
    )


@pytest.fixture()
def third_party_input() -> PolicyInput:
    """Twelve-year-old commercial vehicle on third-party-only cover."""
    return PolicyInput(
        cover_type="third_party",
        current_value=800000,
        vehicle_use="commercial",
        vehicle_year=TODAY.year - 12,
    )


@pytest.fixture()
def blank_form() -> PolicyFormState:
    return PolicyFormState(policy_from_date="2024-06-01", policy_to_date="2025-06-01")


@pytest.fixture()
def application() -> PolicyApplication:
    return PolicyApplication(
        customer_name="Grace Achieng",
        id_number="30112233",
        phone_number="+254700111222",
        email="grace@example.com",
        address="Kenyatta Avenue, Nairobi",
        vehicle_make="Toyota",
        vehicle_model="Corolla",
        vehicle_year=2022,
        registration_number="kdb 404x",
        current_value=1200000,
        cover_type="comprehensive",
        vehicle_use="private",
        installments="annual",
        policy_from_date=date(2024, 7, 1),
    )


# ---------------------------------------------------------------------------
# Mock policy register
# ---------------------------------------------------------------------------

_POLICY_ROWS = [
    [
        "policy_number", "customer_name", "id_number", "phone_number", "vehicle_make",
        "vehicle_model", "vehicle_year", "registration_number", "cover_type", "premium",
        "sum_insured", "status", "start_date", "end_date", "last_updated",
    ],
    ["POL-2024-001", "John Doe", "12345678", "+254712345678", "Toyota", "Camry", "2020",
     "KCA 123A", "comprehensive", "45000", "1200000", "active",
     "2023-06-20", "2024-06-20", "2023-06-20"],
    ["POL-2024-002", "Mary Smith", "87654321", "+254723456789", "Honda", "Civic", "2019",
     "KBZ 456B", "third-party-fire-theft", "28000", "800000", "pending",
     "2024-02-01", "2025-02-01", "2024-01-25"],
    ["POL-2023-145", "Peter Johnson", "11223344", "+254734567890", "Nissan", "X-Trail", "2021",
     "KCD 789C", "comprehensive", "52000", "1500000", "expired",
     "2023-03-10", "2024-03-10", "2023-03-10"],
    ["POL-2024-003", "Sarah Wilson", "05566778", "+254745678901", "Subaru", "Forester", "2018",
     "KAB 321D", "third_party", "19500", "0", "active",
     "2024-01-20", "2025-01-20", "2024-01-20"],
]


@pytest.fixture()
def policies_csv(tmp_path: Path) -> str:
    """Write a small policy register CSV and return its path."""
    csv_file = tmp_path / "policies.csv"
    with csv_file.open("w", newline="") as f:
        csv.writer(f).writerows(_POLICY_ROWS)
    return str(csv_file)


@pytest.fixture()
def store(policies_csv: str) -> PolicyStore:
    return PolicyStore.from_csv(policies_csv)


# ---------------------------------------------------------------------------
# Hydra config fixture (test overrides)
# ---------------------------------------------------------------------------


@pytest.fixture()
def test_cfg(policies_csv: str) -> Any:
    """Return a minimal OmegaConf DictConfig with test overrides."""
    return OmegaConf.create(
        {
            "server": {
                "host": "127.0.0.1",
                "port": 8000,
                "debug": False,
                "cors_origins": ["http://localhost:8501"],
            },
            "logging": {"level": "WARNING", "colored": False, "format": "pretty", "file": None},
            "data": {"policies_csv": policies_csv},
            "rating": {
                "base_rates": {"comprehensive": 0.035, "third_party_fire_theft": 0.02},
                "third_party_fixed_premium": 15000,
                "use_multipliers": {"private": 1.0, "commercial": 1.3, "psv": 1.5},
                "age_bands": [
                    {"older_than": 10, "multiplier": 1.2},
                    {"older_than": 5, "multiplier": 1.1},
                ],
            },
        }
    )
