"""In-memory policy register backed by a bundled CSV of sample policies."""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Optional

import pandas as pd
from loguru import logger

from motor_cover.core.premium import RatingTables, calculate_premium, derive_end_date
from motor_cover.schemas.policy import (
    PolicyApplication,
    PolicyRecord,
    PolicySearchResult,
    PolicyStatus,
)
from motor_cover.schemas.premium import CoverType, coerce_enum, normalise_choice

ALL = "all"
EXPIRY_WARNING_DAYS = 30

_COLUMNS = [
    "policy_number",
    "customer_name",
    "id_number",
    "phone_number",
    "vehicle_make",
    "vehicle_model",
    "vehicle_year",
    "registration_number",
    "cover_type",
    "premium",
    "sum_insured",
    "status",
    "start_date",
    "end_date",
    "last_updated",
]
_DTYPES = {
    "policy_number": str,
    "customer_name": str,
    "id_number": str,
    "phone_number": str,
    "vehicle_make": str,
    "vehicle_model": str,
    "vehicle_year": str,
    "registration_number": str,
    "cover_type": str,
    "status": str,
    "premium": float,
    "sum_insured": float,
}
_DATE_COLUMNS = ["start_date", "end_date", "last_updated"]


class PolicyNotFoundError(LookupError):
    """Raised when a policy number is not in the register."""

    def __init__(self, policy_number: str) -> None:
        super().__init__(f"Policy {policy_number} not found")
        self.policy_number = policy_number


def is_expiring_soon(end_date: date, today: Optional[date] = None) -> bool:
    """True when *end_date* falls within the next 30 days (and is not today or past)."""
    days_left = (end_date - (today or date.today())).days
    return 0 < days_left <= EXPIRY_WARNING_DAYS


class PolicyStore:
    """Holds the policy register as a DataFrame for the life of the process.

    Parameters
    ----------
    frame:
        Policies, one row per policy, with the columns in ``_COLUMNS``.
    """

    def __init__(self, frame: pd.DataFrame) -> None:
        missing = [c for c in _COLUMNS if c not in frame.columns]
        if missing:
            raise ValueError(f"Policy data is missing columns: {', '.join(missing)}")
        self._df = frame[_COLUMNS].reset_index(drop=True)

    @classmethod
    def from_csv(cls, csv_path: str) -> PolicyStore:
        """Load the register from *csv_path*."""
        csv_file = Path(csv_path)
        if not csv_file.exists():
            msg = f"Policy data file not found: {csv_path}"
            logger.error(msg)
            raise FileNotFoundError(msg)

        df = pd.read_csv(csv_file, dtype=_DTYPES, keep_default_na=False)
        for column in _DATE_COLUMNS:
            df[column] = pd.to_datetime(df[column]).dt.date
        df["cover_type"] = df["cover_type"].map(normalise_choice)

        logger.debug("Loaded policy register — {n} policies", n=len(df))
        return cls(df)

    def __len__(self) -> int:
        return len(self._df)

    # -----------------------------------------------------------------
    # Queries
    # -----------------------------------------------------------------

    def search(
        self,
        term: str = "",
        status: str = ALL,
        cover_type: str = ALL,
        today: Optional[date] = None,
    ) -> PolicySearchResult:
        """Filter the register by free-text *term*, *status* and *cover_type*.

        The term matches customer name, policy number and registration number
        case-insensitively, and ID number as an exact substring.  ``"all"``
        disables the corresponding filter.
        """
        df = self._df
        needle = term.lower()

        mask = (
            df["customer_name"].str.lower().str.contains(needle, regex=False)
            | df["policy_number"].str.lower().str.contains(needle, regex=False)
            | df["registration_number"].str.lower().str.contains(needle, regex=False)
            | df["id_number"].str.contains(term, regex=False)
        )
        if status != ALL:
            mask &= df["status"] == status
        if cover_type != ALL:
            wanted = coerce_enum(CoverType, cover_type)
            mask &= df["cover_type"] == (wanted.value if wanted else cover_type)

        policies = [self._to_record(row, today) for row in df[mask].to_dict("records")]
        return PolicySearchResult(total=len(df), matched=len(policies), policies=policies)

    def get(self, policy_number: str, today: Optional[date] = None) -> PolicyRecord:
        rows = self._df[self._df["policy_number"] == policy_number]
        if rows.empty:
            raise PolicyNotFoundError(policy_number)
        return self._to_record(rows.iloc[0].to_dict(), today)

    def status_counts(self) -> dict[str, int]:
        counts = self._df["status"].value_counts()
        return {s.value: int(counts.get(s.value, 0)) for s in PolicyStatus}

    def active_totals(self) -> tuple[float, float]:
        """Total premium and sum insured across active policies."""
        active = self._df[self._df["status"] == PolicyStatus.ACTIVE.value]
        return float(active["premium"].sum()), float(active["sum_insured"].sum())

    # -----------------------------------------------------------------
    # Commands
    # -----------------------------------------------------------------

    def create(
        self,
        application: PolicyApplication,
        tables: Optional[RatingTables] = None,
        today: Optional[date] = None,
    ) -> PolicyRecord:
        """Price *application*, issue a policy number and add it as ``pending``."""
        today = today or date.today()
        start = application.policy_from_date
        priced = calculate_premium(
            {
                "cover_type": application.cover_type,
                "current_value": application.current_value,
                "vehicle_use": application.vehicle_use,
                "vehicle_year": application.vehicle_year,
            },
            tables=tables,
            as_of=today,
        )

        row = {
            "policy_number": self._next_policy_number(start.year),
            "customer_name": application.customer_name,
            "id_number": application.id_number,
            "phone_number": application.phone_number,
            "vehicle_make": application.vehicle_make,
            "vehicle_model": application.vehicle_model,
            "vehicle_year": str(application.vehicle_year),
            "registration_number": application.registration_number,
            "cover_type": application.cover_type.value,
            "premium": float(priced.premium),
            "sum_insured": priced.sum_insured,
            "status": PolicyStatus.PENDING.value,
            "start_date": start,
            "end_date": derive_end_date(start),
            "last_updated": today,
        }
        self._df = pd.concat([self._df, pd.DataFrame([row])], ignore_index=True)

        logger.info(
            "Issued policy {num} for {name} — premium={premium}",
            num=row["policy_number"],
            name=row["customer_name"],
            premium=priced.premium,
        )
        return self._to_record(row, today)

    # -----------------------------------------------------------------
    # Helpers
    # -----------------------------------------------------------------

    def _next_policy_number(self, year: int) -> str:
        prefix = f"POL-{year}-"
        numbers = self._df["policy_number"]
        sequences = numbers[numbers.str.startswith(prefix)].str[len(prefix):]
        used = pd.to_numeric(sequences, errors="coerce").dropna()
        next_seq = int(used.max()) + 1 if not used.empty else 1
        return f"{prefix}{next_seq:03d}"

    @staticmethod
    def _to_record(row: dict, today: Optional[date]) -> PolicyRecord:
        record = PolicyRecord(**row)
        return record.model_copy(
            update={"expiring_soon": is_expiring_soon(record.end_date, today)}
        )
