"""Tests for the in-memory policy register (search, lookup, creation)."""

from __future__ import annotations

from datetime import date, timedelta

import pandas as pd
import pytest

from motor_cover.core.policy_store import (
    PolicyNotFoundError,
    PolicyStore,
    is_expiring_soon,
)
from motor_cover.schemas.policy import PolicyApplication, PolicyStatus
from motor_cover.schemas.premium import CoverType


def _numbers(result) -> list[str]:
    return [p.policy_number for p in result.policies]


class TestLoading:
    def test_loads_all_rows(self, store: PolicyStore) -> None:
        assert len(store) == 4

    def test_missing_file_raises(self, tmp_path) -> None:
        with pytest.raises(FileNotFoundError, match="not found"):
            PolicyStore.from_csv(str(tmp_path / "nope.csv"))

    def test_missing_columns_rejected(self) -> None:
        with pytest.raises(ValueError, match="missing columns"):
            PolicyStore(pd.DataFrame({"policy_number": ["POL-2024-001"]}))

    def test_identifiers_kept_as_text(self, store: PolicyStore) -> None:
        policy = store.get("POL-2024-003")
        assert policy.id_number == "05566778"
        assert policy.vehicle_year == "2018"

    def test_hyphenated_cover_type_normalised(self, store: PolicyStore) -> None:
        assert store.get("POL-2024-002").cover_type is CoverType.THIRD_PARTY_FIRE_THEFT


class TestSearch:
    def test_empty_term_returns_everything(self, store: PolicyStore) -> None:
        result = store.search("")
        assert result.total == 4
        assert result.matched == 4

    @pytest.mark.parametrize("term", ["john", "JOHN", "John"])
    def test_name_is_case_insensitive(self, store: PolicyStore, term: str) -> None:
        assert _numbers(store.search(term)) == ["POL-2024-001", "POL-2023-145"]

    def test_matches_registration(self, store: PolicyStore) -> None:
        assert _numbers(store.search("kca 123")) == ["POL-2024-001"]

    def test_matches_policy_number(self, store: PolicyStore) -> None:
        assert _numbers(store.search("pol-2023")) == ["POL-2023-145"]

    def test_matches_id_number(self, store: PolicyStore) -> None:
        assert _numbers(store.search("0556")) == ["POL-2024-003"]

    def test_no_match(self, store: PolicyStore) -> None:
        result = store.search("zzz")
        assert result.matched == 0
        assert result.total == 4
        assert result.policies == []

    def test_status_filter(self, store: PolicyStore) -> None:
        assert _numbers(store.search(status="active")) == ["POL-2024-001", "POL-2024-003"]
        assert store.search(status="cancelled").matched == 0

    @pytest.mark.parametrize("cover", ["third-party-fire-theft", "third_party_fire_theft"])
    def test_cover_filter_accepts_both_spellings(self, store: PolicyStore, cover: str) -> None:
        assert _numbers(store.search(cover_type=cover)) == ["POL-2024-002"]

    def test_cover_filter_is_exact(self, store: PolicyStore) -> None:
        # third_party must not also pick up third_party_fire_theft
        assert _numbers(store.search(cover_type="third_party")) == ["POL-2024-003"]

    def test_filters_combine(self, store: PolicyStore) -> None:
        result = store.search("", status="active", cover_type="comprehensive")
        assert _numbers(result) == ["POL-2024-001"]

    def test_all_disables_filters(self, store: PolicyStore) -> None:
        assert store.search("", status="all", cover_type="all").matched == 4

    def test_expiring_soon_flag(self, store: PolicyStore, today: date) -> None:
        flags = {p.policy_number: p.expiring_soon for p in store.search(today=today).policies}
        assert flags == {
            "POL-2024-001": True,
            "POL-2024-002": False,
            "POL-2023-145": False,
            "POL-2024-003": False,
        }


class TestLookup:
    def test_get_existing(self, store: PolicyStore, today: date) -> None:
        policy = store.get("POL-2024-001", today=today)
        assert policy.customer_name == "John Doe"
        assert policy.status is PolicyStatus.ACTIVE
        assert policy.end_date == date(2024, 6, 20)
        assert policy.expiring_soon is True

    def test_get_missing(self, store: PolicyStore) -> None:
        with pytest.raises(PolicyNotFoundError, match="POL-1999-999 not found") as exc_info:
            store.get("POL-1999-999")
        assert exc_info.value.policy_number == "POL-1999-999"

    def test_status_counts(self, store: PolicyStore) -> None:
        assert store.status_counts() == {"active": 2, "pending": 1, "expired": 1, "cancelled": 0}

    def test_active_totals(self, store: PolicyStore) -> None:
        assert store.active_totals() == (64500.0, 1200000.0)


class TestCreate:
    def test_issues_next_number(
        self, store: PolicyStore, application: PolicyApplication, today: date
    ) -> None:
        record = store.create(application, today=today)
        assert record.policy_number == "POL-2024-004"
        assert len(store) == 5

    def test_record_contents(
        self, store: PolicyStore, application: PolicyApplication, today: date
    ) -> None:
        record = store.create(application, today=today)
        assert record.premium == 42000
        assert record.sum_insured == 1200000
        assert record.registration_number == "KDB 404X"
        assert record.status is PolicyStatus.PENDING
        assert record.start_date == date(2024, 7, 1)
        assert record.end_date == date(2025, 7, 1)
        assert record.last_updated == today

    def test_created_policy_is_searchable(
        self, store: PolicyStore, application: PolicyApplication, today: date
    ) -> None:
        store.create(application, today=today)
        assert _numbers(store.search("grace")) == ["POL-2024-004"]
        assert store.get("POL-2024-004").customer_name == "Grace Achieng"
        assert store.status_counts()["pending"] == 2

    def test_sequence_keeps_counting(
        self, store: PolicyStore, application: PolicyApplication, today: date
    ) -> None:
        store.create(application, today=today)
        assert store.create(application, today=today).policy_number == "POL-2024-005"

    def test_new_year_starts_at_one(
        self, store: PolicyStore, application: PolicyApplication, today: date
    ) -> None:
        later = application.model_copy(update={"policy_from_date": date(2026, 1, 5)})
        assert store.create(later, today=today).policy_number == "POL-2026-001"


class TestExpiringSoon:
    @pytest.mark.parametrize(
        "days, expected",
        [(-1, False), (0, False), (1, True), (30, True), (31, False)],
    )
    def test_window(self, today: date, days: int, expected: bool) -> None:
        assert is_expiring_soon(today + timedelta(days=days), today) is expected
