"""Pydantic models for the dashboard and the reference catalog."""

from __future__ import annotations

from pydantic import BaseModel, Field


class StatCard(BaseModel):
    title: str
    value: str
    change: str = Field(..., description="Change versus last month, e.g. +12%")
    color: str = Field(default="primary", description="Palette key used by the UI")


class Activity(BaseModel):
    id: int
    action: str
    customer: str
    vehicle: str
    status: str
    time: str


class PortfolioSummary(BaseModel):
    """Figures computed from the policy register itself."""

    policies_by_status: dict[str, int]
    active_premium: float = Field(..., ge=0)
    active_sum_insured: float = Field(..., ge=0)


class DashboardSummary(BaseModel):
    stats: list[StatCard]
    recent_activities: list[Activity]
    portfolio: PortfolioSummary


class Option(BaseModel):
    """A value/label pair for a select box."""

    value: str
    label: str


class Catalog(BaseModel):
    """Static lookup tables used to populate the wizard's select boxes."""

    vehicle_makes: list[str]
    vehicle_models: dict[str, list[str]]
    vehicle_years: list[int]
    cover_types: list[Option]
    vehicle_uses: list[Option]
    installment_plans: list[Option]
    document_types: list[str]
