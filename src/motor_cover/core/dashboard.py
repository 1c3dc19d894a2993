"""Underwriter dashboard: headline statistics and recent activity."""

from __future__ import annotations

from motor_cover.core.policy_store import PolicyStore
from motor_cover.schemas.dashboard import (
    Activity,
    DashboardSummary,
    PortfolioSummary,
    StatCard,
)

# Month-to-date headline figures shown on the landing page.
HEADLINE_STATS: list[StatCard] = [
    StatCard(title="Active Policies", value="2,847", change="+12%", color="success"),
    StatCard(title="Total Customers", value="1,923", change="+8%", color="primary"),
    StatCard(title="Vehicles Insured", value="3,156", change="+15%", color="accent"),
    StatCard(title="Premium Collected", value="KSh 45.2M", change="+22%", color="premium"),
]

RECENT_ACTIVITIES: list[Activity] = [
    Activity(
        id=1,
        action="New Policy Created",
        customer="John Doe",
        vehicle="Toyota Camry 2020",
        status="pending",
        time="2 hours ago",
    ),
    Activity(
        id=2,
        action="Policy Renewed",
        customer="Mary Smith",
        vehicle="Honda Civic 2019",
        status="active",
        time="4 hours ago",
    ),
    Activity(
        id=3,
        action="Premium Calculated",
        customer="Peter Johnson",
        vehicle="Nissan X-Trail 2021",
        status="pending",
        time="6 hours ago",
    ),
    Activity(
        id=4,
        action="Policy Amended",
        customer="Sarah Wilson",
        vehicle="Subaru Forester 2018",
        status="active",
        time="1 day ago",
    ),
]


def build_dashboard(store: PolicyStore) -> DashboardSummary:
    """Assemble the dashboard, adding a portfolio block computed from *store*."""
    premium, sum_insured = store.active_totals()
    return DashboardSummary(
        stats=list(HEADLINE_STATS),
        recent_activities=list(RECENT_ACTIVITIES),
        portfolio=PortfolioSummary(
            policies_by_status=store.status_counts(),
            active_premium=premium,
            active_sum_insured=sum_insured,
        ),
    )
