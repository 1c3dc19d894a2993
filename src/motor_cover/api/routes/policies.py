"""Policy register, dashboard and catalog API routes.

Endpoints
---------
GET  /api/v1/health
GET  /api/v1/catalog
GET  /api/v1/dashboard
GET  /api/v1/policies?q=&status=all&cover_type=all
GET  /api/v1/policies/{policy_number}
POST /api/v1/policies
"""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Query, Request, status
from loguru import logger

from motor_cover.core.catalog import build_catalog
from motor_cover.core.dashboard import build_dashboard
from motor_cover.core.policy_store import ALL, PolicyNotFoundError, PolicyStore
from motor_cover.schemas.dashboard import Catalog, DashboardSummary
from motor_cover.schemas.policy import PolicyApplication, PolicyRecord, PolicySearchResult

router = APIRouter()


def _store(request: Request) -> PolicyStore:
    return request.app.state.policy_store


# ---------------------------------------------------------------------------
# GET /health
# ---------------------------------------------------------------------------

@router.get("/health", summary="Health check")
async def health(request: Request) -> dict:
    """Return a lightweight health-check response."""
    return {"status": "healthy", "policies": len(_store(request))}


# ---------------------------------------------------------------------------
# GET /catalog, /dashboard
# ---------------------------------------------------------------------------

@router.get("/catalog", response_model=Catalog, summary="Reference data for the wizard")
async def catalog() -> Catalog:
    return build_catalog()


@router.get("/dashboard", response_model=DashboardSummary, summary="Underwriter dashboard")
async def dashboard(request: Request) -> DashboardSummary:
    return build_dashboard(_store(request))


# ---------------------------------------------------------------------------
# /policies
# ---------------------------------------------------------------------------

@router.get(
    "/policies",
    response_model=PolicySearchResult,
    summary="Search policies",
    description=(
        "Search by customer name, policy number, registration number or ID number, "
        "optionally filtered by status and cover type."
    ),
)
async def search_policies(
    request: Request,
    q: str = Query(default="", description="Free-text search term"),
    status_filter: str = Query(default=ALL, alias="status"),
    cover_type: str = Query(default=ALL),
) -> PolicySearchResult:
    result = _store(request).search(q, status=status_filter, cover_type=cover_type)
    logger.debug(
        "Policy search q={q!r} status={status} cover={cover} → {n}/{total}",
        q=q,
        status=status_filter,
        cover=cover_type,
        n=result.matched,
        total=result.total,
    )
    return result


@router.get("/policies/{policy_number}", response_model=PolicyRecord, summary="Get one policy")
async def get_policy(policy_number: str, request: Request) -> PolicyRecord:
    try:
        return _store(request).get(policy_number)
    except PolicyNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc


@router.post(
    "/policies",
    response_model=PolicyRecord,
    status_code=status.HTTP_201_CREATED,
    summary="Create a policy from a completed wizard",
)
async def create_policy(application: PolicyApplication, request: Request) -> PolicyRecord:
    """Price the application server-side and add it to the register as pending."""
    logger.info(
        "API: policy application for {name} ({reg})",
        name=application.customer_name,
        reg=application.registration_number,
    )
    return _store(request).create(application, tables=request.app.state.rating_tables)
