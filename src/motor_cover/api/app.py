"""FastAPI application factory.

``create_app`` builds a fully configured ``FastAPI`` instance with:

* CORS middleware (the Streamlit front-end runs on another port)
* Request-logging / exception-handling middleware
* Premium, policy-form, policy, dashboard and catalog routes
* The in-memory policy register and rating tables on ``app.state``
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from omegaconf import OmegaConf

from motor_cover.api.middleware import ExceptionHandlerMiddleware, RequestLoggingMiddleware
from motor_cover.api.routes.policies import router as policies_router
from motor_cover.api.routes.premium import router as premium_router
from motor_cover.core.policy_store import PolicyStore
from motor_cover.core.premium import RatingTables
from motor_cover.logging.setup import setup_logging

if TYPE_CHECKING:
    from omegaconf import DictConfig


# ---------------------------------------------------------------------------
# Lifespan
# ---------------------------------------------------------------------------

@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Startup / shutdown lifecycle for the FastAPI application."""
    logger.info(
        "Application startup complete — {n} policies in register",
        n=len(app.state.policy_store),
    )
    yield
    logger.info("Application shutting down")


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------

def build_rating_tables(cfg: DictConfig) -> RatingTables:
    """Rating tables from the optional ``rating`` config section."""
    rating_cfg = cfg.get("rating")
    if rating_cfg is None:
        return RatingTables()
    return RatingTables.from_config(OmegaConf.to_container(rating_cfg, resolve=True))


def create_app(cfg: DictConfig) -> FastAPI:
    """Build and return a fully configured :class:`FastAPI` application.

    Parameters
    ----------
    cfg:
        The merged Hydra configuration.

    Returns
    -------
    FastAPI
        Ready-to-run application instance.

    Raises
    ------
    FileNotFoundError
        If the policy register CSV configured in ``data.policies_csv`` is missing.
    """
    # ── Logging ──────────────────────────────────────────────────────────
    setup_logging(cfg.logging)

    # ── App ──────────────────────────────────────────────────────────────
    app = FastAPI(
        title="Motor Coverage Pro",
        description="Motor vehicle underwriting: premium calculator, policy wizard and search",
        version="1.0.0",
        lifespan=_lifespan,
    )
    app.state.cfg = cfg

    # ── Domain state ─────────────────────────────────────────────────────
    app.state.rating_tables = build_rating_tables(cfg)
    app.state.policy_store = PolicyStore.from_csv(cfg.data.policies_csv)
    logger.info(
        "Policy register loaded from {path}",
        path=cfg.data.policies_csv,
    )

    # ── CORS ─────────────────────────────────────────────────────────────
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(cfg.server.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ── Custom middleware (outermost = first to run) ─────────────────────
    app.add_middleware(ExceptionHandlerMiddleware)
    app.add_middleware(RequestLoggingMiddleware)

    # ── Routes ───────────────────────────────────────────────────────────
    app.include_router(premium_router, prefix="/api/v1")
    app.include_router(policies_router, prefix="/api/v1")

    return app
