"""Thin HTTP client that talks to the Motor Coverage Pro REST API."""

from __future__ import annotations

import os
from typing import Any

import requests


class UnderwritingAPIClient:
    """Wrapper around ``requests`` for the underwriting backend.

    Parameters
    ----------
    base_url:
        Root URL of the FastAPI backend (e.g. ``http://localhost:8000``).
        Falls back to the ``API_BASE_URL`` env-var, then ``http://localhost:8000``.
    timeout:
        Request timeout in seconds.
    max_retries:
        Number of attempts on connection / 5xx errors.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: int = 10,
        max_retries: int = 2,
    ) -> None:
        self.base_url = (base_url or os.getenv("API_BASE_URL", "http://localhost:8000")).rstrip("/")
        self.timeout = timeout
        self.max_retries = max_retries

    # -----------------------------------------------------------------
    # Public helpers
    # -----------------------------------------------------------------

    def health_check(self) -> dict[str, Any]:
        return self._get("/api/v1/health")

    def get_catalog(self) -> dict[str, Any]:
        return self._get("/api/v1/catalog")

    def get_dashboard(self) -> dict[str, Any]:
        return self._get("/api/v1/dashboard")

    def calculate_premium(self, policy_input: dict[str, Any]) -> dict[str, Any]:
        """``POST /api/v1/premium/calculate``."""
        return self._post("/api/v1/premium/calculate", json=policy_input)

    def new_form(self) -> dict[str, Any]:
        """``POST /api/v1/policy-form/new`` — blank wizard form starting today."""
        return self._post("/api/v1/policy-form/new", json={})

    def update_form(self, form: dict[str, Any], field: str, value: str) -> dict[str, Any]:
        """``POST /api/v1/policy-form/update`` — apply one edit, get the refreshed form."""
        return self._post(
            "/api/v1/policy-form/update",
            json={"form": form, "field": field, "value": value},
        )

    def search_policies(
        self,
        query: str = "",
        status: str = "all",
        cover_type: str = "all",
    ) -> dict[str, Any]:
        return self._get(
            "/api/v1/policies",
            params={"q": query, "status": status, "cover_type": cover_type},
        )

    def get_policy(self, policy_number: str) -> dict[str, Any]:
        return self._get(f"/api/v1/policies/{policy_number}")

    def create_policy(self, application: dict[str, Any]) -> dict[str, Any]:
        """``POST /api/v1/policies`` — submit a completed wizard."""
        return self._post("/api/v1/policies", json=application)

    # -----------------------------------------------------------------
    # Internal request helpers
    # -----------------------------------------------------------------

    def _get(self, path: str, *, params: dict[str, Any] | None = None) -> dict[str, Any]:
        return self._request("GET", path, params=params)

    def _post(self, path: str, *, json: dict[str, Any]) -> dict[str, Any]:
        return self._request("POST", path, json=json)

    def _request(
        self,
        method: str,
        path: str,
        **kwargs: Any,
    ) -> dict[str, Any]:
        url = f"{self.base_url}{path}"
        last_exc: Exception | None = None

        for attempt in range(1, self.max_retries + 1):
            try:
                resp = requests.request(
                    method,
                    url,
                    timeout=self.timeout,
                    **kwargs,
                )
                resp.raise_for_status()
                return resp.json()
            except requests.ConnectionError as exc:
                last_exc = exc
                if attempt < self.max_retries:
                    continue
            except requests.HTTPError as exc:
                # 4xx means the request itself is wrong; retrying will not help
                if exc.response is not None and exc.response.status_code < 500:
                    error_body = _safe_json(exc.response)
                    raise APIError(
                        f"HTTP {exc.response.status_code}: "
                        f"{_describe(error_body.get('detail', exc.response.text))}",
                        status_code=exc.response.status_code,
                    ) from exc
                last_exc = exc
                if attempt < self.max_retries:
                    continue
            except requests.Timeout as exc:
                last_exc = exc

        raise APIError(
            f"Request to {url} failed after {self.max_retries} attempts: {last_exc}",
        )


# ---------------------------------------------------------------------------
# Custom exception
# ---------------------------------------------------------------------------


class APIError(Exception):
    """Raised when the backend returns an error or is unreachable."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _safe_json(resp: requests.Response) -> dict[str, Any]:
    """Try to parse a response body as JSON, returning ``{}`` on failure."""
    try:
        body = resp.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


def _describe(detail: Any) -> str:
    """Flatten FastAPI's 422 ``detail`` list into one readable line."""
    if isinstance(detail, list):
        parts = []
        for item in detail:
            if isinstance(item, dict):
                loc = ".".join(str(p) for p in item.get("loc", []) if p != "body")
                parts.append(f"{loc}: {item.get('msg', '')}" if loc else str(item.get("msg", "")))
            else:
                parts.append(str(item))
        return "; ".join(parts)
    return str(detail)
