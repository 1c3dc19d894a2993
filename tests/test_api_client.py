"""Tests for the Streamlit frontend's HTTP client (``requests`` is mocked)."""

from __future__ import annotations

import json
from typing import Any
from unittest.mock import MagicMock, patch

import pytest
import requests
from api_client import APIError, UnderwritingAPIClient, _describe, _safe_json


def _response(status_code: int, body: Any) -> requests.Response:
    resp = requests.Response()
    resp.status_code = status_code
    resp._content = json.dumps(body).encode()
    resp.url = "http://test/api"
    return resp


@pytest.fixture()
def api() -> UnderwritingAPIClient:
    return UnderwritingAPIClient(base_url="http://test/", max_retries=2)


class TestRequests:
    def test_base_url_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("API_BASE_URL", "http://backend:9000/")
        assert UnderwritingAPIClient().base_url == "http://backend:9000"

    def test_search_sends_filters(self, api: UnderwritingAPIClient) -> None:
        with patch("api_client.requests.request", return_value=_response(200, {"total": 0})) as req:
            api.search_policies("john", status="active", cover_type="all")
        req.assert_called_once_with(
            "GET",
            "http://test/api/v1/policies",
            timeout=10,
            params={"q": "john", "status": "active", "cover_type": "all"},
        )

    def test_update_form_payload(self, api: UnderwritingAPIClient) -> None:
        with patch("api_client.requests.request", return_value=_response(200, {})) as req:
            api.update_form({"cover_type": ""}, "cover_type", "comprehensive")
        _, kwargs = req.call_args
        assert kwargs["json"] == {
            "form": {"cover_type": ""},
            "field": "cover_type",
            "value": "comprehensive",
        }


class TestErrors:
    def test_client_error_not_retried(self, api: UnderwritingAPIClient) -> None:
        body = {"detail": "Policy POL-1 not found"}
        with patch("api_client.requests.request", return_value=_response(404, body)) as req:
            with pytest.raises(APIError, match="HTTP 404: Policy POL-1 not found") as exc_info:
                api.get_policy("POL-1")
        assert req.call_count == 1
        assert exc_info.value.status_code == 404

    def test_server_error_retried(self, api: UnderwritingAPIClient) -> None:
        with patch(
            "api_client.requests.request", return_value=_response(500, {"detail": "x"})
        ) as req:
            with pytest.raises(APIError, match="after 2 attempts"):
                api.health_check()
        assert req.call_count == 2

    def test_connection_error_then_success(self, api: UnderwritingAPIClient) -> None:
        ok = _response(200, {"status": "healthy"})
        side_effect = [requests.ConnectionError("refused"), ok]
        with patch("api_client.requests.request", side_effect=side_effect) as req:
            assert api.health_check() == {"status": "healthy"}
        assert req.call_count == 2

    def test_validation_detail_flattened(self, api: UnderwritingAPIClient) -> None:
        body = {
            "detail": [
                {"loc": ["body", "customer_name"], "msg": "Field required"},
                {"loc": ["body", "current_value"], "msg": "Input should be greater than 0"},
            ]
        }
        with patch("api_client.requests.request", return_value=_response(422, body)):
            with pytest.raises(APIError) as exc_info:
                api.create_policy({})
        assert str(exc_info.value) == (
            "HTTP 422: customer_name: Field required; "
            "current_value: Input should be greater than 0"
        )


class TestDescribe:
    def test_plain_string(self) -> None:
        assert _describe("boom") == "boom"

    def test_item_without_location(self) -> None:
        assert _describe([{"loc": ["body"], "msg": "bad"}, "odd"]) == "bad; odd"

    def test_non_json_body(self) -> None:
        resp = MagicMock()
        resp.json.side_effect = ValueError
        assert _safe_json(resp) == {}
