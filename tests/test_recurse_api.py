"""Unit tests for the Recurse API adapter."""

from unittest.mock import AsyncMock, patch

import httpx
import pytest

from core.models import FailureReason
from core.recurse_api import encode_path_segment, recurse_request

API_BASE = "https://api.test/v1"
AUTH_HEADERS = {"Authorization": "Bearer test-token"}


def _response(status_code, method="GET", path="/profiles", **kwargs):
    """A real httpx.Response bound to a request, so raise_for_status works."""
    return httpx.Response(
        status_code, request=httpx.Request(method, f"{API_BASE}{path}"), **kwargs
    )


def _mock_client(response=None, side_effect=None):
    mock_client = AsyncMock()
    mock_client.request = AsyncMock(return_value=response, side_effect=side_effect)
    mock_client.__aenter__ = AsyncMock(return_value=mock_client)
    mock_client.__aexit__ = AsyncMock(return_value=None)
    return mock_client


class TestRecurseRequest:
    """Test request building and result normalization."""

    @pytest.mark.asyncio
    async def test_get_sends_params_as_query_string(self):
        payload = [{"id": 1, "name": "Ada Lovelace"}]
        mock_client = _mock_client(_response(200, json=payload))

        with patch("httpx.AsyncClient", return_value=mock_client):
            result = await recurse_request("/profiles", "GET", {"query": "ada", "limit": 5})

        assert result.ok
        assert result.data == payload
        mock_client.request.assert_awaited_once_with(
            "GET",
            f"{API_BASE}/profiles",
            headers=AUTH_HEADERS,
            params={"query": "ada", "limit": 5},
        )

    @pytest.mark.asyncio
    async def test_method_defaults_to_get(self):
        mock_client = _mock_client(_response(200, json={"id": 7}))

        with patch("httpx.AsyncClient", return_value=mock_client):
            await recurse_request("/profiles/me")

        args, kwargs = mock_client.request.call_args
        assert args == ("GET", f"{API_BASE}/profiles/me")
        assert kwargs["params"] == {}
        assert "json" not in kwargs

    @pytest.mark.asyncio
    async def test_patch_sends_params_as_json_body(self):
        visit = {"person_id": 3, "date": "2024-05-01", "notes": "pairing"}
        mock_client = _mock_client(_response(200, "PATCH", "/hub_visits/3/2024-05-01", json=visit))

        with patch("httpx.AsyncClient", return_value=mock_client):
            result = await recurse_request("/hub_visits/3/2024-05-01", "PATCH", {"notes": "pairing"})

        assert result.data == visit
        mock_client.request.assert_awaited_once_with(
            "PATCH",
            f"{API_BASE}/hub_visits/3/2024-05-01",
            headers=AUTH_HEADERS,
            json={"notes": "pairing"},
        )

    @pytest.mark.asyncio
    async def test_empty_body_is_success_without_data(self):
        mock_client = _mock_client(_response(204, "DELETE", "/hub_visits/3/2024-05-01"))

        with patch("httpx.AsyncClient", return_value=mock_client):
            result = await recurse_request("/hub_visits/3/2024-05-01", "DELETE")

        assert result.ok
        assert result.data is None
        assert mock_client.request.call_args.kwargs["json"] == {}

    @pytest.mark.asyncio
    async def test_follows_redirects_to_final_response(self):
        seen_paths = []

        def handler(request):
            seen_paths.append(request.url.path)
            if request.url.path == "/v1/profiles/me":
                return httpx.Response(302, headers={"Location": f"{API_BASE}/profiles/7"})
            return httpx.Response(200, json={"id": 7})

        transport = httpx.MockTransport(handler)
        real_client = httpx.AsyncClient

        with patch("httpx.AsyncClient", side_effect=lambda **kwargs: real_client(transport=transport, **kwargs)):
            result = await recurse_request("/profiles/me")

        assert result.ok
        assert result.data == {"id": 7}
        assert seen_paths == ["/v1/profiles/me", "/v1/profiles/7"]

    @pytest.mark.asyncio
    async def test_not_found(self):
        mock_client = _mock_client(_response(404, path="/batches/999", text="Not found"))

        with patch("httpx.AsyncClient", return_value=mock_client):
            result = await recurse_request("/batches/999")

        assert not result.ok
        assert result.data is None
        assert result.failure.reason is FailureReason.NOT_FOUND
        assert result.failure.status_code == 404
        assert result.failure.body == "Not found"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status_code", [401, 403])
    async def test_rejected_token(self, status_code):
        mock_client = _mock_client(_response(status_code, text="Unauthorized"))

        with patch("httpx.AsyncClient", return_value=mock_client):
            result = await recurse_request("/profiles")

        assert result.failure.reason is FailureReason.UNAUTHORIZED
        assert result.failure.status_code == status_code

    @pytest.mark.asyncio
    async def test_server_error(self):
        mock_client = _mock_client(_response(500, text="boom"))

        with patch("httpx.AsyncClient", return_value=mock_client):
            result = await recurse_request("/profiles")

        assert result.failure.reason is FailureReason.HTTP_ERROR
        assert result.failure.status_code == 500

    @pytest.mark.asyncio
    async def test_network_error_is_not_raised(self):
        mock_client = _mock_client(side_effect=httpx.ConnectError("connection refused"))

        with patch("httpx.AsyncClient", return_value=mock_client):
            result = await recurse_request("/profiles")

        assert not result.ok
        assert result.failure.reason is FailureReason.NETWORK
        assert result.failure.status_code is None
        assert "connection refused" in result.failure.message

    @pytest.mark.asyncio
    async def test_non_json_body(self):
        mock_client = _mock_client(_response(200, text="<html>maintenance</html>"))

        with patch("httpx.AsyncClient", return_value=mock_client):
            result = await recurse_request("/profiles")

        assert result.failure.reason is FailureReason.INVALID_RESPONSE
        assert result.failure.body == "<html>maintenance</html>"


class TestEncodePathSegment:
    """Test percent-encoding of caller-supplied path segments."""

    def test_email_with_space(self):
        assert encode_path_segment("a b@example.com") == "a%20b%40example.com"

    def test_slashes_cannot_change_the_path(self):
        assert encode_path_segment("../batches") == "..%2Fbatches"

    def test_iso_date_is_unchanged(self):
        assert encode_path_segment("2024-05-01") == "2024-05-01"

    def test_integers(self):
        assert encode_path_segment(1234) == "1234"

    def test_matches_encode_uri_component_safe_set(self):
        assert encode_path_segment("it's-(ok)!*~_.") == "it's-(ok)!*~_."
