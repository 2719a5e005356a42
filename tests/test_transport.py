"""
Tests for the aiohttp transport.
"""

from unittest.mock import patch

import aiohttp
import pytest
from multidict import CIMultiDictProxy

from gql_request import FetchResponse, aiohttp_fetch


class TestFetchResponse:
    """Test the fully read response object."""

    @pytest.mark.parametrize("status,ok", [(200, True), (204, True), (299, True), (301, False), (404, False), (500, False)])
    def test_ok(self, status, ok):
        assert FetchResponse(status=status).ok is ok

    @pytest.mark.asyncio
    async def test_text_and_json(self):
        response = FetchResponse(
            status=200,
            headers={"Content-Type": "application/json"},
            body='{"data": {"name": "Zoë"}}'.encode("utf-8"),
        )

        assert await response.text() == '{"data": {"name": "Zoë"}}'
        assert await response.json() == {"data": {"name": "Zoë"}}

    @pytest.mark.asyncio
    async def test_charset_respected(self):
        response = FetchResponse(status=200, body="café".encode("latin-1"), charset="latin-1")

        assert await response.text() == "café"

    @pytest.mark.asyncio
    async def test_invalid_json_raises_value_error(self):
        response = FetchResponse(status=200, body=b"not json")

        with pytest.raises(ValueError):
            await response.json()

    def test_headers_are_case_insensitive(self):
        response = FetchResponse(status=200, headers={"Content-Type": "text/plain"})

        assert isinstance(response.headers, CIMultiDictProxy)
        assert response.headers.get("content-type") == "text/plain"


class TestAiohttpFetch:
    """Test the default aiohttp fetch implementation."""

    @pytest.mark.asyncio
    async def test_post_reads_full_response(self, endpoint, mock_aiohttp, sent_request):
        mock_aiohttp.post(endpoint, status=200, payload={"data": {"a": 1}}, headers={"X-Id": "7"})

        response = await aiohttp_fetch(
            endpoint,
            method="POST",
            headers={"Content-Type": "application/json"},
            body='{"query": "{ a }"}',
        )

        assert response.status == 200
        assert response.headers["X-Id"] == "7"
        assert await response.json() == {"data": {"a": 1}}
        call = sent_request(mock_aiohttp)
        assert call.kwargs["data"] == '{"query": "{ a }"}'

    @pytest.mark.asyncio
    async def test_options_passed_to_aiohttp(self, endpoint, mock_aiohttp, sent_request):
        mock_aiohttp.post(endpoint, payload={"data": {"a": 1}})

        await aiohttp_fetch(endpoint, method="POST", headers={}, body="{}", allow_redirects=False)

        assert sent_request(mock_aiohttp).kwargs["allow_redirects"] is False

    @pytest.mark.asyncio
    async def test_uses_given_session(self, endpoint, mock_aiohttp):
        mock_aiohttp.post(endpoint, payload={"data": {"a": 1}})

        async with aiohttp.ClientSession() as session:
            response = await aiohttp_fetch(endpoint, method="POST", headers={}, body="{}", session=session)
            assert not session.closed

        assert response.ok

    @pytest.mark.asyncio
    async def test_client_errors_propagate(self, endpoint, mock_aiohttp):
        mock_aiohttp.post(endpoint, exception=aiohttp.ServerDisconnectedError())

        with pytest.raises(aiohttp.ServerDisconnectedError):
            await aiohttp_fetch(endpoint, method="POST", headers={}, body="{}")

    @pytest.mark.asyncio
    async def test_owned_session_has_no_total_timeout(self, endpoint, mock_aiohttp):
        mock_aiohttp.post(endpoint, payload={"data": {"a": 1}})

        with patch.object(aiohttp, "ClientSession", wraps=aiohttp.ClientSession) as session_cls:
            await aiohttp_fetch(endpoint, method="POST", headers={}, body="{}")

        timeout = session_cls.call_args.kwargs["timeout"]
        assert timeout.total is None
