"""
Shared test fixtures and configuration for the gql_request test suite.
"""

import json
from typing import Any, Callable, Dict, Optional
from unittest.mock import AsyncMock

import pytest
import aioresponses
from yarl import URL

from gql_request import FetchResponse

ENDPOINT = "https://api.example.com/graphql"


@pytest.fixture
def endpoint() -> str:
    """GraphQL endpoint used across tests."""
    return ENDPOINT


@pytest.fixture
def mock_aiohttp():
    """Mock aiohttp responses for testing."""
    with aioresponses.aioresponses() as m:
        yield m


@pytest.fixture
def sent_request() -> Callable[..., Any]:
    """Return the recorded call for a mocked aiohttp request."""

    def _sent(mock: aioresponses.aioresponses, url: str = ENDPOINT, method: str = "POST", index: int = 0):
        return mock.requests[(method, URL(url))][index]

    return _sent


@pytest.fixture
def make_response() -> Callable[..., FetchResponse]:
    """Factory for FetchResponse objects."""

    def _make(
        status: int = 200,
        payload: Any = None,
        text: Optional[str] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> FetchResponse:
        if payload is not None:
            body = json.dumps(payload).encode()
            all_headers = {"Content-Type": "application/json; charset=utf-8"}
        else:
            body = (text or "").encode()
            all_headers = {"Content-Type": "text/plain"}
        all_headers.update(headers or {})
        return FetchResponse(status=status, headers=all_headers, body=body)

    return _make


@pytest.fixture
def fake_fetch(make_response) -> AsyncMock:
    """Transport stub answering every call with a successful response."""
    return AsyncMock(return_value=make_response(payload={"data": {"viewer": {"id": "1"}}}))


@pytest.fixture
def user_query() -> str:
    return "query GetUser($id: ID!) { user(id: $id) { id name } }"


@pytest.fixture
def user_payload() -> Dict[str, Any]:
    return {"data": {"user": {"id": "123", "name": "John Doe"}}}
