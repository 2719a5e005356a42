"""
HTTP transport for gql_request.

The client talks to the network through a *fetch* coroutine: it takes a URL
plus method, headers, body and pass-through options, and returns a
:class:`FetchResponse`. :func:`aiohttp_fetch` is the default implementation;
any coroutine with the same signature can replace it.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Awaitable, Dict, Mapping, Optional, Protocol

import aiohttp
from multidict import CIMultiDict, CIMultiDictProxy

logger = logging.getLogger(__name__)


class FetchResponse:
    """Fully read HTTP response."""

    def __init__(
        self,
        status: int,
        headers: Optional[Mapping[str, str]] = None,
        body: bytes = b"",
        charset: Optional[str] = None,
        url: Optional[str] = None,
    ) -> None:
        self.status = status
        if isinstance(headers, CIMultiDictProxy):
            self.headers = headers
        else:
            self.headers = CIMultiDictProxy(CIMultiDict(headers or {}))
        self.body = body
        self.charset = charset
        self.url = url

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    async def text(self) -> str:
        return self.body.decode(self.charset or "utf-8", errors="replace")

    async def json(self) -> Any:
        return json.loads(await self.text())

    def __repr__(self) -> str:
        return f"<FetchResponse status={self.status} url={self.url!r}>"


class Fetch(Protocol):
    """Signature of a transport coroutine."""

    def __call__(
        self,
        url: str,
        *,
        method: str,
        headers: Mapping[str, str],
        body: Any,
        **options: Any,
    ) -> Awaitable[FetchResponse]:
        ...


async def _perform(
    session: aiohttp.ClientSession,
    url: str,
    method: str,
    headers: Optional[Mapping[str, str]],
    body: Any,
    options: Dict[str, Any],
) -> FetchResponse:
    async with session.request(method, url, headers=headers, data=body, **options) as response:
        content = await response.read()
        logger.debug("%s %s -> %s (%d bytes)", method, url, response.status, len(content))
        return FetchResponse(
            status=response.status,
            headers=response.headers,
            body=content,
            charset=response.charset,
            url=str(response.url),
        )


async def aiohttp_fetch(
    url: str,
    *,
    method: str = "POST",
    headers: Optional[Mapping[str, str]] = None,
    body: Any = None,
    session: Optional[aiohttp.ClientSession] = None,
    **options: Any,
) -> FetchResponse:
    """
    Send one HTTP request with aiohttp and read the whole response.

    Args:
        url: Target URL
        method: HTTP method
        headers: Request headers
        body: Request body, a string or ``aiohttp.FormData``
        session: Existing session to use; a short-lived one is opened if None
        **options: Extra keyword arguments for ``ClientSession.request``
            (``timeout``, ``ssl``, ``allow_redirects``, ``proxy``...)

    Returns:
        FetchResponse with status, headers and body

    Raises:
        aiohttp.ClientError: On connection or protocol failures
        asyncio.TimeoutError: When a configured timeout expires
    """
    if session is not None:
        return await _perform(session, url, method, headers, body, options)

    # aiohttp defaults to a 300s total timeout; only fetch options may set one
    async with aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=None)) as owned_session:
        return await _perform(owned_session, url, method, headers, body, options)
