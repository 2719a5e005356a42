"""
GraphQL client implementation.

This module provides :class:`GraphQLClient`, which keeps an endpoint and
default headers, plus the stateless :func:`request` and :func:`raw_request`
helpers. Every call performs exactly one HTTP POST; nothing is retried or
cached.
"""

from __future__ import annotations

import inspect
import logging
from typing import Any, Callable, Optional, Union

import aiohttp
from graphql.language import DocumentNode

from .builder import create_request_body, resolve_request_document
from .config.models import ClientConfig
from .exceptions import ClientError, InvalidProtocolError, UnsupportedProtocolError
from .headers import is_mutable_mapping, merge_headers, own_headers, set_header_value
from .models import (
    ClientOptions,
    GraphQLResponse,
    HeadersInit,
    RequestContext,
    RequestDescriptor,
    SubscribeOptions,
    SubscribePayload,
    SubscriptionProtocol,
    Variables,
)
from .transport import FetchResponse, aiohttp_fetch

logger = logging.getLogger(__name__)


async def _maybe_await(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value


async def get_result(response: FetchResponse) -> Any:
    """
    Read the response body according to its content type.

    JSON bodies are decoded; anything else, including JSON that fails to
    decode, is returned as text.
    """
    content_type = response.headers.get("Content-Type")
    if content_type and content_type.lower().startswith("application/json"):
        try:
            return await response.json()
        except ValueError:
            logger.debug("Response declared JSON but could not be decoded")
            return await response.text()
    return await response.text()


def is_successful(response: FetchResponse, result: Any) -> bool:
    """2xx status, no GraphQL errors and a non-empty ``data`` field."""
    return (
        response.ok
        and isinstance(result, dict)
        and not result.get("errors")
        and bool(result.get("data"))
    )


class GraphQLClient:
    """
    GraphQL client bound to one endpoint.

    Examples:
        Basic query:
        ```python
        client = GraphQLClient(
            "https://api.example.com/graphql",
            headers={"Authorization": "Bearer token"},
        )
        data = await client.request(
            "query GetUser($id: ID!) { user(id: $id) { name } }",
            {"id": "123"},
        )
        ```

        Middleware:
        ```python
        def add_trace_id(request: RequestDescriptor) -> RequestDescriptor:
            request.headers["X-Trace-Id"] = new_trace_id()
            return request

        client = GraphQLClient(url, request_middleware=add_trace_id)
        ```
    """

    def __init__(self, url: str, options: Optional[ClientOptions] = None, **kwargs: Any):
        """
        Initialize GraphQL client.

        Args:
            url: GraphQL endpoint URL
            options: Client options; built from ``kwargs`` when omitted
            **kwargs: ``ClientOptions`` fields (headers, fetch_options, fetch,
                request_middleware, response_middleware, subscription_protocol)
        """
        if options is None:
            options = ClientOptions(**kwargs)
        else:
            options = options.model_copy(update=kwargs)

        options.headers = own_headers(options.headers)

        self.url = url
        self.options = options

    @classmethod
    def from_config(cls, config: ClientConfig, **kwargs: Any) -> "GraphQLClient":
        """
        Create a client from loaded configuration.

        Args:
            config: Client configuration
            **kwargs: Extra ``ClientOptions`` fields, e.g. middleware hooks
        """
        fetch_options = dict(config.fetch_options)
        if config.timeout is not None:
            fetch_options["timeout"] = aiohttp.ClientTimeout(total=config.timeout)
        fetch_options.update(kwargs.pop("fetch_options", {}))

        return cls(
            str(config.endpoint),
            headers=dict(config.headers),
            fetch_options=fetch_options,
            subscription_protocol=config.subscription_protocol,
            **kwargs,
        )

    @property
    def headers(self) -> Optional[HeadersInit]:
        """Default headers sent with every request."""
        return self.options.headers

    def _build_request(
        self,
        query: str,
        variables: Optional[Variables],
        request_headers: Optional[HeadersInit],
    ) -> RequestDescriptor:
        body = create_request_body(query, variables)
        # multipart bodies get their Content-Type (with boundary) from aiohttp
        base = {"Content-Type": "application/json"} if isinstance(body, str) else None
        return RequestDescriptor(
            url=self.url,
            headers=merge_headers(base, self.options.headers, request_headers),
            body=body,
            options=dict(self.options.fetch_options),
        )

    async def raw_request(
        self,
        query: str,
        variables: Optional[Variables] = None,
        request_headers: Optional[HeadersInit] = None,
    ) -> GraphQLResponse:
        """
        Send a GraphQL query and return the full response envelope.

        Args:
            query: GraphQL query text
            variables: Optional variables mapping
            request_headers: Headers for this call only, overriding defaults

        Returns:
            GraphQLResponse with data, extensions, headers and status

        Raises:
            ClientError: If the response is not a clean success
        """
        request = self._build_request(query, variables, request_headers)

        if self.options.request_middleware is not None:
            request = await _maybe_await(self.options.request_middleware(request))
            if not isinstance(request, RequestDescriptor):
                raise TypeError("request_middleware must return a RequestDescriptor")

        fetch = self.options.fetch or aiohttp_fetch
        logger.debug("Sending GraphQL request to %s", request.url)
        response = await fetch(
            request.url,
            method=request.method,
            headers=request.headers,
            body=request.body,
            **request.options,
        )

        if self.options.response_middleware is not None:
            await _maybe_await(self.options.response_middleware(response))

        result = await get_result(response)

        if is_successful(response, result):
            logger.debug("GraphQL request to %s succeeded (%s)", request.url, response.status)
            return GraphQLResponse(
                data=result["data"],
                extensions=result.get("extensions"),
                headers=response.headers,
                status=response.status,
            )

        error_result = dict(result) if isinstance(result, dict) else {"error": result}
        error_result["status"] = response.status
        error_result["headers"] = response.headers
        logger.warning(
            "GraphQL request to %s failed with status %s",
            request.url,
            response.status,
            extra={"status_code": response.status},
        )
        raise ClientError(error_result, RequestContext(query=query, variables=variables))

    async def request(
        self,
        document: Union[str, DocumentNode],
        variables: Optional[Variables] = None,
        request_headers: Optional[HeadersInit] = None,
    ) -> Any:
        """
        Send a GraphQL document and return only its ``data``.

        Args:
            document: Query text or a parsed graphql ``DocumentNode``
            variables: Optional variables mapping
            request_headers: Headers for this call only, overriding defaults

        Raises:
            ClientError: If the response is not a clean success
        """
        query = resolve_request_document(document)
        response = await self.raw_request(query, variables, request_headers)
        return response.data

    def set_headers(self, headers: Optional[HeadersInit]) -> "GraphQLClient":
        """Replace all default headers."""
        self.options.headers = own_headers(headers)
        return self

    def set_header(self, key: str, value: str) -> "GraphQLClient":
        """
        Attach a header to the client. All subsequent requests will have it.

        An existing header with the same name in any casing is replaced.
        Headers stored as pairs or as a read-only collection cannot be updated
        in place; use :meth:`set_headers` to replace them instead.

        Raises:
            TypeError: If the stored headers cannot be changed in place
        """
        headers = self.options.headers
        if headers is None:
            self.options.headers = {key: value}
        elif is_mutable_mapping(headers):
            set_header_value(headers, key, value)
        else:
            raise TypeError(
                f"Default headers of type {type(headers).__name__} cannot be "
                "updated in place, use set_headers() instead"
            )
        return self

    def subscribe(
        self,
        payload: SubscribePayload,
        options: Optional[SubscribeOptions] = None,
    ) -> Callable[[], None]:
        """
        Start a GraphQL subscription.

        The protocol comes from ``options.protocol`` or the client's
        ``subscription_protocol``. No protocol has a transport yet.

        Raises:
            InvalidProtocolError: If the protocol is not a SubscriptionProtocol
            UnsupportedProtocolError: If the protocol is known but not supported
        """
        requested = options.protocol if options is not None else None
        if requested is None:
            requested = self.options.subscription_protocol

        try:
            protocol = SubscriptionProtocol(requested)
        except ValueError:
            valid = ", ".join(p.value for p in SubscriptionProtocol)
            raise InvalidProtocolError(
                f"options.protocol should be one of: {valid} (got {requested!r})",
                protocol=requested,
            ) from None

        logger.debug("Subscription requested over %s for %.60s", protocol.value, payload.query)
        raise UnsupportedProtocolError(
            f"Subscriptions over {protocol.value} are not supported yet",
            protocol=protocol,
        )


async def raw_request(
    url: str,
    query: str,
    variables: Optional[Variables] = None,
    request_headers: Optional[HeadersInit] = None,
) -> GraphQLResponse:
    """Send a GraphQL query to ``url`` and return the full response envelope."""
    client = GraphQLClient(url)
    return await client.raw_request(query, variables, request_headers)


async def request(
    url: str,
    document: Union[str, DocumentNode],
    variables: Optional[Variables] = None,
    request_headers: Optional[HeadersInit] = None,
) -> Any:
    """
    Send a GraphQL document to the server for execution.

    Example:
        ```python
        data = await request(
            "https://api.example.com/graphql",
            "{ users { id name } }",
        )

        # a parsed document works too
        from graphql import parse
        data = await request(url, parse("{ users { id } }"))
        ```
    """
    client = GraphQLClient(url)
    return await client.request(document, variables, request_headers)
