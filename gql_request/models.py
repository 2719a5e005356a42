"""
Data models for gql_request.

Dataclasses for the transient request/response values and a pydantic model
for the options a client owns.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import (
    Any,
    Awaitable,
    Callable,
    Dict,
    Iterable,
    Mapping,
    Optional,
    Tuple,
    Union,
)

import aiohttp
from multidict import CIMultiDict
from pydantic import BaseModel, ConfigDict, Field

# A header set in any of the accepted shapes: a (multi)mapping or pairs
HeadersInit = Union[Mapping[str, str], Iterable[Tuple[str, str]]]
Variables = Mapping[str, Any]


class SubscriptionProtocol(str, Enum):
    """Subscription protocols recognised by :meth:`GraphQLClient.subscribe`."""

    SUBSCRIPTION_TRANSPORT_WS = "subscription-transport-ws"
    GRAPHQL_WS = "graphql-ws"


@dataclass
class RequestContext:
    """Query and variables of a request, attached to errors for diagnosis."""

    query: str
    variables: Optional[Variables] = None


@dataclass
class RequestDescriptor:
    """Outgoing HTTP request, produced fresh for every call."""

    url: str
    headers: CIMultiDict
    body: Union[str, aiohttp.FormData]
    method: str = "POST"
    options: Dict[str, Any] = field(default_factory=dict)


@dataclass
class GraphQLResponse:
    """Successful GraphQL response with HTTP metadata."""

    data: Any
    status: int
    headers: Any
    extensions: Optional[Any] = None


@dataclass
class SubscribePayload:
    """Subscription operation to start."""

    query: str
    variables: Optional[Variables] = None
    extensions: Optional[Dict[str, Any]] = None


@dataclass
class SubscribeOptions:
    """Subscription options: protocol selection and event sink."""

    protocol: Optional[Union[SubscriptionProtocol, str]] = None
    on_next: Optional[Callable[[Any], None]] = None
    on_error: Optional[Callable[[BaseException], None]] = None
    on_complete: Optional[Callable[[], None]] = None


RequestMiddleware = Callable[
    [RequestDescriptor], Union[RequestDescriptor, Awaitable[RequestDescriptor]]
]
ResponseMiddleware = Callable[[Any], Union[None, Awaitable[None]]]


class ClientOptions(BaseModel):
    """Options owned by a single :class:`GraphQLClient`."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    headers: Optional[Any] = Field(default=None, description="Default headers, any HeadersInit shape")
    fetch_options: Dict[str, Any] = Field(
        default_factory=dict, description="Options passed through to the transport"
    )
    fetch: Optional[Callable[..., Awaitable[Any]]] = Field(
        default=None, description="Custom transport coroutine"
    )
    request_middleware: Optional[RequestMiddleware] = Field(
        default=None, description="Hook that may replace the outgoing request"
    )
    response_middleware: Optional[ResponseMiddleware] = Field(
        default=None, description="Hook that observes the raw response"
    )
    subscription_protocol: Optional[SubscriptionProtocol] = Field(
        default=None, description="Default protocol for subscribe()"
    )
