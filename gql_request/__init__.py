"""
Minimal async GraphQL client over HTTP.

Features:
- One HTTP POST per operation with aiohttp, no retries or caching
- Stateless ``request``/``raw_request`` helpers and a stateful ``GraphQLClient``
- Query strings or parsed graphql-core documents
- Request and response middleware hooks
- Multipart file uploads for variables holding file objects
- Structured ``ClientError`` carrying the response and the original request
"""

from .builder import create_request_body, extract_files, gql, resolve_request_document
from .client import GraphQLClient, raw_request, request
from .config import ClientConfig, ConfigLoader, LoggingConfig, LogLevel, load_config
from .exceptions import (
    ClientError,
    ConfigError,
    GraphQLRequestError,
    InvalidProtocolError,
    UnsupportedProtocolError,
)
from .headers import merge_headers, resolve_headers
from .logging import setup_logging
from .models import (
    ClientOptions,
    GraphQLResponse,
    RequestContext,
    RequestDescriptor,
    SubscribeOptions,
    SubscribePayload,
    SubscriptionProtocol,
)
from .transport import Fetch, FetchResponse, aiohttp_fetch

__version__ = "0.1.0"

__all__ = [
    # Client
    "GraphQLClient",
    "request",
    "raw_request",
    "ClientOptions",
    # Request building
    "create_request_body",
    "extract_files",
    "resolve_request_document",
    "gql",
    "resolve_headers",
    "merge_headers",
    # Models
    "GraphQLResponse",
    "RequestContext",
    "RequestDescriptor",
    "SubscribePayload",
    "SubscribeOptions",
    "SubscriptionProtocol",
    # Transport
    "Fetch",
    "FetchResponse",
    "aiohttp_fetch",
    # Errors
    "GraphQLRequestError",
    "ClientError",
    "InvalidProtocolError",
    "UnsupportedProtocolError",
    "ConfigError",
    # Configuration and logging
    "ClientConfig",
    "LoggingConfig",
    "LogLevel",
    "ConfigLoader",
    "load_config",
    "setup_logging",
]
