"""
Exceptions raised by gql_request.

Transport failures (``aiohttp.ClientError``, ``asyncio.TimeoutError``) are not
wrapped and reach the caller unchanged. Everything this package raises itself
derives from :class:`GraphQLRequestError`.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any, Dict, List, Optional

if TYPE_CHECKING:
    from .models import RequestContext


class GraphQLRequestError(Exception):
    """
    Base exception for all gql_request errors.

    Attributes:
        message: Human-readable error message
        details: Additional error details as keyword arguments
    """

    def __init__(self, message: str, **kwargs: Any) -> None:
        super().__init__(message)
        self.message = message
        self.details = kwargs


class ClientError(GraphQLRequestError):
    """
    Raised when a GraphQL exchange does not complete successfully.

    The ``response`` payload is either the parsed JSON body of the server
    (``errors``, ``data``, ``extensions``...) or ``{"error": <text>}`` for
    non-JSON bodies. It always carries ``status`` and ``headers``.

    Attributes:
        response: Error payload built from the HTTP response
        request: Query and variables that produced the error
    """

    def __init__(self, response: Dict[str, Any], request: "RequestContext") -> None:
        self.response = response
        self.request = request
        super().__init__(self._build_message())

    @property
    def status(self) -> Optional[int]:
        return self.response.get("status")

    @property
    def headers(self) -> Any:
        return self.response.get("headers")

    @property
    def errors(self) -> List[Dict[str, Any]]:
        """GraphQL errors reported by the server, empty for opaque bodies."""
        errors = self.response.get("errors")
        return errors if isinstance(errors, list) else []

    def _extract_message(self) -> str:
        errors = self.errors
        if errors and isinstance(errors[0], dict) and errors[0].get("message"):
            return str(errors[0]["message"])
        return f"GraphQL Error (Code: {self.status})"

    def _build_message(self) -> str:
        # headers are not JSON friendly, keep them out of the message
        response = {k: v for k, v in self.response.items() if k != "headers"}
        context = json.dumps(
            {
                "response": response,
                "request": {
                    "query": self.request.query,
                    "variables": self.request.variables,
                },
            },
            default=str,
        )
        return f"{self._extract_message()}: {context}"


class InvalidProtocolError(GraphQLRequestError, ValueError):
    """Raised when a subscription protocol outside the known set is requested."""

    def __init__(self, message: str, protocol: Any = None) -> None:
        super().__init__(message, protocol=protocol)
        self.protocol = protocol


class UnsupportedProtocolError(GraphQLRequestError, NotImplementedError):
    """Raised when a known subscription protocol has no handler yet."""

    def __init__(self, message: str, protocol: Any = None) -> None:
        super().__init__(message, protocol=protocol)
        self.protocol = protocol


class ConfigError(GraphQLRequestError, ValueError):
    """Raised when configuration cannot be loaded or parsed."""

    def __init__(self, message: str, source: Optional[str] = None) -> None:
        super().__init__(message, source=source)
        self.source = source
