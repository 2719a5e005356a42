"""
Logging filters for gql_request.

GraphQL clients routinely carry bearer tokens and API keys in their default
headers; :class:`SensitiveDataFilter` keeps them out of log output.
"""

import logging
import re
from typing import List, Pattern, Tuple


class SensitiveDataFilter(logging.Filter):
    """Filter to mask credentials in log messages."""

    def __init__(self) -> None:
        """Initialize sensitive data filter."""
        super().__init__()

        self.rules: List[Tuple[Pattern[str], str]] = [
            # Bearer tokens
            (re.compile(r"(bearer\s+)([A-Za-z0-9\-._~+/]+=*)", re.IGNORECASE), r"\1***MASKED***"),
            # Authorization / API key headers, quoted or not
            (
                re.compile(
                    r"""((?:authorization|proxy-authorization|x-api-key|api[_-]?key|token|secret)"""
                    r"""['"]?\s*[:=]\s*['"]?)(?!bearer\s)([^\s'",}]+)""",
                    re.IGNORECASE,
                ),
                r"\1***MASKED***",
            ),
            # URLs with credentials
            (re.compile(r"(https?://[^:/\s]+):([^@/\s]+)@", re.IGNORECASE), r"\1:***MASKED***@"),
        ]

    def mask(self, message: str) -> str:
        for pattern, replacement in self.rules:
            message = pattern.sub(replacement, message)
        return message

    def filter(self, record: logging.LogRecord) -> bool:
        """Mask sensitive data in the record message."""
        try:
            message = record.getMessage()
        except (TypeError, ValueError):
            # malformed %-args, let the handler report it
            return True

        masked = self.mask(message)
        if masked != message:
            record.msg = masked
            record.args = ()
        return True
