"""
Configuration management for gql_request.

Client and logging settings can be loaded from a JSON file and
``GQL_REQUEST_*`` environment variables.
"""

from .loader import ConfigLoader, load_config
from .models import ClientConfig, LoggingConfig, LogLevel

__all__ = [
    "ClientConfig",
    "LoggingConfig",
    "LogLevel",
    "ConfigLoader",
    "load_config",
]
