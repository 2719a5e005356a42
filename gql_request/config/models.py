"""
Configuration models for gql_request.

This module defines the configuration data models with validation and defaults.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, HttpUrl, field_validator

from ..models import SubscriptionProtocol


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(default=LogLevel.WARNING, description="Default logging level")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log message format",
    )
    file_path: Optional[Path] = Field(default=None, description="Log file path")
    enable_console: bool = Field(default=True, description="Enable console logging")
    enable_structured: bool = Field(
        default=False, description="Enable structured JSON logging"
    )

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v: Any) -> Any:
        return v.upper() if isinstance(v, str) else v


class ClientConfig(BaseModel):
    """Configuration for a GraphQL client."""

    endpoint: HttpUrl = Field(description="GraphQL endpoint URL")
    headers: Dict[str, str] = Field(default_factory=dict, description="Default headers for requests")
    timeout: Optional[float] = Field(
        default=None, gt=0, description="Total request timeout in seconds, none by default"
    )
    fetch_options: Dict[str, Any] = Field(
        default_factory=dict, description="Extra options passed through to the transport"
    )
    subscription_protocol: Optional[SubscriptionProtocol] = Field(
        default=None, description="Default subscription protocol"
    )
    logging: LoggingConfig = Field(default_factory=LoggingConfig, description="Logging settings")
