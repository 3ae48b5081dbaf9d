"""Configuration management for the Site Mockup Generator.

This module provides centralized configuration management using Pydantic Settings.
Configuration is loaded from environment variables with the SITEMOCK_ prefix,
allowing the provider, timeouts and placeholder service to be changed without
code changes.

Environment Variable Loading
-----------------------------
Configuration values are loaded in the following priority order:
1. Environment variables (SITEMOCK_* prefix)
2. .env file in the project root
3. Default values defined in SitemockConfig

The provider API key is the one exception to the prefix rule: it is read from
either ``SITEMOCK_API_KEY`` or the provider's conventional ``GEMINI_API_KEY``.

Example .env file:
    GEMINI_API_KEY=your-key-here
    SITEMOCK_PROVIDER=imagen
    SITEMOCK_REQUEST_TIMEOUT=30

Per-Request Reads
-----------------
The API layer builds a fresh :class:`SitemockConfig` for every request (see
:func:`sitemock.api.main.get_config`), so a key added to the environment is
picked up by the next request. The global ``config`` instance below is only
used for process-level settings such as the server bind address.

Missing Credentials
-------------------
A missing API key is *not* a startup failure. ``api_key`` defaults to
``None`` and the generation client raises
:class:`~sitemock.core.errors.ConfigurationError` when it is asked to call the
provider without one, which the orchestrator turns into a placeholder result.
"""

from typing import Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class SitemockConfig(BaseSettings):
    """Main configuration for the Site Mockup Generator.

    Attributes
    ----------
    Provider Settings:
        api_key : str | None
            Provider API key; ``None`` means generation is unconfigured
        provider : Literal["gemini", "imagen"]
            Which endpoint style (and therefore response shape) to call
        api_base_url : str
            Base URL of the generative language API
        gemini_model : str
            Model used for ``generateContent`` calls
        imagen_model : str
            Model used for ``predict`` calls

    Generation Parameters:
        aspect_ratio : str
            Requested aspect ratio of the mockup
        safety_level : Literal["block_most", "block_some", "block_few", "block_none"]
            Provider safety filter level
        sample_count : int
            Number of images requested (only the first is used)

    Transport:
        request_timeout : float
            Deadline in seconds for one provider call
        timeout_retries : int
            Extra attempts allowed after a timeout (0 or 1)
        retry_jitter : float
            Upper bound in seconds of the random delay before a retry

    Placeholder:
        placeholder_base_url : str
            Placeholder image service used for fallback results
        placeholder_width : int
        placeholder_height : int

    Server:
        server_host : str
        server_port : int
        log_level : str

    Examples
    --------
        >>> custom_config = SitemockConfig(api_key="test-key", provider="imagen")
        >>> custom_config.request_timeout
        60.0
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="SITEMOCK_",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Provider settings
    api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("SITEMOCK_API_KEY", "GEMINI_API_KEY"),
        description="Provider API key (SITEMOCK_API_KEY or GEMINI_API_KEY)",
    )
    provider: Literal["gemini", "imagen"] = Field(
        default="gemini",
        description="Endpoint style: 'gemini' (generateContent) or 'imagen' (predict)",
    )
    api_base_url: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta",
        description="Base URL of the generative language API",
    )
    gemini_model: str = Field(
        default="gemini-2.5-flash-image",
        description="Model for generateContent requests",
    )
    imagen_model: str = Field(
        default="imagen-3.0-generate-002",
        description="Model for predict requests",
    )

    # Fixed generation parameters
    aspect_ratio: str = Field(default="16:9", description="Mockup aspect ratio")
    safety_level: Literal["block_most", "block_some", "block_few", "block_none"] = Field(
        default="block_some",
        description="Safety filter level, also mapped onto generateContent thresholds",
    )
    sample_count: int = Field(default=1, ge=1, le=4)

    # Transport
    request_timeout: float = Field(
        default=60.0,
        gt=0,
        description="Deadline in seconds for a single provider call",
    )
    timeout_retries: int = Field(
        default=0,
        ge=0,
        le=1,
        description="Extra attempts after a timeout (0 keeps a single attempt)",
    )
    retry_jitter: float = Field(
        default=0.5,
        ge=0,
        description="Upper bound in seconds of the random pre-retry delay",
    )

    # Placeholder service
    placeholder_base_url: str = Field(
        default="https://via.placeholder.com",
        description="Placeholder image service for fallback results",
    )
    placeholder_width: int = Field(default=1200, ge=1)
    placeholder_height: int = Field(default=675, ge=1)

    # Server settings
    server_host: str = Field(
        default="0.0.0.0",
        description="Server bind address (0.0.0.0 for local network)",
    )
    server_port: int = Field(
        default=8888,
        description="Server port",
        ge=1024,
        le=65535,
    )
    log_level: str = Field(default="INFO", description="Root logging level")


# Global configuration instance, loaded from SITEMOCK_* environment variables
# and the .env file at import time.
config = SitemockConfig()
