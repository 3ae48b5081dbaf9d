"""HTTP client for the external image-generation provider.

Processing flow:
    1. Read the API key from the configuration passed in (per request).
    2. Build the endpoint URL and JSON body for the configured provider style.
    3. POST once with an explicit deadline.
    4. Return the parsed JSON reply, or raise a typed error.

Provider styles
---------------
``gemini``
    ``models/{model}:generateContent``; replies with the nested
    ``candidates`` layout.
``imagen``
    ``models/{model}:predict``; replies with the flat ``predictions`` layout.

Both are parsed by :func:`sitemock.core.extraction.extract_image_data`, so
the client does not interpret the reply beyond decoding JSON.

Retries
-------
A single attempt is made.  When ``timeout_retries`` is 1, one more attempt
is made after a *timeout only*, following a random delay of up to
``retry_jitter`` seconds.  HTTP error statuses are never retried.

Error handling:
    - Missing API key -> :class:`ConfigurationError` (no network I/O)
    - Deadline exceeded -> :class:`ProviderTimeoutError`
    - Transport failure, non-2xx status, non-JSON body -> :class:`ProviderError`

Security considerations:
    - The key travels as the ``key`` query parameter and is never logged.
    - Exceptions carry the provider response body for diagnostics.
"""

from __future__ import annotations

import asyncio
import logging
import random
from typing import Any

import httpx

from sitemock.core.config import SitemockConfig
from sitemock.core.errors import ConfigurationError, ProviderError, ProviderTimeoutError

logger = logging.getLogger(__name__)

# predict-style safety levels expressed as generateContent block thresholds.
SAFETY_THRESHOLDS = {
    "block_most": "BLOCK_LOW_AND_ABOVE",
    "block_some": "BLOCK_MEDIUM_AND_ABOVE",
    "block_few": "BLOCK_ONLY_HIGH",
    "block_none": "BLOCK_NONE",
}

SAFETY_CATEGORIES = (
    "HARM_CATEGORY_SEXUALLY_EXPLICIT",
    "HARM_CATEGORY_DANGEROUS_CONTENT",
    "HARM_CATEGORY_HARASSMENT",
    "HARM_CATEGORY_HATE_SPEECH",
)


class GenerationClient:
    """Calls the configured image-generation endpoint.

    Args:
        config: Settings to read the key, provider and transport limits from.
        transport: Optional ``httpx`` transport; tests pass an
            :class:`httpx.MockTransport` here.
    """

    def __init__(
        self,
        config: SitemockConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config
        self._transport = transport

    # ------------------------------------------------------------------
    # Request assembly
    # ------------------------------------------------------------------

    @property
    def endpoint(self) -> str:
        base = self.config.api_base_url.rstrip("/")
        if self.config.provider == "imagen":
            return f"{base}/models/{self.config.imagen_model}:predict"
        return f"{base}/models/{self.config.gemini_model}:generateContent"

    def build_body(self, prompt: str) -> dict[str, Any]:
        """Build the JSON body for *prompt* in the configured provider style."""
        if self.config.provider == "imagen":
            return {
                "instances": [{"prompt": prompt}],
                "parameters": {
                    "sampleCount": self.config.sample_count,
                    "aspectRatio": self.config.aspect_ratio,
                    "safetyFilterLevel": self.config.safety_level,
                },
            }
        threshold = SAFETY_THRESHOLDS[self.config.safety_level]
        return {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {
                "responseModalities": ["IMAGE", "TEXT"],
                "candidateCount": self.config.sample_count,
                "imageConfig": {"aspectRatio": self.config.aspect_ratio},
            },
            "safetySettings": [
                {"category": category, "threshold": threshold} for category in SAFETY_CATEGORIES
            ],
        }

    def _require_api_key(self) -> str:
        api_key = (self.config.api_key or "").strip()
        if not api_key:
            raise ConfigurationError("GEMINI_API_KEY not configured")
        return api_key

    # ------------------------------------------------------------------
    # Network call
    # ------------------------------------------------------------------

    async def generate(self, prompt: str) -> Any:
        """Send *prompt* to the provider and return its parsed JSON reply.

        Raises:
            ConfigurationError: If no API key is configured.
            ProviderTimeoutError: If every allowed attempt timed out.
            ProviderError: On transport failure, error status or non-JSON body.
        """
        api_key = self._require_api_key()
        body = self.build_body(prompt)
        attempts = 1 + self.config.timeout_retries

        for attempt in range(1, attempts + 1):
            try:
                return await self._post(api_key, body)
            except ProviderTimeoutError:
                if attempt >= attempts:
                    raise
                delay = random.uniform(0, self.config.retry_jitter)
                logger.warning(
                    "Provider call timed out (attempt %d/%d), retrying in %.2fs",
                    attempt,
                    attempts,
                    delay,
                )
                await asyncio.sleep(delay)

        # Unreachable: the loop either returns or raises.
        raise ProviderError("No provider attempt was made")

    async def _post(self, api_key: str, body: dict[str, Any]) -> Any:
        logger.info("Requesting mockup from %s (%s)", self.config.provider, self.endpoint)
        try:
            async with httpx.AsyncClient(
                timeout=self.config.request_timeout,
                transport=self._transport,
            ) as client:
                response = await client.post(
                    self.endpoint,
                    params={"key": api_key},
                    headers={
                        "Content-Type": "application/json",
                        "Accept": "application/json",
                    },
                    json=body,
                )
        except httpx.TimeoutException as e:
            raise ProviderTimeoutError(
                f"Provider request timed out after {self.config.request_timeout}s"
            ) from e
        except httpx.HTTPError as e:
            raise ProviderError(f"Provider request failed: {e}") from e

        if response.is_error:
            raise ProviderError(
                f"Provider API error ({response.status_code}): {response.text}",
                status_code=response.status_code,
                body=response.text,
            )

        try:
            return response.json()
        except ValueError as e:
            raise ProviderError(
                "Provider returned a non-JSON response",
                status_code=response.status_code,
                body=response.text,
            ) from e
