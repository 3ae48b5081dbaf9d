"""Mockup generation orchestration.

Role in pipeline:
    - Decodes the request body and validates ``formData``.
    - Computes the placeholder (fallback) image first.
    - Builds the prompt, calls the provider once and extracts the image.
    - Folds every outcome into one of :class:`Success`, :class:`Fallback` or
      :class:`Failure`.

Outcome precedence
------------------
1. **Success** - the provider returned image bytes.
2. **Fallback** - anything failed *after* the placeholder was computed.
3. **Failure** - the form was too malformed to compute the placeholder.

No exception escapes :func:`generate_mockup`; the only error raised to the
HTTP layer is :class:`MethodNotAllowedError` from :func:`ensure_post`.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from pydantic import ValidationError

from sitemock.core.client import GenerationClient
from sitemock.core.config import SitemockConfig
from sitemock.core.errors import (
    ConfigurationError,
    MalformedInputError,
    MethodNotAllowedError,
    SitemockError,
)
from sitemock.core.extraction import extract_image_data
from sitemock.core.models import Failure, Fallback, FallbackSpec, FormData, GenerationResult, Success
from sitemock.core.prompt_builder import build_fallback, build_prompt

logger = logging.getLogger(__name__)

CONFIGURATION_NEEDED_MESSAGE = "Using placeholder - API configuration needed"
GENERATION_FAILED_MESSAGE = "Using placeholder - image generation failed"


def ensure_post(method: str) -> None:
    """Reject every HTTP method other than POST.

    Raises:
        MethodNotAllowedError: If *method* is not ``POST``.
    """
    if method.upper() != "POST":
        raise MethodNotAllowedError(method)


def parse_form(raw_body: bytes | str) -> FormData:
    """Decode a request body of the form ``{"formData": {...}}``.

    Raises:
        MalformedInputError: If the body is not JSON, has no ``formData``
            object, or the form fails validation.
    """
    try:
        body: Any = json.loads(raw_body or b"null")
    except (ValueError, UnicodeDecodeError) as e:
        raise MalformedInputError(f"Request body is not valid JSON: {e}") from e

    form_data = body.get("formData") if isinstance(body, dict) else None
    if not isinstance(form_data, dict):
        raise MalformedInputError("Request body must contain a formData object")

    try:
        return FormData.model_validate(form_data)
    except ValidationError as e:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
        raise MalformedInputError(f"Invalid formData fields: {fields}") from e


def _degrade(error: Exception, fallback: FallbackSpec | None) -> GenerationResult:
    if fallback is None:
        return Failure(error_message=str(error) or error.__class__.__name__)

    if isinstance(error, ConfigurationError):
        reason = CONFIGURATION_NEEDED_MESSAGE
    else:
        reason = GENERATION_FAILED_MESSAGE
    return Fallback(image_url=fallback.url, reason=reason)


async def generate_mockup(
    raw_body: bytes | str,
    *,
    config: SitemockConfig,
    client: GenerationClient,
) -> GenerationResult:
    """Turn a form submission into a mockup image reference.

    Args:
        raw_body: The undecoded request body.
        config: Settings for this request (placeholder service, provider).
        client: Client used for the single provider call.

    Returns:
        The terminal outcome; never raises.
    """
    fallback: FallbackSpec | None = None

    try:
        form = parse_form(raw_body)
        fallback = build_fallback(form, config)
        prompt = build_prompt(form)

        payload = await client.generate(prompt)
        image = extract_image_data(payload)
    except ConfigurationError as e:
        logger.warning("Image generation unconfigured: %s", e)
        return _degrade(e, fallback)
    except SitemockError as e:
        logger.warning("Error generating image: %s", e)
        return _degrade(e, fallback)
    except Exception as e:
        logger.exception("Error generating image")
        return _degrade(e, fallback)

    logger.info("Generated mockup for %r", form.activity_name)
    return Success(image_url=image.data_uri)
