"""Image extraction from provider replies.

The provider family answers in one of two layouts depending on the endpoint:

``generateContent`` (nested)::

    {"candidates": [{"content": {"parts": [{"inlineData": {"data": "..."}}]}}]}

``predict`` (flat)::

    {"predictions": [{"bytesBase64Encoded": "...", "mimeType": "image/png"}]}

Each layout has a shape-matcher that returns an :class:`InlineImage` or
``None``.  :func:`extract_image_data` tries them in order and stops at the
first hit.  Matchers treat any unexpected type as "absent" rather than
raising, so a surprising reply ends in :class:`NoImageDataError`.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from sitemock.core.errors import NoImageDataError

logger = logging.getLogger(__name__)

# Data URIs always advertise PNG, whatever the reply reports.
DATA_URI_MIME_TYPE = "image/png"


@dataclass(frozen=True)
class InlineImage:
    """Base64 image bytes found in a provider reply."""

    data: str

    @property
    def data_uri(self) -> str:
        return f"data:{DATA_URI_MIME_TYPE};base64,{self.data}"


def _as_list(value: Any) -> list:
    return value if isinstance(value, list) else []


def _as_dict(value: Any) -> dict:
    return value if isinstance(value, dict) else {}


def match_candidates(payload: dict) -> InlineImage | None:
    """Find the first inline image in ``candidates[*].content.parts[*]``.

    Candidates and parts are scanned in order; the first part with non-empty
    inline data wins.  Both the camelCase (``inlineData``) and snake_case
    (``inline_data``) spellings are accepted.
    """
    for candidate in _as_list(payload.get("candidates")):
        content = _as_dict(_as_dict(candidate).get("content"))
        for part in _as_list(content.get("parts")):
            part = _as_dict(part)
            inline = _as_dict(part.get("inlineData") or part.get("inline_data"))
            data = inline.get("data")
            if isinstance(data, str) and data:
                return InlineImage(data=data)
    return None


def match_predictions(payload: dict) -> InlineImage | None:
    """Read ``predictions[0].bytesBase64Encoded``."""
    predictions = _as_list(payload.get("predictions"))
    if not predictions:
        return None
    first = _as_dict(predictions[0])
    data = first.get("bytesBase64Encoded")
    if isinstance(data, str) and data:
        return InlineImage(data=data)
    return None


# Tried in order; the nested layout takes precedence.
SHAPE_MATCHERS: tuple[Callable[[dict], InlineImage | None], ...] = (
    match_candidates,
    match_predictions,
)


def extract_image_data(payload: Any) -> InlineImage:
    """Locate the generated image in a parsed provider reply.

    Args:
        payload: Parsed JSON body returned by the provider.

    Returns:
        The first image found by the shape-matchers.

    Raises:
        NoImageDataError: If no matcher finds image bytes.
    """
    if isinstance(payload, dict):
        for matcher in SHAPE_MATCHERS:
            image = matcher(payload)
            if image is not None:
                logger.debug("Image data found by %s", matcher.__name__)
                return image

    raise NoImageDataError("No image data in response")
