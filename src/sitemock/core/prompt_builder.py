"""Prompt and placeholder construction for website mockups.

The prompt is a fixed natural-language template filled from the form.  Field
order and wording are stable so the same form always produces the same
prompt.

Template Structure::

    [Request line naming the business]

    Website details:
    - Business / Purpose / Main offerings / Value proposition
    - Color scheme: Primary, Secondary, Accent
    - Desired feel / Style preference / Has logo / Has photos
    - Communication tone / Self-description / Dislikes

    [Fixed layout directive]

The placeholder (fallback) URL is computed from the form *before* the
provider is called, so any later failure can still answer with an image.
Colour normalisation never raises: malformed colours fall back to neutral
defaults.

Usage
-----
::

    fallback = build_fallback(form, config)
    prompt = build_prompt(form)
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any
from urllib.parse import quote

from sitemock.core.config import SitemockConfig
from sitemock.core.models import FallbackSpec, FormData, FormItem

DEFAULT_PRIMARY_COLOR = "cccccc"
DEFAULT_ACCENT_COLOR = "333333"

# Placeholder labels are cut to keep the URL short and the text legible.
LABEL_MAX_LENGTH = 30

# Characters encodeURIComponent leaves unescaped beyond quote()'s defaults.
ENCODE_URI_COMPONENT_SAFE = "!*'()"

_LAYOUT_DIRECTIVE = (
    "Create a complete website mockup showing the full homepage layout including "
    "navigation bar, hero section with the business name prominently displayed, "
    "product/service cards, about section, and contact area. The design should be "
    "modern, professional, and reflect the specified colors and style preferences. "
    "Show this as if viewed on a desktop or mobile browser."
)


def render_items(items: Iterable[FormItem] | None) -> str:
    """Render the offered items as ``"name (phrase)"`` joined by commas.

    Items with an empty name are skipped; the order of the rest is kept.

    Args:
        items: Items from the form, or ``None``.

    Returns:
        The rendered list, or an empty string when nothing remains.
    """
    if not items:
        return ""
    return ", ".join(
        f"{item.name} ({'' if item.phrase is None else item.phrase})"
        for item in items
        if item.name not in (None, "")
    )


def normalize_color(value: Any, default: str) -> str:
    """Return a ``#rrggbb`` colour as ``rrggbb``, or *default*.

    Only the shape is checked (a string of seven characters starting with
    ``#``); anything else, including ``None``, yields *default*.
    """
    if isinstance(value, str) and value.startswith("#") and len(value) == 7:
        return value[1:]
    return default


def _describe(value: Any) -> str:
    if value is None or value == "":
        return "not specified"
    if isinstance(value, bool):
        return "yes" if value else "no"
    return str(value)


def build_prompt(form: FormData) -> str:
    """Compile the generation prompt for a form.

    Args:
        form: The validated form.

    Returns:
        The prompt, with sections separated by blank lines.
    """
    details = [
        f"- Business: {_describe(form.what_i_do)}",
        f"- Purpose: {_describe(form.site_purpose)}",
        f"- Main offerings: {render_items(form.items)}",
        f"- Value proposition: {_describe(form.why_choose_me)}",
        (
            f"- Color scheme: Primary {_describe(form.color1)}, "
            f"Secondary {_describe(form.color2)}, Accent {_describe(form.color3)}"
        ),
        f"- Desired feel: {_describe(form.site_feel)}",
        f"- Style preference: {_describe(form.preferred_style)}",
        f"- Has logo: {_describe(form.has_logo)}",
        f"- Has photos: {_describe(form.has_photos)}",
        f"- Communication tone: {_describe(form.talking_style)}",
        f"- Self-description: {_describe(form.self_description)}",
        f"- Dislikes: {_describe(form.dislikes)}",
    ]

    parts = [
        "Generate a professional, realistic mockup image of a modern website "
        f'homepage for "{form.activity_name}".',
        "Website details:\n" + "\n".join(details),
        _LAYOUT_DIRECTIVE,
    ]
    return "\n\n".join(parts)


def build_fallback(form: FormData, config: SitemockConfig) -> FallbackSpec:
    """Compute the placeholder image used when generation is unavailable.

    The URL has the form
    ``{base}/{width}x{height}/{primary}/{accent}?text={label}`` where the
    colours come from ``color1`` and ``color3`` and the label is the first
    characters of the activity name, URL-encoded.
    """
    primary = normalize_color(form.color1, DEFAULT_PRIMARY_COLOR)
    accent = normalize_color(form.color3, DEFAULT_ACCENT_COLOR)
    label = form.activity_name[:LABEL_MAX_LENGTH]

    base = config.placeholder_base_url.rstrip("/")
    size = f"{config.placeholder_width}x{config.placeholder_height}"
    text = quote(label, safe=ENCODE_URI_COMPONENT_SAFE)
    url = f"{base}/{size}/{primary}/{accent}?text={text}"

    return FallbackSpec(primary_color=primary, accent_color=accent, label=label, url=url)
