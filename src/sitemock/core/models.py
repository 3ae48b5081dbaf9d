"""Data models for mockup requests and results.

``FormData`` and ``FormItem`` are Pydantic models mirroring the camelCase
JSON sent by the website form.  Validation is deliberately lenient on the
descriptive fields: the only hard requirement is ``activityName``, which
labels the placeholder image.  Colour fields accept any JSON value because
:func:`~sitemock.core.prompt_builder.normalize_color` is responsible for
coping with malformed colours.

The three ``GenerationResult`` variants are plain dataclasses; each one knows
its HTTP status and the JSON envelope returned to the caller.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field


# Descriptive form answers arrive as strings or checkbox booleans.
FreeText = Union[str, bool, int, float, None]


class FormItem(BaseModel):
    """One product or service offered by the business.

    Attributes:
        name: Display name.  Items without a name are dropped from the prompt.
        phrase: Short tagline shown next to the name.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: FreeText = None
    phrase: FreeText = None


class FormData(BaseModel):
    """Structured description of the business and the website it wants.

    Field names are snake_case in Python and camelCase on the wire.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    activity_name: str = Field(..., alias="activityName")
    what_i_do: FreeText = Field(default=None, alias="whatIDo")
    site_purpose: FreeText = Field(default=None, alias="sitePurpose")
    items: list[FormItem] | None = Field(default=None, alias="items")
    why_choose_me: FreeText = Field(default=None, alias="whyChooseMe")
    color1: Any = Field(default=None, alias="color1")
    color2: Any = Field(default=None, alias="color2")
    color3: Any = Field(default=None, alias="color3")
    site_feel: FreeText = Field(default=None, alias="siteFeel")
    preferred_style: FreeText = Field(default=None, alias="preferredStyle")
    has_logo: FreeText = Field(default=None, alias="hasLogo")
    has_photos: FreeText = Field(default=None, alias="hasPhotos")
    talking_style: FreeText = Field(default=None, alias="talkingStyle")
    self_description: FreeText = Field(default=None, alias="selfDescription")
    dislikes: FreeText = Field(default=None, alias="dislikes")


@dataclass(frozen=True)
class FallbackSpec:
    """Placeholder image parameters computed before the provider is called."""

    primary_color: str
    accent_color: str
    label: str
    url: str


@dataclass(frozen=True)
class Success:
    """A mockup image was generated; ``image_url`` is a base64 data URI."""

    image_url: str

    status_code = 200

    def to_envelope(self) -> dict[str, Any]:
        return {"success": True, "imageUrl": self.image_url}


@dataclass(frozen=True)
class Fallback:
    """Generation degraded to a placeholder image.

    Reported as a transport-level success: the caller always gets an image.
    """

    image_url: str
    reason: str

    status_code = 200

    def to_envelope(self) -> dict[str, Any]:
        return {
            "success": True,
            "imageUrl": self.image_url,
            "fallback": True,
            "message": self.reason,
        }


@dataclass(frozen=True)
class Failure:
    """The input was too malformed to build even a placeholder."""

    error_message: str

    status_code = 500

    def to_envelope(self) -> dict[str, Any]:
        return {"success": False, "error": self.error_message, "fallback": True}


GenerationResult = Union[Success, Fallback, Failure]
