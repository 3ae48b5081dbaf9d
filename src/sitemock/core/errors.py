"""Error taxonomy for mockup generation.

Every error except :class:`MethodNotAllowedError` is recoverable: the
orchestrator in :mod:`sitemock.core.mockup` catches it and degrades to a
placeholder (when one has been computed) or a structured failure envelope.
"""

from __future__ import annotations


class SitemockError(Exception):
    """Base class for all mockup generation errors."""


class MethodNotAllowedError(SitemockError):
    """The endpoint was called with a method other than POST."""

    status_code = 405

    def __init__(self, method: str):
        super().__init__("Method not allowed")
        self.method = method


class MalformedInputError(SitemockError):
    """The request body or its ``formData`` cannot be used to build a mockup."""


class ConfigurationError(SitemockError):
    """The provider API key is not configured."""


class ProviderError(SitemockError):
    """The image provider returned a non-success reply or could not be reached.

    Attributes:
        status_code: HTTP status of the provider reply, ``None`` when no reply
            was received.
        body: Raw response body, kept for diagnostics.
    """

    def __init__(self, message: str, *, status_code: int | None = None, body: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class ProviderTimeoutError(ProviderError):
    """The provider call exceeded the configured deadline."""


class NoImageDataError(SitemockError):
    """A well-formed provider reply contained no extractable image bytes."""
