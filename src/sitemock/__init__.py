"""Site Mockup Generator - website description form to rendered mockup image."""

__version__ = "0.1.0"

from sitemock.core.config import SitemockConfig, config

__all__ = [
    "SitemockConfig",
    "config",
]
