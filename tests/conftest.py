"""Shared pytest fixtures for Site Mockup Generator tests."""

from __future__ import annotations

import json
from collections.abc import Callable, Generator
from typing import Any

import httpx
import pytest
from fastapi import Depends
from fastapi.testclient import TestClient

from sitemock.api.main import app, get_client, get_config
from sitemock.core.client import GenerationClient
from sitemock.core.config import SitemockConfig

# A tiny valid PNG-ish payload; only its base64 text matters to the code.
SAMPLE_IMAGE_B64 = "iVBORw0KGgoAAAANSUhEUgAAAAEAAAAB"


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove provider settings from the environment for every test."""
    for name in (
        "GEMINI_API_KEY",
        "SITEMOCK_API_KEY",
        "SITEMOCK_PROVIDER",
        "SITEMOCK_TIMEOUT_RETRIES",
        "SITEMOCK_PLACEHOLDER_BASE_URL",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def test_config() -> SitemockConfig:
    """Create a configuration with a dummy key and no .env lookup.

    Returns:
        SitemockConfig instance for testing
    """
    return SitemockConfig(api_key="test-key", retry_jitter=0.0, _env_file=None)


@pytest.fixture
def form_data() -> dict[str, Any]:
    """A complete, well-formed form as sent by the website form.

    Returns:
        camelCase form dictionary
    """
    return {
        "activityName": "Bloom & Co Florist",
        "whatIDo": "Hand-tied bouquets and event flowers",
        "sitePurpose": "Take online orders",
        "items": [
            {"name": "Bouquets", "phrase": "fresh every morning"},
            {"name": "", "phrase": "should be dropped"},
            {"name": "Weddings", "phrase": "full floral design"},
        ],
        "whyChooseMe": "Locally grown flowers",
        "color1": "#ff6699",
        "color2": "#ffffff",
        "color3": "#2e8b57",
        "siteFeel": "warm",
        "preferredStyle": "minimal",
        "hasLogo": True,
        "hasPhotos": False,
        "talkingStyle": "friendly",
        "selfDescription": "A small family shop",
        "dislikes": "stock photos",
    }


def gemini_reply(data: str = SAMPLE_IMAGE_B64) -> dict[str, Any]:
    """Build a generateContent-style reply carrying *data*."""
    return {
        "candidates": [
            {
                "content": {
                    "parts": [
                        {"text": "Here is your mockup."},
                        {"inlineData": {"mimeType": "image/png", "data": data}},
                    ]
                }
            }
        ]
    }


class FakeProvider:
    """Scriptable stand-in for the provider endpoint.

    Set ``handler`` to a callable taking an ``httpx.Request`` and returning an
    ``httpx.Response`` (or raising an ``httpx`` exception).  Every request
    received is recorded in ``requests``.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.handler: Callable[[httpx.Request], httpx.Response] = lambda request: httpx.Response(
            200, json=gemini_reply()
        )

    def reply_json(self, payload: Any, status_code: int = 200) -> None:
        self.handler = lambda request: httpx.Response(status_code, json=payload)

    def reply_text(self, text: str, status_code: int) -> None:
        self.handler = lambda request: httpx.Response(status_code, text=text)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self._handle)

    @property
    def last_body(self) -> dict[str, Any]:
        return json.loads(self.requests[-1].content)


@pytest.fixture
def fake_provider() -> FakeProvider:
    """Create a provider stub that answers with a generated image by default."""
    return FakeProvider()


@pytest.fixture
def generation_client(test_config: SitemockConfig, fake_provider: FakeProvider) -> GenerationClient:
    """Client for the test configuration wired to the fake provider."""
    return GenerationClient(test_config, transport=fake_provider.transport)


@pytest.fixture
def test_client(
    test_config: SitemockConfig, fake_provider: FakeProvider
) -> Generator[TestClient, None, None]:
    """FastAPI TestClient with configuration and provider injected.

    Tests that need different settings override ``get_config`` again; the
    client override follows it because it depends on ``get_config``.
    """

    def _client(settings: SitemockConfig = Depends(get_config)) -> GenerationClient:
        return GenerationClient(settings, transport=fake_provider.transport)

    app.dependency_overrides[get_config] = lambda: test_config
    app.dependency_overrides[get_client] = _client
    try:
        with TestClient(app) as client:
            yield client
    finally:
        app.dependency_overrides.clear()
