"""Core functionality for website mockup generation.

Architecture Overview
---------------------
The core follows the order in which a request is processed:

1. **Configuration Layer** (config.py):
   - Environment-based configuration using Pydantic Settings
   - All settings prefixed with SITEMOCK_ (the API key also reads GEMINI_API_KEY)

2. **Input and Prompt Layer** (models.py, prompt_builder.py):
   - Lenient Pydantic model of the website description form
   - Deterministic prompt template and placeholder URL

3. **Provider Layer** (client.py, extraction.py):
   - One httpx call per request with an explicit deadline
   - Ordered shape-matchers for the two known reply layouts

4. **Orchestration** (mockup.py):
   - Success / Fallback / Failure outcome policy
   - errors.py holds the exception taxonomy

Usage Example
-------------
    from sitemock.core import GenerationClient, SitemockConfig, generate_mockup

    cfg = SitemockConfig()
    result = await generate_mockup(body, config=cfg, client=GenerationClient(cfg))
    status, envelope = result.status_code, result.to_envelope()
"""

from sitemock.core.client import GenerationClient
from sitemock.core.config import SitemockConfig, config
from sitemock.core.mockup import generate_mockup

__all__ = [
    "GenerationClient",
    "SitemockConfig",
    "config",
    "generate_mockup",
]
