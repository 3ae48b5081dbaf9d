"""Site Mockup Generator — FastAPI Application.

This module is the single entry point for the web application.  It defines
the FastAPI ``app`` instance, the mockup route, and the ``main()`` CLI
function that launches the uvicorn server.

Architecture
------------
The application is stateless:

- **Configuration** is re-read from the environment for every request via
  the :func:`get_config` dependency, so the provider key can be supplied
  without code changes.  Tests replace it through
  ``app.dependency_overrides``.
- **Image generation** is delegated to
  :func:`~sitemock.core.mockup.generate_mockup`, which never raises and
  returns one of three outcomes that render themselves as JSON.
- **Method validation** happens in the route itself: the route accepts every
  method so that anything other than POST gets the JSON 405 envelope rather
  than the framework default.  Methods the route does not list (TRACE,
  CONNECT, ...) are rejected by the router and mapped onto the same envelope
  by :func:`http_error_handler`.  No CORS middleware is installed, so a
  preflight ``OPTIONS`` is answered with 405 like any other non-POST call.

Endpoints
---------
========  ========================  ==========================================
Method    Path                      Purpose
========  ========================  ==========================================
POST      ``/api/generate-image``   Generate a mockup (or placeholder) image
other     ``/api/generate-image``   ``405 {"error": "Method not allowed"}``, ``Allow: POST``
========  ========================  ==========================================

Usage
-----
CLI (installed entry point)::

    sitemock

Direct invocation::

    python -m sitemock.api.main
"""

from __future__ import annotations

import logging

from fastapi import Depends, FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from sitemock import __version__
from sitemock.core.client import GenerationClient
from sitemock.core.config import SitemockConfig, config
from sitemock.core.errors import MethodNotAllowedError
from sitemock.core.mockup import ensure_post, generate_mockup
from sitemock.core.models import Failure

logger = logging.getLogger(__name__)

GENERATE_IMAGE_PATH = "/api/generate-image"

# Every method is routed to the handler so non-POST calls get the JSON 405.
_ROUTED_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "HEAD"]

# ---------------------------------------------------------------------------
# FastAPI application instance.
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Site Mockup Generator",
    description="Turns a website description form into a rendered mockup image.",
    version=__version__,
)

# ---------------------------------------------------------------------------
# Dependencies.
# ---------------------------------------------------------------------------


def get_config() -> SitemockConfig:
    """Load settings for the current request.

    A fresh instance is built each time so environment changes (notably the
    API key) apply to the next request.
    """
    return SitemockConfig()


def get_client(settings: SitemockConfig = Depends(get_config)) -> GenerationClient:
    """Build the provider client for the current request."""
    return GenerationClient(settings)


# ---------------------------------------------------------------------------
# Error handlers.
# ---------------------------------------------------------------------------


@app.exception_handler(MethodNotAllowedError)
async def method_not_allowed_handler(request: Request, exc: MethodNotAllowedError) -> JSONResponse:
    """Render :class:`MethodNotAllowedError` as ``405 {"error": ...}``."""
    logger.info("Rejected %s %s", exc.method, request.url.path)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc)},
        headers={"Allow": "POST"},
    )


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    """Render router-level 405s with the same envelope as :class:`MethodNotAllowedError`.

    Other HTTP errors (404 and friends) keep FastAPI's default rendering.
    """
    if exc.status_code == MethodNotAllowedError.status_code:
        return await method_not_allowed_handler(request, MethodNotAllowedError(request.method))
    return await http_exception_handler(request, exc)


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Keep unexpected errors (e.g. invalid settings) inside the JSON envelope.

    Starlette runs this handler from ``ServerErrorMiddleware``: the client
    receives the Failure envelope, and the exception is then re-raised so the
    server still logs it.  Under ``TestClient`` that re-raise surfaces in the
    test unless the client is built with ``raise_server_exceptions=False``.
    """
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    result = Failure(error_message=str(exc) or exc.__class__.__name__)
    return JSONResponse(status_code=result.status_code, content=result.to_envelope())


# ---------------------------------------------------------------------------
# Routes.
# ---------------------------------------------------------------------------


@app.api_route(GENERATE_IMAGE_PATH, methods=_ROUTED_METHODS)
async def generate_image(
    request: Request,
    settings: SitemockConfig = Depends(get_config),
    client: GenerationClient = Depends(get_client),
) -> JSONResponse:
    """Generate a website mockup from ``{"formData": {...}}``.

    Returns:
        ``200 {success, imageUrl}`` on success,
        ``200 {success, imageUrl, fallback, message}`` with a placeholder, or
        ``500 {success: false, error, fallback}`` when even the placeholder
        could not be built.

    Raises:
        MethodNotAllowedError: For any method other than POST (rendered as
            405 by :func:`method_not_allowed_handler`).
    """
    ensure_post(request.method)

    body = await request.body()
    result = await generate_mockup(body, config=settings, client=client)
    return JSONResponse(status_code=result.status_code, content=result.to_envelope())


# ---------------------------------------------------------------------------
# CLI entry point.
# ---------------------------------------------------------------------------


def main() -> None:
    """Launch the uvicorn ASGI server.

    Reads host and port from :data:`~sitemock.core.config.config` (which
    loads from ``SITEMOCK_SERVER_HOST`` and ``SITEMOCK_SERVER_PORT``
    environment variables).  Defaults to ``0.0.0.0:8888``.

    This function is registered as the ``sitemock`` console script in
    ``pyproject.toml``.
    """
    import uvicorn

    logging.basicConfig(
        level=config.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logger.info("Starting Site Mockup Generator on %s:%d", config.server_host, config.server_port)

    uvicorn.run(
        "sitemock.api.main:app",
        host=config.server_host,
        port=config.server_port,
        reload=False,
    )


if __name__ == "__main__":
    main()
