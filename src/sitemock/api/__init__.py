"""Site Mockup Generator — FastAPI REST API layer.

Modules
-------
main
    FastAPI application with the mockup route, request dependencies and the
    ``main()`` CLI entry point.
"""
