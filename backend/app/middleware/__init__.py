# Middleware package init
"""
Vidly Backend — Middleware Package
===================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    1. Request ID first: every later log line can include it
    2. Logging: captures status and duration on the way back out

Authentication and authorization are NOT middleware here: they apply to a
subset of routes, so they live in app/dependencies.py as FastAPI
dependencies declared per route.
"""
