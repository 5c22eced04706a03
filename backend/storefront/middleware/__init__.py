# Middleware package init
"""
Storefront Backend: Middleware Package
=======================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging + request count] → [CORS] → Route Handler

    1. Request ID first: every later log line can carry it
    2. Logging: counts the request and logs method, path, status, duration

    The order is reversed for responses, so the logging middleware sees the
    final status code and the request ID is already in the response headers.
"""
