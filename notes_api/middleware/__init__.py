# Middleware package init
"""
Notes API — Middleware Package
===============================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (outermost first):
    Request → [CORS] → [Request ID] → [Logging] → [Deadline] → Route Handler

    - CORS: answers preflight OPTIONS requests and adds CORS headers
    - Request ID: correlation ID for logs and the X-Request-ID header
    - Logging: one access line per request, with status and duration
    - Deadline: cancels the handler after REQUEST_TIMEOUT seconds (504)
"""
