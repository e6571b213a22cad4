# Middleware package init
"""
Verse Graph API — Middleware Package
======================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [CORS] → Route Handler

    1. Request ID: Generate (or accept) a correlation ID for logs and errors
    2. Logging: Log method, path, status, duration with that ID
    3. CORS: Applied by FastAPI's CORSMiddleware (handles preflight)

    Responses travel back through the chain in reverse, so the request ID
    header is present on every response, error responses included.
"""
