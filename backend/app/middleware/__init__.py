# Middleware package init
"""
Product Catalog API — Middleware Package
==========================================

Middleware Chain:
    Request → [Request ID] → [Logging] → [CORS] → Route Handler

    Request ID runs first so the access log line and every exception
    handler see the same correlation ID.
"""
