# Middleware package init
"""
UserCRUD - Middleware Package
==============================

What:  Cross-cutting concerns applied to every request.

Middleware Chain:
    Request → [Request ID] → [Logging] → Route Handler

    The request id is set first so the access log line can carry it.
"""
