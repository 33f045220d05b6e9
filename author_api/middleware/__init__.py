# Middleware package init
"""
Author API: Middleware Package
================================

Middleware Chain:
    Request → [Request ID] → [Logging] → Route Handler

    The request ID is generated first so the access log line of every
    request carries it.
"""
