# Middleware package init
"""
Revision Relay — Middleware Package
====================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain:
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    - Request ID runs first so every access-log line carries the ID
    - CORS accepts every origin, method and header
"""
