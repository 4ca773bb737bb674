# Routes package init
"""
Revision Relay — API Routes Package
====================================

What:  HTTP route handlers that accept requests and return responses.

Route Inventory:
    - summary.py:  POST /api/generate-summary   (notes → HTML revision sheet)
    - upload.py:   POST /api/upload-pdf         (file → public URL)
    - health.py:   GET  /health                 (service health check)
    - errors.py:   relay failure → HTTP status mapping

Routes stay thin: extract the request data, call a relay, turn the relay
outcome into a response.
"""
