# Middleware package init
"""
Precisely Documents: Middleware Package
========================================

Middleware Chain:
    Request → [Request ID] → [Access Logging] → Route Handler

    Request ID runs first so every access log line, and every log line the
    handler emits, can be correlated through `request_id_var`.
"""
