"""
Todo API - Middleware Package
==============================

Middleware Chain:
    Request -> [Request ID] -> [Logging] -> Route Handler

    The request id is set first so the access-log line of the request can
    carry it.
"""
