# Middleware package init
"""
PetPal Backend — Middleware Package
=====================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (outermost first):
    Request → [Session] → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    1. Session: decodes the signed session cookie into request.session
    2. Request ID: correlation id for logs and error envelopes
    3. Logging: access line with status and duration
"""
