"""Integration tests for the proxy endpoints.

Coverage:
    - Request decoding and validation through the real app
    - Upstream message assembly as seen by the OpenAI client
    - Error translation into ``{"error": ...}`` bodies and status codes
    - Middleware (CORS) and health route

Uses httpx AsyncClient with ASGITransport; only the OpenAI client is mocked.
"""
