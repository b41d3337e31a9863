"""FastAPI endpoints for the image chat proxy.

JSON routes that validate the browser's request and forward it to the
completion API. Every failure is returned as ``{"error": ...}``.

Endpoints:
    - GET /health: Service health status
    - POST /api/chat: Conversation (and optional image) to assistant reply
    - POST /api/analyze-image: Image to free-text description
"""
