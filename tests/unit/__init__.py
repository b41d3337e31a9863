"""Unit tests for individual components in isolation.

Coverage:
    - encoding/: Image validation and base64 encoding
    - models/: Chat request validation
    - llm/: Configuration, prompts, completion service, error tables
    - ui/: Session state, HTTP client, rendering

Uses mocks for external services when needed. Leverages pytest-check for
multiple assertions per test.
"""
