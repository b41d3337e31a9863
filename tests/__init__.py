"""Test package for Image Chat.

Structure:
    - unit/: Individual function and class tests
    - integration/: HTTP endpoint tests against the real FastAPI app

The completion API is never called: tests replace the OpenAI client with
mocks and raise real SDK exception types. Leverages pytest with
pytest-check for soft assertions.
"""
