"""NiceGUI interface - thin browser layer for chat interactions.

Responsibilities:
    - Chat message display with markdown rendering
    - Image upload, validation and staging (one image at a time)
    - In-memory conversation state, lost on reload
    - Inline, dismissible error banner

Contains minimal business logic. Delegates all model calls to the API.
"""
