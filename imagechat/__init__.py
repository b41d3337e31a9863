"""Image Chat - web chat that forwards text and images to a hosted LLM.

Combines FastAPI for the proxy endpoints, the OpenAI SDK for completions,
NiceGUI for the browser interface, and Pydantic for data validation.

Components:
    - api: HTTP endpoints and error rendering
    - llm: Completion API configuration, prompts and calls
    - encoding: Image validation and base64 staging
    - ui: Web interface for chat interactions
    - models: Request/response schemas
"""

__version__ = "0.1.0"
