"""Per-browser-session chat state.

Holds the conversation sent upstream, the staged image, and the token that
allows at most one chat request in flight. Nothing here is persisted.
"""

import uuid
from datetime import datetime


class RequestInFlightError(Exception):
    """Raised when a send is attempted while a reply is still outstanding."""

    pass


class ChatSession:
    """Manages chat state for a user session.

    Attributes:
        messages: Conversation in send order, as ``{"role", "content"}`` dicts.
        times: Display timestamp for each entry in ``messages``.
        staged_image: Base64 image waiting to go out with the next send.
        error: Last error shown in the inline banner, empty when dismissed.
    """

    def __init__(self) -> None:
        self.messages: list[dict] = []
        self.times: list[str] = []
        self.staged_image: str | None = None
        self.error: str = ""
        self._request_token: str | None = None

    @property
    def is_waiting(self) -> bool:
        """Whether a chat request is outstanding."""
        return self._request_token is not None

    def add_message(self, role: str, content: str) -> None:
        self.messages.append({"role": role, "content": content})
        self.times.append(datetime.now().strftime("%I:%M %p"))

    def stage_image(self, image: str) -> None:
        """Stage an image, replacing any previously staged one."""
        self.staged_image = image

    def clear_staged_image(self) -> None:
        self.staged_image = None

    def begin_request(self) -> str:
        """Claim the session's single request slot.

        Returns:
            Token to pass to ``finish_request``.

        Raises:
            RequestInFlightError: If another request holds the slot.
        """
        if self._request_token is not None:
            raise RequestInFlightError("A reply is already being generated")
        self._request_token = str(uuid.uuid4())
        return self._request_token

    def holds(self, token: str) -> bool:
        """Whether ``token`` is the currently outstanding request."""
        return token == self._request_token

    def finish_request(self, token: str) -> None:
        """Release the slot claimed by ``begin_request``.

        A stale token (e.g. after ``reset``) is ignored.
        """
        if token == self._request_token:
            self._request_token = None

    def payload(self) -> dict:
        """Body for POST /api/chat from the current state."""
        return {"messages": list(self.messages), "image": self.staged_image}

    def record_reply(self, reply: str) -> None:
        """Append a successful reply and consume the staged image."""
        self.add_message("assistant", reply)
        self.clear_staged_image()
        self.error = ""

    def reset(self) -> None:
        """Start a new conversation."""
        self.messages.clear()
        self.times.clear()
        self.staged_image = None
        self.error = ""
        self._request_token = None
