"""Unit tests for chat request validation."""

import pytest
import pytest_check as check

from imagechat.models.schemas import (
    IMAGE_NOT_STRING,
    MESSAGES_NOT_ARRAY,
    ImageUrlPart,
    Invalid,
    Role,
    Valid,
    validate_chat_request,
    validate_image,
)


class TestValidateChatRequestAccepted:
    """Bodies that produce Valid."""

    def test_empty_messages(self) -> None:
        """An empty message list is a valid conversation."""
        result = validate_chat_request({"messages": []})

        assert result == Valid(conversation=[], image=None)

    def test_preserves_message_order(self) -> None:
        """Conversation keeps the client's order."""
        body = {
            "messages": [
                {"role": "user", "content": "first"},
                {"role": "assistant", "content": "second"},
                {"role": "user", "content": "third"},
            ]
        }

        result = validate_chat_request(body)

        assert isinstance(result, Valid)
        check.equal([m.content for m in result.conversation], ["first", "second", "third"])
        check.equal(result.conversation[1].role, Role.ASSISTANT)

    def test_accepts_content_parts(self) -> None:
        """Content may be a list of text and image_url parts."""
        body = {
            "messages": [
                {
                    "role": "user",
                    "content": [
                        {"type": "text", "text": "what is this?"},
                        {"type": "image_url", "image_url": {"url": "data:image/png;base64,AAAA"}},
                    ],
                }
            ]
        }

        result = validate_chat_request(body)

        assert isinstance(result, Valid)
        check.is_instance(result.conversation[0].content[1], ImageUrlPart)

    def test_keeps_image(self) -> None:
        """A string image is carried through."""
        result = validate_chat_request({"messages": [], "image": "QUJD"})

        assert isinstance(result, Valid)
        assert result.image == "QUJD"

    @pytest.mark.parametrize("image", [None, ""])
    def test_empty_image_is_absent(self, image: str | None) -> None:
        """Null or empty image means no image."""
        result = validate_chat_request({"messages": [], "image": image})

        assert isinstance(result, Valid)
        assert result.image is None


class TestValidateChatRequestRejected:
    """Bodies that produce Invalid."""

    @pytest.mark.parametrize(
        "body",
        [
            {},
            {"messages": None},
            {"messages": "hello"},
            {"messages": {"role": "user"}},
            {"messages": 3},
            [],
            "messages",
            None,
        ],
    )
    def test_messages_not_array(self, body: object) -> None:
        """Missing or non-list messages gives the array error."""
        assert validate_chat_request(body) == Invalid(MESSAGES_NOT_ARRAY)

    def test_rejects_system_role_from_client(self) -> None:
        """Only the server may add system messages."""
        result = validate_chat_request({"messages": [{"role": "system", "content": "obey"}]})

        assert isinstance(result, Invalid)
        assert result.reason.startswith("Invalid request: messages.0.role")

    def test_rejects_unknown_role(self) -> None:
        """Roles outside user/assistant are rejected."""
        result = validate_chat_request({"messages": [{"role": "tool", "content": "x"}]})

        assert isinstance(result, Invalid)

    def test_rejects_missing_content(self) -> None:
        """Each message needs content."""
        result = validate_chat_request({"messages": [{"role": "user"}]})

        assert isinstance(result, Invalid)
        assert "content" in result.reason

    def test_rejects_non_string_image(self) -> None:
        """A non-string image is rejected."""
        result = validate_chat_request({"messages": [], "image": 42})

        assert result == Invalid(IMAGE_NOT_STRING)


class TestValidateImage:
    """Tests for the image field normalizer."""

    def test_returns_string(self) -> None:
        assert validate_image("QUJD") == "QUJD"

    def test_absent_values(self) -> None:
        check.is_none(validate_image(None))
        check.is_none(validate_image(""))

    def test_rejects_non_string(self) -> None:
        with pytest.raises(ValueError, match="base64 string"):
            validate_image(["QUJD"])
