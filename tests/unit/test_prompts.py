"""Unit tests for upstream message assembly."""

import pytest_check as check

from imagechat.llm.prompts import (
    ANALYSIS_PROMPT,
    SYSTEM_PROMPT,
    build_analysis_messages,
    build_chat_messages,
    to_wire,
)
from imagechat.models.schemas import Message, Role


def _conversation() -> list[Message]:
    return [
        Message(role=Role.USER, content="hi"),
        Message(role=Role.ASSISTANT, content="hello"),
        Message(role=Role.USER, content="what is in the picture?"),
    ]


class TestBuildChatMessages:
    """Tests for build_chat_messages."""

    def test_empty_conversation_is_only_system_prompt(self) -> None:
        """No messages and no image gives exactly the system prompt."""
        wire = to_wire(build_chat_messages([]))

        assert wire == [{"role": "system", "content": SYSTEM_PROMPT}]

    def test_conversation_follows_system_prompt_in_order(self) -> None:
        """Client messages come after the system prompt, order preserved."""
        wire = to_wire(build_chat_messages(_conversation()))

        check.equal(len(wire), 4)
        check.equal(wire[0]["role"], "system")
        check.equal([m["content"] for m in wire[1:]], ["hi", "hello", "what is in the picture?"])

    def test_image_inserted_between_system_and_conversation(self) -> None:
        """Image goes in its own user message right after the system prompt."""
        wire = to_wire(build_chat_messages(_conversation(), image="QUJD"))

        check.equal(len(wire), 5)
        check.equal(wire[0], {"role": "system", "content": SYSTEM_PROMPT})
        check.equal(
            wire[1],
            {
                "role": "user",
                "content": [
                    {"type": "image_url", "image_url": {"url": "data:image/jpeg;base64,QUJD"}}
                ],
            },
        )
        check.equal(wire[2]["content"], "hi")
        check.equal(wire[4]["content"], "what is in the picture?")

    def test_empty_image_is_ignored(self) -> None:
        """An empty image string adds no message."""
        assert len(build_chat_messages([], image="")) == 1

    def test_system_prompt_appears_once(self) -> None:
        """Only one system message is ever produced."""
        messages = build_chat_messages(_conversation(), image="QUJD")

        assert [m.role for m in messages].count(Role.SYSTEM) == 1


def test_analysis_message_pairs_prompt_and_image() -> None:
    """Analysis sends one user message with text then image."""
    wire = to_wire(build_analysis_messages("QUJD"))

    assert wire == [
        {
            "role": "user",
            "content": [
                {"type": "text", "text": ANALYSIS_PROMPT},
                {"type": "image_url", "image_url": {"url": "data:image/jpeg;base64,QUJD"}},
            ],
        }
    ]
