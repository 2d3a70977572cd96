"""Tests for follow-up chat and its keyword fallback."""

import random

import pytest

from palm_oracle import content_bank as bank
from palm_oracle.chat import ChatOrchestrator, build_messages, build_system_prompt, classify_message, fallback_reply
from palm_oracle.errors import ValidationError
from palm_oracle.models import ChatRequest, ChatTurn, Reading

from conftest import VALID_READING, FakeClient, make_settings


@pytest.mark.parametrize("message,category", [
    ("What about my job?", "career"),
    ("Will I find love?", "love"),
    ("Tell me about my destiny", "destiny"),
    ("Hello", "general"),
    ("MONEY troubles", "career"),
    ("Is my love life tied to my work?", "career"),
    ("My heart and my future", "love"),
])
def test_classify_message(message, category):
    assert classify_message(message) == category


def test_fallback_reply_comes_from_category_pool():
    rng = random.Random(7)
    for _ in range(20):
        assert fallback_reply("Will I find love?", rng) in bank.CHAT_RESPONSES["love"]
        assert fallback_reply("Hello", rng) in bank.CHAT_RESPONSES["general"]


def test_history_is_replayed_in_order():
    reading = Reading.model_validate(VALID_READING)
    history = [
        ChatTurn(role="user", content="first"),
        ChatTurn(role="assistant", content="second"),
        ChatTurn(role="user", content="third"),
    ]
    messages = build_messages(reading, history, "fourth")

    assert messages[0]["role"] == "system"
    assert "You love openly." in messages[0]["content"]
    assert "Not visible/analyzed" in messages[0]["content"]
    assert [(m["role"], m["content"]) for m in messages[1:]] == [
        ("user", "first"),
        ("assistant", "second"),
        ("user", "third"),
        ("user", "fourth"),
    ]


def test_system_prompt_without_reading():
    messages = build_messages(None, [], "hi")
    assert "Heart Line: Not analyzed" in messages[0]["content"]


class TestChatOrchestrator:
    def test_missing_message_is_a_validation_error(self):
        orchestrator = ChatOrchestrator(settings=make_settings(api_key=None))
        for req in (ChatRequest(), ChatRequest(message="  ")):
            with pytest.raises(ValidationError) as info:
                orchestrator.produce_reply(req)
            assert info.value.message == "No message provided"

    def test_offline_uses_fallback(self):
        fake = FakeClient([])
        orchestrator = ChatOrchestrator(
            settings=make_settings(api_key="your_openai_api_key_here"),
            client_factory=lambda _s: fake,
        )
        reply = orchestrator.produce_reply(ChatRequest(message="What about my job?"))
        assert reply in bank.CHAT_RESPONSES["career"]
        assert fake.calls == []

    def test_model_reply(self):
        fake = FakeClient(["  The spirits smile on your work.  "])
        orchestrator = ChatOrchestrator(settings=make_settings(), client_factory=lambda _s: fake)
        req = ChatRequest(
            message="And my career?",
            reading=Reading.model_validate(VALID_READING),
            chatHistory=[ChatTurn(role="user", content="hi"), ChatTurn(role="assistant", content="greetings")],
        )

        assert orchestrator.produce_reply(req) == "The spirits smile on your work."
        call = fake.calls[0]
        assert call["model"] == "test-chat"
        assert [m["content"] for m in call["messages"][1:]] == ["hi", "greetings", "And my career?"]

    @pytest.mark.parametrize("outcome", [ConnectionError("down"), ""])
    def test_model_failure_uses_fallback(self, outcome):
        fake = FakeClient([outcome])
        orchestrator = ChatOrchestrator(settings=make_settings(), client_factory=lambda _s: fake)
        reply = orchestrator.produce_reply(ChatRequest(message="Tell me about my destiny"))
        assert reply in bank.CHAT_RESPONSES["destiny"]
        assert len(fake.calls) == 1


def test_system_prompt_tolerates_partial_reading():
    partial = {
        "heartLine": {"observation": "x", "meaning": None},
        "headLine": "not a pair",
        "lifeLine": {"observation": "arc", "meaning": "Strong vitality."},
        "overallReading": "o",
    }
    prompt = build_system_prompt(partial)
    assert "Heart Line: Not analyzed" in prompt
    assert "Head Line: Not analyzed" in prompt
    assert "Life Line: Strong vitality." in prompt
    assert "Overall Reading: o" in prompt
    assert "Initial Wisdom: Not analyzed" in prompt


def test_chat_request_keeps_odd_reading_as_grounding():
    req = ChatRequest(message="hi", reading={"heartLine": {"observation": "x", "meaning": None}})
    assert req.reading == {"heartLine": {"observation": "x", "meaning": None}}
    assert ChatRequest(message="hi", reading=["not", "a", "reading"]).reading is None
    assert ChatRequest(message="hi", reading=Reading.model_validate(VALID_READING)).reading == VALID_READING
