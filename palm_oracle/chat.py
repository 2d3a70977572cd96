"""Follow-up chat about a reading, with a keyword-based local fallback."""

from __future__ import annotations

import logging
import random
from typing import Any, Callable, Dict, List, Optional, Sequence

from . import content_bank as bank
from .ai import make_openai_client
from .config import Settings, load_settings
from .errors import ExternalServiceError, ValidationError
from .models import ChatRequest, ChatTurn, Reading

log = logging.getLogger("palm_oracle.chat")


def classify_message(message: str) -> str:
    """Return the chat category for a message: career, love, destiny or general."""
    message_lower = message.lower()
    for category in bank.CHAT_CATEGORY_ORDER:
        if any(keyword in message_lower for keyword in bank.CHAT_KEYWORDS[category]):
            return category
    return "general"


def fallback_reply(message: str, rng: Optional[random.Random] = None) -> str:
    """Pick a canned reply from the message's category pool."""
    pool = bank.CHAT_RESPONSES[classify_message(message)]
    return (rng or random).choice(pool)


def _text(value: Any) -> Optional[str]:
    return value.strip() if isinstance(value, str) and value.strip() else None


def _line_meaning(reading: Dict[str, Any], key: str) -> Optional[str]:
    line = reading.get(key)
    return _text(line.get("meaning")) if isinstance(line, dict) else None


def build_system_prompt(reading: Optional[Dict[str, Any]]) -> str:
    """Oracle persona grounded in whatever parts of the reading are usable."""
    if isinstance(reading, Reading):
        reading = reading.model_dump()
    if not isinstance(reading, dict):
        reading = {}

    heart = _line_meaning(reading, "heartLine") or "Not analyzed"
    head = _line_meaning(reading, "headLine") or "Not analyzed"
    life = _line_meaning(reading, "lifeLine") or "Not analyzed"
    fate = _line_meaning(reading, "fateLine") or "Not visible/analyzed"
    overall = _text(reading.get("overallReading")) or "Not analyzed"
    advice = _text(reading.get("advice")) or "Not analyzed"

    return f"""You are a mystical palm reading oracle who has just completed a reading for a seeker.
Your personality: wise, slightly cryptic but encouraging, deeply spiritual. Speak of "the lines of destiny", "the mounts of your palm", "the spirits" and "cosmic energy".

The reading you gave:
- Heart Line: {heart}
- Head Line: {head}
- Life Line: {life}
- Fate Line: {fate}
- Overall Reading: {overall}
- Initial Wisdom: {advice}

Keep answers concise (2-4 sentences) unless asked for more detail. Never break character."""


def build_messages(reading: Optional[Dict[str, Any]], history: Sequence[ChatTurn], message: str) -> List[Dict[str, str]]:
    """System prompt, then prior turns in conversation order, then the new message."""
    messages = [{"role": "system", "content": build_system_prompt(reading)}]
    messages.extend({"role": turn.role, "content": turn.content} for turn in history)
    messages.append({"role": "user", "content": message})
    return messages


class ChatOrchestrator:
    def __init__(
        self,
        settings: Optional[Settings] = None,
        client_factory: Optional[Callable[[Settings], Any]] = None,
        rng: Optional[random.Random] = None,
    ):
        self.settings = settings or load_settings()
        self.client_factory = client_factory or make_openai_client
        self.rng = rng

    def _from_model(self, req: ChatRequest) -> str:
        client = self.client_factory(self.settings)
        response = client.chat.completions.create(
            model=self.settings.chat_model,
            messages=build_messages(req.reading, req.chatHistory, req.message),
            max_tokens=300,
            temperature=0.8,
        )
        text = response.choices[0].message.content if response.choices else None
        if not text or not text.strip():
            raise ExternalServiceError("chat model returned an empty response", attempts=1)
        return text.strip()

    def produce_reply(self, req: ChatRequest) -> str:
        if not req.message or not req.message.strip():
            raise ValidationError("No message provided")

        if self.settings.offline:
            log.info("No API key, using local chat fallback")
            return fallback_reply(req.message, self.rng)

        try:
            return self._from_model(req)
        except Exception:
            log.exception("Chat model failed, using local chat fallback")
        return fallback_reply(req.message, self.rng)


def produce_reply(req: ChatRequest) -> str:
    return ChatOrchestrator().produce_reply(req)
