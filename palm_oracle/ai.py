from typing import Any, Callable, Dict, List, Optional
import logging

from openai import OpenAI

from .config import Settings
from .errors import ExternalServiceError
from .utils.retry import RetryExhausted, RetryPolicy, linear_delay

log = logging.getLogger("palm_oracle.ai")

DEFAULT_MAX_ATTEMPTS = 2
DEFAULT_BASE_DELAY = 0.5


def make_openai_client(settings: Settings) -> OpenAI:
    # The SDK's own retries are disabled; ModelReadingClient owns the retry budget.
    return OpenAI(api_key=settings.api_key, timeout=settings.request_timeout, max_retries=0)


def as_data_uri(image_data: str, mime_type: str = "image/jpeg") -> str:
    """Accept either a full data-URI or bare base64 and return a data-URI."""
    image_data = image_data.strip()
    if image_data.startswith("data:"):
        return image_data
    return f"data:{mime_type};base64,{image_data}"


# -------------------------------------------------------------------
# PROMPT
# -------------------------------------------------------------------

READING_SHAPE = """{
  "heartLine": {"observation": "string", "meaning": "string"},
  "headLine": {"observation": "string", "meaning": "string"},
  "lifeLine": {"observation": "string", "meaning": "string"},
  "fateLine": {"observation": "string or null", "meaning": "string or null"},
  "overallReading": "string (2-3 sentences)",
  "advice": "string (a piece of wisdom)"
}"""


def personal_context(dominant_hand: Optional[str], focus_area: Optional[str]) -> str:
    parts: List[str] = []
    if dominant_hand:
        parts.append(f"The seeker's dominant hand is their {dominant_hand} hand.")
        if dominant_hand == "right":
            parts.append(
                "The right hand is read as the present and future: what the person is actively creating."
            )
        else:
            parts.append(
                "The left hand is read as inherited traits and potential: the person's innate gifts."
            )
    if focus_area:
        parts.append(
            f"The seeker is especially interested in: {focus_area}. Give this area extra weight in the reading."
        )
    return " ".join(parts)


def build_reading_prompt(dominant_hand: Optional[str] = None, focus_area: Optional[str] = None) -> str:
    context = personal_context(dominant_hand, focus_area)
    return f"""You are an expert palm reader and mystical oracle. Study this palm image and give a detailed reading.

{context}

Consider:
1. Major lines: heart (emotions, love), head (intellect, decisions), life (vitality and change, never lifespan), fate (direction, destiny; only if visible).
2. Minor lines if visible: sun line (success, creativity), mercury line (communication, business).
3. Mounts: Jupiter (ambition), Venus (love, passion), Moon (imagination, intuition).

For each line describe concrete observations (depth, length, curves, breaks, branches) and what they mean.

Respond ONLY with valid JSON in exactly this shape:
{READING_SHAPE}

If the fate line is not visible, set both of its fields to null.
Be mystical and engaging while staying insightful. Favor positive, growth-oriented interpretations."""


# -------------------------------------------------------------------
# MODEL CLIENT
# -------------------------------------------------------------------

class ModelReadingClient:
    """Vision-model call with a bounded, sequential retry budget.

    `client` is anything exposing `chat.completions.create` with the OpenAI
    SDK signature, which lets tests swap in a fake.
    """

    def __init__(
        self,
        client: Any,
        model: str = "gpt-4o-mini",
        base_delay: float = DEFAULT_BASE_DELAY,
        sleep: Optional[Callable[[float], None]] = None,
    ):
        self.client = client
        self.model = model
        self.base_delay = base_delay
        self.sleep = sleep

    def _policy(self, max_attempts: int) -> RetryPolicy:
        kwargs: Dict[str, Any] = {"delay": linear_delay(self.base_delay)}
        if self.sleep is not None:
            kwargs["sleep"] = self.sleep
        return RetryPolicy(max_attempts=max_attempts, **kwargs)

    def _call_once(self, prompt: str, image_url: str) -> str:
        response = self.client.chat.completions.create(
            model=self.model,
            messages=[
                {
                    "role": "user",
                    "content": [
                        {"type": "text", "text": prompt},
                        {"type": "image_url", "image_url": {"url": image_url}},
                    ],
                }
            ],
            response_format={"type": "json_object"},
            temperature=0.8,
        )
        text = response.choices[0].message.content if response.choices else None
        if not text or not text.strip():
            raise ExternalServiceError("model returned an empty response")
        return text

    def generate(self, prompt: str, image_data: str, max_attempts: int = DEFAULT_MAX_ATTEMPTS) -> str:
        policy = self._policy(max_attempts)
        image_url = as_data_uri(image_data)
        try:
            return policy.run(lambda: self._call_once(prompt, image_url), label="reading model")
        except RetryExhausted as e:
            raise ExternalServiceError(
                f"model call failed after {e.attempts} attempt(s): {e.last_error}",
                attempts=e.attempts,
            ) from e.last_error
