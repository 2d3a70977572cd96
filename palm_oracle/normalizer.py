"""Turn raw model text into a validated Reading.

Parsing is an ordered chain of strategies. Each one either produces a
JSON object or reports why it could not; the first success wins and the
result is then validated against the Reading model.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Callable, List, NamedTuple, Optional, Sequence

from pydantic import ValidationError as PydanticValidationError

from .errors import MalformedOutputError
from .models import Reading

log = logging.getLogger("palm_oracle.normalizer")

_LEADING_FENCE = re.compile(r"^```[A-Za-z0-9_-]*[ \t]*\n?")
_TRAILING_FENCE = re.compile(r"\n?[ \t]*```$")


class ParseResult(NamedTuple):
    ok: bool
    value: Any = None
    error: Optional[str] = None


Strategy = Callable[[str], ParseResult]


def _load_object(text: str) -> ParseResult:
    try:
        value = json.loads(text)
    except (TypeError, ValueError) as e:
        return ParseResult(False, error=str(e))
    if not isinstance(value, dict):
        return ParseResult(False, error=f"expected a JSON object, got {type(value).__name__}")
    return ParseResult(True, value)


def parse_direct(raw_text: str) -> ParseResult:
    return _load_object(raw_text)


def strip_fences(raw_text: str) -> str:
    """Remove a leading ``` / ```json marker and a trailing ``` marker."""
    cleaned = raw_text.strip()
    cleaned = _LEADING_FENCE.sub("", cleaned, count=1)
    cleaned = _TRAILING_FENCE.sub("", cleaned, count=1)
    return cleaned.strip()


def parse_fenced(raw_text: str) -> ParseResult:
    return _load_object(strip_fences(raw_text))


DEFAULT_STRATEGIES: Sequence[Strategy] = (parse_direct, parse_fenced)


class ResponseNormalizer:
    def __init__(self, strategies: Sequence[Strategy] = DEFAULT_STRATEGIES):
        self.strategies = tuple(strategies)

    def parse(self, raw_text: Optional[str]) -> dict:
        if not isinstance(raw_text, str) or not raw_text.strip():
            raise MalformedOutputError(raw_text, "empty model output")

        errors: List[str] = []
        for strategy in self.strategies:
            result = strategy(raw_text)
            if result.ok:
                return result.value
            errors.append(f"{strategy.__name__}: {result.error}")

        raise MalformedOutputError(raw_text, "; ".join(errors))

    def normalize(self, raw_text: Optional[str]) -> Reading:
        data = self.parse(raw_text)
        try:
            return Reading.model_validate(data)
        except PydanticValidationError as e:
            fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
            raise MalformedOutputError(raw_text, f"reading failed validation: {fields}") from e


_default = ResponseNormalizer()


def normalize(raw_text: Optional[str]) -> Reading:
    return _default.normalize(raw_text)
