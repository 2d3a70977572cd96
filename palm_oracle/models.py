from pydantic import AfterValidator, BaseModel, ConfigDict, Field, field_validator
from typing import Annotated, Any, Dict, List, Optional, Literal

DominantHand = Literal["left", "right"]
ChatRole = Literal["user", "assistant"]


def _not_blank(value: str) -> str:
    # validates only; the value is returned unchanged
    if not value.strip():
        raise ValueError("must not be blank")
    return value


NonBlankStr = Annotated[str, AfterValidator(_not_blank)]


class LineReading(BaseModel):
    model_config = ConfigDict(frozen=True)

    observation: NonBlankStr
    meaning: NonBlankStr


def _empty_pair_to_none(value: Any) -> Any:
    # {"observation": null, "meaning": null} is how the model reports an unseen line
    if isinstance(value, dict):
        observation = value.get("observation")
        meaning = value.get("meaning")
        if not str(observation or "").strip() and not str(meaning or "").strip():
            return None
    return value


class Reading(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    heartLine: Optional[LineReading] = None
    headLine: Optional[LineReading] = None
    lifeLine: Optional[LineReading] = None
    fateLine: Optional[LineReading] = None
    overallReading: NonBlankStr
    advice: NonBlankStr

    @field_validator("heartLine", "headLine", "lifeLine", "fateLine", mode="before")
    @classmethod
    def _drop_empty_pairs(cls, value: Any) -> Any:
        return _empty_pair_to_none(value)


class ReadingRequest(BaseModel):
    image: Optional[str] = None
    dominantHand: Optional[DominantHand] = None
    focusArea: Optional[str] = None

    @field_validator("dominantHand", "focusArea", mode="before")
    @classmethod
    def _blank_is_unset(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value


class ChatTurn(BaseModel):
    model_config = ConfigDict(frozen=True)

    role: ChatRole
    content: str


class ChatRequest(BaseModel):
    message: Optional[str] = None
    # Grounding only; a partial or odd reading must not reject the chat turn.
    reading: Optional[Dict[str, Any]] = None
    chatHistory: List[ChatTurn] = Field(default_factory=list)

    @field_validator("reading", mode="before")
    @classmethod
    def _lenient_reading(cls, value: Any) -> Any:
        if isinstance(value, BaseModel):
            return value.model_dump()
        return value if isinstance(value, dict) else None


class ChatResponse(BaseModel):
    response: str


class ArchiveCreate(BaseModel):
    id: Optional[str] = Field(None, min_length=1, max_length=100)
    reading: Reading
    image: Optional[str] = None
    dominantHand: Optional[DominantHand] = None


class ArchiveEntry(BaseModel):
    id: str
    date: str
    reading: Reading
    image: Optional[str] = None
    dominantHand: Optional[DominantHand] = None


class HealthResponse(BaseModel):
    ok: bool = True
    mode: Literal["model", "offline"]
