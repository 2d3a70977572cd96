from typing import Callable, Optional
import logging

from . import content_bank as bank
from .ai import ModelReadingClient, build_reading_prompt, make_openai_client
from .config import Settings, load_settings
from .errors import ExternalServiceError, MalformedOutputError, ValidationError
from .models import LineReading, Reading, ReadingRequest
from .normalizer import ResponseNormalizer
from .utils.seed import Clock, derive_streams, pick, seed_from

log = logging.getLogger("palm_oracle.reading")


# -------------------------------------------------------------------
# FALLBACK (NO MODEL)
# -------------------------------------------------------------------

def _context_clause(
    template: bank.OverallTemplate,
    dominant_hand: Optional[str],
    focus_area: Optional[str],
) -> str:
    hand_clause = getattr(template, dominant_hand) if dominant_hand in ("left", "right") else None
    focus_clause = template.focus.format(focus=focus_area) if focus_area else None

    if template.keyed_on == "focus":
        return focus_clause or hand_clause or template.generic
    return hand_clause or focus_clause or template.generic


def synthesize(
    dominant_hand: Optional[str] = None,
    focus_area: Optional[str] = None,
    clock: Optional[Clock] = None,
) -> Reading:
    """Build a complete reading from the content bank.

    One clock sample seeds every choice: observations use stream A,
    meanings stream B, the overall reading stream C and the advice stream A
    again. Two calls in the same millisecond with the same inputs return
    the same reading.
    """
    streams = derive_streams(seed_from(clock))
    focus_area = (focus_area or "").strip() or None

    def line(observations, meanings) -> LineReading:
        return LineReading(observation=pick(observations, streams.a), meaning=pick(meanings, streams.b))

    template = pick(bank.OVERALL_TEMPLATES, streams.c)
    overall = template.text.format(clause=_context_clause(template, dominant_hand, focus_area))

    return Reading(
        heartLine=line(bank.HEART_OBSERVATIONS, bank.HEART_MEANINGS),
        headLine=line(bank.HEAD_OBSERVATIONS, bank.HEAD_MEANINGS),
        lifeLine=line(bank.LIFE_OBSERVATIONS, bank.LIFE_MEANINGS),
        fateLine=LineReading(**bank.FATE_LINE),
        overallReading=overall,
        advice=pick(bank.ADVICE, streams.a),
    )


# -------------------------------------------------------------------
# ORCHESTRATION
# -------------------------------------------------------------------

class ReadingOrchestrator:
    """Decide between the model and the local synthesizer; always return a Reading.

    The only failure that escapes is a missing image.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        client_factory: Optional[Callable[[Settings], object]] = None,
        normalizer: Optional[ResponseNormalizer] = None,
        clock: Optional[Clock] = None,
        sleep: Optional[Callable[[float], None]] = None,
    ):
        self.settings = settings or load_settings()
        self.client_factory = client_factory or make_openai_client
        self.normalizer = normalizer or ResponseNormalizer()
        self.clock = clock
        self.sleep = sleep

    def _fallback(self, req: ReadingRequest) -> Reading:
        return synthesize(req.dominantHand, req.focusArea, clock=self.clock)

    def _from_model(self, req: ReadingRequest) -> Reading:
        client = ModelReadingClient(
            self.client_factory(self.settings),
            model=self.settings.reading_model,
            base_delay=self.settings.retry_delay,
            sleep=self.sleep,
        )
        prompt = build_reading_prompt(req.dominantHand, req.focusArea)
        raw = client.generate(prompt, req.image, max_attempts=self.settings.max_attempts)
        return self.normalizer.normalize(raw)

    def produce_reading(self, req: ReadingRequest) -> Reading:
        if not req.image or not req.image.strip():
            raise ValidationError("No image provided")

        if self.settings.offline:
            log.info("No API key or placeholder key configured, using local reading")
            return self._fallback(req)

        try:
            return self._from_model(req)
        except ExternalServiceError as e:
            log.error("Reading model unavailable after %d attempt(s): %s", e.attempts, e)
        except MalformedOutputError as e:
            log.warning("Unusable model output (%s). Raw text: %r", e.reason, e.raw_text)
        except Exception:
            log.exception("Unexpected failure in model reading path")

        log.info("Using local fallback reading generator")
        return self._fallback(req)


def produce_reading(req: ReadingRequest) -> Reading:
    return ReadingOrchestrator().produce_reading(req)
