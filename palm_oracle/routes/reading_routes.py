"""Palm reading endpoint."""

from fastapi import APIRouter, Depends

from ..models import Reading, ReadingRequest
from ..reading import ReadingOrchestrator

router = APIRouter(prefix="/api", tags=["reading"])


def get_reading_orchestrator() -> ReadingOrchestrator:
    return ReadingOrchestrator()


@router.post("/read-palm", response_model=Reading)
def read_palm(
    req: ReadingRequest,
    orchestrator: ReadingOrchestrator = Depends(get_reading_orchestrator),
) -> Reading:
    """Read a palm photo. Falls back to a local reading whenever the model can't help."""
    return orchestrator.produce_reading(req)
