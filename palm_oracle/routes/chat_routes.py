"""Follow-up chat endpoint."""

from fastapi import APIRouter, Depends

from ..chat import ChatOrchestrator
from ..models import ChatRequest, ChatResponse

router = APIRouter(prefix="/api", tags=["chat"])


def get_chat_orchestrator() -> ChatOrchestrator:
    return ChatOrchestrator()


@router.post("/chat", response_model=ChatResponse)
def chat(
    req: ChatRequest,
    orchestrator: ChatOrchestrator = Depends(get_chat_orchestrator),
) -> ChatResponse:
    return ChatResponse(response=orchestrator.produce_reply(req))
