from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from app.api.schemas import ChatRequestSchema
from app.application.use_cases.chat import SalonChatUseCase
from app.wiring.dependencies import get_chat_use_case


router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/chat")
def chat(
    req: ChatRequestSchema,
    uc: SalonChatUseCase = Depends(get_chat_use_case),
) -> StreamingResponse:
    messages = [m.model_dump() for m in req.messages]
    logger.info("Chat request", extra={"message_count": len(messages)})
    return StreamingResponse(uc.stream(messages), media_type="text/plain; charset=utf-8")
