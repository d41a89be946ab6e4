"""Document assistant chat route."""

import structlog
from fastapi import APIRouter, Depends, HTTPException, status

from docfill.api.deps import get_chat_assistant
from docfill.api.schemas import ChatRequest, ChatResponse
from docfill.interfaces.fields import ModelRequestError
from docfill.strategies.llm import ChatAssistant

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/chat", tags=["chat"])


@router.post("", response_model=ChatResponse)
async def chat(
    request: ChatRequest,
    assistant: ChatAssistant = Depends(get_chat_assistant),
) -> ChatResponse:
    """Forward a user message to the document assistant.

    Raises:
        HTTPException: 400 for a blank message, 502 if the model fails.
    """
    try:
        reply = await assistant.reply(request.message, request.context)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        ) from e
    except ModelRequestError as e:
        logger.error("chat_failed", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Failed to generate response",
        ) from e

    return ChatResponse(response=reply)
