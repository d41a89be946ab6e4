"""FastAPI routers and dependencies."""

from docfill.api.chat import router as chat_router
from docfill.api.deps import (
    get_chat_assistant,
    get_field_analyzer,
    get_session_store,
    get_text_extractor,
)
from docfill.api.documents import router as documents_router
from docfill.api.fields import router as fields_router

__all__ = [
    "chat_router",
    "documents_router",
    "fields_router",
    "get_chat_assistant",
    "get_field_analyzer",
    "get_session_store",
    "get_text_extractor",
]
