"""FastAPI dependencies for dependency injection.

Provides reusable dependencies for routes including:
- The document session store
- Model-backed collaborators (field analyzer, chat assistant)
- The document text extractor
"""

import structlog
from fastapi import Depends, HTTPException, Request, status

from docfill.core.config import Settings, get_settings
from docfill.interfaces.extractor import BaseTextExtractor
from docfill.interfaces.fields import BaseFieldAnalyzer
from docfill.strategies.extractors import WordTextExtractor
from docfill.strategies.llm import ChatAssistant, LLMFieldAnalyzer
from docfill.strategies.session import SessionStore

logger = structlog.get_logger(__name__)


def get_session_store(request: Request) -> SessionStore:
    """Dependency returning the application's session store."""
    return request.app.state.sessions


def get_text_extractor() -> BaseTextExtractor:
    """Dependency returning the document text extractor."""
    return WordTextExtractor()


def _require_model_api(settings: Settings) -> None:
    if not settings.llm_enabled:
        logger.warning("model_request_rejected", reason="OPENAI_API_KEY is not configured")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Language model is not configured",
        )


def get_field_analyzer(
    settings: Settings = Depends(get_settings),
) -> BaseFieldAnalyzer:
    """Dependency returning a model-backed field analyzer.

    Raises:
        HTTPException: 503 if no model API key is configured.
    """
    _require_model_api(settings)
    return LLMFieldAnalyzer(
        api_key=settings.openai_api_key,
        base_url=settings.openai_base_url,
        model=settings.llm_chat_model,
        temperature=settings.llm_temperature,
        timeout=settings.llm_timeout_seconds,
    )


def get_chat_assistant(
    settings: Settings = Depends(get_settings),
) -> ChatAssistant:
    """Dependency returning the document assistant.

    Raises:
        HTTPException: 503 if no model API key is configured.
    """
    _require_model_api(settings)
    return ChatAssistant(
        api_key=settings.openai_api_key,
        base_url=settings.openai_base_url,
        model=settings.llm_chat_model,
        timeout=settings.llm_timeout_seconds,
    )
