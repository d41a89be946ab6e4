"""Model-backed collaborators: field analysis and chat."""

from docfill.strategies.llm.analyzer import LLMFieldAnalyzer
from docfill.strategies.llm.chat import ChatAssistant

__all__ = [
    "ChatAssistant",
    "LLMFieldAnalyzer",
]
