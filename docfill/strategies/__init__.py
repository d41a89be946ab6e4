"""Concrete strategy implementations."""

from docfill.strategies.extractors import WordTextExtractor
from docfill.strategies.fields import PatternFieldDetector, PlaceholderRewriter
from docfill.strategies.llm import ChatAssistant, LLMFieldAnalyzer
from docfill.strategies.session import DocumentSession, SessionStore

__all__ = [
    "ChatAssistant",
    "DocumentSession",
    "LLMFieldAnalyzer",
    "PatternFieldDetector",
    "PlaceholderRewriter",
    "SessionStore",
    "WordTextExtractor",
]
