"""Abstract base classes and errors for the document field engine."""

from docfill.interfaces.extractor import BaseTextExtractor, ExtractedDocument, ExtractionError
from docfill.interfaces.fields import (
    AnalysisParseError,
    ModelRequestError,
    BaseFieldAnalyzer,
    BaseFieldDetector,
    BasePlaceholderRewriter,
    NoFieldsError,
    SessionNotFoundError,
    SpanOutOfRangeError,
)

__all__ = [
    "AnalysisParseError",
    "ModelRequestError",
    "BaseFieldAnalyzer",
    "BaseFieldDetector",
    "BasePlaceholderRewriter",
    "BaseTextExtractor",
    "ExtractedDocument",
    "ExtractionError",
    "NoFieldsError",
    "SessionNotFoundError",
    "SpanOutOfRangeError",
]
