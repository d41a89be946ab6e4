"""Field detection, analysis and rewrite interfaces.

Defines abstract base classes for the field engine so that detection and
analysis strategies are interchangeable at runtime.
"""

from abc import ABC, abstractmethod
from typing import Any


class BaseFieldDetector(ABC):
    """Abstract base class for positional field detection strategies.

    Detectors are pure: the same text always yields the same descriptors,
    in the same order, with spans into that exact text.
    """

    @abstractmethod
    def detect(self, text: str) -> list[Any]:
        """Detect fillable fields in plain text.

        Args:
            text: The plain-text buffer to scan.

        Returns:
            List of FieldDescriptor objects carrying positions into ``text``.
        """


class BasePlaceholderRewriter(ABC):
    """Abstract base class for placeholder substitution strategies."""

    @abstractmethod
    def rewrite(self, content: str, fields: list[Any]) -> str:
        """Replace field occurrences in ``content`` with placeholder tokens.

        Args:
            content: Plain text or markup to rewrite. Never mutated.
            fields: FieldDescriptor objects, positional or name-only.

        Returns:
            The rewritten content.

        Raises:
            SpanOutOfRangeError: If a positional span does not fit ``content``.
        """


class BaseFieldAnalyzer(ABC):
    """Abstract base class for model-backed field analysis.

    The analysis itself is delegated to an external model; implementations
    are responsible for validating the shape of its reply.
    """

    @abstractmethod
    async def request_analysis(self, document_text: str) -> str:
        """Send the document to the model and return its raw reply.

        Args:
            document_text: Extracted plain text of the document.

        Returns:
            The unparsed reply text.

        Raises:
            ModelRequestError: If the model could not be reached.
        """

    @abstractmethod
    async def analyze(self, document_text: str) -> list[Any]:
        """Ask the model which fillable fields ``document_text`` contains.

        Args:
            document_text: Extracted plain text of the document.

        Returns:
            List of FieldDescriptor objects without positions.

        Raises:
            AnalysisParseError: If the reply is not a valid fields document.
            ModelRequestError: If the model could not be reached.
        """


class SpanOutOfRangeError(IndexError):
    """Raised when a positional span does not fit the content being rewritten."""

    pass


class AnalysisParseError(ValueError):
    """Raised when a model analysis reply cannot be turned into fields."""

    pass


class ModelRequestError(RuntimeError):
    """Raised when a request to the language model fails."""

    pass


class NoFieldsError(ValueError):
    """Raised when placeholders are requested before any field was identified."""

    pass


class SessionNotFoundError(KeyError):
    """Raised when a document session id is unknown."""

    pass
