"""Abstract base class for document text extractors.

The extractor turns an uploaded binary document into the plain text the
detector scans and the markup the client renders.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ExtractedDocument:
    """Text and markup extracted from a document.

    Attributes:
        text: Plain text, one paragraph per line.
        html: Simple HTML markup of the visible content.
        metadata: Extractor-specific information (paragraph count, etc.).
        source: The original file path or identifier.
    """

    text: str
    html: str
    metadata: dict[str, Any] = field(default_factory=dict)
    source: str = ""


class BaseTextExtractor(ABC):
    """Abstract base class for document text extraction strategies."""

    @abstractmethod
    async def extract(self, file_path: str) -> ExtractedDocument:
        """Extract text and markup from a document file.

        Args:
            file_path: The path to the document file.

        Returns:
            The extracted document.

        Raises:
            FileNotFoundError: If the file does not exist.
            ExtractionError: If the file cannot be read.
        """
        ...

    @property
    @abstractmethod
    def supported_extensions(self) -> set[str]:
        """Return the set of file extensions this extractor supports.

        Returns:
            A set of lowercase file extensions (e.g., {".docx"}).
        """
        ...

    def supports(self, file_path: str) -> bool:
        """Check if this extractor supports the given file.

        Args:
            file_path: Path to check.

        Returns:
            True if the file extension is supported.
        """
        lowered = file_path.lower()
        return any(lowered.endswith(ext) for ext in self.supported_extensions)


class ExtractionError(RuntimeError):
    """Exception raised when a document cannot be read."""

    pass
