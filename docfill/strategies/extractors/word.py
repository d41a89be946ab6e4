"""Word document text extractor.

Reads .docx files with python-docx and produces the plain text scanned by
the field detector plus simple HTML for the client to render.
"""

import html
import logging
import re
from pathlib import Path

from docx import Document as load_docx
from docx.opc.exceptions import PackageNotFoundError

from docfill.interfaces.extractor import BaseTextExtractor, ExtractedDocument, ExtractionError

logger = logging.getLogger(__name__)

_HEADING_STYLE = re.compile(r"^Heading\s+([1-3])$")


class WordTextExtractor(BaseTextExtractor):
    """Extracts paragraphs and table cells from Word documents.

    Formatting is not preserved beyond heading levels; rendering fidelity is
    the client's concern.
    """

    async def extract(self, file_path: str) -> ExtractedDocument:
        """Extract text and markup from a .docx file.

        Args:
            file_path: Path to the Word document.

        Returns:
            ExtractedDocument with one line of text per paragraph.

        Raises:
            FileNotFoundError: If the file doesn't exist.
            ExtractionError: If the file is not a readable Word document.
        """
        path = Path(file_path)
        if not path.exists():
            raise FileNotFoundError(f"Document not found: {file_path}")

        logger.info(f"Extracting text from: {file_path}")

        try:
            doc = load_docx(str(path))
        except PackageNotFoundError as e:
            raise ExtractionError(f"Not a Word document: {path.name}") from e
        except Exception as e:
            logger.error(f"Failed to open {file_path}: {e}")
            raise ExtractionError(f"Failed to read document: {e}") from e

        lines: list[str] = []
        markup: list[str] = []

        for paragraph in doc.paragraphs:
            text = paragraph.text
            lines.append(text)
            markup.append(self._paragraph_html(text, paragraph.style.name if paragraph.style else ""))

        cell_count = 0
        for table in doc.tables:
            for row in table.rows:
                for cell in row.cells:
                    text = cell.text
                    if not text.strip():
                        continue
                    lines.append(text)
                    markup.append(f"<p>{html.escape(text)}</p>")
                    cell_count += 1

        document = ExtractedDocument(
            text="\n".join(lines),
            html="\n".join(markup),
            metadata={
                "extractor": "python_docx",
                "source_file": path.name,
                "paragraph_count": len(doc.paragraphs),
                "table_cell_count": cell_count,
            },
            source=file_path,
        )

        logger.info(
            f"Extracted {len(document.text)} characters from {len(doc.paragraphs)} "
            f"paragraphs and {cell_count} table cells"
        )
        return document

    @staticmethod
    def _paragraph_html(text: str, style_name: str) -> str:
        escaped = html.escape(text)
        heading = _HEADING_STYLE.match(style_name or "")
        if heading:
            level = heading.group(1)
            return f"<h{level}>{escaped}</h{level}>"
        return f"<p>{escaped}</p>"

    @property
    def supported_extensions(self) -> set[str]:
        """Return supported file extensions."""
        return {".docx"}
