"""Unit tests for the Word document text extractor."""

import asyncio

import pytest
from docx import Document

from docfill.interfaces.extractor import ExtractedDocument, ExtractionError
from docfill.strategies.extractors import WordTextExtractor


@pytest.fixture
def extractor():
    """Create an extractor instance."""
    return WordTextExtractor()


@pytest.fixture
def form_docx(tmp_path):
    """Write a small application form to a .docx file."""
    doc = Document()
    doc.add_heading("Application Form", level=1)
    doc.add_paragraph("Name: ____")
    doc.add_paragraph("Email: ____")
    doc.add_paragraph("Notes <optional> & remarks")
    table = doc.add_table(rows=1, cols=2)
    table.cell(0, 0).text = "Phone: ____"
    table.cell(0, 1).text = ""

    path = tmp_path / "form.docx"
    doc.save(str(path))
    return path


class TestWordTextExtractor:
    """Test suite for WordTextExtractor."""

    # =========================================================================
    # Extraction Tests
    # =========================================================================

    def test_extract_text(self, extractor, form_docx):
        """Test that paragraphs become lines of text."""
        result = asyncio.run(extractor.extract(str(form_docx)))

        assert isinstance(result, ExtractedDocument)
        lines = result.text.split("\n")
        assert "Application Form" in lines
        assert "Name: ____" in lines
        assert "Email: ____" in lines
        assert lines.index("Name: ____") < lines.index("Email: ____")

    def test_table_cells_appended(self, extractor, form_docx):
        """Test that non-empty table cells follow the paragraphs."""
        result = asyncio.run(extractor.extract(str(form_docx)))

        lines = result.text.split("\n")
        assert lines[-1] == "Phone: ____"
        assert result.metadata["table_cell_count"] == 1

    def test_extract_html(self, extractor, form_docx):
        """Test heading and paragraph markup with escaping."""
        result = asyncio.run(extractor.extract(str(form_docx)))

        assert "<h1>Application Form</h1>" in result.html
        assert "<p>Name: ____</p>" in result.html
        assert "<p>Notes &lt;optional&gt; &amp; remarks</p>" in result.html
        assert "<p>Phone: ____</p>" in result.html

    def test_metadata(self, extractor, form_docx):
        """Test extraction metadata."""
        result = asyncio.run(extractor.extract(str(form_docx)))

        assert result.metadata["extractor"] == "python_docx"
        assert result.metadata["source_file"] == "form.docx"
        assert result.metadata["paragraph_count"] >= 4
        assert result.source == str(form_docx)

    def test_extracted_text_is_detectable(self, extractor, form_docx):
        """Test that extracted text feeds the field detector."""
        from docfill.strategies.fields import detect

        result = asyncio.run(extractor.extract(str(form_docx)))

        names = [f.name for f in detect(result.text)]
        assert names == ["full_name", "email", "phone"]

    # =========================================================================
    # Error Tests
    # =========================================================================

    def test_missing_file(self, extractor, tmp_path):
        """Test that a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            asyncio.run(extractor.extract(str(tmp_path / "missing.docx")))

    def test_not_a_word_document(self, extractor, tmp_path):
        """Test that arbitrary bytes raise ExtractionError."""
        path = tmp_path / "broken.docx"
        path.write_bytes(b"this is not a zip archive")

        with pytest.raises(ExtractionError):
            asyncio.run(extractor.extract(str(path)))

    # =========================================================================
    # Support Tests
    # =========================================================================

    @pytest.mark.parametrize(
        "filename,expected",
        [
            ("form.docx", True),
            ("FORM.DOCX", True),
            ("form.doc", False),
            ("form.pdf", False),
            ("docx", False),
        ],
    )
    def test_supports(self, extractor, filename, expected):
        """Test file extension support."""
        assert extractor.supports(filename) is expected
