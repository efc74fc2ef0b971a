from collections.abc import Callable
from pathlib import Path

import pytest

from medreport.extraction.exceptions import EmptyDocumentError, ExtractionError
from medreport.extraction.pdfplumber_adapter import PdfPlumberAdapter


class TestPdfPlumberAdapter:
    def test_extract_returns_text(
        self, sample_pdf_bytes: bytes, write_file: Callable[[str, bytes], Path]
    ) -> None:
        adapter = PdfPlumberAdapter()
        result = adapter.extract(write_file("a.pdf", sample_pdf_bytes))
        assert "Hello PDF World" in result

    def test_extract_multi_page(
        self, multi_page_pdf_bytes: bytes, write_file: Callable[[str, bytes], Path]
    ) -> None:
        adapter = PdfPlumberAdapter()
        result = adapter.extract(write_file("b.pdf", multi_page_pdf_bytes))
        assert "Page one content" in result
        assert "Page two content" in result

    def test_extract_empty_pdf_raises_empty_document(
        self, empty_pdf_bytes: bytes, write_file: Callable[[str, bytes], Path]
    ) -> None:
        adapter = PdfPlumberAdapter()
        with pytest.raises(EmptyDocumentError):
            adapter.extract(write_file("blank.pdf", empty_pdf_bytes))

    def test_extract_raises_on_invalid_bytes(
        self, write_file: Callable[[str, bytes], Path]
    ) -> None:
        adapter = PdfPlumberAdapter()
        with pytest.raises(ExtractionError, match="pdfplumber"):
            adapter.extract(write_file("bad.pdf", b"not a pdf"))

    def test_extract_result_is_stripped(
        self, sample_pdf_bytes: bytes, write_file: Callable[[str, bytes], Path]
    ) -> None:
        adapter = PdfPlumberAdapter()
        result = adapter.extract(write_file("c.pdf", sample_pdf_bytes))
        assert result == result.strip()
