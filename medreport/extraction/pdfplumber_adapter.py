from pathlib import Path

import pdfplumber

from medreport.extraction.base import BaseTextExtractor
from medreport.extraction.exceptions import ExtractionError
from medreport.extraction.text import DEFAULT_MIN_TEXT_LENGTH, finalize_text


class PdfPlumberAdapter(BaseTextExtractor):
    """Extracts text from PDF using pdfplumber."""

    def __init__(self, min_text_length: int = DEFAULT_MIN_TEXT_LENGTH) -> None:
        self._min_text_length = min_text_length

    def extract(self, path: Path, media_type: str = "") -> str:
        try:
            with pdfplumber.open(path) as pdf:
                pages = [page.extract_text() or "" for page in pdf.pages]
            return finalize_text(
                "\n".join(pages), source="PDF", min_length=self._min_text_length
            )
        except ExtractionError:
            raise
        except Exception as exc:
            raise ExtractionError(f"pdfplumber extraction failed: {exc}") from exc
