"""Image OCR strategy: Pillow preprocessing followed by Tesseract recognition."""

from collections.abc import Callable
from pathlib import Path

import pytesseract
from PIL import Image, ImageFilter, ImageOps

from medreport.extraction.base import BaseTextExtractor
from medreport.extraction.exceptions import ExtractionError
from medreport.extraction.text import DEFAULT_MIN_TEXT_LENGTH, finalize_text
from medreport.logging.logger import Log

ProgressCallback = Callable[[int], None]


def log_progress(percent: int) -> None:
    Log.debug(f"OCR progress: {percent}%")


def preprocess_image(image: Image.Image) -> Image.Image:
    """Grayscale, stretch contrast and sharpen before recognition."""
    gray = ImageOps.grayscale(image)
    normalized = ImageOps.autocontrast(gray)
    return normalized.filter(ImageFilter.SHARPEN)


class TesseractOcrAdapter(BaseTextExtractor):
    """Extracts text from raster images using Tesseract."""

    def __init__(
        self,
        language: str = "eng",
        min_text_length: int = DEFAULT_MIN_TEXT_LENGTH,
        progress: ProgressCallback | None = None,
    ) -> None:
        self._language = language
        self._min_text_length = min_text_length
        self._progress = progress or log_progress

    def extract(self, path: Path, media_type: str = "") -> str:
        try:
            with Image.open(path) as image:
                prepared = preprocess_image(image)
            self._progress(0)
            raw = pytesseract.image_to_string(prepared, lang=self._language)
            self._progress(100)
            return finalize_text(raw, source="Image", min_length=self._min_text_length)
        except ExtractionError:
            raise
        except Exception as exc:
            raise ExtractionError(f"tesseract OCR failed: {exc}") from exc
