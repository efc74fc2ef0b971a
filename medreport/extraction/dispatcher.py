from pathlib import Path

from medreport.extraction.base import BaseTextExtractor
from medreport.extraction.exceptions import UnsupportedFileTypeError

PDF_EXTENSIONS = frozenset({".pdf"})
IMAGE_EXTENSIONS = frozenset({".png", ".jpg", ".jpeg", ".webp"})
SUPPORTED_EXTENSIONS = PDF_EXTENSIONS | IMAGE_EXTENSIONS


def file_extension(name: str | Path) -> str:
    """Lower-cased suffix of a file name, including the dot."""
    return Path(name).suffix.lower()


class DispatchingExtractor(BaseTextExtractor):
    """Routes a file to the PDF or image strategy by its extension alone."""

    def __init__(self, pdf: BaseTextExtractor, image: BaseTextExtractor) -> None:
        self._pdf = pdf
        self._image = image

    def strategy_for(self, path: Path) -> BaseTextExtractor:
        ext = file_extension(path)
        if ext in PDF_EXTENSIONS:
            return self._pdf
        if ext in IMAGE_EXTENSIONS:
            return self._image
        raise UnsupportedFileTypeError(f"No extractor for extension '{ext or path.name}'")

    def extract(self, path: Path, media_type: str = "") -> str:
        return self.strategy_for(path).extract(path, media_type)
