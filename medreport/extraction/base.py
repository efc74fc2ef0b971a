from abc import ABC, abstractmethod
from pathlib import Path


class BaseTextExtractor(ABC):
    """Contract for all text extraction strategies."""

    @abstractmethod
    def extract(self, path: Path, media_type: str = "") -> str:
        """Extract plain text from a file on disk.

        Args:
            path: Location of the file in transient storage.
            media_type: Declared media type of the upload, informational only.

        Returns:
            Normalized, non-empty text.

        Raises:
            ExtractionError: if extraction fails for any reason.
        """
