from collections.abc import Sequence

from medreport.extraction.dispatcher import SUPPORTED_EXTENSIONS, file_extension
from medreport.intake.exceptions import (
    FileTooLargeError,
    NoFilesError,
    TooManyFilesError,
    UnsupportedExtensionError,
)
from medreport.intake.models import IncomingFile

MAX_FILES = 10


class BatchValidator:
    """Enforces count, size and type limits on a batch before any work is done."""

    def __init__(self, max_file_bytes: int, max_files: int = MAX_FILES) -> None:
        self._max_file_bytes = max_file_bytes
        self._max_files = max_files

    def validate(self, files: Sequence[IncomingFile]) -> None:
        """Raise IntakeValidationError on the first violated limit."""
        if not files:
            raise NoFilesError("No files uploaded")
        if len(files) > self._max_files:
            raise TooManyFilesError(
                f"Too many files: {len(files)} (max {self._max_files})"
            )
        for incoming in files:
            if file_extension(incoming.name) not in SUPPORTED_EXTENSIONS:
                raise UnsupportedExtensionError(
                    f"'{incoming.name}' is not supported. "
                    "Only PDF / PNG / JPG / JPEG / WEBP allowed"
                )
            if incoming.size > self._max_file_bytes:
                raise FileTooLargeError(
                    f"'{incoming.name}' exceeds the "
                    f"{self._max_file_bytes // (1024 * 1024)} MB limit"
                )
