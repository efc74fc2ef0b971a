import io

import pytest

from medreport.intake.exceptions import (
    FileTooLargeError,
    IntakeValidationError,
    NoFilesError,
    TooManyFilesError,
    UnsupportedExtensionError,
)
from medreport.intake.models import IncomingFile
from medreport.intake.validator import MAX_FILES, BatchValidator

_MB = 1024 * 1024


def _incoming(name: str = "report.pdf", size: int = 1024) -> IncomingFile:
    return IncomingFile(name=name, media_type="application/pdf", size=size, stream=io.BytesIO())


class TestBatchValidator:
    def test_accepts_valid_batch(self) -> None:
        validator = BatchValidator(max_file_bytes=15 * _MB)
        validator.validate([_incoming("a.pdf"), _incoming("b.PNG"), _incoming("c.webp")])

    def test_accepts_max_file_count(self) -> None:
        validator = BatchValidator(max_file_bytes=15 * _MB)
        validator.validate([_incoming(f"{i}.pdf") for i in range(MAX_FILES)])

    def test_rejects_empty_batch(self) -> None:
        with pytest.raises(NoFilesError, match="No files"):
            BatchValidator(max_file_bytes=_MB).validate([])

    def test_rejects_eleven_files(self) -> None:
        files = [_incoming(f"{i}.pdf") for i in range(11)]
        with pytest.raises(TooManyFilesError, match="11"):
            BatchValidator(max_file_bytes=_MB).validate(files)

    def test_rejects_oversized_file(self) -> None:
        with pytest.raises(FileTooLargeError, match="2 MB"):
            BatchValidator(max_file_bytes=2 * _MB).validate([_incoming(size=2 * _MB + 1)])

    def test_accepts_file_at_ceiling(self) -> None:
        BatchValidator(max_file_bytes=2 * _MB).validate([_incoming(size=2 * _MB)])

    @pytest.mark.parametrize("name", ["notes.docx", "scan.tiff", "report", "archive.pdf.zip"])
    def test_rejects_unsupported_extension(self, name: str) -> None:
        with pytest.raises(UnsupportedExtensionError, match="not supported"):
            BatchValidator(max_file_bytes=_MB).validate([_incoming(name)])

    def test_all_failures_share_a_base_class(self) -> None:
        with pytest.raises(IntakeValidationError):
            BatchValidator(max_file_bytes=_MB).validate([_incoming("x.exe")])
