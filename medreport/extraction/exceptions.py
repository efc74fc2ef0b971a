class ExtractionError(Exception):
    """Raised when text cannot be extracted from a file."""


class EmptyDocumentError(ExtractionError):
    """Raised when a file yields no meaningful text (e.g. a scanned PDF or blank image)."""


class UnsupportedFileTypeError(ExtractionError):
    """Raised when no extraction strategy handles the file's extension."""
