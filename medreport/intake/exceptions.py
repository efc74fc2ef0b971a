class IntakeValidationError(Exception):
    """Raised when a submitted batch violates the intake limits."""


class NoFilesError(IntakeValidationError):
    """Raised when a request carries no files."""


class TooManyFilesError(IntakeValidationError):
    """Raised when a batch exceeds the maximum file count."""


class FileTooLargeError(IntakeValidationError):
    """Raised when a file exceeds the per-file size ceiling."""


class UnsupportedExtensionError(IntakeValidationError):
    """Raised when a file's extension is not an accepted report format."""


class StorageError(Exception):
    """Raised when a file cannot be written to transient storage."""
