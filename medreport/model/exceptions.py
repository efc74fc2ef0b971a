class ModelError(Exception):
    """Raised when the text-generation service cannot produce a response."""


class ModelUnreachableError(ModelError):
    """Raised when the service cannot be reached (connection refused, DNS, TLS)."""


class ModelTimeoutError(ModelError):
    """Raised when the service does not answer within the configured timeout."""


class ModelBadResponseError(ModelError):
    """Raised when the service answers with an error status or an unusable body."""
