from enum import Enum


class PipelineErrorKind(str, Enum):
    VALIDATION = "validation"
    EXTRACTION_TOTAL_FAILURE = "extraction_total_failure"
    MODEL_UNREACHABLE = "model_unreachable"
    MODEL_TIMEOUT = "model_timeout"
    MODEL_BAD_RESPONSE = "model_bad_response"
    CANCELLED = "cancelled"
    INTERNAL = "internal"


class PipelineError(Exception):
    """Terminal failure of an analysis request.

    ``message`` is short and safe to show to end users; technical detail is
    kept on the exception chain.
    """

    def __init__(self, kind: PipelineErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
