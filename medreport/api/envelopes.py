"""JSON envelopes returned by the HTTP API."""

import traceback
from typing import Any

from medreport.processor.exceptions import PipelineError, PipelineErrorKind
from medreport.processor.models import AnalysisOutcome

ERROR_STATUS: dict[PipelineErrorKind, int] = {
    PipelineErrorKind.VALIDATION: 400,
    PipelineErrorKind.EXTRACTION_TOTAL_FAILURE: 422,
    PipelineErrorKind.MODEL_UNREACHABLE: 502,
    PipelineErrorKind.MODEL_BAD_RESPONSE: 502,
    PipelineErrorKind.MODEL_TIMEOUT: 504,
    PipelineErrorKind.CANCELLED: 499,
    PipelineErrorKind.INTERNAL: 500,
}


def success_envelope(outcome: AnalysisOutcome) -> dict[str, Any]:
    return {
        "ok": True,
        "format": "json",
        "data": outcome.result.to_dict(),
        "processed_files": list(outcome.processed_files),
    }


def failure_envelope(error: PipelineError, include_details: bool = False) -> dict[str, Any]:
    body: dict[str, Any] = {"ok": False, "error": error.message}
    if include_details:
        body["kind"] = error.kind.value
        body["details"] = "".join(traceback.format_exception(error))
    return body


def error_status(error: PipelineError) -> int:
    return ERROR_STATUS.get(error.kind, 500)
