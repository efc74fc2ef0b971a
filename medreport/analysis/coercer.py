"""Turns untrusted model output into an AnalysisResult.

Two branches, both pure:

1. The span from the first ``{`` to the last ``}`` parses as a JSON object: the object
   is passed through as the payload. No schema validation is applied; only
   missing list fields and a blank summary or disclaimer are filled in.
2. Anything else: a fallback payload built from the raw text, with the full
   reply kept in ``raw_response``.
"""

import json
from typing import Any

from medreport.analysis.models import DEFAULT_DISCLAIMER, LIST_FIELDS, AnalysisResult

SUMMARY_LIMIT = 500
FALLBACK_FINDING = "Analysis completed. Please review the full response below."
EMPTY_RESPONSE_SUMMARY = "The model returned an empty response."


def coerce(raw: str) -> AnalysisResult:
    """Build an AnalysisResult from raw model text. Never raises."""
    parsed = parse_embedded_object(raw)
    if parsed is None:
        return fallback_result(raw)
    return AnalysisResult(data=_fill_defaults(parsed, raw))


def parse_embedded_object(raw: str) -> dict[str, Any] | None:
    """Parse the first-``{``-to-last-``}`` span, or return None."""
    start = raw.find("{")
    end = raw.rfind("}")
    if start == -1 or end < start:
        return None
    try:
        parsed = json.loads(raw[start : end + 1])
    except (json.JSONDecodeError, RecursionError):
        return None
    return parsed if isinstance(parsed, dict) else None


def fallback_result(raw: str) -> AnalysisResult:
    data: dict[str, Any] = {
        "summary": truncate_summary(raw),
        "key_findings": [FALLBACK_FINDING],
        "possible_red_flags": [],
        "recommended_followups": [],
        "questions_for_doctor": [],
        "disclaimer": DEFAULT_DISCLAIMER,
        "raw_response": raw,
    }
    return AnalysisResult(data=data, is_fallback=True)


def truncate_summary(raw: str) -> str:
    if not raw.strip():
        return EMPTY_RESPONSE_SUMMARY
    if len(raw) > SUMMARY_LIMIT:
        return raw[:SUMMARY_LIMIT] + "..."
    return raw


def _fill_defaults(parsed: dict[str, Any], raw: str) -> dict[str, Any]:
    data = dict(parsed)
    for name in LIST_FIELDS:
        if data.get(name) is None:
            data[name] = []
    if not _is_filled(data.get("summary")):
        data["summary"] = truncate_summary(raw)
        data.setdefault("raw_response", raw)
    if not _is_filled(data.get("disclaimer")):
        data["disclaimer"] = DEFAULT_DISCLAIMER
    return data


def _is_filled(value: object) -> bool:
    return isinstance(value, str) and bool(value.strip())
