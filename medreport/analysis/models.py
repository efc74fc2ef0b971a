import copy
from dataclasses import dataclass, field
from typing import Any

LIST_FIELDS = (
    "key_findings",
    "possible_red_flags",
    "recommended_followups",
    "questions_for_doctor",
)

DEFAULT_DISCLAIMER = (
    "This is an AI-generated analysis for educational purposes only. "
    "Always consult with your healthcare provider."
)


@dataclass(frozen=True)
class AnalysisResult:
    """Structured analysis of a batch of medical reports.

    ``data`` holds the payload exactly as it will be returned to the caller,
    including any extra keys the model produced. Typed accessors read from it.
    """

    data: dict[str, Any] = field(default_factory=dict)
    is_fallback: bool = False

    @property
    def summary(self) -> str:
        return str(self.data.get("summary", ""))

    @property
    def disclaimer(self) -> str:
        return str(self.data.get("disclaimer", ""))

    @property
    def key_findings(self) -> list[Any]:
        return self._list("key_findings")

    @property
    def possible_red_flags(self) -> list[Any]:
        return self._list("possible_red_flags")

    @property
    def recommended_followups(self) -> list[Any]:
        return self._list("recommended_followups")

    @property
    def questions_for_doctor(self) -> list[Any]:
        return self._list("questions_for_doctor")

    @property
    def raw_response(self) -> str | None:
        raw = self.data.get("raw_response")
        return raw if isinstance(raw, str) else None

    def to_dict(self) -> dict[str, Any]:
        return copy.deepcopy(self.data)

    def _list(self, name: str) -> list[Any]:
        value = self.data.get(name)
        return list(value) if isinstance(value, list) else []
