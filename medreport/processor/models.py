from dataclasses import dataclass, field
from enum import Enum

from medreport.analysis.models import AnalysisResult


class PipelineState(str, Enum):
    VALIDATING = "validating"
    STORING = "storing"
    EXTRACTING = "extracting"
    BUILDING = "building"
    INVOKING = "invoking"
    COERCING = "coercing"
    CLEANING = "cleaning"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True)
class ExtractedDocument:
    """Normalized text extracted from one uploaded file."""

    file_id: str
    text: str


@dataclass(frozen=True)
class ExtractionOutcome:
    """Per-file extraction result: either a document or an error message."""

    file_id: str
    document: ExtractedDocument | None = None
    error: str = ""

    @property
    def ok(self) -> bool:
        return self.document is not None


@dataclass(frozen=True)
class AnalysisOutcome:
    """Final product of a successful pipeline run."""

    result: AnalysisResult
    processed_files: list[str] = field(default_factory=list)
    failed_files: dict[str, str] = field(default_factory=dict)
