from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from casepaper.database.models import SubjectRefs
from casepaper.extraction.models import StructuredData
from casepaper.validation.models import ValidationReport


@dataclass(frozen=True)
class Submission:
    """One uploaded case paper as received from the caller."""

    file_name: str
    content: bytes
    mime_type: str
    clinic_id: str
    submitted_by: str
    subject_refs: SubjectRefs = field(default_factory=SubjectRefs)

    @property
    def size_bytes(self) -> int:
        return len(self.content)

    @property
    def is_pdf(self) -> bool:
        return self.mime_type.lower() == "application/pdf"


@dataclass(frozen=True)
class ExtractionResult:
    """Terminal output of one pipeline run. Immutable once created."""

    id: str
    upload_record_id: str
    raw_text: str
    normalized_text: str
    structured_data: StructuredData
    confidence: float
    processing_time_ms: int
    validation_report: ValidationReport | None = None
    created_at: datetime | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "uploadRecordId": self.upload_record_id,
            "rawText": self.raw_text,
            "normalizedText": self.normalized_text,
            "structuredData": self.structured_data.to_dict(),
            "confidence": self.confidence,
            "processingTimeMs": self.processing_time_ms,
            "validationReport": (
                self.validation_report.to_dict() if self.validation_report is not None else None
            ),
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }


class Stage(str, Enum):
    NOT_STARTED = "not_started"
    STORING = "storing"
    EXTRACTING = "extracting"
    NORMALIZING = "normalizing"
    STRUCTURING = "structuring_data"
    VALIDATING = "validating"
    PERSISTING = "persisting"
    DONE = "done"


@dataclass(frozen=True)
class Completed:
    """Every stage ran; the ledger entry is completed."""

    result: ExtractionResult


@dataclass(frozen=True)
class Degraded:
    """A fatal stage failed after the ledger entry existed; it is marked failed."""

    result: ExtractionResult
    failed_stage: Stage
    reason: str


@dataclass(frozen=True)
class Rejected:
    """Nothing was recorded: bad input or the document could not be stored."""

    reason: str
    stage: Stage = Stage.NOT_STARTED


ProcessingOutcome = Completed | Degraded | Rejected
