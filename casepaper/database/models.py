from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class UploadStatus(str, Enum):
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self is not UploadStatus.PROCESSING


@dataclass(frozen=True)
class SubjectRefs:
    """Optional patient/visit linkage of an upload."""

    patient_id: str | None = None
    visit_id: str | None = None


@dataclass(frozen=True)
class SourceFile:
    name: str
    size_bytes: int
    mime_type: str
    url: str


@dataclass
class UploadRecord:
    """Represents a row from the ocr_uploads table."""

    id: str
    clinic_id: str
    subject_refs: SubjectRefs
    source_file: SourceFile
    status: UploadStatus
    submitted_by: str
    error_message: str | None = None
    created_at: datetime | None = None
    processed_at: datetime | None = None
