from collections.abc import Iterable

from casepaper.pipeline.exceptions import SubmissionRejectedError
from casepaper.pipeline.models import Submission

_PDF_MAGIC = b"%PDF"


class SubmissionIntake:
    """Checks caller input before anything is stored or recorded."""

    def __init__(self, allowed_mime_types: Iterable[str], max_upload_bytes: int) -> None:
        self._allowed_mime_types = frozenset(m.lower() for m in allowed_mime_types)
        self._max_upload_bytes = max_upload_bytes

    def check(self, submission: Submission) -> None:
        """Raise SubmissionRejectedError with a readable reason on the first problem found."""
        if not submission.clinic_id.strip():
            raise SubmissionRejectedError("clinic_id is required")
        if not submission.submitted_by.strip():
            raise SubmissionRejectedError("submitted_by is required")
        if not submission.file_name.strip():
            raise SubmissionRejectedError("file name is required")
        if not submission.content:
            raise SubmissionRejectedError("file is empty")
        if submission.mime_type.lower() not in self._allowed_mime_types:
            raise SubmissionRejectedError(
                f"unsupported file type '{submission.mime_type}'; "
                f"allowed: {', '.join(sorted(self._allowed_mime_types))}"
            )
        if submission.size_bytes > self._max_upload_bytes:
            raise SubmissionRejectedError(
                f"file is {submission.size_bytes} bytes; the limit is {self._max_upload_bytes}"
            )
        if submission.is_pdf and not submission.content.startswith(_PDF_MAGIC):
            raise SubmissionRejectedError("file is declared as PDF but is not a PDF document")
