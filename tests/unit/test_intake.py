import pytest

from casepaper.pipeline.exceptions import SubmissionRejectedError
from casepaper.pipeline.intake import SubmissionIntake
from casepaper.pipeline.models import Submission

ALLOWED = ["image/jpeg", "image/png", "application/pdf"]


def _make_submission(**overrides: object) -> Submission:
    fields: dict[str, object] = {
        "file_name": "scan.jpg",
        "content": b"\xff\xd8\xff image",
        "mime_type": "image/jpeg",
        "clinic_id": "clinic-1",
        "submitted_by": "dr-1",
    }
    fields.update(overrides)
    return Submission(**fields)  # type: ignore[arg-type]


class TestSubmissionIntake:
    def test_accepts_valid_image(self) -> None:
        SubmissionIntake(ALLOWED, 1024).check(_make_submission())

    def test_accepts_valid_pdf(self) -> None:
        SubmissionIntake(ALLOWED, 1024).check(
            _make_submission(file_name="scan.pdf", content=b"%PDF-1.4 ...", mime_type="application/pdf")
        )

    def test_mime_type_match_is_case_insensitive(self) -> None:
        SubmissionIntake(ALLOWED, 1024).check(_make_submission(mime_type="IMAGE/JPEG"))

    @pytest.mark.parametrize(
        ("overrides", "reason"),
        [
            ({"clinic_id": " "}, "clinic_id is required"),
            ({"submitted_by": ""}, "submitted_by is required"),
            ({"file_name": ""}, "file name is required"),
            ({"content": b""}, "file is empty"),
            ({"mime_type": "text/plain"}, "unsupported file type"),
            ({"content": b"x" * 2048}, "the limit is 1024"),
            ({"mime_type": "application/pdf", "content": b"not a pdf"}, "not a PDF"),
        ],
    )
    def test_rejects(self, overrides: dict[str, object], reason: str) -> None:
        with pytest.raises(SubmissionRejectedError, match=reason):
            SubmissionIntake(ALLOWED, 1024).check(_make_submission(**overrides))

    def test_pdf_mime_type_is_case_insensitive(self) -> None:
        submission = _make_submission(content=b"\xff\xd8\xff image", mime_type="Application/PDF")
        assert submission.is_pdf
        with pytest.raises(SubmissionRejectedError, match="not a PDF"):
            SubmissionIntake(ALLOWED, 1024).check(submission)
