class PipelineError(Exception):
    """Base exception for pipeline-level errors."""


class SubmissionRejectedError(PipelineError):
    """Raised when a submission fails intake checks before any work starts."""
