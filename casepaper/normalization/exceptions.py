class NormalizationError(Exception):
    """Raised when normalization fails."""


class NormalizationFailedError(NormalizationError):
    """Raised when the rewrite call fails or returns no text."""
