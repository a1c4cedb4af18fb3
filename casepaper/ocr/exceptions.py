class OcrError(Exception):
    """Raised when text recognition fails."""


class OcrNetworkError(OcrError):
    """Raised when the OCR provider cannot be reached or times out."""


class EmptyExtractionError(OcrError):
    """Raised when recognition succeeds but yields no text."""
