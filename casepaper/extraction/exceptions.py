class StructuredExtractionError(Exception):
    """Raised when the structured-extraction call fails or returns unusable output."""
