class UploadRecordNotFoundError(Exception):
    """Raised when an upload record cannot be found in the database."""
