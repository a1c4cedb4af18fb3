class StorageError(Exception):
    """Raised when a document cannot be stored or fetched."""


class StorageNetworkError(StorageError):
    """Raised when the storage service cannot be reached or times out."""
