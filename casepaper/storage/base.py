import re
import time
import uuid
from abc import ABC, abstractmethod

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


def object_key(filename: str) -> str:
    """Build a collision-resistant key: {epoch_ms}_{random}_{sanitized filename}."""
    safe_name = _UNSAFE_CHARS.sub("_", filename).strip("._") or "upload"
    return f"{int(time.time() * 1000)}_{uuid.uuid4().hex[:8]}_{safe_name}"


class BaseDocumentStore(ABC):
    """Contract for durable document storage."""

    @abstractmethod
    def store(self, content: bytes, filename: str, mime_type: str) -> str:
        """Persist content under a fresh key and return its stable reference URL.

        Raises:
            StorageError: if the object could not be persisted.
        """

    @abstractmethod
    def fetch(self, url: str) -> bytes:
        """Read back a stored object by the URL returned from store().

        Raises:
            StorageError: if the object cannot be read.
        """
