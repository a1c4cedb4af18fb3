from pathlib import Path

from casepaper.storage.base import BaseDocumentStore, object_key
from casepaper.storage.exceptions import StorageError


class LocalDocumentStore(BaseDocumentStore):
    """Stores documents as files under a root directory."""

    FILES_ROOT = Path("/app/files")

    def __init__(self, files_root: Path | None = None, public_base_url: str = "") -> None:
        self._files_root = files_root if files_root is not None else self.FILES_ROOT
        self._public_base_url = public_base_url.rstrip("/")

    def store(self, content: bytes, filename: str, mime_type: str) -> str:
        _ = mime_type
        key = object_key(filename)
        path = self._files_root / key
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(content)
        except OSError as exc:
            raise StorageError(f"Failed to write {path}: {exc}") from exc
        return self._url_for(key, path)

    def fetch(self, url: str) -> bytes:
        path = self._resolve_path(url)
        if not path.exists():
            raise StorageError(f"File not found: {path}")
        try:
            return path.read_bytes()
        except OSError as exc:
            raise StorageError(f"Failed to read {path}: {exc}") from exc

    def _url_for(self, key: str, path: Path) -> str:
        if self._public_base_url:
            return f"{self._public_base_url}/{key}"
        return path.resolve().as_uri()

    def _resolve_path(self, url: str) -> Path:
        if self._public_base_url and url.startswith(f"{self._public_base_url}/"):
            key = url[len(self._public_base_url) + 1:]
        elif url.startswith("file://"):
            key = Path(url[len("file://"):]).name
        else:
            raise StorageError(f"URL does not belong to this store: {url}")
        if "/" in key or key in ("", ".", ".."):
            raise StorageError(f"Invalid object key in URL: {url}")
        return self._files_root / key
