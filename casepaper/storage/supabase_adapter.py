import httpx

from casepaper.storage.base import BaseDocumentStore, object_key
from casepaper.storage.exceptions import StorageError, StorageNetworkError


class SupabaseDocumentStore(BaseDocumentStore):
    """Stores documents in a Supabase Storage bucket over its REST API."""

    def __init__(
        self,
        *,
        base_url: str,
        service_key: str,
        bucket: str,
        timeout_seconds: int,
        http_client: httpx.Client | None = None,
    ) -> None:
        if not base_url or not service_key:
            raise ValueError(
                "storage_supabase_url and storage_supabase_key are required for "
                "storage_backend=supabase"
            )
        self._base_url = base_url.rstrip("/")
        self._bucket = bucket
        self._headers = {
            "Authorization": f"Bearer {service_key}",
            "apikey": service_key,
        }
        self._client = http_client or httpx.Client(timeout=timeout_seconds)

    def store(self, content: bytes, filename: str, mime_type: str) -> str:
        key = object_key(filename)
        upload_url = f"{self._base_url}/storage/v1/object/{self._bucket}/{key}"
        try:
            response = self._client.post(
                upload_url,
                content=content,
                headers={**self._headers, "Content-Type": mime_type, "x-upsert": "false"},
            )
        except httpx.HTTPError as exc:
            raise StorageNetworkError(f"Storage network error: {exc}") from exc
        if response.is_error:
            raise StorageError(
                f"Failed to upload to storage: HTTP {response.status_code} {response.text}"
            )
        return f"{self._base_url}/storage/v1/object/public/{self._bucket}/{key}"

    def fetch(self, url: str) -> bytes:
        if not url.startswith(f"{self._base_url}/"):
            raise StorageError(f"URL does not belong to this store: {url}")
        try:
            response = self._client.get(url, headers=self._headers)
        except httpx.HTTPError as exc:
            raise StorageNetworkError(f"Storage network error: {exc}") from exc
        if response.is_error:
            raise StorageError(f"Failed to fetch {url}: HTTP {response.status_code}")
        return response.content
