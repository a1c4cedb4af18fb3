from pathlib import Path

from casepaper.config.settings import Settings
from casepaper.storage.base import BaseDocumentStore
from casepaper.storage.local_adapter import LocalDocumentStore
from casepaper.storage.supabase_adapter import SupabaseDocumentStore


class DocumentStoreFactory:
    """Creates the configured document store."""

    BACKENDS: tuple[str, ...] = ("local", "supabase")

    @classmethod
    def create(cls, settings: Settings) -> BaseDocumentStore:
        backend = settings.storage_backend.lower()
        if backend == "local":
            return LocalDocumentStore(
                files_root=Path(settings.storage_local_root),
                public_base_url=settings.storage_public_base_url,
            )
        if backend == "supabase":
            return SupabaseDocumentStore(
                base_url=settings.storage_supabase_url,
                service_key=settings.storage_supabase_key,
                bucket=settings.storage_bucket,
                timeout_seconds=settings.storage_timeout_seconds,
            )
        raise ValueError(
            f"Unknown storage backend '{backend}'. Choose from: {list(cls.BACKENDS)}"
        )
