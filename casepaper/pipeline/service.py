from casepaper.config.settings import Settings
from casepaper.database.models import SubjectRefs
from casepaper.database.repositories.extraction_results_repository import (
    ExtractionResultsRepository,
)
from casepaper.database.repositories.upload_ledger_repository import UploadLedgerRepository
from casepaper.logging.logger import Log
from casepaper.pipeline.models import ExtractionResult, ProcessingOutcome, Submission
from casepaper.pipeline.processor import CasePaperProcessor, build_processor
from casepaper.storage.base import BaseDocumentStore
from casepaper.storage.factory import DocumentStoreFactory


class CasePaperService:
    """Caller-facing entry point: process one case paper, read clinic history."""

    def __init__(
        self,
        processor: CasePaperProcessor,
        results_repo: ExtractionResultsRepository,
        ledger: UploadLedgerRepository,
        document_store: BaseDocumentStore,
        history_limit: int = 50,
    ) -> None:
        self._processor = processor
        self._results_repo = results_repo
        self._ledger = ledger
        self._document_store = document_store
        self._history_limit = history_limit

    def process_document(
        self,
        file_name: str,
        content: bytes,
        mime_type: str,
        clinic_id: str,
        submitted_by: str,
        patient_id: str | None = None,
        visit_id: str | None = None,
    ) -> ProcessingOutcome:
        submission = Submission(
            file_name=file_name,
            content=content,
            mime_type=mime_type,
            clinic_id=clinic_id,
            submitted_by=submitted_by,
            subject_refs=SubjectRefs(patient_id=patient_id, visit_id=visit_id),
        )
        return self._processor.process(submission)

    def get_history(self, clinic_id: str, limit: int | None = None) -> list[ExtractionResult]:
        """Past results for one clinic, newest first."""
        effective_limit = limit if limit is not None and limit > 0 else self._history_limit
        results = self._results_repo.list_history(clinic_id, effective_limit)
        Log.debug(f"Loaded {len(results)} history entries for clinic {clinic_id}")
        return results

    def get_result(self, upload_id: str) -> ExtractionResult | None:
        return self._results_repo.find_by_upload_id(upload_id)

    def get_source_document(self, upload_id: str) -> bytes:
        """Read back the stored original of an upload.

        Raises:
            UploadRecordNotFoundError: if the upload does not exist.
            StorageError: if the stored object cannot be read.
        """
        record = self._ledger.find_by_id(upload_id)
        return self._document_store.fetch(record.source_file.url)


def build_service(settings: Settings) -> CasePaperService:
    """Wire the service with the adapters selected by settings."""
    document_store = DocumentStoreFactory.create(settings)
    ledger = UploadLedgerRepository()
    results_repo = ExtractionResultsRepository()
    processor = build_processor(
        settings,
        document_store=document_store,
        ledger=ledger,
        results_repo=results_repo,
    )
    return CasePaperService(
        processor=processor,
        results_repo=results_repo,
        ledger=ledger,
        document_store=document_store,
        history_limit=settings.history_limit,
    )
