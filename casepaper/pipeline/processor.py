import time
import uuid
from collections.abc import Sequence
from datetime import datetime, timezone

from casepaper.config.settings import Settings
from casepaper.database.models import SourceFile
from casepaper.database.repositories.extraction_results_repository import (
    ExtractionResultsRepository,
)
from casepaper.database.repositories.upload_ledger_repository import UploadLedgerRepository
from casepaper.extraction.extractor import StructuredMedicalExtractor
from casepaper.extraction.models import StructuredData
from casepaper.llm.client_base import ChatModel
from casepaper.llm.factory import LlmClientFactory
from casepaper.logging.logger import Log
from casepaper.normalization.normalizer import ClinicalTextNormalizer
from casepaper.ocr.factory import OcrClientFactory
from casepaper.ocr.text_extractor import TextExtractor
from casepaper.pdf.factory import PdfRasterizerFactory
from casepaper.pipeline.exceptions import SubmissionRejectedError
from casepaper.pipeline.intake import SubmissionIntake
from casepaper.pipeline.models import (
    Completed,
    Degraded,
    ExtractionResult,
    ProcessingOutcome,
    Rejected,
    Stage,
    Submission,
)
from casepaper.pipeline.pipeline import PipelineContext, PipelineStep
from casepaper.pipeline.steps import (
    ExtractTextStep,
    NormalizeStep,
    PrepareImageStep,
    StructureStep,
    ValidateStep,
)
from casepaper.storage.base import BaseDocumentStore
from casepaper.storage.factory import DocumentStoreFactory
from casepaper.validation.factory import ValidatorFactory
from casepaper.validation.models import ValidationReport

PERSIST_ADVISORY = (
    "The extraction could not be saved. Please try uploading the case paper again."
)


class CasePaperProcessor:
    """Runs one case paper through the pipeline and owns its ledger entry.

    Flow: intake -> store -> ledger(processing) -> steps -> persist ->
    ledger(completed | failed). Stage errors never leave process(); they
    become a Degraded outcome, or are skipped for non-fatal steps.
    """

    def __init__(
        self,
        *,
        intake: SubmissionIntake,
        document_store: BaseDocumentStore,
        ledger: UploadLedgerRepository,
        results_repo: ExtractionResultsRepository,
        steps: Sequence[PipelineStep],
        nominal_confidence: float,
    ) -> None:
        self._intake = intake
        self._document_store = document_store
        self._ledger = ledger
        self._results_repo = results_repo
        self._steps = list(steps)
        self._nominal_confidence = max(0.0, min(1.0, nominal_confidence))

    def process(self, submission: Submission) -> ProcessingOutcome:
        try:
            self._intake.check(submission)
        except SubmissionRejectedError as exc:
            Log.warning(f"Submission '{submission.file_name}' rejected: {exc}")
            return Rejected(reason=str(exc))

        try:
            url = self._document_store.store(
                submission.content, submission.file_name, submission.mime_type
            )
        except Exception as exc:
            Log.error(f"Storing '{submission.file_name}' failed: {exc}")
            return Rejected(reason=f"Failed to store document: {exc}", stage=Stage.STORING)

        started = time.monotonic()
        try:
            upload_id = self._ledger.create(
                submission.clinic_id,
                submission.subject_refs,
                SourceFile(
                    name=submission.file_name,
                    size_bytes=submission.size_bytes,
                    mime_type=submission.mime_type,
                    url=url,
                ),
                submission.submitted_by,
            )
        except Exception as exc:
            Log.error(f"Creating upload record for '{submission.file_name}' failed: {exc}")
            return Rejected(reason=f"Failed to record upload: {exc}", stage=Stage.STORING)
        Log.info(f"[{upload_id}] Upload recorded for clinic {submission.clinic_id}, processing")

        context = PipelineContext(upload_id=upload_id, submission=submission)
        for step in self._steps:
            try:
                with Log.stage(step.stage.value, upload_id):
                    step.run(context)
            except Exception as exc:
                if step.fatal:
                    return self._degrade(context, step.stage, step.advisory, str(exc), started)
                Log.warning(
                    f"[{upload_id}] {step.stage.value} skipped, continuing with "
                    f"unrefined data: {exc}"
                )

        return self._complete(context, started)

    def _complete(self, context: PipelineContext, started: float) -> ProcessingOutcome:
        if context.validation is not None:
            structured_data = context.validation.refined_data
            report = context.validation.report
        else:
            structured_data = context.structured_data or StructuredData.empty()
            report = None

        try:
            with Log.stage(Stage.PERSISTING.value, context.upload_id):
                result = self._persist(
                    context,
                    structured_data=structured_data,
                    confidence=self._nominal_confidence,
                    validation_report=report,
                    started=started,
                )
        except Exception as exc:
            return self._degrade(context, Stage.PERSISTING, PERSIST_ADVISORY, str(exc), started)

        self._finish_ledger(context.upload_id, completed=True)
        Log.info(
            f"[{context.upload_id}] Done: completed in {result.processing_time_ms} ms, "
            f"confidence {result.confidence}"
        )
        return Completed(result=result)

    def _degrade(
        self,
        context: PipelineContext,
        stage: Stage,
        advisory: str,
        reason: str,
        started: float,
    ) -> Degraded:
        Log.error(f"[{context.upload_id}] {stage.value} failed, run degraded: {reason}")
        structured_data = StructuredData.advisory(advisory)
        try:
            result = self._persist(
                context,
                structured_data=structured_data,
                confidence=0.0,
                validation_report=None,
                started=started,
            )
        except Exception as exc:
            Log.error(f"[{context.upload_id}] Persisting degraded result failed: {exc}")
            result = ExtractionResult(
                id=str(uuid.uuid4()),
                upload_record_id=context.upload_id,
                raw_text=context.raw_text,
                normalized_text=context.normalized_text,
                structured_data=structured_data,
                confidence=0.0,
                processing_time_ms=self._elapsed_ms(started),
                created_at=datetime.now(timezone.utc),
            )

        self._finish_ledger(context.upload_id, completed=False, error=f"{stage.value}: {reason}")
        Log.warning(
            f"[{context.upload_id}] Done: degraded at {stage.value} "
            f"after {result.processing_time_ms} ms"
        )
        return Degraded(result=result, failed_stage=stage, reason=reason)

    def _persist(
        self,
        context: PipelineContext,
        *,
        structured_data: StructuredData,
        confidence: float,
        validation_report: ValidationReport | None,
        started: float,
    ) -> ExtractionResult:
        processing_time_ms = self._elapsed_ms(started)
        result_id, created_at = self._results_repo.insert(
            clinic_id=context.submission.clinic_id,
            upload_record_id=context.upload_id,
            raw_text=context.raw_text,
            normalized_text=context.normalized_text,
            structured_data=structured_data.to_dict(),
            confidence=confidence,
            processing_time_ms=processing_time_ms,
            validation_report=(
                validation_report.to_dict() if validation_report is not None else None
            ),
        )
        return ExtractionResult(
            id=result_id,
            upload_record_id=context.upload_id,
            raw_text=context.raw_text,
            normalized_text=context.normalized_text,
            structured_data=structured_data,
            confidence=confidence,
            processing_time_ms=processing_time_ms,
            validation_report=validation_report,
            created_at=created_at,
        )

    def _finish_ledger(self, upload_id: str, *, completed: bool, error: str | None = None) -> None:
        try:
            if completed:
                changed = self._ledger.mark_completed(upload_id)
            else:
                changed = self._ledger.mark_failed(upload_id, error)
        except Exception as exc:
            Log.error(f"[{upload_id}] Could not close upload record: {exc}")
            return
        if not changed:
            Log.warning(f"[{upload_id}] Upload record was already terminal")

    @staticmethod
    def _elapsed_ms(started: float) -> int:
        return int((time.monotonic() - started) * 1000)


def build_steps(
    settings: Settings,
    chat_model: ChatModel | None = None,
) -> list[PipelineStep]:
    """Build the stage sequence: image -> OCR -> normalize -> structure -> validate."""
    chat_model = chat_model if chat_model is not None else LlmClientFactory.create(settings)
    return [
        PrepareImageStep(PdfRasterizerFactory.create(settings)),
        ExtractTextStep(TextExtractor(OcrClientFactory.create(settings))),
        NormalizeStep(ClinicalTextNormalizer(chat_model)),
        StructureStep(StructuredMedicalExtractor(chat_model)),
        ValidateStep(ValidatorFactory.create(settings, chat_model)),
    ]


def build_processor(
    settings: Settings,
    *,
    document_store: BaseDocumentStore | None = None,
    ledger: UploadLedgerRepository | None = None,
    results_repo: ExtractionResultsRepository | None = None,
) -> CasePaperProcessor:
    """Build a CasePaperProcessor with all required adapters."""
    return CasePaperProcessor(
        intake=SubmissionIntake(settings.allowed_mime_types, settings.max_upload_bytes),
        document_store=(
            document_store if document_store is not None else DocumentStoreFactory.create(settings)
        ),
        ledger=ledger if ledger is not None else UploadLedgerRepository(),
        results_repo=results_repo if results_repo is not None else ExtractionResultsRepository(),
        steps=build_steps(settings),
        nominal_confidence=settings.nominal_confidence,
    )
