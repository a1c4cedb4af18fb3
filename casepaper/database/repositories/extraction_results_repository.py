from typing import Any

from psycopg.rows import dict_row
from psycopg.types.json import Jsonb

from casepaper.database.connection import ConnectionFactory, get_connection
from casepaper.extraction.builder import build_structured_data
from casepaper.pipeline.models import ExtractionResult
from casepaper.validation.models import ValidationReport

_SELECT_COLUMNS = """
    SELECT r.id, r.ocr_upload_id, r.raw_text, r.cleaned_medical_text,
           r.extracted_data, r.confidence, r.processing_time,
           r.validation_report, r.created_at
    FROM ocr_results r
"""


class ExtractionResultsRepository:
    """Insert-only store for the ocr_results table."""

    def __init__(self, connection_factory: ConnectionFactory = get_connection) -> None:
        self._connect = connection_factory

    def insert(
        self,
        clinic_id: str,
        upload_record_id: str,
        raw_text: str,
        normalized_text: str,
        structured_data: dict[str, Any],
        confidence: float,
        processing_time_ms: int,
        validation_report: dict[str, Any] | None,
    ) -> tuple[str, Any]:
        """Persist one result and return its (id, created_at)."""
        report_value = Jsonb(validation_report) if validation_report is not None else None
        with self._connect() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    INSERT INTO ocr_results
                    (ocr_upload_id, clinic_id, raw_text, cleaned_medical_text,
                     extracted_data, confidence, processing_time, validation_report)
                    VALUES (%s, %s, %s, %s, %s, %s, %s, %s)
                    RETURNING id, created_at
                    """,
                    (
                        upload_record_id,
                        clinic_id,
                        raw_text,
                        normalized_text,
                        Jsonb(structured_data),
                        confidence,
                        processing_time_ms,
                        report_value,
                    ),
                )
                row = cur.fetchone()
            conn.commit()
        if row is None:
            raise RuntimeError("INSERT into ocr_results returned no id")
        return str(row[0]), row[1]

    def find_by_upload_id(self, upload_record_id: str) -> ExtractionResult | None:
        with self._connect() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    _SELECT_COLUMNS + "WHERE r.ocr_upload_id = %s",
                    (upload_record_id,),
                )
                row = cur.fetchone()
        return self._to_result(row) if row is not None else None

    def list_history(self, clinic_id: str, limit: int = 50) -> list[ExtractionResult]:
        """Results for one clinic, newest first."""
        with self._connect() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    _SELECT_COLUMNS
                    + """
                    JOIN ocr_uploads u ON u.id = r.ocr_upload_id
                    WHERE r.clinic_id = %s AND u.clinic_id = %s
                    ORDER BY r.created_at DESC
                    LIMIT %s
                    """,
                    (clinic_id, clinic_id, limit),
                )
                rows = cur.fetchall()
        return [self._to_result(row) for row in rows]

    @staticmethod
    def _to_result(row: dict[str, Any]) -> ExtractionResult:
        report = row["validation_report"]
        return ExtractionResult(
            id=str(row["id"]),
            upload_record_id=str(row["ocr_upload_id"]),
            raw_text=row["raw_text"] or "",
            normalized_text=row["cleaned_medical_text"] or "",
            structured_data=build_structured_data(row["extracted_data"] or {}),
            confidence=float(row["confidence"]),
            processing_time_ms=int(row["processing_time"]),
            validation_report=ValidationReport.from_dict(report) if report else None,
            created_at=row["created_at"],
        )
