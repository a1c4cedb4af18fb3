from typing import Any

from psycopg.rows import dict_row

from casepaper.database.connection import ConnectionFactory, get_connection
from casepaper.database.exceptions import UploadRecordNotFoundError
from casepaper.database.models import SourceFile, SubjectRefs, UploadRecord, UploadStatus


class UploadLedgerRepository:
    """Database operations for the ocr_uploads table.

    Terminal transitions only touch rows still in 'processing', so a
    completed or failed record can never move again.
    """

    def __init__(self, connection_factory: ConnectionFactory = get_connection) -> None:
        self._connect = connection_factory

    def create(
        self,
        clinic_id: str,
        subject_refs: SubjectRefs,
        source_file: SourceFile,
        submitted_by: str,
    ) -> str:
        """Insert a new record in 'processing' state and return its id."""
        with self._connect() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    INSERT INTO ocr_uploads
                    (clinic_id, patient_id, visit_id, file_name, file_url,
                     file_size, mime_type, uploaded_by, status)
                    VALUES (%s, %s, %s, %s, %s, %s, %s, %s, 'processing')
                    RETURNING id
                    """,
                    (
                        clinic_id,
                        subject_refs.patient_id,
                        subject_refs.visit_id,
                        source_file.name,
                        source_file.url,
                        source_file.size_bytes,
                        source_file.mime_type,
                        submitted_by,
                    ),
                )
                row = cur.fetchone()
            conn.commit()
        if row is None:
            raise RuntimeError("INSERT into ocr_uploads returned no id")
        return str(row[0])

    def mark_completed(self, upload_id: str) -> bool:
        """Move a processing record to completed. Returns False if it was already terminal."""
        return self._finish(upload_id, UploadStatus.COMPLETED, None)

    def mark_failed(self, upload_id: str, error: str | None = None) -> bool:
        """Move a processing record to failed. Returns False if it was already terminal."""
        return self._finish(upload_id, UploadStatus.FAILED, error)

    def _finish(self, upload_id: str, status: UploadStatus, error: str | None) -> bool:
        with self._connect() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    UPDATE ocr_uploads
                    SET status = %s, error_message = %s, processed_at = NOW()
                    WHERE id = %s AND status = 'processing'
                    """,
                    (status.value, error, upload_id),
                )
                changed = cur.rowcount == 1
            conn.commit()
        return changed

    def find_by_id(self, upload_id: str) -> UploadRecord:
        """Find an upload record by id.

        Raises:
            UploadRecordNotFoundError: if no record with this id exists.
        """
        with self._connect() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    """
                    SELECT id, clinic_id, patient_id, visit_id, file_name, file_url,
                           file_size, mime_type, uploaded_by, status, error_message,
                           created_at, processed_at
                    FROM ocr_uploads
                    WHERE id = %s
                    """,
                    (upload_id,),
                )
                row = cur.fetchone()

        if row is None:
            raise UploadRecordNotFoundError(f"Upload record {upload_id} not found")
        return self._to_record(row)

    @staticmethod
    def _to_record(row: dict[str, Any]) -> UploadRecord:
        return UploadRecord(
            id=str(row["id"]),
            clinic_id=row["clinic_id"],
            subject_refs=SubjectRefs(patient_id=row["patient_id"], visit_id=row["visit_id"]),
            source_file=SourceFile(
                name=row["file_name"],
                size_bytes=row["file_size"],
                mime_type=row["mime_type"],
                url=row["file_url"],
            ),
            status=UploadStatus(row["status"]),
            submitted_by=row["uploaded_by"],
            error_message=row["error_message"],
            created_at=row["created_at"],
            processed_at=row["processed_at"],
        )
