from datetime import datetime
from typing import Any

from psycopg import errors
from psycopg.rows import dict_row
from psycopg.types.json import Jsonb

from faxintake.database.connection import get_connection
from faxintake.database.exceptions import (
    DuplicateRecordError,
    RecordNotFoundError,
    RecordStoreError,
)
from faxintake.database.models import AuthorizationRecord
from faxintake.extraction.models import ExtractedFields
from faxintake.logging.logger import Log


class AuthorizationRepository:
    """Database operations for the authorization_records table.

    Terminal writes only match rows still in 'processing', so a completed or
    failed record is never rewritten.
    """

    def create(self, blob_name: str, file_name: str, uploaded_at: datetime) -> str:
        """Insert a record in 'processing' state and return its id.

        Raises:
            DuplicateRecordError: if a record for ``blob_name`` already exists.
        """
        try:
            with get_connection() as conn:
                with conn.cursor() as cur:
                    cur.execute(
                        """
                        INSERT INTO authorization_records
                            (blob_name, file_name, uploaded_at, status)
                        VALUES (%s, %s, %s, 'processing')
                        RETURNING id
                        """,
                        (blob_name, file_name, uploaded_at),
                    )
                    row = cur.fetchone()
                conn.commit()
        except errors.UniqueViolation as exc:
            raise DuplicateRecordError(
                f"Record for blob {blob_name} already exists"
            ) from exc

        if row is None:
            raise RecordStoreError(f"Insert for blob {blob_name} returned no id")
        record_id = str(row[0])
        Log.info(f"Created authorization record {record_id}, status: processing")
        return record_id

    def mark_completed(self, record_id: str, fields: ExtractedFields) -> None:
        """Attach extracted fields and mark the record completed.

        Raises:
            RecordNotFoundError: if no 'processing' record has this id.
        """
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    UPDATE authorization_records
                    SET extracted_data = %s, status = 'completed',
                        processed_at = NOW(), updated_at = NOW()
                    WHERE id = %s AND status = 'processing'
                    """,
                    (Jsonb(fields.to_payload()), record_id),
                )
                if cur.rowcount == 0:
                    raise RecordNotFoundError(
                        f"Record {record_id} not found in processing state"
                    )
            conn.commit()
        Log.info(f"Updated authorization record {record_id}, status: completed")

    def mark_failed(self, record_id: str, error_message: str) -> None:
        """Mark the record failed with the triggering error message.

        Raises:
            RecordNotFoundError: if no 'processing' record has this id.
        """
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    UPDATE authorization_records
                    SET status = 'failed', error_message = %s,
                        processed_at = NOW(), updated_at = NOW()
                    WHERE id = %s AND status = 'processing'
                    """,
                    (error_message, record_id),
                )
                if cur.rowcount == 0:
                    raise RecordNotFoundError(
                        f"Record {record_id} not found in processing state"
                    )
            conn.commit()
        Log.warning(f"Marked authorization record {record_id} as failed: {error_message}")

    def find_by_id(self, record_id: str) -> AuthorizationRecord | None:
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    """
                    SELECT id, blob_name, file_name, uploaded_at, status,
                           extracted_data, processed_at, error_message,
                           created_at, updated_at
                    FROM authorization_records
                    WHERE id = %s
                    """,
                    (record_id,),
                )
                row = cur.fetchone()

        if row is None:
            return None
        return _to_record(row)

    def exists_by_blob_name(self, blob_name: str) -> bool:
        """Idempotency lookup: has a record been created for this blob?"""
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    "SELECT id FROM authorization_records WHERE blob_name = %s LIMIT 1",
                    (blob_name,),
                )
                row = cur.fetchone()

        if row is None:
            return False
        Log.info(f"Blob {blob_name} already processed (record {row[0]})")
        return True


def _to_record(row: dict[str, Any]) -> AuthorizationRecord:
    extracted = row["extracted_data"]
    return AuthorizationRecord(
        id=str(row["id"]),
        blob_name=row["blob_name"],
        file_name=row["file_name"],
        uploaded_at=row["uploaded_at"],
        status=row["status"],
        extracted_data=ExtractedFields.from_payload(extracted) if extracted is not None else None,
        processed_at=row["processed_at"],
        error_message=row["error_message"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )
