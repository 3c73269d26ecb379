import uuid
from datetime import UTC, date, datetime
from unittest.mock import MagicMock, patch

import pytest
from psycopg import errors
from psycopg.types.json import Jsonb

from faxintake.database.exceptions import DuplicateRecordError, RecordNotFoundError
from faxintake.database.models import AuthorizationRecord
from faxintake.database.repositories.authorization_repository import AuthorizationRepository
from faxintake.extraction.models import ExtractedFields

REPO_CONN = "faxintake.database.repositories.authorization_repository.get_connection"
RECORD_UUID = uuid.UUID("3f1c2b9e-1111-4c4c-8a8a-0123456789ab")
UPLOADED_AT = datetime(2024, 6, 3, 12, 0, tzinfo=UTC)


def _mock_connection(mock_get_conn: MagicMock) -> tuple[MagicMock, MagicMock]:
    """Wire up a mock connection + cursor and return (mock_conn, mock_cursor)."""
    mock_cursor = MagicMock()
    mock_conn = MagicMock()
    mock_conn.cursor.return_value.__enter__ = MagicMock(return_value=mock_cursor)
    mock_conn.cursor.return_value.__exit__ = MagicMock(return_value=False)
    mock_get_conn.return_value.__enter__ = MagicMock(return_value=mock_conn)
    mock_get_conn.return_value.__exit__ = MagicMock(return_value=False)
    return mock_conn, mock_cursor


def _make_row(**overrides: object) -> dict[str, object]:
    row: dict[str, object] = {
        "id": RECORD_UUID,
        "blob_name": "fax1/fax1.pdf",
        "file_name": "fax1.pdf",
        "uploaded_at": UPLOADED_AT,
        "status": "completed",
        "extracted_data": {"patientName": "John Doe", "cptCodes": ["97110", "97140"]},
        "processed_at": UPLOADED_AT,
        "error_message": None,
        "created_at": UPLOADED_AT,
        "updated_at": UPLOADED_AT,
    }
    row.update(overrides)
    return row


class TestCreate:
    @patch(REPO_CONN)
    def test_returns_generated_id_as_string(self, mock_get_conn: MagicMock) -> None:
        _conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.fetchone.return_value = (RECORD_UUID,)

        record_id = AuthorizationRepository().create("fax1/fax1.pdf", "fax1.pdf", UPLOADED_AT)

        assert record_id == str(RECORD_UUID)

    @patch(REPO_CONN)
    def test_inserts_processing_row(self, mock_get_conn: MagicMock) -> None:
        mock_conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.fetchone.return_value = (RECORD_UUID,)

        AuthorizationRepository().create("fax1/fax1.pdf", "fax1.pdf", UPLOADED_AT)

        sql, params = mock_cursor.execute.call_args.args
        assert "INSERT INTO authorization_records" in sql
        assert "'processing'" in sql
        assert params == ("fax1/fax1.pdf", "fax1.pdf", UPLOADED_AT)
        mock_conn.commit.assert_called_once()

    @patch(REPO_CONN)
    def test_unique_violation_raises_duplicate(self, mock_get_conn: MagicMock) -> None:
        _conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.execute.side_effect = errors.UniqueViolation("duplicate key")

        with pytest.raises(DuplicateRecordError, match="fax1/fax1.pdf"):
            AuthorizationRepository().create("fax1/fax1.pdf", "fax1.pdf", UPLOADED_AT)

    @patch(REPO_CONN)
    def test_other_store_errors_propagate(self, mock_get_conn: MagicMock) -> None:
        _conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.execute.side_effect = errors.OperationalError("server closed")

        with pytest.raises(errors.OperationalError):
            AuthorizationRepository().create("fax1/fax1.pdf", "fax1.pdf", UPLOADED_AT)


class TestMarkCompleted:
    @patch(REPO_CONN)
    def test_writes_payload_and_status(self, mock_get_conn: MagicMock) -> None:
        mock_conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.rowcount = 1
        fields = ExtractedFields(patient_name="John Doe", date_of_birth=date(1980, 5, 17))

        AuthorizationRepository().mark_completed("rec-1", fields)

        sql, params = mock_cursor.execute.call_args.args
        assert "status = 'completed'" in sql
        assert "processed_at = NOW()" in sql
        assert "status = 'processing'" in sql
        assert isinstance(params[0], Jsonb)
        assert params[0].obj == {"patientName": "John Doe", "dateOfBirth": "1980-05-17"}
        assert params[1] == "rec-1"
        mock_conn.commit.assert_called_once()

    @patch(REPO_CONN)
    def test_terminal_or_missing_record_raises(self, mock_get_conn: MagicMock) -> None:
        mock_conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.rowcount = 0

        with pytest.raises(RecordNotFoundError, match="rec-1"):
            AuthorizationRepository().mark_completed("rec-1", ExtractedFields())

        mock_conn.commit.assert_not_called()


class TestMarkFailed:
    @patch(REPO_CONN)
    def test_writes_status_and_message(self, mock_get_conn: MagicMock) -> None:
        _conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.rowcount = 1

        AuthorizationRepository().mark_failed("rec-1", "timeout")

        sql, params = mock_cursor.execute.call_args.args
        assert "status = 'failed'" in sql
        assert "error_message = %s" in sql
        assert params == ("timeout", "rec-1")

    @patch(REPO_CONN)
    def test_terminal_or_missing_record_raises(self, mock_get_conn: MagicMock) -> None:
        _conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.rowcount = 0

        with pytest.raises(RecordNotFoundError):
            AuthorizationRepository().mark_failed("rec-1", "timeout")


class TestFindById:
    @patch(REPO_CONN)
    def test_returns_record_with_fields(self, mock_get_conn: MagicMock) -> None:
        _conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.fetchone.return_value = _make_row()

        record = AuthorizationRepository().find_by_id(str(RECORD_UUID))

        assert isinstance(record, AuthorizationRecord)
        assert record.id == str(RECORD_UUID)
        assert record.source_path == "fax1/fax1.pdf"
        assert record.status == "completed"
        assert record.extracted_data == ExtractedFields(
            patient_name="John Doe", cpt_codes=["97110", "97140"]
        )
        assert record.is_terminal is True

    @patch(REPO_CONN)
    def test_failed_record_has_no_fields(self, mock_get_conn: MagicMock) -> None:
        _conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.fetchone.return_value = _make_row(
            status="failed", extracted_data=None, error_message="timeout"
        )

        record = AuthorizationRepository().find_by_id(str(RECORD_UUID))

        assert record is not None
        assert record.extracted_data is None
        assert record.error_message == "timeout"

    @patch(REPO_CONN)
    def test_returns_none_when_missing(self, mock_get_conn: MagicMock) -> None:
        _conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.fetchone.return_value = None

        assert AuthorizationRepository().find_by_id("missing") is None


class TestExistsByBlobName:
    @patch(REPO_CONN)
    def test_true_when_row_found(self, mock_get_conn: MagicMock) -> None:
        _conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.fetchone.return_value = (RECORD_UUID,)

        assert AuthorizationRepository().exists_by_blob_name("fax3/fax3.pdf") is True

    @patch(REPO_CONN)
    def test_false_when_no_row(self, mock_get_conn: MagicMock) -> None:
        _conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.fetchone.return_value = None

        assert AuthorizationRepository().exists_by_blob_name("fax3/fax3.pdf") is False

    @patch(REPO_CONN)
    def test_queries_by_exact_blob_name(self, mock_get_conn: MagicMock) -> None:
        _conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.fetchone.return_value = None

        AuthorizationRepository().exists_by_blob_name("fax3/fax3.pdf")

        sql, params = mock_cursor.execute.call_args.args
        assert "blob_name = %s" in sql
        assert params == ("fax3/fax3.pdf",)
