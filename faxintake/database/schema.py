from faxintake.database.connection import get_connection
from faxintake.logging.logger import Log

# blob_name is the idempotency key; the unique constraint closes the race
# between two deliveries that both pass the existence check.
SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS authorization_records (
    id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
    blob_name TEXT NOT NULL,
    file_name TEXT NOT NULL,
    uploaded_at TIMESTAMPTZ NOT NULL,
    status TEXT NOT NULL DEFAULT 'processing',
    extracted_data JSONB,
    processed_at TIMESTAMPTZ,
    error_message TEXT,
    created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
    updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
    CONSTRAINT authorization_records_blob_name_key UNIQUE (blob_name),
    CONSTRAINT authorization_records_status_check
        CHECK (status IN ('processing', 'completed', 'failed')),
    CONSTRAINT authorization_records_outcome_check
        CHECK (extracted_data IS NULL OR error_message IS NULL)
)
"""


def ensure_schema() -> None:
    """Create the authorization_records table if it does not exist."""
    with get_connection() as conn:
        conn.execute(SCHEMA_SQL)
        conn.commit()
    Log.info("Schema ready: authorization_records")
