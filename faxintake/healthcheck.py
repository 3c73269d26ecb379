"""Record-store connectivity self-check.

Creates a probe record, reads it back, exercises the idempotency lookup and
marks the probe failed so it never looks like real intake. Exit code 0 when
every step passes.
"""

import sys
import uuid
from datetime import UTC, datetime

from faxintake.config.settings import Settings
from faxintake.database.connection import close_pool, init_pool
from faxintake.database.repositories.authorization_repository import AuthorizationRepository
from faxintake.database.schema import ensure_schema
from faxintake.logging.logger import Log


def run_checks(repository: AuthorizationRepository) -> bool:
    """Run the probe sequence against ``repository``; True when all steps pass."""
    blob_name = f"healthcheck/{uuid.uuid4().hex}.txt"
    try:
        record_id = repository.create(blob_name, "healthcheck.txt", datetime.now(UTC))
        Log.info(f"Created probe record {record_id}")

        record = repository.find_by_id(record_id)
        if record is None or record.blob_name != blob_name:
            Log.error(f"Probe record {record_id} could not be read back")
            return False
        Log.info("Read probe record back")

        if not repository.exists_by_blob_name(blob_name):
            Log.error(f"Idempotency lookup did not find {blob_name}")
            return False
        Log.info("Idempotency lookup found probe record")

        repository.mark_failed(record_id, "Healthcheck probe")
        Log.info("Marked probe record as failed")
    except Exception as exc:
        Log.error(f"Record store healthcheck failed: {exc}", exc)
        return False
    return True


def main() -> int:
    settings = Settings()
    Log.configure(settings.log_level)
    try:
        init_pool(settings)
        ensure_schema()
        ok = run_checks(AuthorizationRepository())
    except Exception as exc:
        Log.error(f"Could not connect to record store: {exc}", exc)
        ok = False
    finally:
        close_pool()

    Log.info("Record store healthcheck PASSED" if ok else "Record store healthcheck FAILED")
    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
