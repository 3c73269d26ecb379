import time

from faxintake.config.settings import Settings
from faxintake.intake.models import IntakeOutcome
from faxintake.intake.orchestrator import IntakeOrchestrator
from faxintake.logging.logger import Log
from faxintake.storage.base import BaseBlobStorage
from faxintake.storage.models import BlobItem


class BlobWatcher:
    """Poll loop: list -> deliver new blobs -> sleep when idle.

    A blob is delivered once per (name, etag) seen by this process. Delivery is
    at-least-once across restarts; the orchestrator's idempotency check makes
    redelivery harmless. A relocated fax shows up as a new blob on the next
    poll, which is how processing continues after organizing.
    """

    def __init__(
        self,
        storage: BaseBlobStorage,
        orchestrator: IntakeOrchestrator,
        settings: Settings,
    ) -> None:
        self._storage = storage
        self._orchestrator = orchestrator
        self._settings = settings
        self._seen: dict[str, str] = {}

    def run(self, max_polls: int | None = None) -> None:
        """Main poll loop. Runs forever until interrupted.

        If max_polls is set, stop after that many polls (for testing).
        """
        Log.info("Watcher started, polling for new faxes")
        polls = 0
        try:
            while max_polls is None or polls < max_polls:
                outcomes = self.poll_once()
                polls += 1
                if outcomes:
                    continue
                Log.debug("No new blobs, sleeping")
                time.sleep(self._settings.watch_poll_interval_seconds)
        except KeyboardInterrupt:
            Log.info("Watcher shutting down gracefully")

    def poll_once(self) -> list[IntakeOutcome]:
        """Deliver every blob not yet seen with its current etag."""
        blobs = self._try_list_blobs()
        if blobs is None:
            return []
        self._forget_missing(blobs)

        outcomes: list[IntakeOutcome] = []
        for blob in blobs:
            if self._seen.get(blob.name) == blob.etag:
                continue
            outcome = self._deliver(blob)
            if outcome is None:
                continue
            self._seen[blob.name] = blob.etag
            outcomes.append(outcome)
        return outcomes

    def _deliver(self, blob: BlobItem) -> IntakeOutcome | None:
        try:
            content = self._storage.read(blob.name)
        except Exception as exc:
            Log.warning(f"Could not read blob {blob.name}, will retry: {exc}")
            return None
        outcome = self._orchestrator.handle(blob.name, content, blob.last_modified)
        Log.debug(f"Delivery of {blob.name} ended with {type(outcome).__name__}")
        return outcome

    def _try_list_blobs(self) -> list[BlobItem] | None:
        try:
            return self._storage.list_blobs()
        except Exception as exc:
            Log.warning(f"Storage error while listing blobs, will retry: {exc}")
            return None

    def _forget_missing(self, blobs: list[BlobItem]) -> None:
        current = {blob.name for blob in blobs}
        for name in [name for name in self._seen if name not in current]:
            del self._seen[name]
