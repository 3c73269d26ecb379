from faxintake.config.settings import Settings
from faxintake.database.connection import close_pool, init_pool
from faxintake.database.schema import ensure_schema
from faxintake.intake.orchestrator import build_orchestrator
from faxintake.logging.logger import Log
from faxintake.storage.factory import BlobStorageFactory
from faxintake.worker.watcher import BlobWatcher


def main() -> None:
    """Entry point: settings -> pool -> schema -> dependencies -> watch loop."""
    settings = Settings()
    Log.configure(settings.log_level)
    storage = BlobStorageFactory.create(settings)
    orchestrator = build_orchestrator(settings, storage)
    init_pool(settings)

    try:
        ensure_schema()
        watcher = BlobWatcher(storage, orchestrator, settings)
        watcher.run()
    finally:
        close_pool()


if __name__ == "__main__":
    main()
