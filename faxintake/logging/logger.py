import logging
import sys

# Azure SDK HTTP policy logs every request/response header at INFO.
_NOISY_LOGGERS = ("azure", "azure.core.pipeline.policies.http_logging_policy")


class Log:
    """Centralized logging for the intake worker."""

    _logger: logging.Logger = logging.getLogger("faxintake")

    @classmethod
    def configure(cls, log_level: str) -> None:
        """Set the level, attach a stdout handler once and quiet SDK loggers."""
        cls._logger.setLevel(log_level.upper())
        if not cls._logger.handlers:
            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(
                logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
            )
            cls._logger.addHandler(handler)
        for name in _NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    @classmethod
    def info(cls, message: str, **kwargs: object) -> None:
        cls._logger.info(message, extra=kwargs)

    @classmethod
    def warning(cls, message: str, **kwargs: object) -> None:
        cls._logger.warning(message, extra=kwargs)

    @classmethod
    def error(cls, message: str, exc: BaseException | None = None, **kwargs: object) -> None:
        """Log an error message, with the traceback of ``exc`` when given."""
        cls._logger.error(message, exc_info=exc, extra=kwargs)

    @classmethod
    def debug(cls, message: str, **kwargs: object) -> None:
        cls._logger.debug(message, extra=kwargs)
