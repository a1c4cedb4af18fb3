import logging
import sys
import time
from collections.abc import Generator
from contextlib import contextmanager


class Log:
    """Centralized logging with structured format."""

    _logger: logging.Logger = logging.getLogger("casepaper")

    @classmethod
    def configure(cls, log_level: str) -> None:
        """Configure the logger with the specified level and stdout handler."""
        cls._logger.setLevel(log_level.upper())
        if not cls._logger.handlers:
            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(
                logging.Formatter("%(asctime)s [%(levelname)s] %(message)s")
            )
            cls._logger.addHandler(handler)

    @classmethod
    def info(cls, message: str, **kwargs: object) -> None:
        cls._logger.info(message, extra=kwargs)

    @classmethod
    def error(cls, message: str, **kwargs: object) -> None:
        cls._logger.error(message, extra=kwargs)

    @classmethod
    def warning(cls, message: str, **kwargs: object) -> None:
        cls._logger.warning(message, extra=kwargs)

    @classmethod
    def debug(cls, message: str, **kwargs: object) -> None:
        cls._logger.debug(message, extra=kwargs)

    @classmethod
    @contextmanager
    def stage(cls, name: str, upload_id: str) -> Generator[None, None, None]:
        """Log entry, exit and elapsed milliseconds of one pipeline stage.

        Exceptions are logged as warnings and re-raised unchanged; deciding
        whether a failure is fatal belongs to the caller.
        """
        started = time.monotonic()
        cls.debug(f"[{upload_id}] {name}: started")
        try:
            yield
        except Exception as exc:
            elapsed_ms = int((time.monotonic() - started) * 1000)
            cls.warning(f"[{upload_id}] {name}: failed after {elapsed_ms} ms: {exc}")
            raise
        elapsed_ms = int((time.monotonic() - started) * 1000)
        cls.info(f"[{upload_id}] {name}: finished in {elapsed_ms} ms")
