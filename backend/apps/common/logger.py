import logging
import time
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional


class AppLogger:
    """Stdlib logger wrapper that carries bound ``key=value`` context."""

    def __init__(
        self,
        name: str,
        context: Optional[Dict[str, Any]] = None,
        _logger: Optional[logging.Logger] = None,
    ):
        self._logger = _logger or logging.getLogger(name)
        self._name = name
        self._context = context or {}

    @property
    def name(self) -> str:
        return self._name

    @property
    def context(self) -> Dict[str, Any]:
        return dict(self._context)

    def bind(self, **extra: Any) -> "AppLogger":
        """Return a new logger with ``extra`` merged into the bound context."""
        merged = {**self._context, **extra}
        return AppLogger(self._name, merged, _logger=self._logger)

    def debug(self, message: str, **context: Any) -> None:
        self._log(logging.DEBUG, message, context)

    def info(self, message: str, **context: Any) -> None:
        self._log(logging.INFO, message, context)

    def warning(self, message: str, **context: Any) -> None:
        self._log(logging.WARNING, message, context)

    def error(self, message: str, **context: Any) -> None:
        self._log(logging.ERROR, message, context)

    def exception(self, message: str, **context: Any) -> None:
        """Log at ERROR with the active exception attached."""
        payload = {**self._context, **context}
        self._logger.error(self._format(message, payload), exc_info=True)

    @contextmanager
    def timed(
        self, message: str, *, level: int = logging.DEBUG, **context: Any
    ) -> Iterator[Dict[str, Any]]:
        """
        Log ``message`` with ``elapsed_ms`` once the block exits normally.

        The yielded dict is merged into the record, so the block can attach
        results (row counts, totals) discovered while it runs.
        """
        started = time.perf_counter()
        extra: Dict[str, Any] = {}
        yield extra
        elapsed = round((time.perf_counter() - started) * 1000, 2)
        self._log(level, message, {**context, **extra, "elapsed_ms": elapsed})

    def _log(self, level: int, message: str, context: Dict[str, Any]) -> None:
        if not self._logger.isEnabledFor(level):
            return
        payload = {**self._context, **context} if context else dict(self._context)
        self._logger.log(level, self._format(message, payload))

    @staticmethod
    def _format(message: str, context: Dict[str, Any]) -> str:
        if not context:
            return message
        ctx_str = " ".join(
            f"{key}={AppLogger._stringify(value)}" for key, value in context.items()
        )
        return f"{message} | {ctx_str}"

    @staticmethod
    def _stringify(value: Any) -> str:
        if isinstance(value, (str, int, float, bool)) or value is None:
            return str(value)
        return repr(value)


def get_logger(name: str) -> AppLogger:
    return AppLogger(name)
