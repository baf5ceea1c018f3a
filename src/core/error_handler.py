"""
Error reporting for the form validation demo.

Every fault the application notices ends up in ErrorHandler.handle(): it is
normalized to a BaseAppError, stripped of anything that looks like a secret,
appended to a rotating log file and announced to the UI through a Qt signal.
Field failures found on submit take the same route at INFO level, which is
why password values must never survive into the log context.
"""

from __future__ import annotations

import logging
import logging.handlers
import sys
import threading
import traceback
from pathlib import Path
from typing import Any

from PySide6.QtCore import QObject, QStandardPaths, Signal

from .config import APP_NAME, APP_ORGANIZATION
from .errors import BaseAppError, ErrorSeverity, from_exception

ERROR_LOGGER_NAME = "formdemo.errors"

SENSITIVE_MARKERS = ("password", "token", "key", "secret")
REDACTED = "[REDACTED]"

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
ERROR_LOG_FORMAT = "%(asctime)s | %(levelname)s | code=%(app_code)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

LOG_FILE_MAX_BYTES = 5 * 1024 * 1024
LOG_FILE_BACKUPS = 5

# Limits for values copied into the log context
MAX_CONTEXT_ITEMS = 20
MAX_VALUE_LENGTH = 200


def is_sensitive(name: str | None) -> bool:
    """Check whether a field or context key may hold a secret."""
    if not name:
        return False
    lowered = name.lower()
    return any(marker in lowered for marker in SENSITIVE_MARKERS)


def _safe_repr(value: Any) -> str:
    try:
        return repr(value)[:MAX_VALUE_LENGTH]
    except Exception:
        return "[REPR_FAILED]"


def redact_context(context: dict[str, Any]) -> dict[str, Any]:
    """
    Return a copy of ``context`` that is safe to write to the log.

    Keys that look secret are replaced with ``[REDACTED]``. The ``value``
    entry is redacted too when ``field`` names a secret field, so a failed
    password check logs the message but not the password. ``field`` and
    ``traceback`` are kept verbatim; other values are repr'd and shortened.
    """
    field_name = context.get("field")
    secret_field = isinstance(field_name, str) and is_sensitive(field_name)

    safe: dict[str, Any] = {}
    for index, (key, value) in enumerate(context.items()):
        if index == MAX_CONTEXT_ITEMS:
            safe["..."] = f"({len(context) - MAX_CONTEXT_ITEMS} more items truncated)"
            break
        if is_sensitive(key) or (key == "value" and secret_field):
            safe[key] = REDACTED
        elif key in ("field", "traceback") and isinstance(value, str):
            safe[key] = value
        elif isinstance(value, str) and len(value) > MAX_VALUE_LENGTH:
            safe[key] = value[:MAX_VALUE_LENGTH] + "..."
        else:
            safe[key] = _safe_repr(value)
    return safe


def log_directory() -> Path:
    """Directory holding app.log, created on first use."""
    location = QStandardPaths.writableLocation(QStandardPaths.StandardLocation.AppDataLocation)
    if location:
        base = Path(location)
    else:
        config_location = QStandardPaths.writableLocation(QStandardPaths.StandardLocation.ConfigLocation)
        base = Path(config_location) / APP_ORGANIZATION / APP_NAME

    logs_dir = base / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    return logs_dir


class _AppCodeFilter(logging.Filter):
    """Give records logged without ``extra`` a placeholder error code."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "app_code"):
            record.app_code = "-"
        return True


def _configure_error_logger(logs_dir: Path) -> logging.Logger:
    logger = logging.getLogger(ERROR_LOGGER_NAME)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False

    if logger.handlers:
        return logger

    formatter = logging.Formatter(ERROR_LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    file_handler = logging.handlers.RotatingFileHandler(
        logs_dir / "app.log",
        maxBytes=LOG_FILE_MAX_BYTES,
        backupCount=LOG_FILE_BACKUPS,
        encoding="utf-8",
    )
    file_handler.setFormatter(formatter)
    file_handler.addFilter(_AppCodeFilter())
    logger.addHandler(file_handler)

    if __debug__:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.WARNING)
        console_handler.setFormatter(formatter)
        console_handler.addFilter(_AppCodeFilter())
        logger.addHandler(console_handler)

    return logger


class ErrorHandler(QObject):
    """
    Process-wide error sink.

    Constructing it twice returns the same object, so widgets can call
    ``get_error_handler()`` wherever they need it.
    """

    errorOccurred = Signal(object)  # BaseAppError

    _instance: ErrorHandler | None = None

    def __new__(cls) -> ErrorHandler:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self) -> None:
        if getattr(self, "_ready", False):
            return
        super().__init__()
        self._ready = True

        self._previous_excepthook = sys.excepthook
        self._previous_threading_excepthook = threading.excepthook
        self.logger = self._setup_logging()

    def _setup_logging(self) -> logging.Logger:
        try:
            return _configure_error_logger(log_directory())
        except OSError as e:
            # Without a writable log directory, errors still reach stderr
            fallback = logging.getLogger(ERROR_LOGGER_NAME)
            fallback.addHandler(logging.StreamHandler())
            fallback.error(f"Could not create error log: {e}")
            return fallback

    def capture(self, exception: Exception, context: dict[str, Any] | None = None) -> BaseAppError:
        """
        Convert ``exception`` into a BaseAppError with a redacted context.

        Context passed here is merged over the context the error already
        carries. A traceback entry is added when none is present.
        """
        app_error = from_exception(exception)
        merged = {**app_error.context, **(context or {})}
        merged.setdefault("traceback", self._format_traceback(exception))
        app_error.context = redact_context(merged)

        if not app_error.technical_message:
            app_error.technical_message = f"{type(exception).__name__}: {exception}"
        return app_error

    @staticmethod
    def _format_traceback(exception: BaseException) -> str:
        if exception.__traceback__ is None:
            return f"{type(exception).__name__}: {exception}\n"
        return "".join(traceback.format_exception(type(exception), exception, exception.__traceback__))

    def handle(self, exception: Exception, context: dict[str, Any] | None = None) -> BaseAppError:
        """
        Capture, log and broadcast an error.

        Low severity errors (field failures) are logged at INFO without a
        traceback; everything else is logged at ERROR with one.

        Returns:
            The normalized error, also emitted through ``errorOccurred``
        """
        if isinstance(exception, SystemExit | KeyboardInterrupt):
            raise exception

        app_error = self.capture(exception, context)

        is_fault = app_error.severity is not ErrorSeverity.LOW
        self.logger.log(
            logging.ERROR if is_fault else logging.INFO,
            f"[{app_error.code.value}] {app_error.user_message}",
            extra={
                "app_code": app_error.code.value,
                "error_type": app_error.type.value,
                "severity": app_error.severity.value,
            },
            exc_info=exception if is_fault else None,
        )

        self.errorOccurred.emit(app_error)
        return app_error

    def _on_unhandled(self, exc_type: type[BaseException], exc_value: BaseException, exc_tb: Any) -> None:
        if not isinstance(exc_value, Exception):
            # KeyboardInterrupt and friends keep their default behaviour
            self._previous_excepthook(exc_type, exc_value, exc_tb)
            return
        try:
            self.handle(exc_value, {"source": "sys.excepthook"})
        except Exception:
            self._previous_excepthook(exc_type, exc_value, exc_tb)

    def _on_thread_exception(self, args: threading.ExceptHookArgs) -> None:
        if not isinstance(args.exc_value, Exception):
            self._previous_threading_excepthook(args)
            return
        thread_name = args.thread.name if args.thread else "unknown"
        try:
            self.handle(args.exc_value, {"source": "threading.excepthook", "thread": thread_name})
        except Exception:
            self._previous_threading_excepthook(args)

    def install_hooks(self) -> None:
        """Route uncaught exceptions from any thread through handle()."""
        sys.excepthook = self._on_unhandled
        threading.excepthook = self._on_thread_exception

    def restore_hooks(self) -> None:
        sys.excepthook = self._previous_excepthook
        threading.excepthook = self._previous_threading_excepthook


def get_error_handler() -> ErrorHandler:
    return ErrorHandler()


def setup_error_handling() -> ErrorHandler:
    """
    Install the global exception hooks.

    Call once at startup, after the QApplication exists.
    """
    handler = get_error_handler()
    handler.install_hooks()
    return handler


def init_logging(level: str = "INFO") -> None:
    """
    Configure console logging for all modules and open the error log.

    Args:
        level: Root log level name such as "DEBUG" or "INFO"; unknown
            names fall back to INFO
    """
    get_error_handler()
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
    )
