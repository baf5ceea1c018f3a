"""
Error taxonomy for the form validation demo.

Field validation failures reach the user as plain messages returned by the
rules. The classes here describe the same failures, and real faults, in a
structured form for the log: rules that misbehave, bad configuration and
unexpected system errors.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar

logger = logging.getLogger(__name__)


class ErrorType(Enum):
    VALIDATION = "validation"
    CONFIG = "config"
    SYSTEM = "system"


class ErrorCode(Enum):
    # Field values
    INVALID_INPUT = "INVALID_INPUT"
    INVALID_FORMAT = "INVALID_FORMAT"
    VALUE_OUT_OF_RANGE = "VALUE_OUT_OF_RANGE"
    REQUIRED_FIELD_MISSING = "REQUIRED_FIELD_MISSING"
    RULE_FAILURE = "RULE_FAILURE"

    # Settings
    CONFIG_INVALID = "CONFIG_INVALID"
    CONFIG_PARSE_ERROR = "CONFIG_PARSE_ERROR"

    # Runtime
    OS_ERROR = "OS_ERROR"
    MEMORY_ERROR = "MEMORY_ERROR"
    UNKNOWN = "UNKNOWN"


class ErrorSeverity(Enum):
    LOW = "low"  # expected user input problems
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


@dataclass(eq=False)
class BaseAppError(Exception):
    """
    Structured application error.

    ``user_message`` is what the UI may show. ``technical_message`` and
    ``context`` are for the log only and are redacted before writing.
    """

    type: ErrorType
    code: ErrorCode
    user_message: str
    technical_message: str | None = None
    severity: ErrorSeverity = ErrorSeverity.MEDIUM
    context: dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        return self.user_message

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.code.value}, {self.user_message!r})"

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type.value,
            "code": self.code.value,
            "user_message": self.user_message,
            "technical_message": self.technical_message,
            "severity": self.severity.value,
            "context": dict(self.context),
        }


class _CategorizedError(BaseAppError):
    """An error whose type and default severity come from its class."""

    error_type: ClassVar[ErrorType]
    default_severity: ClassVar[ErrorSeverity] = ErrorSeverity.MEDIUM

    def __init__(
        self,
        code: ErrorCode,
        user_message: str,
        technical_message: str | None = None,
        severity: ErrorSeverity | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(
            type=self.error_type,
            code=code,
            user_message=user_message,
            technical_message=technical_message,
            severity=severity or self.default_severity,
            context=dict(context or {}),
        )


class ValidationError(_CategorizedError):
    """A field failed validation, or one of its rules could not run."""

    error_type = ErrorType.VALIDATION
    default_severity = ErrorSeverity.LOW

    def __init__(
        self,
        code: ErrorCode,
        user_message: str,
        field: str | None = None,
        technical_message: str | None = None,
        severity: ErrorSeverity | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(code, user_message, technical_message, severity, context)
        if field:
            self.context["field"] = field

    @property
    def field(self) -> str | None:
        return self.context.get("field")


class ConfigError(_CategorizedError):
    """A stored or imported setting is unusable."""

    error_type = ErrorType.CONFIG


class SystemError(_CategorizedError):
    """Unexpected runtime failure outside the application's control."""

    error_type = ErrorType.SYSTEM
    default_severity = ErrorSeverity.HIGH


# Built-in exception -> (error class, code, message used when the exception has none)
_EXCEPTION_MAPPING: dict[type[Exception], tuple[type[_CategorizedError], ErrorCode, str]] = {
    ValueError: (ValidationError, ErrorCode.INVALID_INPUT, "Invalid input provided"),
    TypeError: (ValidationError, ErrorCode.INVALID_INPUT, "Invalid input provided"),
    OSError: (SystemError, ErrorCode.OS_ERROR, "System error occurred"),
    MemoryError: (SystemError, ErrorCode.MEMORY_ERROR, "Insufficient memory"),
}


def map_exception(exc: Exception, context: dict[str, Any] | None = None) -> BaseAppError:
    """
    Wrap a built-in exception in the matching application error.

    Subclasses map like their closest listed base, so FileNotFoundError is
    reported as an OS error. BaseAppError instances are returned unchanged.
    """
    if isinstance(exc, BaseAppError):
        return exc

    technical = f"{type(exc).__name__}: {exc}"
    for base in type(exc).__mro__:
        if base in _EXCEPTION_MAPPING:
            error_class, code, fallback_message = _EXCEPTION_MAPPING[base]
            return error_class(
                code=code,
                user_message=str(exc) or fallback_message,
                technical_message=technical,
                context=context,
            )

    logger.warning(f"Unmapped exception type {technical}")
    return SystemError(
        code=ErrorCode.UNKNOWN,
        user_message="An unexpected error occurred",
        technical_message=technical,
        context=context,
    )


def from_exception(exc: Exception, context: dict[str, Any] | None = None) -> BaseAppError:
    """Alias of map_exception() used by the error handler."""
    return map_exception(exc, context)
