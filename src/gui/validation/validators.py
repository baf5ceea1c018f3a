"""
Helpers that turn field failures into structured errors for the log.
"""

from __future__ import annotations

from typing import Any

from core.errors import ErrorCode, ValidationError


def create_validation_error(
    field: str,
    message: str,
    value: Any = None,
    code: ErrorCode = ErrorCode.INVALID_INPUT,
) -> ValidationError:
    """
    Create a ValidationError for logging purposes.

    Args:
        field: Field name that failed validation
        message: Validation error message
        value: The invalid value
        code: Error code carried by the failing rule

    Returns:
        ValidationError instance
    """
    return ValidationError(
        code=code,
        user_message=message,
        field=field,
        technical_message=f"Validation failed for field '{field}': {message}",
        context={"value": value} if value is not None else {},
    )
