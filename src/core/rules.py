"""
Field validation rules for the signup form.

A rule is a plain callable that takes a field value and returns an error
message, or None when the value passes. Rules never raise for bad input
and never mutate the value they are given.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable, Sized
from datetime import date
from typing import Any

from .errors import ErrorCode

Rule = Callable[[Any], str | None]

# At least 8 characters, at least 2 digits anywhere, at least 1 symbol from !@#$&*~
PASSWORD_PATTERN = r"^(?=(?:.*\d){2,})(?=.*[!@#$&*~]).{8,}$"

_EMAIL_LOCAL = r"[A-Za-z0-9!#$%&'*+/=?^_`{|}~-]+(?:\.[A-Za-z0-9!#$%&'*+/=?^_`{|}~-]+)*"
_EMAIL_LABEL = r"[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?"
EMAIL_PATTERN = re.compile(rf"^{_EMAIL_LOCAL}@(?:{_EMAIL_LABEL}\.)+[A-Za-z]{{2,}}$")


def _with_code(rule: Rule, code: ErrorCode) -> Rule:
    rule.error_code = code  # type: ignore[attr-defined]
    return rule


def error_code_of(rule: Rule) -> ErrorCode:
    """Error code a rule reports its failures under; INVALID_INPUT if it has none."""
    return getattr(rule, "error_code", ErrorCode.INVALID_INPUT)


def _as_text(value: Any) -> str:
    """Render a field value as the string the user typed."""
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def is_empty(value: Any) -> bool:
    """
    Check whether a field value counts as empty.

    None, whitespace-only strings and empty collections are empty.
    Dates and numbers never are.
    """
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, Sized):
        return len(value) == 0
    return False


def _anchor_end(pattern: str) -> str:
    """Rewrite each unescaped ``$`` outside a character class as ``\\Z``."""
    chars: list[str] = []
    escaped = False
    class_start: int | None = None
    for index, char in enumerate(pattern):
        if escaped:
            escaped = False
        elif char == "\\":
            escaped = True
        elif class_start is not None:
            if char == "]" and index > class_start:
                class_start = None
            elif char == "^" and index == class_start:
                class_start += 1
        elif char == "[":
            class_start = index + 1
        elif char == "$":
            chars.append(r"\Z")
            continue
        chars.append(char)
    return "".join(chars)


def required(error_text: str | None = None) -> Rule:
    """Fail when the value is empty or absent."""
    message = error_text or "This field cannot be empty."

    def rule(value: Any) -> str | None:
        return message if is_empty(value) else None

    return _with_code(rule, ErrorCode.REQUIRED_FIELD_MISSING)


def email(error_text: str | None = None) -> Rule:
    """Fail when the value is not shaped like local@domain.tld."""
    message = error_text or "This field requires a valid email address."

    def rule(value: Any) -> str | None:
        return None if EMAIL_PATTERN.match(_as_text(value).strip()) else message

    return _with_code(rule, ErrorCode.INVALID_FORMAT)


def min_length(length: int, error_text: str | None = None) -> Rule:
    """
    Fail when the string is shorter than ``length`` characters.

    Raises:
        ValueError: If ``length`` is negative
    """
    if length < 0:
        raise ValueError(f"min_length requires a non-negative length, got {length}")
    message = error_text or f"Value must have a length greater than or equal to {length}"

    def rule(value: Any) -> str | None:
        return message if len(_as_text(value)) < length else None

    return _with_code(rule, ErrorCode.VALUE_OUT_OF_RANGE)


def matches_pattern(pattern: str | re.Pattern[str], error_text: str | None = None) -> Rule:
    """
    Fail when ``pattern`` is not found anywhere in the string.

    The pattern is searched for, so ``r"\\d"`` accepts any value holding a
    digit; anchor it (``^...$``) when the whole value must match. ``$``
    only matches at the very end of the value, never before a trailing
    newline, unless the pattern is compiled with ``re.MULTILINE``.
    """
    if isinstance(pattern, re.Pattern):
        source, flags = pattern.pattern, pattern.flags
    else:
        source, flags = pattern, 0
    compiled = re.compile(source if flags & re.MULTILINE else _anchor_end(source), flags)
    message = error_text or "Value does not match pattern."

    def rule(value: Any) -> str | None:
        return None if compiled.search(_as_text(value)) else message

    return _with_code(rule, ErrorCode.INVALID_FORMAT)


def date_required(error_text: str | None = None) -> Rule:
    """Fail when no date has been selected."""
    message = error_text or "Please select a date."

    def rule(value: Any) -> str | None:
        return None if isinstance(value, date) else message

    return _with_code(rule, ErrorCode.REQUIRED_FIELD_MISSING)


def first_failure(rules: Iterable[Rule], value: Any) -> tuple[Rule, str] | None:
    """Run ``rules`` in order and return the first one that fails with its message."""
    for rule in rules:
        message = rule(value)
        if message is not None:
            return rule, message
    return None


def compose(rules: Iterable[Rule]) -> Rule:
    """
    Combine rules into one that reports the first failure.

    Rules run in the given order and evaluation stops at the first
    message, so later rules never see a value an earlier rule rejected.

    Args:
        rules: Ordered rules to combine

    Returns:
        A rule returning the first failing message, or None if all pass
    """
    chain = tuple(rules)

    def composed(value: Any) -> str | None:
        failure = first_failure(chain, value)
        return failure[1] if failure else None

    return composed
