"""
Form state and submit-time evaluation.

A Form is an explicit value container: the UI shell copies widget values
into it, passes it to evaluate(), and renders the returned FormResult.
Nothing here touches widgets.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, replace
from typing import Any

from .rules import Rule, compose


@dataclass(frozen=True)
class Field:
    """One named input with its ordered validation rules."""

    name: str
    rules: tuple[Rule, ...] = ()
    label: str = ""
    helper_text: str | None = None
    value: Any = None

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Field name must be a non-empty string")
        # Accept any iterable of rules but store an immutable tuple
        object.__setattr__(self, "rules", tuple(self.rules))

    @property
    def display_label(self) -> str:
        return self.label or self.name.replace("_", " ").title()

    def validate(self) -> str | None:
        """Run the field's rules against its value and return the first failure."""
        return compose(self.rules)(self.value)


@dataclass(frozen=True)
class FormResult:
    """
    Outcome of evaluating a form.

    ``errors`` has an entry for every field: the first failing message,
    or None when the field passed. The result is falsy when invalid.
    """

    errors: dict[str, str | None]

    @property
    def is_valid(self) -> bool:
        return all(message is None for message in self.errors.values())

    @property
    def failed_fields(self) -> list[str]:
        return [name for name, message in self.errors.items() if message is not None]

    @property
    def messages(self) -> dict[str, str]:
        """Only the failing fields, name -> message."""
        return {name: message for name, message in self.errors.items() if message is not None}

    def error_for(self, name: str) -> str | None:
        return self.errors.get(name)

    def __bool__(self) -> bool:
        return self.is_valid


class Form:
    """
    Ordered collection of fields keyed by name.

    Field order is the order the fields were given in and is the order
    results and messages are reported in.
    """

    def __init__(self, fields: Iterable[Field] = ()) -> None:
        self._fields: dict[str, Field] = {}
        for item in fields:
            if item.name in self._fields:
                raise ValueError(f"Duplicate field name: '{item.name}'")
            self._fields[item.name] = item

    def __contains__(self, name: object) -> bool:
        return name in self._fields

    def __iter__(self) -> Iterator[Field]:
        return iter(self._fields.values())

    def __len__(self) -> int:
        return len(self._fields)

    def __getitem__(self, name: str) -> Field:
        return self._fields[name]

    @property
    def names(self) -> list[str]:
        return list(self._fields)

    def value(self, name: str) -> Any:
        return self._fields[name].value

    def set_value(self, name: str, value: Any) -> None:
        """
        Store a new value for a field.

        Raises:
            KeyError: If the form has no field called ``name``
        """
        if name not in self._fields:
            raise KeyError(f"Unknown field: '{name}'")
        self._fields[name] = replace(self._fields[name], value=value)

    def values(self) -> dict[str, Any]:
        return {name: item.value for name, item in self._fields.items()}

    def with_values(self, values: Mapping[str, Any]) -> Form:
        """Return a copy of this form with ``values`` applied."""
        copy = Form(self._fields.values())
        for name, value in values.items():
            copy.set_value(name, value)
        return copy

    def reset(self) -> None:
        """Clear every field back to an empty value."""
        for name in self._fields:
            self._fields[name] = replace(self._fields[name], value=None)

    def validate_field(self, name: str) -> str | None:
        return self._fields[name].validate()

    @property
    def is_valid(self) -> bool:
        return evaluate(self).is_valid


def evaluate(form: Form) -> FormResult:
    """
    Evaluate every field of a form against its rules.

    Args:
        form: Form holding the values to check

    Returns:
        FormResult with the first failing message per field
    """
    return FormResult(errors={item.name: item.validate() for item in form})
