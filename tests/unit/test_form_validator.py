"""
Tests for FormValidator: binding widgets to a Form and submit-time checks.
"""

from unittest.mock import patch

import pytest
from PySide6.QtWidgets import QLineEdit

from core.errors import ErrorCode
from core.form import Field, Form
from core.rules import email, required
from gui.validation.form_validator import RULE_FAILURE_MESSAGE, FormValidator
from gui.widgets.form_field import FormFieldWidget


def make_field(qtbot, name: str) -> FormFieldWidget:
    widget = FormFieldWidget(name, name.title(), QLineEdit())
    qtbot.addWidget(widget)
    return widget


@pytest.fixture
def form():
    return Form(
        [
            Field("name", (required(error_text="Name required"),)),
            Field("email", (required(error_text="Email required"), email(error_text="Bad email"))),
        ]
    )


@pytest.fixture
def bound(qtbot, form):
    validator = FormValidator(form, revalidate_delay=10)
    widgets = {name: make_field(qtbot, name) for name in form.names}
    for widget in widgets.values():
        validator.register_field(widget)
    yield validator, widgets
    validator.cleanup()


class TestRegistration:
    """Test registering field widgets."""

    def test_register_unknown_field(self, qtbot, form):
        validator = FormValidator(form)
        with pytest.raises(KeyError):
            validator.register_field(make_field(qtbot, "phone"))

    def test_initial_state(self, bound):
        validator, _widgets = bound
        assert validator.submitted is False
        assert validator.is_valid() is True
        assert validator.get_field_error("name") == ""


class TestValidateAll:
    """Test submit-time evaluation."""

    def test_empty_form(self, bound):
        validator, widgets = bound

        result = validator.validate_all()

        assert result.is_valid is False
        assert result.errors == {"name": "Name required", "email": "Email required"}
        assert widgets["name"].error_text() == "Name required"
        assert widgets["email"].error_text() == "Email required"
        assert validator.submitted is True
        assert validator.is_valid() is False

    def test_collects_widget_values(self, bound):
        validator, widgets = bound
        widgets["name"].set_value("Ada")
        widgets["email"].set_value("ada@example.com")

        result = validator.validate_all()

        assert result.is_valid
        assert validator.form.values() == {"name": "Ada", "email": "ada@example.com"}
        assert widgets["name"].error_text() is None

    def test_clears_messages_of_fixed_fields(self, bound):
        validator, widgets = bound
        validator.validate_all()

        widgets["name"].set_value("Ada")
        widgets["email"].set_value("nope")
        result = validator.validate_all()

        assert result.messages == {"email": "Bad email"}
        assert widgets["name"].has_error() is False
        assert widgets["email"].error_text() == "Bad email"

    def test_emits_signals(self, qtbot, bound):
        validator, widgets = bound

        with qtbot.waitSignal(validator.overallValidityChanged, timeout=1000) as blocker:
            validator.validate_all()
        assert blocker.args == [False]

        widgets["name"].set_value("Ada")
        with qtbot.waitSignal(validator.fieldValidityChanged, timeout=1000) as blocker:
            validator.validate_all()
        assert blocker.args == ["name", True, ""]

    def test_unbound_fields_use_form_value(self, qtbot, form):
        validator = FormValidator(form)
        validator.register_field(make_field(qtbot, "name"))
        form.set_value("email", "ada@example.com")

        result = validator.validate_all()

        assert result.errors == {"name": "Name required", "email": None}

    def test_failures_logged(self, bound):
        validator, widgets = bound
        widgets["name"].set_value("Ada")

        with patch.object(validator._error_handler, "handle") as mock_handle:
            validator.validate_all()

        mock_handle.assert_called_once()
        error = mock_handle.call_args.args[0]
        assert error.field == "email"
        assert error.code == ErrorCode.REQUIRED_FIELD_MISSING

    def test_unchanged_failure_logged_once(self, bound):
        validator, _widgets = bound

        with patch.object(validator._error_handler, "handle") as mock_handle:
            validator.validate_all()
            validator.validate_all()

        assert mock_handle.call_count == 2  # one per failing field, not per submit

    def test_logged_code_comes_from_failing_rule(self, bound):
        validator, widgets = bound
        widgets["name"].set_value("Ada")
        widgets["email"].set_value("not-an-email")

        with patch.object(validator._error_handler, "handle") as mock_handle:
            validator.validate_all()

        error = mock_handle.call_args.args[0]
        assert error.user_message == "Bad email"
        assert error.code == ErrorCode.INVALID_FORMAT

    def test_reworded_message_keeps_rule_code(self, qtbot):
        form = Form([Field("name", (required(error_text="Please fill in your name"),))])
        validator = FormValidator(form)
        validator.register_field(make_field(qtbot, "name"))

        with patch.object(validator._error_handler, "handle") as mock_handle:
            validator.validate_all()

        assert mock_handle.call_args.args[0].code == ErrorCode.REQUIRED_FIELD_MISSING

    def test_plain_callable_logged_as_invalid_input(self, qtbot):
        form = Form([Field("name", (lambda value: "Name required",))])
        validator = FormValidator(form)
        validator.register_field(make_field(qtbot, "name"))

        with patch.object(validator._error_handler, "handle") as mock_handle:
            validator.validate_all()

        assert mock_handle.call_args.args[0].code == ErrorCode.INVALID_INPUT


class TestRuleFailure:
    """Test rules that raise."""

    def test_raising_rule_reports_generic_message(self, qtbot):
        def broken(value):
            raise RuntimeError("boom")

        form = Form([Field("name", (broken,))])
        validator = FormValidator(form)
        widget = make_field(qtbot, "name")
        validator.register_field(widget)

        with patch.object(validator._error_handler, "handle") as mock_handle:
            result = validator.validate_all()

        assert result.errors == {"name": RULE_FAILURE_MESSAGE}
        assert widget.error_text() == RULE_FAILURE_MESSAGE
        error = mock_handle.call_args.args[0]
        assert error.code == ErrorCode.RULE_FAILURE
        assert "RuntimeError: boom" in error.technical_message


class TestLiveRevalidation:
    """Test re-validation of edited fields after the first submit."""

    def test_no_validation_before_submit(self, qtbot, bound):
        validator, widgets = bound

        widgets["name"].input_widget.setText("A")
        widgets["name"].input_widget.clear()
        qtbot.wait(50)

        assert widgets["name"].has_error() is False

    def test_edit_after_submit_clears_error(self, qtbot, bound):
        validator, widgets = bound
        validator.validate_all()

        widgets["name"].input_widget.setText("Ada")

        qtbot.waitUntil(lambda: not widgets["name"].has_error(), timeout=1000)
        assert validator.is_field_valid("name") is True
        # Other fields keep their messages until edited
        assert widgets["email"].error_text() == "Email required"

    def test_validate_now(self, bound):
        validator, widgets = bound
        validator.validate_all()

        widgets["email"].input_widget.setText("nope")

        assert validator.validate_now("email") is False
        assert validator.get_field_error("email") == "Bad email"
        assert validator.validate_now("unknown") is True


class TestReset:
    """Test resetting the validator."""

    def test_reset_clears_everything(self, qtbot, bound):
        validator, widgets = bound
        widgets["name"].set_value("Ada")
        validator.validate_all()

        validator.reset()
        qtbot.wait(50)

        assert validator.submitted is False
        assert widgets["name"].value() == ""
        assert widgets["email"].has_error() is False
        assert validator.form.values() == {"name": None, "email": None}
        assert validator.is_valid() is True
