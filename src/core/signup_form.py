"""
Signup form definition.

Field names, rules and user-facing messages for the demo signup page.
"""

from __future__ import annotations

from .form import Field, Form
from .rules import PASSWORD_PATTERN, date_required, email, matches_pattern, min_length, required

# Qt date format used to display the date of birth
DATE_FORMAT = "MM-dd-yyyy"

PASSWORD_MIN_LENGTH = 8
PASSWORD_HELPER_TEXT = "Must be at least 8 characters, include at least 2 numbers, and 1 special character"

# Field keys, in display order
NAME = "name"
ADDRESS = "address"
EMAIL = "email"
DOB = "dob"
PASSWORD = "password"

FIELD_ORDER = (NAME, ADDRESS, EMAIL, DOB, PASSWORD)


def build_signup_form() -> Form:
    """
    Build a fresh, empty signup form.

    Returns:
        Form with the name, address, email, date of birth and password fields
    """
    return Form(
        [
            Field(NAME, (required(error_text="Name required"),), label="Name"),
            Field(ADDRESS, (required(error_text="Address required"),), label="Address"),
            Field(
                EMAIL,
                (
                    required(error_text="Email required"),
                    email(error_text="Please enter a valid email"),
                ),
                label="Email",
            ),
            Field(DOB, (date_required(error_text="DOB required"),), label="Date of Birth"),
            Field(
                PASSWORD,
                (
                    required(error_text="Password required"),
                    min_length(PASSWORD_MIN_LENGTH, error_text="Password must be at least 8 characters"),
                    matches_pattern(
                        PASSWORD_PATTERN,
                        error_text="Password must contain at least 2 numbers and 1 special character",
                    ),
                ),
                label="Password",
                helper_text=PASSWORD_HELPER_TEXT,
            ),
        ]
    )

