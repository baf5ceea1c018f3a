"""
Pages shown in the main window's stack.
"""

from .home_page import HomePage
from .signup_page import SignupPage

__all__ = ["HomePage", "SignupPage"]
