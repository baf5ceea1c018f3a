"""
Reusable GUI widgets for the form validation demo.
"""

from .date_picker import DatePicker
from .form_field import FormFieldWidget
from .notification_manager import NotificationManager

__all__ = ["DatePicker", "FormFieldWidget", "NotificationManager"]
