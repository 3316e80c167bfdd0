# ============================================================================
# src/auto_centile/form/fields.py
# ============================================================================
"""
Host form interface.

The form framework owns field storage and events; the scheduler only
talks to it through this protocol.
"""

from typing import Callable, Protocol

FieldHandler = Callable[[str], None]


class FormFields(Protocol):
    def read_field(self, name: str) -> str:
        """Current value, '' when the field is absent or empty."""
        ...

    def read_checked_choice(self, group_name: str) -> str:
        """Value of the checked radio in a group, '' when none is checked."""
        ...

    def write_field(self, name: str, value: str) -> None:
        """Set a value and fire the form's own change notification."""
        ...

    def on_change(self, name: str, handler: FieldHandler) -> None:
        ...

    def on_blur(self, name: str, handler: FieldHandler) -> None:
        ...

    def has_field(self, name: str) -> bool:
        ...
