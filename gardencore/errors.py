"""Exceptions raised by garden operations.

Calculation functions never raise for degenerate data (no check-ins, no
habits, no expected days); only lookups and input validation do.
"""

from __future__ import annotations


class GardenError(Exception):
    """Base class for garden errors."""


class HabitNotFound(GardenError, LookupError):
    """A habit id does not resolve for the given owner."""

    def __init__(self, habit_id: int, user_id: int) -> None:
        super().__init__(f"Habit not found: {habit_id}")
        self.habit_id = habit_id
        self.user_id = user_id


class InvalidInput(GardenError, ValueError):
    """Malformed or disallowed input, rejected before any calculation runs."""

    def __init__(self, errors: list[str] | str) -> None:
        if isinstance(errors, str):
            errors = [errors]
        super().__init__("; ".join(errors))
        self.errors = list(errors)
