"""
Typed failures raised by the grocery engine.

Each class carries the HTTP status the API layer answers with; the
exception handler in main.py renders them uniformly.
"""


class GroceryError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NoMealPlans(GroceryError):
    """Generation was requested for a date range with nothing scheduled."""

    status_code = 400


class ReadOnlyPeriod(GroceryError):
    """A mutation targeted a list whose period has already ended."""

    status_code = 409


class ItemIndexOutOfRange(GroceryError):
    status_code = 422


class ListNotFound(GroceryError):
    status_code = 404


class StaleRevision(GroceryError):
    """The list changed since the caller last read it."""

    status_code = 409


class StoreUnavailable(GroceryError):
    status_code = 503
