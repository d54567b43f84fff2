"""
Exceptions raised by the holiday planner.
"""


class PlannerError(Exception):
    """Base exception for the planner."""
    pass


class HolidaySourceError(PlannerError):
    """A holiday or country source returned an unusable response."""

    def __init__(self, message: str, source: str = "", status_code: int = None):
        super().__init__(message)
        self.source = source
        self.status_code = status_code


class UnknownCellError(PlannerError, KeyError):
    """No table or week row exists at the given address."""
    pass


class UnknownFieldError(PlannerError, KeyError):
    """The field name is not a lesson-plan column."""
    pass


class ReadOnlyFieldError(PlannerError):
    """The field is computed and cannot be edited."""
    pass
