class PlannerError(Exception):
    """Base class for errors surfaced to the caller of the planner."""

    pass


class InvalidRangeError(PlannerError, ValueError):
    """Raised when the end date of a study plan is before its start date."""

    pass


class EmptyTopicListError(PlannerError, ValueError):
    """Raised when a study plan is requested without any topics."""

    pass


class CourseNotFoundError(PlannerError, LookupError):
    """Raised when a course id does not match a stored course."""

    pass


class TimetableNotFoundError(PlannerError, LookupError):
    """Raised when a course has no stored timetable."""

    pass


class SessionNotFoundError(PlannerError, LookupError):
    """Raised when a day/session index does not point at a stored session."""

    pass


class SchedulingOverrunWarning(UserWarning):
    """Issued when the packer hits its iteration bound and returns a partial plan."""
