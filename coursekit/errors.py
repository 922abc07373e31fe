"""Exception types raised by CourseKit."""


class CourseKitError(Exception):
    """Base class for CourseKit errors."""


class CourseNotFoundError(CourseKitError, KeyError):
    """A course id is not known to the course API."""

    def __init__(self, course_id: str):
        super().__init__(course_id)
        self.course_id = course_id

    def __str__(self) -> str:
        return f"Course not found: {self.course_id}"


class PersistenceError(CourseKitError):
    """A backing store could not read or write a value."""
