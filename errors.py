# errors.py


class EnrollmentError(Exception):
    """Base class for registry errors."""
    pass


class DuplicateCourseError(EnrollmentError):
    """A course with the same id is already on file."""

    def __init__(self, course_id):
        super().__init__(f"Course ID '{course_id}' already exists")
        self.course_id = course_id
