# course.py
from dataclasses import dataclass


@dataclass
class Course:
    course_id: str
    name: str
    instructor: str

    def to_string(self):
        return f"{self.course_id},{self.name},{self.instructor}"

    @classmethod
    def from_string(cls, line):
        # instructor is the last field and keeps any commas it contains
        parts = line.rstrip("\n").split(",", 2)
        parts += [""] * (3 - len(parts))
        return cls(parts[0], parts[1], parts[2])


@dataclass
class Student:
    student_id: str
    name: str

    def to_string(self):
        return f"{self.student_id},{self.name}"

    @classmethod
    def from_string(cls, line):
        student_id, _, name = line.rstrip("\n").partition(",")
        return cls(student_id, name)


@dataclass
class Enrollment:
    """One line of enrollments.txt: ``S1 (Ann) -> CS101 @ <timestamp>``."""
    student_id: str
    student_name: str
    course_id: str
    timestamp: str

    def to_string(self):
        return f"{self.student_id} ({self.student_name}) -> {self.course_id} @ {self.timestamp}"

    @classmethod
    def from_string(cls, line, student_id=None):
        """Parse an enrollment line, or return None if it has another layout.

        With student_id given, the line must start with that id, which keeps
        ids containing " (" unambiguous.
        """
        head, sep, timestamp = line.rstrip("\n").rpartition(" @ ")
        if not sep:
            return None
        who, sep, course_id = head.rpartition(" -> ")
        if not sep or not course_id:
            return None
        if student_id is None:
            student_id, sep, name = who.partition(" (")
        else:
            prefix = f"{student_id} ("
            sep = who.startswith(prefix)
            name = who[len(prefix):]
        if not sep or not student_id or not name.endswith(")"):
            return None
        return cls(student_id, name[:-1], course_id, timestamp)


def read_id(text):
    """First whitespace-delimited token of the input; ids never contain spaces."""
    parts = (text or "").split()
    return parts[0] if parts else ""
