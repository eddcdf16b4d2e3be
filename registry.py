import enum
import logging
import time

from course import Enrollment
from errors import DuplicateCourseError

logger = logging.getLogger(__name__)


class EnrollOutcome(enum.Enum):
    ENROLLED = "enrolled"
    ALREADY_ENROLLED = "already enrolled"
    UNKNOWN_COURSE = "unknown course"


class CourseRegistry:
    def __init__(self, store, clock=time.ctime):
        self.store = store
        # returns the timestamp text written into each enrollment line
        self.clock = clock

    # ---------------- Courses ----------------
    def course_exists(self, course_id):
        return self.store.exists_course(course_id)

    def list_courses(self):
        return self.store.load_courses()

    def get_course(self, course_id):
        return next((c for c in self.store.load_courses() if c.course_id == course_id), None)

    def add_course(self, course):
        if self.store.exists_course(course.course_id):
            raise DuplicateCourseError(course.course_id)
        self.store.append("courses", course.to_string())
        logger.info("Added course %s (%s)", course.course_id, course.name)
        return course

    def search_courses(self, keyword):
        """Case-sensitive substring match on course name or instructor.

        An empty list means nothing matched.
        """
        return [c for c in self.store.load_courses()
                if keyword in c.name or keyword in c.instructor]

    # ---------------- Students ----------------
    def find_student(self, student_id):
        return next((s for s in self.store.load_students() if s.student_id == student_id), None)

    def register_student(self, student):
        """Write a new student record, or return the one already on file for that id."""
        existing = self.find_student(student.student_id)
        if existing:
            logger.info("Student %s already registered", student.student_id)
            return existing
        self.store.append("students", student.to_string())
        logger.info("Registered student %s (%s)", student.student_id, student.name)
        return student

    # ---------------- Enrollments ----------------
    def _records_for(self, student_id):
        for line in self.store.read_all_lines("enrollments"):
            if not line:
                continue
            if Enrollment.from_string(line) is None:
                logger.warning("Skipping unreadable enrollment line: %r", line)
                continue
            record = Enrollment.from_string(line, student_id)
            if record:
                yield record

    def enrollment_lines(self):
        return [line for line in self.store.read_all_lines("enrollments") if line]

    def enrollments_for(self, student_id):
        return list(self._records_for(student_id))

    def is_already_enrolled(self, student_id, course_id):
        return any(e.course_id == course_id for e in self._records_for(student_id))

    def enroll(self, student, course_ids):
        """Enroll a student in each selected course.

        Returns a list of (course_id, EnrollOutcome) in selection order.
        """
        results = []
        for course_id in course_ids:
            if self.is_already_enrolled(student.student_id, course_id):
                results.append((course_id, EnrollOutcome.ALREADY_ENROLLED))
                continue
            if not self.store.exists_course(course_id):
                results.append((course_id, EnrollOutcome.UNKNOWN_COURSE))
                continue
            record = Enrollment(student.student_id, student.name, course_id, self.clock())
            self.store.append("enrollments", record.to_string())
            logger.info("Enrolled %s in %s", student.student_id, course_id)
            results.append((course_id, EnrollOutcome.ENROLLED))
        return results

    def unenroll(self, student_id, course_id):
        """Remove the student's enrollment lines for a course; returns how many were removed."""
        kept = []
        removed = 0
        for line in self.store.read_all_lines("enrollments"):
            record = Enrollment.from_string(line, student_id) if line else None
            if record and record.course_id == course_id:
                removed += 1
                continue
            kept.append(line)
        if removed:
            self.store.rewrite("enrollments", kept)
            logger.info("Unenrolled %s from %s", student_id, course_id)
        else:
            logger.debug("No enrollment of %s in %s to remove", student_id, course_id)
        return removed
