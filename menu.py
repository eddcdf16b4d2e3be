import enum
import logging
import re
import sys
from dataclasses import dataclass, field, replace
from typing import List, Optional

from config import StoreConfig, configure_logging
from course import Course, Student, read_id
from errors import DuplicateCourseError
from registry import CourseRegistry, EnrollOutcome
from store import FlatFileStore

logger = logging.getLogger(__name__)


class MenuState(enum.Enum):
    MAIN = "main"
    ADMIN = "admin"
    STUDENT = "student"
    EXIT = "exit"


@dataclass
class Session:
    state: MenuState = MenuState.MAIN
    student: Optional[Student] = None


# ---------------- Actions ----------------
@dataclass
class OpenAdmin:
    pass


@dataclass
class RegisterStudent:
    student_id: str
    name: str


@dataclass
class AddCourse:
    course_id: str
    name: str
    instructor: str


@dataclass
class ViewCourses:
    pass


@dataclass
class ViewEnrollments:
    pass


@dataclass
class SearchCourses:
    keyword: str


@dataclass
class Enroll:
    course_ids: List[str] = field(default_factory=list)


@dataclass
class ViewMyCourses:
    pass


@dataclass
class Unenroll:
    course_id: str


@dataclass
class Back:
    pass


@dataclass
class Exit:
    pass


ALLOWED = {
    MenuState.MAIN: (OpenAdmin, RegisterStudent, Exit),
    MenuState.ADMIN: (AddCourse, ViewCourses, ViewEnrollments, Back, Exit),
    MenuState.STUDENT: (ViewCourses, SearchCourses, Enroll, ViewMyCourses, Unenroll, Back, Exit),
    MenuState.EXIT: (),
}

DUPLICATE_COURSE = "❌ Course ID already exists!"
GOODBYE = "👋 Exiting. Goodbye!"


def format_course(course):
    return f"ID: {course.course_id}, Name: {course.name}, Instructor: {course.instructor}"


def dispatch(action, session, registry):
    """Apply one action. Returns (new_session, messages); never touches the terminal.

    Actions that do not belong to the current menu are ignored.
    """
    if not isinstance(action, ALLOWED[session.state]):
        return session, []

    if isinstance(action, Exit):
        return replace(session, state=MenuState.EXIT, student=None), [GOODBYE]

    if isinstance(action, Back):
        return Session(), []

    if isinstance(action, OpenAdmin):
        return replace(session, state=MenuState.ADMIN), []

    if isinstance(action, RegisterStudent):
        student_id, name = read_id(action.student_id), action.name.strip()
        if not student_id or not name:
            return session, ["❌ Student ID and name are required."]
        student = registry.find_student(student_id)
        if student:
            message = f"✅ Welcome back, {student.name}."
        else:
            student = registry.register_student(Student(student_id, name))
            message = f"✅ Registered {student.name} ({student.student_id})."
        return Session(MenuState.STUDENT, student), [message]

    if isinstance(action, AddCourse):
        course_id = read_id(action.course_id)
        if not course_id:
            return session, ["❌ Course ID is required."]
        try:
            registry.add_course(Course(course_id, action.name, action.instructor))
        except DuplicateCourseError:
            return session, [DUPLICATE_COURSE]
        return session, ["✅ Course added successfully."]

    if isinstance(action, ViewCourses):
        courses = registry.list_courses()
        if not courses:
            return session, ["⚠️ No courses found."]
        return session, ["\n📚 Available Courses:"] + [format_course(c) for c in courses]

    if isinstance(action, ViewEnrollments):
        lines = registry.enrollment_lines()
        if not lines:
            return session, ["⚠️ No enrollments found."]
        return session, ["\n📋 All Enrollments:"] + lines

    if isinstance(action, SearchCourses):
        matches = registry.search_courses(action.keyword)
        if not matches:
            return session, ["⚠️ No matching courses found."]
        return session, ["\n🔍 Search Results:"] + [format_course(c) for c in matches]

    if isinstance(action, Enroll):
        if not action.course_ids:
            return session, ["⚠️ No courses selected."]
        messages = []
        for course_id, outcome in registry.enroll(session.student, action.course_ids):
            if outcome is EnrollOutcome.ENROLLED:
                messages.append(f"✅ Enrolled in {course_id}.")
            elif outcome is EnrollOutcome.ALREADY_ENROLLED:
                messages.append(f"⚠️ Already enrolled in {course_id}.")
            else:
                messages.append(f"❌ Course {course_id} not found.")
        return session, messages

    if isinstance(action, ViewMyCourses):
        records = registry.enrollments_for(session.student.student_id)
        if not records:
            return session, ["⚠️ You are not enrolled in any courses."]
        messages = ["\n📖 Your Courses:"]
        for record in records:
            course = registry.get_course(record.course_id)
            title = f"{course.name} ({course.instructor})" if course else "(course not on file)"
            messages.append(f"{record.course_id} - {title} @ {record.timestamp}")
        return session, messages

    if isinstance(action, Unenroll):
        course_id = read_id(action.course_id)
        if registry.unenroll(session.student.student_id, course_id):
            return session, [f"✅ Unenrolled from {course_id}."]
        return session, [f"⚠️ You are not enrolled in {course_id}."]

    return session, []


def parse_course_ids(text):
    return [part for part in re.split(r"[,\s]+", text.strip()) if part]


class MenuShell:
    """Interactive loop: print menu, read choice, prompt for arguments, dispatch."""

    MENUS = {
        MenuState.MAIN: ("=== 🎓 Course Enrollment System ===",
                         ["1. Admin", "2. Student", "0. Exit"]),
        MenuState.ADMIN: ("=== 👩‍💼 Admin Menu ===",
                          ["1. Add Course", "2. View All Courses",
                           "3. View All Enrollments", "0. Back"]),
        MenuState.STUDENT: ("=== 🎒 Student Menu ===",
                            ["1. View Courses", "2. Search Courses", "3. Enroll in Courses",
                             "4. View My Courses", "5. Unenroll from Course", "0. Back"]),
    }

    def __init__(self, registry, input_fn=None, output_fn=None):
        self.registry = registry
        self.input = input_fn or input
        self.output = output_fn or print
        self.session = Session()

    def show_menu(self):
        title, options = self.MENUS[self.session.state]
        self.output("\n" + title)
        for option in options:
            self.output(option)

    def read_action(self, choice):
        """Turn a menu choice into an action, prompting for its arguments. None means ignore."""
        state = self.session.state
        if state is MenuState.MAIN:
            if choice == "1":
                return OpenAdmin()
            if choice == "2":
                student_id = read_id(self.input("Enter Student ID: "))
                name = self.input("Enter Student Name: ").strip()
                return RegisterStudent(student_id, name)
            if choice == "0":
                return Exit()
        elif state is MenuState.ADMIN:
            if choice == "1":
                course_id = read_id(self.input("Enter Course ID: "))
                if self.registry.course_exists(course_id):
                    self.output(DUPLICATE_COURSE)
                    return None
                name = self.input("Enter Course Name: ").strip()
                instructor = self.input("Enter Instructor Name: ").strip()
                return AddCourse(course_id, name, instructor)
            if choice == "2":
                return ViewCourses()
            if choice == "3":
                return ViewEnrollments()
            if choice == "0":
                return Back()
        elif state is MenuState.STUDENT:
            if choice == "1":
                return ViewCourses()
            if choice == "2":
                return SearchCourses(self.input("Enter keyword: ").strip())
            if choice == "3":
                for message in dispatch(ViewCourses(), self.session, self.registry)[1]:
                    self.output(message)
                text = self.input("Enter course IDs to enroll (comma or space separated): ")
                return Enroll(parse_course_ids(text))
            if choice == "4":
                return ViewMyCourses()
            if choice == "5":
                return Unenroll(read_id(self.input("Enter Course ID to unenroll: ")))
            if choice == "0":
                return Back()
        return None

    def run(self):
        while self.session.state is not MenuState.EXIT:
            self.show_menu()
            try:
                choice = self.input("Choice: ").strip()
                action = self.read_action(choice)
            except (EOFError, KeyboardInterrupt):
                action = Exit()
                self.output("")
            if action is None:
                continue
            self.session, messages = dispatch(action, self.session, self.registry)
            for message in messages:
                self.output(message)
        return self.session


def main():
    config = StoreConfig.from_env()
    configure_logging(config.log_level)
    try:
        registry = CourseRegistry(FlatFileStore(config))
        MenuShell(registry).run()
    except OSError as e:
        logger.error("Record file error: %s", e)
        print(f"\n[ERROR] {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
