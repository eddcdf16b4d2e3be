import pytest

from course import Course, Student
from errors import DuplicateCourseError
from registry import EnrollOutcome

FIXED_TIME = "Mon Oct 19 09:30:00 2026"

ANN = Student("S1", "Ann")


@pytest.fixture(params=["file", "memory"])
def any_registry(request):
    return request.getfixturevalue("registry" if request.param == "file" else "memory_registry")


def test_course_exists_after_insertion(any_registry):
    assert not any_registry.course_exists("CS101")
    any_registry.add_course(Course("CS101", "Algorithms", "Dr. Lee"))
    assert any_registry.course_exists("CS101")


def test_duplicate_course_is_rejected_before_write(any_registry):
    any_registry.add_course(Course("CS101", "Algorithms", "Dr. Lee"))
    with pytest.raises(DuplicateCourseError) as exc:
        any_registry.add_course(Course("CS101", "Other", "Someone"))
    assert exc.value.course_id == "CS101"
    assert len(any_registry.list_courses()) == 1


def test_search_is_case_sensitive_on_name_or_instructor(any_registry):
    any_registry.add_course(Course("CS101", "Algorithms", "Dr. Lee"))
    any_registry.add_course(Course("MA200", "Linear Algebra", "Dr. Kim"))
    assert [c.course_id for c in any_registry.search_courses("Algo")] == ["CS101"]
    assert [c.course_id for c in any_registry.search_courses("Dr.")] == ["CS101", "MA200"]
    assert any_registry.search_courses("algo") == []
    assert any_registry.search_courses("CS101") == []


def test_search_with_no_match_returns_empty(any_registry):
    assert any_registry.search_courses("Biology") == []


def test_register_student_once(any_registry):
    assert any_registry.register_student(ANN) == ANN
    assert any_registry.register_student(Student("S1", "Annie")) == ANN
    assert any_registry.store.read_all_lines("students") == ["S1,Ann"]
    assert any_registry.find_student("S1") == ANN
    assert any_registry.find_student("S2") is None


def test_enroll_twice_writes_one_line(any_registry):
    any_registry.add_course(Course("CS101", "Algorithms", "Dr. Lee"))
    assert any_registry.enroll(ANN, ["CS101"]) == [("CS101", EnrollOutcome.ENROLLED)]
    assert any_registry.enroll(ANN, ["CS101"]) == [("CS101", EnrollOutcome.ALREADY_ENROLLED)]
    assert any_registry.enrollment_lines() == [f"S1 (Ann) -> CS101 @ {FIXED_TIME}"]


def test_enroll_several_courses(any_registry):
    any_registry.add_course(Course("CS101", "Algorithms", "Dr. Lee"))
    any_registry.add_course(Course("MA200", "Linear Algebra", "Dr. Kim"))
    results = any_registry.enroll(ANN, ["CS101", "XX999", "MA200"])
    assert results == [
        ("CS101", EnrollOutcome.ENROLLED),
        ("XX999", EnrollOutcome.UNKNOWN_COURSE),
        ("MA200", EnrollOutcome.ENROLLED),
    ]
    assert [e.course_id for e in any_registry.enrollments_for("S1")] == ["CS101", "MA200"]


def test_identity_is_exact_not_substring(any_registry):
    any_registry.add_course(Course("CS101", "Algorithms", "Dr. Lee"))
    any_registry.add_course(Course("CS1", "Intro", "Dr. Park"))
    any_registry.enroll(Student("S10", "Bo"), ["CS101"])
    assert not any_registry.is_already_enrolled("S1", "CS101")
    assert not any_registry.is_already_enrolled("S10", "CS1")
    assert any_registry.unenroll("S1", "CS101") == 0
    assert any_registry.unenroll("S10", "CS1") == 0
    assert len(any_registry.enrollment_lines()) == 1


def test_unenroll_is_silent_the_second_time(registry, store_config):
    registry.add_course(Course("CS101", "Algorithms", "Dr. Lee"))
    registry.add_course(Course("MA200", "Linear Algebra", "Dr. Kim"))
    registry.enroll(ANN, ["CS101", "MA200"])

    assert registry.unenroll("S1", "CS101") == 1
    with open(store_config.path_for("enrollments"), encoding="utf-8") as f:
        after_first = f.read()
    assert "-> CS101" not in after_first
    assert "S1 (Ann) -> MA200" in after_first

    assert registry.unenroll("S1", "CS101") == 0
    with open(store_config.path_for("enrollments"), encoding="utf-8") as f:
        assert f.read() == after_first


def test_unreadable_lines_are_kept_and_skipped(memory_registry, caplog):
    memory_registry.store.rewrite("enrollments", ["garbage line", f"S1 (Ann) -> CS101 @ {FIXED_TIME}"])
    assert [e.course_id for e in memory_registry.enrollments_for("S1")] == ["CS101"]
    assert "unreadable enrollment line" in caplog.text
    assert memory_registry.unenroll("S1", "CS101") == 1
    assert memory_registry.store.read_all_lines("enrollments") == ["garbage line"]


def test_enrollment_timestamp_uses_wall_clock(file_store):
    from registry import CourseRegistry

    registry = CourseRegistry(file_store)
    registry.add_course(Course("CS101", "Algorithms", "Dr. Lee"))
    registry.enroll(ANN, ["CS101"])
    timestamp = registry.enrollments_for("S1")[0].timestamp
    assert timestamp
    assert not timestamp.endswith("\n")


def test_scenario(registry, store_config):
    registry.add_course(Course("CS101", "Algorithms", "Dr. Lee"))
    assert registry.course_exists("CS101")
    registry.register_student(ANN)
    registry.enroll(ANN, ["CS101"])

    path = store_config.path_for("enrollments")
    with open(path, encoding="utf-8") as f:
        lines = f.read().splitlines()
    assert len(lines) == 1
    assert "S1 (Ann) -> CS101" in lines[0]

    registry.unenroll("S1", "CS101")
    with open(path, encoding="utf-8") as f:
        assert "S1 (Ann) -> CS101" not in f.read()

    assert registry.unenroll("S1", "CS101") == 0


def test_get_course(any_registry):
    any_registry.add_course(Course("CS101", "Algorithms", "Dr. Lee"))
    assert any_registry.get_course("CS101").name == "Algorithms"
    assert any_registry.get_course("CS999") is None


def test_student_id_with_parenthesis_matches_exactly(any_registry):
    any_registry.add_course(Course("CS101", "Algorithms", "Dr. Lee"))
    odd = Student("S (1)", "Ann")
    assert any_registry.enroll(odd, ["CS101"]) == [("CS101", EnrollOutcome.ENROLLED)]
    assert any_registry.enroll(odd, ["CS101"]) == [("CS101", EnrollOutcome.ALREADY_ENROLLED)]
    assert len(any_registry.enrollment_lines()) == 1
    assert any_registry.enrollments_for("S (1)")[0].student_name == "Ann"
    assert any_registry.unenroll("S (1)", "CS101") == 1
    assert any_registry.enrollment_lines() == []
