from flask import Flask, render_template, request, redirect, url_for, session, flash, current_app
import logging

from config import StoreConfig, configure_logging
from course import Course, Student, read_id
from errors import DuplicateCourseError
from registry import CourseRegistry, EnrollOutcome
from store import FlatFileStore

logger = logging.getLogger(__name__)


def create_app(config=None, store=None):
    config = config or StoreConfig.from_env()
    app = Flask(__name__)
    app.secret_key = config.secret_key
    app.config["REGISTRY"] = CourseRegistry(store or FlatFileStore(config))
    _register_routes(app)
    return app


def get_registry():
    return current_app.config["REGISTRY"]


def current_student():
    if session.get("role") != "Student":
        return None
    return Student(session["student_id"], session["student_name"])


def _register_routes(app):

    # ---------------- Session ----------------
    @app.route("/")
    def index():
        if "role" in session:
            return redirect(url_for("courses"))
        return render_template("login.html")

    @app.route("/login", methods=["POST"])
    def login():
        role = request.form.get("role")
        if role == "Admin":
            session.clear()
            session["role"] = "Admin"
            return redirect(url_for("courses"))

        if role == "Student":
            student_id = read_id(request.form.get("student_id"))
            name = (request.form.get("name") or "").strip()
            if not student_id or not name:
                return render_template("login.html", error="Student ID and name are required")
            registry = get_registry()
            student = registry.find_student(student_id) or registry.register_student(Student(student_id, name))
            session.clear()
            session["role"] = "Student"
            session["student_id"] = student.student_id
            session["student_name"] = student.name
            logger.info("Student %s signed in to the web app", student.student_id)
            flash(f"Welcome, {student.name}!", "success")
            return redirect(url_for("courses"))

        return render_template("login.html", error="Choose Admin or Student")

    @app.route("/logout")
    def logout():
        session.clear()
        return redirect(url_for("index"))

    # ---------------- Courses ----------------
    @app.route("/courses")
    def courses():
        if "role" not in session:
            return redirect(url_for("index"))

        registry = get_registry()
        search_query = request.args.get("search", "")
        if search_query:
            course_list = registry.search_courses(search_query)
        else:
            course_list = registry.list_courses()

        student = current_student()
        my_enrollments = []
        if student:
            my_enrollments = [e.course_id for e in registry.enrollments_for(student.student_id)]

        return render_template("courses.html", courses=course_list, role=session["role"],
                               student=student, my_enrollments=my_enrollments,
                               search_query=search_query)

    @app.route("/add_course", methods=["POST"])
    def add_course():
        if session.get("role") != "Admin":
            flash("Access Denied: Admin privileges required", "error")
            return redirect(url_for("courses"))

        cid = read_id(request.form.get("cid"))
        name = (request.form.get("name") or "").strip()
        instructor = (request.form.get("instructor") or "").strip()

        if cid and name and instructor:
            try:
                get_registry().add_course(Course(cid, name, instructor))
            except DuplicateCourseError:
                flash(f"Course ID '{cid}' already exists!", "error")
                return redirect(url_for("courses"))
            flash(f"Course '{name}' added successfully!", "success")
        else:
            flash("Course ID, Name, and Instructor are required", "error")

        return redirect(url_for("courses"))

    # ---------------- Enrollments ----------------
    @app.route("/enroll", methods=["POST"])
    def enroll():
        student = current_student()
        if not student:
            flash("Only students can enroll in courses", "error")
            return redirect(url_for("courses"))

        course_ids = [cid for cid in map(read_id, request.form.getlist("course_id")) if cid]
        if not course_ids:
            flash("No courses selected", "info")
            return redirect(url_for("courses"))

        for course_id, outcome in get_registry().enroll(student, course_ids):
            if outcome is EnrollOutcome.ENROLLED:
                flash(f"Successfully enrolled in {course_id}", "success")
            elif outcome is EnrollOutcome.ALREADY_ENROLLED:
                flash(f"You are already enrolled in {course_id}", "info")
            else:
                flash(f"Course {course_id} not found", "error")
        return redirect(url_for("courses"))

    @app.route("/unenroll", methods=["POST"])
    def unenroll():
        student = current_student()
        if not student:
            flash("Only students can unenroll from courses", "error")
            return redirect(url_for("courses"))

        course_id = read_id(request.form.get("course_id"))
        if get_registry().unenroll(student.student_id, course_id):
            flash(f"Successfully unenrolled from {course_id}", "success")
        else:
            flash(f"You are not enrolled in {course_id}", "info")
        return redirect(url_for("my_courses"))

    @app.route("/my_courses")
    def my_courses():
        if "role" not in session:
            return redirect(url_for("index"))

        student = current_student()
        if not student:
            return redirect(url_for("courses"))

        registry = get_registry()
        rows = [(e, registry.get_course(e.course_id)) for e in registry.enrollments_for(student.student_id)]
        return render_template("my_courses.html", student=student, rows=rows)


def main(debug=True):
    settings = StoreConfig.from_env()
    configure_logging(settings.log_level)
    # FlatFileStore has no locking; serve one request at a time
    create_app(settings).run(debug=debug, threaded=False)


if __name__ == "__main__":
    main()
