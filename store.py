import logging
import os
from abc import ABC, abstractmethod

from config import StoreConfig
from course import Course, Student

logger = logging.getLogger(__name__)

KINDS = ("courses", "students", "enrollments")


class BaseStore(ABC):
    """Line-level access to the three record files, plus course/student decoding."""

    @abstractmethod
    def read_all_lines(self, kind):
        """Return every line of the file, newline stripped. Missing file reads as empty."""

    @abstractmethod
    def append(self, kind, line):
        """Append one line, creating the file if needed."""

    @abstractmethod
    def rewrite(self, kind, lines):
        """Replace the whole file with the given lines."""

    # ---------------- Courses ----------------
    def load_courses(self):
        return [Course.from_string(line) for line in self.read_all_lines("courses") if line]

    def exists_course(self, course_id):
        for line in self.read_all_lines("courses"):
            if line and Course.from_string(line).course_id == course_id:
                return True
        return False

    # ---------------- Students ----------------
    def load_students(self):
        return [Student.from_string(line) for line in self.read_all_lines("students") if line]


class FlatFileStore(BaseStore):
    def __init__(self, config=None):
        self.config = config or StoreConfig()
        if self.config.create_missing:
            self._ensure_files()

    def _ensure_files(self):
        os.makedirs(self.config.data_dir, exist_ok=True)
        for kind in KINDS:
            path = self.config.path_for(kind)
            if not os.path.exists(path):
                open(path, "w", encoding="utf-8").close()

    def read_all_lines(self, kind):
        path = self.config.path_for(kind)
        if not os.path.exists(path):
            return []
        with open(path, "r", encoding="utf-8") as f:
            return [line.rstrip("\r\n") for line in f]

    def append(self, kind, line):
        path = self.config.path_for(kind)
        with open(path, "a", encoding="utf-8") as f:
            f.write(line + "\n")
        logger.debug("Appended to %s: %s", path, line)

    def rewrite(self, kind, lines):
        path = self.config.path_for(kind)
        with open(path, "w", encoding="utf-8") as f:
            for line in lines:
                f.write(line + "\n")
        logger.debug("Rewrote %s with %d lines", path, len(lines))


class MemoryStore(BaseStore):
    """Keeps the three files as lists of lines; for tests and dry runs."""

    def __init__(self, files=None):
        self.files = {kind: [] for kind in KINDS}
        for kind, lines in (files or {}).items():
            self._check(kind)
            self.files[kind] = list(lines)

    @staticmethod
    def _check(kind):
        if kind not in KINDS:
            raise ValueError(f"Unknown record file kind: {kind}")

    def read_all_lines(self, kind):
        self._check(kind)
        return list(self.files[kind])

    def append(self, kind, line):
        self._check(kind)
        self.files[kind].append(line)

    def rewrite(self, kind, lines):
        self._check(kind)
        self.files[kind] = list(lines)
