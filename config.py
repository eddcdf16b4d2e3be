"""
Configuration for the course enrollment record keeper.
Defaults live here as module constants; StoreConfig carries them to the store.
"""

import logging
import os
from dataclasses import dataclass

# ===========================
# PATH CONFIGURATION
# ===========================
DATA_FOLDER = "data"
COURSE_FILE = "courses.txt"
STUDENT_FILE = "students.txt"
ENROLL_FILE = "enrollments.txt"

# ===========================
# WEB CONFIGURATION
# ===========================
SECRET_KEY = "secret123"

# ===========================
# LOGGING CONFIGURATION
# ===========================
LOG_LEVEL = "WARNING"  # Options: "DEBUG", "INFO", "WARNING", "ERROR"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass
class StoreConfig:
    """Where the three record files live."""
    data_dir: str = DATA_FOLDER
    course_file: str = COURSE_FILE
    student_file: str = STUDENT_FILE
    enrollment_file: str = ENROLL_FILE
    # create the data folder and empty files up front
    create_missing: bool = True
    secret_key: str = SECRET_KEY
    log_level: str = LOG_LEVEL

    @classmethod
    def from_env(cls):
        return cls(
            data_dir=os.environ.get("COURSE_DATA_DIR", DATA_FOLDER),
            secret_key=os.environ.get("COURSE_SECRET_KEY", SECRET_KEY),
            log_level=os.environ.get("COURSE_LOG_LEVEL", LOG_LEVEL),
        )

    def path_for(self, kind):
        names = {
            "courses": self.course_file,
            "students": self.student_file,
            "enrollments": self.enrollment_file,
        }
        if kind not in names:
            raise ValueError(f"Unknown record file kind: {kind}")
        return os.path.join(self.data_dir, names[kind])


def configure_logging(level=LOG_LEVEL):
    logging.basicConfig(level=getattr(logging, str(level).upper(), logging.WARNING),
                        format=LOG_FORMAT)
