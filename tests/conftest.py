import pytest

from config import StoreConfig
from registry import CourseRegistry
from store import FlatFileStore, MemoryStore

FIXED_TIME = "Mon Oct 19 09:30:00 2026"


@pytest.fixture
def store_config(tmp_path):
    return StoreConfig(data_dir=str(tmp_path / "data"))


@pytest.fixture
def file_store(store_config):
    return FlatFileStore(store_config)


@pytest.fixture
def registry(file_store):
    return CourseRegistry(file_store, clock=lambda: FIXED_TIME)


@pytest.fixture
def memory_registry():
    return CourseRegistry(MemoryStore(), clock=lambda: FIXED_TIME)
