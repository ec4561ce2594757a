import logging
import uuid

import pytest

from catpaw_backend.src.safe_log.filters import uninstall_log_sanitizer


class ListHandler(logging.Handler):
    """Handler that keeps emitted records in memory."""

    def __init__(self):
        super().__init__(level=logging.DEBUG)
        self.records = []

    def emit(self, record):
        self.records.append(record)


@pytest.fixture(autouse=True)
def restore_record_factory():
    """Undo any process-wide log sanitizer a test (or run()) installed."""
    original = logging.getLogRecordFactory()
    yield
    uninstall_log_sanitizer()
    logging.setLogRecordFactory(original)


@pytest.fixture
def captured_logger():
    """A private, non-propagating logger with an in-memory handler."""
    logger = logging.getLogger(f"test.catpaw.{uuid.uuid4().hex}")
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    handler = ListHandler()
    logger.addHandler(handler)
    yield logger, handler
    logger.removeHandler(handler)
