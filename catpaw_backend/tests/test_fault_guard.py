import asyncio
import logging
import sys
import threading

import pytest

from catpaw_backend.src.safe_log.guard import EXCEPTION_NOTICE, REJECTION_NOTICE, FaultGuard


class ApiError(Exception):
    def __init__(self, message, response=None, code=None):
        super().__init__(message)
        self.response = response
        self.code = code


@pytest.fixture
def guard(captured_logger):
    logger, handler = captured_logger
    g = FaultGuard(logger=logger)
    yield g, handler
    g.uninstall()


def test_auth_rejection_logs_only_notice(guard):
    g, handler = guard
    err = ApiError("token sk-123 rejected", response={"status": 401, "data": "x" * 500})

    g.handle_rejection(None, {"exception": err, "message": "Task exception was never retrieved"})

    assert len(handler.records) == 1
    record = handler.records[0]
    assert record.levelno == logging.WARNING
    assert REJECTION_NOTICE in record.getMessage()
    assert "401" in record.getMessage()
    assert "sk-123" not in record.getMessage()


def test_other_rejection_logs_sanitized_reason(guard):
    g, handler = guard

    g.handle_rejection(None, {"exception": ValueError("bad site")})

    record = handler.records[-1]
    assert record.levelno == logging.ERROR
    assert record.args[1] == {"name": "ValueError", "message": "bad site"}
    assert "bad site" in record.getMessage()


def test_rejection_without_exception_logs_message(guard):
    g, handler = guard

    g.handle_rejection(None, {"message": "Task was destroyed but it is pending!"})

    assert "Task was destroyed" in handler.records[-1].getMessage()


def test_provider_code_is_treated_as_auth(guard):
    g, handler = guard

    g.handle_exception(ApiError, ApiError("login expired", code=31001), None)

    assert EXCEPTION_NOTICE in handler.records[-1].getMessage()


def test_uncaught_exception_is_logged_in_full(guard):
    g, handler = guard

    g.handle_exception(RuntimeError, RuntimeError("crash"), None)

    record = handler.records[-1]
    assert record.levelno == logging.ERROR
    assert record.args[1]["message"] == "crash"


def test_install_and_uninstall_swap_hooks(guard):
    g, _ = guard
    original_hook = sys.excepthook
    original_thread_hook = threading.excepthook

    g.install()
    assert sys.excepthook == g.handle_exception
    assert threading.excepthook == g.handle_thread_exception
    g.install()

    g.uninstall()
    assert sys.excepthook is original_hook
    assert threading.excepthook is original_thread_hook


def test_thread_exceptions_go_through_guard(guard):
    g, handler = guard
    g.install()

    def worker():
        raise KeyError("missing-site")

    t = threading.Thread(target=worker)
    t.start()
    t.join()

    assert handler.records[-1].args[0] == "KeyError"
    assert handler.records[-1].args[1]["name"] == "KeyError"


def test_loop_exception_handler(guard):
    g, handler = guard
    loop = asyncio.new_event_loop()
    try:
        g.install_loop(loop)
        loop.call_exception_handler({"message": "boom", "exception": ApiError("x", response={"status": 401})})
    finally:
        loop.close()

    assert REJECTION_NOTICE in handler.records[-1].getMessage()


def test_asyncio_default_handler_reports_auth_as_notice(guard, caplog):
    g, _ = guard
    g.install()
    loop = asyncio.new_event_loop()
    try:
        with caplog.at_level(logging.WARNING, logger="asyncio"):
            loop.call_exception_handler(
                {"message": "Task exception was never retrieved", "exception": ApiError("token sk-SECRET rejected", response={"status": 401})}
            )
    finally:
        loop.close()

    assert REJECTION_NOTICE in caplog.text
    assert "sk-SECRET" not in caplog.text
    assert all(r.exc_info is None for r in caplog.records)


def test_asyncio_default_handler_sanitizes_other_failures(guard, caplog):
    g, _ = guard
    g.install()
    loop = asyncio.new_event_loop()
    try:
        with caplog.at_level(logging.ERROR, logger="asyncio"):
            loop.call_exception_handler({"message": "Task exception was never retrieved", "exception": ValueError("v" * 5000)})
    finally:
        loop.close()

    record = [r for r in caplog.records if r.name == "asyncio"][-1]
    assert record.exc_info is None
    assert record.args[0] == "Task exception was never retrieved"
    assert len(record.args[1]["message"]) == 2003


def test_uninstall_removes_asyncio_filter(guard):
    g, _ = guard
    g.install()
    g.uninstall()
    assert not any(type(f).__name__ == "_AsyncioFaultFilter" for f in logging.getLogger("asyncio").filters)
