import logging
import sys
import threading

from catpaw_backend import get_version
from catpaw_backend.run_server import main


def _isolate(monkeypatch, home):
    monkeypatch.setenv("CATPAW_HOME", str(home))
    monkeypatch.setenv("PORT", "10000")
    monkeypatch.setenv("DEV_HTTP_PORT", "10000")
    monkeypatch.setattr(sys, "excepthook", sys.excepthook)
    monkeypatch.setattr(threading, "excepthook", threading.excepthook)
    asyncio_logger = logging.getLogger("asyncio")
    monkeypatch.setattr(asyncio_logger, "filters", list(asyncio_logger.filters))


def test_main_reports_missing_server(tmp_path, monkeypatch):
    (tmp_path / "index_config.py").write_text("config = {}\n", encoding="utf-8")
    _isolate(monkeypatch, tmp_path)

    assert main() == 1


def test_main_starts_server(tmp_path, monkeypatch):
    (tmp_path / "index_config.py").write_text("config = {}\n", encoding="utf-8")
    (tmp_path / "index.py").write_text("def start(config):\n    return None\n", encoding="utf-8")
    _isolate(monkeypatch, tmp_path)

    assert main() == 0


def test_version():
    assert get_version() == "0.1.0"


def test_configure_logging_returns_startup_logger():
    from catpaw_backend.src.startup import configure_logging

    logger = configure_logging({"LOG_LEVEL": "DEBUG"})
    assert logger.name == "startup"
