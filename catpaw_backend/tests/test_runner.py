import json
import logging
import sys

import pytest

from catpaw_backend.src.bootstrap.runner import run
from catpaw_backend.src.bootstrap.settings import BootstrapSettings
from catpaw_backend.src.errors import ConfigurationError, ServerContractError
from catpaw_backend.src.safe_log import FaultGuard

SERVER_SOURCE = """
calls = []


def start(config):
    calls.append(config)
    return "started"
"""


@pytest.fixture
def app_dir(tmp_path):
    (tmp_path / ".env.local").write_text("ALI_TOKEN=from-file\nPORT=$RENDER_PORT\nQUARK_COOKIE=file-cookie\n", encoding="utf-8")
    (tmp_path / "index_config.py").write_text(
        "config = {'sites': {'list': ['base-site']}, 'ali': {'token': 'base'}, 'quark': {'cookie': 'q'}}\n",
        encoding="utf-8",
    )
    (tmp_path / "newwex.json").write_text(json.dumps({"sites": [{"id": 1}, {"id": 2}]}), encoding="utf-8")
    (tmp_path / "index.py").write_text(SERVER_SOURCE, encoding="utf-8")
    return tmp_path


@pytest.fixture
def guard():
    g = FaultGuard()
    yield g
    g.uninstall()


def test_full_bootstrap_starts_server_once(app_dir, guard):
    env = {
        "CATPAW_HOME": str(app_dir),
        "RENDER_PORT": "7000",
        "QUARK_COOKIE": "real-cookie",
        "CATPAW_PROFILE_JSON": '{"profile": "x"}',
    }

    result = run(env=env, guard=guard)

    assert result.started == "started"
    assert sys.modules["catpaw_ext_index"].calls == [result.config]
    assert result.config["sites"]["list"] == [{"id": 1}, {"id": 2}]
    assert result.config["ali"]["token"] == "from-file"
    assert result.config["quark"]["cookie"] == "real-cookie"
    assert env["PORT"] == "7000"
    assert env["DEV_HTTP_PORT"] == "7000"
    assert env["CATPAW_PROFILE_JSON"] == '{"profile": "x"}'
    assert result.env_applied == {"ALI_TOKEN": "from-file", "PORT": "$RENDER_PORT"}
    assert guard.installed


def test_env_file_can_select_server_module(app_dir, guard):
    (app_dir / "alt_server.py").write_text("def start(config):\n    return 'alt'\n", encoding="utf-8")
    (app_dir / ".env.local").write_text("CATPAW_SERVER_MODULE=alt_server.py\n", encoding="utf-8")

    result = run(env={"CATPAW_HOME": str(app_dir)}, guard=guard)

    assert result.started == "alt"
    assert result.settings.server_module == "alt_server.py"


def test_missing_site_list_is_not_fatal(app_dir, guard):
    (app_dir / "newwex.json").unlink()

    result = run(env={"CATPAW_HOME": str(app_dir)}, guard=guard)

    assert result.config["sites"]["list"] == ["base-site"]


def test_server_contract_violation_is_fatal(app_dir, guard):
    (app_dir / "index.py").write_text("def begin(config):\n    pass\n", encoding="utf-8")

    with pytest.raises(ServerContractError):
        run(env={"CATPAW_HOME": str(app_dir)}, guard=guard)


def test_explicit_settings(app_dir, guard):
    settings = BootstrapSettings(base_dir=str(app_dir), sites_file="missing.json")

    result = run(settings=settings, env={}, guard=guard)

    assert result.config["sites"]["list"] == ["base-site"]
    assert result.settings is settings


def test_settings_defaults_and_validation(tmp_path):
    settings = BootstrapSettings.from_env({"CATPAW_HOME": str(tmp_path)})
    assert settings.env_file_path == str(tmp_path / ".env.local")
    assert settings.sites_file_path == str(tmp_path / "newwex.json")
    assert settings.server_module == "index.py"

    with pytest.raises(ConfigurationError):
        BootstrapSettings.from_env({"CATPAW_LOG_SANITIZE_LEVEL": "LOUD"})


NOISY_SERVER_SOURCE = """
import asyncio
import logging


class ApiError(Exception):
    def __init__(self, message, response=None):
        super().__init__(message)
        self.response = response


def start(config):
    logging.getLogger("catpaw.test.server").error("x" * 5000)

    late = logging.getLogger("catpaw.test.server.quiet")
    late.propagate = False
    records = []

    class Keep(logging.Handler):
        def emit(self, record):
            records.append(record)

    handler = Keep()
    late.addHandler(handler)
    late.error("late: %s", "y" * 5000)
    late.removeHandler(handler)

    loop = asyncio.new_event_loop()
    try:
        loop.call_exception_handler(
            {"message": "Task exception was never retrieved", "exception": ApiError("token sk-SECRET rejected", response={"status": 401})}
        )
    finally:
        loop.close()
    return records
"""


def test_server_logging_is_sanitized(app_dir, guard, caplog):
    (app_dir / "index.py").write_text(NOISY_SERVER_SOURCE, encoding="utf-8")

    with caplog.at_level(logging.WARNING):
        result = run(env={"CATPAW_HOME": str(app_dir)}, guard=guard)

    server_records = [r for r in caplog.records if r.name == "catpaw.test.server"]
    assert len(server_records[-1].getMessage()) == 2003
    assert len(result.started[-1].args[0]) == 2003
    assert "Unauthorized request skipped" in caplog.text
    assert "sk-SECRET" not in caplog.text
