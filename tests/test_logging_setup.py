import logging

import pytest
from fastapi.testclient import TestClient

from tasks_api import __main__ as entry_point
from tasks_api import main as main_module
from tasks_api.logging_setup import ensure_logging, setup_logging
from tasks_api.main import create_app
from tasks_api.settings import Settings

from .fakes import RecordingDatabase


@pytest.fixture()
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for h in list(root.handlers):
        root.removeHandler(h)
    for h in handlers:
        root.addHandler(h)
    root.setLevel(level)
    logging.captureWarnings(False)


def test_single_stderr_handler_at_requested_level(restore_root_logger):
    setup_logging("debug")
    setup_logging("warning")
    root = restore_root_logger
    assert root.level == logging.WARNING
    assert len(root.handlers) == 1
    assert isinstance(root.handlers[0], logging.StreamHandler)


def test_unknown_level_falls_back_to_info(restore_root_logger):
    setup_logging("chatty")
    assert restore_root_logger.level == logging.INFO


def test_ensure_logging_configures_a_bare_root_logger(restore_root_logger):
    root = restore_root_logger
    for h in list(root.handlers):
        root.removeHandler(h)
    ensure_logging("debug")
    assert root.level == logging.DEBUG
    assert len(root.handlers) == 1


def test_ensure_logging_leaves_existing_configuration_alone(restore_root_logger):
    root = restore_root_logger
    for h in list(root.handlers):
        root.removeHandler(h)
    existing = logging.NullHandler()
    root.addHandler(existing)
    root.setLevel(logging.WARNING)
    ensure_logging("debug")
    assert root.handlers == [existing]
    assert root.level == logging.WARNING


def test_lifespan_sets_up_logging_with_configured_level(monkeypatch):
    levels = []
    monkeypatch.setattr(main_module, "ensure_logging", levels.append)
    with TestClient(create_app(Settings(log_level="DEBUG"), database=RecordingDatabase())):
        pass
    assert levels == ["DEBUG"]


def test_entry_point_logs_port_and_runs_uvicorn(monkeypatch, caplog):
    runs = []
    monkeypatch.setenv("PORT", "8123")
    monkeypatch.delenv("HOST", raising=False)
    monkeypatch.setattr(entry_point, "setup_logging", lambda level: None)
    monkeypatch.setattr(entry_point.uvicorn, "run", lambda app, **kwargs: runs.append(kwargs))
    with caplog.at_level(logging.INFO, logger="tasks_api.__main__"):
        entry_point.main()
    assert "Server is running on port 8123" in caplog.text
    assert runs == [{"host": "0.0.0.0", "port": 8123, "log_config": None}]
