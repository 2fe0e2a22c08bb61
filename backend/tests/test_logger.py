import logging
import os
import uuid
import pytest
from config import Settings
from utils import logger as logger_module
from utils.logger import get_logger, resolve_log_level

@pytest.fixture
def logger_name():
    name = f"streamdir.test.{uuid.uuid4().hex}"
    yield name
    log = logging.getLogger(name)
    for handler in list(log.handlers):
        handler.close()
        log.removeHandler(handler)

def test_resolve_log_level():
    assert resolve_log_level(logging.WARNING) == logging.WARNING
    assert resolve_log_level("debug") == logging.DEBUG
    assert resolve_log_level("nonsense") == logging.INFO

def test_level_and_dir_come_from_environment(monkeypatch, tmp_path, logger_name):
    monkeypatch.setenv("STREAMDIR_LOG_DIR", str(tmp_path))
    monkeypatch.setenv("STREAMDIR_LOG_LEVEL", "DEBUG")

    log = get_logger(logger_name)
    log.debug("cache miss")
    for handler in log.handlers:
        handler.flush()

    assert log.level == logging.DEBUG
    content = (tmp_path / "streamdir.log").read_text(encoding="utf-8")
    assert "cache miss" in content

def test_handlers_are_added_once(monkeypatch, tmp_path, logger_name):
    monkeypatch.delenv("STREAMDIR_LOG_LEVEL", raising=False)
    monkeypatch.setenv("STREAMDIR_LOG_DIR", str(tmp_path))
    first = get_logger(logger_name)
    second = get_logger(logger_name, level=logging.ERROR)
    assert first is second
    assert len(second.handlers) == 2
    assert second.level == logging.INFO

def test_falls_back_to_console_when_file_fails(monkeypatch, tmp_path, logger_name, mocker, capsys):
    monkeypatch.setenv("STREAMDIR_LOG_DIR", str(tmp_path))
    mocker.patch.object(logger_module, "RotatingFileHandler", side_effect=OSError("read-only"))

    log = get_logger(logger_name)
    assert [type(h) for h in log.handlers] == [logging.StreamHandler]
    assert "read-only" in capsys.readouterr().err

def test_settings_export_log_environment(monkeypatch, tmp_path):
    monkeypatch.delenv("STREAMDIR_LOG_LEVEL", raising=False)
    monkeypatch.setenv("STREAMDIR_LOG_DIR", "unused")
    Settings(STREAMDIR_LOG_DIR=str(tmp_path), STREAMDIR_LOG_LEVEL="WARNING").setup_environment()
    assert os.environ["STREAMDIR_LOG_DIR"] == str(tmp_path)
    assert os.environ["STREAMDIR_LOG_LEVEL"] == "WARNING"
