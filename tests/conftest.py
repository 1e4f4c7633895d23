import logging

import pytest

from puppy_engine.utils.config import Config
from puppy_engine.utils.logging import ROOT_LOGGER_NAME


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """Point the home directory at a temporary one so config and logs stay out of the real one."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("USERPROFILE", str(home))
    return home


@pytest.fixture
def config(tmp_path):
    """A config backed by a file that does not exist yet."""
    return Config(str(tmp_path / "config.json"))


@pytest.fixture
def page_file(tmp_path):
    """Write markup to a file and return its path."""
    def write(markup: str, name: str = "page.html"):
        path = tmp_path / name
        path.write_text(markup, encoding="utf-8")
        return path
    return write


@pytest.fixture
def clean_logger():
    """The engine logger with its handlers removed for the test, restored afterwards."""
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    saved_handlers, saved_level = list(logger.handlers), logger.level
    logger.handlers = []
    yield logger
    for handler in logger.handlers:
        handler.close()
    logger.handlers = saved_handlers
    logger.setLevel(saved_level)
