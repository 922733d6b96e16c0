"""Shared fixtures: temporary git repositories, config files and consoles."""

import io
import json
import sys

import pytest
from git import Repo
from loguru import logger
from rich.console import Console

from aigit.ui.console import AigitConsole


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Keep tests away from the real home directory and AIGIT_* variables."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path / "cache"))
    for name in ("AIGIT_PROVIDER", "AIGIT_API_KEY", "AIGIT_MODEL", "AIGIT_LANGUAGE", "AIGIT_BASE_URL"):
        monkeypatch.delenv(name, raising=False)
    return home


@pytest.fixture(autouse=True)
def reset_logging():
    """CLI runs replace loguru sinks with captured streams; restore a plain one."""
    yield
    logger.remove()
    logger.add(sys.stderr, level="WARNING")


@pytest.fixture
def config_path(tmp_path):
    return tmp_path / "aigit" / "config.json"


@pytest.fixture
def write_config(config_path):
    def _write(**data):
        config_path.parent.mkdir(parents=True, exist_ok=True)
        config_path.write_text(json.dumps(data))
        return config_path
    return _write


@pytest.fixture
def git_repo(tmp_path):
    """A repository with one commit containing app.py."""
    path = tmp_path / "repo"
    path.mkdir()
    repo = Repo.init(path)
    with repo.config_writer() as writer:
        writer.set_value("user", "name", "Test User")
        writer.set_value("user", "email", "test@example.com")
        writer.set_value("commit", "gpgsign", "false")
        writer.set_value("core", "hooksPath", str(path / ".git" / "hooks"))

    (path / "app.py").write_text("print('hello')\n")
    repo.index.add(["app.py"])
    repo.index.commit("initial commit")
    return repo


@pytest.fixture
def output():
    return io.StringIO()


@pytest.fixture
def console(output):
    return AigitConsole(Console(file=output, width=120, color_system=None, force_terminal=False))
