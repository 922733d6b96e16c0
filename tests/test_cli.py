"""
End-to-end tests of the Typer command surface.

Run with:
    pytest tests/test_cli.py -v
"""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from aigit import __version__
from aigit.cli import app
from aigit.core import AiGit
from aigit.exceptions import ProviderError


runner = CliRunner()


@pytest.fixture
def home_config(isolated_env):
    path = isolated_env / ".aigit" / "config.json"

    def _write(**data):
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data))
        return path
    return _write


@pytest.fixture
def in_repo(git_repo, monkeypatch):
    monkeypatch.chdir(git_repo.working_tree_dir)
    return Path(git_repo.working_tree_dir)


def test_version():
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_config_set_and_show(home_config, isolated_env):
    result = runner.invoke(app, ["config", "api_key", "sk-cli-test-key-0000"])
    assert result.exit_code == 0, result.output

    result = runner.invoke(app, ["config", "provider", "google"])
    assert result.exit_code == 0, result.output

    data = json.loads((isolated_env / ".aigit" / "config.json").read_text())
    assert data["provider"] == "google"
    assert data["api_key"] == "sk-cli-test-key-0000"

    result = runner.invoke(app, ["config", "--show"])
    assert result.exit_code == 0, result.output
    assert "google" in result.output
    assert "sk-c****0000" in result.output


def test_config_key_without_value():
    result = runner.invoke(app, ["config", "model"])
    assert result.exit_code == 1
    assert "missing value for key 'model'" in result.output


def test_config_invalid_value(home_config):
    home_config(api_key="sk-abc")
    result = runner.invoke(app, ["config", "language", "fr"])
    assert result.exit_code == 1
    assert "invalid language: fr" in result.output


def test_show_without_config():
    result = runner.invoke(app, ["config", "--show"])
    assert result.exit_code == 1
    assert "config not found" in result.output


def test_commit_outside_repository(tmp_path, monkeypatch, home_config):
    home_config(api_key="sk-abc")
    plain = tmp_path / "plain"
    plain.mkdir()
    monkeypatch.chdir(plain)

    result = runner.invoke(app, ["commit", "--yes"])
    assert result.exit_code == 1
    assert "not a git repository" in result.output


def test_commit_without_staged_changes(in_repo, home_config):
    home_config(api_key="sk-abc")
    result = runner.invoke(app, ["commit", "--yes"])
    assert result.exit_code == 1
    assert "no staged changes to commit" in result.output


def test_commit_provider_error(in_repo, home_config, git_repo, monkeypatch):
    home_config(api_key="sk-abc")
    (in_repo / "a.txt").write_text("a\n")
    git_repo.index.add(["a.txt"])

    class FailingBackend:
        async def generate_commit_message(self, diff, language):
            raise ProviderError("OpenAI API error: invalid api key")

    monkeypatch.setattr(AiGit, "_backend", lambda self, settings: FailingBackend())

    result = runner.invoke(app, ["commit", "--yes"])
    assert result.exit_code == 1
    assert "OpenAI API error: invalid api key" in result.output


def test_review_hook_mode_exit_code(in_repo, home_config, git_repo, monkeypatch):
    home_config(api_key="sk-abc")
    (in_repo / "a.txt").write_text("a\n")
    git_repo.index.add(["a.txt"])

    class Reviewer:
        async def review_code(self, diff, language):
            return "1. [HIGH] a.txt:1 - secret committed"

    monkeypatch.setattr(AiGit, "_backend", lambda self, settings: Reviewer())

    assert runner.invoke(app, ["review", "--staged", "--hook"]).exit_code == 1
    assert runner.invoke(app, ["review", "--staged"]).exit_code == 0


def test_hooks_install_uninstall(in_repo):
    result = runner.invoke(app, ["hooks", "install"])
    assert result.exit_code == 0, result.output
    assert (in_repo / ".git" / "hooks" / "pre-commit").exists()

    result = runner.invoke(app, ["hooks", "uninstall"])
    assert result.exit_code == 0, result.output
    assert not (in_repo / ".git" / "hooks" / "pre-commit").exists()


def test_hooks_uninstall_modified(in_repo):
    runner.invoke(app, ["hooks", "install"])
    hook = in_repo / ".git" / "hooks" / "pre-commit"
    hook.write_text("#!/bin/sh\nexit 0\n")

    result = runner.invoke(app, ["hooks", "uninstall"])
    assert result.exit_code == 1
    assert "refusing to remove" in result.output
    assert hook.read_text() == "#!/bin/sh\nexit 0\n"
