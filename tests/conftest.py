"""Pytest configuration and shared fixtures for hookwright tests."""

import subprocess
from pathlib import Path

import pytest

from hookwright.git.repo import reset_repo_cache
from hookwright.hooks.base import HookContext

PROJECT_ROOT = Path(__file__).parent.parent


@pytest.fixture(autouse=True)
def _isolate(tmp_path, monkeypatch):
    """Run every test from an empty temp dir with a cold repository cache."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("HOOKWRIGHT_SKIP", raising=False)
    monkeypatch.delenv("HOOKWRIGHT_CONFIG", raising=False)
    reset_repo_cache()
    yield
    reset_repo_cache()


@pytest.fixture
def fake_repo(tmp_path, monkeypatch):
    """A directory with an empty .git directory, entered as cwd."""
    repo_dir = tmp_path / "fake-repo"
    (repo_dir / ".git").mkdir(parents=True)
    monkeypatch.chdir(repo_dir)
    return repo_dir


@pytest.fixture
def git_repo(tmp_path, monkeypatch):
    """Create a fresh git repo in an isolated temp directory and enter it."""
    repo_dir = tmp_path / "test-repo"
    repo_dir.mkdir()
    subprocess.run(["git", "init", str(repo_dir)], check=True, capture_output=True)
    subprocess.run(["git", "config", "user.email", "test@test.com"],
                   cwd=repo_dir, check=True, capture_output=True)
    subprocess.run(["git", "config", "user.name", "Test"],
                   cwd=repo_dir, check=True, capture_output=True)
    (repo_dir / "README.md").write_text("# Test Repo\n")
    subprocess.run(["git", "add", "."], cwd=repo_dir, check=True, capture_output=True)
    subprocess.run(["git", "commit", "-m", "initial commit"],
                   cwd=repo_dir, check=True, capture_output=True)
    # Sanity: confirm this is NOT the project repo
    assert str(repo_dir) != str(PROJECT_ROOT)
    monkeypatch.chdir(repo_dir)
    return repo_dir


@pytest.fixture
def make_context():
    """Factory for HookContext objects."""
    def _make(hook_type="pre-commit", files=(), modified_lines=None, **kwargs):
        return HookContext(
            hook_type=hook_type,
            applicable_files=list(files),
            modified_lines=modified_lines or {},
            **kwargs,
        )
    return _make
