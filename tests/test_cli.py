# Copyright 2026 Pennyworth Technologies, Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Tests for the hookwright CLI."""

import json
from unittest.mock import patch

import click
import pytest
from click.testing import CliRunner

from hookwright import __version__
from hookwright.checks import DependencyStatus
from hookwright.cli import main, parse_modified_lines
from hookwright.hooks.base import Hook
from hookwright.hooks.pre_commit import Jscs
from hookwright.process import ProcessResult


@pytest.fixture
def runner():
    return CliRunner()


def git_ok():
    return DependencyStatus(name="git", installed=True, version="2.43.0", path="/usr/bin/git")


class TestParseModifiedLines:
    def test_lines_and_ranges(self):
        assert parse_modified_lines(("a.js:1,4-6", "b.js:2")) == {
            "a.js": {1, 4, 5, 6},
            "b.js": {2},
        }

    def test_repeated_file_accumulates(self):
        assert parse_modified_lines(("a.js:1", "a.js:3")) == {"a.js": {1, 3}}

    def test_windows_path(self):
        assert parse_modified_lines(("C:\\src\\a.js:7",)) == {"C:\\src\\a.js": {7}}

    @pytest.mark.parametrize("value", ["a.js", ":3", "a.js:x", "a.js:1-b"])
    def test_invalid(self, value):
        with pytest.raises(click.BadParameter):
            parse_modified_lines((value,))


def test_version(runner):
    result = runner.invoke(main, ["version"])
    assert result.exit_code == 0
    assert f"hookwright {__version__}" in result.output


class TestHooksCommand:
    def test_lists_all(self, runner):
        result = runner.invoke(main, ["hooks"])
        assert result.exit_code == 0
        for name in ("HardTabs", "Jscs", "TravisLint"):
            assert name in result.output

    def test_filter_by_type(self, runner):
        result = runner.invoke(main, ["hooks", "CommitMsg"])
        assert result.exit_code == 0
        assert "HardTabs" in result.output
        assert "Jscs" not in result.output


class TestRunCommand:
    def test_unsupported_hook_type(self, runner, fake_repo):
        result = runner.invoke(main, ["run", "post-merge"])
        assert result.exit_code == 1
        assert "Unsupported hook type" in result.output

    def test_outside_repository(self, runner):
        result = runner.invoke(main, ["run", "pre-commit"])
        assert result.exit_code == 1
        assert "Error:" in result.output

    def test_invalid_config(self, runner, fake_repo):
        (fake_repo / ".hookwright.yml").write_text("pre-commit: [oops\n")
        result = runner.invoke(main, ["run", "pre-commit"])
        assert result.exit_code == 1
        assert "Invalid YAML" in result.output

    def test_commit_msg_json(self, runner, fake_repo):
        message = fake_repo / "COMMIT_EDITMSG"
        message.write_text("Add\tfeature\n")
        result = runner.invoke(
            main, ["--format", "json", "run", "commit-msg", "-m", str(message)]
        )
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["success"] is True
        assert data["hooks"] == [{
            "name": "HardTabs",
            "description": "Check for hard tabs",
            "status": "warn",
            "message": "Don't use hard tabs in commit messages",
        }]

    def test_failing_hook_exits_nonzero(self, runner, fake_repo):
        stdout = "app.js: line 2, col 1, ruleName: Illegal trailing whitespace\n"
        with patch.object(Hook, "in_path", return_value=True), \
                patch.object(Jscs, "execute", return_value=ProcessResult(2, stdout)):
            result = runner.invoke(
                main, ["-f", "json", "run", "pre-commit", "app.js", "-l", "app.js:2"]
            )
        assert result.exit_code == 1
        data = json.loads(result.output)
        assert data["success"] is False
        statuses = {h["name"]: h["status"] for h in data["hooks"]}
        assert statuses == {"Jscs": "fail", "TravisLint": "skipped"}

    def test_unmodified_line_errors_pass(self, runner, fake_repo):
        stdout = "app.js: line 9, col 1, ruleName: Illegal trailing whitespace\n"
        with patch.object(Hook, "in_path", return_value=True), \
                patch.object(Jscs, "execute", return_value=ProcessResult(2, stdout)):
            result = runner.invoke(main, ["run", "pre-commit", "app.js", "-l", "app.js:2"])
        assert result.exit_code == 0, result.output
        assert "All hooks passed" in result.output

    def test_skip_env_var(self, runner, fake_repo):
        with patch.object(Jscs, "execute") as mock:
            result = runner.invoke(
                main, ["-f", "json", "run", "pre-commit", "app.js"],
                env={"HOOKWRIGHT_SKIP": "Jscs"},
            )
        assert result.exit_code == 0, result.output
        mock.assert_not_called()
        names = [h["name"] for h in json.loads(result.output)["hooks"]]
        assert names == ["TravisLint"]


class TestDoctorCommand:
    def test_json(self, runner, fake_repo):
        with patch("hookwright.cli.check_git", return_value=git_ok()), \
                patch("hookwright.checks.shutil.which", return_value=None):
            result = runner.invoke(main, ["--format", "json", "doctor"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["repository"]["root"] == str(fake_repo.resolve())
        assert data["repository"]["git_dir"] == str(fake_repo.resolve() / ".git")
        names = [d["name"] for d in data["dependencies"]]
        assert names[0] == "git"
        assert "jscs" in names

    def test_git_missing_fails(self, runner):
        missing = DependencyStatus(name="git", installed=False, error="git not found in PATH")
        with patch("hookwright.cli.check_git", return_value=missing):
            result = runner.invoke(main, ["doctor"])
        assert result.exit_code == 1
        assert "FAIL" in result.output

    def test_outside_repository_warns(self, runner):
        with patch("hookwright.cli.check_git", return_value=git_ok()):
            result = runner.invoke(main, ["doctor"])
        assert result.exit_code == 0
        assert "Warning:" in result.output
