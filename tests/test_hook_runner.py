"""Tests for the hook runner."""

import json
import os
import threading
from unittest.mock import patch

import pytest

from hookwright.config import HookConfig, HookwrightConfig
from hookwright.errors import CommandCancelledError
from hookwright.hook_runner import HookReport, HookRunner, RunReport
from hookwright.hooks.base import Hook, HookOutcome, HookStatus
from hookwright.hooks.pre_commit import Jscs, TravisLint
from hookwright.hooks.registry import default_config, register, unregister
from hookwright.process import ProcessResult


@pytest.fixture
def installed():
    with patch.object(Hook, "in_path", return_value=True):
        yield


@pytest.fixture
def env_probe():
    """A commit-msg hook that reports the environment it ran in."""
    seen = {}

    @register
    class EnvProbe(Hook):
        hook_type = "commit-msg"

        def run(self):
            seen["hook"] = os.environ.get("HOOKWRIGHT_HOOK")
            seen["type"] = os.environ.get("HOOKWRIGHT_HOOK_TYPE")
            return HookStatus.GOOD

    yield seen
    unregister(EnvProbe)


class TestRunReport:
    def test_exit_code(self):
        report = RunReport("pre-commit", [
            HookReport("A", outcome=HookOutcome(HookStatus.PASS)),
            HookReport("B", outcome=HookOutcome(HookStatus.WARN, "meh")),
        ])
        assert report.exit_code == 0
        assert report.warned
        report.reports.append(HookReport("C", outcome=HookOutcome(HookStatus.FAIL, "no")))
        assert report.exit_code == 1

    def test_cancelled_counts_as_failure(self):
        report = RunReport("pre-commit", [HookReport("A", cancelled=True)])
        assert report.failed
        assert report.cancelled

    def test_to_json(self):
        report = RunReport("pre-push", [HookReport("Skip", skip_reason="no applicable files")])
        data = json.loads(report.to_json())
        assert data == {
            "hook_type": "pre-push",
            "success": True,
            "hooks": [{
                "name": "Skip",
                "description": "",
                "status": "skipped",
                "message": "no applicable files",
            }],
        }


class TestHookRunner:
    def test_runs_applicable_and_skips_others(self, make_context, installed):
        context = make_context(files=["app.js"], modified_lines={"app.js": {1}})
        with patch.object(Jscs, "execute", return_value=ProcessResult(0)):
            report = HookRunner(default_config(), context).run()

        statuses = {r.name: r.status for r in report.reports}
        assert statuses == {"Jscs": "pass", "TravisLint": "skipped"}
        assert report.exit_code == 0

    def test_failure_sets_exit_code(self, make_context, installed):
        context = make_context(files=[".travis.yml"])
        result = ProcessResult(1, "language key is missing\n")
        with patch.object(TravisLint, "execute", return_value=result):
            report = HookRunner(default_config(), context).run()
        assert report.exit_code == 1
        travis = next(r for r in report.reports if r.name == "TravisLint")
        assert travis.message == "language key is missing"

    def test_disabled_hooks_not_loaded(self, make_context):
        config = default_config()
        config.hooks["pre-commit"]["Jscs"].enabled = False
        names = [h.name for h in HookRunner(config, make_context()).load_hooks()]
        assert names == ["TravisLint"]

    def test_unconfigured_hooks_use_class_defaults(self, make_context):
        hooks = HookRunner(HookwrightConfig(), make_context()).load_hooks()
        jscs = next(h for h in hooks if h.name == "Jscs")
        assert jscs.config == HookConfig.from_dict(Jscs.default_config)

    def test_missing_tool_warns_but_does_not_block(self, make_context):
        context = make_context(files=["app.js"])
        with patch.object(Hook, "in_path", return_value=False):
            report = HookRunner(default_config(), context).run()
        jscs = next(r for r in report.reports if r.name == "Jscs")
        assert jscs.status == "warn"
        assert report.exit_code == 0

    def test_hook_environment(self, make_context, env_probe):
        context = make_context("commit-msg", commit_message="msg")
        HookRunner(HookwrightConfig(), context).run()
        assert env_probe == {"hook": "EnvProbe", "type": "commit-msg"}
        assert "HOOKWRIGHT_HOOK" not in os.environ

    def test_cancelled_before_start(self, make_context):
        cancel = threading.Event()
        cancel.set()
        context = make_context(files=["app.js", ".travis.yml"], cancel=cancel)
        with patch.object(Hook, "execute") as mock:
            report = HookRunner(default_config(), context).run()
        mock.assert_not_called()
        assert all(r.status == "cancelled" for r in report.reports)
        assert report.exit_code == 1

    def test_cancelled_while_running(self, make_context, installed):
        context = make_context(files=["app.js"])
        error = CommandCancelledError(["jscs", "app.js"])
        with patch.object(Jscs, "execute", side_effect=error):
            report = HookRunner(default_config(), context).run()
        jscs = next(r for r in report.reports if r.name == "Jscs")
        assert jscs.cancelled
        assert report.cancelled
