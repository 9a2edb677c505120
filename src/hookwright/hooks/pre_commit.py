"""Hooks run against the files staged for commit."""

from __future__ import annotations

import re

from hookwright.hooks.base import Hook, HookOutcome, HookStatus, classify_result
from hookwright.hooks.messages import UnexpectedOutputError, extract_messages, process_messages


class TravisLint(Hook):
    """Runs `travis-lint` against any modified Travis CI files."""

    hook_type = "pre-commit"
    default_config = {
        "description": "Check Travis CI configuration",
        "required_executable": "travis-lint",
        "install_command": "gem install travis-lint",
        "include": [".travis.yml"],
    }

    def run(self) -> HookOutcome:
        result = self.execute(self.command + self.applicable_files)
        return classify_result(result)


class Jscs(Hook):
    """Runs `jscs` (JavaScript Code Style Checker) against any modified JavaScript files.

    Only problems on lines touched by the change are reported.
    """

    hook_type = "pre-commit"
    default_config = {
        "description": "Analyze with JSCS",
        "required_executable": "jscs",
        "install_command": "npm install -g jscs",
        "flags": ["--reporter=inline"],
        "include": ["**/*.js"],
    }

    # file1.js: line 1, col 4, ruleName: Missing space after `if` keyword
    MESSAGE_REGEX = re.compile(r"^(?P<file>(?:\w:)?[^:]+):[^\d]+(?P<line>\d+)")
    MISSING_CONFIG = re.compile(r"Configuration file .* was not found")

    def run(self) -> HookOutcome:
        result = self.execute(self.command + self.applicable_files)
        if result.success:
            return HookOutcome(HookStatus.PASS)

        # jscs exits 1 when it could not run at all, e.g. no .jscsrc
        if result.status == 1 or self.MISSING_CONFIG.search(result.stderr):
            return HookOutcome(HookStatus.WARN, result.stderr.strip() or result.stdout.strip())

        if not result.stdout.strip():
            return classify_result(result)

        try:
            messages = extract_messages(result.stdout.splitlines(), self.MESSAGE_REGEX)
        except UnexpectedOutputError as e:
            return HookOutcome(HookStatus.FAIL, str(e))

        return process_messages(
            messages,
            self.modified_lines_in_file,
            unmodified_lines=self.config.unmodified_lines,
        )
