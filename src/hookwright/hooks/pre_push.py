"""Hooks run before pushing."""

from __future__ import annotations

from hookwright.hooks.base import Hook, HookOutcome, classify_result


class GolangciLint(Hook):
    """Runs `golangci-lint run` over the Go module."""

    hook_type = "pre-push"
    default_config = {
        "description": "Analyze with golangci-lint",
        "required_executable": "golangci-lint",
        "install_command": "go install github.com/golangci/golangci-lint/cmd/golangci-lint@latest",
        "command": ["golangci-lint", "run"],
        "include": ["**/*.go"],
    }

    def run(self) -> HookOutcome:
        return classify_result(self.execute(self.command))
