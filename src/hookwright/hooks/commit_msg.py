"""Hooks run against the commit message."""

from __future__ import annotations

from hookwright.hooks.base import Hook, HookOutcome, HookStatus


class HardTabs(Hook):
    """Checks for hard tabs in commit messages."""

    hook_type = "commit-msg"
    default_config = {"description": "Check for hard tabs"}

    def run(self) -> HookOutcome:
        # Only catches tabs the user typed; git strips comment lines first
        if "\t" in (self.context.commit_message or ""):
            return HookOutcome(HookStatus.WARN, "Don't use hard tabs in commit messages")
        return HookOutcome(HookStatus.GOOD)
