"""Runs every enabled hook of one hook type and aggregates the outcomes."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any

from hookwright.config import HookConfig, HookwrightConfig, normalize_hook_type
from hookwright.environment import with_environment
from hookwright.errors import CommandCancelledError
from hookwright.hooks.base import Hook, HookContext, HookOutcome, HookStatus
from hookwright.hooks.registry import hooks_for

logger = logging.getLogger(__name__)

# Set while a hook runs so the tools it spawns can tell which hook they serve
ENV_HOOK_NAME = "HOOKWRIGHT_HOOK"
ENV_HOOK_TYPE = "HOOKWRIGHT_HOOK_TYPE"


@dataclass
class HookReport:
    """Result of one hook within a run."""

    name: str
    description: str = ""
    outcome: HookOutcome | None = None
    skip_reason: str | None = None
    cancelled: bool = False

    @property
    def status(self) -> str:
        if self.cancelled:
            return "cancelled"
        if self.outcome is None:
            return "skipped"
        return self.outcome.status.value

    @property
    def message(self) -> str | None:
        if self.outcome is not None:
            return self.outcome.message
        return self.skip_reason

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "status": self.status,
            "message": self.message,
        }


@dataclass
class RunReport:
    """Aggregated outcome of a hook run."""

    hook_type: str
    reports: list[HookReport] = field(default_factory=list)

    @property
    def failed(self) -> bool:
        return any(
            r.cancelled or (r.outcome is not None and r.outcome.status.blocks)
            for r in self.reports
        )

    @property
    def cancelled(self) -> bool:
        return any(r.cancelled for r in self.reports)

    @property
    def warned(self) -> bool:
        return any(
            r.outcome is not None and r.outcome.status is HookStatus.WARN
            for r in self.reports
        )

    @property
    def exit_code(self) -> int:
        return 1 if self.failed else 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "hook_type": self.hook_type,
            "success": not self.failed,
            "hooks": [r.to_dict() for r in self.reports],
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict())


class HookRunner:
    """Runs the enabled hooks for ``context.hook_type``, one after another."""

    def __init__(self, config: HookwrightConfig, context: HookContext):
        self.config = config
        self.context = context
        self.hook_type = normalize_hook_type(context.hook_type)

    def _hook_config(self, name: str, hook_class: type[Hook]) -> HookConfig:
        configured = self.config.hooks.get(self.hook_type, {}).get(name)
        if configured is not None:
            return configured
        return HookConfig.from_dict(hook_class.default_config)

    def load_hooks(self) -> list[Hook]:
        """Instantiate every enabled hook registered for this hook type."""
        hooks = []
        for name, hook_class in hooks_for(self.hook_type).items():
            hook_config = self._hook_config(name, hook_class)
            if not hook_config.enabled:
                logger.debug("%s is disabled", name)
                continue
            hooks.append(hook_class(hook_config, self.context))
        return hooks

    def run(self) -> RunReport:
        report = RunReport(hook_type=self.hook_type)
        cancel = self.context.cancel

        for hook in self.load_hooks():
            entry = HookReport(name=hook.name, description=hook.description)
            report.reports.append(entry)

            if cancel is not None and cancel.is_set():
                entry.cancelled = True
                continue

            reason = hook.skip_reason()
            if reason:
                logger.debug("Skipping %s: %s", hook.name, reason)
                entry.skip_reason = reason
                continue

            logger.debug("Running %s", hook.name)
            try:
                with with_environment({ENV_HOOK_NAME: hook.name, ENV_HOOK_TYPE: self.hook_type}):
                    entry.outcome = hook.run_and_transform()
            except CommandCancelledError as e:
                logger.warning("%s was cancelled: %s", hook.name, e)
                entry.cancelled = True

        return report
