"""Hook implementations and the contract they share.

Every hook turns the result of running its tool into one of four
statuses:

- good: informational check found nothing to report
- pass: the tool ran and succeeded
- warn: advisory, does not block (including "tool not installed")
- fail: blocks the commit or push

Hook Types:
- commit-msg: checks the commit message
- pre-commit: checks files staged for commit
- pre-push: checks before pushing
"""

from hookwright.hooks.base import (
    Hook,
    HookContext,
    HookOutcome,
    HookStatus,
    classify_result,
    to_outcome,
)
from hookwright.hooks.messages import (
    HookMessage,
    UnexpectedOutputError,
    extract_messages,
    process_messages,
)
from hookwright.hooks.registry import (
    default_config,
    get_hook_class,
    hooks_for,
    register,
    supported_hook_type_classes,
    supported_hook_types,
)

__all__ = [
    # Base contract
    "Hook",
    "HookContext",
    "HookOutcome",
    "HookStatus",
    "classify_result",
    "to_outcome",
    # Line-scoped messages
    "HookMessage",
    "UnexpectedOutputError",
    "extract_messages",
    "process_messages",
    # Registry
    "default_config",
    "get_hook_class",
    "hooks_for",
    "register",
    "supported_hook_type_classes",
    "supported_hook_types",
]
