"""Registry of available hooks, keyed by hook type and hook name."""

from __future__ import annotations

from hookwright.config import HookConfig, HookwrightConfig, normalize_hook_type
from hookwright.errors import UnknownHookError
from hookwright.hooks.base import Hook
from hookwright.hooks.commit_msg import HardTabs
from hookwright.hooks.pre_commit import Jscs, TravisLint
from hookwright.hooks.pre_push import GolangciLint
from hookwright.utils import camel_case

BUILTIN_HOOKS: list[type[Hook]] = [
    HardTabs,
    Jscs,
    TravisLint,
    GolangciLint,
]

_registry: dict[str, dict[str, type[Hook]]] = {}


def register(hook_class: type[Hook]) -> type[Hook]:
    """Register a hook class under its hook type. Usable as a decorator."""
    hook_type = normalize_hook_type(hook_class.hook_type)
    _registry.setdefault(hook_type, {})[hook_class.__name__] = hook_class
    return hook_class


def unregister(hook_class: type[Hook]) -> None:
    hooks = _registry.get(normalize_hook_type(hook_class.hook_type), {})
    hooks.pop(hook_class.__name__, None)


for _hook_class in BUILTIN_HOOKS:
    register(_hook_class)


def supported_hook_types() -> list[str]:
    """Return the supported hook types, e.g. ``["commit-msg", "pre-commit"]``."""
    return sorted(_registry)


def supported_hook_type_classes() -> list[str]:
    """Return hook types in class-name form, e.g. ``["CommitMsg", "PreCommit"]``."""
    return [camel_case(hook_type) for hook_type in supported_hook_types()]


def hooks_for(hook_type: str) -> dict[str, type[Hook]]:
    """Return the hook classes registered for a hook type, by name."""
    return dict(sorted(_registry.get(normalize_hook_type(hook_type), {}).items()))


def get_hook_class(hook_type: str, name: str) -> type[Hook]:
    """Look up a hook class; ``name`` may be ``GolangciLint`` or ``golangci_lint``.

    Raises:
        UnknownHookError: If no such hook is registered.
    """
    hooks = _registry.get(normalize_hook_type(hook_type), {})
    hook_class = hooks.get(name) or hooks.get(camel_case(name))
    if hook_class is None:
        raise UnknownHookError(
            f"Unknown {hook_type} hook: {name}. "
            f"Available: {', '.join(sorted(hooks)) or 'none'}"
        )
    return hook_class


def default_config() -> HookwrightConfig:
    """Configuration made of every registered hook's declared defaults."""
    return HookwrightConfig(
        hooks={
            hook_type: {
                name: HookConfig.from_dict(hook_class.default_config)
                for name, hook_class in hooks.items()
            }
            for hook_type, hooks in _registry.items()
        }
    )
