"""Configuration system for hookwright.

Provides layered per-hook configuration with precedence:
1. Environment variables (highest)
2. Project config (.hookwright.yml at the repository root)
3. Defaults declared by each hook class (lowest)

The YAML file is keyed by hook type, then hook name::

    pre-commit:
      Jscs:
        enabled: true
        include: ["**/*.js"]
"""

from __future__ import annotations

import copy
import logging
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

import yaml

from hookwright.errors import ConfigLoadError, ConfigValidationError
from hookwright.utils import snake_case

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = ".hookwright.yml"

VALID_HOOK_TYPES = ("commit-msg", "pre-commit", "pre-push")
VALID_UNMODIFIED_LINES = ("ignore", "warn", "report")

# Environment variable names
ENV_CONFIG = "HOOKWRIGHT_CONFIG"
ENV_SKIP = "HOOKWRIGHT_SKIP"

__all__ = [
    "CONFIG_FILE_NAME",
    "ConfigLoadError",
    "ConfigValidationError",
    "HookConfig",
    "HookwrightConfig",
    "apply_env_overrides",
    "get_config",
    "get_project_config_path",
    "load_config_file",
    "merge_configs",
    "normalize_hook_type",
]


def normalize_hook_type(hook_type: str) -> str:
    """Accept ``PreCommit``, ``pre_commit`` or ``pre-commit``."""
    return snake_case(hook_type).replace("_", "-")


def _string_list(value: Any, name: str) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigValidationError(f"'{name}' must be a string or list of strings")
    return list(value)


@dataclass
class HookConfig:
    """Options for a single hook."""

    enabled: bool = True
    description: str = ""
    command: list[str] | None = None
    flags: list[str] = field(default_factory=list)
    include: list[str] = field(default_factory=list)
    exclude: list[str] = field(default_factory=list)
    required_executable: str | None = None
    install_command: str | None = None
    unmodified_lines: str = "ignore"

    def validate(self) -> None:
        """Validate configuration values."""
        if self.unmodified_lines not in VALID_UNMODIFIED_LINES:
            raise ConfigValidationError(
                f"Invalid unmodified_lines '{self.unmodified_lines}'. "
                f"Valid values: {', '.join(VALID_UNMODIFIED_LINES)}"
            )
        if self.command is not None and not self.command:
            raise ConfigValidationError("'command' must not be empty")

    def to_dict(self, exclude_none: bool = False) -> dict[str, Any]:
        """Convert to dictionary."""
        result = {
            "enabled": self.enabled,
            "description": self.description,
            "command": list(self.command) if self.command is not None else None,
            "flags": list(self.flags),
            "include": list(self.include),
            "exclude": list(self.exclude),
            "required_executable": self.required_executable,
            "install_command": self.install_command,
            "unmodified_lines": self.unmodified_lines,
        }
        if exclude_none:
            return {k: v for k, v in result.items() if v is not None}
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any], strict: bool = False) -> "HookConfig":
        """Create from dictionary."""
        if not isinstance(data, dict):
            raise ConfigValidationError("Hook configuration must be a mapping")
        if strict:
            known_fields = {f.name for f in fields(cls)}
            unknown = set(data.keys()) - known_fields
            if unknown:
                raise ConfigValidationError(
                    f"Unknown fields in hook config: {', '.join(sorted(unknown))}"
                )

        command = data.get("command")
        return cls(
            enabled=bool(data.get("enabled", True)),
            description=data.get("description", "") or "",
            command=_string_list(command, "command") if command is not None else None,
            flags=_string_list(data.get("flags"), "flags"),
            include=_string_list(data.get("include"), "include"),
            exclude=_string_list(data.get("exclude"), "exclude"),
            required_executable=data.get("required_executable"),
            install_command=data.get("install_command"),
            unmodified_lines=data.get("unmodified_lines", "ignore"),
        )


@dataclass
class HookwrightConfig:
    """Complete configuration: hook type -> hook name -> HookConfig."""

    hooks: dict[str, dict[str, HookConfig]] = field(default_factory=dict)

    def validate(self) -> None:
        """Validate all hook configurations."""
        for hook_type, hooks in self.hooks.items():
            if hook_type not in VALID_HOOK_TYPES:
                raise ConfigValidationError(
                    f"Invalid hook type '{hook_type}'. "
                    f"Valid values: {', '.join(VALID_HOOK_TYPES)}"
                )
            for name, hook_config in hooks.items():
                try:
                    hook_config.validate()
                except ConfigValidationError as e:
                    raise ConfigValidationError(f"{hook_type}/{name}: {e}") from e

    def for_hook(self, hook_type: str, name: str) -> HookConfig:
        """Return the configuration of one hook (defaults if unconfigured)."""
        return self.hooks.get(normalize_hook_type(hook_type), {}).get(name, HookConfig())

    def to_dict(self, exclude_none: bool = False) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            hook_type: {
                name: hook_config.to_dict(exclude_none=exclude_none)
                for name, hook_config in hooks.items()
            }
            for hook_type, hooks in self.hooks.items()
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any], strict: bool = False) -> "HookwrightConfig":
        """Create from dictionary."""
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ConfigValidationError("Configuration must be a mapping of hook types")

        hooks: dict[str, dict[str, HookConfig]] = {}
        for raw_type, raw_hooks in data.items():
            hook_type = normalize_hook_type(str(raw_type))
            if strict and hook_type not in VALID_HOOK_TYPES:
                raise ConfigValidationError(f"Unknown hook type: {raw_type}")
            if not isinstance(raw_hooks, dict):
                raise ConfigValidationError(f"'{raw_type}' must map hook names to options")
            hooks[hook_type] = {
                str(name): HookConfig.from_dict(options or {}, strict=strict)
                for name, options in raw_hooks.items()
            }
        return cls(hooks=hooks)


def get_project_config_path(root: Path) -> Path:
    """Get path to the project config file."""
    return root / CONFIG_FILE_NAME


def load_config_file(path: Path, strict: bool = False) -> HookwrightConfig:
    """Load configuration from a YAML file.

    Args:
        path: Path to the config file
        strict: If True, fail on unknown fields

    Returns:
        HookwrightConfig instance (empty if the file does not exist)

    Raises:
        ConfigLoadError: If file cannot be read or parsed
        ConfigValidationError: If the content has the wrong shape
    """
    return HookwrightConfig.from_dict(_read_yaml(path), strict=strict)


def _read_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}

    try:
        content = path.read_text()
    except PermissionError as e:
        raise ConfigLoadError(f"Permission denied reading {path}: {e}")
    except OSError as e:
        raise ConfigLoadError(f"Error reading {path}: {e}")

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigLoadError(f"Invalid YAML in {path}: {e}")

    logger.debug("Loaded configuration from %s", path)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigValidationError(f"{path}: configuration must be a mapping of hook types")
    return data


def merge_configs(
    base: HookwrightConfig,
    override: HookwrightConfig,
    raw_override: dict[str, Any] | None = None,
) -> HookwrightConfig:
    """Merge two configs, with ``override`` taking precedence.

    When ``raw_override`` (the dictionary ``override`` was built from) is
    given, only the keys actually present in it replace base values;
    otherwise every field of an overriding hook config wins.
    """
    result = copy.deepcopy(base)

    raw_by_type: dict[str, dict[str, Any]] = {}
    if raw_override:
        for raw_type, raw_hooks in raw_override.items():
            raw_by_type[normalize_hook_type(str(raw_type))] = raw_hooks or {}

    for hook_type, hooks in override.hooks.items():
        target = result.hooks.setdefault(hook_type, {})
        for name, hook_config in hooks.items():
            if name in target and raw_override is not None:
                present = raw_by_type.get(hook_type, {}).get(name) or {}
                merged = target[name].to_dict()
                merged.update({k: v for k, v in hook_config.to_dict().items() if k in present})
                target[name] = HookConfig.from_dict(merged)
            else:
                target[name] = copy.deepcopy(hook_config)

    return result


def apply_env_overrides(config: HookwrightConfig) -> HookwrightConfig:
    """Apply environment variable overrides to config.

    ``HOOKWRIGHT_SKIP`` is a comma-separated list of hook names to disable
    for this run, e.g. ``HOOKWRIGHT_SKIP=Jscs,golangci_lint``.
    """
    result = copy.deepcopy(config)

    skip = os.environ.get(ENV_SKIP, "")
    skipped = {snake_case(name.strip()) for name in skip.split(",") if name.strip()}
    if not skipped:
        return result

    for hook_type, hooks in result.hooks.items():
        for name, hook_config in hooks.items():
            if snake_case(name) in skipped:
                logger.info("Skipping %s/%s via %s", hook_type, name, ENV_SKIP)
                hook_config.enabled = False

    return result


def get_config(root: Path, strict: bool = False) -> HookwrightConfig:
    """Build the effective configuration for the repository at ``root``.

    Hook class defaults are overlaid with the project file (or the file
    named by ``HOOKWRIGHT_CONFIG``), then environment overrides apply.
    """
    from hookwright.hooks.registry import default_config

    path = Path(os.environ.get(ENV_CONFIG) or get_project_config_path(root))
    raw = _read_yaml(path)
    project = HookwrightConfig.from_dict(raw, strict=strict)

    config = merge_configs(default_config(), project, raw_override=raw)
    config = apply_env_overrides(config)
    config.validate()
    return config
