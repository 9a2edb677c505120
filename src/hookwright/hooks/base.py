"""Base classes and types for the hook system."""

from __future__ import annotations

import logging
import os
import re
import threading
from abc import ABC, abstractmethod
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, ClassVar

from hookwright.config import HookConfig
from hookwright.errors import InvalidHookResultError
from hookwright.paths import convert_glob_to_absolute, filter_paths
from hookwright.process import ProcessResult, execute
from hookwright.utils import in_path

logger = logging.getLogger(__name__)


class HookStatus(str, Enum):
    """Outcome status of a hook run.

    ``good`` and ``pass`` need no action, ``warn`` is advisory and
    ``fail`` blocks the commit or push.
    """

    GOOD = "good"
    PASS = "pass"
    WARN = "warn"
    FAIL = "fail"

    @property
    def blocks(self) -> bool:
        return self is HookStatus.FAIL


@dataclass(frozen=True)
class HookOutcome:
    """Status plus an optional human-readable message."""

    status: HookStatus
    message: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"status": self.status.value, "message": self.message}


@dataclass
class HookContext:
    """What a hook needs to know about the current invocation.

    The file list and modified line numbers are computed by the caller;
    hooks only consume them.
    """

    hook_type: str
    applicable_files: list[str] = field(default_factory=list)
    modified_lines: dict[str, set[int]] = field(default_factory=dict)
    commit_message: str | None = None
    cancel: threading.Event | None = None

    def modified_lines_in_file(self, path: str) -> set[int]:
        """Return the modified line numbers for ``path`` (empty if unknown).

        Tools often report paths relative to where they ran, so a relative
        ``path`` also matches a key that ends with it.
        """
        path = os.path.normpath(path)
        for key, lines in self.modified_lines.items():
            key = os.path.normpath(key)
            if key == path:
                return set(lines)
        if not os.path.isabs(path):
            suffix = os.sep + path
            for key, lines in self.modified_lines.items():
                if os.path.normpath(key).endswith(suffix):
                    return set(lines)
        return set()


def classify_result(
    result: ProcessResult,
    *,
    warn_patterns: Iterable[str] = (),
) -> HookOutcome:
    """Turn a finished command into an outcome.

    A zero exit status passes regardless of output. Otherwise stdout,
    with surrounding whitespace stripped, is the tool's report and becomes
    the failure message; when stdout is empty stderr is used instead.
    Output matching one of ``warn_patterns`` means the tool could not run
    (missing config and the like) and is downgraded to a warning.
    """
    if result.success:
        return HookOutcome(HookStatus.PASS)

    stdout = result.stdout.strip()
    stderr = result.stderr.strip()

    for pattern in warn_patterns:
        if re.search(pattern, stderr) or re.search(pattern, stdout):
            return HookOutcome(HookStatus.WARN, stderr or stdout)

    if stdout:
        return HookOutcome(HookStatus.FAIL, stdout)
    return HookOutcome(HookStatus.FAIL, stderr)


def to_outcome(value: Any) -> HookOutcome:
    """Normalize what ``Hook.run`` returned into a HookOutcome.

    Accepts an outcome, a status (or its string value), or a
    ``(status, message)`` pair.
    """
    if isinstance(value, HookOutcome):
        return value

    message = None
    if isinstance(value, tuple):
        if len(value) != 2:
            raise InvalidHookResultError(f"Expected (status, message), got {value!r}")
        value, message = value

    try:
        status = HookStatus(value)
    except ValueError as e:
        raise InvalidHookResultError(f"Invalid hook status: {value!r}") from e
    return HookOutcome(status, message)


class Hook(ABC):
    """Base class for hooks.

    Subclasses implement ``run``; callers use ``run_and_transform``, which
    applies the policies every hook shares before delegating.

    Example:
        class TravisLint(Hook):
            hook_type = "pre-commit"
            default_config = {"required_executable": "travis-lint"}

            def run(self) -> HookOutcome:
                result = self.execute(self.command + self.applicable_files)
                return classify_result(result)
    """

    hook_type: ClassVar[str]
    default_config: ClassVar[dict[str, Any]] = {}

    def __init__(self, config: HookConfig | None, context: HookContext):
        self.config = config or HookConfig.from_dict(self.default_config)
        self.context = context
        self._applicable_files: list[str] | None = None

    @property
    def name(self) -> str:
        return type(self).__name__

    @property
    def description(self) -> str:
        return self.config.description or f"Run {self.name}"

    @property
    def command(self) -> list[str]:
        """Base command: configured command (or required executable) plus flags."""
        base = self.config.command
        if base is None:
            base = [self.required_executable] if self.required_executable else []
        return list(base) + list(self.config.flags)

    @property
    def required_executable(self) -> str | None:
        return self.config.required_executable

    @property
    def install_command(self) -> str | None:
        return self.config.install_command

    @property
    def applicable_files(self) -> list[str]:
        """Files from the context narrowed by this hook's include/exclude globs."""
        if self._applicable_files is None:
            self._applicable_files = self._select_files(self.context.applicable_files)
        return self._applicable_files

    def _select_files(self, files: Sequence[str]) -> list[str]:
        include = self.config.include
        exclude = self.config.exclude
        if not include and not exclude:
            return list(files)

        include = include or ["**/*"]
        selected = []
        absolute_patterns: tuple[list[str], list[str]] | None = None
        for path in files:
            if os.path.isabs(path):
                if absolute_patterns is None:
                    absolute_patterns = (
                        [convert_glob_to_absolute(g) for g in include],
                        [convert_glob_to_absolute(g) for g in exclude],
                    )
                inc, exc = absolute_patterns
            else:
                inc, exc = include, exclude
            selected.extend(filter_paths(inc, [path], exc))
        return selected

    def modified_lines_in_file(self, path: str) -> set[int]:
        return self.context.modified_lines_in_file(path)

    def in_path(self, cmd: str) -> bool:
        return in_path(cmd)

    def execute(self, args: Sequence[str | Path]) -> ProcessResult:
        """Run a command, honouring the invocation's cancellation signal."""
        return execute([str(a) for a in args], cancel=self.context.cancel)

    def skip_reason(self) -> str | None:
        """Return why this hook should not run for this invocation, if at all."""
        if self.config.include and not self.applicable_files:
            return "no applicable files"
        return None

    @abstractmethod
    def run(self) -> HookOutcome | HookStatus | str | tuple:
        """Run the check and return its outcome."""

    def run_and_transform(self) -> HookOutcome:
        """Run the hook with the shared policies applied.

        A missing executable is a warning with installation instructions,
        never a failure.
        """
        executable = self.required_executable
        if executable and not self.in_path(executable):
            hint = (
                f"Run `{self.install_command}`"
                if self.install_command
                else f"Install {executable} and make sure it is on your PATH"
            )
            logger.info("%s: %s not found", self.name, executable)
            return HookOutcome(HookStatus.WARN, f"'{executable}' is not installed. {hint}")

        outcome = to_outcome(self.run())
        logger.info("%s: %s", self.name, outcome.status.value)
        return outcome
