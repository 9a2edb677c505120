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

"""Subprocess execution for hooks.

Every command a hook runs goes through ``execute`` or
``execute_in_background`` so there is one place to validate arguments.
Commands are always argument lists handed straight to the OS; nothing is
interpreted by a shell.
"""

from __future__ import annotations

import logging
import os
import shutil
import signal
import subprocess
import threading
from collections.abc import Mapping, Sequence
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

from hookwright.errors import CommandCancelledError, InvalidCommandArgsError, NotARepositoryError
from hookwright.git.repo import repo_root

logger = logging.getLogger(__name__)

PIPE_TOKEN = "|"

# Exit statuses a shell reports for these conditions
STATUS_NOT_EXECUTABLE = 126
STATUS_NOT_FOUND = 127

DEFAULT_POLL_INTERVAL = 0.1
TERMINATE_GRACE_SECONDS = 5.0


@dataclass(frozen=True)
class ProcessResult:
    """Exit status and captured output of a finished command."""

    status: int
    stdout: str = ""
    stderr: str = ""

    @property
    def success(self) -> bool:
        return self.status == 0

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["success"] = self.success
        return data


def search_path(env: Mapping[str, str] | None = None) -> list[str]:
    """Directories searched for executables: the repo root, then $PATH.

    The repo root is not normally on $PATH but is a valid place for
    project-local executables. ``env`` replaces ``os.environ`` as the
    source of $PATH.
    """
    env = os.environ if env is None else env
    paths = []
    try:
        paths.append(str(repo_root()))
    except NotARepositoryError:
        pass
    paths.extend(p for p in env.get("PATH", "").split(os.pathsep) if p)
    return paths


def _resolve(args: list[str], env: Mapping[str, str] | None) -> list[str]:
    """Return ``args`` with the executable looked up over ``search_path``."""
    if os.path.dirname(args[0]):
        return args
    found = shutil.which(args[0], path=os.pathsep.join(search_path(env)))
    if found is None:
        return args
    return [found] + args[1:]


def _validate(args: Sequence[str], helper: str) -> list[str]:
    args = [str(arg) for arg in args]
    if not args:
        raise InvalidCommandArgsError(f"No command given to the `{helper}` helper")
    if PIPE_TOKEN in args:
        raise InvalidCommandArgsError(
            f"Cannot pipe commands with the `{helper}` helper"
        )
    return args


def _terminate_group(process: subprocess.Popen) -> None:
    """Terminate the process group of ``process``, escalating to SIGKILL."""
    if os.name == "posix":
        try:
            os.killpg(process.pid, signal.SIGTERM)
        except ProcessLookupError:
            pass
    else:
        process.terminate()

    try:
        process.communicate(timeout=TERMINATE_GRACE_SECONDS)
    except subprocess.TimeoutExpired:
        if os.name == "posix":
            try:
                os.killpg(process.pid, signal.SIGKILL)
            except ProcessLookupError:
                pass
        else:
            process.kill()
        process.communicate()


def execute(
    args: Sequence[str],
    *,
    cwd: str | Path | None = None,
    env: Mapping[str, str] | None = None,
    cancel: threading.Event | None = None,
    poll_interval: float = DEFAULT_POLL_INTERVAL,
) -> ProcessResult:
    """Run a command, wait for it, and capture its status and output.

    Both output streams are drained while waiting, so a child writing a
    lot to stdout and stderr cannot stall on a full pipe.

    The executable is looked up in the repo root before $PATH, the same
    order ``in_path`` uses.

    Args:
        args: Command and arguments. Must not contain a ``|`` token.
        cwd: Working directory for the child.
        env: Full environment for the child (defaults to ours).
        cancel: Event that, once set, stops the child and raises
            ``CommandCancelledError``.
        poll_interval: How often to check ``cancel``, in seconds.

    Returns:
        ProcessResult. A command that cannot be found is reported with
        status 127 rather than raised.

    Raises:
        InvalidCommandArgsError: If ``args`` would need a shell pipeline.
        CommandCancelledError: If ``cancel`` was set before the child exited.
    """
    args = _validate(args, "execute")
    logger.debug("Executing: %s", " ".join(args))

    try:
        process = subprocess.Popen(
            _resolve(args, env),
            cwd=cwd,
            env=dict(env) if env is not None else None,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            errors="replace",
            start_new_session=True,
        )
    except FileNotFoundError:
        logger.debug("Command not found: %s", args[0])
        return ProcessResult(
            status=STATUS_NOT_FOUND,
            stderr=f"{args[0]}: command not found",
        )
    except PermissionError:
        logger.debug("Command not executable: %s", args[0])
        return ProcessResult(
            status=STATUS_NOT_EXECUTABLE,
            stderr=f"{args[0]}: permission denied",
        )

    if cancel is None:
        stdout, stderr = process.communicate()
    else:
        while True:
            if cancel.is_set():
                logger.info("Cancelling: %s", " ".join(args))
                _terminate_group(process)
                raise CommandCancelledError(args)
            try:
                stdout, stderr = process.communicate(timeout=poll_interval)
                break
            except subprocess.TimeoutExpired:
                continue

    logger.debug("Exit status %d: %s", process.returncode, args[0])
    return ProcessResult(
        status=process.returncode,
        stdout=stdout or "",
        stderr=stderr or "",
    )


def execute_in_background(
    args: Sequence[str],
    *,
    cwd: str | Path | None = None,
    env: Mapping[str, str] | None = None,
) -> subprocess.Popen:
    """Start a command and return immediately.

    For long-running processes whose result nobody waits for. The child
    gets its own session and no stdio, so it outlives the hook.
    """
    args = _validate(args, "execute_in_background")
    logger.debug("Executing in background: %s", " ".join(args))

    return subprocess.Popen(
        _resolve(args, env),
        cwd=cwd,
        env=dict(env) if env is not None else None,
        stdin=subprocess.DEVNULL,
        stdout=subprocess.DEVNULL,
        stderr=subprocess.DEVNULL,
        start_new_session=True,
    )
