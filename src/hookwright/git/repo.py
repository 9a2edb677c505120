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

"""Repository root and .git directory discovery.

We walk the filesystem ourselves instead of calling
``git rev-parse --show-toplevel`` so that hooks still work against
synthetic repositories whose .git directory is not valid.
"""

from __future__ import annotations

import logging
import re
import subprocess
import threading
from dataclasses import dataclass
from pathlib import Path

from hookwright.errors import HookwrightError, NotARepositoryError
from hookwright.version import Version

logger = logging.getLogger(__name__)

GIT_MARKER = ".git"

_GITDIR_LINE = re.compile(r"^gitdir: (.*)$", re.MULTILINE)


class GitError(HookwrightError):
    """Error from a git command."""


@dataclass(frozen=True)
class RepoLocation:
    """Resolved repository root and its real metadata directory."""

    root: Path
    git_dir: Path


def find_repo_root(start: Path) -> Path:
    """Return the nearest ancestor of ``start`` (inclusive) holding a .git entry."""
    start = start.resolve()
    for path in (start, *start.parents):
        if (path / GIT_MARKER).exists():
            return path
    raise NotARepositoryError(
        f"no .git directory found in {start} or any parent directory"
    )


def resolve_git_dir(root: Path) -> Path:
    """Return the metadata directory for the repository at ``root``.

    ``.git`` is usually a directory, but for linked worktrees and
    submodules it is a file containing ``gitdir: <path>``.
    """
    marker = root / GIT_MARKER
    if marker.is_dir():
        return marker

    match = _GITDIR_LINE.search(marker.read_text())
    if not match:
        raise NotARepositoryError(f"{marker} does not point to a git directory")

    git_dir = Path(match.group(1).strip())
    if not git_dir.is_absolute():
        git_dir = (root / git_dir).resolve()
    return git_dir


class RepoLocator:
    """Finds and caches the repository root and .git directory.

    The first caller pays for the filesystem walk; later callers get the
    cached values even if the working directory has changed since.
    """

    def __init__(self, start: Path | None = None):
        self._start = start
        self._lock = threading.Lock()
        self._root: Path | None = None
        self._git_dir: Path | None = None

    def repo_root(self) -> Path:
        root = self._root
        if root is not None:
            return root
        with self._lock:
            if self._root is None:
                self._root = find_repo_root(self._start or Path.cwd())
                logger.debug("Resolved repository root: %s", self._root)
            return self._root

    def git_dir(self, root: Path | None = None) -> Path:
        git_dir = self._git_dir
        if git_dir is not None:
            return git_dir
        root = root or self.repo_root()
        with self._lock:
            if self._git_dir is None:
                self._git_dir = resolve_git_dir(root)
                logger.debug("Resolved git directory: %s", self._git_dir)
            return self._git_dir

    def location(self) -> RepoLocation:
        return RepoLocation(root=self.repo_root(), git_dir=self.git_dir())

    def reset(self) -> None:
        """Forget cached values so the next call walks the filesystem again."""
        with self._lock:
            self._root = None
            self._git_dir = None


_default_locator = RepoLocator()


def repo_root() -> Path:
    """Return the absolute path of the current repository's root."""
    return _default_locator.repo_root()


def git_dir(root: Path | None = None) -> Path:
    """Return the absolute path of the current repository's .git directory."""
    return _default_locator.git_dir(root)


def reset_repo_cache() -> None:
    _default_locator.reset()


def _run(args: list[str], cwd: Path | None = None) -> str:
    """Run a git command and return stdout."""
    logger.debug("git %s", " ".join(args))
    try:
        result = subprocess.run(
            ["git"] + args,
            cwd=cwd,
            capture_output=True,
            text=True,
            check=True,
        )
        return result.stdout.strip()
    except FileNotFoundError as e:
        raise GitError("git executable not found") from e
    except subprocess.CalledProcessError as e:
        raise GitError(f"git {' '.join(args)}: {e.stderr.strip()}") from e


def git_version() -> Version:
    """Return the installed git version, e.g. ``Version('2.43.0')``."""
    output = _run(["--version"])
    # "git version 2.39.3 (Apple Git-145)"
    match = re.search(r"(\d+(?:\.\d+)+)", output)
    if not match:
        raise GitError(f"Unexpected output from git --version: {output}")
    return Version(match.group(1))
