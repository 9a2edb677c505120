"""Dependency checks for hookwright."""

import os
import shutil
from dataclasses import dataclass

from hookwright.config import HookwrightConfig
from hookwright.git.repo import GitError, git_version
from hookwright.process import search_path

MIN_GIT_VERSION = "2.5.0"  # first release with linked worktrees


@dataclass
class DependencyStatus:
    """Status of a required dependency."""

    name: str
    installed: bool
    version: str | None = None
    path: str | None = None
    min_version: str | None = None
    error: str | None = None
    required_by: str | None = None

    @property
    def ok(self) -> bool:
        """Check if dependency is installed and meets version requirements."""
        return self.installed and self.error is None


def check_git(min_version: str = MIN_GIT_VERSION) -> DependencyStatus:
    """Check if git is installed and meets minimum version requirement."""
    path = shutil.which("git")

    if not path:
        return DependencyStatus(
            name="git",
            installed=False,
            min_version=min_version,
            error="git not found in PATH",
        )

    try:
        version = git_version()
    except GitError as e:
        return DependencyStatus(
            name="git",
            installed=True,
            path=path,
            min_version=min_version,
            error=str(e),
        )

    if version < min_version:
        return DependencyStatus(
            name="git",
            installed=True,
            version=str(version),
            path=path,
            min_version=min_version,
            error=f"git version {version} < required {min_version}",
        )

    return DependencyStatus(
        name="git",
        installed=True,
        version=str(version),
        path=path,
        min_version=min_version,
    )


def check_hook_tools(config: HookwrightConfig) -> list[DependencyStatus]:
    """Check the executables required by every enabled hook."""
    lookup_path = os.pathsep.join(search_path())
    statuses = []

    for hook_type, hooks in sorted(config.hooks.items()):
        for name, hook_config in sorted(hooks.items()):
            executable = hook_config.required_executable
            if not hook_config.enabled or not executable:
                continue

            path = shutil.which(executable, path=lookup_path)
            error = None
            if not path:
                error = f"{executable} not found in PATH"
                if hook_config.install_command:
                    error += f" (run `{hook_config.install_command}`)"

            statuses.append(
                DependencyStatus(
                    name=executable,
                    installed=path is not None,
                    path=path,
                    required_by=f"{hook_type}/{name}",
                    error=error,
                )
            )

    return statuses
