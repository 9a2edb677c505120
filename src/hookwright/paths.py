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

"""Glob matching used to decide which files a hook applies to."""

from __future__ import annotations

import fnmatch
import os
from collections.abc import Iterable
from pathlib import Path

from hookwright.git.repo import repo_root


def _split(value: str) -> list[str]:
    return [part for part in value.split("/") if part]


def _fnmatch_segment(segment: str) -> str:
    """Rewrite ``\\x`` escapes and ``[^...]`` negation into fnmatch syntax."""
    out = []
    in_bracket = False
    i = 0
    while i < len(segment):
        char = segment[i]
        if in_bracket:
            if char == "]":
                in_bracket = False
            out.append(char)
        elif char == "\\" and i + 1 < len(segment):
            i += 1
            out.append(f"[{segment[i]}]")
        elif char == "[":
            in_bracket = True
            out.append(char)
            if segment[i + 1:i + 2] == "^":
                i += 1
                out.append("!")
        else:
            out.append(char)
        i += 1
    return "".join(out)


def _match_parts(path_parts: list[str], pattern_parts: list[str]) -> bool:
    """Match path components against pattern components with ``**`` support."""
    if not pattern_parts:
        return not path_parts

    if pattern_parts[0] == "**" and len(pattern_parts) > 1:
        # **/ matches zero or more whole components; a trailing ** is just *
        if _match_parts(path_parts, pattern_parts[1:]):
            return True
        return bool(path_parts) and _match_parts(path_parts[1:], pattern_parts)

    if not path_parts:
        return False

    # fnmatchcase on a single component: wildcards never see "/" and a
    # leading dot gets no special treatment
    if fnmatch.fnmatchcase(path_parts[0], _fnmatch_segment(pattern_parts[0])):
        return _match_parts(path_parts[1:], pattern_parts[1:])

    return False


def matches_path(pattern: str, path: str | Path) -> bool:
    """Return whether ``pattern`` matches ``path``.

    Wildcards do not match across ``/`` but do match dotfiles, so
    ``*.rb`` does not match ``lib/foo.rb`` while ``**/*.rb`` does, and
    ``.*`` matches ``.gitignore``. A trailing ``**`` behaves like ``*``;
    only ``**/`` spans directories. Backslash escapes a glob character in
    ``pattern``, and ``[^...]`` is the same as ``[!...]``.
    """
    path = str(path).replace("\\", "/")
    if pattern.startswith("/") != path.startswith("/"):
        return False
    return _match_parts(_split(path), _split(pattern))


def convert_glob_to_absolute(glob: str, root: str | Path | None = None) -> str:
    """Convert a repo-relative glob into an absolute glob rooted at the repo."""
    base = str(root) if root is not None else str(repo_root())
    return os.path.join(base, glob)


def filter_paths(
    patterns: Iterable[str],
    paths: Iterable[str | Path],
    exclude: Iterable[str] = (),
) -> list[str]:
    """Return the paths matching any include pattern and no exclude pattern."""
    patterns = list(patterns)
    exclude = list(exclude)
    selected = []
    for path in paths:
        path = str(path)
        if not any(matches_path(p, path) for p in patterns):
            continue
        if any(matches_path(p, path) for p in exclude):
            continue
        selected.append(path)
    return selected


def broken_symlink(path: str | Path) -> bool:
    """Return whether ``path`` is a symlink whose target does not exist."""
    path = Path(path)
    return path.is_symlink() and not path.exists()
