"""Small helpers shared by hooks and the runner."""

from __future__ import annotations

import os
import re

from hookwright.process import execute, search_path


def in_path(cmd: str) -> bool:
    """Return whether ``cmd`` can be found as an executable."""
    pathext = os.environ.get("PATHEXT")
    exts = pathext.split(";") if pathext else [""]
    for directory in search_path():
        for ext in exts:
            exe = os.path.join(directory, f"{cmd}{ext}")
            if os.path.isfile(exe) and os.access(exe, os.X_OK):
                return True
    return False


def snake_case(text: str) -> str:
    """Convert ``CamelCase`` (or ``kebab-case``) to ``snake_case``."""
    text = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1_\2", text)
    text = re.sub(r"([a-z\d])([A-Z])", r"\1_\2", text)
    return text.replace("-", "_").lower()


def camel_case(text: str) -> str:
    """Convert a string with underscores, hyphens or spaces to ``CamelCase``."""
    return "".join(part[:1].upper() + part[1:] for part in re.split(r"[_\- ]", text))


def parent_command() -> str:
    """Return the command line of the process that triggered this hook run."""
    result = execute(["ps", "-ocommand=", "-p", str(os.getppid())])
    if not result.success:
        return ""
    return result.stdout.strip()
