"""Line-scoped reporting of lint messages.

Hooks that know which lines a change touched parse their tool's output
into messages and keep only the ones on modified lines.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from hookwright.errors import HookwrightError
from hookwright.hooks.base import HookOutcome, HookStatus

logger = logging.getLogger(__name__)

ERROR = "error"
WARNING = "warning"


class UnexpectedOutputError(HookwrightError):
    """Raised when tool output lines cannot be parsed into messages."""


@dataclass(frozen=True)
class HookMessage:
    """One problem reported by a tool."""

    type: str
    file: str | None
    line: int | None
    content: str

    def __str__(self) -> str:
        return self.content


def extract_messages(
    output_lines: Iterable[str],
    regex: str | re.Pattern,
    type_categorizer: Callable[[str | None], str] | None = None,
) -> list[HookMessage]:
    """Parse tool output into messages.

    ``regex`` must define ``file`` and ``line`` named groups and may define
    ``type``, which ``type_categorizer`` maps to ``error`` or ``warning``.
    Without a categorizer every message is an error.

    Raises:
        UnexpectedOutputError: If any non-blank line does not match.
    """
    pattern = re.compile(regex) if isinstance(regex, str) else regex
    messages = []
    unparseable = []

    for output_line in output_lines:
        if not output_line.strip():
            continue
        match = pattern.match(output_line)
        if not match:
            unparseable.append(output_line)
            continue

        groups = match.groupdict()
        line = groups.get("line")
        message_type = type_categorizer(groups.get("type")) if type_categorizer else ERROR
        messages.append(
            HookMessage(
                type=message_type,
                file=groups.get("file"),
                line=int(line) if line else None,
                content=output_line.rstrip(),
            )
        )

    if unparseable:
        raise UnexpectedOutputError(
            "Unexpected output: unable to determine line number or type of "
            "error/warning for output:\n" + "\n".join(unparseable)
        )

    return messages


def process_messages(
    messages: Iterable[HookMessage],
    modified_lines_in_file: Callable[[str], set[int]],
    unmodified_lines: str = "ignore",
) -> HookOutcome:
    """Decide an outcome from messages, considering only modified lines.

    Messages on lines the change did not touch are dropped
    (``ignore``), reported as warnings (``warn``) or kept as they are
    (``report``). Messages without a file or line always count.
    """
    relevant: list[HookMessage] = []
    unmodified: list[HookMessage] = []

    for message in messages:
        if message.file is None or message.line is None:
            relevant.append(message)
        elif message.line in modified_lines_in_file(message.file):
            relevant.append(message)
        else:
            unmodified.append(message)

    if unmodified:
        logger.debug("%d message(s) on unmodified lines", len(unmodified))

    if unmodified_lines == "report":
        relevant.extend(unmodified)
        unmodified = []
    elif unmodified_lines != "warn":
        unmodified = []

    reported = relevant + unmodified
    if not reported:
        return HookOutcome(HookStatus.PASS)

    message = "\n".join(m.content for m in reported)
    if any(m.type == ERROR for m in relevant):
        return HookOutcome(HookStatus.FAIL, message)
    return HookOutcome(HookStatus.WARN, message)
