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

"""Version value type for gating behaviour on installed tool versions.

Lets callers write ``if git_version() >= "2.13.0":`` without converting
the right-hand side first.
"""

from __future__ import annotations

import re

from hookwright.errors import HookwrightError

_VALID_VERSION = re.compile(r"^[0-9A-Za-z]+(?:[.+-][0-9A-Za-z]+)*$")
_SEGMENT = re.compile(r"\d+|[A-Za-z]+")


class ParseError(HookwrightError, ValueError):
    """Raised when a version string cannot be parsed."""


def _parse(text: str) -> tuple[int | str, ...]:
    """Split a version string into numeric and alphabetic segments.

    ``"1.0rc1"`` becomes ``(1, 0, "rc", 1)``. Dashes and plus signs are
    treated like dots.
    """
    if not isinstance(text, str):
        raise ParseError(f"Version must be a string, got {type(text).__name__}")

    cleaned = text.strip()
    if cleaned[:1] in ("v", "V") and cleaned[1:2].isdigit():
        cleaned = cleaned[1:]

    if not cleaned or not _VALID_VERSION.match(cleaned):
        raise ParseError(f"Malformed version number string: {text!r}")

    segments: list[int | str] = []
    for part in re.split(r"[.+-]", cleaned):
        for token in _SEGMENT.findall(part):
            segments.append(int(token) if token.isdigit() else token)
    return tuple(segments)


def _compare_segment(a: int | str, b: int | str) -> int:
    if isinstance(a, int) and isinstance(b, int):
        return (a > b) - (a < b)
    if isinstance(a, str) and isinstance(b, str):
        return (a > b) - (a < b)
    # A string segment marks a pre-release, which sorts before any number
    return -1 if isinstance(a, str) else 1


class Version:
    """An immutable, semantically ordered version number.

    Supports ``<, <=, >, >=, ==, !=`` against another ``Version`` or a
    plain string, which is parsed before comparing. Shorter versions are
    padded with zeros, so ``Version("1.2") == "1.2.0"``.
    """

    __slots__ = ("_text", "_segments")

    def __init__(self, text: str):
        segments = _parse(text)
        object.__setattr__(self, "_text", text.strip())
        object.__setattr__(self, "_segments", segments)

    def __setattr__(self, name, value):
        raise AttributeError("Version is immutable")

    @classmethod
    def parse_or_none(cls, text: str | None) -> Version | None:
        """Return a Version, or None if the text is missing or malformed."""
        if text is None:
            return None
        try:
            return cls(text)
        except ParseError:
            return None

    @property
    def segments(self) -> tuple[int | str, ...]:
        return self._segments

    def _coerce(self, other: object) -> Version | None:
        if isinstance(other, Version):
            return other
        if isinstance(other, str):
            return Version(other)
        return None

    def _compare(self, other: Version) -> int:
        length = max(len(self._segments), len(other._segments))
        left = self._segments + (0,) * (length - len(self._segments))
        right = other._segments + (0,) * (length - len(other._segments))
        for a, b in zip(left, right):
            result = _compare_segment(a, b)
            if result:
                return result
        return 0

    def __eq__(self, other: object) -> bool:
        coerced = self._coerce(other)
        if coerced is None:
            return NotImplemented
        return self._compare(coerced) == 0

    def __ne__(self, other: object) -> bool:
        coerced = self._coerce(other)
        if coerced is None:
            return NotImplemented
        return self._compare(coerced) != 0

    def __lt__(self, other: object) -> bool:
        coerced = self._coerce(other)
        if coerced is None:
            return NotImplemented
        return self._compare(coerced) < 0

    def __le__(self, other: object) -> bool:
        coerced = self._coerce(other)
        if coerced is None:
            return NotImplemented
        return self._compare(coerced) <= 0

    def __gt__(self, other: object) -> bool:
        coerced = self._coerce(other)
        if coerced is None:
            return NotImplemented
        return self._compare(coerced) > 0

    def __ge__(self, other: object) -> bool:
        coerced = self._coerce(other)
        if coerced is None:
            return NotImplemented
        return self._compare(coerced) >= 0

    def __hash__(self) -> int:
        segments = list(self._segments)
        while segments and segments[-1] == 0:
            segments.pop()
        return hash(tuple(segments))

    def __str__(self) -> str:
        return self._text

    def __repr__(self) -> str:
        return f"Version({self._text!r})"
