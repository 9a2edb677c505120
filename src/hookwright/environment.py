"""Temporary environment variable overrides."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator, Mapping
from contextlib import contextmanager

logger = logging.getLogger(__name__)


@contextmanager
def with_environment(overrides: Mapping[str, object | None]) -> Iterator[None]:
    """Apply environment overrides for the duration of a ``with`` block.

    A value of ``None`` unsets the variable. Every variable is restored to
    its previous value (or removed, if it was unset) when the block exits,
    including when it raises.

    This mutates the process environment, so callers on different threads
    must not use it concurrently.
    """
    previous: dict[str, str | None] = {}
    logger.debug("Overriding environment: %s", ", ".join(map(str, overrides)))
    try:
        for name, value in overrides.items():
            name = str(name)
            if name not in previous:
                previous[name] = os.environ.get(name)
            if value is None:
                os.environ.pop(name, None)
            else:
                os.environ[name] = str(value)
        yield
    finally:
        for name, value in previous.items():
            if value is None:
                os.environ.pop(name, None)
            else:
                os.environ[name] = value
