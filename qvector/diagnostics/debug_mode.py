"""Debug mode management for qvector.

When debug mode is on, every gate application re-checks that the state
still has unit norm.
"""

from __future__ import annotations

import os
from contextlib import contextmanager
from typing import Iterator

_DEBUG_ENV_VAR = "QVECTOR_DEBUG"
_debug_enabled: bool = os.getenv(_DEBUG_ENV_VAR, "0").lower() in (
    "1",
    "true",
    "yes",
    "on",
)


def is_debug_enabled() -> bool:
    """
    Return whether debug mode is currently enabled.

    Debug mode can be toggled via set_debug_enabled(...) or the
    QVECTOR_DEBUG environment variable.
    """
    return _debug_enabled


def set_debug_enabled(enabled: bool) -> None:
    """Globally enable or disable debug mode."""
    global _debug_enabled
    _debug_enabled = bool(enabled)


@contextmanager
def debug_context(enabled: bool = True) -> Iterator[None]:
    """
    Context manager to temporarily enable or disable debug mode.

    Example
    -------
    >>> with debug_context(True):
    ...     state = circuit.simulate_state()
    """
    global _debug_enabled
    prev = _debug_enabled
    _debug_enabled = bool(enabled)
    try:
        yield
    finally:
        _debug_enabled = prev
