"""Diagnostics and debugging utilities for qvector."""

from .core import (
    assert_normalized,
    bloch_vector,
    fidelity,
    normalization_tolerance,
    state_norm,
)
from .debug_mode import (
    debug_context,
    is_debug_enabled,
    set_debug_enabled,
)

__all__ = [
    "state_norm",
    "assert_normalized",
    "normalization_tolerance",
    "fidelity",
    "bloch_vector",
    "is_debug_enabled",
    "set_debug_enabled",
    "debug_context",
]
