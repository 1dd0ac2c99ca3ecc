"""State-vector backend: kernels and the execution engine."""

from .base import Backend
from .engine import StateVectorBackend, execute
from .statevector import (
    apply_gate,
    apply_matrix,
    apply_multi_qubit_gate,
    measure_probs,
    zero_state,
)

__all__ = [
    "Backend",
    "StateVectorBackend",
    "execute",
    "zero_state",
    "apply_gate",
    "apply_multi_qubit_gate",
    "apply_matrix",
    "measure_probs",
]
