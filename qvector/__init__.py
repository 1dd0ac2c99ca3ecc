"""qvector - a PyTorch-native state-vector quantum circuit simulator."""

__version__ = "0.1.0"

from .amplitude import Amplitude

# Backend
from .backend import (
    Backend,
    StateVectorBackend,
    apply_gate,
    apply_matrix,
    apply_multi_qubit_gate,
    execute,
    measure_probs,
    zero_state,
)

# Circuit construction
from .circuit import Instruction, QuantumCircuit
from .core import Device, default_device, device

# Diagnostics
from .diagnostics import (
    assert_normalized,
    bloch_vector,
    debug_context,
    fidelity,
    is_debug_enabled,
    set_debug_enabled,
    state_norm,
)
from .errors import (
    InvalidCircuitError,
    InvalidInstructionError,
    QVectorError,
    UnsupportedGateError,
)

# Gates
from .gates import (
    CNOT,
    RX,
    RY,
    RZ,
    SWAP,
    GateKind,
    H,
    I,
    P,
    S,
    T,
    X,
    Y,
    Z,
    build_matrix,
    controlled,
    is_unitary,
)
from .state import StateVector

# Formatting
from .viz import format_amplitude, format_statevector, print_statevector

__all__ = [
    # Version
    "__version__",
    # Values
    "Amplitude",
    "StateVector",
    # Core
    "Device",
    "device",
    "default_device",
    # Errors
    "QVectorError",
    "InvalidCircuitError",
    "InvalidInstructionError",
    "UnsupportedGateError",
    # Gates
    "GateKind",
    "I",
    "X",
    "Y",
    "Z",
    "H",
    "S",
    "T",
    "P",
    "RX",
    "RY",
    "RZ",
    "CNOT",
    "SWAP",
    "controlled",
    "is_unitary",
    "build_matrix",
    # Circuit
    "Instruction",
    "QuantumCircuit",
    # Backend
    "Backend",
    "StateVectorBackend",
    "execute",
    "zero_state",
    "apply_gate",
    "apply_multi_qubit_gate",
    "apply_matrix",
    "measure_probs",
    # Diagnostics
    "state_norm",
    "assert_normalized",
    "fidelity",
    "bloch_vector",
    "is_debug_enabled",
    "set_debug_enabled",
    "debug_context",
    # Formatting
    "format_amplitude",
    "format_statevector",
    "print_statevector",
]
