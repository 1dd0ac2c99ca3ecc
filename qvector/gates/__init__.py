"""Gate matrices and the gate catalog."""

from .catalog import (
    GATE_SPECS,
    MATRIX_BUILDERS,
    GateKind,
    GateSpec,
    build_matrix,
    gate_spec,
    supported_gates,
)
from .standard import (
    CNOT,
    RX,
    RY,
    RZ,
    SWAP,
    H,
    I,
    P,
    S,
    T,
    X,
    Y,
    Z,
    controlled,
    is_unitary,
)

__all__ = [
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
    "GateKind",
    "GateSpec",
    "GATE_SPECS",
    "MATRIX_BUILDERS",
    "build_matrix",
    "gate_spec",
    "supported_gates",
]
