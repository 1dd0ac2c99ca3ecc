"""The closed catalog of gates the simulator understands.

Each :class:`GateKind` has a fixed arity and parameter count (see
:data:`GATE_SPECS`) and a matrix builder registered in
:data:`MATRIX_BUILDERS`. :func:`build_matrix` is the single entry point the
engine uses to turn an instruction into its unitary.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Callable, Dict, Optional, Tuple

import torch

from qvector.errors import UnsupportedGateError
from qvector.gates import standard as stdgates

if TYPE_CHECKING:
    from qvector.circuit.instruction import Instruction


class GateKind(str, Enum):
    """Every gate variant an :class:`~qvector.circuit.Instruction` may carry."""

    IDENTITY = "I"
    PAULI_X = "X"
    PAULI_Y = "Y"
    PAULI_Z = "Z"
    HADAMARD = "H"
    S = "S"
    T = "T"
    PHASE = "P"
    RX = "RX"
    RY = "RY"
    RZ = "RZ"
    CNOT = "CNOT"
    SWAP = "SWAP"
    CONTROLLED = "CU"
    CUSTOM = "CUSTOM"

    @classmethod
    def from_name(cls, name: str) -> "GateKind":
        """
        Resolve a gate name (case-insensitive, aliases allowed).

        Raises
        ------
        UnsupportedGateError
            If the name does not denote a known gate.
        """
        key = str(name).strip().upper()
        try:
            return cls(key)
        except ValueError:
            pass
        if key in _ALIASES:
            return _ALIASES[key]
        raise UnsupportedGateError(
            f"Unsupported gate name {name!r}. "
            f"Supported gates: {', '.join(k.value for k in cls)}."
        )

    def __str__(self) -> str:
        return self.value


_ALIASES: Dict[str, GateKind] = {
    "ID": GateKind.IDENTITY,
    "IDENTITY": GateKind.IDENTITY,
    "PAULIX": GateKind.PAULI_X,
    "PAULI_X": GateKind.PAULI_X,
    "NOT": GateKind.PAULI_X,
    "PAULIY": GateKind.PAULI_Y,
    "PAULI_Y": GateKind.PAULI_Y,
    "PAULIZ": GateKind.PAULI_Z,
    "PAULI_Z": GateKind.PAULI_Z,
    "HADAMARD": GateKind.HADAMARD,
    "PHASE": GateKind.PHASE,
    "CX": GateKind.CNOT,
    "CONTROLLED": GateKind.CONTROLLED,
}


@dataclass(frozen=True)
class GateSpec:
    """
    Static shape of a gate kind.

    Attributes
    ----------
    kind:
        The gate kind described.
    arity:
        Number of qubits acted on; None for CUSTOM, whose arity comes from
        its body.
    n_params:
        Number of float parameters the gate takes.
    self_inverse:
        Whether the gate is its own inverse.
    """

    kind: GateKind
    arity: Optional[int]
    n_params: int = 0
    self_inverse: bool = False


GATE_SPECS: Dict[GateKind, GateSpec] = {
    GateKind.IDENTITY: GateSpec(GateKind.IDENTITY, 1, self_inverse=True),
    GateKind.PAULI_X: GateSpec(GateKind.PAULI_X, 1, self_inverse=True),
    GateKind.PAULI_Y: GateSpec(GateKind.PAULI_Y, 1, self_inverse=True),
    GateKind.PAULI_Z: GateSpec(GateKind.PAULI_Z, 1, self_inverse=True),
    GateKind.HADAMARD: GateSpec(GateKind.HADAMARD, 1, self_inverse=True),
    GateKind.S: GateSpec(GateKind.S, 1),
    GateKind.T: GateSpec(GateKind.T, 1),
    GateKind.PHASE: GateSpec(GateKind.PHASE, 1, n_params=1),
    GateKind.RX: GateSpec(GateKind.RX, 1, n_params=1),
    GateKind.RY: GateSpec(GateKind.RY, 1, n_params=1),
    GateKind.RZ: GateSpec(GateKind.RZ, 1, n_params=1),
    GateKind.CNOT: GateSpec(GateKind.CNOT, 2, self_inverse=True),
    GateKind.SWAP: GateSpec(GateKind.SWAP, 2, self_inverse=True),
    GateKind.CONTROLLED: GateSpec(GateKind.CONTROLLED, 2),
    GateKind.CUSTOM: GateSpec(GateKind.CUSTOM, None),
}


def gate_spec(kind: GateKind) -> GateSpec:
    """Return the static spec for ``kind``."""
    try:
        return GATE_SPECS[kind]
    except KeyError:
        raise UnsupportedGateError(f"No gate spec registered for {kind!r}.") from None


MatrixBuilder = Callable[["Instruction", torch.dtype, torch.device], torch.Tensor]


def _fixed(fn: Callable[..., torch.Tensor]) -> MatrixBuilder:
    def build(instruction: "Instruction", dtype: torch.dtype, device: torch.device) -> torch.Tensor:
        return fn(dtype=dtype, device=device)

    return build


def _parametric(fn: Callable[..., torch.Tensor]) -> MatrixBuilder:
    def build(instruction: "Instruction", dtype: torch.dtype, device: torch.device) -> torch.Tensor:
        return fn(instruction.params[0], dtype=dtype, device=device)

    return build


def _controlled_matrix(
    instruction: "Instruction", dtype: torch.dtype, device: torch.device
) -> torch.Tensor:
    base = build_matrix(instruction.body[0], dtype=dtype, device=device)
    return stdgates.controlled(base)


def _custom_matrix(
    instruction: "Instruction", dtype: torch.dtype, device: torch.device
) -> torch.Tensor:
    """
    Unitary of a custom gate, built by pushing every local basis state
    through the body at once (one batch row per basis state).
    """
    # Import here to avoid circular imports
    from qvector.backend.statevector import apply_matrix

    k = len(instruction.qubits)
    dim = 2**k
    columns = torch.eye(dim, dtype=dtype, device=device)
    for op in instruction.body:
        # Local qubit 0 is the most significant bit of the gate's basis.
        targets = tuple(k - 1 - q for q in op.qubits)
        columns = apply_matrix(
            columns, build_matrix(op, dtype=dtype, device=device), targets, n_qubits=k
        )
    # Row j now holds U|j>, i.e. column j of U.
    return columns.transpose(0, 1).contiguous()


MATRIX_BUILDERS: Dict[GateKind, MatrixBuilder] = {
    GateKind.IDENTITY: _fixed(stdgates.I),
    GateKind.PAULI_X: _fixed(stdgates.X),
    GateKind.PAULI_Y: _fixed(stdgates.Y),
    GateKind.PAULI_Z: _fixed(stdgates.Z),
    GateKind.HADAMARD: _fixed(stdgates.H),
    GateKind.S: _fixed(stdgates.S),
    GateKind.T: _fixed(stdgates.T),
    GateKind.PHASE: _parametric(stdgates.P),
    GateKind.RX: _parametric(stdgates.RX),
    GateKind.RY: _parametric(stdgates.RY),
    GateKind.RZ: _parametric(stdgates.RZ),
    GateKind.CNOT: _fixed(stdgates.CNOT),
    GateKind.SWAP: _fixed(stdgates.SWAP),
    GateKind.CONTROLLED: _controlled_matrix,
    GateKind.CUSTOM: _custom_matrix,
}


def build_matrix(
    instruction: "Instruction",
    dtype: torch.dtype = torch.complex128,
    device: torch.device | None = None,
) -> torch.Tensor:
    """
    Produce the unitary for an instruction.

    Parameters
    ----------
    instruction:
        The instruction whose gate matrix is wanted.
    dtype:
        Complex dtype of the result.
    device:
        Torch device of the result. Defaults to CPU.

    Returns
    -------
    torch.Tensor
        Matrix of shape (2**k, 2**k) where k = len(instruction.qubits), in
        the local basis |q_first ... q_last>.

    Raises
    ------
    UnsupportedGateError
        If no builder is registered for the instruction's gate kind.
    """
    if device is None:
        device = torch.device("cpu")
    builder = MATRIX_BUILDERS.get(instruction.gate)
    if builder is None:
        raise UnsupportedGateError(
            f"Gate {instruction.gate!s} has no matrix definition in the catalog."
        )
    return builder(instruction, dtype, device)


def supported_gates() -> Tuple[GateKind, ...]:
    """Return the gate kinds that currently have a matrix builder."""
    return tuple(kind for kind in GateKind if kind in MATRIX_BUILDERS)


__all__ = [
    "GateKind",
    "GateSpec",
    "GATE_SPECS",
    "MATRIX_BUILDERS",
    "build_matrix",
    "gate_spec",
    "supported_gates",
]
