"""Instructions: one gate applied to specific qubits."""

from __future__ import annotations

import math
import operator
from dataclasses import dataclass, replace
from typing import Iterable, Optional, Sequence, Tuple

from qvector.errors import InvalidInstructionError
from qvector.gates.catalog import GateKind, gate_spec


@dataclass(frozen=True)
class Instruction:
    """
    A single gate application in a quantum circuit.

    Instructions are immutable values. Their shape is checked on
    construction (arity, parameter count, distinct non-negative qubits);
    whether the qubits exist is checked when the instruction is appended to
    a circuit, since only the circuit knows its size.

    Attributes
    ----------
    gate:
        Which gate of the catalog is applied.
    qubits:
        Target qubit indices (0-based). For multi-qubit gates the first
        qubit is the most significant bit of the gate's local basis, so for
        CNOT and CU it is the control.
    params:
        Float parameters (rotation angles, phases). Empty for fixed gates.
    body:
        Nested instructions on local qubits. CU holds the single-qubit gate
        it controls; CUSTOM holds the sub-circuit it stands for.
    label:
        Display name of a CUSTOM gate.
    """

    gate: GateKind
    qubits: Tuple[int, ...]
    params: Tuple[float, ...] = ()
    body: Tuple["Instruction", ...] = ()
    label: Optional[str] = None

    def __post_init__(self) -> None:
        gate = self.gate if isinstance(self.gate, GateKind) else GateKind.from_name(self.gate)
        object.__setattr__(self, "gate", gate)
        object.__setattr__(self, "qubits", _as_qubits(self.qubits))
        object.__setattr__(self, "params", _as_params(gate, self.params))
        object.__setattr__(self, "body", tuple(self.body))
        self._validate()

    def _validate(self) -> None:
        spec = gate_spec(self.gate)
        if len(set(self.qubits)) != len(self.qubits):
            raise InvalidInstructionError(
                f"Gate {self.name} acts on repeated qubits {self.qubits}."
            )
        if spec.arity is not None and len(self.qubits) != spec.arity:
            raise InvalidInstructionError(
                f"Gate {self.name} acts on {spec.arity} qubit(s); "
                f"got {len(self.qubits)}: {self.qubits}."
            )
        if len(self.params) != spec.n_params:
            raise InvalidInstructionError(
                f"Gate {self.name} requires exactly {spec.n_params} parameter(s); "
                f"got {len(self.params)}."
            )

        for op in self.body:
            if not isinstance(op, Instruction):
                raise InvalidInstructionError(
                    f"Gate body entries must be Instruction, got {type(op).__name__}."
                )

        if self.gate is GateKind.CONTROLLED:
            if len(self.body) != 1 or len(self.body[0].qubits) != 1:
                raise InvalidInstructionError(
                    "A controlled gate needs exactly one single-qubit body instruction."
                )
        elif self.gate is GateKind.CUSTOM:
            width = len(self.qubits)
            for op in self.body:
                if max(op.qubits) >= width:
                    raise InvalidInstructionError(
                        f"Custom gate {self.name!r} body uses qubit {max(op.qubits)}, "
                        f"but the gate only has {width} input qubit(s)."
                    )
        elif self.body:
            raise InvalidInstructionError(f"Gate {self.name} does not take a body.")

    @property
    def name(self) -> str:
        """Display name: the custom label if any, else the gate name."""
        if self.label:
            return self.label
        return self.gate.value

    @property
    def arity(self) -> int:
        return len(self.qubits)

    def inverse(self) -> "Instruction":
        """
        Return the instruction that undoes this one.

        Self-inverse gates return themselves. S, T and P become phase
        gates with the opposite phase, rotations negate their angle, CU
        inverts its body, and CUSTOM reverses and inverts its body.
        """
        kind = self.gate
        if gate_spec(kind).self_inverse:
            return self
        if kind is GateKind.S:
            return Instruction.phase(self.qubits[0], -math.pi / 2.0)
        if kind is GateKind.T:
            return Instruction.phase(self.qubits[0], -math.pi / 4.0)
        if kind in (GateKind.PHASE, GateKind.RX, GateKind.RY, GateKind.RZ):
            return replace(self, params=(-self.params[0],))
        if kind is GateKind.CONTROLLED:
            return replace(self, body=(self.body[0].inverse(),))
        if kind is GateKind.CUSTOM:
            label = self.label[:-3] if self.label and self.label.endswith("_dg") else f"{self.name}_dg"
            return replace(
                self,
                body=tuple(op.inverse() for op in reversed(self.body)),
                label=label,
            )
        raise InvalidInstructionError(f"Gate {self.name} has no known inverse.")

    def __str__(self) -> str:
        targets = ", ".join(str(q) for q in self.qubits)
        if self.params:
            args = ", ".join(f"{p:g}" for p in self.params)
            return f"{self.name}({args}) q[{targets}]"
        return f"{self.name} q[{targets}]"

    # Constructors, one per catalog entry.

    @classmethod
    def from_name(
        cls,
        name: str,
        qubits: Sequence[int],
        params: Optional[Sequence[float]] = None,
    ) -> "Instruction":
        """
        Build an instruction from a gate name such as "H", "CNOT" or "RX".

        Raises
        ------
        UnsupportedGateError
            If the name is unknown.
        InvalidInstructionError
            If the gate needs a body (CU, CUSTOM) or the shape is wrong.
        """
        kind = GateKind.from_name(name)
        if kind in (GateKind.CONTROLLED, GateKind.CUSTOM):
            raise InvalidInstructionError(
                f"Gate {kind.value} cannot be built from a name; use "
                "Instruction.controlled(...) or Instruction.custom(...)."
            )
        return cls(kind, tuple(qubits), tuple(params) if params is not None else ())

    @classmethod
    def identity(cls, qubit: int) -> "Instruction":
        return cls(GateKind.IDENTITY, (qubit,))

    @classmethod
    def pauli_x(cls, qubit: int) -> "Instruction":
        return cls(GateKind.PAULI_X, (qubit,))

    @classmethod
    def pauli_y(cls, qubit: int) -> "Instruction":
        return cls(GateKind.PAULI_Y, (qubit,))

    @classmethod
    def pauli_z(cls, qubit: int) -> "Instruction":
        return cls(GateKind.PAULI_Z, (qubit,))

    @classmethod
    def hadamard(cls, qubit: int) -> "Instruction":
        return cls(GateKind.HADAMARD, (qubit,))

    @classmethod
    def s(cls, qubit: int) -> "Instruction":
        return cls(GateKind.S, (qubit,))

    @classmethod
    def t(cls, qubit: int) -> "Instruction":
        return cls(GateKind.T, (qubit,))

    @classmethod
    def phase(cls, qubit: int, phase: float) -> "Instruction":
        return cls(GateKind.PHASE, (qubit,), (phase,))

    @classmethod
    def rx(cls, qubit: int, theta: float) -> "Instruction":
        return cls(GateKind.RX, (qubit,), (theta,))

    @classmethod
    def ry(cls, qubit: int, theta: float) -> "Instruction":
        return cls(GateKind.RY, (qubit,), (theta,))

    @classmethod
    def rz(cls, qubit: int, theta: float) -> "Instruction":
        return cls(GateKind.RZ, (qubit,), (theta,))

    @classmethod
    def cnot(cls, control: int, target: int) -> "Instruction":
        return cls(GateKind.CNOT, (control, target))

    @classmethod
    def swap(cls, qubit_a: int, qubit_b: int) -> "Instruction":
        return cls(GateKind.SWAP, (qubit_a, qubit_b))

    @classmethod
    def controlled(cls, gate: "Instruction", control: int, target: int) -> "Instruction":
        """
        Apply the single-qubit ``gate`` to ``target`` when ``control`` is |1⟩.

        The qubit stored in ``gate`` is ignored; only its kind and
        parameters matter.
        """
        if not isinstance(gate, Instruction) or len(gate.qubits) != 1:
            raise InvalidInstructionError(
                "Instruction.controlled expects a single-qubit Instruction."
            )
        return cls(GateKind.CONTROLLED, (control, target), body=(replace(gate, qubits=(0,)),))

    @classmethod
    def custom(
        cls,
        name: str,
        body: Iterable["Instruction"],
        qubits: Sequence[int],
    ) -> "Instruction":
        """
        A named gate defined by a sub-circuit.

        ``body`` addresses local qubits 0..len(qubits)-1; local qubit j is
        wired to ``qubits[j]`` of the enclosing circuit.
        """
        if not name:
            raise InvalidInstructionError("A custom gate needs a non-empty name.")
        return cls(GateKind.CUSTOM, tuple(qubits), body=tuple(body), label=str(name))


def _as_qubits(qubits: Iterable[int]) -> Tuple[int, ...]:
    try:
        q_tuple = tuple(operator.index(q) for q in qubits)
    except TypeError as exc:
        raise InvalidInstructionError(f"Qubit indices must be integers: {exc}") from exc
    if not q_tuple:
        raise InvalidInstructionError("An instruction must act on at least one qubit.")
    for q in q_tuple:
        if q < 0:
            raise InvalidInstructionError(f"Qubit index {q} is negative.")
    return q_tuple


def _as_params(gate: GateKind, params: Iterable[float]) -> Tuple[float, ...]:
    try:
        p_tuple = tuple(float(p) for p in params)
    except (TypeError, ValueError) as exc:
        raise InvalidInstructionError(f"Gate {gate.value} parameters must be floats: {exc}") from exc
    for p in p_tuple:
        if not math.isfinite(p):
            raise InvalidInstructionError(f"Gate {gate.value} parameter {p} is not finite.")
    return p_tuple


__all__ = ["Instruction"]
