"""The quantum circuit: a fixed qubit count and an ordered instruction list."""

from __future__ import annotations

import operator
from typing import TYPE_CHECKING, Dict, Iterator, List, Optional, Sequence, Tuple

import torch

from qvector.circuit.instruction import Instruction
from qvector.errors import InvalidCircuitError, InvalidInstructionError
from qvector.gates.catalog import GateKind
from qvector.logging import get_logger

if TYPE_CHECKING:
    from qvector.core.device import Device
    from qvector.state import StateVector

logger = get_logger(__name__)


class QuantumCircuit:
    """
    An ordered list of instructions on ``n_qubits`` qubits.

    Circuits are built incrementally in execution order and only ever
    grow. Qubit indices are checked when an instruction is appended, so a
    circuit that was built without errors always executes.
    """

    def __init__(self, n_qubits: int) -> None:
        """
        Create an empty circuit.

        Raises
        ------
        InvalidCircuitError
            If ``n_qubits`` is not an integer >= 1.
        """
        try:
            count = operator.index(n_qubits)
        except TypeError:
            raise InvalidCircuitError(
                f"QuantumCircuit requires an integer qubit count, got {n_qubits!r}."
            ) from None
        if count <= 0:
            raise InvalidCircuitError(
                f"QuantumCircuit requires n_qubits >= 1, got {count}."
            )

        self._n_qubits = count
        self._ops: List[Instruction] = []

    @property
    def n_qubits(self) -> int:
        """Return the number of qubits in this circuit."""
        return self._n_qubits

    @property
    def ops(self) -> Tuple[Instruction, ...]:
        """Return a read-only tuple of all instructions."""
        return tuple(self._ops)

    instructions = ops

    def add(self, instruction: Instruction) -> "QuantumCircuit":
        """
        Append an instruction.

        Returns the circuit so calls can be chained.

        Raises
        ------
        InvalidInstructionError
            If ``instruction`` is not an Instruction or targets a qubit
            index >= n_qubits. The circuit is left unchanged.
        """
        if not isinstance(instruction, Instruction):
            raise InvalidInstructionError(
                f"QuantumCircuit.add expects an Instruction, got {type(instruction).__name__}."
            )
        for q in instruction.qubits:
            if q >= self._n_qubits:
                raise InvalidInstructionError(
                    f"Qubit index {q} is out of range for this circuit "
                    f"(n_qubits={self._n_qubits})."
                )

        self._ops.append(instruction)
        logger.debug("Appended %s (%d instruction(s) total)", instruction, len(self._ops))
        return self

    def add_gate(
        self,
        name: str,
        qubits: Sequence[int],
        params: Optional[Sequence[float]] = None,
    ) -> "QuantumCircuit":
        """
        Append a gate given by name.

        Parameters
        ----------
        name:
            A gate name such as "X", "H", "CNOT", "SWAP", "P", "RX", "RY"
            or "RZ" (case-insensitive; aliases like "CX" are accepted).
        qubits:
            Target qubit indices (0-based). For CNOT the first is the
            control, the second the target.
        params:
            Numeric parameters (rotation angles, phase).

        Raises
        ------
        UnsupportedGateError
            If the name is unknown.
        InvalidInstructionError
            If the qubits or parameters do not fit the gate.
        """
        return self.add(Instruction.from_name(name, qubits, params))

    def extend(self, instructions: Sequence[Instruction]) -> "QuantumCircuit":
        """
        Append several instructions, all or nothing.

        Every instruction is checked before any of them is appended.
        """
        staged = QuantumCircuit(self._n_qubits)
        for instruction in instructions:
            staged.add(instruction)
        self._ops.extend(staged._ops)
        return self

    def compose(self, other: "QuantumCircuit") -> "QuantumCircuit":
        """Append every instruction of ``other`` (which may be narrower)."""
        if other.n_qubits > self._n_qubits:
            raise InvalidInstructionError(
                f"Cannot compose a {other.n_qubits}-qubit circuit into a "
                f"{self._n_qubits}-qubit one."
            )
        return self.extend(other.ops)

    def copy(self) -> "QuantumCircuit":
        """Return an independent copy of this circuit."""
        new = QuantumCircuit(self._n_qubits)
        new._ops.extend(self._ops)
        return new

    def inverse(self) -> "QuantumCircuit":
        """Return the circuit that undoes this one (reversed, each gate inverted)."""
        new = QuantumCircuit(self._n_qubits)
        new._ops.extend(op.inverse() for op in reversed(self._ops))
        return new

    def to_instruction(
        self,
        name: str,
        qubits: Optional[Sequence[int]] = None,
    ) -> Instruction:
        """
        Package this circuit as a CUSTOM gate.

        Parameters
        ----------
        name:
            Label of the custom gate.
        qubits:
            Where the gate's inputs are wired in the enclosing circuit;
            local qubit j goes to ``qubits[j]``. Defaults to 0..n_qubits-1.
        """
        if qubits is None:
            qubits = range(self._n_qubits)
        qubits = tuple(qubits)
        if len(qubits) != self._n_qubits:
            raise InvalidInstructionError(
                f"Custom gate {name!r} has {self._n_qubits} input qubit(s); "
                f"got {len(qubits)} target(s)."
            )
        return Instruction.custom(name, self._ops, qubits)

    def __len__(self) -> int:
        """Return the number of instructions in this circuit."""
        return len(self._ops)

    def __iter__(self) -> Iterator[Instruction]:
        return iter(tuple(self._ops))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, QuantumCircuit):
            return NotImplemented
        return self._n_qubits == other._n_qubits and self._ops == other._ops

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"QuantumCircuit(n_qubits={self._n_qubits}, instructions={len(self._ops)})"

    def num_gates(self) -> int:
        """Return the number of instructions in this circuit."""
        return len(self._ops)

    def gate_counts(self) -> Dict[str, int]:
        """Return a dictionary mapping gate names to their counts."""
        counts: Dict[str, int] = {}
        for op in self._ops:
            counts[op.name] = counts.get(op.name, 0) + 1
        return counts

    def depth(self) -> int:
        """
        Number of sequential layers if gates on disjoint qubits share a layer.

        This is only a description of the circuit; execution always applies
        instructions one at a time in order.
        """
        if not self._ops:
            return 0

        qubit_layer = [0] * self._n_qubits
        max_layer = 0

        for op in self._ops:
            layer = max(qubit_layer[q] for q in op.qubits) + 1
            for q in op.qubits:
                qubit_layer[q] = layer
            max_layer = max(max_layer, layer)

        return max_layer

    def simulate_state(
        self,
        device: "Device | str | torch.device | None" = None,
        dtype: Optional[torch.dtype] = None,
    ) -> "StateVector":
        """
        Execute this circuit from |0...0⟩ on the state-vector backend.

        Returns
        -------
        StateVector
            The final state, of length 2**n_qubits.
        """
        # Import here to avoid circular imports
        from qvector.backend.engine import StateVectorBackend

        return StateVectorBackend(device=device, dtype=dtype).execute(self)

    def to_text_diagram(self) -> str:
        """
        Return a simple ASCII diagram of the circuit.

        Each qubit is a horizontal line and every instruction gets its own
        column. Single-qubit gates show their name; CNOT uses '●' for the
        control and '⊕' for the target, SWAP uses '×' on both wires, CU
        shows '●' and the controlled gate, and custom gates show '#'.
        """
        wire_segments: List[List[str]] = [[] for _ in range(self._n_qubits)]

        for op in self._ops:
            for q in range(self._n_qubits):
                wire_segments[q].append("───")

            if op.gate is GateKind.CNOT:
                control, target = op.qubits
                wire_segments[control][-1] = "─●─"
                wire_segments[target][-1] = "─⊕─"
            elif op.gate is GateKind.SWAP:
                for q in op.qubits:
                    wire_segments[q][-1] = "─×─"
            elif op.gate is GateKind.CONTROLLED:
                control, target = op.qubits
                wire_segments[control][-1] = "─●─"
                wire_segments[target][-1] = f"─{op.body[0].name[0]}─"
            elif op.gate is GateKind.CUSTOM:
                for q in op.qubits:
                    wire_segments[q][-1] = "─#─"
            else:
                # Keep a fixed width: first character of the name only.
                wire_segments[op.qubits[0]][-1] = f"─{op.name[0]}─"

        return "\n".join(
            f"q{q}: " + "".join(wire_segments[q]) for q in range(self._n_qubits)
        )


__all__ = ["QuantumCircuit"]
