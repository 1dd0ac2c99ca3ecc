"""The state-vector execution engine."""

from __future__ import annotations

import time
from typing import List, Optional, Tuple

import torch

from qvector.backend.base import Backend
from qvector.backend.statevector import apply_matrix, zero_state
from qvector.circuit import Instruction, QuantumCircuit
from qvector.core.device import Device, resolve_device
from qvector.gates.catalog import build_matrix
from qvector.logging import get_logger
from qvector.state import StateVector

logger = get_logger(__name__)


class StateVectorBackend(Backend):
    """
    Exact simulation by dense state-vector evolution.

    ``execute`` starts from |0...0⟩ and applies every instruction's unitary
    in circuit order. Each call allocates its own amplitude buffer, so one
    backend may be shared between threads.

    Parameters
    ----------
    device:
        Where the amplitude buffer lives. Defaults to ``default_device()``.
    dtype:
        Complex dtype of the buffer. Defaults to the device's dtype
        (complex128 unless configured otherwise).
    """

    def __init__(
        self,
        device: Device | str | torch.device | None = None,
        dtype: Optional[torch.dtype] = None,
    ) -> None:
        self._device = resolve_device(device)
        self._dtype = dtype if dtype is not None else self._device.complex_dtype
        if not self._dtype.is_complex:
            raise ValueError(f"dtype must be a complex dtype, got {self._dtype}")

    @property
    def device(self) -> Device:
        return self._device

    @property
    def dtype(self) -> torch.dtype:
        return self._dtype

    def execute(self, circuit: QuantumCircuit) -> StateVector:
        """
        Run ``circuit`` and return its final state vector.

        Raises
        ------
        TypeError
            If ``circuit`` is not a QuantumCircuit.
        UnsupportedGateError
            If an instruction's gate has no matrix in the catalog. This is
            detected before the amplitude buffer is allocated.
        """
        if not isinstance(circuit, QuantumCircuit):
            raise TypeError(
                f"execute expects a QuantumCircuit, got {type(circuit).__name__}"
            )

        n_qubits = circuit.n_qubits
        ops = circuit.ops
        logger.debug(
            "Executing %d instruction(s) on %d qubit(s) [%s, %s]",
            len(ops),
            n_qubits,
            self._device.name,
            self._dtype,
        )
        started = time.perf_counter()

        steps = self._resolve(ops)

        state = zero_state(n_qubits, device=self._device, dtype=self._dtype)
        for qubits, matrix in steps:
            state = apply_matrix(state, matrix, qubits, n_qubits=n_qubits)

        logger.debug(
            "Finished %d-qubit execution in %.3f ms",
            n_qubits,
            (time.perf_counter() - started) * 1e3,
        )
        return StateVector(state, n_qubits=n_qubits)

    def _resolve(self, ops: Tuple[Instruction, ...]) -> List[Tuple[Tuple[int, ...], torch.Tensor]]:
        torch_device = self._device.as_torch_device()
        return [
            (op.qubits, build_matrix(op, dtype=self._dtype, device=torch_device))
            for op in ops
        ]

    def __repr__(self) -> str:
        return f"StateVectorBackend(device={self._device.name!r}, dtype={self._dtype})"


def execute(
    circuit: QuantumCircuit,
    device: Device | str | torch.device | None = None,
    dtype: Optional[torch.dtype] = None,
) -> StateVector:
    """Run ``circuit`` on a fresh StateVectorBackend."""
    return StateVectorBackend(device=device, dtype=dtype).execute(circuit)


__all__ = ["StateVectorBackend", "execute"]
