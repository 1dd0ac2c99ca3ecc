"""The result type produced by the state-vector engine."""

from __future__ import annotations

import math
from typing import Dict, Iterator, List

import numpy as np
import torch

from qvector.amplitude import Amplitude
from qvector.viz.text import format_statevector


class StateVector:
    """
    Final amplitudes of an n-qubit circuit, as a read-only value.

    Index ``i`` is the computational basis state whose binary digits give
    the qubit values, with qubit 0 as the least significant bit. The
    underlying buffer is a 1-D complex tensor of length ``2**n_qubits``.
    """

    __slots__ = ("_data", "_n_qubits")

    def __init__(self, data: torch.Tensor, n_qubits: int | None = None) -> None:
        if not isinstance(data, torch.Tensor):
            raise TypeError(f"data must be a torch.Tensor, got {type(data).__name__}")
        if data.dim() != 1:
            raise ValueError(f"StateVector expects a 1-D tensor, got shape {tuple(data.shape)}")
        if not torch.is_complex(data):
            raise ValueError(f"StateVector expects a complex tensor, got {data.dtype}")

        dim = data.shape[0]
        if n_qubits is None:
            n_qubits = int(math.log2(dim)) if dim > 0 else 0
        if n_qubits < 1 or 2**n_qubits != dim:
            raise ValueError(
                f"StateVector length {dim} is not 2**n_qubits for n_qubits >= 1."
            )

        self._data = data
        self._n_qubits = int(n_qubits)

    @property
    def n_qubits(self) -> int:
        return self._n_qubits

    @property
    def dim(self) -> int:
        return self._data.shape[0]

    @property
    def tensor(self) -> torch.Tensor:
        """Return a copy of the amplitude buffer."""
        return self._data.clone()

    @property
    def dtype(self) -> torch.dtype:
        return self._data.dtype

    @property
    def device(self) -> torch.device:
        return self._data.device

    def __len__(self) -> int:
        return self.dim

    def __getitem__(self, index: int) -> Amplitude:
        if not isinstance(index, int):
            raise TypeError(f"StateVector indices must be integers, got {type(index).__name__}")
        if index < -self.dim or index >= self.dim:
            raise IndexError(f"basis index {index} out of range for dimension {self.dim}")
        return Amplitude.from_complex(self._data[index].item())

    def __iter__(self) -> Iterator[Amplitude]:
        return iter(self.amplitudes())

    def amplitudes(self) -> List[Amplitude]:
        """Return every amplitude in index order."""
        return [Amplitude(z.real, z.imag) for z in self._data.detach().cpu().tolist()]

    def to_numpy(self) -> np.ndarray:
        """Return the amplitudes as a numpy complex array (a copy)."""
        return self._data.detach().cpu().numpy().copy()

    def probabilities(self) -> torch.Tensor:
        """Return |amplitude|² for every basis state."""
        return self._data.real**2 + self._data.imag**2

    def probability(self, index: int) -> float:
        return self[index].norm_squared()

    def norm_squared(self) -> float:
        """Total probability; 1 for every state produced by unitary gates."""
        return float(self.probabilities().sum().item())

    def is_normalized(self, atol: float = 1e-9) -> bool:
        return abs(self.norm_squared() - 1.0) <= atol

    def basis_label(self, index: int) -> str:
        """
        Ket label for a basis index, highest qubit first.

        For example, index 1 of a 2-qubit state is ``|01⟩`` (qubit 0 set).
        """
        if index < 0 or index >= self.dim:
            raise IndexError(f"basis index {index} out of range for dimension {self.dim}")
        return f"|{index:0{self._n_qubits}b}⟩"

    def nonzero(self, atol: float = 1e-12) -> Dict[str, Amplitude]:
        """Map ket labels to amplitudes, skipping those with |a| <= atol."""
        return {
            self.basis_label(i): amp
            for i, amp in enumerate(self.amplitudes())
            if amp.norm() > atol
        }

    def allclose(self, other: "StateVector", atol: float = 1e-9) -> bool:
        """Elementwise comparison within an absolute tolerance."""
        if not isinstance(other, StateVector) or other.dim != self.dim:
            return False
        other_data = other._data.to(dtype=self._data.dtype, device=self._data.device)
        return bool(torch.allclose(self._data, other_data, atol=atol, rtol=0.0))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, StateVector):
            return NotImplemented
        return (
            self._n_qubits == other._n_qubits
            and self._data.dtype == other._data.dtype
            and bool(torch.equal(self._data.cpu(), other._data.cpu()))
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"StateVector(n_qubits={self._n_qubits}, dtype={self._data.dtype})"

    def __str__(self) -> str:
        return format_statevector(self)


__all__ = ["StateVector"]
