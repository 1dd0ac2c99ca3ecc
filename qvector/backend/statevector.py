"""State-vector kernels for pure quantum states.

Convention: qubit 0 is the least significant bit (LSB) of the
computational basis index, ``index = sum(b_q << q)``. In a 2-qubit state
|q1 q0⟩, qubit 0 is the rightmost digit.

All kernels accept optional leading batch dimensions, shape
``(*batch_shape, 2**n_qubits)``, and return new tensors; inputs are never
modified in place.
"""

from __future__ import annotations

import math
from typing import Sequence

import torch

from ..core.device import Device, resolve_device
from ..diagnostics import assert_normalized, is_debug_enabled, normalization_tolerance


def _check_state(state: torch.Tensor, n_qubits: int | None) -> int:
    """Validate a state tensor and return its qubit count."""
    if not torch.is_complex(state):
        raise ValueError(f"state must be complex dtype, got {state.dtype}")

    dim = state.shape[-1]
    if n_qubits is None:
        n_qubits = int(math.log2(dim)) if dim > 0 else 0
        if 2**n_qubits != dim:
            raise ValueError(
                f"state dimension {dim} is not a power of 2. "
                "Please specify n_qubits explicitly."
            )
    elif 2**n_qubits != dim:
        raise ValueError(
            f"state dimension {dim} does not match 2**n_qubits = {2**n_qubits}"
        )
    return n_qubits


def _debug_check(state: torch.Tensor) -> None:
    if is_debug_enabled():
        assert_normalized(state, atol=normalization_tolerance(state.dtype))


def zero_state(
    n_qubits: int,
    batch_shape: tuple[int, ...] | None = None,
    device: Device | torch.device | str | None = None,
    dtype: torch.dtype | None = None,
) -> torch.Tensor:
    """
    Create the all-zeros basis state |0...0⟩ for n_qubits.

    The amplitude at index 0 is 1+0j, all others are 0.

    Args:
        n_qubits: Number of qubits. Must be >= 1.
        batch_shape: Optional batch dimensions. If None, no batch dimension.
        device: Device specification. Can be Device, str, torch.device, or None.
        dtype: Complex dtype. Defaults to the device's complex dtype
            (torch.complex128 unless configured otherwise).

    Returns:
        A complex tensor of shape (*batch_shape, 2**n_qubits).

    Raises:
        ValueError: If n_qubits < 1.
    """
    if n_qubits < 1:
        raise ValueError(f"n_qubits must be >= 1, got {n_qubits}")

    qdevice = resolve_device(device)
    if dtype is None:
        dtype = qdevice.complex_dtype
    if batch_shape is None:
        batch_shape = ()

    dim = 2**n_qubits
    state = torch.zeros((*batch_shape, dim), dtype=dtype, device=qdevice.as_torch_device())
    state[..., 0] = 1.0 + 0.0j
    return state


def apply_gate(
    state: torch.Tensor,
    gate: torch.Tensor,
    qubit: int,
    n_qubits: int | None = None,
) -> torch.Tensor:
    """
    Apply a single-qubit gate to a specific qubit in the state vector.

    The index space splits into pairs that differ only in bit ``qubit``;
    each pair (a0, a1) is replaced by gate @ [a0, a1]. Reshaping the flat
    vector to (batch, left, 2, right) lines those pairs up along axis 2,
    with right = 2**qubit amplitudes of lower bits in between.

    Args:
        state: State tensor of shape (..., 2**n_qubits) with complex dtype.
        gate: Single-qubit gate matrix of shape (2, 2).
        qubit: Index of the qubit to apply the gate to (0-indexed, 0 = LSB).
        n_qubits: Number of qubits. If None, inferred from state.shape[-1].

    Returns:
        A new state tensor with the gate applied.

    Raises:
        ValueError: If gate shape is not (2, 2), qubit index is invalid, or
            state dimension is not a power of 2.
    """
    if gate.shape != (2, 2):
        raise ValueError(f"gate must have shape (2, 2), got {tuple(gate.shape)}")

    n_qubits = _check_state(state, n_qubits)
    if qubit < 0 or qubit >= n_qubits:
        raise ValueError(f"qubit index {qubit} out of range [0, {n_qubits})")

    dim = state.shape[-1]
    batch_shape = state.shape[:-1]
    batch_size = math.prod(batch_shape) if batch_shape else 1

    left_size = 2 ** (n_qubits - 1 - qubit)
    right_size = 2**qubit

    state_reshaped = state.reshape(batch_size, left_size, 2, right_size).contiguous()
    gate = gate.to(dtype=state.dtype, device=state.device)
    transformed = torch.einsum("oq,blqr->blor", gate, state_reshaped)

    new_state = transformed.reshape(*batch_shape, dim)
    _debug_check(new_state)
    return new_state


def apply_multi_qubit_gate(
    state: torch.Tensor,
    gate: torch.Tensor,
    qubits: Sequence[int],
    n_qubits: int | None = None,
) -> torch.Tensor:
    """
    Apply a k-qubit gate to the given qubits of the state vector.

    The gate matrix is indexed as |q_first ... q_last⟩: ``qubits[0]`` is the
    most significant bit of the gate's local basis index. The amplitudes
    fall into 2**(n-k) groups of 2**k that differ only in the target bits;
    moving the target axes to the front turns every group into a column,
    so one matrix product updates all of them.

    Args:
        state: State tensor of shape (..., 2**n_qubits) with complex dtype.
        gate: Gate matrix of shape (2**k, 2**k), k = len(qubits).
        qubits: Distinct target qubit indices.
        n_qubits: Number of qubits. If None, inferred from state.shape[-1].

    Returns:
        A new state tensor with the gate applied.

    Raises:
        ValueError: On shape mismatch, repeated or out-of-range qubits.
    """
    qubits = tuple(int(q) for q in qubits)
    k = len(qubits)
    if k == 0:
        raise ValueError("qubits must name at least one qubit")
    gate_dim = 2**k
    if gate.shape != (gate_dim, gate_dim):
        raise ValueError(
            f"gate must have shape ({gate_dim}, {gate_dim}) for {k} qubit(s), "
            f"got {tuple(gate.shape)}"
        )

    n_qubits = _check_state(state, n_qubits)
    if len(set(qubits)) != k:
        raise ValueError(f"qubits must be distinct, got {qubits}")
    for q in qubits:
        if q < 0 or q >= n_qubits:
            raise ValueError(f"qubit index {q} out of range [0, {n_qubits})")

    dim = state.shape[-1]
    batch_shape = state.shape[:-1]
    batch_size = math.prod(batch_shape) if batch_shape else 1

    # Axis 1 + j of the (batch, 2, ..., 2) view holds qubit n_qubits - 1 - j.
    tensor = state.reshape(batch_size, *([2] * n_qubits))
    axes = [1 + (n_qubits - 1 - q) for q in qubits]
    front = list(range(1, k + 1))

    moved = torch.movedim(tensor, axes, front).contiguous()
    moved_shape = moved.shape
    columns = moved.reshape(batch_size, gate_dim, -1)

    gate = gate.to(dtype=state.dtype, device=state.device)
    updated = torch.matmul(gate, columns).reshape(moved_shape)

    restored = torch.movedim(updated, front, axes)
    new_state = restored.reshape(*batch_shape, dim)
    _debug_check(new_state)
    return new_state


def apply_matrix(
    state: torch.Tensor,
    gate: torch.Tensor,
    qubits: Sequence[int],
    n_qubits: int | None = None,
) -> torch.Tensor:
    """Apply a gate of any arity, choosing the single-qubit path when possible."""
    if len(qubits) == 1:
        return apply_gate(state, gate, qubit=qubits[0], n_qubits=n_qubits)
    return apply_multi_qubit_gate(state, gate, qubits, n_qubits=n_qubits)


def measure_probs(
    state: torch.Tensor,
    n_qubits: int | None = None,
) -> torch.Tensor:
    """
    Compute the probability distribution over computational basis states.

    The probability of basis state |i⟩ is |state[i]|². No renormalization
    is applied; the result sums to the squared norm of the state.

    Args:
        state: State tensor of shape (..., 2**n_qubits) with complex dtype.
        n_qubits: Number of qubits. If None, inferred from state.shape[-1].

    Returns:
        A real tensor of the same shape as state.
    """
    _check_state(state, n_qubits)
    return (state.real**2 + state.imag**2).contiguous()


__all__ = [
    "zero_state",
    "apply_gate",
    "apply_multi_qubit_gate",
    "apply_matrix",
    "measure_probs",
]
