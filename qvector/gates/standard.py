"""Standard quantum gate matrices.

Every function returns a fresh complex tensor. Multi-qubit matrices are
indexed with the first gate qubit as the most significant bit of the local
basis index, i.e. rows and columns run over |q_first ... q_last>.
"""

from __future__ import annotations

import cmath
import math

import torch

_DEFAULT_DTYPE = torch.complex128


def _resolve(
    dtype: torch.dtype | None, device: torch.device | None
) -> tuple[torch.dtype, torch.device]:
    if dtype is None:
        dtype = _DEFAULT_DTYPE
    if device is None:
        device = torch.device("cpu")
    return dtype, device


def I(dtype: torch.dtype | None = None, device: torch.device | None = None) -> torch.Tensor:
    """
    Identity gate (single-qubit).

    Args:
        dtype: Complex dtype for the gate matrix. Defaults to torch.complex128.
        device: PyTorch device. Defaults to torch.device("cpu").

    Returns:
        A (2, 2) complex tensor representing the identity gate.
    """
    dtype, device = _resolve(dtype, device)
    return torch.eye(2, dtype=dtype, device=device)


def X(dtype: torch.dtype | None = None, device: torch.device | None = None) -> torch.Tensor:
    """
    Pauli-X gate (bit-flip, NOT gate).

    Returns:
        A (2, 2) complex tensor representing the X gate.
    """
    dtype, device = _resolve(dtype, device)
    return torch.tensor([[0.0, 1.0], [1.0, 0.0]], dtype=dtype, device=device)


def Y(dtype: torch.dtype | None = None, device: torch.device | None = None) -> torch.Tensor:
    """
    Pauli-Y gate.

    Returns:
        A (2, 2) complex tensor representing the Y gate.
    """
    dtype, device = _resolve(dtype, device)
    return torch.tensor([[0.0, -1.0j], [1.0j, 0.0]], dtype=dtype, device=device)


def Z(dtype: torch.dtype | None = None, device: torch.device | None = None) -> torch.Tensor:
    """
    Pauli-Z gate (phase-flip).

    Returns:
        A (2, 2) complex tensor representing the Z gate.
    """
    dtype, device = _resolve(dtype, device)
    return torch.tensor([[1.0, 0.0], [0.0, -1.0]], dtype=dtype, device=device)


def H(dtype: torch.dtype | None = None, device: torch.device | None = None) -> torch.Tensor:
    """
    Hadamard gate, 1/√2 · [[1, 1], [1, -1]].

    Maps |0⟩ to (|0⟩ + |1⟩)/√2 and |1⟩ to (|0⟩ - |1⟩)/√2. It is its own
    inverse.

    Returns:
        A (2, 2) complex tensor representing the H gate.
    """
    dtype, device = _resolve(dtype, device)
    sqrt2_inv = 1.0 / math.sqrt(2.0)
    return torch.tensor(
        [[sqrt2_inv, sqrt2_inv], [sqrt2_inv, -sqrt2_inv]], dtype=dtype, device=device
    )


def S(dtype: torch.dtype | None = None, device: torch.device | None = None) -> torch.Tensor:
    """
    S gate (phase gate, √Z).

    Returns:
        A (2, 2) complex tensor representing the S gate.
    """
    dtype, device = _resolve(dtype, device)
    return torch.tensor([[1.0, 0.0], [0.0, 1.0j]], dtype=dtype, device=device)


def T(dtype: torch.dtype | None = None, device: torch.device | None = None) -> torch.Tensor:
    """
    T gate (π/8 gate, √S).

    Returns:
        A (2, 2) complex tensor representing the T gate.
    """
    return P(math.pi / 4.0, dtype=dtype, device=device)


def P(
    phase: float,
    dtype: torch.dtype | None = None,
    device: torch.device | None = None,
) -> torch.Tensor:
    """
    Phase-shift gate.

    Leaves |0⟩ alone and multiplies |1⟩ by e^(i·phase):

        [[1, 0],
         [0, e^(i·phase)]]

    P(phase)† = P(-phase).

    Args:
        phase: Phase angle in radians.

    Returns:
        A (2, 2) complex tensor representing the phase gate.
    """
    dtype, device = _resolve(dtype, device)
    return torch.tensor(
        [[1.0, 0.0], [0.0, cmath.exp(1.0j * float(phase))]], dtype=dtype, device=device
    )


def RX(
    theta: float,
    dtype: torch.dtype | None = None,
    device: torch.device | None = None,
) -> torch.Tensor:
    """
    Rotation gate around X-axis: RX(θ) = exp(-iθX/2).

    Matrix form:
        [[cos(θ/2), -i sin(θ/2)],
         [-i sin(θ/2), cos(θ/2)]]
    """
    dtype, device = _resolve(dtype, device)
    half_theta = float(theta) / 2.0
    cos_half = math.cos(half_theta)
    sin_half = math.sin(half_theta)
    return torch.tensor(
        [[cos_half, -1.0j * sin_half], [-1.0j * sin_half, cos_half]],
        dtype=dtype,
        device=device,
    )


def RY(
    theta: float,
    dtype: torch.dtype | None = None,
    device: torch.device | None = None,
) -> torch.Tensor:
    """
    Rotation gate around Y-axis: RY(θ) = exp(-iθY/2).

    Matrix form:
        [[cos(θ/2), -sin(θ/2)],
         [sin(θ/2), cos(θ/2)]]
    """
    dtype, device = _resolve(dtype, device)
    half_theta = float(theta) / 2.0
    cos_half = math.cos(half_theta)
    sin_half = math.sin(half_theta)
    return torch.tensor(
        [[cos_half, -sin_half], [sin_half, cos_half]],
        dtype=dtype,
        device=device,
    )


def RZ(
    theta: float,
    dtype: torch.dtype | None = None,
    device: torch.device | None = None,
) -> torch.Tensor:
    """
    Rotation gate around Z-axis: RZ(θ) = exp(-iθZ/2).

    Matrix form:
        [[exp(-iθ/2), 0],
         [0, exp(iθ/2)]]
    """
    dtype, device = _resolve(dtype, device)
    half_theta = float(theta) / 2.0
    return torch.tensor(
        [[cmath.exp(-1.0j * half_theta), 0.0], [0.0, cmath.exp(1.0j * half_theta)]],
        dtype=dtype,
        device=device,
    )


def CNOT(dtype: torch.dtype | None = None, device: torch.device | None = None) -> torch.Tensor:
    """
    CNOT gate (controlled-NOT, controlled-X).

    The first gate qubit is the control, the second the target. Basis order
    is |00⟩, |01⟩, |10⟩, |11⟩ with the control as the left digit, so the
    target flips exactly when the control is |1⟩:

        |00⟩ -> |00⟩, |01⟩ -> |01⟩, |10⟩ -> |11⟩, |11⟩ -> |10⟩

    Returns:
        A (4, 4) complex tensor representing the CNOT gate.
    """
    return controlled(X(dtype=dtype, device=device))


def SWAP(dtype: torch.dtype | None = None, device: torch.device | None = None) -> torch.Tensor:
    """
    SWAP gate: |a⟩|b⟩ -> |b⟩|a⟩.

    Symmetric in its two qubits and its own inverse.

    Returns:
        A (4, 4) complex tensor representing the SWAP gate.
    """
    dtype, device = _resolve(dtype, device)
    return torch.tensor(
        [
            [1.0, 0.0, 0.0, 0.0],
            [0.0, 0.0, 1.0, 0.0],
            [0.0, 1.0, 0.0, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ],
        dtype=dtype,
        device=device,
    )


def controlled(gate: torch.Tensor) -> torch.Tensor:
    """
    Controlled version of a single-qubit gate.

    The control is the first (most significant) qubit: the result is the
    block matrix diag(I, U).

    Args:
        gate: A (2, 2) unitary U.

    Returns:
        A (4, 4) tensor with the dtype and device of ``gate``.
    """
    if gate.shape != (2, 2):
        raise ValueError(f"controlled() expects a (2, 2) gate, got {tuple(gate.shape)}")
    matrix = torch.eye(4, dtype=gate.dtype, device=gate.device)
    matrix[2:, 2:] = gate
    return matrix


def is_unitary(matrix: torch.Tensor, atol: float = 1e-9) -> bool:
    """
    Check if a matrix is unitary within a given tolerance.

    A matrix U is unitary if U†U = I, where U† is the conjugate transpose.

    Args:
        matrix: Tensor of shape (..., n, n) representing one or more matrices.
        atol: Absolute tolerance for the check.

    Returns:
        True if the matrix is unitary (within tolerance), False otherwise.
    """
    if matrix.dim() < 2 or matrix.shape[-1] != matrix.shape[-2]:
        return False

    adjoint = matrix.conj().transpose(-1, -2)
    product = torch.matmul(adjoint, matrix)

    n = matrix.shape[-1]
    identity = torch.eye(n, dtype=matrix.dtype, device=matrix.device)
    if product.ndim > 2:
        identity = identity.expand(product.shape)

    diff = torch.abs(product - identity)
    return bool(torch.all(diff < atol).item())
