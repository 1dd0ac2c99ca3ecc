"""Diagnostic functions for state vectors."""

from __future__ import annotations

import torch


def state_norm(state: torch.Tensor) -> torch.Tensor:
    """
    Compute the L2 norm of a state tensor.

    The last dimension is taken to be the Hilbert-space index; any leading
    dimensions are batch dimensions.

    Parameters
    ----------
    state:
        Complex tensor with shape (..., dim).

    Returns
    -------
    torch.Tensor
        Real tensor with shape (...) giving the norm for each batch element.

    Raises
    ------
    ValueError
        If state has fewer than 1 dimension.
    """
    if state.dim() < 1:
        raise ValueError("state_norm expects a tensor with at least 1 dimension.")

    norm_sq = (state.conj() * state).sum(dim=-1).real
    return torch.sqrt(norm_sq)


def assert_normalized(
    state: torch.Tensor,
    atol: float = 1e-9,
) -> None:
    """
    Assert that a state has norm ~1 within a tolerance.

    Parameters
    ----------
    state:
        Complex state tensor (..., dim).
    atol:
        Absolute tolerance for |norm - 1|.

    Raises
    ------
    ValueError
        If the state is not normalized within the tolerance.
    """
    norms = state_norm(state)
    if not torch.all(torch.isfinite(norms)):
        raise ValueError("State norm contains non-finite values.")

    if not torch.allclose(norms, torch.ones_like(norms), atol=atol, rtol=0.0):
        raise ValueError(
            f"State is not normalized within tolerance {atol}. "
            f"Norms found: {norms.detach().cpu().tolist()}"
        )


def normalization_tolerance(dtype: torch.dtype) -> float:
    """Default norm tolerance for a complex dtype."""
    return 1e-9 if dtype == torch.complex128 else 1e-4


def fidelity(
    state_a: torch.Tensor,
    state_b: torch.Tensor,
) -> torch.Tensor:
    """
    Compute the fidelity |<a|b>|² between two pure state vectors.

    Parameters
    ----------
    state_a, state_b:
        Complex tensors of identical shape (..., dim).

    Returns
    -------
    torch.Tensor
        Real tensor with shape (...).

    Raises
    ------
    ValueError
        If the shapes differ.
    """
    if state_a.shape != state_b.shape:
        raise ValueError("fidelity expects tensors with the same shape.")
    if state_a.dim() < 1:
        raise ValueError("fidelity expects at least 1D tensors.")

    inner = (state_a.conj() * state_b).sum(dim=-1)
    return inner.abs() ** 2


def bloch_vector(state: torch.Tensor) -> torch.Tensor:
    """
    Compute the Bloch vector (x, y, z) for a single-qubit state.

    For a pure state |psi> = [a, b]^T:

        x = 2 Re(a* b)
        y = 2 Im(a* b)
        z = |a|^2 - |b|^2

    Raises
    ------
    ValueError
        If the last dimension is not 2.
    """
    if state.shape[-1] != 2:
        raise ValueError(
            "bloch_vector requires a single-qubit state with last dimension 2."
        )

    a = state[..., 0]
    b = state[..., 1]
    overlap = a.conj() * b

    x = 2.0 * overlap.real
    y = 2.0 * overlap.imag
    z = (a.abs() ** 2) - (b.abs() ** 2)

    return torch.stack([x, y, z], dim=-1)
