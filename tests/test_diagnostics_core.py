"""Tests for core diagnostic functions."""

import math

import pytest
import torch

from qvector import Instruction, QuantumCircuit
from qvector.diagnostics import (
    assert_normalized,
    bloch_vector,
    fidelity,
    normalization_tolerance,
    state_norm,
)

R = 1.0 / math.sqrt(2.0)


def test_state_norm_and_assert_normalized() -> None:
    """Executed states have unit norm."""
    circuit = QuantumCircuit(2).add(Instruction.hadamard(0)).add(Instruction.cnot(0, 1))
    state = circuit.simulate_state().tensor
    n = state_norm(state)
    assert n.shape == ()
    assert torch.allclose(n, torch.tensor(1.0, dtype=torch.float64))

    # Should not raise
    assert_normalized(state)


def test_assert_normalized_raises_for_non_unit_state() -> None:
    """A doubled amplitude is reported with its norm."""
    state = torch.tensor([2.0, 0.0], dtype=torch.complex128)
    with pytest.raises(ValueError, match="not normalized"):
        assert_normalized(state)


def test_assert_normalized_non_finite() -> None:
    """Infinite amplitudes are rejected before the tolerance check."""
    state = torch.tensor([float("inf"), 0.0], dtype=torch.complex128)
    with pytest.raises(ValueError, match="non-finite"):
        assert_normalized(state)


def test_state_norm_batched() -> None:
    """Leading dimensions are batch dimensions."""
    states = torch.tensor([[1.0, 0.0], [0.0, 1.0j], [R, R]], dtype=torch.complex128)
    norms = state_norm(states)
    assert norms.shape == (3,)
    assert torch.allclose(norms, torch.ones(3, dtype=torch.float64))


def test_state_norm_requires_a_dimension() -> None:
    """Scalars have no Hilbert-space axis."""
    with pytest.raises(ValueError, match="at least 1 dimension"):
        state_norm(torch.tensor(1.0 + 0.0j))


def test_normalization_tolerance_by_dtype() -> None:
    """Single precision gets a looser tolerance."""
    assert normalization_tolerance(torch.complex128) == 1e-9
    assert normalization_tolerance(torch.complex64) == 1e-4


def test_fidelity_pure_states() -> None:
    """Fidelity of basis and superposition states."""
    zero = torch.tensor([1.0, 0.0], dtype=torch.complex128)
    one = torch.tensor([0.0, 1.0], dtype=torch.complex128)
    plus = torch.tensor([R, R], dtype=torch.complex128)
    minus = torch.tensor([R, -R], dtype=torch.complex128)

    assert torch.allclose(fidelity(zero, zero), torch.tensor(1.0, dtype=torch.float64))
    assert torch.allclose(fidelity(zero, one), torch.tensor(0.0, dtype=torch.float64))
    assert torch.allclose(fidelity(plus, minus), torch.tensor(0.0, dtype=torch.float64), atol=1e-12)
    assert torch.allclose(fidelity(zero, plus), torch.tensor(0.5, dtype=torch.float64))


def test_fidelity_ignores_global_phase() -> None:
    """S|1> and |1> differ only by a phase."""
    one = QuantumCircuit(1).add(Instruction.pauli_x(0)).simulate_state().tensor
    phased = QuantumCircuit(1).add(Instruction.pauli_x(0)).add(Instruction.s(0)).simulate_state().tensor
    assert torch.allclose(fidelity(one, phased), torch.tensor(1.0, dtype=torch.float64))


def test_fidelity_shape_mismatch() -> None:
    """Fidelity needs equal shapes."""
    state_a = torch.tensor([1.0, 0.0], dtype=torch.complex128)
    state_b = torch.tensor([1.0, 0.0, 0.0, 0.0], dtype=torch.complex128)
    with pytest.raises(ValueError, match="same shape"):
        fidelity(state_a, state_b)


def test_bloch_vector_basic_states() -> None:
    """Poles and the +x direction."""
    zero = QuantumCircuit(1).simulate_state().tensor
    one = QuantumCircuit(1).add(Instruction.pauli_x(0)).simulate_state().tensor
    plus = QuantumCircuit(1).add(Instruction.hadamard(0)).simulate_state().tensor

    expected = {
        "zero": torch.tensor([0.0, 0.0, 1.0], dtype=torch.float64),
        "one": torch.tensor([0.0, 0.0, -1.0], dtype=torch.float64),
        "plus": torch.tensor([1.0, 0.0, 0.0], dtype=torch.float64),
    }
    assert torch.allclose(bloch_vector(zero), expected["zero"])
    assert torch.allclose(bloch_vector(one), expected["one"])
    assert torch.allclose(bloch_vector(plus), expected["plus"], atol=1e-12)


def test_bloch_vector_follows_rotation() -> None:
    """RY(theta)|0> sits at angle theta from +z in the x-z plane."""
    theta = 0.8
    state = QuantumCircuit(1).add(Instruction.ry(0, theta)).simulate_state().tensor
    vec = bloch_vector(state)
    expected = torch.tensor([math.sin(theta), 0.0, math.cos(theta)], dtype=torch.float64)
    assert torch.allclose(vec, expected, atol=1e-12)


def test_bloch_vector_wrong_dimension() -> None:
    """Only single-qubit states have a Bloch vector."""
    state = QuantumCircuit(2).simulate_state().tensor
    with pytest.raises(ValueError, match="last dimension 2"):
        bloch_vector(state)


def test_bloch_vector_batched() -> None:
    """Batched single-qubit states give one vector each."""
    states = torch.tensor([[1.0, 0.0], [0.0, 1.0], [R, R]], dtype=torch.complex128)
    vectors = bloch_vector(states)
    assert vectors.shape == (3, 3)
    assert torch.allclose(vectors[2], torch.tensor([1.0, 0.0, 0.0], dtype=torch.float64), atol=1e-12)
