"""Pytest configuration and shared fixtures for qvector tests.

This module provides:
- A deterministic numpy RNG for building random circuits
- Global seeding so every test starts from the same random state
- A helper that builds random circuits over the whole gate catalog
"""

import math
import os

import numpy as np
import pytest
import torch

from qvector.circuit import Instruction, QuantumCircuit


def _seed() -> int:
    return int(os.environ.get("TEST_RNG_SEED", "0"))


@pytest.fixture(scope="function")
def rng() -> np.random.Generator:
    """Provide a deterministic numpy RNG for tests.

    Uses seed from TEST_RNG_SEED environment variable (default: 0).
    """
    return np.random.default_rng(_seed())


@pytest.fixture(scope="function", autouse=True)
def set_random_seeds() -> None:
    """Seed numpy and torch before every test."""
    np.random.seed(_seed())
    torch.manual_seed(_seed())


def random_instruction(rng: np.random.Generator, n_qubits: int) -> Instruction:
    """Draw one instruction uniformly from the catalog."""
    single = ["I", "X", "Y", "Z", "H", "S", "T"]
    parametric = ["P", "RX", "RY", "RZ"]
    choices = single + parametric
    if n_qubits >= 2:
        choices = choices + ["CNOT", "SWAP", "CU"]

    name = choices[int(rng.integers(len(choices)))]
    if name in single:
        return Instruction.from_name(name, [int(rng.integers(n_qubits))])
    if name in parametric:
        angle = float(rng.uniform(-2 * math.pi, 2 * math.pi))
        return Instruction.from_name(name, [int(rng.integers(n_qubits))], [angle])

    a, b = (int(q) for q in rng.choice(n_qubits, size=2, replace=False))
    if name == "CU":
        base = Instruction.ry(0, float(rng.uniform(-math.pi, math.pi)))
        return Instruction.controlled(base, a, b)
    return Instruction.from_name(name, [a, b])


def random_circuit(rng: np.random.Generator, n_qubits: int, depth: int) -> QuantumCircuit:
    """Build a circuit of ``depth`` random instructions."""
    circuit = QuantumCircuit(n_qubits)
    for _ in range(depth):
        circuit.add(random_instruction(rng, n_qubits))
    return circuit


@pytest.fixture(scope="function")
def make_random_circuit(rng: np.random.Generator):
    """Return a factory ``(n_qubits, depth) -> QuantumCircuit`` bound to ``rng``."""

    def factory(n_qubits: int, depth: int) -> QuantumCircuit:
        return random_circuit(rng, n_qubits, depth)

    return factory
