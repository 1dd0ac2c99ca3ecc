"""Circuit construction: instructions and the circuit container."""

from .core import QuantumCircuit
from .instruction import Instruction

__all__ = ["Instruction", "QuantumCircuit"]
