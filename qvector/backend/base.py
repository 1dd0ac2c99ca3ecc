"""The backend capability."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from qvector.circuit import QuantumCircuit


class Backend(ABC):
    """Turns a circuit into some representation of its result."""

    @abstractmethod
    def execute(self, circuit: QuantumCircuit) -> Any:
        """
        Run ``circuit`` and return the backend's result.

        Implementations must not mutate the circuit and must not keep state
        between calls.
        """
        ...
