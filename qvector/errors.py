"""Exception types raised by qvector.

All of them derive from ``ValueError`` so code that already guards circuit
construction with ``except ValueError`` keeps working.
"""

from __future__ import annotations


class QVectorError(ValueError):
    """Base class for all qvector errors."""


class InvalidCircuitError(QVectorError):
    """A circuit was constructed with an invalid qubit count."""


class InvalidInstructionError(QVectorError):
    """An instruction is malformed or targets a qubit outside the circuit."""


class UnsupportedGateError(QVectorError):
    """A gate name or gate kind is not known to the matrix catalog."""


__all__ = [
    "QVectorError",
    "InvalidCircuitError",
    "InvalidInstructionError",
    "UnsupportedGateError",
]
