"""Human-readable rendering of simulation results."""

from .text import format_amplitude, format_statevector, print_statevector

__all__ = ["format_amplitude", "format_statevector", "print_statevector"]
