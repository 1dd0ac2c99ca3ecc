"""Hadamard demo: put two of three qubits into superposition.

Builds a 3-qubit circuit with a Hadamard on qubits 1 and 2, runs it on the
state-vector backend and prints the resulting amplitudes. Qubit 0 is the
least significant bit, so the non-zero amplitudes sit at indices 0, 2, 4
and 6 (qubit 0 stays |0⟩).
"""

from __future__ import annotations

import qvector as qv


def main() -> None:
    """Build, execute and print the demo circuit."""
    circuit = qv.QuantumCircuit(3)
    circuit.add(qv.Instruction.hadamard(1))
    circuit.add(qv.Instruction.hadamard(2))

    print("Circuit:")
    print(circuit.to_text_diagram())

    state = qv.StateVectorBackend().execute(circuit)

    print("\nFinal state vector:")
    qv.print_statevector(state)

    print("\nNon-zero amplitudes:")
    for label, amplitude in state.nonzero().items():
        print(f"  {label}: {amplitude}")
    print(f"\nTotal probability: {state.norm_squared():.12f}")


if __name__ == "__main__":
    main()
