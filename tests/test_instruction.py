"""Tests for instructions and the gate catalog."""

import math

import pytest
import torch

import qvector as qv
from qvector.circuit import Instruction
from qvector.errors import InvalidInstructionError, UnsupportedGateError
from qvector.gates import catalog
from qvector.gates.catalog import GateKind, build_matrix


class TestGateKindResolution:
    """Name lookup for the closed gate set."""

    @pytest.mark.parametrize(
        "name, kind",
        [
            ("H", GateKind.HADAMARD),
            ("h", GateKind.HADAMARD),
            ("hadamard", GateKind.HADAMARD),
            ("CX", GateKind.CNOT),
            ("cnot", GateKind.CNOT),
            ("phase", GateKind.PHASE),
            ("id", GateKind.IDENTITY),
            ("rz", GateKind.RZ),
        ],
    )
    def test_names_and_aliases(self, name, kind):
        assert GateKind.from_name(name) is kind

    def test_unknown_name_raises(self):
        with pytest.raises(UnsupportedGateError, match="Unsupported gate name"):
            GateKind.from_name("FOO")

    def test_unsupported_gate_is_value_error(self):
        with pytest.raises(ValueError):
            GateKind.from_name("FOO")

    def test_every_kind_has_a_spec_and_builder(self):
        for kind in GateKind:
            assert kind in catalog.GATE_SPECS
            assert kind in catalog.MATRIX_BUILDERS
        assert set(catalog.supported_gates()) == set(GateKind)


class TestConstruction:
    """Shape validation done when an instruction is built."""

    def test_hadamard_constructor(self):
        op = Instruction.hadamard(2)
        assert op.gate is GateKind.HADAMARD
        assert op.qubits == (2,)
        assert op.params == ()
        assert op.name == "H"

    def test_from_name_matches_constructor(self):
        assert Instruction.from_name("rx", [1], [0.5]) == Instruction.rx(1, 0.5)

    def test_string_gate_is_resolved(self):
        assert Instruction("X", (0,)).gate is GateKind.PAULI_X

    def test_instructions_are_immutable(self):
        op = Instruction.pauli_x(0)
        with pytest.raises(AttributeError):
            op.qubits = (1,)  # type: ignore[misc]

    def test_instructions_are_hashable(self):
        assert len({Instruction.hadamard(0), Instruction.hadamard(0)}) == 1

    def test_negative_qubit_rejected(self):
        with pytest.raises(InvalidInstructionError, match="negative"):
            Instruction.hadamard(-1)

    def test_float_qubit_rejected(self):
        with pytest.raises(InvalidInstructionError, match="integers"):
            Instruction(GateKind.HADAMARD, (0.5,))  # type: ignore[arg-type]

    def test_empty_qubits_rejected(self):
        with pytest.raises(InvalidInstructionError, match="at least one qubit"):
            Instruction(GateKind.HADAMARD, ())

    def test_wrong_arity_rejected(self):
        with pytest.raises(InvalidInstructionError, match="acts on 2 qubit"):
            Instruction.from_name("CNOT", [0])

    def test_repeated_qubits_rejected(self):
        with pytest.raises(InvalidInstructionError, match="repeated"):
            Instruction.cnot(1, 1)

    def test_missing_parameter_rejected(self):
        with pytest.raises(InvalidInstructionError, match="exactly 1 parameter"):
            Instruction.from_name("RX", [0])

    def test_extra_parameter_rejected(self):
        with pytest.raises(InvalidInstructionError, match="exactly 0 parameter"):
            Instruction.from_name("H", [0], [1.0])

    def test_non_finite_parameter_rejected(self):
        with pytest.raises(InvalidInstructionError, match="not finite"):
            Instruction.rz(0, math.inf)

    def test_controlled_needs_single_qubit_body(self):
        with pytest.raises(InvalidInstructionError):
            Instruction.controlled(Instruction.cnot(0, 1), 0, 1)

    def test_controlled_from_name_rejected(self):
        with pytest.raises(InvalidInstructionError, match="cannot be built from a name"):
            Instruction.from_name("CU", [0, 1])

    def test_controlled_normalizes_body_qubit(self):
        op = Instruction.controlled(Instruction.pauli_x(5), 0, 1)
        assert op.body == (Instruction.pauli_x(0),)

    def test_body_on_plain_gate_rejected(self):
        with pytest.raises(InvalidInstructionError, match="does not take a body"):
            Instruction(GateKind.HADAMARD, (0,), body=(Instruction.pauli_x(0),))

    def test_custom_body_must_fit_inputs(self):
        with pytest.raises(InvalidInstructionError, match="only has 1 input"):
            Instruction.custom("bad", [Instruction.cnot(0, 1)], [0])

    def test_custom_needs_name(self):
        with pytest.raises(InvalidInstructionError, match="non-empty name"):
            Instruction.custom("", [], [0])

    def test_str(self):
        assert str(Instruction.cnot(0, 1)) == "CNOT q[0, 1]"
        assert str(Instruction.rx(0, 0.5)) == "RX(0.5) q[0]"


class TestBuildMatrix:
    """Matrices produced by the catalog for instructions."""

    def test_hadamard_matrix(self):
        assert torch.allclose(build_matrix(Instruction.hadamard(3)), qv.H())

    def test_parametric_matrix_uses_param(self):
        assert torch.allclose(build_matrix(Instruction.phase(0, 0.25)), qv.P(0.25))

    def test_controlled_matrix(self):
        op = Instruction.controlled(Instruction.hadamard(0), 0, 1)
        assert torch.allclose(build_matrix(op), qv.controlled(qv.H()))

    def test_controlled_x_equals_cnot(self):
        op = Instruction.controlled(Instruction.pauli_x(0), 3, 1)
        assert torch.allclose(build_matrix(op), qv.CNOT())

    def test_custom_matrix_of_single_gate(self):
        op = Instruction.custom("h", [Instruction.hadamard(0)], [4])
        assert torch.allclose(build_matrix(op), qv.H())

    def test_custom_matrix_first_qubit_is_most_significant(self):
        op = Instruction.custom("cx", [Instruction.cnot(0, 1)], [0, 1])
        assert torch.allclose(build_matrix(op), qv.CNOT())
        flipped = Instruction.custom("xc", [Instruction.cnot(1, 0)], [0, 1])
        assert not torch.allclose(build_matrix(flipped), qv.CNOT())

    def test_custom_matrix_of_swap_via_cnots(self):
        """Three alternating CNOTs make a SWAP."""
        body = [Instruction.cnot(0, 1), Instruction.cnot(1, 0), Instruction.cnot(0, 1)]
        op = Instruction.custom("swap3", body, [0, 1])
        assert torch.allclose(build_matrix(op), qv.SWAP())

    def test_custom_matrix_is_unitary(self):
        body = [Instruction.hadamard(0), Instruction.cnot(0, 1), Instruction.t(1)]
        op = Instruction.custom("bell_t", body, [0, 1])
        assert qv.is_unitary(build_matrix(op))

    def test_empty_custom_is_identity(self):
        op = Instruction.custom("noop", [], [0, 1])
        assert torch.allclose(build_matrix(op), torch.eye(4, dtype=torch.complex128))

    def test_dtype_forwarded(self):
        assert build_matrix(Instruction.pauli_y(0), dtype=torch.complex64).dtype == torch.complex64

    def test_missing_builder_raises(self, monkeypatch):
        monkeypatch.delitem(catalog.MATRIX_BUILDERS, GateKind.T)
        with pytest.raises(UnsupportedGateError, match="no matrix definition"):
            build_matrix(Instruction.t(0))


class TestInverse:
    """Adjoint instructions."""

    @pytest.mark.parametrize(
        "op",
        [
            Instruction.identity(0),
            Instruction.pauli_x(0),
            Instruction.pauli_y(0),
            Instruction.pauli_z(0),
            Instruction.hadamard(0),
            Instruction.cnot(0, 1),
            Instruction.swap(0, 1),
        ],
    )
    def test_self_inverse_gates(self, op):
        assert op.inverse() is op

    @pytest.mark.parametrize(
        "op",
        [
            Instruction.s(0),
            Instruction.t(0),
            Instruction.phase(0, 0.3),
            Instruction.rx(0, 0.3),
            Instruction.ry(0, -1.2),
            Instruction.rz(0, 2.5),
            Instruction.controlled(Instruction.t(0), 0, 1),
            Instruction.custom(
                "mix", [Instruction.hadamard(0), Instruction.s(1), Instruction.cnot(0, 1)], [0, 1]
            ),
        ],
    )
    def test_inverse_matrix_is_adjoint(self, op):
        matrix = build_matrix(op)
        inverse = build_matrix(op.inverse())
        identity = torch.eye(matrix.shape[0], dtype=matrix.dtype)
        assert torch.allclose(inverse @ matrix, identity, atol=1e-12)

    def test_custom_inverse_label_round_trip(self):
        op = Instruction.custom("bell", [Instruction.hadamard(0), Instruction.cnot(0, 1)], [0, 1])
        assert op.inverse().name == "bell_dg"
        assert op.inverse().inverse() == op
