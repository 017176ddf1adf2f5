"""Tests for the gate algebra and circuit composition."""
import cmath
import math

import pytest

from qsim.bits import BitPattern
from qsim.functions import BooleanFunction
from qsim.gates import CX, Circuit, H, Oracle, S, T, X, apply_h
from qsim.state import QuantumState, all_zeros, basis_state


def _b(s):
    return BitPattern.from_string(s)


def _mixed_state():
    # 3 qubits, complex amplitudes on four basis states
    amps = {_b("000"): 0.5, _b("011"): 0.5j, _b("101"): -0.5, _b("110"): 0.5 * cmath.exp(0.3j)}
    return QuantumState.create(amps, 3).unwrap()


def _close(a, b, tol=1e-12):
    keys = set(a.amplitudes) | set(b.amplitudes)
    return all(abs(a.amplitude_of(k) - b.amplitude_of(k)) < tol for k in keys)


ALL_GATES = [
    X(0), X(2), H(0), H(1), H(2), CX(0, 1), CX(2, 0), S(1), T(0), T(2),
]


class TestNormalization:
    @pytest.mark.parametrize("gate", ALL_GATES, ids=lambda g: g.name)
    def test_preserved(self, gate):
        out = gate(_mixed_state())
        assert abs(out.total_probability() - 1.0) < 1e-10

    @pytest.mark.parametrize("f", list(BooleanFunction))
    def test_oracle_preserved(self, f):
        amp = 0.5
        amps = {_b(s): amp for s in ("00", "01", "10", "11")}
        s = QuantumState.create(amps, 2).unwrap()
        assert abs(Oracle(f)(s).total_probability() - 1.0) < 1e-10


class TestX:
    def test_flip(self):
        out = X(1)(all_zeros(2).unwrap())
        assert out.amplitudes == {_b("10"): 1}

    def test_self_inverse_exact(self):
        s = _mixed_state()
        assert X(1)(X(1)(s)) == s

    def test_input_untouched(self):
        s = all_zeros(1).unwrap()
        X(0)(s)
        assert s == all_zeros(1).unwrap()


class TestH:
    def test_superposition(self):
        out = H(0)(all_zeros(1).unwrap())
        assert out.amplitude_of(_b("0")) == pytest.approx(1 / math.sqrt(2))
        assert out.amplitude_of(_b("1")) == pytest.approx(1 / math.sqrt(2))

    def test_minus(self):
        out = H(0)(basis_state("1").unwrap())
        assert out.amplitude_of(_b("0")) == pytest.approx(1 / math.sqrt(2))
        assert out.amplitude_of(_b("1")) == pytest.approx(-1 / math.sqrt(2))

    def test_interference_returns_basis_state(self):
        s = all_zeros(1).unwrap()
        out = H(0)(H(0)(s))
        assert set(out.amplitudes) == {_b("0")}
        assert abs(out.amplitude_of(_b("0")) - (1 + 0j)) < 1e-12

    def test_self_inverse(self):
        s = _mixed_state()
        for q in range(3):
            assert _close(H(q)(H(q)(s)), s)

    def test_accumulates_overlapping_contributions(self):
        # |0> and |1> both feed key 0 and key 1
        amps = {_b("0"): 0.6, _b("1"): 0.8}
        new = apply_h(amps, 0)
        assert new[_b("0")] == pytest.approx((0.6 + 0.8) / math.sqrt(2))
        assert new[_b("1")] == pytest.approx((0.6 - 0.8) / math.sqrt(2))

    def test_cancelled_entries_pruned(self):
        out = H(0)(H(0)(H(1)(all_zeros(2).unwrap())))
        assert len(out) == 2
        assert out.probability_of(_b("00")) == pytest.approx(0.5)
        assert out.probability_of(_b("10")) == pytest.approx(0.5)


class TestCX:
    def test_control_set(self):
        out = CX(0, 1)(basis_state("01").unwrap())
        assert out.amplitudes == {_b("11"): 1}

    def test_control_clear(self):
        s = basis_state("10").unwrap()
        assert CX(0, 1)(s) == s

    def test_bell_state(self):
        out = CX(0, 1)(H(0)(all_zeros(2).unwrap()))
        assert out.probability_of(_b("00")) == pytest.approx(0.5)
        assert out.probability_of(_b("11")) == pytest.approx(0.5)
        assert out.amplitude_of(_b("01")) == 0


class TestPhase:
    def test_s_on_one(self):
        out = S(0)(basis_state("1").unwrap())
        assert out.amplitude_of(_b("1")) == 1j

    def test_s_on_zero(self):
        s = all_zeros(1).unwrap()
        assert S(0)(s) == s

    def test_t_phase(self):
        out = T(0)(basis_state("1").unwrap())
        expected = complex(1 / math.sqrt(2), 1 / math.sqrt(2))
        assert abs(out.amplitude_of(_b("1")) - expected) < 1e-12

    def test_two_t_make_s(self):
        s = _mixed_state()
        assert _close(T(1)(T(1)(s)), S(1)(s))


class TestOracle:
    @pytest.mark.parametrize(
        "f,label,expected",
        [
            (BooleanFunction.CONSTANT_ZERO, "01", "01"),
            (BooleanFunction.CONSTANT_ONE, "00", "10"),
            (BooleanFunction.IDENTITY, "01", "11"),
            (BooleanFunction.IDENTITY, "00", "00"),
            (BooleanFunction.NEGATION, "00", "10"),
            (BooleanFunction.NEGATION, "11", "11"),
        ],
    )
    def test_xor_into_output(self, f, label, expected):
        out = Oracle(f)(basis_state(label).unwrap())
        assert out.amplitudes == {_b(expected): 1}

    def test_name(self):
        assert Oracle(BooleanFunction.IDENTITY).name == "Oracle(f(x) = x)"


class TestCircuit:
    def test_order_matters(self):
        s = all_zeros(2).unwrap()
        a = Circuit.of(X(0), CX(0, 1))(s)
        b = Circuit.of(CX(0, 1), X(0))(s)
        assert a.amplitudes == {_b("11"): 1}
        assert b.amplitudes == {_b("01"): 1}

    def test_name(self):
        c = Circuit.of(X(1), H(0), CX(0, 1))
        assert c.name == "X(1) → H(0) → CX(0,1)"

    def test_empty_is_identity(self):
        s = _mixed_state()
        assert Circuit()(s) == s

    def test_rshift_composition(self):
        c = X(0) >> H(1) >> S(0)
        assert isinstance(c, Circuit)
        assert [g.name for g in c] == ["X(0)", "H(1)", "S(0)"]

    def test_nested(self):
        s = all_zeros(2).unwrap()
        inner = Circuit.of(H(0), CX(0, 1))
        assert Circuit.of(inner, X(1))(s) == X(1)(inner(s))
