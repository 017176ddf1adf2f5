"""Gate algebra over sparse states.

The ``apply_*`` kernels work directly on ``dict[BitPattern, complex]`` and
return a fresh dict.  The gate classes wrap them as named, composable
transforms ``QuantumState -> QuantumState``; results are built with
:meth:`QuantumState.unsafe` and are not re-validated.
"""
from __future__ import annotations

import cmath
import math
from dataclasses import dataclass
from functools import reduce
from typing import Mapping, Tuple

from qsim.bits import BitPattern
from qsim.functions import BooleanFunction
from qsim.state import PRUNE_EPS, Amplitudes, QuantumState

INV_SQRT2 = 1.0 / math.sqrt(2.0)
T_PHASE = cmath.exp(1j * math.pi / 4)


# --- Kernels on dict[BitPattern, complex] ---

def apply_x(amps: Mapping[BitPattern, complex], qubit: int) -> Amplitudes:
    return {pattern.flip(qubit): amp for pattern, amp in amps.items()}


def apply_cx(amps: Mapping[BitPattern, complex], control: int, target: int) -> Amplitudes:
    new: Amplitudes = {}
    for pattern, amp in amps.items():
        if pattern.get(control):
            new[pattern.flip(target)] = amp
        else:
            new[pattern] = amp
    return new


def apply_phase(amps: Mapping[BitPattern, complex], qubit: int, phase: complex) -> Amplitudes:
    return {
        pattern: amp * phase if pattern.get(qubit) else amp
        for pattern, amp in amps.items()
    }


def apply_h(amps: Mapping[BitPattern, complex], qubit: int) -> Amplitudes:
    new: Amplitudes = {}
    for pattern, amp in amps.items():
        key0 = pattern.with_bit(qubit, 0)
        key1 = pattern.with_bit(qubit, 1)
        half = amp * INV_SQRT2
        # contributions landing on the same key must add up
        new[key0] = new.get(key0, 0j) + half
        if pattern.get(qubit):
            new[key1] = new.get(key1, 0j) - half
        else:
            new[key1] = new.get(key1, 0j) + half
    return _prune(new)


def apply_oracle(amps: Mapping[BitPattern, complex], f: BooleanFunction) -> Amplitudes:
    new: Amplitudes = {}
    for pattern, amp in amps.items():
        out = pattern.get(1) ^ f(pattern.get(0))
        new[pattern.with_bit(1, out)] = amp
    return new


def _prune(amps: Amplitudes) -> Amplitudes:
    kept = {k: v for k, v in amps.items() if abs(v) > PRUNE_EPS}
    return kept if kept else amps


# --- Gates ---

class Gate:
    """A named pure transform of a quantum state."""

    @property
    def name(self) -> str:
        raise NotImplementedError

    def __call__(self, state: QuantumState) -> QuantumState:
        raise NotImplementedError

    def __rshift__(self, other: Gate) -> Circuit:
        return Circuit.of(self, other)


@dataclass(frozen=True)
class X(Gate):
    qubit: int

    @property
    def name(self) -> str:
        return f"X({self.qubit})"

    def __call__(self, state: QuantumState) -> QuantumState:
        return QuantumState.unsafe(apply_x(state.amplitudes, self.qubit), state.num_qubits)


@dataclass(frozen=True)
class H(Gate):
    qubit: int

    @property
    def name(self) -> str:
        return f"H({self.qubit})"

    def __call__(self, state: QuantumState) -> QuantumState:
        return QuantumState.unsafe(apply_h(state.amplitudes, self.qubit), state.num_qubits)


@dataclass(frozen=True)
class CX(Gate):
    control: int
    target: int

    @property
    def name(self) -> str:
        return f"CX({self.control},{self.target})"

    def __call__(self, state: QuantumState) -> QuantumState:
        new = apply_cx(state.amplitudes, self.control, self.target)
        return QuantumState.unsafe(new, state.num_qubits)


@dataclass(frozen=True)
class S(Gate):
    qubit: int

    @property
    def name(self) -> str:
        return f"S({self.qubit})"

    def __call__(self, state: QuantumState) -> QuantumState:
        new = apply_phase(state.amplitudes, self.qubit, 1j)
        return QuantumState.unsafe(new, state.num_qubits)


@dataclass(frozen=True)
class T(Gate):
    qubit: int

    @property
    def name(self) -> str:
        return f"T({self.qubit})"

    def __call__(self, state: QuantumState) -> QuantumState:
        new = apply_phase(state.amplitudes, self.qubit, T_PHASE)
        return QuantumState.unsafe(new, state.num_qubits)


@dataclass(frozen=True)
class Oracle(Gate):
    """|x, y> -> |x, y XOR f(x)> with bit 0 as input and bit 1 as output."""

    f: BooleanFunction

    @property
    def name(self) -> str:
        return f"Oracle({self.f.label})"

    def __call__(self, state: QuantumState) -> QuantumState:
        return QuantumState.unsafe(apply_oracle(state.amplitudes, self.f), state.num_qubits)


@dataclass(frozen=True)
class Circuit(Gate):
    gates: Tuple[Gate, ...] = ()

    @classmethod
    def of(cls, *gates: Gate) -> Circuit:
        return cls(tuple(gates))

    @property
    def name(self) -> str:
        return " → ".join(g.name for g in self.gates)

    def __call__(self, state: QuantumState) -> QuantumState:
        return reduce(lambda s, g: g(s), self.gates, state)

    def __rshift__(self, other: Gate) -> Circuit:
        return Circuit(self.gates + (other,))

    def __len__(self) -> int:
        return len(self.gates)

    def __iter__(self):
        return iter(self.gates)
