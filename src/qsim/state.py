"""Sparse quantum state representation.

A state maps :class:`~qsim.bits.BitPattern` keys to complex amplitudes.
Absent keys have amplitude exactly zero.  States are immutable; every gate
builds a new one.

There are two ways in:

* :meth:`QuantumState.create` checks the physical invariants and returns
  ``Ok(state)`` or ``Err(error)``.  Checks run in a fixed order and stop at
  the first failure: non-empty, entry count, key lengths, finite
  amplitudes, normalization.
* :meth:`QuantumState.unsafe` skips every check and keeps the
  given dict without copying it.  Gates use it because each
  gate preserves the invariants of a valid input.  Feeding it a malformed
  mapping is not diagnosed anywhere downstream; invalid states propagate
  silently.
"""
from __future__ import annotations

import cmath
import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Generic, List, Mapping, TypeVar, Union

import numpy as np

from qsim.bits import MAX_BITS, BitPattern

logger = logging.getLogger(__name__)

Amplitudes = Dict[BitPattern, complex]

NORM_TOL = 1e-10
PRUNE_EPS = 1e-12


# --- Validation errors ---

@dataclass(frozen=True)
class EmptyState:
    pass


@dataclass(frozen=True)
class MismatchedQubitCount:
    expected: int
    actual: int


@dataclass(frozen=True)
class InvalidBitStringLength:
    pattern: BitPattern
    expected_length: int


@dataclass(frozen=True)
class InvalidAmplitude:
    amplitude: complex
    reason: str


@dataclass(frozen=True)
class InvalidNormalization:
    actual_sum: float
    expected_sum: float = 1.0


QuantumStateError = Union[
    EmptyState,
    MismatchedQubitCount,
    InvalidBitStringLength,
    InvalidAmplitude,
    InvalidNormalization,
]


# --- Result ---

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    def is_ok(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Err:
    error: QuantumStateError

    def is_ok(self) -> bool:
        return False

    def unwrap(self):
        raise ValueError(f"invalid quantum state: {self.error}")


Result = Union[Ok["QuantumState"], Err]


def _validate(amplitudes: Amplitudes, num_qubits: int) -> Union[QuantumStateError, None]:
    if not amplitudes:
        return EmptyState()

    max_states = 1 << min(num_qubits, MAX_BITS + 1) if num_qubits >= 0 else 0
    if len(amplitudes) > max_states:
        return MismatchedQubitCount(num_qubits, len(amplitudes))

    for pattern in amplitudes:
        if pattern.length != num_qubits:
            return InvalidBitStringLength(pattern, num_qubits)

    for amp in amplitudes.values():
        if not cmath.isfinite(amp):
            return InvalidAmplitude(amp, "Contains NaN or Infinity")

    total = sum(abs(amp) ** 2 for amp in amplitudes.values())
    if abs(total - 1.0) >= NORM_TOL:
        return InvalidNormalization(total)
    return None


class QuantumState:
    __slots__ = ("_amplitudes", "_num_qubits")

    def __init__(self, amplitudes: Amplitudes, num_qubits: int) -> None:
        self._amplitudes = amplitudes
        self._num_qubits = num_qubits

    @classmethod
    def create(cls, amplitudes: Mapping[BitPattern, complex], num_qubits: int) -> Result:
        amps = {k: complex(v) for k, v in amplitudes.items()}
        error = _validate(amps, num_qubits)
        if error is not None:
            logger.debug("rejected %d-qubit state: %s", num_qubits, error)
            return Err(error)
        return Ok(cls(amps, num_qubits))

    @classmethod
    def unsafe(cls, amplitudes: Amplitudes, num_qubits: int) -> QuantumState:
        return cls(amplitudes, num_qubits)

    @property
    def amplitudes(self) -> Mapping[BitPattern, complex]:
        return MappingProxyType(self._amplitudes)

    @property
    def num_qubits(self) -> int:
        return self._num_qubits

    def amplitude_of(self, pattern: BitPattern) -> complex:
        return self._amplitudes.get(pattern, 0j)

    def probability_of(self, pattern: BitPattern) -> float:
        return abs(self.amplitude_of(pattern)) ** 2

    def total_probability(self) -> float:
        return sum(abs(amp) ** 2 for amp in self._amplitudes.values())

    def support(self) -> List[int]:
        """Qubit positions set to 1 in at least one stored basis state."""
        mask = 0
        for pattern in self._amplitudes:
            mask |= pattern.bits
        return [q for q in range(self._num_qubits) if (mask >> q) & 1]

    def pruned(self, tol: float = PRUNE_EPS) -> QuantumState:
        kept = {k: v for k, v in self._amplitudes.items() if abs(v) > tol}
        if not kept:
            return self
        return QuantumState(kept, self._num_qubits)

    def to_statevector(self) -> np.ndarray:
        sv = np.zeros(1 << self._num_qubits, dtype=complex)
        for pattern, amp in self._amplitudes.items():
            sv[pattern.index] = amp
        return sv

    def __len__(self) -> int:
        return len(self._amplitudes)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, QuantumState):
            return NotImplemented
        return self._num_qubits == other._num_qubits and self._amplitudes == other._amplitudes

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        entries = ", ".join(
            f"{pattern} -> {amp}"
            for pattern, amp in sorted(self._amplitudes.items(), key=lambda kv: kv[0].bits)
        )
        return f"QuantumState({entries})"

    __repr__ = __str__


# --- Factories ---

def all_zeros(n: int) -> Result:
    return QuantumState.create({BitPattern.zero(n): 1 + 0j}, n)


def all_ones(n: int) -> Result:
    return QuantumState.create({BitPattern.ones(n): 1 + 0j}, n)


def basis_state(label: str) -> Result:
    """Single basis state from a big-endian label such as ``"01"``."""
    pattern = BitPattern.from_string(label)
    return QuantumState.create({pattern: 1 + 0j}, pattern.length)
