"""Deterministic single-qubit readout.

``measure`` reports the more likely outcome of a qubit and its probability.
No randomness is drawn and the state is neither collapsed nor renormalized.
"""
from __future__ import annotations

from typing import Tuple

from qsim.state import QuantumState


def marginal_probabilities(qubit: int, state: QuantumState) -> Tuple[float, float]:
    p0 = sum(
        abs(amp) ** 2 for pattern, amp in state.amplitudes.items() if not pattern.get(qubit)
    )
    return p0, 1.0 - p0


def measure(qubit: int, state: QuantumState) -> Tuple[int, float]:
    """Return ``(outcome, probability)``; a tie resolves to outcome 1."""
    p0, p1 = marginal_probabilities(qubit, state)
    if p0 > p1:
        return 0, p0
    return 1, p1
