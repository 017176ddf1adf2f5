"""Deutsch's algorithm on the sparse simulator.

Decides with a single oracle call whether f: {0,1} -> {0,1} is constant or
balanced.  Qubit 0 is the input register, qubit 1 the output register.
"""
from __future__ import annotations

import logging
from typing import Dict

from qsim.functions import BooleanFunction
from qsim.gates import Circuit, H, Oracle, X
from qsim.measure import measure
from qsim.state import all_zeros

logger = logging.getLogger(__name__)


def deutsch_circuit(f: BooleanFunction) -> Circuit:
    return Circuit.of(X(1), H(0), H(1), Oracle(f), H(0))


def run_deutsch(f: BooleanFunction) -> bool:
    """Return True when ``f`` is judged constant (qubit 0 reads 0)."""
    state = all_zeros(2).unwrap()
    logger.debug("initial state: %s", state)
    for gate in deutsch_circuit(f):
        state = gate(state)
        logger.debug("after %s: %s", gate.name, state)

    outcome, probability = measure(0, state)
    verdict = outcome == 0
    logger.info(
        "%s: measured %d (p=%.6f) -> %s",
        f.label, outcome, probability, "constant" if verdict else "balanced",
    )
    return verdict


def classify_all() -> Dict[BooleanFunction, bool]:
    return {f: run_deutsch(f) for f in BooleanFunction}
