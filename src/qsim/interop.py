"""Export gate sequences to qiskit circuits.

qiskit orders qubits little-endian, the same as :class:`~qsim.bits.BitPattern`
positions, so qubit indices carry over unchanged.
"""
from __future__ import annotations

from typing import Iterable

from qiskit.circuit import QuantumCircuit

from qsim.functions import BooleanFunction
from qsim.gates import CX, Circuit, Gate, H, Oracle, S, T, X


def _emit_oracle(qc: QuantumCircuit, f: BooleanFunction) -> None:
    if f in (BooleanFunction.IDENTITY, BooleanFunction.NEGATION):
        qc.cx(0, 1)
    if f in (BooleanFunction.CONSTANT_ONE, BooleanFunction.NEGATION):
        qc.x(1)


def _emit_gates(qc: QuantumCircuit, gates: Iterable[Gate]) -> None:
    for g in gates:
        if isinstance(g, Circuit):
            _emit_gates(qc, g.gates)
        elif isinstance(g, X):
            qc.x(g.qubit)
        elif isinstance(g, H):
            qc.h(g.qubit)
        elif isinstance(g, CX):
            qc.cx(g.control, g.target)
        elif isinstance(g, S):
            qc.s(g.qubit)
        elif isinstance(g, T):
            qc.t(g.qubit)
        elif isinstance(g, Oracle):
            _emit_oracle(qc, g.f)
        else:
            raise TypeError(f"no qiskit equivalent for gate {g!r}")


def to_quantum_circuit(circuit: Gate, num_qubits: int) -> QuantumCircuit:
    qc = QuantumCircuit(num_qubits)
    _emit_gates(qc, [circuit])
    return qc
