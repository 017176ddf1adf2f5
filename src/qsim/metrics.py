"""Gate counting and cross-checks against qiskit's dense simulator."""
from __future__ import annotations

from typing import Dict

import numpy as np
from qiskit.circuit import QuantumCircuit
from qiskit.quantum_info import Statevector

from qsim.gates import Gate
from qsim.interop import to_quantum_circuit
from qsim.state import QuantumState


def count_ops(qc: QuantumCircuit) -> Dict[str, int]:
    return dict(qc.count_ops())


def estimate_t_count(qc: QuantumCircuit) -> int:
    counts = qc.count_ops()
    return counts.get("t", 0) + counts.get("tdg", 0)


def count_cnots(qc: QuantumCircuit) -> int:
    return qc.count_ops().get("cx", 0)


def simulate_reference(circuit: Gate, initial: QuantumState) -> np.ndarray:
    """Evolve ``initial`` through ``circuit`` with qiskit and return the dense vector."""
    qc = to_quantum_circuit(circuit, initial.num_qubits)
    sv = Statevector(initial.to_statevector()).evolve(qc)
    return np.asarray(sv.data)


def fidelity(state: QuantumState, reference: np.ndarray) -> float:
    return float(np.abs(np.vdot(reference, state.to_statevector())) ** 2)


def verify_circuit(circuit: Gate, initial: QuantumState) -> float:
    """Fidelity between the sparse result and qiskit's for the same circuit."""
    return fidelity(circuit(initial), simulate_reference(circuit, initial))
