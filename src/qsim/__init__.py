from qsim.bits import BitPattern
from qsim.functions import BooleanFunction
from qsim.gates import CX, Circuit, Gate, H, Oracle, S, T, X
from qsim.measure import marginal_probabilities, measure
from qsim.state import (
    EmptyState,
    Err,
    InvalidAmplitude,
    InvalidBitStringLength,
    InvalidNormalization,
    MismatchedQubitCount,
    Ok,
    QuantumState,
    QuantumStateError,
    all_ones,
    all_zeros,
    basis_state,
)
from qsim.deutsch import classify_all, deutsch_circuit, run_deutsch
