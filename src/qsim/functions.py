"""The four boolean functions f: {0,1} -> {0,1} accepted by the oracle."""
from __future__ import annotations

from enum import Enum


class BooleanFunction(Enum):
    CONSTANT_ZERO = "f(x) = 0"
    CONSTANT_ONE = "f(x) = 1"
    IDENTITY = "f(x) = x"
    NEGATION = "f(x) = ¬x"

    def __call__(self, bit: int) -> int:
        if self is BooleanFunction.CONSTANT_ZERO:
            return 0
        if self is BooleanFunction.CONSTANT_ONE:
            return 1
        if self is BooleanFunction.IDENTITY:
            return bit
        return 1 - bit

    @property
    def label(self) -> str:
        return self.value

    @property
    def is_constant(self) -> bool:
        return self in (BooleanFunction.CONSTANT_ZERO, BooleanFunction.CONSTANT_ONE)
