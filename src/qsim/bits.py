"""Fixed-width bit patterns used as basis-state keys.

A :class:`BitPattern` stores an unsigned integer together with a length of
at most 64.  Position 0 is the least-significant bit; the textual form is
big-endian (most-significant character first), so ``"01"`` has bit 0 set.
"""
from __future__ import annotations

from dataclasses import dataclass

MAX_BITS = 64


@dataclass(frozen=True)
class BitPattern:
    bits: int
    length: int

    def __post_init__(self) -> None:
        if not 0 <= self.length <= MAX_BITS:
            raise ValueError(
                f"BitPattern length must be between 0 and {MAX_BITS}, got {self.length}"
            )
        # only the low `length` bits take part in equality and hashing
        object.__setattr__(self, "bits", self.bits & ((1 << self.length) - 1))

    @classmethod
    def zero(cls, length: int) -> BitPattern:
        return cls(0, length)

    @classmethod
    def ones(cls, length: int) -> BitPattern:
        if length < 0:
            raise ValueError(f"BitPattern length must be non-negative, got {length}")
        return cls((1 << length) - 1, length)

    @classmethod
    def from_string(cls, s: str) -> BitPattern:
        bits = 0
        for i, ch in enumerate(reversed(s)):
            if ch == "1":
                bits |= 1 << i
            elif ch != "0":
                raise ValueError(f"invalid character {ch!r} in bit string {s!r}")
        return cls(bits, len(s))

    def _check_position(self, i: int) -> None:
        if not 0 <= i < self.length:
            raise IndexError(f"bit position {i} out of range for length {self.length}")

    def get(self, i: int) -> int:
        self._check_position(i)
        return (self.bits >> i) & 1

    def with_bit(self, i: int, value: int) -> BitPattern:
        if value not in (0, 1):
            raise ValueError(f"bit value must be 0 or 1, got {value!r}")
        self._check_position(i)
        if value:
            return BitPattern(self.bits | (1 << i), self.length)
        return BitPattern(self.bits & ~(1 << i), self.length)

    def flip(self, i: int) -> BitPattern:
        self._check_position(i)
        return BitPattern(self.bits ^ (1 << i), self.length)

    @property
    def index(self) -> int:
        """Position of this pattern in a dense state vector."""
        return self.bits

    def __str__(self) -> str:
        return "".join(str((self.bits >> i) & 1) for i in reversed(range(self.length)))
