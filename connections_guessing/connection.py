"""
Connections and Scores
======================

A connection is 4 of the 8 remaining items, held as an 8-bit mask with exactly
4 bits set. Item A is bit 0, item H is bit 7.

Scoring a guess against a connection only depends on how many items they share:
- 0 or 4 shared -> MATCH (the guess is the connection or its complement)
- 1 or 3 shared -> ONE_AWAY
- 2 shared      -> TWO_AWAY
"""

import numpy as np
from numba import jit, prange
from enum import IntEnum
from typing import List, Dict


# ============================================================================
# CONSTANTS
# ============================================================================

ITEMS = "ABCDEFGH"
N_ITEMS = 8
CONNECTION_SIZE = 4


class Score(IntEnum):
    MATCH = 0
    ONE_AWAY = 1
    TWO_AWAY = 2


class InvalidConnectionError(ValueError):
    """Raised for a mask or label that is not 4 distinct items out of 8."""


class InvalidItemError(ValueError):
    """Raised for an item index outside [0, 8)."""


# ============================================================================
# NUMBA-ACCELERATED SCORING
# ============================================================================

@jit(nopython=True, cache=True)
def popcount(bits: int) -> int:
    count = 0
    while bits:
        count += bits & 1
        bits >>= 1
    return count


@jit(nopython=True, cache=True)
def compute_score(bits: int, guess_bits: int) -> int:
    """Score a guess mask against a connection mask (0=MATCH, 1=ONE_AWAY, 2=TWO_AWAY)."""
    overlap = popcount(bits & guess_bits)
    if overlap == 0 or overlap == 4:
        return 0
    if overlap == 1 or overlap == 3:
        return 1
    return 2


@jit(nopython=True, parallel=True, cache=True)
def compute_score_matrix(masks: np.ndarray) -> np.ndarray:
    """
    Compute scores for all connection/guess pairs in parallel.

    Args:
        masks: shape (n,) array of connection masks

    Returns:
        shape (n, n) matrix where result[c, g] is the score of connection c
        against guess g
    """
    n = masks.shape[0]
    result = np.zeros((n, n), dtype=np.uint8)

    for c in prange(n):
        for g in range(n):
            result[c, g] = compute_score(masks[c], masks[g])

    return result


# ============================================================================
# CONNECTION
# ============================================================================

def _enumeration_key(bits: int) -> int:
    # Bit pattern read from item A downwards as a 32-bit signed int, so item A is the sign bit.
    reversed_bits = int(format(bits, "08b")[::-1], 2) << 24
    return reversed_bits - (1 << 32) if reversed_bits & (1 << 31) else reversed_bits


class Connection:
    """
    An immutable set of 4 items out of 8.

    Instances obtained through from_mask() and from_label() are the canonical
    ones from ALL_CONNECTIONS. Equality and hashing go by mask, ordering goes
    by canonical index.
    """

    __slots__ = ("_bits",)

    def __init__(self, bits: int):
        bits = int(bits)
        if not 0 <= bits < (1 << N_ITEMS) or bits.bit_count() != CONNECTION_SIZE:
            raise InvalidConnectionError(f"Not a 4-of-8 mask: {bits:#x}")
        object.__setattr__(self, "_bits", bits)

    def __setattr__(self, name, value):
        raise AttributeError("Connection is immutable")

    def __reduce__(self):
        return (Connection.from_mask, (self._bits,))

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self

    @classmethod
    def from_mask(cls, bits: int) -> "Connection":
        return ALL_CONNECTIONS[cls(bits).index]

    @classmethod
    def from_label(cls, text: str) -> "Connection":
        """
        Parse a label such as "ABCD". Letter order does not matter.

        Raises:
            InvalidConnectionError: wrong length, unknown letters, or repeated letters
        """
        if len(text) != CONNECTION_SIZE:
            raise InvalidConnectionError(f"Wrong length: {text!r}")
        bits = 0
        for c in text:
            item = ITEMS.find(c)
            if item < 0:
                raise InvalidConnectionError(f"Unknown item {c!r} in {text!r}")
            bits |= 1 << item
        if bits.bit_count() != CONNECTION_SIZE:
            raise InvalidConnectionError(f"Repeated item in {text!r}")
        return cls.from_mask(bits)

    @property
    def bits(self) -> int:
        return self._bits

    @property
    def index(self) -> int:
        """Position in ALL_CONNECTIONS."""
        return _MASK_TO_INDEX[self._bits]

    @property
    def label(self) -> str:
        return "".join(ITEMS[i] for i in range(N_ITEMS) if self._bits & (1 << i))

    @property
    def complement(self) -> "Connection":
        return Connection.from_mask(~self._bits & 0xFF)

    def contains(self, item: int) -> bool:
        if not 0 <= item < N_ITEMS:
            raise InvalidItemError(f"Item out of range: {item}")
        return bool(self._bits & (1 << item))

    def score_against(self, guess: "Connection") -> Score:
        return Score(int(SCORE_MATRIX[self.index, guess.index]))

    def __eq__(self, other):
        if not isinstance(other, Connection):
            return NotImplemented
        return self._bits == other._bits

    def __hash__(self):
        return hash(self._bits)

    def __lt__(self, other: "Connection") -> bool:
        if not isinstance(other, Connection):
            return NotImplemented
        return self.index < other.index

    def __le__(self, other: "Connection") -> bool:
        if not isinstance(other, Connection):
            return NotImplemented
        return self.index <= other.index

    def __gt__(self, other: "Connection") -> bool:
        if not isinstance(other, Connection):
            return NotImplemented
        return self.index > other.index

    def __ge__(self, other: "Connection") -> bool:
        if not isinstance(other, Connection):
            return NotImplemented
        return self.index >= other.index

    def __str__(self):
        return self.label

    def __repr__(self):
        return f"Connection({self.label!r})"


# ============================================================================
# CANONICAL ENUMERATION
# ============================================================================

# BCDE ... EFGH, then ABCD ... AFGH
ALL_CONNECTIONS: List[Connection] = [
    Connection(bits)
    for bits in sorted(
        (b for b in range(1 << N_ITEMS) if b.bit_count() == CONNECTION_SIZE),
        key=_enumeration_key,
        reverse=True,
    )
]

_MASK_TO_INDEX: Dict[int, int] = {c.bits: i for i, c in enumerate(ALL_CONNECTIONS)}

N_CONNECTIONS = len(ALL_CONNECTIONS)

# Connections containing item A, in canonical order.
ALL_A_CONNECTIONS: List[Connection] = [c for c in ALL_CONNECTIONS if c.contains(0)]

SCORE_MATRIX: np.ndarray = compute_score_matrix(
    np.array([c.bits for c in ALL_CONNECTIONS], dtype=np.int64)
)
