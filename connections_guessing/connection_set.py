"""
Connection Sets
===============

A set of connections stored as a 70-bit integer, bit i standing for
ALL_CONNECTIONS[i]. Iteration is therefore always in canonical order.

Partitioning a set by a guess is the inner loop of the search, so the
members of each (guess, score) class are precomputed as bit masks from the
score matrix and a partition is three bitwise ANDs.
"""

import numpy as np
from collections.abc import Set
from typing import Callable, Dict, Iterable, Iterator, List

from .connection import (
    ALL_A_CONNECTIONS as _ALL_A_CONNECTION_LIST,
    ALL_CONNECTIONS,
    N_CONNECTIONS,
    SCORE_MATRIX,
    Connection,
    Score,
)


class FrozenConnectionSetError(RuntimeError):
    """Raised when modifying a ConnectionSet after freeze()."""


def _members_mask(flags: np.ndarray) -> int:
    mask = 0
    for i in np.flatnonzero(flags):
        mask |= 1 << int(i)
    return mask


# PARTITION_MASKS[guess index][score] -> bits of every connection with that score against the guess
PARTITION_MASKS: List[List[int]] = [
    [_members_mask(SCORE_MATRIX[:, g] == int(score)) for score in Score]
    for g in range(N_CONNECTIONS)
]


class ConnectionSet(Set):
    """
    A set of Connection objects backed by a bit vector.

    The set is mutable until freeze() is called. add() and remove() return
    whether they changed the set, and both raise
    FrozenConnectionSetError once the set is frozen.
    """

    __slots__ = ("_bits", "_frozen")

    def __init__(self, connections: Iterable[Connection] = ()):
        self._bits = 0
        self._frozen = False
        for connection in connections:
            self.add(connection)

    @classmethod
    def _from_bits(cls, bits: int, frozen: bool = False) -> "ConnectionSet":
        result = cls.__new__(cls)
        result._bits = bits
        result._frozen = frozen
        return result

    @classmethod
    def _from_iterable(cls, it):
        return cls(it)

    @classmethod
    def empty(cls) -> "ConnectionSet":
        return cls()

    @classmethod
    def of(cls, *connections: Connection) -> "ConnectionSet":
        return cls(connections)

    @classmethod
    def from_collection(cls, connections: Iterable[Connection]) -> "ConnectionSet":
        return cls(connections)

    # ------------------------------------------------------------------
    # Frozen state
    # ------------------------------------------------------------------

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> "ConnectionSet":
        self._frozen = True
        return self

    def _check_not_frozen(self):
        if self._frozen:
            raise FrozenConnectionSetError("ConnectionSet is frozen")

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def bits(self) -> int:
        """The backing bit vector; usable as a hashable key for the contents."""
        return self._bits

    def __len__(self) -> int:
        return self._bits.bit_count()

    def is_empty(self) -> bool:
        return self._bits == 0

    def __contains__(self, connection) -> bool:
        if not isinstance(connection, Connection):
            return False
        return bool(self._bits & (1 << connection.index))

    def __iter__(self) -> Iterator[Connection]:
        # Walks a snapshot, so the set may be modified while iterating.
        bits = self._bits
        while bits:
            low = bits & -bits
            yield ALL_CONNECTIONS[low.bit_length() - 1]
            bits ^= low

    def __eq__(self, other):
        if isinstance(other, ConnectionSet):
            return self._bits == other._bits
        return super().__eq__(other)

    __hash__ = None

    def __repr__(self):
        return "{" + ", ".join(c.label for c in self) + "}"

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def add(self, connection: Connection) -> bool:
        self._check_not_frozen()
        bit = 1 << connection.index
        if self._bits & bit:
            return False
        self._bits |= bit
        return True

    def remove(self, connection: Connection) -> bool:
        self._check_not_frozen()
        if connection not in self:
            return False
        self._bits &= ~(1 << connection.index)
        return True

    def remove_if(self, predicate: Callable[[Connection], bool]) -> int:
        """Remove every member for which predicate is true. Returns the number removed."""
        self._check_not_frozen()
        removed = 0
        for connection in self:
            if predicate(connection):
                self._bits &= ~(1 << connection.index)
                removed += 1
        return removed

    # ------------------------------------------------------------------
    # Partitioning
    # ------------------------------------------------------------------

    def partition_by_guess(self, guess: Connection) -> Dict[Score, "ConnectionSet"]:
        """
        Split this set by the score each member gets against guess.

        Args:
            guess: any connection, not necessarily a member of this set

        Returns:
            Frozen sets keyed by MATCH, ONE_AWAY and TWO_AWAY. Their union is
            this set and they are pairwise disjoint.
        """
        masks = PARTITION_MASKS[guess.index]
        return {
            score: ConnectionSet._from_bits(self._bits & masks[score], frozen=True)
            for score in Score
        }


# The 35 connections that contain item A.
ALL_A_CONNECTIONS = ConnectionSet(_ALL_A_CONNECTION_LIST).freeze()
