"""
Exhaustive Search for the Last Two Connections
==============================================

With 8 items left there are two connections of 4 to find. Each guess is
answered with MATCH, ONE_AWAY or TWO_AWAY. How many of the possible splits can
a strategy guarantee to find within a given number of guesses?

Guessing ABCD is equivalent to guessing EFGH, so item A can be assumed present
in the solution and in every guess. That leaves 35 possible connections and
35 possible guesses.

Algorithm:
- f(U, 1) = 1 for any non-empty universe U, and f(U, lives) = 1 if |U| = 1
- f(U, lives) = max_{g} [MATCH(U,g) non-empty]
                       + f(ONE_AWAY(U,g), lives-1)
                       + f(TWO_AWAY(U,g), lives-1)
  where the max runs over all 35 connections containing A, not only those in U.
  A guess that cannot be right can still be the most informative one.

A guess that puts all of U in the same non-matching class teaches nothing and
scores 0.

The first guess is fixed to ABCD (search_fixed), since by symmetry every first
guess is as good as any other.
"""

import time
from typing import Dict, NamedTuple, Optional, Sequence, Tuple

from .connection import Connection, Score
from .connection_set import ALL_A_CONNECTIONS, ConnectionSet


# ============================================================================
# CONSTANTS
# ============================================================================

FIRST_GUESS = "ABCD"
DEFAULT_BUDGETS = (4, 5, 6)


# ============================================================================
# CONFIGURATION
# ============================================================================

class SearchConfig(NamedTuple):
    """
    Search options.

    only_guess_universe: only try guesses that are still possible solutions
    report_non_universe_advantage: print the universes where a guess that
        cannot be the solution does strictly better than every guess that can.
        Results are cached per (universe, lives), so each such universe is
        printed once per ConnectionsSearch, the first time it is evaluated.
    """
    only_guess_universe: bool = False
    report_non_universe_advantage: bool = False


# ============================================================================
# SEARCH ENGINE
# ============================================================================

class ConnectionsSearch:
    """
    Computes how many connections can be guaranteed found in a number of guesses.
    """

    def __init__(self, config: Optional[SearchConfig] = None, verbose: bool = False):
        """
        Args:
            config: search options, defaults to SearchConfig()
            verbose: print progress while searching
        """
        self.config = config or SearchConfig()
        self.verbose = verbose

        # (universe bits, lives) -> best count
        self.cache: Dict[Tuple[int, int], int] = {}
        self.cache_hits = 0
        self.cache_misses = 0

        self.search_calls = 0
        self.last_status_time = time.time()

    def clear_cache(self):
        self.cache.clear()
        self.cache_hits = 0
        self.cache_misses = 0

    def search_fixed(self, lives: int) -> int:
        """
        Search the full 35-connection universe with ABCD as the first guess.

        Args:
            lives: total number of guesses, at least 1

        Returns:
            Number of connections that can be guaranteed found
        """
        if lives < 1:
            raise ValueError(f"Need at least one life, got {lives}")

        t0 = time.time()
        scores = ALL_A_CONNECTIONS.partition_by_guess(Connection.from_label(FIRST_GUESS))
        if scores[Score.MATCH].is_empty():
            raise AssertionError(f"{FIRST_GUESS} is not in its own MATCH class")
        if lives == 1:
            return 1

        best = (1
                + self.search(scores[Score.ONE_AWAY], lives - 1)
                + self.search(scores[Score.TWO_AWAY], lives - 1))

        if self.verbose:
            print(f"  [search_fixed] lives={lives}, best={best}, calls={self.search_calls}, "
                  f"cache={len(self.cache)}, took {time.time() - t0:.2f}s")
        return best

    def search(self, universe: ConnectionSet, lives: int) -> int:
        """
        Compute how many members of universe can be found in at most lives guesses.

        For example, if guessing ABFG splits the universe into MATCH={ABFG},
        ONE_AWAY={ABCF,ABGH}, TWO_AWAY={ABCD,ABFH}, then this guess finds 1
        (for ABFG) plus the best result for {ABCF,ABGH} plus the best result
        for {ABCD,ABFH}, each with one life fewer.

        Args:
            universe: non-empty set of connections that are still possible
            lives: remaining guesses

        Returns:
            The best count over all guesses
        """
        self.search_calls += 1

        if universe.is_empty():
            raise ValueError("Cannot search an empty universe")
        if lives == 0:
            raise AssertionError(f"Out of lives with universe {universe}")
        if lives < 0:
            raise ValueError(f"Negative lives: {lives}")

        if lives == 1 or len(universe) == 1:
            # Guess any member
            return 1

        key = (universe.bits, lives)
        if key in self.cache:
            self.cache_hits += 1
            return self.cache[key]
        self.cache_misses += 1

        if self.verbose and time.time() - self.last_status_time > 2.0:
            hit_rate = self.cache_hits / (self.cache_hits + self.cache_misses) * 100
            print(f"  [search] calls={self.search_calls}, lives={lives}, n={len(universe)}, "
                  f"cache={len(self.cache)} ({hit_rate:.0f}% hit)")
            self.last_status_time = time.time()

        guesses = universe if self.config.only_guess_universe else ALL_A_CONNECTIONS

        best = 0
        best_in_universe = 0
        best_not_in_universe = 0
        best_not_in_universe_guess = None
        values: Dict[Connection, int] = {}

        for guess in guesses:
            value = self.best_for_guess(universe, guess, lives)
            values[guess] = value
            if value > best:
                best = value
            if guess in universe:
                if value > best_in_universe:
                    best_in_universe = value
            elif value > best_not_in_universe:
                best_not_in_universe = value
                best_not_in_universe_guess = guess

        if (self.config.report_non_universe_advantage
                and best_not_in_universe > best_in_universe):
            self._report_non_universe_advantage(
                universe, lives, best_not_in_universe, best_not_in_universe_guess, values)

        self.cache[key] = best
        return best

    def best_for_guess(self, universe: ConnectionSet, guess: Connection, lives: int) -> int:
        """Count of universe members found when guess is played with lives remaining."""
        scores = universe.partition_by_guess(guess)
        one_away = scores[Score.ONE_AWAY]
        two_away = scores[Score.TWO_AWAY]

        n = len(universe)
        if len(one_away) == n or len(two_away) == n:
            # No information: the only branch is the same universe again.
            return 0

        best = 0 if scores[Score.MATCH].is_empty() else 1
        for new_universe in (one_away, two_away):
            if not new_universe.is_empty():
                best += self.search(new_universe, lives - 1)
        return best

    def _report_non_universe_advantage(self, universe: ConnectionSet, lives: int, value: int,
                                       guess: Connection, values: Dict[Connection, int]):
        print(f"Universe {universe} lives {lives}: best outside universe {value} "
              f"for {guess} -> {format_partition(universe.partition_by_guess(guess))}")
        for member in universe:
            value = values.get(member)
            if value is None:
                # Members without item A are never among the guesses tried
                value = self.best_for_guess(universe, member, lives)
            scores = universe.partition_by_guess(member)
            print(f"  {member} -> {value}; split is {scores[Score.MATCH]} | "
                  f"{scores[Score.ONE_AWAY]} | {scores[Score.TWO_AWAY]}")


# ============================================================================
# UTILITY FUNCTIONS
# ============================================================================

def format_partition(scores: Dict[Score, ConnectionSet]) -> str:
    """Render a partition as 'MATCH {...} | ONE_AWAY {...} | TWO_AWAY {...}'."""
    return " | ".join(f"{score.name} {scores[score]}" for score in Score)


def count_connections(lives: int, only_guess_universe: bool = False,
                      report_non_universe_advantage: bool = False,
                      verbose: bool = False) -> int:
    """
    Number of connections that can be guaranteed found with lives guesses.

    Args:
        lives: guess budget, at least 1
        only_guess_universe: only try guesses that are still possible solutions
        report_non_universe_advantage: print where impossible guesses do better
        verbose: print progress
    """
    config = SearchConfig(only_guess_universe=only_guess_universe,
                          report_non_universe_advantage=report_non_universe_advantage)
    return ConnectionsSearch(config, verbose=verbose).search_fixed(lives)


def main(budgets: Sequence[int] = DEFAULT_BUDGETS):
    for lives in budgets:
        best = count_connections(lives)
        print(f"With {lives} lives, number of connections that can be guessed is {best}")


# ============================================================================
# MAIN
# ============================================================================

if __name__ == "__main__":
    main()
