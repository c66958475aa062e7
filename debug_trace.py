"""Debug script for tracing where guesses outside the universe pay off."""

import sys

from connections_guessing.connection import Connection, Score
from connections_guessing.connection_set import ALL_A_CONNECTIONS
from connections_guessing.search import (ConnectionsSearch, SearchConfig, FIRST_GUESS,
                                         format_partition)


def trace_search(lives, first_guess=FIRST_GUESS):
    guess = Connection.from_label(first_guess)
    scores = ALL_A_CONNECTIONS.partition_by_guess(guess)

    print(f"\n=== Tracing search with {lives} lives ===\n")
    print(f"First guess {guess}: {format_partition(scores)}")
    for score in Score:
        print(f"  {score.name}: {len(scores[score])} connections")

    config = SearchConfig(report_non_universe_advantage=True)
    search = ConnectionsSearch(config, verbose=True)
    best = search.search_fixed(lives)

    print(f"\nWith {lives} lives, number of connections that can be guessed is {best}")
    print(f"search calls={search.search_calls}, cache hits={search.cache_hits}, "
          f"misses={search.cache_misses}")

    # Compare against only guessing possible solutions
    restricted = ConnectionsSearch(SearchConfig(only_guess_universe=True)).search_fixed(lives)
    print(f"Guessing only possible solutions: {restricted}")
    return best


if __name__ == "__main__":
    for lives in [int(arg) for arg in sys.argv[1:]] or [5]:
        trace_search(lives)
