"""
Connections Guessing - Exhaustive Search
========================================

How many ways of splitting the last 8 items of an NYT Connections puzzle into
two connections can a guessing strategy always find?

With 4 lives: 15 of 35. With 5 lives: 28. With 6 lives: all 35.
"""

__version__ = "1.0.0"

from .connection import (Connection, Score, InvalidConnectionError, InvalidItemError,
                         ALL_CONNECTIONS, ITEMS)
from .connection_set import ConnectionSet, FrozenConnectionSetError, ALL_A_CONNECTIONS
from .search import ConnectionsSearch, SearchConfig, count_connections, main
