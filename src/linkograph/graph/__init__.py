"""
Linkograph subsystem.

Defines the move / score-matrix data model, the recomputation engine
that keeps them in sync with edited input, and a graph view of the
active links.
"""

from linkograph.graph.schema import (
    Move,
    ActiveLink,
    ScoreMatrix,
    LinkographSnapshot,
    parse_moves,
)
from linkograph.graph.debounce import Debouncer
from linkograph.graph.engine import LinkographEngine

__all__ = [
    "Move",
    "ActiveLink",
    "ScoreMatrix",
    "LinkographSnapshot",
    "parse_moves",
    "Debouncer",
    "LinkographEngine",
]
