"""Core search components: contracts, evaluated lines, timer and the engine."""

from .contracts import Deadline, GameState, Move, MoveGenerator
from .errors import SearchInvariantError, SearchTimeout
from .evaluated import EvaluatedMove
from .search import Cutoff, SearchEngine
from .timer import Timer
