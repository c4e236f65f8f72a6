"""Minimax search with alpha-beta pruning and killer-first move ordering.

The engine is generic: it only talks to the game through the contracts in
``gametree.core.contracts``. Scores are reduced to a single value as
``score[0] - score[1]``; player 0 maximizes it, player 1 minimizes it.

Pruning is signalled with a ``Cutoff`` value returned one frame up instead
of an exception. ``Cutoff.LOW`` means the subtree is worth at most alpha,
``Cutoff.HIGH`` at least beta. A parent drops a child that failed on its
own bad side and keeps searching, and fails itself (returning the same
cutoff) when the child failed on its good side.
"""

import enum
import logging
import math
import time
from operator import attrgetter
from typing import List, Optional, Sequence, Union

from gametree.core.contracts import Deadline, GameState, MoveGenerator
from gametree.core.errors import SearchInvariantError
from gametree.core.evaluated import EvaluatedMove

logger = logging.getLogger(__name__)

INF = math.inf


class Cutoff(enum.Enum):
    LOW = "low"
    HIGH = "high"


def score_from_evaluation(scores: Sequence[float]) -> float:
    """Reduce a per-player score pair to the value player 0 maximizes."""
    return scores[0] - scores[1]


def killer_first(moves: List, killer) -> List:
    """Move ``killer`` to the front if present, keeping the rest in order."""
    try:
        idx = moves.index(killer)
    except ValueError:
        return moves
    if idx == 0:
        return moves
    return [moves[idx]] + moves[:idx] + moves[idx + 1:]


class SearchEngine:
    """Fixed-depth minimax engine holding the previous best line.

    The best line found by ``search`` is kept as the killer and tried first
    on the next call. Use ``reset`` between unrelated games, or call
    ``search_line`` and thread the line yourself.

    Not reentrant: one search at a time per instance.
    """

    def __init__(self, timer: Deadline, killer_ordering: bool = True):
        self.timer = timer
        self.killer_ordering = killer_ordering
        self.max_depth = 0
        self.nodes = 0
        self.cutoffs = 0
        self._killer: Optional[EvaluatedMove] = None

    @property
    def killer(self) -> Optional[EvaluatedMove]:
        return self._killer

    def reset(self):
        """Forget the killer line."""
        self._killer = None

    def search(self, state: GameState, generator: MoveGenerator, max_depth: int):
        """Return the best move for the side to move, or None if there is none.

        Raises SearchTimeout (from the timer) if the deadline passes; the
        killer is left untouched in that case.
        """
        best = self.search_line(state, generator, max_depth, self._killer)
        self._killer = best
        return best.move

    def search_line(self, state: GameState, generator: MoveGenerator, max_depth: int,
                    prior: Optional[EvaluatedMove] = None) -> EvaluatedMove:
        """Search without touching the stored killer and return the whole line."""
        if max_depth < 0:
            raise ValueError(f"search depth must be >= 0, got {max_depth}")
        self.max_depth = max_depth
        self.nodes = 0
        self.cutoffs = 0
        start = time.monotonic()

        maximizing = state.current_player() == 0
        result = self._minimax(state, generator, max_depth, -INF, INF, maximizing, prior)
        if isinstance(result, Cutoff):
            raise SearchInvariantError(
                f"cutoff ({result.value}) reached the root; leaf values must lie "
                f"strictly between -inf and +inf")

        logger.debug("depth %d: best %s, %d nodes, %d cutoffs, %.1f ms",
                     max_depth, result, self.nodes, self.cutoffs,
                     (time.monotonic() - start) * 1000.0)
        return result

    def _leaf(self, state: GameState, depth: int) -> EvaluatedMove:
        return EvaluatedMove(None, score_from_evaluation(state.evaluate(depth)))

    def _minimax(self, state, generator, depth: int, alpha: float, beta: float,
                 maximizing: bool, prior: Optional[EvaluatedMove]) -> Union[EvaluatedMove, Cutoff]:
        if depth == 0:
            return self._leaf(state, depth)

        moves = list(generator.generate(state))
        if not moves:
            return self._leaf(state, depth)

        hint = None
        if prior is not None:
            if self.killer_ordering and prior.move is not None:
                moves = killer_first(moves, prior.move)
            hint = prior.continuation

        # a child failing on this side cannot beat what we already have
        dropped = Cutoff.LOW if maximizing else Cutoff.HIGH
        evaluated = []

        for move in moves:
            self.timer.time_check()
            successor = move.apply(state)
            try:
                child = self._minimax(successor, generator, depth - 1, alpha, beta,
                                      not maximizing, hint)
            finally:
                move.undo(state)
            self.nodes += 1

            if isinstance(child, Cutoff):
                if child is dropped:
                    continue
                return child

            if maximizing:
                alpha = max(alpha, child.value)
            else:
                beta = min(beta, child.value)
            if beta <= alpha:
                self.cutoffs += 1
                return Cutoff.HIGH if maximizing else Cutoff.LOW

            evaluated.append(EvaluatedMove(move, child.value, child))

        if not evaluated:
            return dropped

        # stable: ties keep generation order
        evaluated.sort(key=attrgetter("value"))
        if depth == self.max_depth and logger.isEnabledFor(logging.DEBUG):
            logger.debug("Moves: [%s]", ", ".join(str(m) for m in evaluated))
        return evaluated[-1] if maximizing else evaluated[0]
