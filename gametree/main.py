import logging
from typing import List, Optional, Tuple

from gametree.config import CONFIG, Config
from gametree.core.errors import SearchTimeout
from gametree.core.search import SearchEngine
from gametree.core.timer import Timer
from gametree.core.utils import format_info
from gametree.games.chess_game import ChessMoveGenerator, ChessState

logger = logging.getLogger(__name__)


class Engine:
    """Plays chess with the search engine, one best move per call.

    On a timeout the search is retried one ply shallower with a fresh
    budget; a timeout at depth 1 is re-raised to the caller.
    """

    def __init__(self, depth: Optional[int] = None, time_limit_ms: Optional[int] = None,
                 config: Config = CONFIG):
        self.config = config
        self.depth = depth or config.search.depth
        self.time_limit_ms = time_limit_ms if time_limit_ms is not None else config.search.time_limit_ms
        self.state = ChessState(eval_config=config.eval)
        self.generator = ChessMoveGenerator()
        self.timer = Timer(self.time_limit_ms)
        self.search = SearchEngine(self.timer, killer_ordering=config.search.killer_ordering)

    def get_best_move(self) -> Tuple[Optional[str], float, List[str]]:
        """Return (uci move or None, value, principal variation as uci strings)."""
        depth = self.depth
        while True:
            self.timer.start(self.time_limit_ms)
            try:
                move = self.search.search(self.state, self.generator, depth)
                break
            except SearchTimeout as e:
                if depth <= 1:
                    raise
                logger.warning("%s; retrying at depth %d", e, depth - 1)
                depth -= 1

        line = self.search.killer
        pv = [m.uci() for m in line.principal_variation()]
        logger.info(format_info(depth, line.value, self.search.nodes, self.timer.elapsed_ms,
                                pv, self.config.eval.mate_score))
        return (move.uci() if move else None), line.value, pv

    def make_move(self, move_uci: str) -> bool:
        return self.state.make_move(move_uci)

    def undo_move(self):
        self.state.undo_move()

    def new_game(self, fen: Optional[str] = None):
        """Start over from ``fen`` (or the initial position) and forget the killer."""
        if fen:
            self.state.set_fen(fen)
        else:
            self.state.reset()
        self.search.reset()

    def print_board(self):
        print(self.state)
