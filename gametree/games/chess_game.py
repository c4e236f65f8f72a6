"""Chess on top of python-chess, wired to the search contracts.

White is player 0 and Black is player 1. Moves are applied in place with
``board.push`` and undone with ``board.pop``.
"""

from dataclasses import dataclass
from typing import List, Optional

import chess

from gametree.config import CONFIG, EvalConfig

PIECE_NAMES = {
    chess.PAWN: "PAWN",
    chess.KNIGHT: "KNIGHT",
    chess.BISHOP: "BISHOP",
    chess.ROOK: "ROOK",
    chess.QUEEN: "QUEEN",
    chess.KING: "KING",
}


class ChessState:
    def __init__(self, fen: str = None, eval_config: Optional[EvalConfig] = None):
        """Initialize from FEN or the standard starting position."""
        self.board = chess.Board(fen) if fen else chess.Board()
        self.move_history = []
        self.cfg = eval_config or CONFIG.eval

    def reset(self):
        """Reset to the initial position."""
        self.board.reset()
        self.move_history.clear()

    def set_fen(self, fen: str):
        """Set board state from a FEN string. Raises ValueError if invalid."""
        self.board.set_fen(fen)
        self.move_history.clear()

    def get_fen(self) -> str:
        return self.board.fen()

    def make_move(self, move_str: str) -> bool:
        """Push a UCI move (e.g. 'e2e4'). Returns True if legal."""
        try:
            move = chess.Move.from_uci(move_str)
        except ValueError:
            return False
        if move not in self.board.legal_moves:
            return False
        self.board.push(move)
        self.move_history.append(move_str)
        return True

    def undo_move(self):
        """Pop the last move played through make_move."""
        if self.move_history:
            self.board.pop()
            self.move_history.pop()

    def get_legal_moves(self) -> List[str]:
        return [m.uci() for m in self.board.legal_moves]

    def is_game_over(self) -> bool:
        return self.board.is_game_over()

    # search contract

    def current_player(self) -> int:
        return 0 if self.board.turn == chess.WHITE else 1

    def evaluate(self, depth: int):
        """Material per side; a mated side scores nothing, its opponent the mate score.

        ``depth`` is the remaining search depth, so shorter mates (found with
        more depth left) score higher.
        """
        if self.board.is_checkmate():
            mate = self.cfg.mate_score + depth
            return [0, mate] if self.board.turn == chess.WHITE else [mate, 0]
        if self.board.is_stalemate() or self.board.is_insufficient_material():
            return [0, 0]

        scores = [0, 0]
        for piece in self.board.piece_map().values():
            value = self.cfg.piece_values.get(PIECE_NAMES[piece.piece_type], 0)
            scores[0 if piece.color == chess.WHITE else 1] += value
        return scores

    def __str__(self):
        return str(self.board)


@dataclass(frozen=True)
class ChessMove:
    move: chess.Move

    @classmethod
    def from_uci(cls, uci: str) -> "ChessMove":
        return cls(chess.Move.from_uci(uci))

    def apply(self, state: ChessState) -> ChessState:
        state.board.push(self.move)
        return state

    def undo(self, state: ChessState):
        state.board.pop()

    def uci(self) -> str:
        return self.move.uci()

    def __str__(self):
        return self.move.uci()


class ChessMoveGenerator:
    """Legal moves with captures first, in python-chess generation order otherwise."""

    def __init__(self, captures_first: bool = True):
        self.captures_first = captures_first

    def generate(self, state: ChessState) -> List[ChessMove]:
        board = state.board
        moves = list(board.legal_moves)
        if self.captures_first:
            moves.sort(key=lambda m: not board.is_capture(m))
        return [ChessMove(m) for m in moves]
