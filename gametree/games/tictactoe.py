"""Tic-tac-toe with immutable states.

``apply`` returns a new state and ``undo`` does nothing, which is the other
half of the move contract the search engine accepts.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

EMPTY = "."
MARKS = ("X", "O")

LINES = (
    (0, 1, 2), (3, 4, 5), (6, 7, 8),
    (0, 3, 6), (1, 4, 7), (2, 5, 8),
    (0, 4, 8), (2, 4, 6),
)


@dataclass(frozen=True)
class TicTacToeState:
    cells: Tuple[str, ...] = (EMPTY,) * 9
    player: int = 0

    @classmethod
    def from_string(cls, layout: str, player: int = None) -> "TicTacToeState":
        """Build from a 9-character string such as ``"XX.OO...."``.

        The side to move is inferred from the mark counts unless given.
        """
        cells = tuple(layout.replace("\n", "").replace(" ", ""))
        if len(cells) != 9 or any(c not in (EMPTY,) + MARKS for c in cells):
            raise ValueError(f"invalid tic-tac-toe layout: {layout!r}")
        if player is None:
            player = 0 if cells.count("X") == cells.count("O") else 1
        return cls(cells, player)

    def winner(self) -> Optional[int]:
        for a, b, c in LINES:
            if self.cells[a] != EMPTY and self.cells[a] == self.cells[b] == self.cells[c]:
                return MARKS.index(self.cells[a])
        return None

    def current_player(self) -> int:
        return self.player

    def evaluate(self, depth: int):
        winner = self.winner()
        scores = [0, 0]
        if winner is not None:
            # quicker wins are worth more
            scores[winner] = 1 + depth
        return scores

    def __str__(self):
        return "\n".join("".join(self.cells[r * 3:r * 3 + 3]) for r in range(3))


@dataclass(frozen=True)
class TicTacToeMove:
    cell: int

    def apply(self, state: TicTacToeState) -> TicTacToeState:
        cells = list(state.cells)
        cells[self.cell] = MARKS[state.player]
        return TicTacToeState(tuple(cells), 1 - state.player)

    def undo(self, state: TicTacToeState):
        pass

    def __str__(self):
        return str(self.cell)


class TicTacToeMoveGenerator:
    def generate(self, state: TicTacToeState) -> List[TicTacToeMove]:
        if state.winner() is not None:
            return []
        return [TicTacToeMove(i) for i, c in enumerate(state.cells) if c == EMPTY]
