"""Concrete games implementing the search contracts."""

from .chess_game import ChessMove, ChessMoveGenerator, ChessState
from .tictactoe import TicTacToeMove, TicTacToeMoveGenerator, TicTacToeState
