"""
Tests for the concrete games driven through the search engine.

Covers:
- ChessState board operations (moves, undo, FEN, invalid input)
- Chess evaluation (material, mate, draws)
- Chess search (mates for both colours, hanging pieces, terminal positions)
- Tic-tac-toe with immutable states (wins, blocks, perfect play)
"""

import chess
import pytest

from gametree.config import EvalConfig
from gametree.core.errors import SearchTimeout
from gametree.core.search import SearchEngine
from gametree.core.timer import Timer
from gametree.games.chess_game import ChessMove, ChessMoveGenerator, ChessState
from gametree.games.tictactoe import TicTacToeMove, TicTacToeMoveGenerator, TicTacToeState


FOOLS_MATE = "rnb1kbnr/pppp1ppp/8/4p3/6Pq/5P2/PPPPP2P/RNBQKBNR w KQkq - 0 1"


class RaisingTimer:
    def __init__(self, checks):
        self.remaining = checks

    def time_check(self):
        if self.remaining <= 0:
            raise SearchTimeout("out of time")
        self.remaining -= 1


# ════════════════════════════════════════════════════════════════════════════
#  CHESS STATE TESTS
# ════════════════════════════════════════════════════════════════════════════

class TestChessState:
    def test_initial_position(self):
        s = ChessState()
        assert s.get_fen() == chess.STARTING_FEN
        assert s.current_player() == 0

    def test_make_legal_move(self):
        s = ChessState()
        assert s.make_move("e2e4") is True
        assert s.move_history == ["e2e4"]
        assert s.current_player() == 1

    def test_make_illegal_move(self):
        s = ChessState()
        assert s.make_move("e2e5") is False

    def test_make_garbage_input(self):
        s = ChessState()
        assert s.make_move("zzzz") is False
        assert s.make_move("") is False
        assert s.make_move("12345") is False

    def test_undo_move(self):
        s = ChessState()
        s.make_move("e2e4")
        s.undo_move()
        assert s.get_fen() == chess.STARTING_FEN
        assert s.move_history == []

    def test_undo_empty(self):
        s = ChessState()
        s.undo_move()
        assert s.get_fen() == chess.STARTING_FEN

    def test_set_fen(self):
        s = ChessState()
        fen = "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq - 0 1"
        s.set_fen(fen)
        assert s.get_fen() == fen

    def test_set_invalid_fen(self):
        with pytest.raises(ValueError):
            ChessState().set_fen("not a fen")

    def test_reset(self):
        s = ChessState()
        s.make_move("e2e4")
        s.reset()
        assert s.get_fen() == chess.STARTING_FEN

    def test_legal_moves_initial(self):
        assert len(ChessState().get_legal_moves()) == 20


# ════════════════════════════════════════════════════════════════════════════
#  CHESS EVALUATION TESTS
# ════════════════════════════════════════════════════════════════════════════

class TestChessEvaluation:
    def setup_method(self):
        self.cfg = EvalConfig()

    def test_initial_material_equal(self):
        assert ChessState(eval_config=self.cfg).evaluate(0) == [4000, 4000]

    def test_extra_queen(self):
        s = ChessState("4k3/8/8/8/8/8/8/3QK3 w - - 0 1", eval_config=self.cfg)
        assert s.evaluate(0) == [900, 0]

    def test_checkmate_scores_winner(self):
        s = ChessState(FOOLS_MATE, eval_config=self.cfg)
        assert s.evaluate(0) == [0, self.cfg.mate_score]
        assert s.evaluate(3) == [0, self.cfg.mate_score + 3]

    def test_stalemate_is_even(self):
        s = ChessState("5k2/5P2/5K2/8/8/8/8/8 b - - 0 1", eval_config=self.cfg)
        assert s.board.is_stalemate()
        assert s.evaluate(0) == [0, 0]

    def test_custom_piece_values(self):
        cfg = EvalConfig(piece_values={"QUEEN": 10})
        s = ChessState("4k3/8/8/8/8/8/8/3QK3 w - - 0 1", eval_config=cfg)
        assert s.evaluate(0) == [10, 0]


# ════════════════════════════════════════════════════════════════════════════
#  CHESS MOVE / GENERATOR TESTS
# ════════════════════════════════════════════════════════════════════════════

class TestChessMoves:
    def test_apply_and_undo_restore_board(self):
        s = ChessState()
        m = ChessMove.from_uci("g1f3")
        assert m.apply(s) is s
        assert s.board.piece_at(chess.F3) is not None
        m.undo(s)
        assert s.get_fen() == chess.STARTING_FEN

    def test_moves_compare_by_value(self):
        assert ChessMove.from_uci("e2e4") == ChessMove(chess.Move.from_uci("e2e4"))
        assert str(ChessMove.from_uci("e2e4")) == "e2e4"

    def test_captures_first(self):
        s = ChessState("rnbqkbnr/ppp1pppp/8/3p4/4P3/8/PPPP1PPP/RNBQKBNR w KQkq d6 0 1")
        moves = ChessMoveGenerator().generate(s)
        assert moves[0] == ChessMove.from_uci("e4d5")
        assert len(moves) == len(s.get_legal_moves())

    def test_generation_order_kept(self):
        s = ChessState()
        moves = ChessMoveGenerator(captures_first=False).generate(s)
        assert [m.uci() for m in moves] == [m.uci() for m in s.board.legal_moves]

    def test_no_moves_when_mated(self):
        assert ChessMoveGenerator().generate(ChessState(FOOLS_MATE)) == []


# ════════════════════════════════════════════════════════════════════════════
#  CHESS SEARCH TESTS
# ════════════════════════════════════════════════════════════════════════════

class TestChessSearch:
    def setup_method(self):
        self.engine = SearchEngine(Timer())
        self.gen = ChessMoveGenerator()

    def test_white_back_rank_mate(self):
        s = ChessState("6k1/5ppp/8/8/8/8/8/R3K3 w - - 0 1")
        assert self.engine.search(s, self.gen, 1) == ChessMove.from_uci("a1a8")

    def test_white_back_rank_mate_depth_two(self):
        s = ChessState("6k1/5ppp/8/8/8/8/8/R3K3 w - - 0 1")
        assert self.engine.search(s, self.gen, 2) == ChessMove.from_uci("a1a8")
        assert self.engine.killer.value > s.cfg.mate_score

    def test_black_back_rank_mate(self):
        s = ChessState("r5k1/8/8/8/8/8/5PPP/6K1 b - - 0 1")
        assert s.current_player() == 1
        assert self.engine.search(s, self.gen, 2) == ChessMove.from_uci("a8a1")
        assert self.engine.killer.value < -s.cfg.mate_score

    def test_captures_hanging_queen(self):
        s = ChessState("4k3/8/8/3q4/4P3/8/8/4K3 w - - 0 1")
        assert self.engine.search(s, self.gen, 2) == ChessMove.from_uci("e4d5")

    def test_checkmated_returns_none(self):
        s = ChessState(FOOLS_MATE)
        assert self.engine.search(s, self.gen, 2) is None
        assert self.engine.killer.value < 0

    def test_stalemate_returns_none(self):
        s = ChessState("5k2/5P2/5K2/8/8/8/8/8 b - - 0 1")
        assert self.engine.search(s, self.gen, 2) is None
        assert self.engine.killer.value == 0

    def test_board_restored_after_search(self):
        s = ChessState("r1bqk2r/pppp1ppp/2n2n2/2b1p3/2B1P3/5N2/PPPP1PPP/RNBQ1RK1 b kq - 5 4")
        fen = s.get_fen()
        self.engine.search(s, self.gen, 2)
        assert s.get_fen() == fen
        assert len(s.board.move_stack) == 0

    def test_board_restored_after_timeout(self):
        s = ChessState()
        engine = SearchEngine(RaisingTimer(30))
        with pytest.raises(SearchTimeout):
            engine.search(s, self.gen, 3)
        assert s.get_fen() == chess.STARTING_FEN
        assert len(s.board.move_stack) == 0

    def test_search_returns_legal_move(self):
        s = ChessState()
        move = self.engine.search(s, self.gen, 2)
        assert move.move in s.board.legal_moves

    def test_consecutive_turns_reuse_killer(self):
        s = ChessState("4k3/8/8/3q4/4P3/8/8/4K3 w - - 0 1")
        move = self.engine.search(s, self.gen, 3)
        assert move == ChessMove.from_uci("e4d5")
        s.make_move(move.uci())
        reply = self.engine.search(s, self.gen, 3)
        assert reply.move in s.board.legal_moves


# ════════════════════════════════════════════════════════════════════════════
#  TIC-TAC-TOE (IMMUTABLE STATES)
# ════════════════════════════════════════════════════════════════════════════

class TestTicTacToe:
    def setup_method(self):
        self.engine = SearchEngine(Timer())
        self.gen = TicTacToeMoveGenerator()

    def test_from_string_infers_player(self):
        assert TicTacToeState.from_string("XX.OO....").current_player() == 0
        assert TicTacToeState.from_string("XX..O....").current_player() == 1

    def test_from_string_rejects_bad_layout(self):
        with pytest.raises(ValueError):
            TicTacToeState.from_string("XX")
        with pytest.raises(ValueError):
            TicTacToeState.from_string("XX.OO...Z")

    def test_apply_returns_new_state(self):
        s = TicTacToeState()
        nxt = TicTacToeMove(4).apply(s)
        assert nxt is not s
        assert s.cells[4] == "."
        assert nxt.cells[4] == "X"
        assert nxt.current_player() == 1

    def test_winner(self):
        assert TicTacToeState.from_string("XXXOO....").winner() == 0
        assert TicTacToeState.from_string("OOOXX.X..").winner() == 1
        assert TicTacToeState().winner() is None

    def test_no_moves_after_win(self):
        assert self.gen.generate(TicTacToeState.from_string("XXXOO....")) == []

    def test_takes_win(self):
        s = TicTacToeState.from_string("XX.OO....")
        assert self.engine.search(s, self.gen, 2) == TicTacToeMove(2)

    def test_blocks_win(self):
        s = TicTacToeState.from_string("XX..O....")
        assert self.engine.search(s, self.gen, 2) == TicTacToeMove(2)

    def test_perfect_play_draws(self):
        s = TicTacToeState()
        while self.gen.generate(s):
            move = self.engine.search(s, self.gen, 9)
            s = move.apply(s)
        assert s.winner() is None
        assert "." not in s.cells


# ════════════════════════════════════════════════════════════════════════════
#  CONTRACTS
# ════════════════════════════════════════════════════════════════════════════

class TestContracts:
    def test_chess_satisfies_contracts(self):
        from gametree.core.contracts import GameState, Move, MoveGenerator
        assert isinstance(ChessState(), GameState)
        assert isinstance(ChessMove.from_uci("e2e4"), Move)
        assert isinstance(ChessMoveGenerator(), MoveGenerator)

    def test_tictactoe_satisfies_contracts(self):
        from gametree.core.contracts import GameState, Move, MoveGenerator
        assert isinstance(TicTacToeState(), GameState)
        assert isinstance(TicTacToeMove(0), Move)
        assert isinstance(TicTacToeMoveGenerator(), MoveGenerator)

    def test_timer_satisfies_deadline(self):
        from gametree.core.contracts import Deadline
        assert isinstance(Timer(), Deadline)
