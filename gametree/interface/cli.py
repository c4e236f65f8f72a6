import chess

from gametree.config import CONFIG, configure_logging
from gametree.core.errors import SearchTimeout
from gametree.main import Engine


def main(engine: Engine = None, read=input, write=print):
    """Human plays White in UCI notation, the engine answers as Black.

    Commands besides moves: ``undo`` takes back a full move, ``quit`` exits.
    """
    engine = engine or Engine()
    board = engine.state.board

    while not board.is_game_over():
        write(str(board))
        write("----------------------------")

        if board.turn == chess.WHITE:
            command = read("Enter your move (uci format, e2e4): ").strip()
            if command == "quit":
                return
            if command == "undo":
                engine.undo_move()
                engine.undo_move()
                continue
            if not engine.make_move(command):
                write("Illegal move, try again.")
            continue

        try:
            move, value, pv = engine.get_best_move()
        except SearchTimeout:
            write("Engine ran out of time, game aborted.")
            return
        write(f"Engine plays: {move} | Eval: {value:g} | PV: {' '.join(pv)}")
        engine.make_move(move)

    write("Game Over")
    write(f"Result: {board.result()}")


if __name__ == "__main__":
    configure_logging(CONFIG)
    main()
