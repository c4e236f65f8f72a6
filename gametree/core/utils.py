from typing import Iterable


def format_info(depth, value, nodes, elapsed_ms, pv_moves: Iterable, mate_score=None) -> str:
    """One-line search summary in the style of a UCI ``info`` string."""
    pv_str = " ".join(str(m) for m in pv_moves)
    elapsed = elapsed_ms / 1000.0
    nps = int(nodes / elapsed) if elapsed > 0 else 0

    if mate_score is not None and abs(value) > mate_score - 100:
        score_str = f"mate {'+' if value > 0 else '-'}"
    else:
        score_str = f"value {value:g}"

    return f"info depth {depth} score {score_str} nodes {nodes} nps {nps} time {int(elapsed_ms)} pv {pv_str}"
