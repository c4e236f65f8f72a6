"""Evaluated moves and the principal-variation chain they form."""

from dataclasses import dataclass
from typing import Any, Iterator, List, Optional


@dataclass(frozen=True)
class EvaluatedMove:
    """A move together with its minimax value and the best reply below it.

    ``move`` is None at a leaf (terminal position or depth exhausted).
    Following ``continuation`` from the root gives the principal variation.
    """

    move: Optional[Any]
    value: float
    continuation: Optional["EvaluatedMove"] = None

    @property
    def is_leaf(self) -> bool:
        return self.move is None

    def chain(self) -> Iterator["EvaluatedMove"]:
        node = self
        while node is not None:
            yield node
            node = node.continuation

    def principal_variation(self) -> List[Any]:
        """Moves along the chain, leaf excluded."""
        return [node.move for node in self.chain() if node.move is not None]

    def __str__(self) -> str:
        moves = ",".join(str(m) for m in self.principal_variation())
        return f"M[{self.value},[{moves}]]"
