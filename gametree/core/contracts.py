"""Capability contracts the search engine is generic over.

The engine never looks inside a state or a move. Anything that provides
these methods can be searched:

    state.evaluate(depth)    -> (score_player0, score_player1)
    state.current_player()   -> 0 or 1
    move.apply(state)        -> resulting state (may be ``state`` itself)
    move.undo(state)         -> reverses the most recent apply on ``state``
    generator.generate(state)-> ordered candidate moves, empty when terminal
    timer.time_check()       -> raises SearchTimeout once out of time

Games that mutate their state in place return the same object from
``apply`` and restore it in ``undo``. Games with immutable states return a
fresh successor from ``apply`` and make ``undo`` a no-op.
"""

from typing import Protocol, Sequence, TypeVar, runtime_checkable

S = TypeVar("S", bound="GameState")
M = TypeVar("M", bound="Move")


@runtime_checkable
class GameState(Protocol):
    def evaluate(self, depth: int) -> Sequence[float]:
        """Score pair indexed by player id. ``depth`` is the remaining depth."""
        ...

    def current_player(self) -> int:
        ...


@runtime_checkable
class Move(Protocol[S]):
    def apply(self, state: S) -> S:
        ...

    def undo(self, state: S) -> None:
        ...


@runtime_checkable
class MoveGenerator(Protocol[S, M]):
    def generate(self, state: S) -> Sequence[M]:
        ...


@runtime_checkable
class Deadline(Protocol):
    def time_check(self) -> None:
        ...
