"""Exceptions raised by the search core."""


class SearchTimeout(Exception):
    """The search deadline passed before the search completed.

    Raised by the timer collaborator and propagated through every active
    frame of the search. No move is produced; the caller decides whether to
    retry with a smaller depth, reuse an older move, or give up.
    """


class SearchInvariantError(RuntimeError):
    """An alpha-beta cutoff escaped to the root of the search.

    The root is searched with an unrestricted (-inf, +inf) window, so this
    can only happen through a programming error or non-finite leaf scores.
    """
