"""gametree: generic two-player minimax search with alpha-beta pruning.

Subpackages:
    core       - search contracts, engine, timer, evaluated lines
    games      - chess (python-chess) and tic-tac-toe adapters
    interface  - command line and HTTP front ends
"""

__version__ = "1.0.0"
