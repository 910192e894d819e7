"""Fixed-depth minimax bot for two-snake Battlesnake-style games."""

from snake_minimax.geometry import ALL_DIRECTIONS, Coordinate, Direction
from snake_minimax.minimax import (
    DEFAULT_DIRECTION,
    SCORE_MAX,
    SCORE_MIN,
    SEARCH_DEPTH,
    GameState,
    MinimaxBot,
    MinimaxSearch,
    decide,
)

__all__ = [
    "ALL_DIRECTIONS",
    "Coordinate",
    "DEFAULT_DIRECTION",
    "Direction",
    "GameState",
    "MinimaxBot",
    "MinimaxSearch",
    "SCORE_MAX",
    "SCORE_MIN",
    "SEARCH_DEPTH",
    "decide",
]
