"""
Board geometry shared by the search, the adapter and the local engine.

Board layout follows Battlesnake: (0,0) is bottom-left, "up" grows y.
"""

from enum import Enum
from typing import NamedTuple


class Coordinate(NamedTuple):
    x: int
    y: int

    def __add__(self, other):
        return Coordinate(self.x + other.x, self.y + other.y)

    def in_bounds(self, size: "Coordinate") -> bool:
        """True if this cell lies on a board of the given dimensions."""
        return 0 <= self.x < size.x and 0 <= self.y < size.y


def manhattan(a: Coordinate, b: Coordinate) -> int:
    return abs(a.x - b.x) + abs(a.y - b.y)


class Direction(Enum):
    # Declaration order is the search order.
    UP = ("up", Coordinate(0, 1))
    DOWN = ("down", Coordinate(0, -1))
    LEFT = ("left", Coordinate(-1, 0))
    RIGHT = ("right", Coordinate(1, 0))

    def __init__(self, move: str, vector: Coordinate):
        self.move = move
        self.vector = vector

    def __str__(self):
        return self.name


ALL_DIRECTIONS = tuple(Direction)
