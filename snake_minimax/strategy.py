"""
Battlesnake entry point for the minimax bot.

Serve it with:
    python -m snake_minimax.server [port]

The search only knows about one opponent and one food item, so the
first other snake on the board and the food closest to our head are
used. Anything missing is parked off the board where it can never be
reached.
"""

from snake_minimax.geometry import Coordinate, manhattan
from snake_minimax.minimax import decide

OFF_BOARD = Coordinate(-1, -1)


def _cells(body: list) -> list:
    return [(seg["x"], seg["y"]) for seg in body]


def decide_move(data: dict, verbose: bool = False) -> str:
    """Choose the next move for data["you"].

    Returns:
        One of: "up", "down", "left", "right"
    """
    you = data["you"]
    board = data["board"]
    head = Coordinate(you["head"]["x"], you["head"]["y"])

    others = [s for s in board["snakes"] if s["id"] != you["id"]]
    opponent = _cells(others[0]["body"]) if others else [OFF_BOARD]

    food = OFF_BOARD
    if board["food"]:
        closest = min(board["food"], key=lambda f: manhattan(head, Coordinate(f["x"], f["y"])))
        food = Coordinate(closest["x"], closest["y"])

    direction = decide(
        _cells(you["body"]),
        opponent,
        (board["width"], board["height"]),
        food,
        verbose=verbose,
    )
    return direction.move
