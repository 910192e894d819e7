"""
Reference opponents for local testing.

All share the engine's bot signature:
    bot(own_body, opponent_body, board_size, food) -> Direction

1. random_valid - any move that is not immediately fatal
2. greedy_food - shortest Manhattan step toward the food
3. space_aware - flood fill to avoid traps, then food
"""

from collections import deque
import random

from snake_minimax.geometry import ALL_DIRECTIONS, Coordinate, Direction, manhattan


# ── Shared utilities ──────────────────────────────────────────────

def get_occupied(own: list, opponent: list) -> set:
    """Return set of cells covered by either snake."""
    return set(own) | set(opponent)


def safe_moves(head: Coordinate, board_size: Coordinate, occupied: set) -> dict:
    """Return dict of Direction -> cell for moves that stay on the board and off bodies."""
    moves = {d: head + d.vector for d in ALL_DIRECTIONS}
    return {d: pos for d, pos in moves.items()
            if pos.in_bounds(board_size) and pos not in occupied}


def flood_fill(start: Coordinate, board_size: Coordinate, occupied: set) -> int:
    """Count reachable cells from a position."""
    visited = {start}
    queue = deque([start])
    while queue:
        cell = queue.popleft()
        for d in ALL_DIRECTIONS:
            nxt = cell + d.vector
            if nxt.in_bounds(board_size) and nxt not in occupied and nxt not in visited:
                visited.add(nxt)
                queue.append(nxt)
    return len(visited)


# ── Strategy 1: Random Valid ──────────────────────────────────────

def random_valid(own, opponent, board_size, food) -> Direction:
    safe = safe_moves(own[0], board_size, get_occupied(own, opponent))
    return random.choice(list(safe)) if safe else Direction.UP


# ── Strategy 2: Greedy Food ───────────────────────────────────────
# Steps toward the food, ties broken by direction order.

def greedy_food(own, opponent, board_size, food) -> Direction:
    safe = safe_moves(own[0], board_size, get_occupied(own, opponent))

    if not safe:
        return Direction.UP
    if food is None:
        return next(iter(safe))

    return min(safe, key=lambda d: manhattan(safe[d], food))


# ── Strategy 3: Space Aware ───────────────────────────────────────
# Never steps into a pocket smaller than its own body, avoids a longer
# opponent's head, and otherwise heads for food.

def space_aware(own, opponent, board_size, food) -> Direction:
    occupied = get_occupied(own, opponent)
    safe = safe_moves(own[0], board_size, occupied)
    length = len(own)

    if not safe:
        return Direction.UP
    if len(safe) == 1:
        return next(iter(safe))

    scores = {}
    for move, pos in safe.items():
        score = 0.0

        space = flood_fill(pos, board_size, occupied)
        if space < length:
            score -= 500
        score += min(space, 50)

        dist = manhattan(pos, opponent[0])
        if dist <= 1 and len(opponent) >= length:
            score -= 100

        if food is not None:
            score += max(0, 20 - manhattan(pos, food)) * 3

        scores[move] = score

    return max(scores, key=scores.get)


# Registry for easy access
OPPONENTS = {
    "random-valid": random_valid,
    "greedy-food": greedy_food,
    "space-aware": space_aware,
}
