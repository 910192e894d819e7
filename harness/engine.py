"""
Local two-snake game engine for testing bots.

Rules:
- 11x11 board by default, (0,0) = bottom-left
- One food item on the board at a time, respawned on a free cell when eaten
- Eating food grows the snake by one
- Death on wall collision, body collision, or head-to-head with longer/equal snake
- Last snake alive wins; on timeout the longer snake wins

A bot is any callable (own_body, opponent_body, board_size, food) -> Direction,
such as MinimaxBot().choose_direction.
"""

import random
import copy
from typing import Callable

from snake_minimax.geometry import Coordinate, Direction

Bot = Callable[[list, list, Coordinate, Coordinate], Direction]


def create_snake(snake_id: str, start: Coordinate, length: int = 3) -> dict:
    """Create a new snake with all segments stacked on its start cell."""
    return {
        "id": snake_id,
        "body": [start] * length,
    }


def spawn_food(board: dict) -> Coordinate | None:
    """Pick an unoccupied cell for the food, or None if the board is full."""
    size = board["size"]
    occupied = set()
    for snake in board["snakes"]:
        occupied.update(snake["body"])

    free = [Coordinate(x, y) for x in range(size.x) for y in range(size.y)
            if Coordinate(x, y) not in occupied]
    if not free:
        return None
    return random.choice(free)


def ask_bot(bot: Bot, snake: dict, other: dict, board: dict, verbose: bool = False) -> Direction:
    """Get a move from a bot. Bots see copies; errors and junk become UP."""
    try:
        move = bot(
            copy.deepcopy(snake["body"]),
            copy.deepcopy(other["body"]),
            board["size"],
            board["food"],
        )
        if not isinstance(move, Direction):
            move = Direction.UP
    except Exception as e:
        if verbose:
            print(f"  [{snake['id']}] error: {e}")
        move = Direction.UP
    return move


def run_game(
    bots: dict[str, Bot],
    width: int = 11,
    height: int = 11,
    max_turns: int = 500,
    seed: int | None = None,
    verbose: bool = False,
) -> dict:
    """
    Run a full game between two bots.

    Args:
        bots: dict mapping snake_id -> bot callable (exactly two)
        width, height: board dimensions
        max_turns: turn limit
        seed: random seed for food placement and seeded bots
        verbose: print turn-by-turn state

    Returns:
        dict with winner, turns, death_reasons, turn_log, final_snakes
    """
    if len(bots) != 2:
        raise ValueError(f"run_game needs exactly two bots, got {len(bots)}")

    if seed is not None:
        random.seed(seed)

    snake_ids = list(bots.keys())
    size = Coordinate(width, height)

    spawn_points = [Coordinate(1, 1), Coordinate(width - 2, height - 2)]
    board = {
        "size": size,
        "snakes": [create_snake(sid, sp) for sid, sp in zip(snake_ids, spawn_points)],
        "food": Coordinate(width // 2, height // 2),
    }

    death_reasons = {}
    turn_log = []

    for turn in range(max_turns):
        alive_snakes = [s for s in board["snakes"] if s["id"] not in death_reasons]

        if len(alive_snakes) <= 1:
            break

        # Collect moves
        first, second = alive_snakes
        moves = {
            first["id"]: ask_bot(bots[first["id"]], first, second, board, verbose),
            second["id"]: ask_bot(bots[second["id"]], second, first, board, verbose),
        }

        if verbose:
            shown = {sid: m.move for sid, m in moves.items()}
            print(f"Turn {turn}: {shown}")

        # Apply moves, growing onto the food
        ate = False
        for snake in alive_snakes:
            new_head = snake["body"][0] + moves[snake["id"]].vector
            snake["body"].insert(0, new_head)
            if new_head == board["food"]:
                ate = True
            else:
                snake["body"].pop()

        # 1. Out of bounds
        for snake in alive_snakes:
            if not snake["body"][0].in_bounds(size):
                death_reasons[snake["id"]] = f"wall collision (turn {turn})"

        # 2. Body collisions (hit any snake's body, not head)
        for snake in alive_snakes:
            if snake["id"] in death_reasons:
                continue
            head = snake["body"][0]
            for other in alive_snakes:
                if head in other["body"][1:]:
                    death_reasons[snake["id"]] = f"body collision with {other['id']} (turn {turn})"
                    break

        # 3. Head-to-head collisions
        if first["body"][0] == second["body"][0]:
            contenders = [s for s in alive_snakes if s["id"] not in death_reasons]
            if len(contenders) == 2:
                if len(first["body"]) == len(second["body"]):
                    for snake in contenders:
                        death_reasons[snake["id"]] = f"head-to-head tie (turn {turn})"
                else:
                    loser = min(contenders, key=lambda s: len(s["body"]))
                    death_reasons[loser["id"]] = f"head-to-head loss vs longer snake (turn {turn})"

        board["snakes"] = [s for s in board["snakes"] if s["id"] not in death_reasons]

        if ate:
            board["food"] = spawn_food(board)
            if board["food"] is None:
                break

        turn_log.append({
            "turn": turn,
            "moves": {sid: m.move for sid, m in moves.items()},
            "alive": [s["id"] for s in board["snakes"]],
            "deaths": {k: v for k, v in death_reasons.items() if f"turn {turn}" in v},
        })

    # Determine winner
    alive = [s for s in board["snakes"] if s["id"] not in death_reasons]
    if len(alive) == 1:
        winner = alive[0]["id"]
    elif len(alive) > 1:
        lengths = [len(s["body"]) for s in alive]
        if lengths[0] == lengths[1]:
            winner = None
        else:
            winner = max(alive, key=lambda s: len(s["body"]))["id"]
    else:
        winner = None  # All dead

    final_turn = turn_log[-1]["turn"] if turn_log else 0
    return {
        "winner": winner,
        "turns": final_turn + 1,
        "death_reasons": death_reasons,
        "turn_log": turn_log,
        "final_snakes": {s["id"]: {"length": len(s["body"])} for s in board["snakes"]},
    }


def run_match(
    bots: dict[str, Bot],
    games: int = 5,
    seed_base: int | None = None,
    verbose: bool = False,
    **kwargs,
) -> dict:
    """
    Run a best-of-N match between two bots.

    Returns dict with per-bot win counts, game results, and match winner.
    """
    wins = {sid: 0 for sid in bots}
    results = []

    for i in range(games):
        seed = (seed_base + i) if seed_base is not None else None
        result = run_game(bots, seed=seed, verbose=verbose, **kwargs)
        results.append(result)
        if result["winner"]:
            wins[result["winner"]] += 1

    match_winner = max(wins, key=wins.get) if any(wins.values()) else None
    return {
        "match_winner": match_winner,
        "wins": wins,
        "games": results,
        "total_games": games,
    }
