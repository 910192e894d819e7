"""
Minimax move selection for a two-snake, single-food grid game.

Each turn the bot builds a root state from both snakes, expands it
exhaustively to a fixed depth and picks the first direction whose
backed-up score strictly beats the running best.

Quirks kept on purpose:
- Every ply advances the controlled snake only. The maximizing and
  minimizing plies differ just by the sign of the evaluation.
- The two "ate apple" flags ride along in every state (and in its
  hash) but nothing reads them.
- Running into your own body is an illegal move, but a state whose head
  overlaps its own body is not terminal.
"""

import math
from typing import Iterable, NamedTuple

from snake_minimax.geometry import ALL_DIRECTIONS, Coordinate, Direction, manhattan

SEARCH_DEPTH = 8
DEFAULT_DIRECTION = Direction.UP

FOOD_SCORE = 100000
FOOD_DISTANCE_WEIGHT = 100
LENGTH_WEIGHT = 25
BIGGER_OPPONENT_WEIGHT = 50

# Running-best sentinels; a node with no legal move backs one of these up.
SCORE_MIN = -2**31
SCORE_MAX = 2**31 - 1

Snake = tuple  # head-first tuple of Coordinates


class GameState(NamedTuple):
    own: Snake
    opponent: Snake
    own_ate_apple: bool = False
    opponent_ate_apple: bool = False


def make_snake(cells: Iterable) -> Snake:
    """Copy any iterable of (x, y) pairs into an immutable snake."""
    return tuple(Coordinate(int(x), int(y)) for x, y in cells)


def hybrid_distance(a: Coordinate, b: Coordinate) -> float:
    """Square root of the Manhattan distance (not Euclidean)."""
    return math.sqrt(manhattan(a, b))


class MinimaxSearch:
    """Search context for one decision. Owns the memo tables."""

    def __init__(self, board_size: Coordinate, food: Coordinate, depth: int = SEARCH_DEPTH):
        self.board_size = Coordinate(*board_size)
        self.food = Coordinate(*food)
        self.depth = depth
        self.transition: dict[GameState, GameState] = {}
        self.best_move: dict[GameState, Direction] = {}
        self.score: dict[GameState, int] = {}
        self.root: GameState | None = None

    # ── Successor generation ──────────────────────────────────────

    def try_move(self, state: GameState, direction: Direction) -> GameState | None:
        """Advance the controlled snake one cell, or None if the move is illegal."""
        own, opponent = state.own, state.opponent
        new_head = own[0] + direction.vector

        if (not new_head.in_bounds(self.board_size)
                or new_head in own
                or new_head in opponent
                or new_head == opponent[0]):
            return None

        if new_head == self.food:
            body = (new_head,) + own
        else:
            body = (new_head,) + own[:-1]
        return GameState(body, opponent, state.own_ate_apple, state.opponent_ate_apple)

    # ── Evaluation ────────────────────────────────────────────────

    def evaluate(self, state: GameState, is_maximizing: bool) -> int:
        own, opponent = state.own, state.opponent
        head = own[0]
        score = 0

        if head == self.food:
            score += FOOD_SCORE
        else:
            score = int(score - FOOD_DISTANCE_WEIGHT * hybrid_distance(head, self.food))
            score += LENGTH_WEIGHT * len(own)

        # A longer opponent wins head-to-head, so stay away from its head.
        if len(own) < len(opponent):
            score = int(score - BIGGER_OPPONENT_WEIGHT * hybrid_distance(head, opponent[0]))

        return score if is_maximizing else -score

    def is_terminal(self, state: GameState) -> bool:
        head = state.own[0]
        return head in state.opponent or not head.in_bounds(self.board_size)

    # ── Search ────────────────────────────────────────────────────

    def search(self, state: GameState, depth: int, is_maximizing: bool) -> int:
        if depth == 0 or self.is_terminal(state):
            return self.evaluate(state, is_maximizing)

        best = SCORE_MIN if is_maximizing else SCORE_MAX
        for direction in ALL_DIRECTIONS:
            next_state = self.try_move(state, direction)
            if next_state is None:
                continue
            child = self.search(next_state, depth - 1, not is_maximizing)
            if (is_maximizing and child > best) or (not is_maximizing and child < best):
                best = child
                # A deeper visit of an equal state may overwrite these later.
                self.transition[state] = next_state
                self.best_move[state] = direction

        self.score[state] = best
        return best

    def run(self, own: Snake, opponent: Snake) -> Direction | None:
        """Search from a fresh root and return its best move, if any."""
        self.transition.clear()
        self.best_move.clear()
        self.score.clear()
        self.root = GameState(make_snake(own), make_snake(opponent), False, False)
        self.search(self.root, self.depth, True)
        return self.best_move.get(self.root)

    @property
    def root_score(self) -> int | None:
        if self.root is None:
            return None
        return self.score.get(self.root)

    def principal_variation(self) -> list:
        """Chosen directions from the root, following recorded transitions."""
        line = []
        state = self.root
        seen = set()
        while state in self.best_move and state not in seen:
            seen.add(state)
            line.append(self.best_move[state])
            state = self.transition[state]
        return line


def decide(own, opponent, board_size, food, verbose: bool = False) -> Direction:
    """
    Pick a direction for the controlled snake.

    Args:
        own: controlled snake, head first, as (x, y) pairs
        opponent: the other snake, head first
        board_size: (width, height)
        food: (x, y) of the single food item
        verbose: print the decision and its backed-up score, which is
            SCORE_MIN or SCORE_MAX when every line dead-ends

    Returns:
        The best Direction found, or UP when no first move is legal.
    """
    return _choose(MinimaxSearch(board_size, food), own, opponent, verbose)


def _choose(search: MinimaxSearch, own, opponent, verbose: bool) -> Direction:
    move = search.run(own, opponent)
    if move is None:
        if verbose:
            print(f"No valid move found, defaulting to {DEFAULT_DIRECTION}.")
        return DEFAULT_DIRECTION
    if verbose:
        print(f"Decision: Move {move}, Score: {search.root_score}")
    return move


class MinimaxBot:
    """Engine-facing bot: one decide() per turn, remembers the last score."""

    name = "minimax"

    def __init__(self, verbose: bool = False):
        self.verbose = verbose
        self.last_score = None

    def choose_direction(self, own, opponent, board_size, food) -> Direction:
        search = MinimaxSearch(board_size, food)
        move = _choose(search, own, opponent, self.verbose)
        self.last_score = search.root_score
        return move
