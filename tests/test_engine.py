"""Tests for the local harness: engine, opponents and runner."""

import random

import pytest

from harness import engine, run_tests
from harness.opponents import (
    OPPONENTS,
    flood_fill,
    greedy_food,
    random_valid,
    safe_moves,
    space_aware,
)
from snake_minimax.geometry import Coordinate as C, Direction


def scripted(*moves):
    """Bot that plays the given moves in order, then keeps the last one."""
    queue = list(moves)

    def bot(own, opponent, board_size, food):
        return queue.pop(0) if len(queue) > 1 else queue[0]

    return bot


def always(direction):
    return lambda own, opponent, board_size, food: direction


class TestRunGame:
    def test_wall_collision_decides_winner(self) -> None:
        def broken(own, opponent, board_size, food):
            raise RuntimeError("boom")

        # "b" starts at (9, 9) and falls back to UP, leaving the board on turn 1.
        result = engine.run_game({"a": always(Direction.UP), "b": broken})
        assert result["winner"] == "a"
        assert result["turns"] == 2
        assert result["death_reasons"] == {"b": "wall collision (turn 1)"}

    def test_non_direction_reply_moves_up(self) -> None:
        result = engine.run_game({"a": always(Direction.UP), "b": always("left")})
        assert result["turn_log"][0]["moves"]["b"] == "up"

    def test_head_to_head_tie_kills_both(self) -> None:
        bots = {
            "a": scripted(Direction.UP, Direction.RIGHT),
            "b": scripted(Direction.LEFT, Direction.DOWN),
        }
        result = engine.run_game(bots, width=5, height=5)
        assert result["winner"] is None
        assert result["death_reasons"] == {
            "a": "head-to-head tie (turn 1)",
            "b": "head-to-head tie (turn 1)",
        }

    def test_eating_grows_and_longer_snake_wins_on_timeout(self) -> None:
        bots = {
            "a": scripted(Direction.UP, Direction.RIGHT, Direction.RIGHT),
            "b": scripted(Direction.UP, Direction.LEFT, Direction.LEFT),
        }
        result = engine.run_game(bots, width=5, height=5, max_turns=2, seed=3)
        assert result["final_snakes"] == {"a": {"length": 4}, "b": {"length": 3}}
        assert result["winner"] == "a"

    def test_bots_receive_copies(self) -> None:
        def vandal(own, opponent, board_size, food):
            own.clear()
            opponent.clear()
            return Direction.RIGHT

        result = engine.run_game({"a": vandal, "b": always(Direction.LEFT)}, max_turns=3)
        assert result["final_snakes"]["a"]["length"] == 3
        assert result["final_snakes"]["b"]["length"] == 3

    def test_needs_two_bots(self) -> None:
        with pytest.raises(ValueError):
            engine.run_game({"a": always(Direction.UP)})

    def test_spawn_food_avoids_bodies(self) -> None:
        board = {
            "size": C(2, 2),
            "snakes": [{"id": "a", "body": [C(0, 0), C(0, 1), C(1, 1)]}],
            "food": None,
        }
        assert engine.spawn_food(board) == C(1, 0)
        board["snakes"][0]["body"].append(C(1, 0))
        assert engine.spawn_food(board) is None

    def test_seed_replays_random_opponent(self) -> None:
        bots = {"greedy": greedy_food, "random": random_valid}
        first = engine.run_game(bots, width=7, height=7, max_turns=60, seed=5)
        random.seed(123)
        random.random()
        second = engine.run_game(bots, width=7, height=7, max_turns=60, seed=5)
        assert first["turn_log"] == second["turn_log"]
        assert first["winner"] == second["winner"]


class TestRunMatch:
    def test_counts_wins(self) -> None:
        def broken(own, opponent, board_size, food):
            raise RuntimeError("boom")

        result = engine.run_match({"a": always(Direction.UP), "b": broken}, games=3, seed_base=7)
        assert result["wins"] == {"a": 3, "b": 0}
        assert result["match_winner"] == "a"
        assert result["total_games"] == 3


class TestOpponents:
    def test_safe_moves_filters_walls_and_bodies(self) -> None:
        safe = safe_moves(C(0, 0), C(5, 5), {C(1, 0)})
        assert safe == {Direction.UP: C(0, 1)}

    def test_flood_fill_counts_pocket(self) -> None:
        # Wall of cells at x=1 seals off the left column of a 3x3 board.
        assert flood_fill(C(0, 0), C(3, 3), {C(1, 0), C(1, 1), C(1, 2)}) == 3

    def test_greedy_heads_for_food(self) -> None:
        assert greedy_food([C(2, 2)], [C(9, 9)], C(10, 10), C(2, 7)) == Direction.UP
        assert greedy_food([C(2, 2)], [C(9, 9)], C(10, 10), C(0, 2)) == Direction.LEFT

    def test_space_aware_avoids_small_pocket(self) -> None:
        # RIGHT leads into a one-cell dead end; UP opens the board.
        own = [C(1, 0), C(0, 0), C(0, 1), C(0, 2)]
        opponent = [C(3, 0), C(3, 1), C(2, 1)]
        assert space_aware(own, opponent, C(5, 5), C(2, 0)) == Direction.UP

    def test_boxed_in_opponents_go_up(self) -> None:
        own = [C(0, 0), C(1, 0)]
        opponent = [C(0, 1)]
        for bot in OPPONENTS.values():
            assert bot(own, opponent, C(5, 5), C(4, 4)) == Direction.UP

    def test_random_valid_stays_safe(self) -> None:
        random.seed(0)
        for _ in range(20):
            move = random_valid([C(0, 0), C(1, 0)], [C(4, 4)], C(5, 5), C(2, 2))
            assert move == Direction.UP


class TestRunner:
    def test_single_opponent_match(self, capsys) -> None:
        run_tests.main([
            "--games", "1", "--opponent", "greedy-food",
            "--board", "7", "--max-turns", "4", "--seed", "1",
        ])
        out = capsys.readouterr().out
        assert "Match: minimax vs greedy-food" in out
        assert "OVERALL RESULTS" in out

    def test_unknown_opponent_exits(self, capsys) -> None:
        with pytest.raises(SystemExit):
            run_tests.main(["--opponent", "nobody"])
        assert "Unknown opponent 'nobody'" in capsys.readouterr().out

    @pytest.mark.parametrize(
        "bot_wins, opp_wins, label",
        [(3, 1, "WIN"), (1, 3, "LOSS"), (2, 2, "DRAW")],
    )
    def test_match_status_label(self, bot_wins, opp_wins, label) -> None:
        status = run_tests.match_status(bot_wins, opp_wins)
        assert label in status
        assert status.endswith(run_tests.RESET)

    def test_summary_and_match_lines_share_status(self, capsys) -> None:
        result = {
            "wins": {"minimax": 2, "greedy-food": 1},
            "games": [],
            "total_games": 3,
        }
        assert run_tests.print_match_result("greedy-food", result, "minimax") == (2, 1)
        out = capsys.readouterr().out
        assert run_tests.match_status(2, 1) in out
