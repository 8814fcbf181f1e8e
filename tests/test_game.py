"""
END-TO-END GAMEPLAY TESTS

These tests drive the Game the way the frame loop does:
- Starting, pausing, resetting
- The farmer moving and being blocked
- Crops spawning and being collected
- Levels advancing after the wall-clock overlay
- Win/lose conditions triggering

NO UI DEPENDENCIES - pure gameplay logic testing.
"""
import random

import pytest
from harvest_dash.gameplay.game import (
    Game, GameState, StateChangedEvent, LevelStartedEvent,
    CropSpawnedEvent, CropsCollectedEvent
)
from harvest_dash.gameplay.controls import Direction
from harvest_dash.gameplay.crops import CropType
from harvest_dash.gameplay.entities import Crop, Obstacle
from harvest_dash.gameplay.geometry import aabb
from harvest_dash.gameplay.level import DEFAULT_DIFFICULTY, LevelConfig
from harvest_dash.gameplay.constants import (
    PLAYER_SPAWN_X, PLAYER_SPAWN_Y, LEVEL_TRANSITION_DELAY, WIN_OVERLAY_DURATION
)


def drop_crop_on_player(game: Game, crop_type: CropType = CropType.WHEAT) -> Crop:
    """Put a crop exactly where the farmer stands."""
    crop = Crop(game.player.x, game.player.y, crop_type=crop_type)
    game.crops.append(crop)
    return crop


def reach_goal(game: Game) -> None:
    """Collect the last point needed for the current level."""
    game.score = game.goal - 1
    drop_crop_on_player(game)
    game.update(0.01)


def clear_level(game: Game, clock) -> None:
    """Reach the goal and let the between-levels overlay run out."""
    reach_goal(game)
    clock.advance(LEVEL_TRANSITION_DELAY)
    game.update(0.01)


class TestSessionStart:
    """Tests for the initial state and the start command."""

    def test_new_game_in_menu(self, game):
        assert game.state == GameState.MENU
        assert game.level == 1
        assert game.score == 0
        assert len(game.obstacles) == 3
        assert (game.player.x, game.player.y) == (PLAYER_SPAWN_X, PLAYER_SPAWN_Y)

    def test_start_from_menu(self, game):
        """start() from MENU plays level 1 with a zero score."""
        game.start()

        assert game.state == GameState.PLAYING
        assert game.level == 1
        assert game.score == 0
        assert game.goal == DEFAULT_DIFFICULTY[0].goal
        assert game.time_left == DEFAULT_DIFFICULTY[0].time_limit

    def test_start_events_delivered_on_next_update(self, game):
        game.start()
        events = game.update(0.0)

        assert StateChangedEvent(GameState.MENU, GameState.PLAYING) in events
        started = [e for e in events if isinstance(e, LevelStartedEvent)]
        assert len(started) == 1
        assert started[0].level == 1

    def test_events_not_repeated(self, game):
        game.start()
        game.update(0.0)
        assert game.update(0.0) == []

    def test_menu_does_not_simulate(self, game):
        game.update(5.0)

        assert game.time_left == DEFAULT_DIFFICULTY[0].time_limit
        assert game.crops == []

    def test_start_while_playing_is_noop(self, game):
        game.start()
        game.score = 4
        game.start()

        assert game.state == GameState.PLAYING
        assert game.score == 4

    def test_custom_difficulty(self, clock):
        table = (LevelConfig(level=1, spawn_interval=2.0, time_limit=30.0, goal=2),)
        game = Game(difficulty=table, rng=random.Random(1), clock=clock)
        game.start()

        assert game.goal == 2
        assert game.time_left == 30.0
        assert game.spawner.interval == 2.0


class TestPauseAndReset:
    """Tests for toggle_pause and reset."""

    def test_toggle_twice_returns_to_playing(self, game):
        game.start()
        game.toggle_pause()
        assert game.state == GameState.PAUSED

        game.toggle_pause()
        assert game.state == GameState.PLAYING

    def test_toggle_ignored_in_menu(self, game):
        game.toggle_pause()
        assert game.state == GameState.MENU

    def test_toggle_ignored_after_game_over(self, game):
        game.start()
        game.update(100.0)
        game.toggle_pause()
        assert game.state == GameState.GAME_OVER

    def test_paused_freezes_clock(self, game):
        game.start()
        game.toggle_pause()
        game.update(10.0)

        assert game.time_left == DEFAULT_DIFFICULTY[0].time_limit
        assert game.crops == []

    def test_start_resumes_from_pause(self, game):
        """Resuming keeps the level and score."""
        game.start()
        game.score = 4
        game.toggle_pause()
        game.start()

        assert game.state == GameState.PLAYING
        assert game.score == 4

    def test_reset_returns_to_menu(self, game):
        game.start()
        game.score = 6
        game.reset()

        assert game.state == GameState.MENU
        assert game.score == 0
        assert game.get_overlay() is None


class TestTimeOut:
    """Tests for running out of time."""

    def test_time_counts_down(self, game):
        game.start()
        game.update(0.5)
        assert game.time_left == pytest.approx(59.5)

    def test_time_out_is_game_over(self, game):
        game.start()
        events = game.update(60.0)

        assert game.state == GameState.GAME_OVER
        assert game.time_left == 0
        assert StateChangedEvent(GameState.PLAYING, GameState.GAME_OVER) in events

    def test_time_out_skips_rest_of_frame(self, game):
        """Nothing is collected or spawned on the frame the clock hits zero."""
        game.start()
        crop = drop_crop_on_player(game)
        game.update(61.0)

        assert game.score == 0
        assert game.crops == [crop]

    def test_game_over_freezes_state(self, game, keys):
        game.start()
        game.update(100.0)
        position = (game.player.x, game.player.y)

        keys.press(Direction.LEFT)
        drop_crop_on_player(game)
        game.update(1.0)

        assert game.time_left == 0
        assert game.score == 0
        assert (game.player.x, game.player.y) == position

    def test_start_after_game_over_restarts(self, game):
        game.start()
        game.update(100.0)
        game.start()

        assert game.state == GameState.PLAYING
        assert game.level == 1
        assert game.time_left == DEFAULT_DIFFICULTY[0].time_limit


class TestMovement:
    """Tests for the farmer moving inside a running game."""

    def test_held_keys_move_player(self, game, keys):
        game.start()
        game.obstacles = []
        keys.press(Direction.UP)
        game.update(0.1)

        assert game.player.y == pytest.approx(PLAYER_SPAWN_Y - 20)

    def test_obstacle_blocks_player(self, game, keys):
        """Walking into a scarecrow never ends overlapping it."""
        game.start()
        scarecrow = Obstacle(game.player.x + game.player.w + 5, game.player.y)
        game.obstacles = [scarecrow]
        keys.press(Direction.RIGHT)

        for _ in range(30):
            game.update(1 / 60)
            assert not aabb(game.player, scarecrow)

        assert game.player.x < scarecrow.x


class TestSpawning:
    """Tests for crops appearing while playing."""

    def test_long_frame_spawns_several(self, game):
        """A 2s frame at a 0.8s interval sprouts two crops."""
        game.start()
        events = game.update(2.0)

        spawned = [e for e in events if isinstance(e, CropSpawnedEvent)]
        assert len(spawned) == 2
        assert game.spawner.accumulator == pytest.approx(0.4)

    def test_simulate_runs_clock(self, game):
        game.start()
        game.simulate(1.0, dt=0.25)
        assert game.time_left == pytest.approx(59.0)


class TestCollection:
    """Tests for picking up crops."""

    def test_collect_adds_points_and_removes(self, game):
        game.start()
        crop = drop_crop_on_player(game, CropType.PUMPKIN)
        events = game.update(0.01)

        assert game.score == 3
        assert crop not in game.crops
        assert crop.dead
        collected = [e for e in events if isinstance(e, CropsCollectedEvent)]
        assert collected[0].points == 3
        assert collected[0].new_score == 3

    def test_several_crops_in_one_frame(self, game):
        game.start()
        drop_crop_on_player(game, CropType.PUMPKIN)
        drop_crop_on_player(game, CropType.GOLDEN_APPLE)
        game.update(0.01)

        assert game.score == 8
        assert game.crops == []

    def test_distant_crop_stays(self, game):
        game.start()
        far = Crop(0, 0)
        game.crops.append(far)
        game.update(0.01)

        assert far in game.crops
        assert game.score == 0

    def test_collected_only_once(self, game):
        """A second collection pass finds nothing."""
        game.start()
        drop_crop_on_player(game, CropType.GOLDEN_APPLE)

        assert game.collect_crops() == 5
        assert game.collect_crops() == 0
        assert game.score == 5

    def test_dead_crop_never_scores(self, game):
        game.start()
        crop = drop_crop_on_player(game)
        crop.dead = True

        assert game.collect_crops() == 0
        assert game.score == 0
        assert game.crops == []


class TestLevelProgression:
    """Tests for the deferred level change and winning."""

    def test_goal_starts_transition(self, game):
        game.start()
        reach_goal(game)

        assert game.state == GameState.PAUSED
        assert game.is_transitioning
        assert game.level == 1
        assert game.get_overlay() == "LEVEL 2 STARTING…"

    def test_transition_waits_for_wall_clock(self, game, clock):
        """Simulation time doesn't shorten the overlay."""
        game.start()
        reach_goal(game)
        game.update(10.0)
        clock.advance(LEVEL_TRANSITION_DELAY / 2)
        game.update(0.01)

        assert game.state == GameState.PAUSED
        assert game.level == 1

    def test_commands_ignored_during_transition(self, game):
        game.start()
        reach_goal(game)
        game.toggle_pause()
        assert game.state == GameState.PAUSED
        game.start()
        assert game.state == GameState.PAUSED
        assert game.is_transitioning

    def test_next_level_configured(self, game, clock, keys):
        """After the overlay: new level, zero score, fresh field."""
        game.start()
        keys.press(Direction.LEFT)
        game.update(0.2)
        keys.clear()
        old_obstacles = list(game.obstacles)
        game.crops.append(Crop(0, 0))

        reach_goal(game)
        clock.advance(LEVEL_TRANSITION_DELAY)
        events = game.update(0.01)

        cfg = DEFAULT_DIFFICULTY[1]
        assert game.state == GameState.PLAYING
        assert game.level == 2
        assert game.score == 0
        assert game.goal == cfg.goal
        assert game.time_left == pytest.approx(cfg.time_limit - 0.01)
        assert game.spawner.interval == cfg.spawn_interval
        assert game.crops == []
        assert len(game.obstacles) == 4
        assert not any(o in old_obstacles for o in game.obstacles)
        assert (game.player.x, game.player.y) == (PLAYER_SPAWN_X, PLAYER_SPAWN_Y)
        assert any(isinstance(e, LevelStartedEvent) and e.level == 2 for e in events)

    def test_final_level_wins(self, game, clock):
        game.start()
        clear_level(game, clock)
        clear_level(game, clock)
        assert game.level == 3

        reach_goal(game)

        assert game.state == GameState.WIN
        assert game.get_overlay() == "YOU BEAT ALL LEVELS!"

    def test_win_overlay_expires(self, game, clock):
        game.start()
        clear_level(game, clock)
        clear_level(game, clock)
        reach_goal(game)
        clock.advance(WIN_OVERLAY_DURATION)

        assert game.get_overlay() is None
        assert game.state == GameState.WIN

    def test_single_level_game_wins_immediately(self, clock):
        game = Game(rng=random.Random(3), clock=clock, max_levels=1)
        game.start()
        reach_goal(game)

        assert game.state == GameState.WIN
        assert not game.is_transitioning

    def test_levels_beyond_table_reuse_hardest(self, clock):
        game = Game(rng=random.Random(1), clock=clock, max_levels=4)
        game.start()
        clear_level(game, clock)
        clear_level(game, clock)
        clear_level(game, clock)

        assert game.state == GameState.PLAYING
        assert game.level == 4
        assert game.goal == DEFAULT_DIFFICULTY[-1].goal

        reach_goal(game)
        assert game.state == GameState.WIN

    def test_start_after_win_restarts_level_one(self, game, clock):
        game.start()
        clear_level(game, clock)
        clear_level(game, clock)
        reach_goal(game)
        game.start()

        assert game.state == GameState.PLAYING
        assert game.level == 1
        assert game.score == 0

    def test_reset_cancels_transition(self, game, clock):
        game.start()
        reach_goal(game)
        game.reset()
        clock.advance(LEVEL_TRANSITION_DELAY * 2)
        game.update(0.01)

        assert game.state == GameState.MENU
        assert game.level == 1
        assert not game.is_transitioning
        assert game.get_overlay() is None


class TestHud:
    """Tests for HUD sinks and status text."""

    def make_sinks(self):
        values = {}
        sinks = {
            name: (lambda text, name=name: values.__setitem__(name, text))
            for name in ("score", "time", "goal", "status")
        }
        return values, sinks

    def test_sinks_receive_values(self, clock):
        values, sinks = self.make_sinks()
        game = Game(hud=sinks, rng=random.Random(1), clock=clock)
        assert values["status"] == "Menu"

        game.start()
        assert values == {"score": "0", "time": "60", "goal": "10", "status": "Level 1"}

    def test_time_rounds_up(self, clock):
        values, sinks = self.make_sinks()
        game = Game(hud=sinks, rng=random.Random(1), clock=clock)
        game.start()
        game.update(0.5)
        assert values["time"] == "60"

        game.update(0.6)
        assert values["time"] == "59"

    def test_score_sink_follows_collection(self, clock):
        values, sinks = self.make_sinks()
        game = Game(hud=sinks, rng=random.Random(1), clock=clock)
        game.start()
        drop_crop_on_player(game, CropType.PUMPKIN)
        game.update(0.01)

        assert values["score"] == "3"

    def test_missing_sinks_are_skipped(self, clock):
        """Only some sinks attached: everything still runs."""
        scores = []
        game = Game(hud={"score": scores.append}, rng=random.Random(1), clock=clock)
        game.start()
        drop_crop_on_player(game)
        game.update(0.01)

        assert scores[-1] == "1"

    def test_status_text(self, game):
        assert game.get_status() == "Menu"
        game.start()
        assert game.get_status() == "Level 1"
        game.toggle_pause()
        assert game.get_status() == "Paused"
        game.toggle_pause()
        reach_goal(game)
        assert game.get_status() == "Get Ready"

    def test_game_over_status(self, game):
        game.start()
        game.update(100.0)
        hud = game.get_hud()

        assert hud.status == "Game Over"
        assert hud.time == 0
