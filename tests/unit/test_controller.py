"""
Unit tests for the per-frame controller and the enemy phase.
"""

import settings as S
from skirmish.ai import enemy_phase
from skirmish.controller import FrameInput, end_player_phase, update
from skirmish.draw import DrawKind
from skirmish.map import GroundType
from skirmish.turns import MoveState, Phase
from skirmish.unit import Team


def frame(state, dt=0.1, **keys):
    update(state, FrameInput(**keys), dt)
    return state.draw.flush()


def frames_until(state, done, limit=2000):
    for _ in range(limit):
        if done():
            return
        frame(state)
    raise AssertionError("condition never reached")


class TestSelection:
    """Tests for picking units."""

    def test_click_selects_own_unit(self, make_state):
        """Test that releasing on a ready player unit selects it."""
        state, (blue, _) = make_state([(Team.BLUE, (0, 2)), (Team.RED, (4, 2))])
        frame(state, mouse_cell=(0, 2), left_released=True)
        assert state.ui.selected == blue

    def test_enemy_cannot_be_selected(self, make_state):
        """Test that clicking an enemy selects nothing."""
        state, _ = make_state([(Team.BLUE, (0, 2)), (Team.RED, (4, 2))])
        frame(state, mouse_cell=(4, 2), left_released=True)
        assert state.ui.selected is None

    def test_moved_unit_cannot_be_selected(self, make_state):
        """Test that a unit that already acted stays unselected."""
        state, (blue,) = make_state([(Team.BLUE, (0, 2))])
        state.actors[blue].has_moved = True
        frame(state, mouse_cell=(0, 2), left_released=True)
        assert state.ui.selected is None

    def test_selected_unit_shows_range_and_path(self, make_state):
        """Test that hovering with a selection draws highlights and arrows."""
        state, _ = make_state([(Team.BLUE, (0, 2))])
        frame(state, mouse_cell=(0, 2), left_released=True)
        kinds = {c.kind for c in frame(state, mouse_cell=(3, 2))}
        assert {DrawKind.HIGHLIGHT, DrawKind.ARROW, DrawKind.UNIT, DrawKind.CURSOR} <= kinds

    def test_field_overlay_toggle(self, make_state):
        """Test that the field numbers appear only while toggled on."""
        state, _ = make_state([(Team.BLUE, (0, 2))])
        frame(state, mouse_cell=(0, 2), left_released=True)
        assert not any(c.kind is DrawKind.FIELD_VALUE for c in frame(state, mouse_cell=(2, 2)))
        frame(state, mouse_cell=(2, 2), toggle_field=True)
        assert any(c.kind is DrawKind.FIELD_VALUE for c in frame(state, mouse_cell=(2, 2)))


class TestPlayerActions:
    """Tests for the move, wait and attack flow."""

    def test_move_then_attack(self, make_state):
        """Test a full move, target and attack sequence."""
        state, (blue, red) = make_state([(Team.BLUE, (0, 2)), (Team.RED, (4, 2))])
        frame(state, mouse_cell=(0, 2), left_released=True)
        frame(state, mouse_cell=(3, 2), left_pressed=True)
        assert state.ui.move_state is MoveState.MOVING

        frames_until(state, lambda: state.ui.move_state is MoveState.CONFIRM)
        assert state.actors[blue].pos == (3, 2)

        frame(state, attack=True)
        assert state.ui.move_state is MoveState.CHOOSE_ATTACK
        frame(state, confirm=True)
        assert state.ui.move_state is MoveState.ATTACKING

        frames_until(state, lambda: state.ui.move_state is MoveState.NONE)
        assert state.actors[red].hp == 5
        assert state.actors[blue].has_moved
        assert state.ui.selected is None

    def test_stay_and_wait(self, make_state):
        """Test standing still and ending the unit's action."""
        state, (blue,) = make_state([(Team.BLUE, (0, 2))])
        frame(state, mouse_cell=(0, 2), left_released=True)
        frame(state, mouse_cell=(0, 2), confirm=True)
        assert state.ui.move_state is MoveState.CONFIRM
        frame(state, wait=True)
        assert state.actors[blue].has_moved
        assert state.actors[blue].pos == (0, 2)
        assert state.ui.selected is None

    def test_attack_needs_a_target(self, make_state):
        """Test that asking to attack with nobody adjacent is ignored."""
        state, _ = make_state([(Team.BLUE, (0, 2)), (Team.RED, (4, 2))])
        frame(state, mouse_cell=(0, 2), left_released=True)
        frame(state, confirm=True)
        frame(state, attack=True)
        assert state.ui.move_state is MoveState.CONFIRM

    def test_cancel_target_selection(self, make_state):
        """Test backing out of target selection."""
        state, (blue, red) = make_state([(Team.BLUE, (0, 2)), (Team.RED, (1, 2))])
        frame(state, mouse_cell=(0, 2), left_released=True)
        frame(state, confirm=True)
        frame(state, attack=True)
        frame(state, cancel=True)
        assert state.ui.selected is None
        assert state.actors[red].hp == 10
        assert not state.tasks.busy

    def test_cycle_target(self, make_state):
        """Test switching between two adjacent enemies."""
        state, (blue, up, right) = make_state(
            [(Team.BLUE, (2, 2)), (Team.RED, (2, 1)), (Team.RED, (3, 2))]
        )
        frame(state, mouse_cell=(2, 2), left_released=True)
        frame(state, confirm=True)
        frame(state, attack=True)
        cursor = [c for c in frame(state, cycle_target=True) if c.kind is DrawKind.CURSOR]
        assert cursor[0].pos == (2.0, 1.0)
        frame(state, confirm=True)
        frames_until(state, lambda: not state.tasks.busy)
        assert state.actors[up].hp == 5
        assert state.actors[right].hp == 10

    def test_map_editing_without_selection(self, make_state):
        """Test that the editor keys only touch free cells."""
        state, _ = make_state([(Team.BLUE, (0, 2))])
        frame(state, mouse_cell=(1, 1), toggle_water=True)
        assert state.tmap.ground[(1, 1)] is GroundType.WATER
        frame(state, mouse_cell=(0, 2), toggle_water=True)
        assert state.tmap.ground[(0, 2)] is GroundType.GROUND


class TestPhases:
    """Tests for handing the turn to the enemy and back."""

    def test_end_phase_refused_mid_action(self, make_state):
        """Test that the phase cannot end while a unit is mid-action."""
        state, _ = make_state([(Team.BLUE, (0, 2))])
        frame(state, mouse_cell=(0, 2), left_released=True)
        frame(state, confirm=True)
        assert not end_player_phase(state)
        assert state.phase is Phase.PLAYER

    def test_enemy_turn_runs_and_returns(self, make_state):
        """Test a whole enemy phase: approach, attack, new player turn."""
        state, (blue, red) = make_state([(Team.BLUE, (4, 2)), (Team.RED, (0, 2))])
        state.actors[blue].has_moved = True
        frame(state, end_phase=True)
        assert state.phase is Phase.ENEMY
        assert state.tasks.busy

        frames_until(state, lambda: state.phase is Phase.PLAYER)
        assert state.turns.turn == 2
        assert state.actors[red].pos == (3, 2)
        assert state.actors[blue].hp == 5
        assert not state.actors[blue].has_moved
        assert not state.actors[red].has_moved
        assert state.debug.recent(1) == ["Turn 2: player phase"]

    def test_player_input_ignored_during_enemy_phase(self, make_state):
        """Test that clicks do nothing while the enemy acts."""
        state, _ = make_state([(Team.BLUE, (4, 2)), (Team.RED, (0, 2))])
        frame(state, end_phase=True)
        frame(state, mouse_cell=(4, 2), left_released=True)
        assert state.ui.selected is None

    def test_enemy_destroys_weak_unit(self, make_state, run_tasks):
        """Test that the AI finishes off a unit with little hp left."""
        state, (blue, red) = make_state([(Team.BLUE, (4, 2)), (Team.RED, (0, 2))])
        state.actors[blue].hp = 3
        state.turns.end_player_turn()
        state.tasks.queue(enemy_phase(state))
        run_tasks(state)
        assert blue not in state.actors
        assert state.phase is Phase.PLAYER

    def test_enemy_without_target_just_waits(self, make_state, run_tasks):
        """Test that an AI unit with nothing in reach still finishes the phase."""
        state, (blue, red) = make_state([(Team.BLUE, (4, 4)), (Team.RED, (0, 0))])
        state.tmap.ground[(2, 2)] = GroundType.WATER
        state.turns.end_player_turn()
        state.tasks.queue(enemy_phase(state))
        frames = run_tasks(state)
        assert frames >= S.AI_HIGHLIGHT_TICKS + 2 * S.AI_ATTACK_PAUSE_TICKS
        assert state.actors[blue].hp == 10
        assert state.phase is Phase.PLAYER

    def test_enemy_units_act_one_after_another(self, make_state):
        """Test that the second AI unit starts only after the first is done."""
        state, (blue, first, second) = make_state(
            [(Team.BLUE, (4, 2)), (Team.RED, (0, 2)), (Team.RED, (0, 3))]
        )
        state.turns.end_player_turn()
        state.tasks.queue(enemy_phase(state))
        state.dt = 0.1

        second_home = state.actors[second].draw_pos
        first_done_when_second_moved = None
        for _ in range(5000):
            if not state.tasks.busy:
                break
            state.tasks.run_until_stall()
            state.draw.flush()
            if first_done_when_second_moved is None:
                if state.actors[second].draw_pos != second_home:
                    first_done_when_second_moved = state.actors[first].has_moved
        assert not state.tasks.busy

        assert first_done_when_second_moved is True
        assert state.actors[first].pos == (3, 2)
        assert state.actors[second].pos == (4, 3)
        assert state.actors[first].pos != state.actors[second].pos
        assert blue not in state.actors
        assert state.phase is Phase.PLAYER
