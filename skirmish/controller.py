"""
Per-frame update: the synchronous half of the game loop.

``app.py`` turns pygame events into a ``FrameInput`` and calls ``update`` once
per frame, then renders whatever landed in ``state.draw``.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

import settings as S
from .actors import ActorKey
from .ai import enemy_phase
from .combat import Target, attack_sequence, enemies_in_range
from .draw import DrawKind, draw_cursor, draw_field_values, draw_move_path, draw_move_range
from .movement import plan_player_move, walk_path
from .state import GameState
from .turns import MoveState, Phase
from .unit import HP_MAX, PLAYER_TEAM, cell_vec

logger = logging.getLogger(__name__)

Coord = Tuple[int, int]


@dataclass
class FrameInput:
    """What the player did this frame, already mapped from raw keys/buttons."""
    mouse_cell: Optional[Coord] = None
    left_pressed: bool = False
    left_released: bool = False
    confirm: bool = False        # stand still / confirm target
    wait: bool = False
    attack: bool = False
    cycle_target: bool = False
    cancel: bool = False
    end_phase: bool = False
    toggle_field: bool = False
    toggle_ai_field: bool = False
    toggle_water: bool = False
    cycle_terrain: bool = False


def update(state: GameState, inp: FrameInput, dt: float) -> None:
    state.dt = dt
    state.tasks.run_until_stall()
    if state.phase is Phase.PLAYER:
        handle_input(state, inp)
    handle_debug_input(state, inp)
    draw_actors(state)
    state.debug.debug(f"Draw calls buffered: {len(state.draw)}")


# ---------- Tasks queued from the player's side ----------

def _move_then_confirm(state: GameState, key: ActorKey, path: List[Coord]) -> Iterator[None]:
    yield from walk_path(state, key, path)
    if key in state.actors:
        state.ui.move_state = MoveState.CONFIRM
    else:
        state.ui.deselect()


def _attack_then_finish(state: GameState, key: ActorKey, target: Target) -> Iterator[None]:
    yield from attack_sequence(state, key, target)
    actor = state.actors.get(key)
    if actor is not None:
        actor.has_moved = True
    state.ui.deselect()


# ---------- Player phase ----------

def select_at(state: GameState, cell: Optional[Coord]) -> None:
    ui = state.ui
    ui.selected = None
    if cell is None:
        return
    key = state.actors.actor_at(cell)
    if key is None:
        return
    actor = state.actors[key]
    if actor.team is PLAYER_TEAM and not actor.has_moved:
        ui.selected = key
        logger.debug("selected %s at %s", key, actor.pos)


def end_player_phase(state: GameState) -> bool:
    if state.ui.move_state is not MoveState.NONE:
        return False
    if not state.turns.end_player_turn():
        return False
    state.ui.deselect()
    state.debug.log(f"Turn {state.turns.turn}: enemy phase")
    state.tasks.queue(enemy_phase(state))
    return True


def handle_input(state: GameState, inp: FrameInput) -> None:
    ui = state.ui

    if inp.left_released and ui.move_state is MoveState.NONE:
        select_at(state, inp.mouse_cell)

    if inp.end_phase:
        end_player_phase(state)
        return

    if ui.selected is not None and ui.selected not in state.actors:
        ui.deselect()

    key = ui.selected
    if key is None:
        if inp.mouse_cell is not None:
            draw_cursor(state.draw, cell_vec(inp.mouse_cell))
        _edit_map(state, inp)
        return

    actor = state.actors[key]

    if ui.move_state is MoveState.NONE:
        goal = inp.mouse_cell if inp.mouse_cell is not None else actor.pos
        plan = plan_player_move(state.tmap, state.actors, key, goal)
        draw_move_range(state.draw, plan.field)
        draw_move_path(state.draw, plan.path)
        if ui.show_field:
            draw_field_values(state.draw, plan.field)

        if inp.left_pressed and inp.mouse_cell is not None and plan.path:
            ui.move_state = MoveState.MOVING
            state.tasks.queue(_move_then_confirm(state, key, plan.path))
        if inp.confirm:
            ui.move_state = MoveState.CONFIRM
        draw_cursor(state.draw, actor.draw_pos)

    if ui.move_state is MoveState.CONFIRM:
        if inp.wait:
            actor.has_moved = True
            ui.deselect()
            return
        if inp.attack and enemies_in_range(state.actors, state.tmap, key):
            ui.move_state = MoveState.CHOOSE_ATTACK

    if ui.move_state is MoveState.CHOOSE_ATTACK:
        targets = enemies_in_range(state.actors, state.tmap, key)
        if not targets:
            ui.move_state = MoveState.CONFIRM
            return
        chosen = (ui.chosen_enemy or 0) % len(targets)
        target = targets[chosen]

        if inp.cancel:
            ui.deselect()
            return
        if inp.cycle_target:
            ui.chosen_enemy = (chosen + 1) % len(targets)
            target = targets[ui.chosen_enemy]
            state.debug.log(f"Target {target[1]}")
        if inp.confirm:
            ui.move_state = MoveState.ATTACKING
            ui.chosen_enemy = None
            state.tasks.queue(_attack_then_finish(state, key, target))
        draw_cursor(state.draw, cell_vec(target[1]))


def _edit_map(state: GameState, inp: FrameInput) -> None:
    cell = inp.mouse_cell
    if cell is None or state.actors.actor_at(cell) is not None:
        return
    if inp.toggle_water:
        state.tmap.toggle_water(cell)
    if inp.cycle_terrain:
        state.tmap.cycle_terrain(cell)


# ---------- Debug & drawing ----------

def handle_debug_input(state: GameState, inp: FrameInput) -> None:
    if inp.toggle_field:
        state.ui.show_field = not state.ui.show_field
    if inp.toggle_ai_field:
        state.ui.show_ai_field = not state.ui.show_ai_field


def draw_actors(state: GameState) -> None:
    for _key, actor in state.actors.items():
        state.draw.sprite(DrawKind.UNIT, actor.sprite_name, actor.draw_pos, S.Z_UNIT, dimmed=actor.has_moved)
        if actor.hp < HP_MAX:
            state.draw.text(DrawKind.HP, str(max(0, actor.hp)), actor.draw_pos, S.Z_UNIT_HP)
