from __future__ import annotations
import logging
from typing import TYPE_CHECKING, Iterator

import settings as S
from .combat import attack_sequence, enemies_in_range
from .draw import draw_cursor, draw_field_values, draw_move_path, draw_move_range
from .movement import plan_ai_move, walk_path
from .tasks import wait_ticks
from .unit import ENEMY_TEAM, cell_vec

if TYPE_CHECKING:
    from .state import GameState

logger = logging.getLogger(__name__)


def reset_moves(state: "GameState") -> None:
    for actor in state.actors.values():
        actor.has_moved = False


def enemy_phase(state: "GameState") -> Iterator[None]:
    """
    Task body for the whole enemy phase. AI units act one after another:
    show the plan, walk, pause, hit the first adjacent opponent if any.
    Hands the turn back to the player when every unit is done.
    """
    reset_moves(state)

    for key in state.actors.of_team(ENEMY_TEAM):
        if key not in state.actors:
            continue
        plan = plan_ai_move(state.tmap, state.actors, key)
        cursor = cell_vec(plan.start)

        for _ in range(S.AI_HIGHLIGHT_TICKS):
            draw_move_range(state.draw, plan.move_range)
            draw_cursor(state.draw, cursor)
            draw_move_path(state.draw, plan.path)
            if state.ui.show_ai_field:
                draw_field_values(state.draw, plan.field)
            yield

        if plan.path:
            yield from walk_path(state, key, plan.path)

        yield from wait_ticks(S.AI_ATTACK_PAUSE_TICKS)
        for _ in range(S.AI_ATTACK_PAUSE_TICKS):
            yield
            if key not in state.actors:
                break
            targets = enemies_in_range(state.actors, state.tmap, key)
            if targets:
                draw_cursor(state.draw, cell_vec(targets[0][1]))

        if key in state.actors:
            targets = enemies_in_range(state.actors, state.tmap, key)
            if targets:
                logger.info("AI %s attacks %s", key, targets[0][1])
                yield from attack_sequence(state, key, targets[0])

        actor = state.actors.get(key)
        if actor is not None:
            actor.has_moved = True

    state.turns.complete_enemy_turn()
    reset_moves(state)
    state.debug.log(f"Turn {state.turns.turn}: player phase")
