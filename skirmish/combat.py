from __future__ import annotations
import logging
from typing import TYPE_CHECKING, Iterator, List, Tuple

import settings as S
from .actors import ActorKey, ActorStore
from .map import TileMap
from .pathfinding import get_neighbors
from .tasks import wait_ticks
from .unit import cell_vec, lerp

if TYPE_CHECKING:
    from .state import GameState

logger = logging.getLogger(__name__)

Coord = Tuple[int, int]
Target = Tuple[ActorKey, Coord]


def enemies_in_range(actors: ActorStore, tmap: TileMap, me: ActorKey) -> List[Target]:
    """Opposing units on the four cells around ``me``, in neighbor order."""
    actor = actors[me]
    found: List[Target] = []
    for c in get_neighbors(actor.pos, tmap.ground):
        other = actors.actor_at(c)
        if other is not None and actors[other].team is not actor.team:
            found.append((other, c))
    return found


def attack_sequence(state: "GameState", attacker: ActorKey, target: Target) -> Iterator[None]:
    """
    Task body: lunge half way towards the target cell and back, then land
    ``S.ATTACK_DAMAGE`` hits of 1 hp with a short pause after each. The
    defender is removed the moment it drops to 0 hp. There is no return fire.
    """
    defender, cell = target
    actor = state.actors.get(attacker)
    if actor is None:
        return
    home = actor.draw_pos
    aim = cell_vec(cell)

    t = 0.0
    while t < 0.5:
        t += state.dt * S.ATTACK_LERP_SPEED
        actor.draw_pos = lerp(home, aim, t)
        yield
    while t >= 0.0:
        t -= state.dt * S.ATTACK_LERP_SPEED
        actor.draw_pos = lerp(home, aim, max(t, 0.0))
        yield
    actor.draw_pos = home

    for _ in range(S.ATTACK_DAMAGE):
        victim = state.actors.get(defender)
        if victim is None:
            return
        victim.hp -= 1
        if not victim.alive:
            state.actors.remove(defender)
            logger.debug("removed %s at %s", defender, victim.pos)
            state.debug.log(f"{victim.sprite_name} at {victim.pos} destroyed")
            return
        yield from wait_ticks(S.DAMAGE_TICK_WAIT)
    victim = state.actors.get(defender)
    if victim is not None:
        state.debug.log(f"{actor.sprite_name} hits {victim.sprite_name}: {victim.hp} hp left")
