"""
Movement: cost function, reach masks and the potential-field plans that turn
a unit plus a goal into a concrete path.

A plan is built in stages, each a relaxation over the whole map:

1. move range  - seed the unit's cell with the move budget, relax, clamp to {0, 1}
2. goal field  - seed the goal cell(s), relax, multiply by the move range
3. occupancy   - stamp occupied cells with ``S.OCCUPIED``, pick the best
                 reachable cell and relax the stamped cells again from it
4. enemies     - re-stamp opposing units so paths cannot run through them
5. path        - climb the field from the unit's cell
"""
from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Iterator, List, Optional, Sequence, Tuple

import settings as S
from .actors import ActorKey, ActorStore
from .grid import Grid
from .map import TerrainType, TileMap
from .pathfinding import dijkstra, dijkstra_path, get_neighbors
from .unit import Team, cell_vec, lerp

if TYPE_CHECKING:
    from .state import GameState

logger = logging.getLogger(__name__)

Coord = Tuple[int, int]
CostFn = Callable[[Coord], int]

_TERRAIN_COST = {
    TerrainType.NONE: S.COST_NONE,
    TerrainType.STREET: S.COST_STREET,
    TerrainType.FOREST: S.COST_FOREST,
}


def movement_cost(tmap: TileMap, actors: ActorStore, team: Team) -> CostFn:
    """
    Cost for ``team`` to enter a cell.

    Opposing units block (their positions are captured now, not on every call),
    water blocks, otherwise the terrain decides. Off-map cells read the nearest
    edge cell's terrain.
    """
    blocked = {a.pos for a in actors.values() if a.team is not team}

    def cost(c: Coord) -> int:
        if c in blocked:
            return S.IMPASSABLE_COST
        if not tmap.passable(c):
            return S.IMPASSABLE_COST
        return _TERRAIN_COST[tmap.terrain_at(c)]

    return cost


def reach_mask(tmap: TileMap, start: Coord, budget: int, cost: CostFn) -> Grid[int]:
    """1 on every cell reachable from start within budget, else 0."""
    mask = Grid(tmap.cols, tmap.rows, 0)
    mask[start] = budget
    dijkstra(mask, [start], cost)
    mask.clamp_values(0, 1)
    return mask


def goal_field(tmap: TileMap, goals: Sequence[Coord], value: int, cost: CostFn) -> Grid[int]:
    field = Grid(tmap.cols, tmap.rows, 0)
    for g in goals:
        field[g] = value
    dijkstra(field, goals, cost)
    return field


def highest_reachable(field: Grid[int], mask: Grid[int]) -> Optional[Coord]:
    """Best cell inside the mask; the first one in grid order wins ties."""
    best: Optional[Coord] = None
    best_value = 0
    for c, v in field.iter_coords():
        if mask[c] <= 0:
            continue
        if best is None or v > best_value:
            best, best_value = c, v
    return best


def block_cells(field: Grid[int], cells: Sequence[Coord]) -> None:
    for c in cells:
        field[c] = S.OCCUPIED


@dataclass
class MovePlan:
    start: Coord
    move_range: Grid[int]
    field: Grid[int]
    target: Optional[Coord]
    path: List[Coord]


def plan_player_move(tmap: TileMap, actors: ActorStore, key: ActorKey, goal: Coord) -> MovePlan:
    """Plan towards the cursor: the cursor cell is seeded with ``S.CURSOR_GOAL``."""
    actor = actors[key]
    start = actor.pos
    cost = movement_cost(tmap, actors, actor.team)

    move_range = reach_mask(tmap, start, S.MOVE_BUDGET, cost)
    field = goal_field(tmap, [tmap.clamp(goal)], S.CURSOR_GOAL, cost)
    field.mul_inplace(move_range)

    # Units may be walked past but never stopped on. Stamped cells are
    # relaxed again from their neighbors, so a stamped friend (or the mover)
    # ends one step below its best neighbor and never tops a climb.
    occupied = actors.positions()
    block_cells(field, occupied)
    target = highest_reachable(field, move_range)
    seeds = [n for c in occupied for n in get_neighbors(c, field)]
    if target is not None:
        seeds.append(target)
    dijkstra(field, seeds, cost)
    field.mul_inplace(move_range)

    block_cells(field, [a.pos for a in actors.values() if a.team is not actor.team])
    return MovePlan(start, move_range, field, target, dijkstra_path(field, start))


def plan_ai_move(tmap: TileMap, actors: ActorStore, key: ActorKey) -> MovePlan:
    """
    Plan towards the nearest opposing unit: every opposing cell is seeded with
    ``S.AI_GOAL``. A unit already standing on a cell as good as the best one it
    can reach stays put, so equal-valued cells do not make it wander.
    """
    actor = actors[key]
    start = actor.pos
    cost = movement_cost(tmap, actors, actor.team)

    move_range = reach_mask(tmap, start, S.MOVE_BUDGET, cost)
    opponents = [a.pos for a in actors.values() if a.team is not actor.team]
    scores = goal_field(tmap, opponents, S.AI_GOAL, cost)
    scores.mul_inplace(move_range)

    block_cells(scores, actors.positions(exclude=key))
    target = highest_reachable(scores, move_range)
    if target is None or scores[target] == scores[start]:
        target = start

    field = goal_field(tmap, [target], S.AI_GOAL, cost)
    field.mul_inplace(move_range)
    block_cells(field, opponents)
    path = dijkstra_path(field, start)
    logger.debug("AI %s at %s heads for %s via %d cells", key, start, target, len(path))
    return MovePlan(start, move_range, field, target, path)


def walk_path(state: "GameState", key: ActorKey, path: Sequence[Coord]) -> Iterator[None]:
    """
    Task body: slide the actor's sprite through each cell of the path, one
    suspension per frame, then commit its logical position to the last cell.
    Ends early if the actor disappears meanwhile.
    """
    for c in path:
        target = cell_vec(c)
        t = 0.0
        while t < 1.0:
            t += state.dt * S.MOVE_LERP_SPEED
            actor = state.actors.get(key)
            if actor is None:
                return
            actor.draw_pos = lerp(actor.draw_pos, target, min(t, 1.0))
            yield
    actor = state.actors.get(key)
    if actor is not None and path:
        actor.snap_to(path[-1])
