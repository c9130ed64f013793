from __future__ import annotations
from typing import Callable, Iterable, List, Tuple

from .grid import Grid

Coord = Tuple[int, int]
CostFn = Callable[[Coord], int]


def neighbors_4(i: int, j: int) -> Iterable[Coord]:
    # Order is part of the contract: left, right, down, up.
    yield (i - 1, j)
    yield (i + 1, j)
    yield (i, j + 1)
    yield (i, j - 1)


def get_neighbors(pos: Coord, grid: Grid) -> List[Coord]:
    """In-bounds von Neumann neighbors of pos, in left/right/down/up order."""
    return [(x, y) for (x, y) in neighbors_4(*pos) if grid.in_bounds(x, y)]


def dijkstra(field: Grid[int], seeds: Iterable[Coord], cost: CostFn) -> None:
    """
    Relax a potential field in place.

    The field is pre-seeded with budgets at the seed cells. Afterwards every
    cell holds the best budget left after paying the entry cost of each cell
    along some path from a seed. Values only ever go up, so several seeds give
    the pointwise maximum of their influence.

    This is a batched label-correcting pass, not a heap-based Dijkstra: the
    work list is drained batch by batch in neighbor-generation order.
    """
    pending: List[Coord] = [n for pos in seeds for n in get_neighbors(pos, field)]

    while pending:
        batch, pending = pending, []
        for pos in batch:
            around = get_neighbors(pos, field)
            if not around:
                continue
            neighbor_max = max(field[n] for n in around)
            c = cost(pos)
            if neighbor_max > field[pos] + c:
                new_value = neighbor_max - c
                field[pos] = new_value
                pending.extend(n for n in around if field[n] < new_value - cost(n))


def dijkstra_path(field: Grid[int], start: Coord) -> List[Coord]:
    """
    Climb a relaxed field from start until a local maximum.

    Returns [] when start is off the grid or not positive. Each step moves to
    the neighbor with the highest value (first one wins on ties) as long as it
    is strictly higher than the current cell.
    """
    x, y = start
    if not field.in_bounds(x, y):
        return []
    value = field[start]
    if value <= 0:
        return []

    path: List[Coord] = [start]
    pos = start
    while True:
        around = get_neighbors(pos, field)
        if not around:
            break
        best = max(around, key=field.__getitem__)  # max() keeps the first on ties
        if field[best] <= value:
            break
        pos, value = best, field[best]
        path.append(pos)
    return path
