from __future__ import annotations
from enum import Enum
from typing import Tuple

from .grid import Grid

Coord = Tuple[int, int]


class GroundType(Enum):
    GROUND = "ground"
    WATER = "water"  # impassable for everyone


class TerrainType(Enum):
    NONE = "none"
    STREET = "street"
    FOREST = "forest"


_TERRAIN_CYCLE = [TerrainType.NONE, TerrainType.STREET, TerrainType.FOREST]


class TileMap:
    """Static ground and terrain layers. Both grids always share dimensions."""

    def __init__(self, cols: int, rows: int) -> None:
        self.cols = cols
        self.rows = rows
        self.ground: Grid[GroundType] = Grid(cols, rows, GroundType.GROUND)
        self.terrain: Grid[TerrainType] = Grid(cols, rows, TerrainType.NONE)

    @classmethod
    def from_grids(cls, ground: Grid[GroundType], terrain: Grid[TerrainType]) -> "TileMap":
        tmap = cls(ground.width, ground.height)
        tmap.ground = ground
        tmap.terrain = terrain
        return tmap

    @classmethod
    def demo(cls, cols: int, rows: int) -> "TileMap":
        """Small battlefield: a river with one bridge, a road across it, some woods."""
        tmap = cls(cols, rows)
        road_j = rows // 2 - 1
        river_i = cols // 2
        for j in range(rows):
            tmap.ground[(river_i, j)] = GroundType.WATER
        for i in range(cols):
            tmap.terrain[(i, road_j)] = TerrainType.STREET
        # The bridge is the road crossing the river
        tmap.ground[(river_i, road_j)] = GroundType.GROUND

        woods = {(4, 1), (5, 1), (4, 2), (5, 2), (6, 2), (10, 8), (11, 8), (10, 9), (6, 9), (5, 10)}
        for c in woods:
            if tmap.in_bounds(c) and tmap.terrain[c] is TerrainType.NONE:
                tmap.terrain[c] = TerrainType.FOREST
        return tmap

    def in_bounds(self, c: Coord) -> bool:
        i, j = c
        return 0 <= i < self.cols and 0 <= j < self.rows

    def clamp(self, c: Coord) -> Coord:
        return self.ground.clamp(*c)

    # Off-map cells read as the nearest edge cell.
    def ground_at(self, c: Coord) -> GroundType:
        return self.ground.get_clamped_v(c)

    def terrain_at(self, c: Coord) -> TerrainType:
        return self.terrain.get_clamped_v(c)

    def passable(self, c: Coord) -> bool:
        return self.ground_at(c) is not GroundType.WATER

    def toggle_water(self, c: Coord) -> None:
        if not self.in_bounds(c):
            return
        if self.ground[c] is GroundType.WATER:
            self.ground[c] = GroundType.GROUND
        else:
            # Nothing grows or paves on water
            self.terrain[c] = TerrainType.NONE
            self.ground[c] = GroundType.WATER

    def cycle_terrain(self, c: Coord) -> None:
        if not self.in_bounds(c) or self.ground[c] is GroundType.WATER:
            return
        k = _TERRAIN_CYCLE.index(self.terrain[c])
        self.terrain[c] = _TERRAIN_CYCLE[(k + 1) % len(_TERRAIN_CYCLE)]
