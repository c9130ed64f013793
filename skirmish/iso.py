from __future__ import annotations
import math
from typing import List, Tuple

Coord = Tuple[int, int]
Point = Tuple[int, int]


class IsoView:
    """
    2:1 isometric projection with a pan offset.

    Grid positions may be fractional (sprites mid-slide). Classic 2:1 iso,
    for the top vertex of tile (i, j):
        x = (i - j) * (tile_w / 2) + origin_x + pan_x
        y = (i + j) * (tile_h / 2) + origin_y + pan_y
    """

    def __init__(self, tile_w: int, tile_h: int, origin: Tuple[int, int]) -> None:
        self.tile_w = tile_w
        self.tile_h = tile_h
        self.origin = origin
        self.pan_x = 0
        self.pan_y = 0

    def pan(self, dx: int, dy: int) -> None:
        self.pan_x += dx
        self.pan_y += dy

    def to_screen(self, gx: float, gy: float) -> Point:
        """Top vertex of the diamond whose cell corner sits at (gx, gy)."""
        ox, oy = self.origin
        x = (gx - gy) * (self.tile_w / 2.0) + ox + self.pan_x
        y = (gx + gy) * (self.tile_h / 2.0) + oy + self.pan_y
        return int(round(x)), int(round(y))

    def center(self, gx: float, gy: float) -> Point:
        sx, sy = self.to_screen(gx, gy)
        return sx, sy + self.tile_h // 2

    def to_grid(self, sx: int, sy: int) -> Coord:
        """
        Cell under a screen point. Inverting the projection gives fractional
        coordinates measured from the top vertex, so the containing cell is
        the floor of each.
        """
        ox, oy = self.origin
        dx = (sx - ox - self.pan_x) / (self.tile_w / 2.0)
        dy = (sy - oy - self.pan_y) / (self.tile_h / 2.0)
        i_f = (dx + dy) / 2.0
        j_f = (dy - dx) / 2.0
        return math.floor(i_f), math.floor(j_f)

    def diamond(self, gx: float, gy: float, inset: float = 0.0) -> List[Point]:
        """Polygon for a tile: top -> right -> bottom -> left, optionally shrunk."""
        sx, sy = self.to_screen(gx, gy)
        hw = self.tile_w / 2.0 * (1.0 - inset)
        hh = self.tile_h / 2.0 * (1.0 - inset)
        cx, cy = sx, sy + self.tile_h / 2.0
        return [
            (int(cx), int(cy - hh)),
            (int(cx + hw), int(cy)),
            (int(cx), int(cy + hh)),
            (int(cx - hw), int(cy)),
        ]
