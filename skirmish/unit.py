from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Tuple

import settings as S

Coord = Tuple[int, int]
Vec = Tuple[float, float]

HP_MAX = S.HP_MAX


class Team(Enum):
    BLUE = "blue"
    RED = "red"


class UnitType(Enum):
    INFANTRY = "infantry"
    TANK = "tank"


PLAYER_TEAM = Team.BLUE
ENEMY_TEAM = Team.RED


def lerp(a: Vec, b: Vec, t: float) -> Vec:
    return (a[0] + (b[0] - a[0]) * t, a[1] + (b[1] - a[1]) * t)


def cell_vec(c: Coord) -> Vec:
    return (float(c[0]), float(c[1]))


@dataclass
class Actor:
    """
    One unit on the board.

    ``pos`` is the logical grid cell and only changes when a move commits.
    ``draw_pos`` is a fractional cell position the animations slide around.
    """
    pos: Coord
    team: Team
    unit_type: UnitType = UnitType.INFANTRY
    hp: int = HP_MAX
    has_moved: bool = False
    draw_pos: Vec = (0.0, 0.0)

    @classmethod
    def spawn(cls, pos: Coord, team: Team, unit_type: UnitType = UnitType.INFANTRY) -> "Actor":
        return cls(pos=pos, team=team, unit_type=unit_type, draw_pos=cell_vec(pos))

    @property
    def alive(self) -> bool:
        return self.hp > 0

    def snap_to(self, c: Coord) -> None:
        """Commit a logical move and park the sprite on the cell."""
        self.pos = c
        self.draw_pos = cell_vec(c)

    @property
    def sprite_name(self) -> str:
        return f"{self.unit_type.value}_{self.team.value}"
