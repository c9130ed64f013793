"""
Level files: ground/terrain int layers plus unit placements, as one JSON doc.

    {
      "width": 16, "height": 12,
      "ground":  [1, 1, 2, ...],          # row-major, width * height codes
      "terrain": [0, 5, 1, ...],
      "defs":     {"blue_inf": {"team": "blue", "unit_type": "infantry"}},
      "entities": [{"def": "blue_inf", "pos": [2, 3]}]
    }
"""
from __future__ import annotations
import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Sequence, Tuple, TypeVar

from .actors import ActorStore
from .errors import LevelError
from .grid import Grid
from .map import GroundType, TerrainType, TileMap
from .unit import Actor, Team, UnitType

Coord = Tuple[int, int]
T = TypeVar("T")


def ground_from_code(code: int) -> GroundType:
    if code == 1:
        return GroundType.GROUND
    if code == 2:
        return GroundType.WATER
    raise LevelError(f"unsupported ground type {code}")


def terrain_from_code(code: int) -> TerrainType:
    if code == 0:
        return TerrainType.NONE
    if code in (1, 2, 3, 4):  # street pieces: straight, corner, junction, end
        return TerrainType.STREET
    if code == 5:
        return TerrainType.FOREST
    raise LevelError(f"unsupported terrain type {code}")


def grid_from_layer(codes: Sequence[int], width: int, height: int, converter: Callable[[int], T]) -> Grid[T]:
    if len(codes) != width * height:
        raise LevelError(f"layer has {len(codes)} cells, expected {width}x{height}")
    return Grid.filled_with(width, height, lambda x, y: converter(codes[x + y * width]))


@dataclass
class EntityDef:
    team: Team
    unit_type: UnitType


@dataclass
class Level:
    tmap: TileMap
    spawns: List[Tuple[EntityDef, Coord]] = field(default_factory=list)

    def populate(self, actors: ActorStore) -> None:
        for d, pos in self.spawns:
            actors.insert(Actor.spawn(pos, d.team, d.unit_type))


def parse_level(data: Dict[str, Any]) -> Level:
    try:
        width = int(data["width"])
        height = int(data["height"])
        ground = grid_from_layer(data["ground"], width, height, ground_from_code)
        terrain = grid_from_layer(data["terrain"], width, height, terrain_from_code)
        defs = {
            name: EntityDef(Team(d["team"]), UnitType(d["unit_type"]))
            for name, d in data.get("defs", {}).items()
        }
        level = Level(TileMap.from_grids(ground, terrain))
        for ent in data.get("entities", []):
            name = ent.get("def")
            if name not in defs:
                raise LevelError(f"unknown entity definition {name!r}")
            x, y = (int(v) for v in ent["pos"])
            if not level.tmap.in_bounds((x, y)):
                raise LevelError(f"entity {name!r} placed off the map at {(x, y)}")
            level.spawns.append((defs[name], (x, y)))
    except LevelError:
        raise
    except (AttributeError, KeyError, TypeError) as e:
        raise LevelError(f"malformed level: {e!r}") from e
    except ValueError as e:
        # bad enum value or wrongly sized position
        raise LevelError(str(e)) from e
    return level


def load_level(path: Path) -> Level:
    with Path(path).open("r", encoding="utf-8") as f:
        return parse_level(json.load(f))
