"""
Buffered draw commands.

Core code never touches pygame. It pushes plain ``DrawCommand`` records at a
z-layer, and ``app.py`` renders them after a stable sort by z.
"""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum, auto
from typing import List, Sequence, Tuple

import settings as S
from .grid import Grid

Coord = Tuple[int, int]
Vec = Tuple[float, float]


class DrawKind(Enum):
    HIGHLIGHT = auto()    # move-range marker
    ARROW = auto()        # path arrow segment; sprite names the shape
    UNIT = auto()
    HP = auto()
    FIELD_VALUE = auto()  # potential-field debug number
    CURSOR = auto()


@dataclass(frozen=True)
class DrawCommand:
    kind: DrawKind
    pos: Vec
    z: int
    sprite: str = ""
    text: str = ""
    dimmed: bool = False


class DrawBuffer:
    def __init__(self) -> None:
        self._commands: List[DrawCommand] = []

    def push(self, cmd: DrawCommand) -> None:
        self._commands.append(cmd)

    def sprite(self, kind: DrawKind, name: str, pos: Vec, z: int, dimmed: bool = False) -> None:
        self.push(DrawCommand(kind, pos, z, sprite=name, dimmed=dimmed))

    def text(self, kind: DrawKind, text: str, pos: Vec, z: int) -> None:
        self.push(DrawCommand(kind, pos, z, text=text))

    def peek(self) -> List[DrawCommand]:
        return list(self._commands)

    def flush(self) -> List[DrawCommand]:
        """Return buffered commands ordered by z (stable) and clear the buffer."""
        commands = sorted(self._commands, key=lambda c: c.z)
        self._commands = []
        return commands

    def __len__(self) -> int:
        return len(self._commands)


def _at(c: Coord) -> Vec:
    return (float(c[0]), float(c[1]))


def draw_cursor(buf: DrawBuffer, pos: Vec) -> None:
    # Cursor snaps to whole cells even while a sprite is mid-slide
    buf.sprite(DrawKind.CURSOR, "cursor", (float(round(pos[0])), float(round(pos[1]))), S.Z_CURSOR)


def draw_move_range(buf: DrawBuffer, field: Grid[int]) -> None:
    for x, y, v in field.iter():
        if v > 0:
            buf.sprite(DrawKind.HIGHLIGHT, "move_range", (float(x), float(y)), S.Z_MOVE_HIGHLIGHT)


_LEFT, _RIGHT, _DOWN, _UP = (-1, 0), (1, 0), (0, 1), (0, -1)

_BODY = {
    (_LEFT, _LEFT): "arrow_we", (_RIGHT, _RIGHT): "arrow_we",
    (_UP, _UP): "arrow_ns", (_DOWN, _DOWN): "arrow_ns",
    (_DOWN, _RIGHT): "arrow_ne", (_LEFT, _UP): "arrow_ne",
    (_UP, _RIGHT): "arrow_se", (_LEFT, _DOWN): "arrow_se",
    (_DOWN, _LEFT): "arrow_wn", (_RIGHT, _UP): "arrow_wn",
    (_UP, _LEFT): "arrow_ws", (_RIGHT, _DOWN): "arrow_ws",
}
_HEAD = {_LEFT: "arrow_w", _RIGHT: "arrow_e", _DOWN: "arrow_s", _UP: "arrow_n"}


def _step(a: Coord, b: Coord) -> Tuple[int, int]:
    d = (b[0] - a[0], b[1] - a[1])
    if d not in _HEAD:
        raise ValueError(f"path step {a} -> {b} is not between adjacent cells")
    return d


def arrow_sprites(path: Sequence[Coord]) -> List[Tuple[str, Coord]]:
    """
    Arrow pieces for a path: a body piece on every interior cell, shaped by
    the directions into and out of it, and a head on the last cell.
    """
    pieces: List[Tuple[str, Coord]] = []
    if len(path) < 2:
        return pieces
    dirs = [_step(a, b) for a, b in zip(path, path[1:])]
    for k in range(1, len(dirs)):
        shape = _BODY.get((dirs[k - 1], dirs[k]))
        if shape is None:
            raise ValueError(f"path doubles back at {path[k]}")
        pieces.append((shape, path[k]))
    pieces.append((_HEAD[dirs[-1]], path[-1]))
    return pieces


def draw_move_path(buf: DrawBuffer, path: Sequence[Coord]) -> None:
    for name, c in arrow_sprites(path):
        buf.sprite(DrawKind.ARROW, name, _at(c), S.Z_MOVE_ARROW)


def draw_field_values(buf: DrawBuffer, field: Grid[int]) -> None:
    """Debug overlay: every positive field value printed on its cell."""
    for x, y, v in field.iter():
        if v > 0:
            buf.text(DrawKind.FIELD_VALUE, str(v), (float(x), float(y)), S.Z_FIELD_DEBUG)
