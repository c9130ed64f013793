from __future__ import annotations
from typing import Callable, Generic, Iterator, List, Tuple, TypeVar

from .errors import GridBoundsError, GridShapeError

Coord = Tuple[int, int]
T = TypeVar("T")


class Grid(Generic[T]):
    """
    Dense width x height array addressed by (x, y), x right, y down.

    Storage and iteration are row-major: y is the outer loop, x the inner one.
    Tie-breaks that scan the grid (e.g. "first highest cell") depend on that order.
    """

    def __init__(self, width: int, height: int, fill: T) -> None:
        if width < 0 or height < 0:
            raise GridShapeError(f"negative grid size {width}x{height}")
        self.width = width
        self.height = height
        # fill is shared between cells; use immutable values (ints, enums)
        self._cells: List[T] = [fill] * (width * height)

    @classmethod
    def filled_with(cls, width: int, height: int, make: Callable[[int, int], T]) -> "Grid[T]":
        grid: Grid[T] = cls.__new__(cls)
        grid.width = width
        grid.height = height
        grid._cells = [make(x, y) for y in range(height) for x in range(width)]
        return grid

    # --- bounds ---
    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def clamp(self, x: int, y: int) -> Coord:
        """Saturate each axis independently into the grid."""
        cx = min(max(x, 0), self.width - 1)
        cy = min(max(y, 0), self.height - 1)
        return cx, cy

    def _index(self, x: int, y: int) -> int:
        if not self.in_bounds(x, y):
            raise GridBoundsError(f"({x}, {y}) outside {self.width}x{self.height} grid")
        return x + y * self.width

    # --- access ---
    def get(self, x: int, y: int) -> T:
        return self._cells[self._index(x, y)]

    def set(self, x: int, y: int, value: T) -> None:
        self._cells[self._index(x, y)] = value

    def get_clamped(self, x: int, y: int) -> T:
        return self.get(*self.clamp(x, y))

    def get_clamped_v(self, pos: Coord) -> T:
        return self.get_clamped(pos[0], pos[1])

    def set_clamped(self, x: int, y: int, value: T) -> None:
        self.set(*self.clamp(x, y), value)

    def __getitem__(self, pos: Coord) -> T:
        return self.get(pos[0], pos[1])

    def __setitem__(self, pos: Coord, value: T) -> None:
        self.set(pos[0], pos[1], value)

    # --- iteration ---
    def iter(self) -> Iterator[Tuple[int, int, T]]:
        for i, value in enumerate(self._cells):
            yield i % self.width, i // self.width, value

    def iter_coords(self) -> Iterator[Tuple[Coord, T]]:
        for x, y, value in self.iter():
            yield (x, y), value

    # --- bulk transforms ---
    def fill(self, value: T) -> None:
        self._cells = [value] * (self.width * self.height)

    def clamp_values(self, lo, hi) -> None:
        self._cells = [min(max(v, lo), hi) for v in self._cells]

    def mul_inplace(self, other: "Grid") -> None:
        if (self.width, self.height) != (other.width, other.height):
            raise GridShapeError(
                f"cannot multiply {self.width}x{self.height} grid by {other.width}x{other.height} grid"
            )
        self._cells = [a * b for a, b in zip(self._cells, other._cells)]

    def copy(self) -> "Grid[T]":
        dup: Grid[T] = Grid(self.width, self.height, None)  # type: ignore[arg-type]
        dup._cells = list(self._cells)
        return dup

    def rows(self) -> List[List[T]]:
        """Nested rows, handy for debug dumps and test assertions."""
        w = self.width
        return [self._cells[y * w:(y + 1) * w] for y in range(self.height)]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return (self.width, self.height, self._cells) == (other.width, other.height, other._cells)

    def __repr__(self) -> str:
        return f"Grid({self.width}x{self.height})"
