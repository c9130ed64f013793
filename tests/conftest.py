"""
Pytest configuration and shared fixtures.

Core game modules never import pygame, so nothing here needs a display.
"""

import pytest
from typing import Callable, List, Tuple

from skirmish.grid import Grid
from skirmish.map import TileMap
from skirmish.state import GameState
from skirmish.unit import Actor, Team, UnitType


@pytest.fixture
def open_map() -> TileMap:
    """
    A 5x5 map of plain ground with no terrain: every cell costs 2.
    """
    return TileMap(5, 5)


@pytest.fixture
def zero_field() -> Grid:
    """
    A 10x10 potential field full of zeros.
    """
    return Grid(10, 10, 0)


@pytest.fixture
def make_state(open_map) -> Callable:
    """
    Factory building a GameState on the open map with units placed.

    Usage: ``state, keys = make_state([(Team.BLUE, (0, 2)), (Team.RED, (4, 2))])``
    """
    def _make(units: List[Tuple[Team, Tuple[int, int]]], tmap: TileMap = None):
        state = GameState(tmap if tmap is not None else open_map)
        keys = [state.actors.insert(Actor.spawn(pos, team, UnitType.INFANTRY)) for team, pos in units]
        return state, keys
    return _make


@pytest.fixture
def run_tasks() -> Callable:
    """
    Drive a state's task queue at a fixed frame time until it is idle.
    Returns the number of frames it took.
    """
    def _run(state: GameState, dt: float = 0.1, limit: int = 10_000) -> int:
        state.dt = dt
        frames = 0
        while state.tasks.busy:
            state.tasks.run_until_stall()
            state.draw.flush()
            frames += 1
            assert frames < limit, "task queue never went idle"
        return frames
    return _run
