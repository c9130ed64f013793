"""
Exception types for the game core.

Everything here signals a programmer or data error (bad index, mismatched
grids, broken level file). Nothing in the core catches them; they travel up to
``app.main`` which logs and aborts.
"""
from __future__ import annotations


class SkirmishError(Exception):
    """Base exception for game-specific errors."""


class GridBoundsError(SkirmishError, IndexError):
    """Non-clamped grid access outside the grid."""


class GridShapeError(SkirmishError, ValueError):
    """Elementwise operation between grids of different dimensions."""


class LevelError(SkirmishError, ValueError):
    """Level data that cannot be mapped onto the game model."""


class StaleActorError(SkirmishError, KeyError):
    """Actor key whose slot was freed (and possibly reused)."""
