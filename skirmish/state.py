from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional

import settings as S
from .actors import ActorKey, ActorStore
from .debug import DebugLog
from .draw import DrawBuffer
from .map import TileMap
from .tasks import TaskQueue
from .turns import MoveState, Phase, TurnManager


@dataclass
class UIState:
    selected: Optional[ActorKey] = None
    move_state: MoveState = MoveState.NONE
    chosen_enemy: Optional[int] = None
    show_field: bool = False      # potential-field numbers for the player's plan
    show_ai_field: bool = False   # same, for the AI's plan during the enemy phase

    def deselect(self) -> None:
        self.selected = None
        self.move_state = MoveState.NONE
        self.chosen_enemy = None


@dataclass
class GameState:
    """
    Everything one frame touches. The frame code and the task queue share it,
    but never at the same time: tasks run to their next yield before the frame
    code reads anything.
    """
    tmap: TileMap
    actors: ActorStore = field(default_factory=ActorStore)
    turns: TurnManager = field(default_factory=TurnManager)
    ui: UIState = field(default_factory=UIState)
    tasks: TaskQueue = field(default_factory=TaskQueue)
    draw: DrawBuffer = field(default_factory=DrawBuffer)
    debug: DebugLog = field(default_factory=lambda: DebugLog(S.DEBUG_MAX_MESSAGES))
    dt: float = 0.0  # seconds since the previous frame

    @property
    def phase(self) -> Phase:
        return self.turns.phase
