from __future__ import annotations
import logging
from enum import Enum, auto

logger = logging.getLogger(__name__)


class Phase(Enum):
    PLAYER = auto()
    ENEMY = auto()


class MoveState(Enum):
    """Sub-state of the currently selected unit."""
    NONE = auto()
    MOVING = auto()         # walk animation queued
    CONFIRM = auto()        # choose Wait / Attack
    CHOOSE_ATTACK = auto()
    ATTACKING = auto()      # attack animation queued


class TurnManager:
    def __init__(self) -> None:
        self.turn: int = 1
        self.phase: Phase = Phase.PLAYER

    def end_player_turn(self) -> bool:
        """Returns True if the phase actually flipped to ENEMY."""
        if self.phase is Phase.PLAYER:
            self.phase = Phase.ENEMY
            logger.info("turn %d: enemy phase", self.turn)
            return True
        return False

    def complete_enemy_turn(self) -> bool:
        """Returns True if we just transitioned back to PLAYER (new turn)."""
        if self.phase is Phase.ENEMY:
            self.phase = Phase.PLAYER
            self.turn += 1
            logger.info("turn %d: player phase", self.turn)
            return True
        return False
