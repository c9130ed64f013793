"""
Actor directory: a slot map handing out generation-checked keys.

Tasks keep an ``ActorKey`` across many frames while other actors die. A freed
slot bumps its generation, so an old key can never resolve to whoever gets
the slot next.
"""
from __future__ import annotations
from typing import Iterator, List, NamedTuple, Optional, Tuple

from .errors import StaleActorError
from .unit import Actor, Team

Coord = Tuple[int, int]


class ActorKey(NamedTuple):
    index: int
    generation: int


class ActorStore:
    def __init__(self) -> None:
        self._slots: List[Optional[Actor]] = []
        self._generations: List[int] = []
        self._free: List[int] = []

    def insert(self, actor: Actor) -> ActorKey:
        if self._free:
            index = self._free.pop()
            self._slots[index] = actor
        else:
            index = len(self._slots)
            self._slots.append(actor)
            self._generations.append(0)
        return ActorKey(index, self._generations[index])

    def remove(self, key: ActorKey) -> Actor:
        actor = self[key]
        self._slots[key.index] = None
        self._generations[key.index] += 1
        self._free.append(key.index)
        return actor

    def get(self, key: ActorKey) -> Optional[Actor]:
        index, generation = key
        if 0 <= index < len(self._slots) and self._generations[index] == generation:
            return self._slots[index]
        return None

    def __getitem__(self, key: ActorKey) -> Actor:
        actor = self.get(key)
        if actor is None:
            raise StaleActorError(key)
        return actor

    def __contains__(self, key: object) -> bool:
        return isinstance(key, ActorKey) and self.get(key) is not None

    def __len__(self) -> int:
        return len(self._slots) - len(self._free)

    # Slot order is insertion order until slots get reused
    def items(self) -> Iterator[Tuple[ActorKey, Actor]]:
        for index, actor in enumerate(self._slots):
            if actor is not None:
                yield ActorKey(index, self._generations[index]), actor

    def keys(self) -> List[ActorKey]:
        return [k for k, _ in self.items()]

    def values(self) -> List[Actor]:
        return [a for _, a in self.items()]

    def of_team(self, team: Team) -> List[ActorKey]:
        return [k for k, a in self.items() if a.team is team]

    def actor_at(self, c: Coord) -> Optional[ActorKey]:
        for k, a in self.items():
            if a.pos == c:
                return k
        return None

    def positions(self, exclude: Optional[ActorKey] = None) -> List[Coord]:
        return [a.pos for k, a in self.items() if k != exclude]
