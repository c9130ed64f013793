"""
Unit tests for the actor directory and actors.
"""

import pytest

from skirmish.actors import ActorKey, ActorStore
from skirmish.errors import StaleActorError
from skirmish.unit import Actor, Team, UnitType, lerp


class TestActorStore:
    """Tests for generation-checked actor keys."""

    def test_insert_and_lookup(self):
        """Test that an inserted actor is reachable by its key."""
        store = ActorStore()
        actor = Actor.spawn((1, 2), Team.BLUE)
        key = store.insert(actor)
        assert store[key] is actor
        assert store.get(key) is actor
        assert key in store
        assert len(store) == 1

    def test_removed_key_goes_stale(self):
        """Test that a removed actor's key no longer resolves."""
        store = ActorStore()
        key = store.insert(Actor.spawn((0, 0), Team.RED))
        store.remove(key)
        assert store.get(key) is None
        assert key not in store
        assert len(store) == 0
        with pytest.raises(StaleActorError):
            store[key]

    def test_stale_error_is_key_error(self):
        """Test that stale lookups can be caught as KeyError."""
        store = ActorStore()
        with pytest.raises(KeyError):
            store[ActorKey(3, 0)]

    def test_reused_slot_does_not_resolve_old_key(self):
        """Test that a recycled slot gets a new generation."""
        store = ActorStore()
        old = store.insert(Actor.spawn((0, 0), Team.RED))
        store.remove(old)
        newcomer = Actor.spawn((1, 1), Team.BLUE)
        new = store.insert(newcomer)
        assert new.index == old.index
        assert new.generation != old.generation
        assert store.get(old) is None
        assert store[new] is newcomer

    def test_queries(self):
        """Test team, position and occupancy lookups."""
        store = ActorStore()
        a = store.insert(Actor.spawn((0, 0), Team.BLUE))
        b = store.insert(Actor.spawn((1, 0), Team.RED))
        c = store.insert(Actor.spawn((2, 0), Team.BLUE))
        assert store.of_team(Team.BLUE) == [a, c]
        assert store.actor_at((1, 0)) == b
        assert store.actor_at((4, 4)) is None
        assert store.positions(exclude=a) == [(1, 0), (2, 0)]
        assert store.keys() == [a, b, c]

    def test_non_key_is_not_contained(self):
        """Test membership with something that is not a key."""
        assert "nope" not in ActorStore()


class TestActor:
    """Tests for the actor record."""

    def test_spawn_defaults(self):
        """Test that a spawned actor starts fresh on its cell."""
        actor = Actor.spawn((3, 4), Team.RED, UnitType.TANK)
        assert actor.hp == 10
        assert not actor.has_moved
        assert actor.draw_pos == (3.0, 4.0)
        assert actor.alive
        assert actor.sprite_name == "tank_red"

    def test_snap_to(self):
        """Test that committing a move parks the sprite too."""
        actor = Actor.spawn((0, 0), Team.BLUE)
        actor.draw_pos = (0.4, 0.0)
        actor.snap_to((1, 0))
        assert actor.pos == (1, 0)
        assert actor.draw_pos == (1.0, 0.0)

    def test_lerp(self):
        """Test linear interpolation between positions."""
        assert lerp((0.0, 0.0), (2.0, 4.0), 0.5) == (1.0, 2.0)
        assert lerp((1.0, 1.0), (3.0, 1.0), 0.0) == (1.0, 1.0)
