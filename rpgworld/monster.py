"""Monsters and bosses: attacking, chasing, dying and returning to the pool."""

from __future__ import annotations

import logging
import math
import random
from collections.abc import Callable, Iterable, Sequence
from typing import Any

from .character import Character

logger = logging.getLogger(__name__)

Vector = Sequence[float]
Scheduler = Callable[[float, Callable[[], None]], None]

CHASE_LEASH_DISTANCE = 800.0
DETECT_PLAYER_RADIUS = 500.0
DEFAULT_AI_MOVE_RADIUS = 100.0
DEATH_DELAY = 1.5


def should_abandon_chase(location: Vector, spawn_location: Vector) -> bool:
    """True when a chasing monster has strayed too far from where it spawned."""
    return math.dist(location, spawn_location) > CHASE_LEASH_DISTANCE


def _random_index(rng: random.Random, count: int) -> int:
    return rng.randint(0, count - 1) if count > 0 else 0


class Monster(Character):
    """A pooled monster owned by a stage.

    ``stage`` receives ``death_monster`` and ``return_monster_pool`` calls.
    ``scheduler`` runs delayed work as ``scheduler(delay, callback)``; when it
    is None the callback runs at once.
    """

    def __init__(
        self,
        monster_key: int,
        max_health: int,
        attack_damage: int,
        spawn_location: Vector,
        pool_index: int = 0,
        stage: Any = None,
        authority: bool = True,
    ) -> None:
        super().__init__(max_health, authority)
        self.monster_key = monster_key
        self.attack_damage = attack_damage
        self.spawn_location = tuple(spawn_location)
        self.location = tuple(spawn_location)
        self.pool_index = pool_index
        self.stage = stage
        self.ai_move_radius = DEFAULT_AI_MOVE_RADIUS
        self.detect_radius = DETECT_PLAYER_RADIUS
        self.attack_animation_count = 1
        self.death_animation_count = 1
        self.last_death_animation: int | None = None
        self.collision_enabled = True
        self.attack_collision_enabled = False
        self.ai_active = True
        self.detected_player: Any = None
        self.hidden = False
        self.tick_enabled = True
        self.scheduler: Scheduler | None = None
        self.rng = random.Random()
        self._attacked: list[Any] = []

    def _schedule(self, delay: float, callback: Callable[[], None]) -> None:
        if self.scheduler is None:
            callback()
        else:
            self.scheduler(delay, callback)

    def set_attack_collision_enabled(self, enabled: bool) -> None:
        """Open or close the attack hit box; closing forgets who was hit."""
        if not self.authority:
            return
        self.attack_collision_enabled = enabled
        if not enabled:
            self._attacked.clear()

    def on_attack_overlap(self, target: Any) -> bool:
        """Damage ``target`` once per swing; returns whether damage was dealt."""
        if any(hit is target for hit in self._attacked):
            return False
        target.take_damage(self.attack_damage, self)
        self._attacked.append(target)
        return True

    def choose_attack_index(self, rng: random.Random | None = None) -> int:
        """Pick a random attack animation."""
        return _random_index(rng or self.rng, self.attack_animation_count)

    def _stop_and_notify(self, instigator: Any) -> None:
        self.ai_active = False
        self.collision_enabled = False
        if self.stage is not None:
            self.stage.death_monster(self, instigator)

    def _play_death(self) -> None:
        self.last_death_animation = _random_index(self.rng, self.death_animation_count)

    def die(self, instigator: Any = None) -> None:
        """Die, report to the stage and return to the pool after a delay."""
        super().die(instigator)
        if not self.authority or not self.is_dead:
            return
        self._stop_and_notify(instigator)
        self.set_attack_collision_enabled(False)
        self._play_death()
        self._schedule(DEATH_DELAY, self.return_to_pool)

    def respawn(self, hp_ratio: float = 1.0) -> None:
        """Come back at the spawn location with AI and collision restored."""
        if not self.authority:
            return
        self.ai_active = True
        super().respawn(hp_ratio)
        self.collision_enabled = True
        self.location = self.spawn_location
        self.hidden = False
        self.tick_enabled = True

    def return_to_pool(self) -> None:
        """Hide the monster and hand it back to its stage's pool."""
        if not self.authority:
            raise RuntimeError("return_to_pool must run on the server")
        self.hidden = True
        self.tick_enabled = False
        if self.stage is not None:
            self.stage.return_monster_pool(self)

    def detect_player(self, players: Iterable[Any]) -> Any:
        """Pick the first live player in range and near enough the spawn point."""
        if not self.authority:
            raise RuntimeError("detect_player must run on the server")
        for player in players:
            if player is None or player.is_dead:
                continue
            if math.dist(self.location, player.location) > self.detect_radius:
                continue
            if math.dist(self.spawn_location, player.location) > CHASE_LEASH_DISTANCE:
                continue
            self.detected_player = player
            return player
        return None


class Boss(Monster):
    """A monster that is destroyed after death instead of being pooled.

    ``on_boss_death`` is called as ``on_boss_death(boss, instigator)``.
    """

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.on_boss_death: Callable[[Boss, Any], None] | None = None
        self.destroyed = False

    def die(self, instigator: Any = None) -> None:
        """Die, notify stage and game, then destroy after a delay."""
        Character.die(self, instigator)
        if not self.authority or not self.is_dead:
            return
        self._stop_and_notify(instigator)
        if self.on_boss_death is not None:
            self.on_boss_death(self, instigator)
        self._play_death()
        self._schedule(DEATH_DELAY, self.destroy)

    def destroy(self) -> None:
        """Remove a dead boss from the world."""
        if not self.authority or not self.is_dead:
            return
        self.destroyed = True