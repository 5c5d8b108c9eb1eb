"""A stage: its monster pool, spawn groups and death rewards."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any

from .monster import DEFAULT_AI_MOVE_RADIUS, Monster

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SpawnData:
    """One monster placed by a spawn group."""

    monster_key: int
    location: tuple[float, float, float]
    health: int
    attack_damage: int
    ai_move_radius: float = DEFAULT_AI_MOVE_RADIUS


@dataclass(frozen=True)
class SpawnGroup:
    """Monsters that respawn together every ``spawn_duration`` seconds."""

    spawn_duration: float
    spawn_data: Sequence[SpawnData] = field(default_factory=tuple)


class Stage:
    """Owns a stage's monsters and respawns dead ones by group.

    ``reward_handler(instigator, monster_key)`` pays the killer. The owner
    calls ``spawn_monster(i)`` every ``spawn_durations[i]`` seconds.
    """

    def __init__(
        self,
        village_position: Sequence[float],
        reward_handler: Callable[[Any, int], None] | None = None,
        authority: bool = True,
    ) -> None:
        self.village_position = tuple(village_position)
        self.reward_handler = reward_handler
        self.authority = authority
        self.monsters: list[Monster] = []
        self.spawn_durations: list[float] = []
        self._spawn_pool: list[list[Monster]] = []

    def pool(self, index: int) -> list[Monster]:
        """Dead monsters of group ``index`` waiting to respawn."""
        return list(self._spawn_pool[index])

    def create_monster_pool(self, spawn_groups: Iterable[SpawnGroup]) -> list[Monster]:
        """Create every monster of every spawn group; returns the new monsters."""
        if not self.authority:
            return []
        created = []
        for pool_index, group in enumerate(spawn_groups):
            self._spawn_pool.append([])
            self.spawn_durations.append(group.spawn_duration)
            for data in group.spawn_data:
                monster = Monster(
                    data.monster_key,
                    data.health,
                    data.attack_damage,
                    data.location,
                    pool_index,
                    self,
                    self.authority,
                )
                monster.ai_move_radius = data.ai_move_radius
                created.append(monster)
        self.monsters.extend(created)
        return created

    def _require_server_and_dead(self, monster: Monster) -> None:
        if not self.authority:
            raise RuntimeError("stage calls must run on the server")
        if not monster.is_dead:
            raise ValueError("monster is not dead")

    def death_monster(self, monster: Monster, instigator: Any) -> None:
        """Reward whoever killed ``monster``."""
        self._require_server_and_dead(monster)
        if instigator is None or self.reward_handler is None:
            logger.warning("no player to reward for monster %d", monster.monster_key)
            return
        self.reward_handler(instigator, monster.monster_key)

    def return_monster_pool(self, monster: Monster) -> None:
        """Put a dead monster back into its group's pool."""
        self._require_server_and_dead(monster)
        if not 0 <= monster.pool_index < len(self._spawn_pool):
            raise IndexError(f"invalid monster pool index: {monster.pool_index}")
        pool = self._spawn_pool[monster.pool_index]
        if any(held is monster for held in pool):
            logger.warning("monster is already in the pool")
            return
        pool.append(monster)

    def spawn_monster(self, index: int) -> list[Monster]:
        """Respawn every pooled monster of group ``index``; returns them."""
        if not 0 <= index < len(self._spawn_pool):
            raise IndexError(f"invalid monster pool index: {index}")
        waiting = self._spawn_pool[index]
        self._spawn_pool[index] = []
        for monster in waiting:
            monster.respawn()
        return waiting