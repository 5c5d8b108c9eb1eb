"""Health and death state shared by players and monsters."""

from __future__ import annotations

import logging
from typing import Any

logger = logging.getLogger(__name__)

DEFAULT_MAX_HEALTH = 20


class Character:
    """A character with health; only the authority changes its state."""

    def __init__(self, max_health: int = DEFAULT_MAX_HEALTH, authority: bool = True) -> None:
        self._max_health = max_health
        self._current_health = max_health
        self._dead = False
        self.authority = authority

    @property
    def max_health(self) -> int:
        return self._max_health

    @property
    def current_health(self) -> int:
        return self._current_health

    @property
    def is_dead(self) -> bool:
        return self._dead

    def begin_play(self) -> None:
        """Start with full health."""
        self._current_health = self._max_health

    def take_damage(self, amount: float, instigator: Any = None) -> float:
        """Lower health by ``amount``; returns the damage taken."""
        self.set_current_health(int(self._current_health - amount), instigator)
        return amount

    def set_current_health(self, value: int, instigator: Any = None) -> None:
        """Set health within 0..max; reaching zero kills the character."""
        if not self.authority:
            return
        self._current_health = max(0, min(value, self._max_health))
        if self._current_health <= 0:
            self.die(instigator)

    def die(self, instigator: Any = None) -> None:
        """Mark the character dead once."""
        if not self.authority or self._dead:
            return
        self._dead = True

    def respawn(self, hp_ratio: float) -> None:
        """Revive a dead character with ``hp_ratio`` of its maximum health."""
        if not 0.0 <= hp_ratio <= 1.0:
            raise ValueError(f"invalid spawn hp ratio: {hp_ratio}")
        if not self.authority:
            return
        if not self._dead:
            logger.warning("respawn called on a character that is not dead")
            return
        self._dead = False
        self._current_health = max(0, min(int(self._max_health * hp_ratio), self._max_health))

    def heal(self, amount: int) -> None:
        """Raise health by ``amount``, never above the maximum."""
        if amount < 0:
            raise ValueError(f"heal amount is negative: {amount}")
        if not self.authority:
            return
        self._current_health = max(
            self._current_health, min(self._current_health + amount, self._max_health)
        )

    def set_max_health(self, health: int) -> None:
        """Change the maximum health."""
        self._max_health = health