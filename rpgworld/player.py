"""The player character: combo attacks, auto battle, auto potion and camera."""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any

from .character import DEFAULT_MAX_HEALTH, Character

logger = logging.getLogger(__name__)

Vector = Sequence[float]

DEFAULT_TURN_RATE = 10.0
DEFAULT_ATTACK_DAMAGE = 20
DEFAULT_ATTACK_RANGE = 200.0
TARGET_SEARCH_RADIUS = 600.0
AUTO_POTION_HEALTH_RATIO = 0.5
START_LOCATION_TOLERANCE = 50.0


class CameraType(Enum):
    """Camera placements the player can switch between."""

    MAIN_CAMERA = 0
    VILLAGE_CAMERA = 1


@dataclass(frozen=True)
class CameraSettings:
    """Spring arm placement for one camera type."""

    pitch: float
    arm_length: float
    socket_offset_z: float


_CAMERA_SETTINGS: dict[CameraType, CameraSettings] = {
    CameraType.MAIN_CAMERA: CameraSettings(pitch=-55.0, arm_length=1200.0, socket_offset_z=0.0),
    CameraType.VILLAGE_CAMERA: CameraSettings(pitch=0.0, arm_length=300.0, socket_offset_z=100.0),
}


class Player(Character):
    """A player character.

    Attack requests follow a combo protocol: the first request starts an
    attack, a request during an attack is saved for the combo, and further
    requests are ignored until the combo continues or is reset.
    """

    def __init__(self, max_health: int = DEFAULT_MAX_HEALTH, authority: bool = True) -> None:
        super().__init__(max_health, authority)
        self.turn_rate = DEFAULT_TURN_RATE
        self.attack_damage = DEFAULT_ATTACK_DAMAGE
        self.attack_range = DEFAULT_ATTACK_RANGE
        self.attack_index = 0
        self.is_attacking = False
        self.save_attack = False
        self.played_attacks: list[int] = []
        self.auto_battle = False
        self.auto_potion = False
        self.auto_start_location: tuple[float, ...] = (0.0, 0.0, 0.0)
        self.target_enemy: Any = None
        self.camera_type = CameraType.MAIN_CAMERA
        self.camera = _CAMERA_SETTINGS[CameraType.MAIN_CAMERA]
        self.collision_enabled = True
        self.attack_collision_enabled = False
        self.hidden = False
        self.death_animation_played = False

    def _play_attack(self) -> int:
        index = self.attack_index
        self.attack_index += 1
        self.played_attacks.append(index)
        return index

    def request_attack(self) -> int | None:
        """Start an attack or save one for the combo.

        Returns the attack index that started playing, or None.
        """
        if self.is_dead:
            return None
        if self.is_attacking and self.save_attack:
            return None
        if self.is_attacking:
            self.save_attack = True
            return None
        self.is_attacking = True
        return self._play_attack()

    def combo_attack(self) -> int | None:
        """Play the saved follow-up attack; returns its index or None."""
        if not self.is_attacking or not self.save_attack:
            logger.warning(
                "combo attack rejected: attacking=%s, saved=%s",
                self.is_attacking,
                self.save_attack,
            )
            return None
        self.save_attack = False
        return self._play_attack()

    def reset_combo(self) -> bool:
        """End the current combo; returns False when no attack was running."""
        if not self.is_attacking:
            logger.warning("reset combo rejected: not attacking")
            return False
        self.attack_index = 0
        self.save_attack = False
        self.is_attacking = False
        return True

    def toggle_auto_battle(self, location: Vector) -> bool:
        """Flip auto battle; turning it on remembers ``location`` as home."""
        self.auto_battle = not self.auto_battle
        if self.auto_battle:
            self.auto_start_location = tuple(location)
        return self.auto_battle

    def turn_off_auto_battle(self) -> None:
        """Stop auto battle."""
        self.auto_battle = False

    def toggle_auto_potion(self) -> bool:
        """Flip auto potion; returns the new state."""
        self.auto_potion = not self.auto_potion
        return self.auto_potion

    def needs_auto_potion(self) -> bool:
        """True when the server should drink a potion for this player."""
        if self.is_dead or not self.authority or not self.auto_potion:
            return False
        return self.current_health / self.max_health < AUTO_POTION_HEALTH_RATIO

    def change_camera_type(self, camera_type: CameraType) -> bool:
        """Switch the client camera; returns whether it changed."""
        camera_type = CameraType(camera_type)
        if self.authority or self.camera_type is camera_type:
            return False
        self.camera = _CAMERA_SETTINGS[camera_type]
        self.camera_type = camera_type
        return True

    def find_target(self, location: Vector, candidates: Iterable[Any]) -> Any:
        """Target the nearest live candidate within the search radius.

        The current target is kept when nothing suitable is found.
        """
        in_range = [
            candidate
            for candidate in candidates
            if candidate is not None
            and math.dist(location, candidate.location) <= TARGET_SEARCH_RADIUS
        ]
        in_range.sort(key=lambda candidate: math.dist(location, candidate.location))
        for candidate in in_range:
            if candidate.is_dead:
                continue
            self.target_enemy = candidate
            return candidate
        return None

    def die(self, instigator: Any = None) -> None:
        """Die and drop every attack and targeting state."""
        super().die(instigator)
        if not self.authority or not self.is_dead:
            return
        self.target_enemy = None
        self.attack_index = 0
        self.save_attack = False
        self.is_attacking = False
        self.attack_collision_enabled = False
        self.collision_enabled = False
        self.death_animation_played = True

    def respawn(self, hp_ratio: float) -> None:
        """Revive and become visible and collidable again."""
        super().respawn(hp_ratio)
        if not self.authority or self.is_dead:
            return
        self.collision_enabled = True
        self.hidden = False