"""Game info records and the manager that keeps loaded infos alive."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Generic, TypeVar


class InfoLifeSpan(IntEnum):
    """How long a loaded info stays registered."""

    TEMPORARY = 0
    STAGE = 1
    MANUAL = 2


class InfoStruct:
    """Base for loaded game info records."""

    def memory_size(self) -> int:
        """Approximate size of the record in bytes."""
        return 0


K = TypeVar("K")
I = TypeVar("I", bound=InfoStruct)


@dataclass(frozen=True)
class DynamicInfo(Generic[K, I]):
    """A loaded info together with the key it was loaded for."""

    info: I | None
    key: K


class GameInfoManager:
    """Holds references to loaded infos, grouped by life span.

    The owner is expected to call ``remove_temporary`` every
    ``REMOVE_INTERVAL`` seconds.
    """

    REMOVE_INTERVAL = 5.0

    def __init__(self) -> None:
        self._infos: dict[InfoLifeSpan, list[InfoStruct]] = {
            span: [] for span in InfoLifeSpan
        }
        self._clear_every_tick = False
        self.game_info_memory_size = 0

    def register(self, info: InfoStruct, life_span: InfoLifeSpan) -> None:
        """Keep ``info`` alive for ``life_span``."""
        span = InfoLifeSpan.TEMPORARY if self._clear_every_tick else InfoLifeSpan(life_span)
        self._infos[span].append(info)

    def clear_all(self) -> None:
        """Drop every registered info."""
        for infos in self._infos.values():
            infos.clear()

    def force_clear_every_tick(self) -> None:
        """From now on register every info as temporary."""
        self._clear_every_tick = True

    def remove_temporary(self) -> int:
        """Measure all registered infos, then drop the temporary ones.

        Returns the measured size, also kept in ``game_info_memory_size``.
        """
        self.game_info_memory_size = sum(
            info.memory_size() for infos in self._infos.values() for info in infos
        )
        self._infos[InfoLifeSpan.TEMPORARY].clear()
        return self.game_info_memory_size

    def count(self, life_span: InfoLifeSpan) -> int:
        """Number of infos registered under ``life_span``."""
        return len(self._infos[InfoLifeSpan(life_span)])