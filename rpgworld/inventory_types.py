"""Inventory slots, item descriptions and per-item slot collections."""

from __future__ import annotations

from dataclasses import dataclass, field

EMPTY_ITEM_KEY = -1


@dataclass(frozen=True)
class ItemInfo:
    """Static description of an item kind."""

    key: int
    name: str = ""
    desc: str = ""
    max_stack: int = 1
    use_effect: bool = False


@dataclass(eq=False)
class ItemSlot:
    """One inventory slot; identity matters, not equality."""

    item_key: int = EMPTY_ITEM_KEY
    slot_index: int = -1
    item_count: int = 0

    def clear(self) -> None:
        """Empty the slot, keeping its index."""
        self.item_key = EMPTY_ITEM_KEY
        self.item_count = 0

    def is_empty(self) -> bool:
        """True when no item kind is held."""
        return self.item_key == EMPTY_ITEM_KEY


@dataclass
class ItemCollection:
    """All slots holding one item kind and their total count."""

    slots: list[ItemSlot] = field(default_factory=list)
    total_count: int = 0

    def add(self, slot: ItemSlot, count: int) -> None:
        """Track ``slot`` and add ``count`` to the total."""
        self.slots.append(slot)
        self.total_count += count

    def discard(self, slot: ItemSlot) -> None:
        """Stop tracking ``slot``; the total is left to the caller."""
        self.slots = [held for held in self.slots if held is not slot]