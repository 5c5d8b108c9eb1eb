"""Drop group infos: which items a defeated monster may drop."""

from __future__ import annotations

import json
import logging
import re
import time
import weakref
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .gameinfo import DynamicInfo, GameInfoManager, InfoLifeSpan, InfoStruct

logger = logging.getLogger(__name__)

_DROP_ITEM_TOKEN_COUNT = 3
_INFO_BASE_SIZE = 48
_DROP_ITEM_SIZE = 12

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")
_FLOAT_PREFIX = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


class InfoDataError(ValueError):
    """Raised when an info data file or one of its records is malformed."""


def _is_valid_key(key: int) -> bool:
    return key >= 0


def _leading_int(text: str) -> int:
    match = _INT_PREFIX.match(text)
    return int(match.group(1)) if match else 0


def _leading_float(text: str) -> float:
    match = _FLOAT_PREFIX.match(text)
    return float(match.group(1)) if match else 0.0


@dataclass(frozen=True)
class DropItem:
    """One possible drop: item key, count and probability."""

    item_key: int
    item_count: int
    probability: float

    def is_valid(self) -> bool:
        """A drop needs a valid key, a non-negative count and a positive probability."""
        return (
            _is_valid_key(self.item_key)
            and self.item_count >= 0
            and self.probability > 0.0
        )


@dataclass(eq=False)
class DropGroupInfo(InfoStruct):
    """The drops of one drop group."""

    drop_items: list[DropItem] = field(default_factory=list)

    def memory_size(self) -> int:
        """Approximate size in bytes: the record plus its drop list."""
        return _INFO_BASE_SIZE + _DROP_ITEM_SIZE * len(self.drop_items)


def parse_drop_items(text: str) -> list[DropItem]:
    """Parse space separated ``key_count_probability`` tokens."""
    items = []
    for token in text.split(" "):
        if not token:
            continue
        parts = [part for part in token.split("_") if part]
        if len(parts) != _DROP_ITEM_TOKEN_COUNT:
            raise InfoDataError(f"malformed drop item: {token!r}")
        key_text, count_text, probability_text = parts
        item = DropItem(
            _leading_int(key_text),
            _leading_int(count_text),
            _leading_float(probability_text),
        )
        if not item.is_valid():
            raise InfoDataError(f"malformed drop item: {token!r}")
        items.append(item)
    return items


def _make_info(record: dict[str, Any]) -> DropGroupInfo:
    text = record.get("DropItem", "")
    if not isinstance(text, str):
        raise InfoDataError("DropItem must be a string")
    return DropGroupInfo(parse_drop_items(text))


def _record_key(record: Any) -> int:
    if not isinstance(record, dict):
        raise InfoDataError("drop group record must be an object")
    try:
        return int(record["Key"])
    except (KeyError, TypeError, ValueError) as exc:
        raise InfoDataError("drop group record needs an integer Key") from exc


def _read_records(path: Path) -> list[Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise InfoDataError(f"cannot load file {path}") from exc
    except json.JSONDecodeError as exc:
        raise InfoDataError(f"failed to parse JSON {path}") from exc
    if not isinstance(data, list) or not data:
        raise InfoDataError(f"failed to parse JSON {path}")
    return data


class DropGroupRegistry:
    """Loads drop group infos from a JSON file and reloads them on demand."""

    def __init__(self, manager: GameInfoManager) -> None:
        self._manager = manager
        self._path: Path | None = None
        self._infos: dict[int, weakref.ref[DropGroupInfo]] = {}

    def validate_file(self, path: str | Path) -> None:
        """Check every record of ``path`` and register the parsed infos."""
        self._path = Path(path)
        for record in _read_records(self._path):
            key = _record_key(record)
            if not _is_valid_key(key):
                raise InfoDataError(f"invalid drop group key: {key}")
            if key in self._infos:
                raise InfoDataError(f"duplicate drop group key: {key}")
            info = _make_info(record)
            self._manager.register(info, InfoLifeSpan.MANUAL)
            self._infos[key] = weakref.ref(info)

    def load(self, key: int) -> DropGroupInfo:
        """Read the info for ``key`` again from the file and register it for the stage."""
        if key not in self._infos or self._path is None:
            raise KeyError(key)
        for record in _read_records(self._path):
            if _record_key(record) != key:
                continue
            info = _make_info(record)
            self._infos[key] = weakref.ref(info)
            self._manager.register(info, InfoLifeSpan.STAGE)
            return info
        raise InfoDataError(f"drop group key {key} is missing from {self._path}")

    def get(self, key: int) -> DynamicInfo[int, DropGroupInfo]:
        """The info for ``key``, loading it again if it was released."""
        if key not in self._infos:
            raise KeyError(key)
        info = self._infos[key]()
        if info is None:
            started = time.perf_counter()
            info = self.load(key)
            logger.info(
                "Load DropGroupInfo(key %d), size %d bytes, %.6f seconds",
                key,
                info.memory_size(),
                time.perf_counter() - started,
            )
        return DynamicInfo(info, key)