# rpgworld

This package holds the game logic of an online action RPG as plain Python
objects. There is no engine and no network layer. Every rule can be called and
tested on its own. Where the game would be split between a server and clients,
the objects take an `authority` flag. State only changes where `authority` is
true.

## Modules

- `rpgworld.gameinfo`
  - `InfoStruct` is the base for loaded data records. `memory_size()` returns an approximate size in bytes.
  - `DynamicInfo` pairs a loaded info with its key.
  - `InfoLifeSpan` has the members `TEMPORARY`, `STAGE` and `MANUAL`.
  - `GameInfoManager` keeps infos registered under a life span.
    - `register` adds an info under a life span.
    - `count` tells how many infos a life span holds.
    - `remove_temporary` sums the sizes of every registered info and then drops the temporary ones. Call it every `REMOVE_INTERVAL` (5.0) seconds.
    - `clear_all` drops every info.
    - `force_clear_every_tick` makes every later registration temporary.
- `rpgworld.dropgroup`
  - `DropItem` is an item key, a count and a probability. `is_valid()` requires a key ≥ 0, a count ≥ 0 and a probability > 0.
  - `DropGroupInfo` holds a list of drop items.
  - `parse_drop_items(text)` reads space-separated `key_count_probability` tokens.
  - `DropGroupRegistry` reads a JSON array of `{"Key": ..., "DropItem": "..."}` records.
    - `validate_file(path)` checks every record and registers it with the manager for the `MANUAL` life span.
    - `get(key)` returns a `DynamicInfo`. If the info has been released, `get` reloads it from the file and registers it for the stage.
    - `load(key)` always rereads the file.
    - Malformed data raises `InfoDataError`. Unknown keys raise `KeyError`.
- `rpgworld.character`
  - `Character` handles health that stays between 0 and the maximum.
  - It has `take_damage`, `set_current_health`, `heal` and `set_max_health`.
  - `die` marks the character dead once.
  - `respawn(hp_ratio)` revives a dead character. The ratio must lie in 0..1, otherwise `ValueError` is raised.
- `rpgworld.monster`
  - `Monster` is a pooled monster.
    - `on_attack_overlap` hits each target once per swing. `set_attack_collision_enabled(False)` clears the record of who was hit.
    - `choose_attack_index` picks a random attack animation.
    - `detect_player` picks the first live player within the detect radius that is also within 800 units of the spawn point.
    - `die` reports the death to the stage and then calls `return_to_pool`.
    - `respawn` brings the monster back at its spawn location.
    - Delayed work goes through the optional `scheduler(delay, callback)`. Without one, the work runs at once.
  - `Boss` is destroyed after death instead of being pooled. It also calls `on_boss_death(boss, instigator)` when it dies.
  - `should_abandon_chase(location, spawn_location)` is true beyond 800 units.
- `rpgworld.stage`
  - `SpawnData` and `SpawnGroup` describe the monsters of a stage.
  - `Stage` uses them.
    - `create_monster_pool` builds the monsters.
    - `death_monster` pays the killer through `reward_handler(instigator, monster_key)`.
    - `return_monster_pool` puts a dead monster back into its group.
    - `spawn_monster(index)` respawns every monster waiting in that group.
    - `pool(index)` lists the monsters waiting in a group.
- `rpgworld.player`
  - `Player` covers combo attacks with `request_attack`, `combo_attack` and `reset_combo`.
  - Auto battle uses `toggle_auto_battle` and `turn_off_auto_battle`.
  - Auto potion uses `toggle_auto_potion`. `needs_auto_potion` is true below half health, on the server only.
  - `change_camera_type` switches between the `CameraType` values and updates the `CameraSettings`. It works on clients only.
  - `find_target` chooses the nearest live candidate within 600 units.
- `rpgworld.inventory_types`
  - `ItemInfo` holds the data for one item: key, name, description, maximum stack and whether it has a use effect.
  - `ItemSlot` is one inventory slot. An empty slot holds key `-1`.
  - `ItemCollection` holds the slots of one item kind and their total count.

## Example

```python
from rpgworld.stage import SpawnData, SpawnGroup, Stage

rewards = []
stage = Stage((0.0, 0.0, 0.0), reward_handler=lambda who, key: rewards.append((who, key)))
(monster,) = stage.create_monster_pool(
    [SpawnGroup(10.0, [SpawnData(1, (100.0, 0.0, 0.0), health=30, attack_damage=5)])]
)

monster.take_damage(30, "hero")     # dies, reward is paid, returns to the pool
assert rewards == [("hero", 1)]
assert stage.pool(0) == [monster]

stage.spawn_monster(0)              # called every spawn_durations[0] seconds
assert monster.current_health == 30 and not monster.is_dead
```

## What it does not do

- There is no inventory logic. Stacking, rewards, purchases, item use and sorting are missing; only the slot and collection types are here.
- There are no error codes.
- There are no stored per-player tables, no storage layer and no database access.
- There is no networking, no rendering and no game loop. The caller moves the characters, runs the timers and calls the methods.
- There is no command-line program.

## Running the tests

```
pip install -e .[test]
pytest
```