import pytest

from rpgworld.stage import SpawnData, SpawnGroup, Stage


def make_stage(rewards=None, authority=True):
    handler = None if rewards is None else (lambda who, key: rewards.append((who, key)))
    stage = Stage((1.0, 2.0, 3.0), handler, authority)
    groups = [
        SpawnGroup(5.0, [SpawnData(1, (0.0, 0.0, 0.0), 20, 3), SpawnData(2, (50.0, 0.0, 0.0), 40, 6, 250.0)]),
        SpawnGroup(10.0, [SpawnData(3, (100.0, 0.0, 0.0), 60, 9)]),
    ]
    created = stage.create_monster_pool(groups)
    return stage, created


def test_create_monster_pool_builds_monsters():
    stage, created = make_stage()
    assert [m.monster_key for m in created] == [1, 2, 3]
    assert [m.pool_index for m in created] == [0, 0, 1]
    assert [m.max_health for m in created] == [20, 40, 60]
    assert created[1].ai_move_radius == 250.0
    assert stage.spawn_durations == [5.0, 10.0]
    assert stage.monsters == created
    assert all(m.stage is stage for m in created)
    assert stage.pool(0) == []


def test_create_monster_pool_needs_authority():
    stage, created = make_stage(authority=False)
    assert created == []
    assert stage.monsters == []


def test_death_rewards_and_respawn_cycle():
    rewards = []
    stage, created = make_stage(rewards)
    monster = created[0]
    monster.take_damage(1000, "player")
    assert rewards == [("player", 1)]
    assert stage.pool(0) == [monster]
    respawned = stage.spawn_monster(0)
    assert respawned == [monster]
    assert monster.is_dead is False
    assert monster.current_health == monster.max_health
    assert stage.pool(0) == []


def test_death_without_instigator_gives_no_reward():
    rewards = []
    stage, created = make_stage(rewards)
    created[2].take_damage(1000, None)
    assert rewards == []
    assert stage.pool(1) == [created[2]]


def test_return_twice_does_not_duplicate():
    stage, created = make_stage([])
    monster = created[1]
    monster.take_damage(1000, None)
    stage.return_monster_pool(monster)
    assert stage.pool(0) == [monster]


def test_death_monster_rejects_living_monster():
    stage, created = make_stage([])
    with pytest.raises(ValueError):
        stage.death_monster(created[0], "player")


def test_spawn_monster_bad_index():
    stage, _ = make_stage()
    with pytest.raises(IndexError):
        stage.spawn_monster(5)


def test_village_position_kept():
    stage, _ = make_stage()
    assert stage.village_position == (1.0, 2.0, 3.0)