import random
from types import SimpleNamespace

import pytest

from rpgworld.character import Character
from rpgworld.monster import (
    CHASE_LEASH_DISTANCE,
    DEATH_DELAY,
    Boss,
    Monster,
    should_abandon_chase,
)


class RecordingStage:
    def __init__(self):
        self.deaths = []
        self.returned = []

    def death_monster(self, monster, instigator):
        self.deaths.append((monster, instigator))

    def return_monster_pool(self, monster):
        self.returned.append(monster)


def make_monster(stage=None, authority=True):
    return Monster(7, 30, 5, (0.0, 0.0, 0.0), 0, stage, authority)


def test_abandon_chase_at_leash():
    assert should_abandon_chase((CHASE_LEASH_DISTANCE + 1, 0, 0), (0, 0, 0)) is True
    assert should_abandon_chase((CHASE_LEASH_DISTANCE, 0, 0), (0, 0, 0)) is False


def test_overlap_hits_each_target_once_per_swing():
    monster = make_monster()
    target = Character(20)
    monster.set_attack_collision_enabled(True)
    assert monster.on_attack_overlap(target) is True
    assert monster.on_attack_overlap(target) is False
    assert target.current_health == 15
    monster.set_attack_collision_enabled(False)
    assert monster.on_attack_overlap(target) is True
    assert target.current_health == 10


def test_attack_collision_ignored_without_authority():
    monster = make_monster(authority=False)
    monster.set_attack_collision_enabled(True)
    assert monster.attack_collision_enabled is False


def test_choose_attack_index_in_range():
    monster = make_monster()
    monster.attack_animation_count = 3
    rng = random.Random(1)
    picks = {monster.choose_attack_index(rng) for _ in range(50)}
    assert picks <= {0, 1, 2}
    monster.attack_animation_count = 0
    assert monster.choose_attack_index(rng) == 0


def test_die_reports_and_returns_to_pool():
    stage = RecordingStage()
    monster = make_monster(stage)
    monster.take_damage(100, "killer")
    assert monster.is_dead
    assert stage.deaths == [(monster, "killer")]
    assert stage.returned == [monster]
    assert monster.hidden is True
    assert monster.collision_enabled is False
    assert monster.ai_active is False


def test_die_uses_scheduler_delay():
    stage = RecordingStage()
    monster = make_monster(stage)
    scheduled = []
    monster.scheduler = lambda delay, callback: scheduled.append((delay, callback))
    monster.die(None)
    assert monster.is_dead
    assert stage.returned == []
    assert scheduled[0][0] == DEATH_DELAY
    scheduled[0][1]()
    assert stage.returned == [monster]


def test_die_without_authority_is_ignored():
    stage = RecordingStage()
    monster = make_monster(stage, authority=False)
    monster.die("killer")
    assert monster.is_dead is False
    assert stage.deaths == []


def test_respawn_restores_monster_at_spawn():
    monster = make_monster()
    monster.die(None)
    monster.location = (300.0, 0.0, 0.0)
    monster.respawn()
    assert monster.is_dead is False
    assert monster.current_health == monster.max_health
    assert monster.location == monster.spawn_location
    assert monster.hidden is False
    assert monster.ai_active is True


def test_return_to_pool_requires_authority():
    monster = make_monster(authority=False)
    with pytest.raises(RuntimeError):
        monster.return_to_pool()


def test_detect_player_skips_dead_and_far():
    monster = make_monster()
    dead = SimpleNamespace(is_dead=True, location=(10.0, 0.0, 0.0))
    far = SimpleNamespace(is_dead=False, location=(600.0, 0.0, 0.0))
    near = SimpleNamespace(is_dead=False, location=(100.0, 0.0, 0.0))
    assert monster.detect_player([dead, far, near]) is near
    assert monster.detected_player is near


def test_detect_player_respects_leash():
    monster = make_monster()
    monster.location = (700.0, 0.0, 0.0)
    beyond_leash = SimpleNamespace(is_dead=False, location=(900.0, 0.0, 0.0))
    assert monster.detect_player([beyond_leash]) is None
    assert monster.detected_player is None


def test_boss_dies_and_is_destroyed():
    stage = RecordingStage()
    boss = Boss(9, 50, 10, (0.0, 0.0, 0.0), 0, stage, True)
    reported = []
    boss.on_boss_death = lambda b, who: reported.append((b, who))
    boss.take_damage(500, "hero")
    assert reported == [(boss, "hero")]
    assert stage.deaths == [(boss, "hero")]
    assert stage.returned == []
    assert boss.destroyed is True


def test_boss_destroy_needs_death():
    boss = Boss(9, 50, 10, (0.0, 0.0, 0.0), 0, None, True)
    boss.destroy()
    assert boss.destroyed is False