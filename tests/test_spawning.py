import pytest

from dungeon_descent.config import GameConfig
from dungeon_descent.dungeon.generator import LevelGenerator
from dungeon_descent.dungeon.map import DungeonMap, Point
from dungeon_descent.dungeon.spawns import SpawnPool
from dungeon_descent.dungeon.tiles import TileType
from dungeon_descent.engine.entities import Role
from dungeon_descent.engine.population import PopulationSpawner
from dungeon_descent.exceptions import SpawnPoolExhaustedError
from dungeon_descent.rng import RandomSource

CONFIG = GameConfig()


def test_pool_holds_only_floor_tiles():
    level = DungeonMap.from_lines([
        "#####",
        "#.C>#",
        "#..##",
        "#####",
    ])
    pool = SpawnPool.from_map(level)
    assert sorted(pool.points, key=lambda p: (p.x, p.y)) == [Point(1, 1), Point(1, 2), Point(2, 2)]


def test_draw_removes_point_and_empty_pool_raises():
    pool = SpawnPool([Point(1, 1), Point(2, 1)])
    rng = RandomSource(seed=3)
    drawn = {pool.draw(rng), pool.draw(rng)}
    assert drawn == {Point(1, 1), Point(2, 1)}
    assert len(pool) == 0
    with pytest.raises(SpawnPoolExhaustedError):
        pool.draw(rng)


@pytest.mark.parametrize("depth", range(1, 42))
def test_pool_fits_player_and_monsters(depth):
    rng = RandomSource(seed=depth)
    level = LevelGenerator(rng, CONFIG).generate(depth)
    pool = SpawnPool.from_map(level)
    assert len(pool) >= CONFIG.monster_count(depth) + 1


@pytest.mark.parametrize("depth,count", [(1, 3), (5, 3), (6, 4), (20, 4), (21, 5), (35, 5), (36, 6), (39, 6), (40, 1), (41, 2)])
def test_monster_count_by_depth(depth, count):
    rng = RandomSource(seed=depth)
    level = LevelGenerator(rng, CONFIG).generate(depth)
    roster = PopulationSpawner(rng, CONFIG).spawn_monsters(depth, SpawnPool.from_map(level))
    assert roster.capacity == count
    assert len(roster) == count


def test_spawned_entities_never_share_a_tile():
    rng = RandomSource(seed=99)
    level = LevelGenerator(rng, CONFIG).generate(36)
    pool = SpawnPool.from_map(level)
    spawner = PopulationSpawner(rng, CONFIG)
    roster = spawner.spawn_monsters(36, pool)
    player = spawner.spawn_player(pool)
    positions = [m.pos for m in roster] + [player.pos]
    assert len(set(positions)) == len(positions)
    for p in positions:
        assert level[p] is TileType.FLOOR
        assert p not in pool


def test_regular_and_boss_stats():
    spawner = PopulationSpawner(RandomSource(seed=1), CONFIG)
    grunt = spawner.make_monster(12, Point(1, 1))
    assert (grunt.max_health, grunt.health, grunt.damage, grunt.armour, grunt.boss) == (50, 50, 10, 0, False)
    boss = spawner.make_monster(40, Point(1, 1))
    assert (boss.max_health, boss.damage, boss.boss) == (5000, 70, True)
    assert boss.role is Role.MONSTER


def test_place_player_keeps_stats():
    spawner = PopulationSpawner(RandomSource(seed=1), CONFIG)
    player = spawner.make_player(Point(1, 1))
    player.change_health(-30)
    player.change_damage(5)
    player.change_armour(10)
    spawner.place_player(player, SpawnPool([Point(4, 4)]))
    assert player.pos == Point(4, 4)
    assert (player.health, player.damage, player.armour) == (70, 15, 10)
