import pytest

from dungeon_descent.config import GameConfig
from dungeon_descent.dungeon.map import DungeonMap, Point
from dungeon_descent.dungeon.tiles import TileType
from dungeon_descent.engine.directions import Direction
from dungeon_descent.engine.entities import Entity, MonsterRoster, Role
from dungeon_descent.engine.session import GameSession, Outcome
from dungeon_descent.exceptions import SessionNotStartedError, SessionOverError
from dungeon_descent.rng import RandomSource

UP, RIGHT, DOWN, LEFT = 0, 1, 2, 3  # monster direction rolls


def player_at(x, y, **kw):
    return Entity(Role.PLAYER, 100, x, y, **kw)


def monster_at(x, y, **kw):
    return Entity(Role.MONSTER, 50, x, y, **kw)


def loaded(presenter, rng, rows, player, monsters=(), depth=1, config=None):
    session = GameSession(presenter=presenter, config=config or GameConfig(), rng=rng)
    session.load(DungeonMap.from_lines(rows), player, MonsterRoster(list(monsters)), depth=depth)
    return session


def test_fresh_game_spawns_default_player_on_free_floor(presenter):
    session = GameSession(presenter=presenter, rng=RandomSource(seed=2024))
    session.start()

    player = session.player
    assert session.depth == 1
    assert (player.health, player.max_health, player.damage, player.armour) == (100, 100, 10, 0)
    assert session.level.get_tile(player.x, player.y) is TileType.FLOOR
    assert len(session.monsters) == 3
    assert all(m.pos != player.pos for m in session.monsters)
    assert len(presenter.frames) == 1
    assert session.outcome is Outcome.IN_PROGRESS


def test_move_before_start_is_rejected():
    with pytest.raises(SessionNotStartedError):
        GameSession().move_player(Direction.UP)


def test_wall_bump_keeps_player_but_monsters_still_move(presenter, scripted):
    monster = monster_at(3, 2)
    session = loaded(
        presenter,
        scripted(UP),
        ["#####",
         "#...#",
         "#...#",
         "#####"],
        player_at(1, 1),
        [monster],
    )
    result = session.move_player(Direction.UP)
    assert session.player.pos == Point(1, 1)
    assert result.moved is False
    assert monster.pos == Point(3, 1)
    assert len(presenter.frames) == 2


def test_step_onto_floor(presenter, scripted):
    session = loaded(presenter, scripted(), ["#####", "#...#", "#####"], player_at(1, 1))
    result = session.move_player(Direction.RIGHT)
    assert session.player.pos == Point(2, 1)
    assert result.moved is True


def test_chest_roll_one_heals_to_full_and_consumes_chest(presenter, scripted):
    player = player_at(1, 1)
    player.change_health(-60)
    session = loaded(presenter, scripted(1), ["#####", "#.C.#", "#####"], player)

    session.move_player(Direction.RIGHT)

    assert player.health == player.max_health
    assert player.pos == Point(2, 1)
    assert session.level.get_tile(2, 1) is TileType.FLOOR
    assert presenter.chests == ["Greater Healing Potion"]

    # Walking off and back on yields nothing more
    session.move_player(Direction.LEFT)
    session.move_player(Direction.RIGHT)
    assert presenter.chests == ["Greater Healing Potion"]


def test_attacking_monster_does_not_move_player(presenter, scripted):
    monster = monster_at(2, 1)
    session = loaded(presenter, scripted(UP), ["#####", "#...#", "#####"], player_at(1, 1), [monster])

    result = session.move_player(Direction.RIGHT)

    assert session.player.pos == Point(1, 1)
    assert monster.health == 40
    assert monster.pos == Point(2, 1)  # rolled UP into the wall
    assert result.messages == ["Monster took 10 damage"]
    assert presenter.combat == ["Monster took 10 damage"]


def test_killed_monster_is_removed_before_monsters_act(presenter, scripted):
    doomed = monster_at(2, 1)
    doomed.change_health(-45)
    other = monster_at(3, 2)
    session = loaded(
        presenter,
        scripted(LEFT),  # only one monster left to roll
        ["######",
         "#....#",
         "#....#",
         "######"],
        player_at(1, 1),
        [doomed, other],
    )

    session.move_player(Direction.RIGHT)

    assert session.monsters.slots == (None, other)
    assert other.pos == Point(2, 2)
    assert presenter.frames[-1].monsters[0] is None
    assert session.outcome is Outcome.IN_PROGRESS


def test_monster_attacks_adjacent_player(presenter, scripted):
    monster = monster_at(2, 1)
    session = loaded(presenter, scripted(LEFT), ["#####", "#...#", "#####"], player_at(1, 1), [monster])
    session.move_player(Direction.DOWN)  # wall
    assert session.player.health == 90
    assert monster.pos == Point(2, 1)
    assert presenter.combat == ["You took 10 damage"]


def test_armour_absorbs_monster_hit_in_session(presenter, scripted):
    monster = monster_at(2, 1, damage=70)
    player = player_at(1, 1, armour=7)
    session = loaded(presenter, scripted(LEFT), ["#####", "#...#", "#####"], player, [monster])
    session.move_player(Direction.UP)
    assert (player.health, player.armour) == (100, 2)
    assert presenter.combat == ["Your armour was hit!"]


def test_monsters_may_stack_and_do_not_open_chests(presenter, scripted):
    a, b, c = monster_at(2, 1), monster_at(2, 3), monster_at(3, 2)
    session = loaded(
        presenter,
        scripted(RIGHT, UP, LEFT),
        ["#####",
         "#..C#",
         "#...#",
         "#...#",
         "#####"],
        player_at(1, 2),
        [a, b, c],
    )
    session.move_player(Direction.UP)  # player to (1, 1)
    assert session.player.pos == Point(1, 1)
    assert a.pos == Point(3, 1)
    assert session.level.get_tile(3, 1) is TileType.CHEST
    assert b.pos == c.pos == Point(2, 2)


def test_stairs_descend_and_keep_player_stats(presenter, scripted):
    player = player_at(1, 1, damage=25, armour=5)
    player.change_health(-10)
    session = loaded(presenter, scripted(seed=77), ["######", "#.>..#", "######"], player)

    result = session.move_player(Direction.RIGHT)

    assert result.descended is True
    assert session.depth == result.depth == 2
    assert (session.level.width, session.level.height) == (25, 18)
    assert (player.health, player.damage, player.armour) == (90, 25, 5)
    assert session.level.get_tile(player.x, player.y) is TileType.FLOOR
    assert len(session.monsters) == 3
    assert all(m.pos != player.pos for m in session.monsters)
    assert presenter.frames[-1].depth == 2


def test_death_on_stairs_ends_session_without_descending(presenter, scripted):
    player = player_at(1, 1)
    player.change_health(-95)
    monster = monster_at(3, 1)
    session = loaded(presenter, scripted(LEFT), ["######", "#.>..#", "######"], player, [monster])

    result = session.move_player(Direction.RIGHT)

    assert player.pos == Point(2, 1)
    assert player.health <= 0
    assert result.outcome is Outcome.DEFEAT
    assert result.descended is False
    assert session.depth == 1
    assert session.level.get_tile(2, 1) is TileType.STAIRS
    assert session.is_over
    with pytest.raises(SessionOverError):
        session.move_player(Direction.LEFT)


def test_final_depth_spawns_single_boss(presenter):
    config = GameConfig(start_depth=40)
    session = GameSession(presenter=presenter, config=config, rng=RandomSource(seed=40))
    session.start()
    monsters = list(session.monsters)
    assert len(monsters) == 1
    boss = monsters[0]
    assert (boss.max_health, boss.damage, boss.boss) == (5000, 70, True)
    assert session.level.count(TileType.STAIRS) == 0


def test_defeating_boss_wins_and_stops_turns(presenter, scripted):
    boss = Entity(Role.MONSTER, 5000, 2, 1, damage=70, boss=True)
    boss.change_health(-4995)
    bystander = monster_at(3, 2)
    session = loaded(
        presenter,
        scripted(),
        ["#####",
         "#...#",
         "#...#",
         "#####"],
        player_at(1, 1),
        [boss, bystander],
        depth=40,
    )

    result = session.move_player(Direction.RIGHT)

    assert result.outcome is Outcome.VICTORY
    assert session.is_boss_defeated()
    assert presenter.victories == 1
    assert bystander.pos == Point(3, 2)  # no monster turns after the win
    assert len(presenter.frames) == 2
    with pytest.raises(SessionOverError):
        session.move_player(Direction.DOWN)
    assert presenter.victories == 1


def test_presenter_receives_copies_only(presenter, scripted):
    session = loaded(presenter, scripted(UP), ["#####", "#...#", "#####"], player_at(1, 1), [monster_at(3, 1)])
    before = session.snapshot()
    frame = presenter.frames[-1]
    assert frame == before
    with pytest.raises(AttributeError):
        frame.tiles[1].append(TileType.WALL)
    assert session.snapshot() == before
