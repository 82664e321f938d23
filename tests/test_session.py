import pytest

from maze_data import CellKind, Grid, InvalidDimensionsError, Position
from pathfinder import bfs_distance
from session import MazeSession


def _kinds(session, kind):
    return session.grid.positions(kind)


def _open_neighbour(session):
    """First (dx, dy) from the player that is walkable, and one that is a wall."""
    walk = wall = None
    for dx, dy in ((1, 0), (-1, 0), (0, 1), (0, -1)):
        nx, ny = session.player.x + dx, session.player.y + dy
        if session.is_walkable(nx, ny):
            walk = walk or (dx, dy)
        else:
            wall = wall or (dx, dy)
    return walk, wall


@pytest.fixture
def session():
    return MazeSession(21, 21, seed=1234)


def test_initial_state(session):
    assert session.player == (1, 1)
    assert session.target == (19, 19)
    assert _kinds(session, CellKind.PLAYER) == [Position(1, 1)]
    assert _kinds(session, CellKind.TARGET) == [Position(19, 19)]
    assert session.path == []
    assert not session.path_found
    assert not session.auto_moving


def test_even_dimensions_rejected():
    with pytest.raises(InvalidDimensionsError):
        MazeSession(20, 21)


def test_move_into_wall_is_rejected(session):
    _, wall = _open_neighbour(session)
    before = session.grid.to_strings()
    assert session.move_player(*wall) is False
    assert session.player == (1, 1)
    assert session.grid.to_strings() == before


def test_move_out_of_bounds_is_rejected():
    session = MazeSession(5, 5, seed=0)
    session.grid.set_cell_kind(0, 1, CellKind.PATH)
    session.move_player(-1, 0)
    assert session.player == (0, 1)
    before = session.grid.to_strings()
    assert session.move_player(-1, 0) is False
    assert session.player == (0, 1)
    assert session.grid.to_strings() == before


def test_move_swaps_kinds(session):
    walk, _ = _open_neighbour(session)
    assert session.move_player(*walk) is True
    new = Position(1 + walk[0], 1 + walk[1])
    assert session.player == new
    assert session.cell_at(1, 1) is CellKind.PATH
    assert session.cell_at(*new) is CellKind.PLAYER
    assert _kinds(session, CellKind.PLAYER) == [new]


@pytest.mark.parametrize("delta", [(1, 1), (0, 0), (2, 0), (0, -2)])
def test_move_must_be_single_cardinal_step(session, delta):
    with pytest.raises(ValueError):
        session.move_player(*delta)


def test_find_path_length_matches_distance(session):
    assert session.find_path_bfs() is True
    assert session.path_found
    assert session.path[-1] == session.target
    assert session.player not in session.path
    assert len(session.path) == bfs_distance(session.grid, session.player, session.target)


def test_find_path_repeatable_after_reset(session):
    session.find_path_bfs()
    first = list(session.path)
    session.reset()
    session.find_path_bfs()
    assert session.path == first


def test_find_path_when_player_on_target(session):
    session.prepare_auto_move()
    while session.auto_move_step():
        pass
    assert session.at_target
    assert session.find_path_bfs() is True
    assert session.path_found
    assert session.path == []


def test_no_path_leaves_path_found_false():
    session = MazeSession(5, 5, seed=0)
    session.grid = Grid.from_strings([
        "11111",
        "1S101",
        "11111",
        "101E1",
        "11111",
    ])
    session.player, session.target = Position(1, 1), Position(3, 3)
    assert session.find_path_bfs() is False
    assert not session.path_found
    assert session.path == []
    assert session.prepare_auto_move() is False
    assert not session.auto_moving
    assert session.auto_move_step() is False


def test_auto_move_takes_exactly_path_length_steps(session):
    assert session.prepare_auto_move()
    expected = len(session.path)
    assert session.move_path[0] == (1, 1)
    assert session.move_path[1:] == session.path

    steps = 0
    while session.auto_move_step():
        steps += 1
    assert steps == expected
    assert session.player == session.target
    assert not session.auto_moving
    assert _kinds(session, CellKind.PLAYER) == [session.target]
    assert session.auto_move_step() is False


def test_manual_move_ignored_while_auto_moving(session):
    session.prepare_auto_move()
    walk, _ = _open_neighbour(session)
    assert session.move_player(*walk) is False
    assert session.player == (1, 1)
    assert session.auto_moving


def test_reset_mid_auto_move_cancels_animation(session):
    session.prepare_auto_move()
    session.auto_move_step()
    session.auto_move_step()
    session.reset()
    assert not session.auto_moving
    assert session.move_index == 0
    assert session.move_path == []
    assert session.player == (1, 1)
    assert session.auto_move_step() is False
    assert session.player == (1, 1)


def test_reset_is_idempotent(session):
    walk, _ = _open_neighbour(session)
    session.move_player(*walk)
    session.reset()
    once = session.grid.to_strings()
    session.reset()
    assert session.grid.to_strings() == once
    assert _kinds(session, CellKind.PLAYER) == [Position(1, 1)]
    assert _kinds(session, CellKind.TARGET) == [Position(19, 19)]


def test_generate_new_maze_cancels_animation(session):
    session.prepare_auto_move()
    session.auto_move_step()
    session.generate_new_maze()
    assert not session.auto_moving
    assert session.move_path == []
    assert not session.path_found
    assert session.player == (1, 1)
    assert _kinds(session, CellKind.PLAYER) == [Position(1, 1)]
    assert _kinds(session, CellKind.TARGET) == [Position(19, 19)]


def test_leaving_target_restores_it(session):
    session.prepare_auto_move()
    while session.auto_move_step():
        pass
    x, y = session.player
    for dx, dy in ((1, 0), (-1, 0), (0, 1), (0, -1)):
        if session.move_player(dx, dy):
            break
    assert session.cell_at(x, y) is CellKind.TARGET
    assert len(_kinds(session, CellKind.TARGET)) == 1


def test_manual_move_clears_shown_path(session):
    session.find_path_bfs()
    walk, _ = _open_neighbour(session)
    session.move_player(*walk)
    assert not session.path_found
    assert session.path == []
