import pytest

from mazepath.core.maze import parse_maze
from mazepath.core.moves import cells_between, coast, coast_successors, successors
from mazepath.core.types import FORWARD_COST, TURN_COST, Direction, Node

from mazes import CORRIDOR, END_MID_CORRIDOR

N, E, S, W = Direction.NORTH, Direction.EAST, Direction.SOUTH, Direction.WEST


def test_rotations():
    assert N.rotate_cw() is E
    assert W.rotate_cw() is N
    assert N.rotate_ccw() is W
    assert S.rotate_ccw() is E
    d = E
    for _ in range(4):
        d = d.rotate_cw()
    assert d is E


def test_forward():
    assert N.forward((2, 3)) == (1, 3)
    assert E.forward((2, 3)) == (2, 4)
    assert S.forward((2, 3)) == (3, 3)
    assert W.forward((2, 3)) == (2, 2)


def test_successors_in_open_cell():
    maze = parse_maze(CORRIDOR)
    node = Node((1, 1), E)
    assert successors(maze, node) == [
        (Node((1, 2), E), FORWARD_COST),
        (Node((1, 1), S), TURN_COST),
        (Node((1, 1), N), TURN_COST),
    ]


def test_no_forward_edge_into_wall():
    maze = parse_maze(CORRIDOR)
    moves = successors(maze, Node((1, 4), E))
    assert [n for n, _ in moves] == [Node((1, 4), S), Node((1, 4), N)]
    assert all(cost == TURN_COST for _, cost in moves)


def test_coast_stops_where_a_turn_is_possible():
    maze = parse_maze(CORRIDOR)
    assert coast(maze, Node((1, 1), E)) == (Node((1, 4), E), 3)
    assert coast(maze, Node((1, 4), S)) == (Node((4, 4), S), 3)


def test_coast_stops_on_end_cell():
    maze = parse_maze(END_MID_CORRIDOR)
    assert coast(maze, Node((1, 1), E)) == (Node((1, 3), E), 2)


def test_blocked_coast_has_no_forward_move():
    maze = parse_maze(CORRIDOR)
    assert coast(maze, Node((1, 4), E)) == (Node((1, 4), E), 0)
    assert len(coast_successors(maze, Node((1, 4), E))) == 2
    assert coast_successors(maze, Node((1, 1), E))[0] == (Node((1, 4), E), 3)


def test_cells_between():
    assert cells_between((1, 1), (1, 4)) == [(1, 1), (1, 2), (1, 3), (1, 4)]
    assert cells_between((4, 4), (2, 4)) == [(4, 4), (3, 4), (2, 4)]
    assert cells_between((2, 2), (2, 2)) == [(2, 2)]
    with pytest.raises(ValueError):
        cells_between((1, 1), (2, 2))
