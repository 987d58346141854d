import pytest

from mazepath.core.errors import MalformedMazeError
from mazepath.core.maze import MAP_FILES, load_maze, parse_maze
from mazepath.core.types import Cell

from mazes import CORRIDOR


def test_parse_finds_markers_and_size():
    maze = parse_maze(CORRIDOR)
    assert maze.start == (1, 1)
    assert maze.end == (4, 4)
    assert (maze.height, maze.width) == (6, 6)


def test_cell_lookup():
    maze = parse_maze(CORRIDOR)
    assert maze.cell((0, 0)) is Cell.WALL
    assert maze.cell((1, 2)) is Cell.OPEN
    assert maze.cell(maze.start) is Cell.OPEN
    assert maze.cell(maze.end) is Cell.OPEN


def test_cell_out_of_bounds_is_an_error():
    maze = parse_maze(CORRIDOR)
    with pytest.raises(IndexError):
        maze.cell((6, 0))
    with pytest.raises(IndexError):
        maze.cell((-1, 2))


def test_is_open_treats_outside_as_wall():
    maze = parse_maze("S.E")
    assert maze.is_open((0, 1))
    assert not maze.is_open((0, 3))
    assert not maze.is_open((-1, 0))


@pytest.mark.parametrize("text", [
    "",
    "#####\n#..E#\n#####",
    "#####\n#S..#\n#####",
    "#####\n#SSE#\n#####",
    "#####\n#SEE#\n#####",
    "#####\n#S.E#\n####",
    "#####\n#SxE#\n#####",
])
def test_malformed_input_is_rejected(text):
    with pytest.raises(MalformedMazeError):
        parse_maze(text)


def test_malformed_error_is_a_value_error():
    with pytest.raises(ValueError):
        parse_maze("#.#")


def test_bundled_maps_load():
    for key in MAP_FILES:
        maze = load_maze(key)
        assert maze.cell(maze.start) is Cell.OPEN


def test_load_from_path(tmp_path):
    f = tmp_path / "m.txt"
    f.write_text(CORRIDOR)
    assert load_maze(f) == parse_maze(CORRIDOR)
