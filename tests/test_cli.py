from mazepath.cli import main
from mazepath.solvers import MAZE_PUZZLE, SolverRegistry, best_cost

from mazes import CORRIDOR


def test_run_bundled_map(capsys):
    assert main(["run", "example_small"]) == 0
    assert capsys.readouterr().out == "1: 7036\n2: 45\n"


def test_run_single_part_without_coasting(capsys):
    assert main(["run", "example_large", "--part", "2", "--no-coast"]) == 0
    assert capsys.readouterr().out == "2: 64\n"


def test_run_file(tmp_path, capsys):
    f = tmp_path / "corridor.txt"
    f.write_text(CORRIDOR)
    assert main(["run", str(f)]) == 0
    assert capsys.readouterr().out == "1: 1006\n2: 7\n"


def test_malformed_maze_exits_1(tmp_path, capsys):
    f = tmp_path / "bad.txt"
    f.write_text("#####\n#S..#\n#####\n")
    assert main(["run", str(f)]) == 1
    assert "Failed to load maze" in capsys.readouterr().err


def test_missing_file_exits_1(tmp_path, capsys):
    assert main(["run", str(tmp_path / "nope.txt")]) == 1
    assert "Failed to load maze" in capsys.readouterr().err


def test_unknown_part_exits_2(capsys):
    registry = SolverRegistry()
    registry.register(MAZE_PUZZLE, 1, best_cost)
    assert main(["run", "corridor", "--part", "2"], registry=registry) == 2
    assert "no solver" in capsys.readouterr().err
