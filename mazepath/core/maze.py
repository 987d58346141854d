# mazepath/core/maze.py
#!/usr/bin/env python3
"""
Read-only grid model over maze text.

Glyphs:
    '#' wall, '.' open, 'S' start (open), 'E' end (open)

The maze is parsed once and never mutated; any number of searches may share it.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Tuple, Union

from mazepath.core.errors import MalformedMazeError
from mazepath.core.types import Cell, Pos

# ---------- Config ----------
MAP_DIR = Path(__file__).resolve().parents[2] / "maps"
MAP_FILES: Dict[str, Path] = {
    "example_small": MAP_DIR / "example_small.txt",
    "example_large": MAP_DIR / "example_large.txt",
    "mirror":        MAP_DIR / "mirror.txt",
    "corridor":      MAP_DIR / "corridor.txt",
}

_GLYPHS = frozenset("#.SE")


@dataclass(frozen=True)
class Maze:
    rows: Tuple[str, ...]
    start: Pos
    end: Pos

    @property
    def width(self) -> int:
        return len(self.rows[0])

    @property
    def height(self) -> int:
        return len(self.rows)

    def in_bounds(self, pos: Pos) -> bool:
        r, c = pos
        return 0 <= r < self.height and 0 <= c < self.width

    def cell(self, pos: Pos) -> Cell:
        if not self.in_bounds(pos):
            raise IndexError(f"{pos} is outside the {self.height}x{self.width} maze")
        r, c = pos
        return Cell.WALL if self.rows[r][c] == "#" else Cell.OPEN

    def is_open(self, pos: Pos) -> bool:
        """Open and in bounds; anything past the edge counts as wall."""
        return self.in_bounds(pos) and self.rows[pos[0]][pos[1]] != "#"

    def __str__(self) -> str:
        return "\n".join(self.rows)


def parse_maze(text: str) -> Maze:
    rows = tuple(line.rstrip("\r") for line in text.strip("\n").splitlines())
    if not rows or not rows[0]:
        raise MalformedMazeError("maze is empty")

    width = len(rows[0])
    starts, ends = [], []
    for r, line in enumerate(rows):
        if len(line) != width:
            raise MalformedMazeError(
                f"row {r} has {len(line)} cells, expected {width} (maze must be rectangular)"
            )
        bad = set(line) - _GLYPHS
        if bad:
            raise MalformedMazeError(f"row {r} contains unknown glyphs {sorted(bad)!r}")
        for c, ch in enumerate(line):
            if ch == "S":
                starts.append((r, c))
            elif ch == "E":
                ends.append((r, c))

    if len(starts) != 1:
        raise MalformedMazeError(f"expected exactly one start marker 'S', found {len(starts)}")
    if len(ends) != 1:
        raise MalformedMazeError(f"expected exactly one end marker 'E', found {len(ends)}")
    return Maze(rows, starts[0], ends[0])


def read_maze_text(source: Union[str, Path]) -> str:
    """Raw text of a bundled map (by name) or of a file path."""
    path = MAP_FILES.get(str(source), Path(source))
    with open(path, "r") as f:
        return f.read()


def load_maze(source: Union[str, Path]) -> Maze:
    return parse_maze(read_maze_text(source))
