# mazepath/solvers.py
"""Explicit solver registry: (puzzle, part) -> function(maze text, config) -> Answer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple

from mazepath.core.astar import solve_best_cost
from mazepath.core.config import SearchConfig
from mazepath.core.dijkstra import count_best_path_cells
from mazepath.core.errors import MazeError
from mazepath.core.maze import parse_maze
from mazepath.core.types import Answer

SolverFn = Callable[[str, SearchConfig], Answer]
Key = Tuple[str, int]

MAZE_PUZZLE = "maze"


class UnknownSolverError(MazeError, KeyError):
    pass


@dataclass
class SolverRegistry:
    _solvers: Dict[Key, SolverFn] = field(default_factory=dict)

    def register(self, puzzle: str, part: int, fn: SolverFn) -> None:
        key = (puzzle, part)
        if key in self._solvers:
            raise ValueError(f"solver already registered for {puzzle} part {part}")
        self._solvers[key] = fn

    def get(self, puzzle: str, part: int) -> SolverFn:
        try:
            return self._solvers[(puzzle, part)]
        except KeyError:
            raise UnknownSolverError(f"no solver for {puzzle} part {part}") from None

    def parts(self, puzzle: str) -> List[int]:
        return sorted(p for (name, p) in self._solvers if name == puzzle)

    def solve(self, puzzle: str, part: int, text: str,
              config: Optional[SearchConfig] = None) -> Answer:
        return self.get(puzzle, part)(text, config or SearchConfig())


def best_cost(text: str, config: SearchConfig) -> Answer:
    return Answer.cost(solve_best_cost(parse_maze(text), config))


def best_path_cells(text: str, config: SearchConfig) -> Answer:
    return Answer.cell_count(count_best_path_cells(parse_maze(text), config))


def default_registry() -> SolverRegistry:
    registry = SolverRegistry()
    registry.register(MAZE_PUZZLE, 1, best_cost)
    registry.register(MAZE_PUZZLE, 2, best_path_cells)
    return registry
