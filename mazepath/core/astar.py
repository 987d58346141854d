# mazepath/core/astar.py
#!/usr/bin/env python3
"""
A* over (position, facing) nodes: cheapest cost from the start to the end cell.

Implements the stepping API used by the viewer:
- init(maze) - reset() - step() -> StepResult - run() -> cost | None

Heuristic:
- Manhattan distance to the end cell. Every cell of it needs at least one
  forward step and turns only add cost, so it never overestimates; it also drops
  by at most k over a k-cell move, so the first end node popped is optimal.

Relaxation keeps strict improvements only (one optimal route is enough here).
With `config.coast` the forward move jumps a whole straight corridor.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set
import logging

from mazepath.core.config import SearchConfig
from mazepath.core.errors import SearchInvariantError
from mazepath.core.maze import Maze
from mazepath.core.moves import Move, coast_successors, successors
from mazepath.core.open_set import OpenSet
from mazepath.core.reconstruct import trace_route
from mazepath.core.types import INF, Node, Pos, Relaxation, StepResult

LOGGER = logging.getLogger(__name__)


@dataclass
class AStarAlgo:
    name: str = "A*"
    config: SearchConfig = field(default_factory=SearchConfig)

    # Internal state
    maze: Optional[Maze] = None
    open_set: OpenSet = field(default_factory=OpenSet)
    closed_set: Set[Node] = field(default_factory=set)
    g: Dict[Node, int] = field(default_factory=dict)
    came_from: Dict[Node, Node] = field(default_factory=dict)
    seen_cells: Set[Pos] = field(default_factory=set)   # for overlay
    popped_count: int = 0
    done: bool = False
    no_path: bool = False
    cost: Optional[int] = None
    goal_node: Optional[Node] = None

    # -------------------- lifecycle --------------------

    def init(self, maze: Maze) -> None:
        self.maze = maze
        self.reset()

    def reset(self) -> None:
        """Clear all state and seed with the start node."""
        if self.maze is None:
            return
        self.open_set.clear()
        self.closed_set.clear()
        self.g.clear()
        self.came_from.clear()
        self.seen_cells.clear()
        self.popped_count = 0
        self.done = False
        self.no_path = False
        self.cost = None
        self.goal_node = None

        s = Node(self.maze.start, self.config.start_facing)
        self.g[s] = 0
        self.open_set.push(s, 0, self._h(s.pos))
        self.seen_cells.add(s.pos)

    # -------------------- helpers --------------------

    def _h(self, pos: Pos) -> int:
        (r, c), (er, ec) = pos, self.maze.end
        return abs(er - r) + abs(ec - c)

    def _moves(self, node: Node) -> List[Move]:
        if self.config.coast:
            return coast_successors(self.maze, node)
        return successors(self.maze, node)

    def path(self) -> Optional[List[Pos]]:
        if self.goal_node is None:
            return None
        return trace_route(self.came_from, self.goal_node)

    # -------------------- main stepping logic --------------------

    def step(self) -> StepResult:
        """
        Run ONE A* expansion step:
          - Pop the lowest-f node (stale entries are skipped).
          - If it stands on the end cell, its g is the answer.
          - Else relax its moves.
        """
        if self.maze is None:
            return StepResult(status="idle", metrics={"algo": self.name})

        if self.done:
            path = self.path()
            return StepResult(status="done", path=path,
                              metrics=self._metrics(path_len=len(path)))

        if self.no_path:
            return StepResult(status="no_path", metrics=self._metrics())

        state = self.open_set.pop_min()
        if state is None:
            self.no_path = True
            LOGGER.debug("%s: open set exhausted after %d pops, no path", self.name, self.popped_count)
            return StepResult(status="no_path", metrics=self._metrics())

        u = state.node
        if state.g > self.g.get(u, INF):
            return StepResult(status="running", current=u, metrics=self._metrics())

        self.popped_count += 1
        self.closed_set.add(u)

        if u.pos == self.maze.end:
            self.done = True
            self.cost = state.g
            self.goal_node = u
            self.open_set.clear()
            path = self.path()
            LOGGER.debug("%s: reached end at cost %d after %d pops", self.name, self.cost, self.popped_count)
            return StepResult(status="done", closed=[u.pos], current=u, path=path,
                              metrics=self._metrics(path_len=len(path)))

        opened_now: List[Pos] = []
        relaxed: List[Relaxation] = []
        for v, w in self._moves(u):
            if not self.maze.is_open(v.pos):
                raise SearchInvariantError(f"move from {u} lands on a wall at {v.pos}")
            alt = state.g + w
            if alt < self.g.get(v, INF):
                self.g[v] = alt
                self.came_from[v] = u
                self.open_set.push(v, alt, alt + self._h(v.pos))
                relaxed.append(Relaxation(v, u, alt, "improved"))
                if v.pos not in self.seen_cells:
                    self.seen_cells.add(v.pos)
                    opened_now.append(v.pos)

        return StepResult(status="running", opened=opened_now, closed=[u.pos], current=u,
                          relaxed=relaxed, metrics=self._metrics())

    def run(self) -> Optional[int]:
        """Step until finished; the minimum cost, or None when the end is unreachable."""
        if self.maze is None:
            raise ValueError("call init(maze) before run()")
        while True:
            res = self.step()
            if res.status == "done":
                return self.cost
            if res.status == "no_path":
                return None

    # -------------------- metrics --------------------

    def _metrics(self, path_len: int = 0) -> dict:
        return {
            "algo": self.name,
            "popped": self.popped_count,
            "open_size": len(self.open_set),
            "closed_count": len(self.closed_set),
            "path_len": path_len,
            "total_cost": self.cost,
        }


def solve_best_cost(maze: Maze, config: Optional[SearchConfig] = None) -> Optional[int]:
    algo = AStarAlgo(config=config or SearchConfig())
    algo.init(maze)
    return algo.run()
