# mazepath/core/dijkstra.py
#!/usr/bin/env python3
"""
Uniform-cost search that keeps every optimal predecessor, not just one.

Answers "which cells lie on some cheapest route?":
  - strictly better g  -> overwrite best, forget old predecessors, push
  - equal g            -> add predecessor, no push (already queued or final)
  - worse g            -> ignore

Draining does not stop at the first end pop: the search keeps going until the
queue minimum exceeds the best end cost, so every end orientation that ties
gets finalized with its full predecessor set.
"""

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set
import logging

from mazepath.core.config import SearchConfig
from mazepath.core.errors import SearchInvariantError
from mazepath.core.maze import Maze
from mazepath.core.moves import successors
from mazepath.core.open_set import OpenSet
from mazepath.core.reconstruct import best_path_cells
from mazepath.core.types import INF, Node, Pos, Relaxation, StepResult

LOGGER = logging.getLogger(__name__)


@dataclass
class AllBestPathsAlgo:
    name: str = "Dijkstra"
    config: SearchConfig = field(default_factory=SearchConfig)

    maze: Optional[Maze] = None
    open_set: OpenSet = field(default_factory=OpenSet)
    finalized: Set[Node] = field(default_factory=set)
    best: Dict[Node, int] = field(default_factory=dict)
    preceding: Dict[Node, Set[Node]] = field(default_factory=lambda: defaultdict(set))
    seen_cells: Set[Pos] = field(default_factory=set)
    popped_count: int = 0
    done: bool = False
    no_path: bool = False
    best_end_cost: Optional[int] = None
    cells: Optional[Set[Pos]] = None

    def init(self, maze: Maze) -> None:
        self.maze = maze
        self.reset()

    def reset(self) -> None:
        if self.maze is None:
            return
        self.open_set.clear()
        self.finalized.clear()
        self.best.clear()
        self.preceding.clear()
        self.seen_cells.clear()
        self.popped_count = 0
        self.done = False
        self.no_path = False
        self.best_end_cost = None
        self.cells = None

        s = Node(self.maze.start, self.config.start_facing)
        self.best[s] = 0
        self.open_set.push(s, 0)
        self.seen_cells.add(s.pos)

    def _finish(self) -> StepResult:
        if self.best_end_cost is None:
            self.no_path = True
            LOGGER.debug("%s: open set exhausted after %d pops, no path", self.name, self.popped_count)
            return StepResult(status="no_path", metrics=self._metrics())

        self.done = True
        self.open_set.clear()
        self.cells = best_path_cells(self.preceding, self.best, self.maze.end, self.best_end_cost)
        LOGGER.debug("%s: best end cost %d, %d cells on best paths, %d pops",
                     self.name, self.best_end_cost, len(self.cells), self.popped_count)
        path = sorted(self.cells)
        return StepResult(status="done", path=path, metrics=self._metrics(path_len=len(path)))

    def step(self) -> StepResult:
        if self.maze is None:
            return StepResult(status="idle", metrics={"algo": self.name})

        if self.done:
            path = sorted(self.cells)
            return StepResult(status="done", path=path, metrics=self._metrics(path_len=len(path)))

        if self.no_path:
            return StepResult(status="no_path", metrics=self._metrics())

        # Stop condition: queue empty, or nothing left that could still tie at the end.
        top = self.open_set.peek_score()
        if top is None or (self.best_end_cost is not None and top > self.best_end_cost):
            return self._finish()

        state = self.open_set.pop_min()
        u = state.node
        if state.g > self.best.get(u, INF) or u in self.finalized:
            return StepResult(status="running", current=u, metrics=self._metrics())

        self.popped_count += 1
        self.finalized.add(u)

        if u.pos == self.maze.end:
            if self.best_end_cost is None:
                self.best_end_cost = state.g
            return StepResult(status="running", closed=[u.pos], current=u, metrics=self._metrics())

        opened_now: List[Pos] = []
        relaxed: List[Relaxation] = []
        for v, w in successors(self.maze, u):
            if not self.maze.is_open(v.pos):
                raise SearchInvariantError(f"move from {u} lands on a wall at {v.pos}")
            alt = state.g + w
            known = self.best.get(v, INF)
            if alt < known:
                if v in self.finalized:
                    raise SearchInvariantError(f"{v} was finalized at {known} but improves to {alt}")
                self.best[v] = alt
                self.preceding[v] = {u}
                self.open_set.push(v, alt)
                relaxed.append(Relaxation(v, u, alt, "improved"))
                if v.pos not in self.seen_cells:
                    self.seen_cells.add(v.pos)
                    opened_now.append(v.pos)
            elif alt == known:
                self.preceding[v].add(u)
                relaxed.append(Relaxation(v, u, alt, "tied"))

        return StepResult(status="running", opened=opened_now, closed=[u.pos], current=u,
                          relaxed=relaxed, metrics=self._metrics())

    def run(self) -> Optional[int]:
        """Step until finished; the number of cells on best paths, or None when unreachable."""
        if self.maze is None:
            raise ValueError("call init(maze) before run()")
        while True:
            res = self.step()
            if res.status == "done":
                return len(self.cells)
            if res.status == "no_path":
                return None

    def _metrics(self, path_len: int = 0) -> dict:
        return {
            "algo": self.name,
            "popped": self.popped_count,
            "open_size": len(self.open_set),
            "closed_count": len(self.finalized),
            "path_len": path_len,
            "total_cost": self.best_end_cost,
        }


def count_best_path_cells(maze: Maze, config: Optional[SearchConfig] = None) -> Optional[int]:
    algo = AllBestPathsAlgo(config=config or SearchConfig())
    algo.init(maze)
    return algo.run()
