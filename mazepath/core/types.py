# mazepath/core/types.py
#!/usr/bin/env python3
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import List, Tuple, Optional, Dict, Any

Pos = Tuple[int, int]  # (row, col), row grows downward

FORWARD_COST = 1
TURN_COST = 1000
INF = float("inf")


class Cell(Enum):
    WALL = "#"
    OPEN = "."


class Direction(IntEnum):
    NORTH = 0
    EAST = 1
    SOUTH = 2
    WEST = 3

    @property
    def delta(self) -> Pos:
        return _DELTAS[self]

    def forward(self, pos: Pos) -> Pos:
        dr, dc = _DELTAS[self]
        return (pos[0] + dr, pos[1] + dc)

    def rotate_cw(self) -> "Direction":
        return Direction((self + 1) % 4)

    def rotate_ccw(self) -> "Direction":
        return Direction((self - 1) % 4)

    @property
    def glyph(self) -> str:
        return "^>v<"[self]


_DELTAS = {
    Direction.NORTH: (-1, 0),
    Direction.EAST: (0, 1),
    Direction.SOUTH: (1, 0),
    Direction.WEST: (0, -1),
}


@dataclass(frozen=True)
class Node:
    """A vertex of the search graph: where we stand and which way we face."""
    pos: Pos
    facing: Direction

    def forward(self) -> "Node":
        return Node(self.facing.forward(self.pos), self.facing)

    def rotate_cw(self) -> "Node":
        return Node(self.pos, self.facing.rotate_cw())

    def rotate_ccw(self) -> "Node":
        return Node(self.pos, self.facing.rotate_ccw())

    def __str__(self) -> str:
        r, c = self.pos
        return f"r={r} c={c} {self.facing.glyph}"


@dataclass(order=True)
class ScoredState:
    # heap order: score, then FIFO by seq
    score: int
    seq: int
    g: int = field(compare=False)
    node: Node = field(compare=False)


@dataclass
class Relaxation:
    node: Node
    parent: Node
    g: int
    kind: str                     # "improved" | "tied"


@dataclass
class StepResult:
    status: str                   # "idle" | "running" | "done" | "no_path"
    opened: List[Pos] = field(default_factory=list)
    closed: List[Pos] = field(default_factory=list)
    current: Optional[Node] = None
    relaxed: List[Relaxation] = field(default_factory=list)
    path: Optional[List[Pos]] = None
    metrics: Dict[str, Any] = field(default_factory=dict)


class AnswerKind(Enum):
    COST = "cost"
    CELL_COUNT = "cell_count"
    NO_PATH = "no_path"


@dataclass(frozen=True)
class Answer:
    kind: AnswerKind
    value: Optional[int] = None

    @classmethod
    def cost(cls, value: Optional[int]) -> "Answer":
        return cls(AnswerKind.COST, value) if value is not None else cls.no_path()

    @classmethod
    def cell_count(cls, value: Optional[int]) -> "Answer":
        return cls(AnswerKind.CELL_COUNT, value) if value is not None else cls.no_path()

    @classmethod
    def no_path(cls) -> "Answer":
        return cls(AnswerKind.NO_PATH)

    def __str__(self) -> str:
        return "no path" if self.kind is AnswerKind.NO_PATH else str(self.value)
